"""
Integer unit types.

``MicroAlgos`` and ``Round`` are plain unsigned 64-bit integers with a name.
Arithmetic stays integral; the algos conversion helpers exist for display and
never feed a consensus-relevant value.
"""

from __future__ import annotations
from decimal import Decimal, InvalidOperation
from typing import Union

from .constants import MAX_UINT64, MICROALGOS_PER_ALGO


class _Uint64(int):
    """Unsigned 64-bit integer."""

    def __new__(cls, value: int = 0):
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"{cls.__name__} requires an int, got {type(value).__name__}")
        if value < 0 or value > MAX_UINT64:
            raise ValueError(f"{cls.__name__} out of range: {value}")
        return super().__new__(cls, value)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({int(self)})"


class MicroAlgos(_Uint64):
    """Amount in the smallest currency unit."""

    def to_algos(self) -> Decimal:
        """Convert to algos, for display."""
        return Decimal(int(self)) / MICROALGOS_PER_ALGO

    @classmethod
    def from_algos(cls, algos: Union[int, str, Decimal]) -> MicroAlgos:
        """
        Convert an algo amount to microalgos.

        Floats are refused; pass a string or Decimal to keep the value exact.

        Raises:
            TypeError: If given a float
            ValueError: If the amount is not a finite number, or has more
                than six decimal places
        """
        if isinstance(algos, float):
            raise TypeError("use str or Decimal for algo amounts, not float")
        try:
            micro = Decimal(algos) * MICROALGOS_PER_ALGO
        except InvalidOperation as e:
            raise ValueError(f"{algos!r} is not an algo amount") from e
        if not micro.is_finite():
            raise ValueError(f"{algos!r} is not an algo amount")
        if micro != micro.to_integral_value():
            raise ValueError(f"{algos} algos is not a whole number of microalgos")
        return cls(int(micro))


class Round(_Uint64):
    """Protocol block height."""


__all__ = ["MicroAlgos", "Round"]
