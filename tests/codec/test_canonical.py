"""
Canonical msgpack encoding tests.
"""

import msgpack
import pytest

from algosign.codec import canonical
from algosign.runtime.errors import DecodingError, EncodingInvariantError


class TestCanonicalize:
    """Test zero omission and key ordering."""

    def test_zero_values_dropped(self):
        value = {"a": 0, "b": "", "c": b"", "d": False, "e": None, "f": {}, "g": [], "h": 1}
        assert canonical.canonicalize(value) == {"h": 1}

    def test_nested_maps_that_become_empty_are_dropped(self):
        value = {"outer": {"inner": 0, "also": ""}, "keep": True}
        assert canonical.canonicalize(value) == {"keep": True}

    def test_keys_sorted_bytewise(self):
        value = {"snd": 1, "amt": 2, "Z": 3, "fee": 4}
        assert list(canonical.canonicalize(value)) == ["Z", "amt", "fee", "snd"]

    def test_list_order_preserved(self):
        assert canonical.canonicalize({"l": (3, 1, 2)}) == {"l": [3, 1, 2]}

    def test_bytearray_becomes_bytes(self):
        out = canonical.canonicalize({"k": bytearray(b"\x01")})
        assert type(out["k"]) is bytes

    def test_float_refused(self):
        with pytest.raises(EncodingInvariantError):
            canonical.canonicalize({"x": 1.5})

    def test_non_string_key_refused(self):
        with pytest.raises(EncodingInvariantError):
            canonical.canonicalize({1: "x"})


class TestEncode:
    """Test the byte-level output."""

    def test_exact_bytes(self):
        assert canonical.encode({"b": 1, "a": b"\x01"}) == b"\x82\xa1a\xc4\x01\x01\xa1b\x01"

    def test_assembly_order_does_not_matter(self):
        first = {}
        first["rcv"] = b"\x02" * 32
        first["amt"] = 5
        first["type"] = "pay"
        second = {"type": "pay", "amt": 5, "rcv": b"\x02" * 32}
        assert canonical.encode(first) == canonical.encode(second)

    def test_integers_use_minimal_width(self):
        assert canonical.encode({"n": 5}) == b"\x81\xa1n\x05"
        assert canonical.encode({"n": 1000}) == b"\x81\xa1n\xcd\x03\xe8"

    def test_strings_are_str_and_bytes_are_bin(self):
        data = canonical.encode({"s": "x", "b": b"x"})
        assert canonical.decode(data) == {"b": b"x", "s": "x"}
        assert b"\xa1x" in data
        assert b"\xc4\x01x" in data


class TestDecode:
    """Test decoding and its failures."""

    def test_decode_map(self):
        assert canonical.decode_map(canonical.encode({"a": 1})) == {"a": 1}

    def test_trailing_bytes_rejected(self):
        with pytest.raises(DecodingError):
            canonical.decode(canonical.encode({"a": 1}) + b"\x00")

    def test_truncated_input_rejected(self):
        with pytest.raises(DecodingError):
            canonical.decode(canonical.encode({"a": b"\x01" * 10})[:-3])

    def test_non_map_rejected_by_decode_map(self):
        with pytest.raises(DecodingError):
            canonical.decode_map(msgpack.packb([1, 2]))
