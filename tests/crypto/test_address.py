"""
Address codec tests.
"""

import base64

import pytest

from helpers.keys import RFC8032_ADDRESS, RFC8032_PUBLIC_KEY

from algosign.crypto.address import ZERO_ADDRESS, decode_address, encode_address, is_valid_address
from algosign.runtime.errors import ErrorCode, InvalidAddressError


class TestAddressVectors:
    """Test known addresses."""

    def test_zero_address(self):
        assert ZERO_ADDRESS == "AAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAY5HFKQ"
        assert encode_address(bytes(32)) == ZERO_ADDRESS

    def test_rfc8032_public_key(self):
        assert encode_address(RFC8032_PUBLIC_KEY) == RFC8032_ADDRESS
        assert decode_address(RFC8032_ADDRESS) == RFC8032_PUBLIC_KEY

    def test_length_is_58(self):
        assert len(encode_address(bytes(range(32)))) == 58


class TestAddressRoundTrip:
    """Test encode/decode round trips."""

    @pytest.mark.parametrize("key", [bytes(32), bytes(range(32)), b"\xff" * 32, RFC8032_PUBLIC_KEY])
    def test_round_trip(self, key):
        assert decode_address(encode_address(key)) == key

    def test_is_valid_address(self):
        assert is_valid_address(RFC8032_ADDRESS)
        assert not is_valid_address("not an address")


class TestAddressRejection:
    """Test malformed addresses are rejected."""

    def test_wrong_key_length(self):
        with pytest.raises(InvalidAddressError):
            encode_address(b"\x01" * 31)

    @pytest.mark.parametrize("text", ["", RFC8032_ADDRESS[:-1], RFC8032_ADDRESS + "A"])
    def test_wrong_length(self, text):
        with pytest.raises(InvalidAddressError) as exc_info:
            decode_address(text)
        assert exc_info.value.details["reason"] == "length"
        assert exc_info.value.code == ErrorCode.INVALID_ADDRESS

    def test_bad_alphabet(self):
        text = "1" + RFC8032_ADDRESS[1:]
        with pytest.raises(InvalidAddressError) as exc_info:
            decode_address(text)
        assert exc_info.value.details["reason"] == "alphabet"

    def test_lowercase_rejected(self):
        assert not is_valid_address(RFC8032_ADDRESS.lower())

    def test_not_a_string(self):
        with pytest.raises(InvalidAddressError):
            decode_address(RFC8032_PUBLIC_KEY)

    def test_every_single_bit_flip_rejected(self):
        raw = base64.b32decode(RFC8032_ADDRESS + "======")
        for index in range(len(raw)):
            for bit in range(8):
                flipped = bytearray(raw)
                flipped[index] ^= 1 << bit
                text = base64.b32encode(bytes(flipped)).decode("ascii").rstrip("=")
                assert not is_valid_address(text), (index, bit)

    def test_checksum_mismatch_reason(self):
        raw = bytearray(base64.b32decode(RFC8032_ADDRESS + "======"))
        raw[-1] ^= 0x80
        text = base64.b32encode(bytes(raw)).decode("ascii").rstrip("=")
        with pytest.raises(InvalidAddressError) as exc_info:
            decode_address(text)
        assert exc_info.value.details["reason"] == "checksum"

    def test_non_canonical_trailing_bits_rejected(self):
        # 36 bytes leave 2 unused bits in the last base32 character
        last = RFC8032_ADDRESS[-1]
        alphabet = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"
        index = alphabet.index(last)
        assert index & 0b11 == 0
        text = RFC8032_ADDRESS[:-1] + alphabet[index | 0b01]
        with pytest.raises(InvalidAddressError):
            decode_address(text)
