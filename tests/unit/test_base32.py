"""
Unit tests for oastid/tools/oast/base32.py

Tests cover:
- Alphabet membership predicates
- Fixed-width base32hex decoding and its error cases
- Discarding of the trailing 4 bits
- Encoding 12 bytes back to a preamble
"""

import pytest

from oastid.tools.oast.base32 import (
    BASE32HEX_ALPHABET,
    ZBASE32_ALPHABET,
    InvalidCharacterError,
    InvalidLengthError,
    ascii_lower,
    decode_base32hex,
    encode_base32hex,
    is_base32hex_char,
    is_zbase32_char,
)


class TestAlphabetPredicates:
    """Tests for is_base32hex_char and is_zbase32_char."""

    def test_every_base32hex_symbol_accepted_in_both_cases(self) -> None:
        """Test each alphabet character is accepted lower and upper case."""
        for char in BASE32HEX_ALPHABET:
            assert is_base32hex_char(char)
            assert is_base32hex_char(char.upper())

    @pytest.mark.parametrize("char", ["w", "x", "y", "z", "W", "-", "_", ".", " ", "é"])
    def test_base32hex_rejects(self, char: str) -> None:
        """Test characters past 'v' and punctuation are rejected."""
        assert is_base32hex_char(char) is False

    def test_every_zbase32_symbol_accepted_in_both_cases(self) -> None:
        """Test each z-base-32 character is accepted lower and upper case."""
        for char in ZBASE32_ALPHABET:
            assert is_zbase32_char(char)
            assert is_zbase32_char(char.upper())

    @pytest.mark.parametrize("char", ["0", "2", "l", "v", "L", "V", "-", "_"])
    def test_zbase32_rejects(self, char: str) -> None:
        """Test characters z-base-32 leaves out are rejected."""
        assert is_zbase32_char(char) is False

    def test_non_ascii_lookalike_rejected(self) -> None:
        """Test KELVIN SIGN is not treated as 'k' even though it lower-cases to it."""
        assert is_base32hex_char("\u212a") is False
        assert is_zbase32_char("\u212a") is False

    def test_multi_character_and_empty_strings_rejected(self) -> None:
        """Test predicates only accept a single character."""
        assert is_base32hex_char("") is False
        assert is_base32hex_char("ab") is False
        assert is_zbase32_char("") is False


class TestAsciiLower:
    """Tests for ascii_lower."""

    def test_lowers_ascii(self) -> None:
        assert ascii_lower("AbC.OAST.PRO") == "abc.oast.pro"

    def test_preserves_length_of_non_ascii(self) -> None:
        """Test non-ASCII characters are left alone so offsets stay aligned."""
        text = "\u0130X\u212a"
        assert ascii_lower(text) == "\u0130x\u212a"
        assert len(ascii_lower(text)) == len(text)


class TestDecodeBase32Hex:
    """Tests for decode_base32hex."""

    def test_known_preamble(self, sample_preamble: str) -> None:
        """Test decoding a preamble with known bytes."""
        assert decode_base32hex(sample_preamble) == bytes.fromhex("5f3a1c00aabbcc04d200012c")

    def test_case_insensitive(self, sample_preamble: str) -> None:
        """Test upper-case input decodes to the same bytes."""
        assert decode_base32hex(sample_preamble.upper()) == decode_base32hex(sample_preamble)

    def test_all_zero(self) -> None:
        assert decode_base32hex("0" * 20) == bytes(12)

    def test_all_ones(self) -> None:
        assert decode_base32hex("v" * 20) == b"\xff" * 12

    def test_always_twelve_bytes(self) -> None:
        """Test output length is fixed regardless of content."""
        for preamble in ("0" * 20, "v" * 20, BASE32HEX_ALPHABET[:20], BASE32HEX_ALPHABET[12:]):
            assert len(decode_base32hex(preamble)) == 12

    def test_trailing_four_bits_discarded(self) -> None:
        """Test only the first bit of the last symbol reaches the output."""
        # '1' = 00001 and 'f' = 01111: leading bit 0, rest dropped
        assert decode_base32hex("0" * 19 + "1") == bytes(12)
        assert decode_base32hex("0" * 19 + "f") == bytes(12)
        # 'g' = 10000: leading bit lands in the lowest bit of byte 11
        assert decode_base32hex("0" * 19 + "g") == bytes(11) + b"\x01"

    @pytest.mark.parametrize("length", [0, 1, 19, 21, 33])
    def test_invalid_length(self, length: int) -> None:
        """Test anything but 20 characters is rejected."""
        with pytest.raises(InvalidLengthError) as exc_info:
            decode_base32hex("0" * length)

        assert exc_info.value.actual == length
        assert exc_info.value.expected == 20

    def test_invalid_character(self) -> None:
        """Test a character outside 0-9a-v is rejected with its position."""
        with pytest.raises(InvalidCharacterError) as exc_info:
            decode_base32hex("0" * 7 + "w" + "0" * 12)

        assert exc_info.value.character == "w"
        assert exc_info.value.position == 7

    def test_errors_are_value_errors(self) -> None:
        """Test codec errors can be caught as ValueError."""
        with pytest.raises(ValueError):
            decode_base32hex("z" * 20)


class TestEncodeBase32Hex:
    """Tests for encode_base32hex."""

    def test_known_bytes(self, sample_preamble: str) -> None:
        """Test encoding the known field layout yields the sample preamble."""
        assert encode_base32hex(bytes.fromhex("5f3a1c00aabbcc04d200012c")) == sample_preamble

    def test_encoded_preamble_decodes_to_same_bytes(self) -> None:
        data = bytes(range(0x10, 0x1C))
        encoded = encode_base32hex(data)

        assert len(encoded) == 20
        assert decode_base32hex(encoded) == data

    def test_output_is_lower_case(self) -> None:
        assert encode_base32hex(b"\xff" * 12) == "v" * 19 + "g"

    @pytest.mark.parametrize("length", [0, 11, 13])
    def test_invalid_length(self, length: int) -> None:
        with pytest.raises(InvalidLengthError):
            encode_base32hex(bytes(length))
