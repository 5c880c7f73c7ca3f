"""Base32 alphabets used by OAST identifiers.

The preamble of an OAST subdomain is base32hex (RFC 4648 "extended hex"
alphabet, lower-case), the nonce that follows it is z-base-32. Only the
preamble is ever decoded; the nonce alphabet is needed for membership tests.

A preamble is always 20 characters. 20 x 5 = 100 bits are available but only
96 of them (12 bytes) carry data; the trailing 4 bits are dropped on decode
and must not be validated, otherwise identifiers already in the wild would
stop decoding.
"""
import string

BASE32HEX_ALPHABET = "0123456789abcdefghijklmnopqrstuv"
ZBASE32_ALPHABET = "ybndrfg8ejkmcpqxot1uwisza345h769"

PREAMBLE_LENGTH = 20
DECODED_LENGTH = 12

# Both cases are listed so membership never depends on str.lower(), which
# maps some non-ASCII code points (e.g. KELVIN SIGN) onto ASCII letters.
_BASE32HEX_VALUES: dict[str, int] = {}
for _index, _char in enumerate(BASE32HEX_ALPHABET):
    _BASE32HEX_VALUES[_char] = _index
    _BASE32HEX_VALUES[_char.upper()] = _index

_ZBASE32_CHARS = frozenset(ZBASE32_ALPHABET + ZBASE32_ALPHABET.upper())

del _index, _char

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def ascii_lower(text: str) -> str:
    """Lower-case ASCII letters only; the result always has ``len(text)``."""
    return text.translate(_ASCII_LOWER)


class Base32Error(ValueError):
    """Raised when a preamble cannot be decoded."""


class InvalidLengthError(Base32Error):
    """Input does not have the fixed length the codec works on."""

    def __init__(self, actual: int, expected: int):
        self.actual = actual
        self.expected = expected
        super().__init__(f"invalid length: {actual} (expected {expected})")


class InvalidCharacterError(Base32Error):
    """Input contains a character outside the base32hex alphabet."""

    def __init__(self, character: str, position: int):
        self.character = character
        self.position = position
        super().__init__(f"invalid base32hex character {character!r} at position {position}")


def is_base32hex_char(c: str) -> bool:
    """Case-insensitive membership test against the base32hex alphabet."""
    return c in _BASE32HEX_VALUES


def is_zbase32_char(c: str) -> bool:
    """Case-insensitive membership test against the z-base-32 alphabet."""
    return c in _ZBASE32_CHARS


def decode_base32hex(value: str) -> bytes:
    """Decode a 20-character base32hex preamble into its 12 bytes.

    Args:
        value: The preamble, in any case

    Returns:
        Exactly 12 bytes

    Raises:
        InvalidLengthError: If ``value`` is not 20 characters long
        InvalidCharacterError: If a character is not base32hex
    """
    if len(value) != PREAMBLE_LENGTH:
        raise InvalidLengthError(len(value), PREAMBLE_LENGTH)

    output = bytearray()
    bit_buffer = 0
    bit_count = 0

    for position, char in enumerate(value):
        symbol = _BASE32HEX_VALUES.get(char)
        if symbol is None:
            raise InvalidCharacterError(char, position)

        bit_buffer = (bit_buffer << 5) | symbol
        bit_count += 5

        while bit_count >= 8 and len(output) < DECODED_LENGTH:
            bit_count -= 8
            output.append((bit_buffer >> bit_count) & 0xFF)

        bit_buffer &= (1 << bit_count) - 1

    return bytes(output)


def encode_base32hex(data: bytes) -> str:
    """Encode 12 bytes as a lower-case 20-character base32hex preamble.

    The four bits past the data are zero, so ``decode_base32hex`` returns
    ``data`` unchanged.
    """
    if len(data) != DECODED_LENGTH:
        raise InvalidLengthError(len(data), DECODED_LENGTH)

    # 96 data bits followed by 4 pad bits, read as 20 groups of 5
    bits = int.from_bytes(data, "big") << 4
    chars = []
    for shift in range(95, -5, -5):
        chars.append(BASE32HEX_ALPHABET[(bits >> shift) & 0x1F])

    return "".join(chars)
