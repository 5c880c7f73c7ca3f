"""OAST (Out-of-Band Application Security Testing) domain module.

Recognizes, validates and decodes the callback domains issued by
interaction servers such as interactsh.
"""
from oastid.tools.oast.base32 import (
    BASE32HEX_ALPHABET,
    ZBASE32_ALPHABET,
    Base32Error,
    InvalidCharacterError,
    InvalidLengthError,
    decode_base32hex,
    encode_base32hex,
    is_base32hex_char,
    is_zbase32_char,
)
from oastid.tools.oast.domains import (
    KNOWN_OAST_DOMAINS,
    get_subdomain,
    match_known_suffix,
    split_subdomain,
)
from oastid.tools.oast.validator import (
    is_valid_preamble,
    is_valid_subdomain,
    validate,
    validate_domain,
)
from oastid.tools.oast.decoder import (
    DecodedPreamble,
    DecodeErrorKind,
    decode,
)
from oastid.tools.oast.extractor import (
    ExtractionError,
    OASTMatch,
    count_oast,
    extract,
    extract_and_decode,
    extract_domains,
    has_oast,
)
from oastid.tools.oast.oast_actions import (
    decode_oast_domain,
    extract_and_decode_oast_domains,
    extract_oast_domains,
    summarize_oast_domain,
    validate_oast_domain,
)

__all__ = [
    "BASE32HEX_ALPHABET",
    "ZBASE32_ALPHABET",
    "KNOWN_OAST_DOMAINS",
    "Base32Error",
    "InvalidCharacterError",
    "InvalidLengthError",
    "decode_base32hex",
    "encode_base32hex",
    "is_base32hex_char",
    "is_zbase32_char",
    "get_subdomain",
    "match_known_suffix",
    "split_subdomain",
    "is_valid_preamble",
    "is_valid_subdomain",
    "validate",
    "validate_domain",
    "DecodedPreamble",
    "DecodeErrorKind",
    "decode",
    "ExtractionError",
    "OASTMatch",
    "count_oast",
    "extract",
    "extract_and_decode",
    "extract_domains",
    "has_oast",
    "decode_oast_domain",
    "extract_and_decode_oast_domains",
    "extract_oast_domains",
    "summarize_oast_domain",
    "validate_oast_domain",
]
