"""Recognize, validate and decode OAST callback domains."""
from oastid.tools.oast import (
    DecodedPreamble,
    ExtractionError,
    OASTMatch,
    decode,
    extract,
    extract_and_decode,
    extract_domains,
    validate,
)

__version__ = "0.1.0"

__all__ = [
    "DecodedPreamble",
    "ExtractionError",
    "OASTMatch",
    "decode",
    "extract",
    "extract_and_decode",
    "extract_domains",
    "validate",
]
