"""Find OAST callback domains inside free text.

Each known suffix is scanned for separately, in registry order, so results
are ordered by suffix first and position second. Matches for one suffix
never overlap each other; matches for different suffixes are not checked
against each other and may overlap.

The nonce part of an extracted subdomain may contain ``-`` and ``_`` on top
of the z-base-32 alphabet. ``validator.is_valid_subdomain`` is stricter.
"""
import logging
import string
from dataclasses import dataclass
from typing import Any

from oastid.tools.oast.base32 import (
    PREAMBLE_LENGTH,
    ascii_lower,
    is_base32hex_char,
    is_zbase32_char,
)
from oastid.tools.oast.decoder import DecodedPreamble, DecodeErrorKind, decode
from oastid.tools.oast.domains import KNOWN_OAST_DOMAINS
from oastid.tools.oast.validator import MIN_SUBDOMAIN_LENGTH

logger = logging.getLogger(__name__)

_SUBDOMAIN_CHARS = frozenset(string.ascii_letters + string.digits + "-_")


class ExtractionError(RuntimeError):
    """Raised when extraction cannot complete (memory exhaustion)."""

    def __init__(self, message: str, kind: DecodeErrorKind = DecodeErrorKind.OUT_OF_MEMORY):
        super().__init__(message)
        self.kind = kind


@dataclass(frozen=True)
class OASTMatch:
    """An OAST domain located in a piece of text.

    Holds a reference to the scanned text and offsets into it; the matched
    strings are sliced out on access.
    """

    text: str
    start: int
    subdomain_end: int
    end: int
    suffix: str

    @property
    def full_span(self) -> tuple[int, int]:
        return self.start, self.end

    @property
    def subdomain_span(self) -> tuple[int, int]:
        return self.start, self.subdomain_end

    @property
    def full(self) -> str:
        """``<subdomain>.<suffix>`` as it appears in the text."""
        return self.text[self.start:self.end]

    @property
    def subdomain(self) -> str:
        return self.text[self.start:self.subdomain_end]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "domain": self.full,
            "subdomain": self.subdomain,
            "suffix": self.suffix,
            "start": self.start,
            "end": self.end,
        }


def _is_subdomain_char(c: str) -> bool:
    return c in _SUBDOMAIN_CHARS


def _find_subdomain_start(text: str, dot_pos: int) -> int | None:
    """Walk back from the dot before a suffix to where the subdomain begins.

    Returns None when the run of subdomain characters is not shaped like an
    OAST subdomain.
    """
    pos = dot_pos
    while pos > 0 and _is_subdomain_char(text[pos - 1]):
        pos -= 1

    if dot_pos - pos < MIN_SUBDOMAIN_LENGTH:
        return None

    preamble_end = pos + PREAMBLE_LENGTH
    for i in range(pos, preamble_end):
        if not is_base32hex_char(text[i]):
            return None

    for i in range(preamble_end, dot_pos):
        c = text[i]
        if not is_zbase32_char(c) and c != "-" and c != "_":
            return None

    return pos


def _scan_suffix(text: str, lowered: str, suffix: str, matches: list[OASTMatch]) -> None:
    text_len = len(text)
    suffix_len = len(suffix)
    pos = lowered.find(suffix)

    while pos != -1:
        suffix_end = pos + suffix_len
        start = None

        if pos > 0 and text[pos - 1] == ".":
            start = _find_subdomain_start(text, pos - 1)

        # boundary before the subdomain
        if start is not None and start > 0 and _is_subdomain_char(text[start - 1]):
            start = None

        # boundary after the suffix; a trailing dot means a longer domain
        if start is not None and suffix_end < text_len:
            after = text[suffix_end]
            if _is_subdomain_char(after) or after == ".":
                start = None

        if start is None:
            pos = lowered.find(suffix, pos + 1)
            continue

        matches.append(
            OASTMatch(
                text=text,
                start=start,
                subdomain_end=pos - 1,
                end=suffix_end,
                suffix=suffix,
            )
        )
        pos = lowered.find(suffix, suffix_end)


def extract(text: str) -> list[OASTMatch]:
    """Find every OAST domain in ``text``.

    Args:
        text: Arbitrary text (log lines, HTTP bodies, DNS query names, ...)

    Returns:
        Matches ordered by suffix (registry order) then by position

    Raises:
        ExtractionError: If memory runs out while collecting matches
    """
    if not text:
        return []

    matches: list[OASTMatch] = []
    try:
        lowered = ascii_lower(text)
        for suffix in KNOWN_OAST_DOMAINS:
            if len(text) < len(suffix):
                continue
            _scan_suffix(text, lowered, suffix, matches)
    except MemoryError as e:
        logger.error(f"Out of memory extracting OAST domains from {len(text)} chars")
        raise ExtractionError("out of memory while extracting OAST domains") from e

    logger.debug(f"Extracted {len(matches)} OAST domain(s) from {len(text)} chars")
    return matches


def extract_domains(text: str) -> list[str]:
    """Matched ``<subdomain>.<suffix>`` strings, in ``extract`` order."""
    return [m.full for m in extract(text)]


def extract_and_decode(text: str) -> list[DecodedPreamble]:
    """Decode the subdomain of every match, one result per match."""
    return [decode(m.full) for m in extract(text)]


def count_oast(text: str) -> int:
    return len(extract(text))


def has_oast(text: str) -> bool:
    return count_oast(text) > 0
