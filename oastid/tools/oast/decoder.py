"""Preamble decoder for OAST subdomains.

Decoded preamble layout (12 bytes, big-endian):

    bytes 0-3   timestamp (seconds since epoch)
    bytes 4-6   machine id
    bytes 7-8   process id
    bytes 9-11  counter

The k-sort key and campaign id are taken from the preamble text itself, not
from the decoded bytes.
"""
import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from oastid.tools.oast.base32 import (
    DECODED_LENGTH,
    PREAMBLE_LENGTH,
    Base32Error,
    ascii_lower,
    decode_base32hex,
)
from oastid.tools.oast.validator import is_valid_preamble

logger = logging.getLogger(__name__)

MAX_ORIGINAL_LENGTH = 255
MAX_SUBDOMAIN_LENGTH = 255
MAX_NONCE_LENGTH = 127

KSORT_LENGTH = 6
CAMPAIGN_START = 6
CAMPAIGN_LENGTH = 5

_EMPTY_MACHINE_ID = b"\x00\x00\x00"


class DecodeErrorKind(Enum):
    """Reasons a decode or extraction can fail."""
    EMPTY_INPUT = "empty_input"
    SUBDOMAIN_TOO_LONG = "subdomain_too_long"
    SUBDOMAIN_TOO_SHORT = "subdomain_too_short"
    INVALID_PREAMBLE = "invalid_preamble"
    PREAMBLE_DECODE_FAILED = "preamble_decode_failed"
    OUT_OF_MEMORY = "out_of_memory"


@dataclass
class DecodedPreamble:
    """Metadata recovered from one OAST subdomain or bare preamble."""

    original: str
    valid: bool = False
    error: str = ""
    error_kind: DecodeErrorKind | None = None
    timestamp: int = 0
    machine_id: bytes = _EMPTY_MACHINE_ID
    pid: int = 0
    counter: int = 0
    ksort: str = ""
    campaign: str = ""
    nonce: str = ""

    @property
    def machine_id_hex(self) -> str:
        """Machine id as colon separated hex, e.g. ``aa:bb:cc``."""
        return ":".join(f"{b:02x}" for b in self.machine_id)

    @property
    def issued_at(self) -> datetime | None:
        """Issue time as an aware UTC datetime, None for a failed decode."""
        if not self.valid:
            return None
        return datetime.fromtimestamp(self.timestamp, tz=UTC)

    def summary(self) -> dict[str, Any]:
        """Fields used to group callbacks: k-sort key, campaign, machine, time."""
        return {
            "ksort": self.ksort,
            "campaign": self.campaign,
            "machine_id": self.machine_id_hex,
            "ts": self.timestamp,
        }

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        result: dict[str, Any] = {
            "original": self.original,
            "valid": self.valid,
            "ts": self.timestamp,
            "machine_id": self.machine_id_hex,
            "pid": self.pid,
            "counter": self.counter,
            "ksort": self.ksort,
            "campaign": self.campaign,
            "nonce": self.nonce,
        }
        if not self.valid and self.error:
            result["error"] = self.error
        return result


def _fail(result: DecodedPreamble, kind: DecodeErrorKind, message: str) -> DecodedPreamble:
    result.valid = False
    result.error_kind = kind
    result.error = message
    result.timestamp = 0
    result.machine_id = _EMPTY_MACHINE_ID
    result.pid = 0
    result.counter = 0
    logger.debug(f"Failed to decode {result.original[:64]!r}: {message}")
    return result


def decode(text: str) -> DecodedPreamble:
    """Decode the preamble of an OAST subdomain or FQDN.

    Only the text before the first dot is looked at; whether the rest is a
    known OAST suffix does not matter here. A bare 20-character preamble with
    no nonce decodes fine.

    This never raises. Check ``valid`` on the result.

    Args:
        text: ``<preamble><nonce>.<suffix>``, a bare subdomain or a preamble

    Returns:
        DecodedPreamble, with ``error`` set when ``valid`` is False

    Example:
        >>> result = decode("bst1o05anf609kg004m0ybndrfg8ejkmc.oast.fun")
        >>> result.pid, result.counter
        (1234, 300)
    """
    result = DecodedPreamble(original=text[:MAX_ORIGINAL_LENGTH])

    if not text:
        return _fail(result, DecodeErrorKind.EMPTY_INPUT, "empty input")

    subdomain = ascii_lower(text.split(".", 1)[0])

    if len(subdomain) > MAX_SUBDOMAIN_LENGTH:
        return _fail(result, DecodeErrorKind.SUBDOMAIN_TOO_LONG, "subdomain too long")

    if len(subdomain) < PREAMBLE_LENGTH:
        return _fail(
            result,
            DecodeErrorKind.SUBDOMAIN_TOO_SHORT,
            f"subdomain too short: {len(subdomain)} chars (minimum {PREAMBLE_LENGTH})",
        )

    preamble = subdomain[:PREAMBLE_LENGTH]
    if not is_valid_preamble(preamble):
        return _fail(
            result,
            DecodeErrorKind.INVALID_PREAMBLE,
            "preamble contains invalid base32hex characters",
        )

    # over-long nonces are cut, not rejected
    result.nonce = subdomain[PREAMBLE_LENGTH:PREAMBLE_LENGTH + MAX_NONCE_LENGTH]

    try:
        raw = decode_base32hex(preamble)
    except Base32Error as e:
        logger.debug(f"Codec rejected preamble {preamble!r}: {e}")
        raw = b""

    if len(raw) != DECODED_LENGTH:
        result.nonce = ""
        return _fail(result, DecodeErrorKind.PREAMBLE_DECODE_FAILED, "failed to decode preamble")

    result.timestamp = int.from_bytes(raw[0:4], "big")
    result.machine_id = raw[4:7]
    result.pid = int.from_bytes(raw[7:9], "big")
    result.counter = int.from_bytes(raw[9:12], "big")

    result.ksort = preamble[:KSORT_LENGTH]
    result.campaign = preamble[CAMPAIGN_START:CAMPAIGN_START + CAMPAIGN_LENGTH]

    result.valid = True
    return result
