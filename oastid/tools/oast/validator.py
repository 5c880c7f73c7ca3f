"""Structural checks for OAST preambles, subdomains and full domains.

Two rules are kept apart on purpose:

- a *preamble* is exactly 20 base32hex characters, which is all the decoder
  needs;
- a *subdomain* is a preamble followed by a z-base-32 nonce of at least 13
  characters, which is what standalone validation and extraction require.
"""
import logging

from oastid.tools.oast.base32 import PREAMBLE_LENGTH, is_base32hex_char, is_zbase32_char
from oastid.tools.oast.domains import get_subdomain

logger = logging.getLogger(__name__)

MIN_NONCE_LENGTH = 13
MIN_SUBDOMAIN_LENGTH = PREAMBLE_LENGTH + MIN_NONCE_LENGTH


def is_valid_preamble(value: str) -> bool:
    """True iff ``value`` is exactly 20 base32hex characters."""
    if len(value) != PREAMBLE_LENGTH:
        return False

    return all(is_base32hex_char(c) for c in value)


def is_valid_subdomain(value: str) -> bool:
    """True iff ``value`` is a preamble plus a z-base-32 nonce of 13+ chars.

    Hyphens and underscores are not accepted in the nonce here, unlike in
    the text extractor.
    """
    if len(value) < MIN_SUBDOMAIN_LENGTH:
        return False

    if not is_valid_preamble(value[:PREAMBLE_LENGTH]):
        return False

    return all(is_zbase32_char(c) for c in value[PREAMBLE_LENGTH:])


def validate_domain(text: str) -> bool:
    """Check that ``text`` is ``<subdomain>.<known suffix>`` with a valid subdomain.

    Everything before the suffix is treated as the subdomain, so a domain
    with extra labels (``a.<subdomain>.oast.pro``) is rejected.

    Args:
        text: Fully qualified domain to check

    Returns:
        True if the domain is a well-formed OAST callback domain
    """
    subdomain = get_subdomain(text)
    if not subdomain:
        logger.debug(f"No OAST subdomain in {text[:64]!r}")
        return False

    return is_valid_subdomain(subdomain)


validate = validate_domain
