"""Known OAST provider domains.

The order of ``KNOWN_OAST_DOMAINS`` is significant: suffix matching and the
text extractor both walk it front to back and the first hit wins.
"""
from oastid.tools.oast.base32 import ascii_lower

KNOWN_OAST_DOMAINS: tuple[str, ...] = (
    "oast.pro",
    "oast.live",
    "oast.site",
    "oast.online",
    "oast.fun",
    "oast.me",
    "interact.sh",
    "interactsh.com",
)


def match_known_suffix(text: str) -> str | None:
    """Return the known suffix ``text`` ends with, if any.

    The suffix must either be the whole of ``text`` or be preceded by a
    literal dot, so ``xoast.pro`` does not match ``oast.pro``.

    Args:
        text: A domain name, in any case

    Returns:
        The matching entry of ``KNOWN_OAST_DOMAINS`` or None
    """
    lowered = ascii_lower(text)

    for suffix in KNOWN_OAST_DOMAINS:
        if not lowered.endswith(suffix):
            continue

        boundary = len(text) - len(suffix)
        if boundary == 0 or text[boundary - 1] == ".":
            return suffix

    return None


def split_subdomain(text: str) -> tuple[int, int] | None:
    """Return the ``(start, end)`` span of the part before ``.<suffix>``.

    None when ``text`` has no known suffix or consists of the suffix alone.
    """
    suffix = match_known_suffix(text)
    if suffix is None or len(text) == len(suffix):
        return None

    return 0, len(text) - len(suffix) - 1


def get_subdomain(text: str) -> str | None:
    """Sliced form of ``split_subdomain``."""
    span = split_subdomain(text)
    if span is None:
        return None

    start, end = span
    return text[start:end]
