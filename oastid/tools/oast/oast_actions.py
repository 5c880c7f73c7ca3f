"""OAST tool actions.

Registered tools for validating, decoding and extracting OAST callback
domains. Every tool returns a JSON-serializable dictionary.
"""
from typing import Any

from oastid.tools.registry import register_tool
from oastid.tools.oast.decoder import decode
from oastid.tools.oast.domains import match_known_suffix
from oastid.tools.oast.extractor import extract
from oastid.tools.oast.validator import validate_domain


@register_tool
def validate_oast_domain(domain: str) -> dict[str, Any]:
    """Check whether a domain is a well-formed OAST callback domain.

    The domain must end in a known OAST suffix (oast.pro, oast.fun,
    interact.sh, ...) and the part before it must be a 20 character
    base32hex preamble followed by a z-base-32 nonce of at least 13
    characters.

    Args:
        domain: Fully qualified domain, e.g. taken from a DNS query log

    Returns:
        Dictionary containing:
        - domain: The domain checked
        - valid: Whether it is a well-formed OAST domain
        - suffix: The known suffix it ends with, or None
    """
    return {
        "domain": domain,
        "valid": validate_domain(domain),
        "suffix": match_known_suffix(domain),
    }


@register_tool
def decode_oast_domain(domain: str) -> dict[str, Any]:
    """Decode the metadata embedded in an OAST subdomain.

    Recovers the issue timestamp, machine id, process id and counter from
    the preamble, plus the k-sort key and campaign id used to group
    related callbacks. Works on a full domain, a bare subdomain or a
    bare 20 character preamble.

    Args:
        domain: Domain or subdomain to decode

    Returns:
        Dictionary with original, valid, ts, machine_id, pid, counter,
        ksort, campaign, nonce and issued_at (ISO 8601 or None), plus
        error when valid is False

    Example:
        >>> result = decode_oast_domain("bst1o05anf609kg004m0ybndrfg8ejkmc.oast.fun")
        >>> result["pid"], result["machine_id"]
        (1234, 'aa:bb:cc')
    """
    decoded = decode(domain)
    result = decoded.to_dict()
    issued_at = decoded.issued_at
    result["issued_at"] = issued_at.isoformat() if issued_at else None
    return result


@register_tool
def summarize_oast_domain(domain: str) -> dict[str, Any]:
    """Return only the grouping fields of a decoded OAST domain.

    Args:
        domain: Domain or subdomain to decode

    Returns:
        Dictionary with ksort, campaign, machine_id and ts
    """
    return decode(domain).summary()


@register_tool
def extract_oast_domains(text: str) -> dict[str, Any]:
    """Find OAST callback domains in free text.

    Use this on HTTP responses, server logs or DNS query dumps to spot
    interaction domains that leaked or were resolved.

    Args:
        text: Text to scan

    Returns:
        Dictionary containing:
        - count: Number of domains found
        - domains: The matched domains as they appear in the text
        - matches: Match details (subdomain, suffix, offsets)
    """
    matches = extract(text)

    return {
        "count": len(matches),
        "domains": [m.full for m in matches],
        "matches": [m.to_dict() for m in matches],
    }


@register_tool
def extract_and_decode_oast_domains(text: str) -> dict[str, Any]:
    """Find OAST domains in free text and decode each of them.

    Args:
        text: Text to scan

    Returns:
        Dictionary containing:
        - count: Number of domains found
        - valid_count: Number that decoded successfully
        - results: One decoded record per domain
        - campaigns: Campaign id -> number of domains, for the valid ones
    """
    decoded = [decode(m.full) for m in extract(text)]

    campaigns: dict[str, int] = {}
    for item in decoded:
        if item.valid:
            campaigns[item.campaign] = campaigns.get(item.campaign, 0) + 1

    return {
        "count": len(decoded),
        "valid_count": sum(1 for d in decoded if d.valid),
        "results": [d.to_dict() for d in decoded],
        "campaigns": campaigns,
    }
