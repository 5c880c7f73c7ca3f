"""
Pytest configuration and shared fixtures for oastid tests.
"""

import pytest


# 5F3A1C00 | AABBCC | 04D2 | 00012C  ->  ts=0x5F3A1C00, machine aa:bb:cc, pid 1234, counter 300
SAMPLE_PREAMBLE = "bst1o05anf609kg004m0"
SAMPLE_PREAMBLE_BYTES = bytes.fromhex("5f3a1c00aabbcc04d200012c")
SAMPLE_NONCE = "ybndrfg8ejkmc"
SAMPLE_SUBDOMAIN = SAMPLE_PREAMBLE + SAMPLE_NONCE

OTHER_PREAMBLE = "c7h5q3ka9s6tqr2eph1g"
OTHER_NONCE = "o3fzc1u8w4kxb"
OTHER_SUBDOMAIN = OTHER_PREAMBLE + OTHER_NONCE


@pytest.fixture
def sample_preamble() -> str:
    """20 character base32hex preamble with known field values."""
    return SAMPLE_PREAMBLE


@pytest.fixture
def sample_subdomain() -> str:
    """Preamble followed by a 13 character z-base-32 nonce."""
    return SAMPLE_SUBDOMAIN


@pytest.fixture
def sample_domain() -> str:
    """Full OAST callback domain on a public interactsh suffix."""
    return f"{SAMPLE_SUBDOMAIN}.oast.fun"


@pytest.fixture
def other_domain() -> str:
    """Second callback domain on a different suffix."""
    return f"{OTHER_SUBDOMAIN}.oast.pro"


@pytest.fixture
def sample_http_log(sample_domain: str, other_domain: str) -> str:
    """Access log excerpt containing two OAST callbacks and some noise."""
    return (
        f'10.0.0.5 - - [17/Aug/2020:05:56:16 +0000] "GET http://{sample_domain}/ssrf HTTP/1.1" 200 0\n'
        '10.0.0.7 - - [17/Aug/2020:05:56:20 +0000] "GET http://static.example.com/app.js HTTP/1.1" 200 5120\n'
        f"10.0.0.9 - - [17/Aug/2020:05:57:02 +0000] \"GET /?u=https://{other_domain}:443 HTTP/1.1\" 302 0\n"
        "dns query: oast.fun A IN\n"
    )
