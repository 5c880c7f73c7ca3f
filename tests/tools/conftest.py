"""Fixtures for oastid.tools tests."""

from collections.abc import Callable
from typing import Any

import pytest

from oastid.tools import registry


@pytest.fixture
def isolated_registry(monkeypatch: pytest.MonkeyPatch) -> None:
    """Run a test against an empty tool registry."""
    monkeypatch.setattr(registry, "_tools", {})
    monkeypatch.setattr(registry, "_tool_groups", {})


@pytest.fixture
def sample_tool() -> Callable[..., dict[str, Any]]:
    """A tool function shaped like the OAST actions."""

    def lookup_callback(domain: str, verbose: bool = False) -> dict[str, Any]:
        return {"domain": domain, "verbose": verbose}

    return lookup_callback
