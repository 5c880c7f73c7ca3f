"""Registry of tool functions exposed to callers by name.

Tools are plain functions that take keyword arguments and return a
JSON-serializable dictionary. Decorating a function with ``register_tool``
makes it discoverable through ``list_tools`` and callable through
``execute_tool`` without the caller importing its module.
"""
import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

ToolFunction = Callable[..., dict[str, Any]]

_tools: dict[str, ToolFunction] = {}
_tool_groups: dict[str, str] = {}


class ToolNotFoundError(KeyError):
    """Raised when a tool name is not registered."""


def _group_for(func: ToolFunction) -> str:
    # oastid.tools.oast.oast_actions -> oast
    parts = func.__module__.split(".")
    if len(parts) >= 3 and parts[1] == "tools":
        return parts[2]
    return parts[-1]


def register_tool(func: ToolFunction) -> ToolFunction:
    """Register ``func`` under its ``__name__`` and return it unchanged."""
    name = func.__name__
    if name in _tools and _tools[name] is not func:
        logger.warning(f"Tool {name} registered twice, replacing previous definition")

    _tools[name] = func
    _tool_groups[name] = _group_for(func)
    return func


def get_tool(name: str) -> ToolFunction:
    try:
        return _tools[name]
    except KeyError:
        raise ToolNotFoundError(name) from None


def list_tools(group: str | None = None) -> list[str]:
    """Names of registered tools, optionally limited to one group."""
    names = sorted(_tools)
    if group is not None:
        names = [n for n in names if _tool_groups.get(n) == group]
    return names


def execute_tool(name: str, **kwargs: Any) -> dict[str, Any]:
    """Look up a tool by name and call it with ``kwargs``."""
    tool = get_tool(name)
    logger.debug(f"Executing tool {name} with {sorted(kwargs)}")
    return tool(**kwargs)
