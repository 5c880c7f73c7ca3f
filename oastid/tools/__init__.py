from .registry import ToolNotFoundError, execute_tool, get_tool, list_tools, register_tool


__all__ = [
    "ToolNotFoundError",
    "execute_tool",
    "get_tool",
    "list_tools",
    "register_tool",
]
