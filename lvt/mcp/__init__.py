"""MCP server for lvt."""

from .tools import TOOLS, fault_safe

__all__ = ["TOOLS", "fault_safe"]
