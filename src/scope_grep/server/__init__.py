"""Server components for MCP integration."""

from .registry import register_all_tools
from .runner import run_mcp_server

__all__ = ["register_all_tools", "run_mcp_server"]
