"""Central tool registration for MCP server."""

from mcp.server.fastmcp import FastMCP

from scope_grep.features.search.tools import register_search_tools


def register_all_tools(mcp: FastMCP) -> None:
    """Register all MCP tools from all features."""
    register_search_tools(mcp)
