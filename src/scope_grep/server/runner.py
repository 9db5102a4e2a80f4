"""MCP server entry point."""

from mcp.server.fastmcp import FastMCP

from scope_grep.core import config as core_config
from scope_grep.core.cache import init_query_cache
from scope_grep.core.sentry import init_sentry
from scope_grep.server.registry import register_all_tools

mcp = FastMCP("scope-grep")


def run_mcp_server() -> None:
    """Run the MCP server.

    This function:
    1. Parses command-line arguments and loads configuration
    2. Initializes the result cache and Sentry error tracking
    3. Registers all MCP tools
    4. Starts the MCP server with stdio transport
    """
    core_config.parse_args_and_get_config()
    init_query_cache(core_config.CACHE_SIZE, core_config.CACHE_TTL)
    init_sentry()
    register_all_tools(mcp)
    mcp.run(transport="stdio")
