"""scope-grep MCP Server - entry point.

Run with ``python main.py`` or the ``scope-grep-mcp`` console script.
"""

from scope_grep.server.runner import run_mcp_server

if __name__ == "__main__":
    run_mcp_server()
