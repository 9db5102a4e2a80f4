"""Search feature MCP tool definitions."""

from typing import Any, Dict, Literal, Union

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from scope_grep.features.search.service import scope_search_impl


def register_search_tools(mcp: FastMCP) -> None:
    """Register search-related MCP tools.

    Args:
        mcp: FastMCP instance to register tools with
    """

    @mcp.tool()
    def scope_search(
        project_folder: str = Field(
            description="The absolute path to the folder (or single file) to search."
        ),
        query: str = Field(
            description="Substring to search for. Matching is case-sensitive and applies to single tokens."
        ),
        output_format: Literal["text", "json"] = Field(default="text", description="'text' or 'json'"),
        max_results: int = Field(default=0, description="Maximum matches to return, 0 = unlimited"),
    ) -> Union[str, Dict[str, Any]]:
        """
        Find every token containing a substring and report where it lives.

        Each match is reported with the chain of enclosing classes and
        functions and the single statement that contains it, e.g.:

            src/app.py Service->handle: self.client.send(payload)

        Multi-line statements are flattened with a ↩ marker. Files that fail
        to parse or decode are listed separately and do not stop the search.
        """
        return scope_search_impl(project_folder, query, output_format, max_results)
