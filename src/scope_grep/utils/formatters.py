"""Formatting utilities for match reports.

Report lines have the shape ``<file> <scope-chain>: <block>`` where the
block is flattened onto a single display line.
"""

import re
from typing import Any, Dict, List

from scope_grep.constants import ReportDefaults

# A newline followed by the indentation (and any blank lines) after it
_LINE_BREAK_RUN = re.compile(r"\n\s+")


def format_block(text: str, marker: str = ReportDefaults.LINE_JOIN_MARKER) -> str:
    """Collapse a multi-line block onto one line.

    Every newline that is followed by one or more whitespace characters is
    replaced, together with that whitespace, by ``marker``. Other whitespace
    is left untouched.

    Args:
        text: Block text as extracted from the source
        marker: Visible separator standing in for each collapsed line break

    Returns:
        Single-line rendition of the block
    """
    return _LINE_BREAK_RUN.sub(lambda _: marker, text)


def format_report_line(file_path: str, scope_chain: str, flattened_block: str) -> str:
    """Assemble the final report line for one match."""
    return f"{file_path} {scope_chain}: {flattened_block}"


def format_matches_as_text(
    matches: List[Dict[str, Any]],
    separator: str = ReportDefaults.SCOPE_SEPARATOR,
    marker: str = ReportDefaults.LINE_JOIN_MARKER,
) -> str:
    """Convert match dictionaries to report lines, one per match.

    Args:
        matches: Match dictionaries as produced by ``ScopeMatch.to_dict``
        separator: Scope chain separator
        marker: Line join marker for flattened blocks

    Returns:
        Newline-separated report lines
    """
    if not matches:
        return ""

    lines: List[str] = []
    for m in matches:
        scope_chain = separator.join(m.get("scopes", []))
        lines.append(format_report_line(m.get("file", ""), scope_chain, format_block(m.get("block", ""), marker)))
    return "\n".join(lines)
