"""Data models for structural search results."""
from dataclasses import dataclass, field
from typing import Any, Dict, List

from scope_grep.constants import ReportDefaults
from scope_grep.utils.formatters import format_block, format_report_line


@dataclass
class ScopeMatch:
    """One leaf match with its scope chain and reportable block."""

    file_path: str
    scope_names: List[str]
    block: str
    line: int
    column: int
    matched_text: str

    def scope_chain(self, separator: str = ReportDefaults.SCOPE_SEPARATOR) -> str:
        return separator.join(self.scope_names)

    def render(
        self,
        separator: str = ReportDefaults.SCOPE_SEPARATOR,
        marker: str = ReportDefaults.LINE_JOIN_MARKER,
    ) -> str:
        """Render the single report line for this match."""
        return format_report_line(self.file_path, self.scope_chain(separator), format_block(self.block, marker))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file": self.file_path,
            "scopes": list(self.scope_names),
            "line": self.line,
            "column": self.column,
            "text": self.matched_text,
            "block": self.block,
        }


@dataclass
class SearchSummary:
    """Outcome of searching a sequence of files."""

    matches: List[ScopeMatch] = field(default_factory=list)
    files_searched: int = 0
    failed_files: Dict[str, str] = field(default_factory=dict)

    @property
    def has_failures(self) -> bool:
        return bool(self.failed_files)

    def lines(
        self,
        separator: str = ReportDefaults.SCOPE_SEPARATOR,
        marker: str = ReportDefaults.LINE_JOIN_MARKER,
    ) -> List[str]:
        return [match.render(separator, marker) for match in self.matches]
