"""Console output for the command-line tool.

Report lines are program output, not diagnostics, so they go to stdout
through this wrapper instead of the structured logger.

Usage:
    from scope_grep.utils.console_logger import console

    console.log(line)
    console.json(match.to_dict())
    console.error("Failed to read configuration")
"""

import json
import sys
from typing import Any, Dict, Optional


class ConsoleLogger:
    """print() replacement separating report output from errors."""

    def log(self, message: str = "", **kwargs: Any) -> None:
        """Output a normal message to stdout."""
        print(message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        """Output an error message to stderr."""
        print(f"ERROR: {message}", file=sys.stderr, **kwargs)

    def json(self, data: Dict[str, Any], indent: Optional[int] = None, **kwargs: Any) -> None:
        """Output data as JSON, one document per call."""
        print(json.dumps(data, indent=indent, ensure_ascii=False), **kwargs)


# Global console logger instance
console = ConsoleLogger()
