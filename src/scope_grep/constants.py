"""Shared constants across the scope-grep codebase.

This module centralizes magic numbers and configuration values
to improve maintainability and reduce code duplication.
"""


class ReportDefaults:
    """Defaults for match report lines."""

    SCOPE_SEPARATOR = "->"
    LINE_JOIN_MARKER = "↩"
    NAME_FIELD = "name"


class CacheDefaults:
    """Cache configuration defaults."""

    DEFAULT_CACHE_SIZE = 100  # Number of cached files
    TTL_SECONDS = 300  # 5 minutes
    CACHE_KEY_LENGTH = 16  # Length of truncated SHA256 hash for cache keys


class FilePatterns:
    """Common file patterns for discovery."""

    SKIP_DIRECTORIES = ["node_modules", "__pycache__", "venv", "site-packages", "build", "dist"]

    DEFAULT_EXCLUDE: list[str] = []


class FileConstants:
    """Constants for file operations."""

    BYTES_PER_MB = 1024 * 1024


class LoggingDefaults:
    """Logging configuration defaults."""

    DEFAULT_LEVEL = "INFO"
    LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


class ExitCodes:
    """Process exit statuses for the command-line tool."""

    OK = 0
    USAGE_ERROR = 1
    FILE_ERRORS = 2


# Language-specific extensions mapping
LANGUAGE_EXTENSIONS = {
    "python": [".py", ".pyi"],
}

DEFAULT_SCOPE_KINDS = {
    "class_definition": "class",
    "function_definition": "function",
}
