"""Shared pytest fixtures for the scope-grep test suite.

Provides logging isolation, temporary source trees and a mock MCP server.
"""

import sys
from pathlib import Path
from typing import Callable

import pytest
import structlog

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from scope_grep.core.logging import configure_logging  # noqa: E402


# ============================================================================
# Logging Isolation
# ============================================================================

@pytest.fixture(autouse=True)
def isolated_logging(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Send structured logs to a per-test file so stdout only carries report lines."""
    monkeypatch.delenv("SENTRY_DSN", raising=False)
    monkeypatch.delenv("SCOPE_GREP_CONFIG", raising=False)
    configure_logging(log_level="DEBUG", log_file=str(tmp_path / "scope-grep.log"))
    yield
    structlog.reset_defaults()


# ============================================================================
# Source File Fixtures
# ============================================================================

@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    """Empty directory for test source files."""
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def write_source(source_dir: Path) -> Callable[..., Path]:
    """Factory writing a source file (text or raw bytes) under source_dir."""

    def _write(relative_path: str, content, encoding: str = "utf-8") -> Path:
        path = source_dir / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding=encoding)
        return path

    return _write


@pytest.fixture
def fixtures_dir() -> str:
    """Path to the checked-in fixtures directory."""
    return str(Path(__file__).parent / "fixtures")


# ============================================================================
# Mock MCP Server Fixtures
# ============================================================================

@pytest.fixture
def mock_mcp_instance():
    """Provide a mock MCP server instance for testing tool registration."""

    class MockFastMCP:
        """Mock FastMCP instance for testing."""
        def __init__(self):
            self.tools = {}

        def tool(self):
            """Decorator for registering tools."""
            def decorator(func):
                self.tools[func.__name__] = func
                return func
            return decorator

    return MockFastMCP()
