"""scope-grep: substring search over syntax trees, reported by enclosing scope."""

__version__ = "0.1.0"
