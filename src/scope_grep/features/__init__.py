"""Feature modules for scope-grep."""
