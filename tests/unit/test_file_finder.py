"""Tests for source file discovery."""

import os

import pytest

from scope_grep.features.search.file_finder import SourceFileFinder


class TestSourceFileFinder:
    """Tests for SourceFileFinder.find_files."""

    def test_sorted_walk_with_extension_filter(self, source_dir, write_source):
        write_source("b.py", "b = 1\n")
        write_source("a.py", "a = 1\n")
        write_source("pkg/c.py", "c = 1\n")
        write_source("notes.txt", "not python\n")
        files = SourceFileFinder().find_files([str(source_dir)], [".py"])
        assert [os.path.relpath(f, source_dir) for f in files] == [
            "a.py",
            "b.py",
            os.path.join("pkg", "c.py"),
        ]

    def test_hidden_and_vendor_directories_skipped(self, source_dir, write_source):
        write_source(".git/hook.py", "x = 1\n")
        write_source("node_modules/lib.py", "x = 1\n")
        write_source("__pycache__/mod.py", "x = 1\n")
        write_source(".hidden.py", "x = 1\n")
        write_source("main.py", "x = 1\n")
        files = SourceFileFinder().find_files([str(source_dir)], [".py"])
        assert [os.path.basename(f) for f in files] == ["main.py"]

    def test_exclude_patterns(self, source_dir, write_source):
        write_source("app/models.py", "x = 1\n")
        write_source("app/migrations/0001.py", "x = 1\n")
        write_source("test_app.py", "x = 1\n")
        files = SourceFileFinder().find_files(
            [str(source_dir)], [".py"], exclude_patterns=["*/migrations/*", "test_*.py"]
        )
        assert [os.path.basename(f) for f in files] == ["models.py"]

    def test_file_root_kept_regardless_of_extension(self, source_dir, write_source):
        path = write_source("script", "x = 1\n")
        assert SourceFileFinder().find_files([str(path)], [".py"]) == [str(path)]

    def test_roots_keep_their_order(self, source_dir, write_source):
        second = write_source("z.py", "x = 1\n")
        first = write_source("a.py", "x = 1\n")
        files = SourceFileFinder().find_files([str(second), str(first)], [".py"])
        assert files == [str(second), str(first)]

    def test_size_limit(self, source_dir, write_source):
        write_source("small.py", "x = 1\n")
        write_source("large.py", "x = 1\n" * 200_000)
        files = SourceFileFinder().find_files([str(source_dir)], [".py"], max_file_size_mb=1)
        assert [os.path.basename(f) for f in files] == ["small.py"]

    def test_missing_root(self, source_dir):
        with pytest.raises(ValueError, match="does not exist"):
            SourceFileFinder().find_files([str(source_dir / "missing")], [".py"])

    def test_gitignored_paths_skipped(self, source_dir, write_source):
        """Files and directories matched by the root .gitignore are not searched."""
        write_source(".gitignore", "generated/\n*_pb2.py\n")
        write_source("generated/g.py", "x = 1\n")
        write_source("api_pb2.py", "x = 1\n")
        write_source("a.py", "x = 1\n")
        files = SourceFileFinder().find_files([str(source_dir)], [".py"])
        assert [os.path.relpath(f, source_dir) for f in files] == ["a.py"]

    def test_gitignore_negation(self, source_dir, write_source):
        write_source(".gitignore", "*.py\n!keep.py\n")
        write_source("drop.py", "x = 1\n")
        write_source("keep.py", "x = 1\n")
        files = SourceFileFinder().find_files([str(source_dir)], [".py"])
        assert [os.path.basename(f) for f in files] == ["keep.py"]
