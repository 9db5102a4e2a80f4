"""Source file discovery for structural search.

Walks the requested roots in a deterministic order and filters by
extension, exclusion patterns and file size. Paths matched by a
``.gitignore`` at the walked root are skipped.
"""
import fnmatch
import os
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from pathspec import GitIgnoreSpec

from scope_grep.constants import FileConstants, FilePatterns
from scope_grep.core.logging import get_logger


class SourceFileFinder:
    """Finds and filters source files to search."""

    def __init__(self) -> None:
        self.logger = get_logger("search.file_finder")

    def find_files(
        self,
        roots: Sequence[str],
        extensions: Sequence[str],
        exclude_patterns: Sequence[str] = (),
        max_file_size_mb: int = 0,
    ) -> List[str]:
        """Find files to search under the given roots.

        A root that is a file is returned as-is (exclusion and size limits
        still apply); directories are walked recursively in sorted order.

        Args:
            roots: Files or directories to search
            extensions: File extensions to keep (e.g. ['.py'])
            exclude_patterns: fnmatch patterns tested against each path
            max_file_size_mb: Skip larger files, 0 for unlimited

        Returns:
            List of file paths in enumeration order

        Raises:
            ValueError: If a root does not exist
        """
        self.logger.info(
            "find_files_start",
            roots=list(roots),
            extensions=list(extensions),
            exclude_count=len(exclude_patterns),
        )

        found: List[str] = []
        for root in roots:
            if not os.path.exists(root):
                raise ValueError(f"Search path does not exist: {root}")
            if os.path.isfile(root):
                candidates: Iterable[str] = [root]
            else:
                candidates = self._walk(root, extensions)
            for path in candidates:
                if self._is_excluded(path, exclude_patterns) or self._exceeds_size(path, max_file_size_mb):
                    continue
                found.append(path)

        self.logger.info("find_files_complete", total_found=len(found))
        return found

    def _walk(self, root: str, extensions: Sequence[str]) -> Iterable[str]:
        ignore_spec = self._gitignore_spec(root)
        for dirpath, dirs, files in os.walk(root):
            dirs[:] = sorted(
                d
                for d in dirs
                if not self._should_skip_directory(d)
                and not self._is_ignored(ignore_spec, root, os.path.join(dirpath, d), is_dir=True)
            )
            for name in sorted(files):
                if name.startswith("."):
                    continue
                if not any(name.endswith(ext) for ext in extensions):
                    continue
                path = os.path.join(dirpath, name)
                if self._is_ignored(ignore_spec, root, path):
                    continue
                yield path

    def _gitignore_spec(self, root: str) -> Optional[GitIgnoreSpec]:
        gitignore = Path(root) / ".gitignore"
        if not gitignore.is_file():
            return None
        lines = gitignore.read_text(encoding="utf-8", errors="replace").splitlines()
        self.logger.debug("gitignore_loaded", file=str(gitignore), pattern_count=len(lines))
        return GitIgnoreSpec.from_lines(lines)

    def _is_ignored(self, spec: Optional[GitIgnoreSpec], root: str, path: str, is_dir: bool = False) -> bool:
        if spec is None:
            return False
        rel_path = Path(os.path.relpath(path, root)).as_posix()
        if is_dir:
            # Directory-only patterns such as "build/" need the trailing slash.
            rel_path += "/"
        if spec.match_file(rel_path):
            self.logger.debug("file_ignored", file=path)
            return True
        return False

    @staticmethod
    def _should_skip_directory(dirname: str) -> bool:
        if dirname.startswith("."):
            return True
        return dirname in FilePatterns.SKIP_DIRECTORIES

    def _is_excluded(self, path: str, exclude_patterns: Sequence[str]) -> bool:
        posix_path = Path(path).as_posix()
        for pattern in exclude_patterns:
            if fnmatch.fnmatch(posix_path, pattern) or fnmatch.fnmatch(os.path.basename(path), pattern):
                self.logger.debug("file_excluded", file=path, pattern=pattern)
                return True
        return False

    def _exceeds_size(self, path: str, max_file_size_mb: int) -> bool:
        if max_file_size_mb <= 0:
            return False
        try:
            file_size = os.path.getsize(path)
        except OSError as e:
            # Left in; reading it will fail and be reported per file.
            self.logger.debug("file_stat_error", file=path, error=str(e))
            return False
        if file_size > max_file_size_mb * FileConstants.BYTES_PER_MB:
            self.logger.info(
                "file_skipped_size",
                file=path,
                size_mb=round(file_size / FileConstants.BYTES_PER_MB, 2),
                max_size_mb=max_file_size_mb,
            )
            return True
        return False
