"""Search feature service - structural substring search with scope reports."""

import time
from typing import Any, Callable, Dict, Iterable, List, Literal, Optional, Union

import sentry_sdk

from scope_grep.core import config as core_config
from scope_grep.core.cache import QueryCache, get_query_cache
from scope_grep.core.exceptions import InvalidQueryError, ScopeGrepError
from scope_grep.core.logging import get_logger
from scope_grep.features.search.block import extract_block
from scope_grep.features.search.file_finder import SourceFileFinder
from scope_grep.features.search.hierarchy import hierarchy_of, innermost_scope, named_projection
from scope_grep.features.search.matcher import find_leaf_matches, leaf_text
from scope_grep.features.search.parsing import parse_source
from scope_grep.models.config import ScopeGrepConfig
from scope_grep.models.search import ScopeMatch, SearchSummary
from scope_grep.models.tree import SyntaxTree
from scope_grep.utils.formatters import format_matches_as_text

LineSink = Callable[[str], None]


def validate_query(query: str) -> None:
    """Reject queries that cannot be searched for.

    Raises:
        InvalidQueryError: If the query is empty
    """
    if not isinstance(query, str) or not query:
        raise InvalidQueryError("Query must be a non-empty string")


def search_tree(
    tree: SyntaxTree,
    query: str,
    file_path: str,
    config: Optional[ScopeGrepConfig] = None,
) -> List[ScopeMatch]:
    """Find query matches in one parsed tree.

    One ScopeMatch is produced per matching leaf, in source order. Matches
    that resolve to the same block are all reported.

    Args:
        tree: Parsed source tree
        query: Substring to look for (case-sensitive)
        file_path: Path reported for every match
        config: Search configuration (defaults when omitted)

    Returns:
        Matches in discovery order

    Raises:
        LeafDecodeError: If a leaf in the tree is not valid UTF-8
    """
    config = config or ScopeGrepConfig()
    matches: List[ScopeMatch] = []
    for leaf in find_leaf_matches(tree.root, query):
        projection = named_projection(hierarchy_of(leaf), config.grammar)
        line, column = leaf.start_point
        matches.append(
            ScopeMatch(
                file_path=file_path,
                scope_names=[name for _, name in projection],
                block=extract_block(leaf, innermost_scope(projection)),
                line=line + 1,
                column=column + 1,
                matched_text=leaf_text(leaf),
            )
        )
    return matches


def search_source(
    file_path: str,
    source: bytes,
    query: str,
    config: Optional[ScopeGrepConfig] = None,
) -> List[ScopeMatch]:
    """Parse one file's contents and search it.

    Raises:
        SourceParseError: If no tree can be built
        LeafDecodeError: If a leaf is not valid UTF-8
    """
    config = config or ScopeGrepConfig()
    tree = parse_source(source, config.grammar, file_path=file_path)
    return search_tree(tree, query, file_path, config)


def _read_source(file_path: str) -> bytes:
    with open(file_path, "rb") as f:
        return f.read()


def _search_one_file(
    file_path: str,
    query: str,
    config: ScopeGrepConfig,
    cache: Optional[QueryCache],
) -> List[ScopeMatch]:
    source = _read_source(file_path)
    grammar = config.grammar.model_dump_json()
    if cache is not None:
        cached = cache.get(query, file_path, source, grammar)
        if cached is not None:
            return cached
    matches = search_source(file_path, source, query, config)
    if cache is not None:
        cache.put(query, file_path, source, matches, grammar)
    return matches


def search_files(
    paths: Iterable[str],
    query: str,
    config: Optional[ScopeGrepConfig] = None,
    sink: Optional[LineSink] = None,
    cache: Optional[QueryCache] = None,
) -> SearchSummary:
    """Search files one after another, isolating failures per file.

    A file that cannot be read, parsed or decoded is logged and recorded in
    ``SearchSummary.failed_files``; the remaining files are still searched.

    Args:
        paths: Files to search, in reporting order
        query: Substring to look for
        config: Search configuration (defaults when omitted)
        sink: Receives each report line once its file is done
        cache: Optional per-file result cache

    Returns:
        Summary with all matches and failures

    Raises:
        InvalidQueryError: If the query is empty
    """
    logger = get_logger("search.search_files")
    validate_query(query)
    config = config or ScopeGrepConfig()
    file_paths = list(paths)
    summary = SearchSummary()
    start_time = time.time()

    logger.info("search_files_started", file_count=len(file_paths), query_length=len(query))

    for file_path in file_paths:
        try:
            matches = _search_one_file(file_path, query, config, cache)
        except (ScopeGrepError, OSError) as e:
            logger.warning(
                "file_search_failed",
                file=file_path,
                error_type=type(e).__name__,
                error=str(e)[:200],
            )
            sentry_sdk.capture_exception(e, extras={
                "function": "search_files",
                "file": file_path,
                "query_length": len(query),
            })
            summary.failed_files[file_path] = str(e)
            continue

        summary.files_searched += 1
        summary.matches.extend(matches)
        if sink is not None:
            for match in matches:
                sink(match.render(config.scope_separator, config.line_join_marker))

    logger.info(
        "search_files_completed",
        execution_time_seconds=round(time.time() - start_time, 3),
        files_searched=summary.files_searched,
        files_failed=len(summary.failed_files),
        match_count=len(summary.matches),
    )
    return summary


def _format_text_result(summary: SearchSummary, shown: List[Dict[str, Any]], config: ScopeGrepConfig) -> str:
    total = len(summary.matches)
    if total == 0:
        text = "No matches found"
    else:
        header = f"Found {total} matches"
        if len(shown) < total:
            header += f" (showing first {len(shown)} of {total})"
        text = header + ":\n\n" + format_matches_as_text(shown, config.scope_separator, config.line_join_marker)

    if summary.failed_files:
        failures = "\n".join(f"{path}: {error}" for path, error in summary.failed_files.items())
        text += f"\n\nFailed files ({len(summary.failed_files)}):\n{failures}"
    return text


def scope_search_impl(
    project_folder: str,
    query: str,
    output_format: Literal["text", "json"] = "text",
    max_results: int = 0,
    config: Optional[ScopeGrepConfig] = None,
) -> Union[str, Dict[str, Any]]:
    """
    Implementation of scope_search.

    Search every source file under a folder for a substring and report each
    match with its enclosing scope chain and statement.

    Args:
        project_folder: Folder (or single file) to search
        query: Substring to look for
        output_format: 'text' for report lines, 'json' for match objects
        max_results: Maximum matches to return (0 for no limit)
        config: Search configuration (loaded from CONFIG_PATH when omitted)

    Returns:
        Report text, or a dict with matches, failures and counts

    Raises:
        InvalidQueryError: If the query is empty
        ConfigurationError: If the configured file is invalid
        ValueError: If the folder does not exist
    """
    logger = get_logger("search.scope_search")
    config = config or core_config.load_config(core_config.CONFIG_PATH)

    files = SourceFileFinder().find_files(
        [project_folder],
        config.extensions,
        config.exclude_patterns,
        config.max_file_size_mb,
    )
    summary = search_files(files, query, config, cache=get_query_cache())

    shown = [m.to_dict() for m in summary.matches]
    if max_results > 0:
        shown = shown[:max_results]

    logger.info(
        "scope_search_completed",
        total_matches=len(summary.matches),
        returned_matches=len(shown),
        output_format=output_format,
    )

    if output_format == "text":
        return _format_text_result(summary, shown, config)

    return {
        "matches": shown,
        "total_matches": len(summary.matches),
        "files_searched": summary.files_searched,
        "failed_files": dict(summary.failed_files),
    }
