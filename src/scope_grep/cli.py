"""Command-line entry point: ``scope-grep PATTERN [PATH ...]``."""

import argparse
from typing import List, Optional

from scope_grep.constants import ExitCodes
from scope_grep.core.config import add_logging_arguments, configure_logging_from_args, load_config, resolve_config_path
from scope_grep.core.exceptions import ConfigurationError, InvalidQueryError
from scope_grep.core.logging import get_logger
from scope_grep.core.sentry import init_sentry
from scope_grep.features.search.file_finder import SourceFileFinder
from scope_grep.features.search.service import search_files, validate_query
from scope_grep.utils.console_logger import console


def _create_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scope-grep",
        description="Find tokens containing PATTERN and report them with their enclosing class/function scopes.",
    )
    parser.add_argument("pattern", help="Substring to search for (case-sensitive)")
    parser.add_argument("paths", nargs="*", default=["."], help="Files or directories to search (default: .)")
    parser.add_argument("--json", action="store_true", help="Print one JSON object per match")
    add_logging_arguments(parser)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run a search and print one line per match.

    Returns:
        0 on success, 1 for configuration or query errors, 2 if any file failed
    """
    args = _create_argument_parser().parse_args(argv)
    configure_logging_from_args(args)
    init_sentry()
    logger = get_logger("cli")

    try:
        validate_query(args.pattern)
        config = load_config(resolve_config_path(args.config))
        files = SourceFileFinder().find_files(
            args.paths,
            config.extensions,
            config.exclude_patterns,
            config.max_file_size_mb,
        )
    except (ConfigurationError, InvalidQueryError, ValueError) as e:
        logger.error("search_setup_failed", error=str(e))
        console.error(str(e))
        return ExitCodes.USAGE_ERROR

    if args.json:
        summary = search_files(files, args.pattern, config)
        for match in summary.matches:
            console.json(match.to_dict())
    else:
        summary = search_files(files, args.pattern, config, sink=console.log)

    for file_path, error in summary.failed_files.items():
        console.error(f"{file_path}: {error}")

    return ExitCodes.FILE_ERRORS if summary.has_failures else ExitCodes.OK


if __name__ == "__main__":
    raise SystemExit(main())
