"""Configuration management for scope-grep."""

import argparse
import os
import sys
from typing import Optional

import yaml
from pydantic import ValidationError

from scope_grep.constants import CacheDefaults, LoggingDefaults
from scope_grep.core.exceptions import ConfigurationError
from scope_grep.core.logging import configure_logging, get_logger
from scope_grep.models.config import ScopeGrepConfig

CONFIG_ENV_VAR = "SCOPE_GREP_CONFIG"

# Global config path (set by parse_args_and_get_config)
CONFIG_PATH: Optional[str] = None

# Global cache configuration (set by parse_args_and_get_config)
CACHE_ENABLED: bool = True
CACHE_SIZE: int = CacheDefaults.DEFAULT_CACHE_SIZE
CACHE_TTL: int = CacheDefaults.TTL_SECONDS


def validate_config_file(config_path: str) -> ScopeGrepConfig:
    """Validate a scope-grep.yaml file.

    Args:
        config_path: Path to the YAML file

    Returns:
        Validated ScopeGrepConfig model

    Raises:
        ConfigurationError: If config file is invalid
    """
    if not os.path.exists(config_path):
        raise ConfigurationError(config_path, "File does not exist")

    if not os.path.isfile(config_path):
        raise ConfigurationError(config_path, "Path is not a file")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(config_path, f"YAML parsing failed: {e}") from e
    except OSError as e:
        raise ConfigurationError(config_path, f"Failed to read file: {e}") from e

    if config_data is None:
        raise ConfigurationError(config_path, "Config file is empty")

    if not isinstance(config_data, dict):
        raise ConfigurationError(config_path, "Config must be a YAML dictionary")

    try:
        return ScopeGrepConfig(**config_data)
    except ValidationError as e:
        raise ConfigurationError(config_path, f"Validation failed: {e}") from e


def resolve_config_path(flag_value: Optional[str]) -> Optional[str]:
    """Pick the config path: --config flag first, then the environment."""
    return flag_value or os.environ.get(CONFIG_ENV_VAR) or None


def load_config(config_path: Optional[str] = None) -> ScopeGrepConfig:
    """Load configuration from a file, or defaults when no path is given.

    Raises:
        ConfigurationError: If the file is invalid
    """
    if config_path is None:
        return ScopeGrepConfig()
    config = validate_config_file(config_path)
    get_logger("config").info("config_loaded", config_path=config_path)
    return config


def add_logging_arguments(parser: argparse.ArgumentParser) -> None:
    """Add the --config/--log-level/--log-file options shared by all entry points."""
    parser.add_argument(
        "--config",
        type=str,
        metavar="PATH",
        help=f"Path to scope-grep.yaml. Can also be set via {CONFIG_ENV_VAR} env var.",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=LoggingDefaults.LEVELS,
        default=None,
        metavar="LEVEL",
        help="Logging level (DEBUG, INFO, WARNING, ERROR). Can also be set via LOG_LEVEL env var. Default: INFO",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        metavar="PATH",
        default=None,
        help="Path to log file (logs to stderr by default). Can also be set via LOG_FILE env var.",
    )


def _create_argument_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the MCP server."""
    parser = argparse.ArgumentParser(
        prog="scope-grep-mcp",
        description="scope-grep MCP Server - Substring search reported with enclosing class/function scopes",
        epilog=f"""
environment variables:
  {CONFIG_ENV_VAR}  Path to scope-grep.yaml (overridden by --config flag)
  LOG_LEVEL          Logging level: DEBUG, INFO, WARNING, ERROR (default: INFO)
  LOG_FILE           Path to log file (logs to stderr by default)
  SENTRY_DSN         Enables error reporting to Sentry
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    add_logging_arguments(parser)
    parser.add_argument(
        "--no-cache", action="store_true", help="Disable result caching. Can also be set via CACHE_DISABLED=1 env var."
    )
    parser.add_argument(
        "--cache-size",
        type=int,
        metavar="N",
        default=None,
        help=f"Maximum number of cached files (default: {CacheDefaults.DEFAULT_CACHE_SIZE}). Can also be set via CACHE_SIZE env var.",
    )
    parser.add_argument(
        "--cache-ttl",
        type=int,
        metavar="SECONDS",
        default=None,
        help=f"Cache entry lifetime in seconds (default: {CacheDefaults.TTL_SECONDS}). Can also be set via CACHE_TTL env var.",
    )
    return parser


def configure_logging_from_args(args: argparse.Namespace) -> None:
    """Configure logging based on command-line arguments and environment.

    Precedence: --log-level/--log-file flags > env vars > defaults
    """
    log_level = args.log_level or os.environ.get("LOG_LEVEL", LoggingDefaults.DEFAULT_LEVEL)
    log_file = args.log_file or os.environ.get("LOG_FILE")
    configure_logging(log_level=log_level, log_file=log_file)


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        get_logger("cache.init").warning("invalid_cache_env", variable=name, using_default=default)
        return default


def _configure_cache_from_args(args: argparse.Namespace) -> tuple[bool, int, int]:
    """Configure cache settings from command-line arguments and environment.

    Precedence: command-line flags > env vars > defaults

    Returns:
        Tuple of (cache_enabled, cache_size, cache_ttl).
    """
    cache_enabled = not (args.no_cache or os.environ.get("CACHE_DISABLED"))
    cache_size = args.cache_size if args.cache_size is not None else _env_int("CACHE_SIZE", CacheDefaults.DEFAULT_CACHE_SIZE)
    cache_ttl = args.cache_ttl if args.cache_ttl is not None else _env_int("CACHE_TTL", CacheDefaults.TTL_SECONDS)

    get_logger("cache.init").info("cache_config", cache_enabled=cache_enabled, cache_size=cache_size, cache_ttl=cache_ttl)
    return cache_enabled, cache_size, cache_ttl


def parse_args_and_get_config(argv: Optional[list[str]] = None) -> ScopeGrepConfig:
    """Parse MCP server arguments, configure logging and cache, load config.

    Note:
        Calls sys.exit(1) if the configuration file is invalid.
    """
    global CONFIG_PATH, CACHE_ENABLED, CACHE_SIZE, CACHE_TTL

    args = _create_argument_parser().parse_args(argv)
    configure_logging_from_args(args)

    CONFIG_PATH = resolve_config_path(args.config)
    try:
        config = load_config(CONFIG_PATH)
    except ConfigurationError as e:
        get_logger("config").error("config_validation_failed", config_path=CONFIG_PATH, error=str(e))
        sys.exit(1)

    CACHE_ENABLED, CACHE_SIZE, CACHE_TTL = _configure_cache_from_args(args)
    return config
