"""
Command-line entry point for the ACE scan analyzer.

Usage:
    ace-scan-analyzer [LOG_PATH] [--output PATH] [--limit N] [--json PATH]
                      [--no-export] [--quiet] [--debug]
"""

import sys
from typing import Dict, List, Optional, Set, Tuple

from . import config
from .analyzer import analyze_log_file
from .exceptions import (
    AceScanAnalysisError,
    ConfigurationError,
    LogFileNotFoundError,
    LogFormatError,
    NoValidEntriesError,
)
from .export import export_high_risk_targets, export_statistics_json
from .logging_config import configure_logging, enable_debug, enable_quiet, get_logger
from .report import generate_detailed_report

logger = get_logger(__name__)

USAGE = """Usage: ace-scan-analyzer [LOG_PATH] [options]

  LOG_PATH          Huorong log export (default: {default_log})

Options:
  --output PATH     CSV export destination (default: {default_csv})
  --limit N         Maximum rows in the CSV export (default: {default_limit})
  --json PATH       Also write the raw statistics as JSON
  --no-export       Skip the CSV export
  --quiet           Only print warnings and errors
  --debug           Print debug information
  -h, --help        Show this message
"""

VALUE_OPTIONS = ("--output", "--limit", "--json")
FLAG_OPTIONS = ("--no-export", "--quiet", "--debug", "-h", "--help")


def usage() -> str:
    return USAGE.format(
        default_log=config.DEFAULT_LOG_PATH,
        default_csv=config.DEFAULT_EXPORT_PATH,
        default_limit=config.EXPORT_ROW_LIMIT,
    )


def parse_args(argv: List[str]) -> Tuple[Optional[str], Dict[str, str], Set[str]]:
    """Split arguments into the log path, valued options and flags.

    Raises:
        ConfigurationError: On unknown options, missing values or extra paths.
    """
    log_path = None
    options: Dict[str, str] = {}
    flags: Set[str] = set()

    args = iter(argv)
    for arg in args:
        if arg in FLAG_OPTIONS:
            flags.add(arg)
        elif arg.split("=", 1)[0] in VALUE_OPTIONS:
            if "=" in arg:
                name, value = arg.split("=", 1)
            else:
                name = arg
                value = next(args, None)
                if value is None:
                    raise ConfigurationError(f"Option {name} requires a value")
            options[name] = value
        elif arg.startswith("-"):
            raise ConfigurationError(f"Unknown option: {arg}")
        elif log_path is None:
            log_path = arg
        else:
            raise ConfigurationError(f"Unexpected argument: {arg}")

    return log_path, options, flags


def parse_limit(value: str) -> int:
    try:
        limit = int(value)
    except ValueError:
        raise ConfigurationError(f"--limit must be an integer, got {value!r}") from None
    if limit < 1:
        raise ConfigurationError(f"--limit must be at least 1, got {limit}")
    return limit


def main(argv: Optional[List[str]] = None) -> int:
    """Run the analyzer; returns the process exit code."""
    argv = sys.argv[1:] if argv is None else argv
    configure_logging(stream=sys.stdout, error_stream=sys.stderr)

    try:
        log_path, options, flags = parse_args(argv)
        limit = parse_limit(options["--limit"]) if "--limit" in options else config.EXPORT_ROW_LIMIT
    except ConfigurationError as e:
        logger.error("Error: %s", e)
        logger.error(usage())
        return 1

    if "-h" in flags or "--help" in flags:
        logger.info(usage())
        return 0

    if "--debug" in flags:
        enable_debug()
    elif "--quiet" in flags:
        enable_quiet()

    log_path = log_path or config.DEFAULT_LOG_PATH

    try:
        stats = analyze_log_file(log_path)
    except LogFileNotFoundError as e:
        logger.error("Error: %s", e)
        logger.error("  Usage: ace-scan-analyzer <log file>, or drop the file onto the program")
        return 1
    except LogFormatError as e:
        logger.error("Error: %s", e)
        return 1
    except NoValidEntriesError as e:
        logger.error("Error: %s", e)
        return 1

    generate_detailed_report(stats)

    try:
        if "--no-export" not in flags:
            export_high_risk_targets(stats, options.get("--output"), limit)
        if "--json" in options:
            export_statistics_json(stats, options["--json"])
    except AceScanAnalysisError as e:
        logger.error("Error: %s", e)
        return 1

    logger.debug("Rules triggered: %s", stats.rules_triggered)
    return 0
