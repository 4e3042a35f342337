import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

import colorlog

from job_data import __version__ as _PACKAGE_VERSION
from job_data.core.config import DEFAULT_SETTINGS_FILE, load_settings, search_columns
from job_data.core.dataset import JobDataset
from job_data.core.errors import DataUnavailable, UnknownColumn
from job_data.core.query import JobQueryEngine
from job_data.core.table import Record

RECORD_SEPARATOR = "*****"
NO_RESULTS = "No results"

# Exit codes
EXIT_OK = 0
EXIT_USAGE = 2
EXIT_DATA_UNAVAILABLE = 3

LOG_FORMAT = "%(levelname)s:%(name)s: %(message)s"
VERBOSE_LOG_FORMAT = (
    "%(asctime)s:%(levelname)s:%(name)s in %(filename)s:%(funcName)s:%(lineno)d: %(message)s"
)


def setup_logging(
    verbose: bool = False, warnings_only: bool = False, errors_only: bool = False
) -> None:
    """Send coloured logs to stderr; stdout carries only query output.

    Default level is WARNING, so load failures show but the INFO load line
    does not. --verbose switches to DEBUG with source locations.
    """
    logger = logging.getLogger()
    for h in list(logger.handlers):
        logger.removeHandler(h)
    log_format = VERBOSE_LOG_FORMAT if verbose else LOG_FORMAT
    log_colors = {
        "DEBUG": "cyan",
        "INFO": "green",
        "WARNING": "yellow",
        "ERROR": "red",
        "CRITICAL": "bold_red",
    }
    stream_handler = colorlog.StreamHandler(sys.stderr)
    formatter = colorlog.ColoredFormatter(f"%(log_color)s{log_format}", log_colors=log_colors)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)
    if errors_only:
        logger.setLevel(logging.ERROR)
    elif warnings_only:
        logger.setLevel(logging.WARNING)
    else:
        logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def _build_engine(args: argparse.Namespace) -> JobQueryEngine:
    """Resolve settings (flag > YAML > default) and bind an engine to them."""
    config_arg = getattr(args, "config", None)
    settings = load_settings(Path(config_arg) if config_arg else DEFAULT_SETTINGS_FILE)
    settings = settings.with_overrides(
        data_file=getattr(args, "data_file", None),
        strict=True if getattr(args, "strict", False) else None,
    )
    logging.debug("Using job data file %s (strict=%s)", settings.data_file, settings.strict)
    return JobQueryEngine(JobDataset.from_settings(settings))


def format_record(record: Record, columns: Sequence[str]) -> str:
    lines = [RECORD_SEPARATOR]
    for column in columns:
        lines.append(f"{column}: {record.get(column, '')}")
    lines.append(RECORD_SEPARATOR)
    return "\n".join(lines)


def _print_records(records: List[Record], columns: Sequence[str]) -> None:
    if not records:
        print(NO_RESULTS)
        return
    for record in records:
        print(format_record(record, columns))
        print()


def cmd_list(args: argparse.Namespace) -> int:
    """List distinct values of a column, or every job when the column is 'all'.

    Returns:
        0 on success
        2 if the column is unknown
        3 if the data file could not be loaded (strict mode)
    """
    engine = _build_engine(args)
    try:
        if args.column.lower() == "all":
            _print_records(engine.list_all(), engine.dataset.columns)
            return EXIT_OK
        values = engine.list_column_values(args.column)
    except UnknownColumn as e:
        logging.error("%s", e)
        return EXIT_USAGE
    except DataUnavailable as e:
        logging.error("Job data unavailable: %s", e)
        return EXIT_DATA_UNAVAILABLE

    if not values:
        print(NO_RESULTS)
        return EXIT_OK
    print(f"*** All {args.column} values ***")
    for value in values:
        print(value)
    return EXIT_OK


def cmd_search(args: argparse.Namespace) -> int:
    """Search one column (--column) or all priority columns for a term.

    Returns:
        0 on success
        2 if the column is unknown
        3 if the data file could not be loaded (strict mode)
    """
    engine = _build_engine(args)
    try:
        if args.column:
            records = engine.filter_by_column(args.column, args.term)
            _print_records(records, engine.dataset.columns)
            return EXIT_OK
        hits = engine.search_hits(args.term)
    except UnknownColumn as e:
        logging.error("%s", e)
        return EXIT_USAGE
    except DataUnavailable as e:
        logging.error("Job data unavailable: %s", e)
        return EXIT_DATA_UNAVAILABLE

    if not hits:
        print(NO_RESULTS)
        return EXIT_OK
    columns = engine.dataset.columns
    for hit in hits:
        if args.show_match:
            print(f"(matched on {hit.column})")
        print(format_record(hit.record, columns))
        print()
    logging.info("Search for %r matched %d jobs", args.term, len(hits))
    return EXIT_OK


def cmd_columns(args: argparse.Namespace) -> int:
    """Print the header columns and record count of the loaded data file."""
    engine = _build_engine(args)
    try:
        table = engine.dataset.table
    except DataUnavailable as e:
        logging.error("Job data unavailable: %s", e)
        return EXIT_DATA_UNAVAILABLE

    if not engine.dataset.is_loaded:
        print(NO_RESULTS)
        return EXIT_OK
    priority = set(search_columns())
    print(f"{engine.dataset.name}: {len(table)} jobs")
    for column in table.columns:
        marker = " (searched)" if column in priority else ""
        print(f"  {column}{marker}")
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="job-data",
        description=f"Job Data Tools (v{_PACKAGE_VERSION})",
    )
    p.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    p.add_argument(
        "--warnings-only",
        action="store_true",
        help="Show only warnings and errors (overrides --verbose)",
    )
    p.add_argument(
        "--errors-only",
        action="store_true",
        help="Show only errors (overrides --warnings-only and --verbose)",
    )
    p.add_argument(
        "--config",
        default=None,
        help="Path to settings.yaml (defaults to config/settings.yaml)",
    )
    p.add_argument(
        "--data-file",
        default=None,
        help="Job data CSV (overrides data_file from settings.yaml)",
    )
    p.add_argument(
        "--strict",
        action="store_true",
        help="Fail with exit code 3 when the data file cannot be loaded instead of returning no results",
    )

    sub = p.add_subparsers(dest="command", required=True)

    p_list = sub.add_parser("list", help="List distinct values of a column, or 'all' jobs")
    p_list.add_argument(
        "column",
        help="Column name (e.g. employer, location, 'core competency') or 'all'",
    )
    p_list.set_defaults(func=cmd_list)

    p_search = sub.add_parser("search", help="Search jobs by a case-insensitive substring")
    p_search.add_argument("term", help="Substring to look for")
    p_search.add_argument(
        "--column",
        default=None,
        help="Search only this column. When omitted, searches "
        + ", ".join(search_columns())
        + " in that priority order.",
    )
    p_search.add_argument(
        "--show-match",
        action="store_true",
        help="Print which priority column admitted each job (ignored with --column)",
    )
    p_search.set_defaults(func=cmd_search)

    p_columns = sub.add_parser("columns", help="Show the data file's columns and job count")
    p_columns.set_defaults(func=cmd_columns)

    return p


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(
        verbose=bool(args.verbose),
        warnings_only=bool(getattr(args, "warnings_only", False)),
        errors_only=bool(getattr(args, "errors_only", False)),
    )
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
