from __future__ import annotations

import argparse
import os
import sys
import time
from pathlib import Path

from dotenv import load_dotenv

from payroll_ledger.config.loader import DEFAULT_CONFIG_PATH, ConfigError, PayrollConfig, load_config
from payroll_ledger.csvio.codec import CsvFileError
from payroll_ledger.logging.init import log_summary, setup_logging
from payroll_ledger.services.bootstrap import BootstrapError, ensure_input_files
from payroll_ledger.services.progress import RowProgressTracker
from payroll_ledger.services.session import TABLE_NAMES, PayrollSession, SessionError
from payroll_ledger.services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- load .env (python-dotenv), then the YAML config
- ensure the input files exist
- run the requested command against a PayrollSession

Exit codes: 0 success, 2 some payroll rows skipped, 1 fatal (config/file error).
"""

EXIT_SUCCESS_ALL = 0
EXIT_FATAL = 1
EXIT_PARTIAL_FAILURE = 2

CONFIG_ENV = "PAYROLL_CONFIG"


def _load_env_file(path: Path, override: bool = False) -> None:
    """Load .env; a broken file only produces a warning."""
    try:
        if path.exists():
            load_dotenv(dotenv_path=path, override=override)
    except OSError as e:  # pragma: no cover
        print(f"WARNING: failed to load .env via python-dotenv: {e}")


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="payroll-ledger", description="Department rates / employee payroll processor")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--config", type=Path, default=None, help=f"Config file (default: {DEFAULT_CONFIG_PATH})")
    sub = p.add_subparsers(dest="command", required=True)

    sub.add_parser("init", help="Create missing input files with their headers")
    sub.add_parser("generate", help="Compute pay and write the processed payroll file")

    show = sub.add_parser("show", help="Print a table")
    show.add_argument("table", choices=TABLE_NAMES)

    add = sub.add_parser("add-row", help="Append a row (empty when no values are given)")
    add.add_argument("table", choices=TABLE_NAMES[:2])
    add.add_argument("values", nargs="*")

    dup = sub.add_parser("duplicate-row", help="Append a copy of a row")
    dup.add_argument("table", choices=TABLE_NAMES[:2])
    dup.add_argument("index", type=int)

    rm = sub.add_parser("remove-rows", help="Remove rows by index")
    rm.add_argument("table", choices=TABLE_NAMES[:2])
    rm.add_argument("indices", type=int, nargs="+")

    setc = sub.add_parser("set-cell", help="Set one cell")
    setc.add_argument("table", choices=TABLE_NAMES[:2])
    setc.add_argument("row", type=int)
    setc.add_argument("col", type=int)
    setc.add_argument("value")
    return p.parse_args(argv)


def _resolve_config(args: argparse.Namespace) -> PayrollConfig:
    explicit = args.config or (Path(os.environ[CONFIG_ENV]) if os.getenv(CONFIG_ENV) else None)
    if explicit is not None:
        return load_config(explicit, must_exist=True)
    return load_config(DEFAULT_CONFIG_PATH, must_exist=False)


def _show(session: PayrollSession, name: str) -> int:
    if name == "processed":
        session.load_processed()
    frame = session.table(name).to_frame()
    print(f"TABLE: {name} ({session.path_of(name)})")
    if frame.empty:
        print("  columns=", list(frame.columns))
        print("  (no rows)")
    else:
        print(frame.to_string(na_rep=""))
    return EXIT_SUCCESS_ALL


def _edit(session: PayrollSession, args: argparse.Namespace, logger) -> int:
    store = session.table(args.table)
    if args.command == "add-row":
        index = store.add_row(args.values) if args.values else store.add_empty_row()
        logger.info(f"{args.table}: added row {index}")
    elif args.command == "duplicate-row":
        index = store.duplicate_row(args.index)
        if index is None:
            logger.warning(f"{args.table}: no row {args.index} to duplicate")
            return EXIT_FATAL
        logger.info(f"{args.table}: duplicated row {args.index} -> {index}")
    elif args.command == "remove-rows":
        before = store.row_count
        store.remove_rows(args.indices)
        logger.info(f"{args.table}: removed {before - store.row_count} row(s)")
    elif args.command == "set-cell":
        if not (0 <= args.row < store.row_count):
            logger.warning(f"{args.table}: no row {args.row}")
            return EXIT_FATAL
        if not (0 <= args.col < store.column_count):
            logger.warning(f"{args.table}: no column {args.col}")
            return EXIT_FATAL
        store.set(args.row, args.col, args.value)
        logger.info(f"{args.table}: set [{args.row},{args.col}]")
    session.save(args.table)
    return EXIT_SUCCESS_ALL


def _generate(session: PayrollSession, logger) -> int:
    start = time.perf_counter()
    with RowProgressTracker(session.payroll.row_count) as tracker:
        result = session.generate(progress=tracker)
        tracker.set_postfix(skipped=result.skipped_rows)
    elapsed = time.perf_counter() - start

    logger.info(f"processed file: {session.path_of('processed').resolve()}")
    summary_line = render_summary_line(result, elapsed)
    # log_summary adds the "SUMMARY " label itself
    log_summary(summary_line[len("SUMMARY "):])
    return EXIT_SUCCESS_ALL if result.ok else EXIT_PARTIAL_FAILURE


def main(argv: list[str] | None = None) -> int:
    # [] from tests must not fall through to sys.argv
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    logger = setup_logging(debug=args.debug)
    logger.debug("debug mode enabled")

    _load_env_file(Path(".env"))
    try:
        cfg = _resolve_config(args)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    try:
        if args.command == "init":
            ensure_input_files(cfg.rates_path, cfg.payroll_path, cfg.encoding)
            return EXIT_SUCCESS_ALL
        session = PayrollSession(cfg)
        session.startup()
        if args.command == "generate":
            return _generate(session, logger)
        if args.command == "show":
            return _show(session, args.table)
        return _edit(session, args, logger)
    except (BootstrapError, CsvFileError) as e:
        logger.error(f"file: {e}")
        return EXIT_FATAL
    except SessionError as e:
        logger.error(str(e))
        return EXIT_FATAL
