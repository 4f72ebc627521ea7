"""Command line entry point: replay a transaction feed and print balances."""

import argparse
import sys
from typing import List, Optional

from .config import LOG_FORMATS, LOG_LEVELS, get_config
from .logging_config import get_logger, log_action, setup_logging
from .processor import TransactionProcessor, write_snapshot


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="core-payments",
        description="Process a CSV transaction feed and write client balances as CSV to stdout."
    )
    parser.add_argument("input", help="path to the transactions CSV file")
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, default=None,
                        help="default: PAYMENTS_LOG_LEVEL or WARNING")
    parser.add_argument("--log-format", choices=LOG_FORMATS, default=None)
    args = parser.parse_args(argv)
    
    config = get_config()
    setup_logging(
        level=args.log_level or config.log_level,
        fmt=args.log_format or config.log_format,
        log_file=config.log_file
    )
    logger = get_logger("payments.cli")
    
    processor = TransactionProcessor(config=config)
    try:
        snapshot = processor.process_file(args.input)
    except (OSError, UnicodeDecodeError) as exc:
        log_action(logger, "error", f"Cannot read {args.input}: {exc}", action="read_input")
        return 1
    
    try:
        write_snapshot(snapshot, sys.stdout)
        sys.stdout.flush()
    except OSError as exc:
        log_action(logger, "error", f"Cannot write report: {exc}", action="write_output")
        return 1
    return 0
