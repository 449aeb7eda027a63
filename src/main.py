import argparse
import logging
import sys
from typing import List, Optional

from errors import InvalidCliArgument, PaymentError
from payments_engine import PaymentsEngine
from report import write_report

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="payments-ledger",
        description="Apply a CSV stream of transactions and print the final client balances.",
    )
    parser.add_argument("input", nargs="?", help="Path to the transactions CSV file")
    parser.add_argument(
        "--skip-malformed",
        action="store_true",
        help="Log and skip rows that cannot be parsed instead of stopping",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=LOG_LEVELS,
        type=str.upper,
        help="Diagnostics level written to stderr (default: WARNING)",
    )
    return parser


def run(input_path: Optional[str], skip_malformed: bool = False) -> int:
    if not input_path:
        raise InvalidCliArgument("CSV filename missing in cli argument")

    engine = PaymentsEngine(skip_malformed=skip_malformed)
    engine.process_file(input_path)
    write_report(engine.iter_accounts(), sys.stdout)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        return run(args.input, skip_malformed=args.skip_malformed)
    except PaymentError as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
