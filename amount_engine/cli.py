"""
============================================================================
Amount Engine - Command Line
============================================================================

USAGE
-----
    python -m amount_engine add 0.1 0.2              # 0.3
    python -m amount_engine divide 10 3              # 3.3333333
    python -m amount_engine divide 10 3 --precision 2
    python -m amount_engine fee-total 100 1.5        # 101.5
    python -m amount_engine fee-amount 100 1.5       # 1.5
    python -m amount_engine to-units 1.5             # 15000000
    python -m amount_engine from-units 15000000      # 1.5

Environment (or a .env file in the working directory) supplies
AMOUNT_ENGINE_DIVISION_PRECISION and AMOUNT_ENGINE_FEE_PRECISION.

--verbose may be given before or after the command.

Exit codes: 0 on success, 1 on an engine error (message on stderr),
2 on a usage error such as --precision outside 0..18.

============================================================================
"""

from typing import List, Optional
import argparse
import logging
import sys

from dotenv import find_dotenv, load_dotenv

from amount_engine.config import MAX_CONFIG_PRECISION
from amount_engine.decimal_engine import get_decimal_engine
from amount_engine.errors import AmountEngineError
from amount_engine.ledger_units import from_ledger_units, to_ledger_units

logger = logging.getLogger(__name__)


# Two-operand commands and the engine method each one calls
BINARY_COMMANDS = {
    "add": "add",
    "subtract": "subtract",
    "multiply": "multiply",
    "compare": "compare",
    "fee-total": "apply_fee_total",
    "fee-amount": "apply_fee_amount",
}


def _precision(text: str) -> int:
    """argparse type for --precision: an int in 0..MAX_CONFIG_PRECISION."""
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {text!r}")
    if not 0 <= value <= MAX_CONFIG_PRECISION:
        raise argparse.ArgumentTypeError(
            f"must be between 0 and {MAX_CONFIG_PRECISION}, got {value}"
        )
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="amount-engine",
        description="Exact fixed-point arithmetic on ledger amounts (7 fractional digits)"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log every operation at DEBUG level"
    )

    # Also accepted after the command; SUPPRESS keeps a flag given before it
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS,
        help="Log every operation at DEBUG level"
    )

    commands = parser.add_subparsers(dest="command", required=True)

    for name in BINARY_COMMANDS:
        sub = commands.add_parser(name, help=f"{name} two amounts", parents=[common])
        sub.add_argument("a", help="First operand")
        sub.add_argument("b", help="Second operand")

    divide = commands.add_parser("divide", help="Divide, truncating toward zero", parents=[common])
    divide.add_argument("a", help="Dividend")
    divide.add_argument("b", help="Divisor")
    divide.add_argument(
        "--precision",
        type=_precision,
        default=None,
        help="Fractional digits to keep, 0 to 18 (default: AMOUNT_ENGINE_DIVISION_PRECISION or 7)"
    )

    normalize = commands.add_parser("normalize", help="Print the canonical form", parents=[common])
    normalize.add_argument("value", help="Amount")

    to_units = commands.add_parser("to-units", help="Amount to 64-bit ledger units", parents=[common])
    to_units.add_argument("value", help="Amount")

    from_units = commands.add_parser("from-units", help="64-bit ledger units to amount", parents=[common])
    from_units.add_argument("units", type=int, help="Integer ledger units")

    return parser


def run(args: argparse.Namespace) -> str:
    """Execute a parsed command and return the text to print."""
    engine = get_decimal_engine()

    if args.command in BINARY_COMMANDS:
        method = getattr(engine, BINARY_COMMANDS[args.command])
        return str(method(args.a, args.b))
    if args.command == "divide":
        return engine.divide(args.a, args.b, precision=args.precision)
    if args.command == "normalize":
        return engine.normalize(args.value)
    if args.command == "to-units":
        return str(to_ledger_units(args.value))
    if args.command == "from-units":
        return from_ledger_units(args.units)

    raise ValueError(f"unknown command: {args.command}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    # Load environment
    load_dotenv(find_dotenv(usecwd=True))

    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s | %(levelname)s | %(name)s | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    try:
        print(run(args))
    except AmountEngineError as e:
        print(str(e), file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
