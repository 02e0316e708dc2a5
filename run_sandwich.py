#!/usr/bin/env python3
"""
Sandwich calculator CLI.

Finds the frontrun size that pushes a pending victim trade down to its
minimum output and prints the simulated frontrun / victim / backrun legs.

Usage:
    python3 run_sandwich.py --amount-in 1.5 --min-recv 2900000000 --config configs/sandwich.yaml
    python3 run_sandwich.py --amount-in 0.000000000000001 --min-recv 900 --reserves 1000000 1000000
"""

import argparse
import logging
import random
import sys
from dataclasses import replace
from typing import List, Optional

from dotenv import load_dotenv

import logging_config
from dex.numeric import format_units, parse_units
from dex.runner import SandwichRunner
from dex.types import PoolState
from sandwich_arbitrage.config_loader import get_default_config, load_config
from sandwich_arbitrage.exceptions import SandwichArbitrageError

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NO_SANDWICH = 2


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Uniswap V2 sandwich calculator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Live reserves from the configured pair
  python3 run_sandwich.py --config configs/sandwich.yaml --amount-in 1.5 --min-recv 2900000000

  # Offline, with explicit reserves (raw base units)
  python3 run_sandwich.py --amount-in 0.000000000000001 --min-recv 900 --reserves 1000000 1000000
        """,
    )

    parser.add_argument("--config", help="Path to config YAML file (defaults if omitted)")
    parser.add_argument(
        "--amount-in",
        required=True,
        help="Victim input in base-token units (e.g. 1.5 for 1.5 WETH)",
    )
    parser.add_argument(
        "--min-recv",
        required=True,
        type=int,
        help="Victim minimum output in raw quote-token base units",
    )
    parser.add_argument(
        "--reserves",
        nargs=2,
        type=int,
        metavar=("RESERVE_IN", "RESERVE_OUT"),
        help="Use these raw reserves instead of reading the pair over RPC",
    )
    parser.add_argument(
        "--predict-base-fee",
        action="store_true",
        help="Also predict the next block base fee (requires RPC)",
    )
    parser.add_argument("--hex", action="store_true", help="Print JSON amounts as hex")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        Exit code (0 for a valid sandwich, 1 for errors, 2 when no frontrun
        keeps the victim above their floor)
    """
    args = parse_args(argv)
    load_dotenv()

    try:
        config = load_config(args.config) if args.config else get_default_config()
    except SandwichArbitrageError as e:
        print(f"❌ Config error: {e}", file=sys.stderr)
        return EXIT_ERROR

    if args.debug:
        logging_config.setup_debug()
    else:
        logging_config.setup(getattr(logging, config.log_level))

    if args.hex:
        config = replace(config, hex_output=True)

    runner = SandwichRunner(config)

    try:
        user_amount_in = parse_units(args.amount_in, config.base_decimals)

        pool = None
        if args.reserves:
            pool = PoolState(reserve_in=args.reserves[0], reserve_out=args.reserves[1])
        else:
            runner.connect()

        outcome = runner.evaluate(user_amount_in, args.min_recv, pool)

        base_fee = None
        if args.predict_base_fee:
            if runner.web3 is None:
                runner.connect()
            base_fee = runner.predict_base_fee(random.Random())
    except SandwichArbitrageError as e:
        print(f"❌ {e}", file=sys.stderr)
        return EXIT_ERROR

    if outcome is None:
        print("No valid sandwich: the victim's minimum output cannot be met")
        return EXIT_NO_SANDWICH

    print(runner.render_report(outcome))
    if base_fee is not None:
        print(f"Next base fee: {format_units(base_fee, 9)} gwei")
    print()
    print(runner.render_json(outcome))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
