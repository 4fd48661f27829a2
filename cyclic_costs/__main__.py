# MIT License
"""
Command-line entry point for comparing scenarios.

Usage:
    python -m cyclic_costs
    python -m cyclic_costs Base HighEnergyPrices --energy-cost 75
    python -m cyclic_costs --catalog scenarios.json --csv results.csv
"""

import argparse
import logging
import sys
from typing import List, Optional

from .aggregate import compare_scenarios
from .errors import ConfigError, ValidationError
from .logging_config import setup_logging
from .scenarios import load_scenario_catalog


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m cyclic_costs",
        description="Relax the Production/Logistics cost model for one or more scenarios.",
    )
    parser.add_argument("scenarios", nargs="*", help="Scenario names (default: whole catalog)")
    parser.add_argument("--catalog", help="JSON scenario catalog to use instead of the built-in one")
    parser.add_argument("--material-cost", type=float, dest="materialCost", help="Base material cost")
    parser.add_argument("--energy-cost", type=float, dest="energyCost", help="Base energy cost")
    parser.add_argument("--transport-cost", type=float, dest="transportCost", help="Base transport cost")
    parser.add_argument("--max-iterations", type=int, default=100)
    parser.add_argument("--threshold", type=float, default=0.001)
    parser.add_argument("--csv", help="Also write the comparison table to this CSV file")
    parser.add_argument("--debug", action="store_true", help="Log every relaxation pass")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.debug else logging.WARNING)

    inputs = {
        name: getattr(args, name)
        for name in ("materialCost", "energyCost", "transportCost")
        if getattr(args, name) is not None
    }
    try:
        catalog = load_scenario_catalog(args.catalog) if args.catalog else None
        df = compare_scenarios(
            args.scenarios or None,
            inputs=inputs,
            catalog=catalog,
            max_iterations=args.max_iterations,
            threshold=args.threshold,
            debug=args.debug,
        )
    except (ConfigError, ValidationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(df.to_string(float_format=lambda v: f"{v:.3f}"))
    if args.csv:
        df.to_csv(args.csv)
        print(f"\nResults saved to: {args.csv}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
