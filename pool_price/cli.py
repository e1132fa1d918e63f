from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Sequence

from .config import Settings
from .errors import MalformedRecordError
from .loaders import read_energy_csv, read_price_csv
from .pipeline import build_report
from .reporting import render_text, report_to_dict

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pool_price",
        description="Monthly, yearly and winter electricity cost from hourly spot prices and consumption",
    )
    parser.add_argument("prices", help="Spot price CSV (DD/MM/YYYY HH:mm:ss;cents)")
    parser.add_argument("consumption", help="Consumption CSV (D.M.YYYY HH:mm;kWh)")
    parser.add_argument("--margin", help="Cents per kWh added to the spot price")
    parser.add_argument("--fixed-price", help="Fixed price in cents per kWh to compare against")
    parser.add_argument("--winter-months", help="Comma list of calendar months in the winter summary")
    parser.add_argument("--skip-price-header", action="store_true", help="The price file starts with a header row")
    parser.add_argument("--skip-consumption-header", action="store_true", help="The consumption file starts with a header row")
    parser.add_argument("--json", action="store_true", help="Emit the report as JSON")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default WARNING)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(message)s")

    try:
        settings = Settings.from_mapping(
            {
                "price_margin": args.margin,
                "fixed_price_reference": args.fixed_price,
                "winter_months": args.winter_months,
            }
        )
    except ValueError as exc:
        logger.error("%s", exc)
        return 2

    try:
        prices = read_price_csv(args.prices, skip_header=args.skip_price_header)
        consumption = read_energy_csv(args.consumption, skip_header=args.skip_consumption_header)
    except MalformedRecordError as exc:
        logger.error("Malformed input: %s", exc)
        return 1
    except OSError as exc:
        logger.error("Could not read input: %s", exc)
        return 1

    report = build_report(prices, consumption, settings)
    if args.json:
        print(json.dumps(report_to_dict(report), indent=2, ensure_ascii=False))
    else:
        print(render_text(report))
    return 0


if __name__ == "__main__":
    sys.exit(main())
