#!/usr/bin/env python3
"""Sum cleaned variant percentages per week and variant, in long and wide layouts."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from covidprep.prep import DEFAULT_START_WEEK, VariantShareSummariser  # noqa: E402


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Summarise weekly variant shares.")
    parser.add_argument("--input-csv", required=True, help="Clean variant CSV path")
    parser.add_argument("--long-csv", required=True, help="Long summary output path")
    parser.add_argument("--wide-csv", required=True, help="Wide summary output path")
    parser.add_argument(
        "--variant-column",
        default="display_variant",
        help="Column used as the variant grouping (display_variant, who_label or lineage_code).",
    )
    parser.add_argument(
        "--start-week",
        default=DEFAULT_START_WEEK,
        help="Earliest week to keep (YYYY-MM-DD). Use 'all' to keep every week.",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level.",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )

    start_week = None if args.start_week.lower() == "all" else args.start_week
    report = VariantShareSummariser(
        variant_column=args.variant_column,
        start_week=start_week,
    ).prepare_csv(
        input_csv=args.input_csv,
        long_csv=args.long_csv,
        wide_csv=args.wide_csv,
    )

    payload = {
        "input_rows": report.input_rows,
        "long_rows": report.long_rows,
        "wide_rows": report.wide_rows,
        "variants": report.variants,
        "long_csv": str(report.long_path),
        "wide_csv": str(report.wide_path),
    }
    print(json.dumps(payload, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
