#!/usr/bin/env python3
"""Write the NYT national case/death series in wide and long layouts."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from covidprep.prep import NYT_MEASURES, CaseSeriesPreparer  # noqa: E402


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reshape a daily case series to long format.")
    parser.add_argument("--input-csv", required=True, help="Raw NYT series CSV path")
    parser.add_argument("--wide-csv", required=True, help="Selected wide output CSV path")
    parser.add_argument("--long-csv", required=True, help="Long output CSV path")
    parser.add_argument("--date-column", default="date", help="Identifier column name")
    parser.add_argument(
        "--measures",
        default=",".join(NYT_MEASURES),
        help="Comma-separated value columns to keep and stack.",
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

    measures = [item.strip() for item in args.measures.split(",") if item.strip()]
    report = CaseSeriesPreparer(
        date_column=args.date_column,
        measures=measures,
    ).prepare_csv(
        input_csv=args.input_csv,
        wide_csv=args.wide_csv,
        long_csv=args.long_csv,
    )

    payload = {
        "input_rows": report.input_rows,
        "wide_rows": report.wide_rows,
        "long_rows": report.long_rows,
        "wide_csv": str(report.wide_path),
        "long_csv": str(report.long_path),
    }
    print(json.dumps(payload, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
