#!/usr/bin/env python3
"""Clean a raw CDC variant proportion CSV into one row per (week, lineage)."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from covidprep import (  # noqa: E402
    LineageLabelTable,
    MalformedValuePolicy,
    VariantFeedProfileLoader,
    VariantRecordNormalizer,
)
from covidprep.storage import DuckDBParquetStorage  # noqa: E402


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Deduplicate, label and normalize the raw CDC variant proportion feed."
    )
    parser.add_argument("--input-csv", required=True, help="Raw feed CSV path")
    parser.add_argument("--output-csv", required=True, help="Clean output CSV path")
    parser.add_argument(
        "--profile",
        default="cdc_variant_proportions",
        help="Feed profile name from config/profiles",
    )
    parser.add_argument(
        "--profile-path",
        default=None,
        help="Optional explicit profile JSON path (overrides --profile)",
    )
    parser.add_argument(
        "--profiles-dir",
        default=None,
        help="Optional custom profile directory",
    )
    parser.add_argument(
        "--labels-csv",
        default=None,
        help="Lineage label CSV (lineage_code,who_label,display_variant). Defaults to the shipped table.",
    )
    parser.add_argument(
        "--malformed",
        default=MalformedValuePolicy.REJECT.value,
        choices=[item.value for item in MalformedValuePolicy],
        help="Fail the run on malformed percentages, or treat them as missing.",
    )
    parser.add_argument("--duckdb-path", default=None, help="Optional DuckDB output path")
    parser.add_argument("--parquet-path", default=None, help="Optional Parquet output path")
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

    if bool(args.duckdb_path) ^ bool(args.parquet_path):
        raise ValueError("Provide both --duckdb-path and --parquet-path, or neither.")

    profile_loader = VariantFeedProfileLoader(args.profiles_dir)
    profile = profile_loader.load(args.profile_path or args.profile)
    labels = (
        LineageLabelTable.from_csv(args.labels_csv)
        if args.labels_csv
        else LineageLabelTable.default()
    )

    normalizer = VariantRecordNormalizer(
        profile=profile,
        labels=labels,
        malformed_policy=args.malformed,
    )
    storage = (
        DuckDBParquetStorage(db_path=args.duckdb_path, parquet_path=args.parquet_path)
        if args.duckdb_path
        else None
    )
    report = normalizer.prepare_csv(
        input_csv=args.input_csv,
        output_csv=args.output_csv,
        storage=storage,
    )

    payload = {
        "profile": profile.name,
        "input_rows": report.input_rows,
        "region_dropped": report.region_dropped,
        "kind_dropped": report.kind_dropped,
        "undated_dropped": report.undated_dropped,
        "superseded_rows": report.superseded_rows,
        "output_rows": report.output_rows,
        "unmatched_lineages": report.unmatched_lineages,
        "value_issues": len(report.issues),
        "output_csv": str(report.output_path),
    }
    print(json.dumps(payload, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
