#!/usr/bin/env python3
"""Download the CDC variant proportion feed from data.cdc.gov into a raw CSV."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from covidprep import USA_REGION  # noqa: E402
from covidprep.sources import CDC_DOMAIN, SocrataClient, fetch_variant_proportions  # noqa: E402


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Fetch the raw CDC variant proportion feed.")
    parser.add_argument("--output-csv", required=True, help="Raw feed output CSV path")
    parser.add_argument("--domain", default=CDC_DOMAIN, help="Socrata domain")
    parser.add_argument(
        "--region",
        default=USA_REGION,
        help="usa_or_hhsregion value to keep. Use 'all' for every region.",
    )
    parser.add_argument(
        "--app-token",
        default=os.environ.get("SOCRATA_APP_TOKEN"),
        help="Socrata app token (defaults to $SOCRATA_APP_TOKEN).",
    )
    parser.add_argument("--page-size", type=int, default=50_000, help="Rows per request.")
    parser.add_argument("--timeout", type=int, default=60, help="Request timeout in seconds.")
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

    client = SocrataClient(
        domain=args.domain,
        app_token=args.app_token,
        page_size=args.page_size,
        timeout_s=args.timeout,
    )
    region = None if args.region.lower() == "all" else args.region
    frame = fetch_variant_proportions(client, region=region)

    output_path = Path(args.output_csv)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    frame.to_csv(output_path, index=False)

    payload = {
        "domain": args.domain,
        "region": region,
        "rows": len(frame),
        "output_csv": str(output_path),
    }
    print(json.dumps(payload, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
