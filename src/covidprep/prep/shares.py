"""Weekly variant share totals from a cleaned variant table."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

import pandas as pd

from covidprep.config import OTHER_LINEAGE
from covidprep.reshape import long_to_wide
from covidprep.revisions import parse_timestamps

LOGGER = logging.getLogger(__name__)

DEFAULT_START_WEEK = "2021-12-04"
SHARE_COLUMNS: tuple[str, ...] = ("week", "variant", "pct")


@dataclass
class ShareSummaryReport:
    input_rows: int
    long_rows: int
    wide_rows: int
    variants: list[str]
    long_path: Path
    wide_path: Path


def summarise_variant_shares(
    frame: pd.DataFrame,
    *,
    variant_column: str = "display_variant",
    week_column: str = "week",
    value_column: str = "pct",
    region_column: str = "region",
    start_week: str | None = DEFAULT_START_WEEK,
    exclude: Iterable[str] = (OTHER_LINEAGE,),
) -> pd.DataFrame:
    """Sum percentages per (week, variant).

    Rows whose variant is excluded or unlabelled are dropped, as are weeks
    before ``start_week``. Missing percentages count as zero in the sum.
    Output columns are ``week, variant, pct`` sorted by week then variant.
    A table holding more than one region is summed per region instead and
    gains a leading ``region`` column.
    """

    missing = [c for c in (variant_column, week_column, value_column) if c not in frame.columns]
    if missing:
        raise KeyError(f"Variant table missing columns: {', '.join(missing)}")

    weeks = parse_timestamps(frame[week_column])
    keep = frame[variant_column].notna() & ~frame[variant_column].isin(list(exclude))
    if start_week is not None:
        keep &= weeks >= pd.Timestamp(start_week)

    selected = pd.DataFrame(
        {
            "week": weeks[keep].dt.date,
            "variant": frame.loc[keep, variant_column],
            "pct": pd.to_numeric(frame.loc[keep, value_column]),
        }
    )
    columns = list(SHARE_COLUMNS)
    if region_column in frame.columns and frame[region_column].nunique(dropna=False) > 1:
        selected.insert(0, "region", frame.loc[keep, region_column].astype(str))
        columns.insert(0, "region")

    summary = selected.groupby(columns[:-1], as_index=False)["pct"].sum()
    return summary.loc[:, columns]


def pivot_variant_shares(long: pd.DataFrame) -> pd.DataFrame:
    """Spread a share summary to one column per variant, per region when present."""

    if "region" not in long.columns:
        return long_to_wide(long, "week", names_from="variant", values_from="pct")

    tables = []
    for region, group in long.groupby("region", sort=False):
        wide = long_to_wide(
            group.drop(columns="region"), "week", names_from="variant", values_from="pct"
        )
        wide.insert(0, "region", region)
        tables.append(wide)
    if not tables:
        return pd.DataFrame(columns=["region", "week"])
    return pd.concat(tables, ignore_index=True)


class VariantShareSummariser:
    """Write weekly variant share totals in long and wide layouts."""

    def __init__(
        self,
        *,
        variant_column: str = "display_variant",
        start_week: str | None = DEFAULT_START_WEEK,
    ) -> None:
        self.variant_column = variant_column
        self.start_week = start_week

    def prepare_csv(
        self,
        *,
        input_csv: str | Path,
        long_csv: str | Path,
        wide_csv: str | Path,
    ) -> ShareSummaryReport:
        long_path = Path(long_csv)
        wide_path = Path(wide_csv)
        for path in (long_path, wide_path):
            path.parent.mkdir(parents=True, exist_ok=True)

        clean = pd.read_csv(input_csv)
        long = summarise_variant_shares(
            clean,
            variant_column=self.variant_column,
            start_week=self.start_week,
        )
        wide = pivot_variant_shares(long)

        long.to_csv(long_path, index=False)
        wide.to_csv(wide_path, index=False)

        variants = [str(column) for column in wide.columns if column not in ("region", "week")]
        LOGGER.info("Summarised %s week(s) across %s variant(s)", len(wide), len(variants))
        return ShareSummaryReport(
            input_rows=len(clean),
            long_rows=len(long),
            wide_rows=len(wide),
            variants=variants,
            long_path=long_path,
            wide_path=wide_path,
        )
