"""In-memory record model for cleaned variant rows."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Any, Iterator, Mapping

import pandas as pd

from covidprep.config import CLEAN_VARIANT_COLUMNS


@dataclass(frozen=True)
class CleanVariantRecord:
    """One cleaned (week, lineage) estimate.

    Percentages are on a 0-100 scale; ``None`` marks a missing estimate or an
    unmatched label.
    """

    region: str
    week: dt.date
    lineage_code: str
    who_label: str | None = None
    display_variant: str | None = None
    pct: float | None = None
    pct_ci_lo: float | None = None
    pct_ci_hi: float | None = None

    def key(self) -> tuple[dt.date, str]:
        """Identity of the estimate once revisions are collapsed."""

        return (self.week, self.lineage_code)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "CleanVariantRecord":
        values = {column: _none_if_missing(row.get(column)) for column in CLEAN_VARIANT_COLUMNS}
        week = values["week"]
        if isinstance(week, pd.Timestamp):
            week = week.date()
        elif isinstance(week, str):
            week = dt.date.fromisoformat(week[:10])
        values["week"] = week
        for column in ("pct", "pct_ci_lo", "pct_ci_hi"):
            if values[column] is not None:
                values[column] = float(values[column])
        return cls(**values)


def iter_clean_records(frame: pd.DataFrame) -> Iterator[CleanVariantRecord]:
    """Yield records from a cleaned variant table."""

    for row in frame.to_dict(orient="records"):
        yield CleanVariantRecord.from_row(row)


def _none_if_missing(value: Any) -> Any:
    if value is None:
        return None
    if not isinstance(value, str) and pd.isna(value):
        return None
    return value
