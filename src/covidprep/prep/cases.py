"""Prepare the NYT national case/death series in wide and long layouts."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

import pandas as pd

from covidprep.reshape import wide_to_long

LOGGER = logging.getLogger(__name__)

NYT_MEASURES: tuple[str, ...] = (
    "cases",
    "cases_avg7_pc",
    "deaths",
    "deaths_avg7_pc",
)


@dataclass
class CaseSeriesReport:
    """Summary of one case series preparation run."""

    input_rows: int
    wide_rows: int
    long_rows: int
    wide_path: Path
    long_path: Path


class CaseSeriesPreparer:
    """Select the reporting measures from a raw daily series and stack them."""

    def __init__(
        self,
        *,
        date_column: str = "date",
        measures: Sequence[str] = NYT_MEASURES,
        names_to: str = "measure",
        values_to: str = "value",
    ) -> None:
        self.date_column = date_column
        self.measures = tuple(measures)
        self.names_to = names_to
        self.values_to = values_to

    def prepare(self, frame: pd.DataFrame) -> tuple[pd.DataFrame, pd.DataFrame]:
        """Return ``(wide, long)`` tables for ``frame``."""

        columns = [self.date_column, *self.measures]
        missing = [column for column in columns if column not in frame.columns]
        if missing:
            raise KeyError(f"Case series missing columns: {', '.join(missing)}")

        wide = frame.loc[:, columns].copy()
        wide[self.date_column] = pd.to_datetime(wide[self.date_column], format="mixed").dt.date
        wide = wide.reset_index(drop=True)

        long = wide_to_long(
            wide,
            self.date_column,
            self.measures,
            names_to=self.names_to,
            values_to=self.values_to,
        )
        return wide, long

    def prepare_csv(
        self,
        *,
        input_csv: str | Path,
        wide_csv: str | Path,
        long_csv: str | Path,
    ) -> CaseSeriesReport:
        """Write the selected wide series and its long form."""

        wide_path = Path(wide_csv)
        long_path = Path(long_csv)
        for path in (wide_path, long_path):
            path.parent.mkdir(parents=True, exist_ok=True)

        raw = pd.read_csv(input_csv)
        wide, long = self.prepare(raw)
        wide.to_csv(wide_path, index=False)
        long.to_csv(long_path, index=False)

        LOGGER.info("Wrote %s wide and %s long case row(s)", len(wide), len(long))
        return CaseSeriesReport(
            input_rows=len(raw),
            wide_rows=len(wide),
            long_rows=len(long),
            wide_path=wide_path,
            long_path=long_path,
        )
