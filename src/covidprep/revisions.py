"""Collapse successive revisions of the same estimate."""

from __future__ import annotations

from typing import Sequence

import pandas as pd

from covidprep.config import REVISION_KEY

_ORDER_COLUMN = "__input_order"


def latest_revisions(
    frame: pd.DataFrame,
    key: Sequence[str] = REVISION_KEY,
    revision_column: str = "revision_timestamp",
) -> pd.DataFrame:
    """Keep the most recent revision for every ``key``.

    Among rows that share a key and the latest revision timestamp, the row
    that came first in the input wins. Rows whose revision timestamp is
    missing or unparseable lose to any dated row. Survivors keep input order
    and their original index labels.
    """

    key = list(key)
    missing = [column for column in (*key, revision_column) if column not in frame.columns]
    if missing:
        raise KeyError(f"Missing columns: {', '.join(missing)}")

    if frame.empty:
        return frame.copy()

    revision = parse_timestamps(frame[revision_column])
    ranked = frame.assign(**{_ORDER_COLUMN: range(len(frame))})
    ranked = ranked.assign(**{revision_column: revision})
    ranked = ranked.sort_values(
        [revision_column, _ORDER_COLUMN],
        ascending=[False, True],
        na_position="last",
    )
    latest = ranked.drop_duplicates(subset=key, keep="first")
    latest = latest.sort_values(_ORDER_COLUMN, kind="stable")
    return latest.drop(columns=_ORDER_COLUMN)


def parse_timestamps(values: pd.Series) -> pd.Series:
    """Parse ISO or Socrata CSV-export timestamps; unparseable values become NaT."""

    return pd.to_datetime(values, errors="coerce", format="mixed")
