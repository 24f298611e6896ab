"""Wide/long reshaping for identifier-keyed tables."""

from __future__ import annotations

from typing import Iterable

import pandas as pd

from covidprep.config import DuplicatePolicy


def wide_to_long(
    frame: pd.DataFrame,
    id_column: str,
    value_columns: Iterable[str] | None = None,
    *,
    names_to: str = "measure",
    values_to: str = "value",
) -> pd.DataFrame:
    """Stack value columns into ``(id_column, names_to, values_to)`` rows.

    Each input row yields one output row per value column. Output follows the
    input row order and, within a row, the order of ``value_columns``.
    ``value_columns=None`` stacks every column except ``id_column``.
    """

    _require_columns(frame, [id_column])
    if value_columns is None:
        columns = [column for column in frame.columns if column != id_column]
    else:
        columns = list(value_columns)
        _require_columns(frame, columns)
    if not columns:
        raise ValueError("wide_to_long needs at least one value column")

    positional = frame.reset_index(drop=True)
    stacked = positional.melt(
        id_vars=[id_column],
        value_vars=columns,
        var_name=names_to,
        value_name=values_to,
        ignore_index=False,
    )
    # melt is column-major; a stable index sort restores row-major order
    return stacked.sort_index(kind="stable").reset_index(drop=True)


def long_to_wide(
    frame: pd.DataFrame,
    id_column: str,
    names_from: str = "measure",
    values_from: str = "value",
    *,
    duplicates: DuplicatePolicy | str = DuplicatePolicy.ERROR,
) -> pd.DataFrame:
    """Spread ``(id, measure, value)`` rows into one column per measure.

    Rows and columns appear in first-appearance order. An absent
    ``(id, measure)`` pair becomes a missing cell. Repeated pairs raise
    ``ValueError`` unless ``duplicates="last"``, in which case the last row wins.
    """

    policy = DuplicatePolicy(duplicates)
    _require_columns(frame, [id_column, names_from, values_from])

    pair = [id_column, names_from]
    repeated = frame.duplicated(subset=pair, keep=False)
    if repeated.any():
        if policy is DuplicatePolicy.ERROR:
            examples = frame.loc[repeated, pair].drop_duplicates().head(5)
            listed = ", ".join(
                f"({row[id_column]!r}, {row[names_from]!r})"
                for row in examples.to_dict(orient="records")
            )
            raise ValueError(f"Duplicate ({id_column}, {names_from}) pairs: {listed}")
        frame = frame.drop_duplicates(subset=pair, keep="last")

    ids = pd.Index(pd.unique(frame[id_column]), name=id_column)
    measures = pd.Index(pd.unique(frame[names_from]))

    spread = frame.pivot(index=id_column, columns=names_from, values=values_from)
    spread = spread.reindex(index=ids, columns=measures)
    spread.columns.name = None
    return spread.reset_index()


def _require_columns(frame: pd.DataFrame, columns: Iterable[str]) -> None:
    missing = [column for column in columns if column not in frame.columns]
    if missing:
        raise KeyError(f"Missing columns: {', '.join(map(str, missing))}")
