import sys
from pathlib import Path

import pandas as pd
import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from covidprep import DuplicatePolicy, long_to_wide, wide_to_long  # noqa: E402


def _case_series() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "date": ["2020-03-01", "2020-03-02", "2020-03-03"],
            "cases": [10, 12, 15],
            "deaths": [1, 0, 2],
            "cases_avg7_pc": [0.5, 0.6, 0.75],
        }
    )


def test_wide_to_long_emits_one_row_per_cell_in_row_major_order() -> None:
    wide = _case_series()

    long = wide_to_long(wide, "date")

    assert list(long.columns) == ["date", "measure", "value"]
    assert len(long) == len(wide) * (len(wide.columns) - 1)
    assert long["date"].tolist()[:4] == ["2020-03-01"] * 3 + ["2020-03-02"]
    assert long["measure"].tolist() == ["cases", "deaths", "cases_avg7_pc"] * 3
    assert long["value"].tolist() == [10, 1, 0.5, 12, 0, 0.6, 15, 2, 0.75]


def test_wide_to_long_follows_positional_row_order_not_index_labels() -> None:
    wide = _case_series().set_axis([30, 10, 20])

    long = wide_to_long(wide, "date", ["deaths"], names_to="name", values_to="count")

    assert list(long.columns) == ["date", "name", "count"]
    assert long["date"].tolist() == ["2020-03-01", "2020-03-02", "2020-03-03"]
    assert long["count"].tolist() == [1, 0, 2]


def test_wide_to_long_rejects_unknown_value_columns() -> None:
    with pytest.raises(KeyError, match="hospitalized"):
        wide_to_long(_case_series(), "date", ["cases", "hospitalized"])


def test_long_to_wide_round_trips_wide_table() -> None:
    wide = _case_series()

    restored = long_to_wide(wide_to_long(wide, "date"), "date")

    pd.testing.assert_frame_equal(restored, wide, check_dtype=False)


def test_long_to_wide_keeps_first_appearance_order_and_fills_gaps() -> None:
    long = pd.DataFrame(
        {
            "date": ["d2", "d2", "d1"],
            "measure": ["zeta", "alpha", "zeta"],
            "value": [1.0, 2.0, 3.0],
        }
    )

    wide = long_to_wide(long, "date")

    assert list(wide.columns) == ["date", "zeta", "alpha"]
    assert wide["date"].tolist() == ["d2", "d1"]
    assert wide.loc[1, "zeta"] == 3.0
    assert pd.isna(wide.loc[1, "alpha"])


def test_long_to_wide_duplicate_pairs_raise_by_default() -> None:
    long = pd.DataFrame(
        {
            "date": ["d1", "d1"],
            "measure": ["cases", "cases"],
            "value": [1, 2],
        }
    )

    with pytest.raises(ValueError, match="Duplicate"):
        long_to_wide(long, "date")


def test_long_to_wide_last_write_wins_when_requested() -> None:
    long = pd.DataFrame(
        {
            "date": ["d1", "d1", "d1"],
            "measure": ["cases", "deaths", "cases"],
            "value": [1, 5, 2],
        }
    )

    wide = long_to_wide(long, "date", duplicates=DuplicatePolicy.LAST)

    assert wide.loc[0, "cases"] == 2
    assert wide.loc[0, "deaths"] == 5
