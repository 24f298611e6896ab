import csv
import datetime as dt
import sys
from pathlib import Path

import pandas as pd
import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from covidprep.prep import NYT_MEASURES, CaseSeriesPreparer  # noqa: E402

NYT_FIELDS = ["date", "geoid", "cases", "cases_avg7_pc", "deaths", "deaths_avg7_pc"]


def _write_nyt_csv(path: Path) -> None:
    with path.open("w", newline="") as stream:
        writer = csv.DictWriter(stream, fieldnames=NYT_FIELDS)
        writer.writeheader()
        writer.writerow(
            {
                "date": "2021-01-01",
                "geoid": "USA",
                "cases": "150000",
                "cases_avg7_pc": "59.1",
                "deaths": "2500",
                "deaths_avg7_pc": "0.8",
            }
        )
        writer.writerow(
            {
                "date": "2021-01-02",
                "geoid": "USA",
                "cases": "160000",
                "cases_avg7_pc": "60.3",
                "deaths": "2600",
                "deaths_avg7_pc": "0.81",
            }
        )


def test_prepare_selects_measures_and_stacks_them() -> None:
    raw = pd.DataFrame(
        {
            "date": ["2021-01-01"],
            "geoid": ["USA"],
            "cases": [150000],
            "cases_avg7_pc": [59.1],
            "deaths": [2500],
            "deaths_avg7_pc": [0.8],
        }
    )

    wide, long = CaseSeriesPreparer().prepare(raw)

    assert list(wide.columns) == ["date", *NYT_MEASURES]
    assert wide.loc[0, "date"] == dt.date(2021, 1, 1)
    assert long["measure"].tolist() == list(NYT_MEASURES)
    assert long["value"].tolist() == [150000, 59.1, 2500, 0.8]


def test_prepare_requires_selected_columns() -> None:
    raw = pd.DataFrame({"date": ["2021-01-01"], "cases": [1]})

    with pytest.raises(KeyError, match="deaths"):
        CaseSeriesPreparer().prepare(raw)


def test_prepare_csv_writes_wide_and_long_tables(tmp_path: Path) -> None:
    input_csv = tmp_path / "nyt_raw.csv"
    wide_csv = tmp_path / "nyt_wide.csv"
    long_csv = tmp_path / "nested" / "nyt_long.csv"
    _write_nyt_csv(input_csv)

    report = CaseSeriesPreparer().prepare_csv(
        input_csv=input_csv,
        wide_csv=wide_csv,
        long_csv=long_csv,
    )

    assert report.input_rows == 2
    assert report.wide_rows == 2
    assert report.long_rows == 8

    with wide_csv.open() as stream:
        wide_rows = list(csv.DictReader(stream))
    assert list(wide_rows[0].keys()) == ["date", *NYT_MEASURES]

    with long_csv.open() as stream:
        long_rows = list(csv.DictReader(stream))
    assert [row["date"] for row in long_rows[:5]] == ["2021-01-01"] * 4 + ["2021-01-02"]
    assert long_rows[5]["measure"] == "cases_avg7_pc"
    assert float(long_rows[5]["value"]) == 60.3
