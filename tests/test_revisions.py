import random
import sys
from pathlib import Path

import pandas as pd

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from covidprep import latest_revisions  # noqa: E402


def _frame(rows: list[tuple[str, str, str | None, str]]) -> pd.DataFrame:
    return pd.DataFrame(
        rows,
        columns=["week_ending", "lineage_code", "revision_timestamp", "pct"],
    )


def test_latest_revision_wins_per_week_and_lineage() -> None:
    frame = _frame(
        [
            ("2022-01-08", "BA.2", "2022-01-10T00:00", "0.0010"),
            ("2022-01-08", "BA.1.1", "2022-01-10T00:00", "0.5000"),
            ("2022-01-08", "BA.2", "2022-01-12T00:00", "0.0011"),
            ("2022-01-15", "BA.2", "2022-01-11T00:00", "0.0040"),
        ]
    )

    latest = latest_revisions(frame)

    assert latest["pct"].tolist() == ["0.5000", "0.0011", "0.0040"]
    assert latest.index.tolist() == [1, 2, 3]


def test_equal_revision_timestamps_keep_first_row_in_input_order() -> None:
    frame = _frame(
        [
            ("2022-01-08", "BA.2", "2022-01-12T00:00", "first"),
            ("2022-01-08", "BA.2", "2022-01-12T00:00", "second"),
            ("2022-01-08", "BA.2", "2022-01-09T00:00", "older"),
        ]
    )

    latest = latest_revisions(frame)

    assert latest["pct"].tolist() == ["first"]


def test_missing_or_unparseable_revision_loses_to_dated_row() -> None:
    frame = _frame(
        [
            ("2022-01-08", "BA.2", None, "undated"),
            ("2022-01-08", "BA.2", "not a time", "garbled"),
            ("2022-01-08", "BA.2", "2021-12-01T00:00", "dated"),
        ]
    )

    latest = latest_revisions(frame)

    assert latest["pct"].tolist() == ["dated"]


def test_output_has_one_row_per_key_with_maximum_revision() -> None:
    rng = random.Random(7)
    weeks = ["2022-01-01", "2022-01-08", "2022-01-15"]
    lineages = ["BA.1.1", "BA.2", "Other"]
    rows = []
    for index in range(60):
        revision = f"2022-02-{rng.randint(1, 9):02d}T{rng.randint(0, 23):02d}:00"
        rows.append((rng.choice(weeks), rng.choice(lineages), revision, str(index)))
    frame = _frame(rows)

    latest = latest_revisions(frame)

    expected: dict[tuple[str, str], pd.Timestamp] = {}
    for week, lineage, revision, _ in rows:
        stamp = pd.Timestamp(revision)
        key = (week, lineage)
        expected[key] = max(expected.get(key, stamp), stamp)

    keys = list(zip(latest["week_ending"], latest["lineage_code"]))
    assert len(keys) == len(set(keys)) == len(expected)
    for week, lineage, revision in zip(
        latest["week_ending"], latest["lineage_code"], latest["revision_timestamp"]
    ):
        assert revision == expected[(week, lineage)]
