"""Lineage-code to WHO/display label lookup and the label join."""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping

import pandas as pd

LOGGER = logging.getLogger(__name__)

LABEL_COLUMNS: tuple[str, ...] = ("lineage_code", "who_label", "display_variant")


@dataclass(frozen=True)
class LineageLabel:
    """Labels reported for one fine-grained lineage code."""

    lineage_code: str
    who_label: str | None
    display_variant: str | None = None

    def __post_init__(self) -> None:
        code = _clean(self.lineage_code)
        if code is None:
            raise ValueError("lineage_code cannot be empty")
        who_label = _clean(self.who_label)
        object.__setattr__(self, "lineage_code", code)
        object.__setattr__(self, "who_label", who_label)
        object.__setattr__(self, "display_variant", _clean(self.display_variant) or who_label)


class LineageLabelTable:
    """Read-only lookup of :class:`LineageLabel` keyed by lineage code."""

    def __init__(self, labels: Iterable[LineageLabel]) -> None:
        by_code: dict[str, LineageLabel] = {}
        for label in labels:
            if label.lineage_code in by_code:
                raise ValueError(f"Duplicate lineage code in label table: {label.lineage_code}")
            by_code[label.lineage_code] = label
        self._labels: Mapping[str, LineageLabel] = MappingProxyType(by_code)

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> "LineageLabelTable":
        return cls(
            LineageLabel(
                lineage_code=record.get("lineage_code"),
                who_label=record.get("who_label"),
                display_variant=record.get("display_variant"),
            )
            for record in records
        )

    @classmethod
    def from_csv(cls, csv_path: str | Path) -> "LineageLabelTable":
        """Build the table from a CSV with ``lineage_code,who_label,display_variant``.

        ``display_variant`` may be omitted or blank, in which case it falls
        back to ``who_label``.
        """

        path = Path(csv_path)
        with path.open(newline="") as stream:
            reader = csv.DictReader(stream)
            fieldnames = reader.fieldnames or []
            missing = [column for column in ("lineage_code", "who_label") if column not in fieldnames]
            if missing:
                raise KeyError(f"Label table {path} missing columns: {', '.join(missing)}")
            return cls.from_records(list(reader))

    @classmethod
    def default(cls) -> "LineageLabelTable":
        """Load the lineage table shipped in ``config/lineages``."""

        return cls.from_csv(default_labels_path())

    def resolve(self, lineage_code: str | None) -> LineageLabel | None:
        code = _clean(lineage_code)
        if code is None:
            return None
        return self._labels.get(code)

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            [
                {
                    "lineage_code": label.lineage_code,
                    "who_label": label.who_label,
                    "display_variant": label.display_variant,
                }
                for label in self._labels.values()
            ],
            columns=list(LABEL_COLUMNS),
            dtype=object,
        )

    def __contains__(self, lineage_code: object) -> bool:
        return isinstance(lineage_code, str) and self.resolve(lineage_code) is not None

    def __iter__(self) -> Iterator[LineageLabel]:
        return iter(self._labels.values())

    def __len__(self) -> int:
        return len(self._labels)


def attach_labels(frame: pd.DataFrame, labels: LineageLabelTable) -> pd.DataFrame:
    """Left-join WHO and display labels onto ``frame`` by ``lineage_code``.

    Every input row appears exactly once and in order. Codes missing from the
    table keep missing labels; they are logged, not dropped or defaulted.
    """

    if "lineage_code" not in frame.columns:
        raise KeyError("Missing columns: lineage_code")

    base = frame.drop(columns=[c for c in ("who_label", "display_variant") if c in frame.columns])
    base = base.assign(lineage_code=strip_lineage_codes(base["lineage_code"]))
    joined = base.merge(
        labels.to_frame(),
        on="lineage_code",
        how="left",
        validate="many_to_one",
        sort=False,
    )
    # a many_to_one left merge preserves row count and order
    joined.index = base.index

    unmatched = unmatched_lineages(base, labels)
    if unmatched:
        LOGGER.warning(
            "No label for %s lineage code(s): %s",
            len(unmatched),
            ", ".join(unmatched),
        )
    return joined


def unmatched_lineages(frame: pd.DataFrame, labels: LineageLabelTable) -> list[str]:
    """Return the distinct lineage codes in ``frame`` that have no label."""

    codes = strip_lineage_codes(frame["lineage_code"]).dropna()
    return sorted({str(code) for code in codes if labels.resolve(code) is None})


def strip_lineage_codes(codes: pd.Series) -> pd.Series:
    """Trim surrounding whitespace from text codes, leaving missing cells alone."""

    return codes.map(lambda code: code.strip() if isinstance(code, str) else code)


def default_labels_path() -> Path:
    return Path(__file__).resolve().parents[2] / "config" / "lineages" / "cdc_lineage_labels.csv"


def _clean(value: Any) -> str | None:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return None
    cleaned = str(value).strip()
    return cleaned or None
