"""Clean the raw CDC variant proportion feed into one row per (week, lineage)."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import pandas as pd

from covidprep.config import (
    CLEAN_VARIANT_COLUMNS,
    PERCENT_FIELDS,
    RAW_VARIANT_FIELDS,
    REVISION_KEY,
    WEEKLY_INTERVAL,
    WEIGHTED_MODEL,
    MalformedValuePolicy,
)
from covidprep.lineages import (
    LineageLabelTable,
    attach_labels,
    strip_lineage_codes,
    unmatched_lineages,
)
from covidprep.percentages import normalize_percentage_column
from covidprep.prep.profiles import VariantFeedProfile
from covidprep.quality import ValueIssue
from covidprep.revisions import latest_revisions, parse_timestamps
from covidprep.storage.base import TableStorage

LOGGER = logging.getLogger(__name__)


@dataclass
class VariantNormalizationReport:
    """Row accounting for one normalization run."""

    input_rows: int
    region_dropped: int
    kind_dropped: int
    undated_dropped: int
    superseded_rows: int
    output_rows: int
    unmatched_lineages: list[str] = field(default_factory=list)
    issues: list[ValueIssue] = field(default_factory=list)
    output_path: Path | None = None


@dataclass
class VariantNormalizationResult:
    frame: pd.DataFrame
    report: VariantNormalizationReport


def select_feed_columns(frame: pd.DataFrame, profile: VariantFeedProfile) -> pd.DataFrame:
    """Rename raw feed columns to canonical field names and drop the rest."""

    renames: dict[str, str] = {}
    missing: list[str] = []
    for field_name in RAW_VARIANT_FIELDS:
        source = next(
            (column for column in profile.candidates_for(field_name) if column in frame.columns),
            None,
        )
        if source is None:
            missing.append(field_name)
            continue
        renames[source] = field_name

    if missing:
        raise KeyError(
            f"Feed profile '{profile.name}' found no column for: {', '.join(missing)}"
        )

    return frame.loc[:, list(renames)].rename(columns=renames)


def filter_region(frame: pd.DataFrame, region: str | None) -> pd.DataFrame:
    """Keep rows for ``region``; ``None`` keeps every region."""

    if region is None:
        return frame.copy()
    return frame.loc[frame["region"] == region].copy()


def filter_weighted_weekly(
    frame: pd.DataFrame,
    model_kind: str = WEIGHTED_MODEL,
    interval_kind: str = WEEKLY_INTERVAL,
) -> pd.DataFrame:
    """Keep only weighted (non-nowcast) weekly estimates.

    This is selection, not validation: rows with any other flag value,
    including unexpected or missing ones, are dropped without error.
    """

    keep = (frame["model_kind"] == model_kind) & (frame["interval_kind"] == interval_kind)
    return frame.loc[keep].copy()


class VariantRecordNormalizer:
    """Turn revision-laden raw variant records into clean labelled estimates.

    Stages run in a fixed order: column selection, region filter,
    weighted/weekly filter, latest revision per (week, lineage) within a
    region, label join,
    then percentage normalization of ``pct``, ``pct_ci_lo`` and ``pct_ci_hi``.
    """

    def __init__(
        self,
        *,
        profile: VariantFeedProfile,
        labels: LineageLabelTable,
        malformed_policy: MalformedValuePolicy | str = MalformedValuePolicy.REJECT,
    ) -> None:
        self.profile = profile
        self.labels = labels
        self.malformed_policy = MalformedValuePolicy(malformed_policy)

    @property
    def revision_key(self) -> tuple[str, ...]:
        """Columns identifying one estimate; ``region`` joins them when every region is kept."""

        if self.profile.region is None:
            return ("region", *REVISION_KEY)
        return REVISION_KEY

    def normalize(self, frame: pd.DataFrame) -> VariantNormalizationResult:
        selected = select_feed_columns(frame, self.profile)
        regional = filter_region(selected, self.profile.region)
        weekly = filter_weighted_weekly(
            regional,
            model_kind=self.profile.model_kind,
            interval_kind=self.profile.interval_kind,
        )

        weeks = parse_timestamps(weekly["week_ending"]).dt.normalize()
        dated = weekly.assign(
            week_ending=weeks,
            lineage_code=strip_lineage_codes(weekly["lineage_code"]),
        ).loc[weeks.notna()]
        if len(dated) < len(weekly):
            LOGGER.warning("Dropped %s row(s) with unparseable week_ending", len(weekly) - len(dated))

        latest = latest_revisions(dated, key=self.revision_key)
        labelled = attach_labels(latest, self.labels)

        issues: list[ValueIssue] = []
        for field_name in PERCENT_FIELDS:
            labelled[field_name], field_issues = normalize_percentage_column(
                labelled[field_name],
                field_name=field_name,
                policy=self.malformed_policy,
                null_token=self.profile.null_token,
            )
            issues.extend(field_issues)

        clean = labelled.assign(week=labelled["week_ending"].dt.date)
        clean = clean.loc[:, list(CLEAN_VARIANT_COLUMNS)].reset_index(drop=True)

        report = VariantNormalizationReport(
            input_rows=len(frame),
            region_dropped=len(selected) - len(regional),
            kind_dropped=len(regional) - len(weekly),
            undated_dropped=len(weekly) - len(dated),
            superseded_rows=len(dated) - len(latest),
            output_rows=len(clean),
            unmatched_lineages=unmatched_lineages(latest, self.labels),
            issues=issues,
        )
        LOGGER.info(
            "Normalized %s raw row(s) into %s clean row(s) (%s superseded revision(s))",
            report.input_rows,
            report.output_rows,
            report.superseded_rows,
        )
        return VariantNormalizationResult(frame=clean, report=report)

    def prepare_csv(
        self,
        *,
        input_csv: str | Path,
        output_csv: str | Path,
        storage: TableStorage | None = None,
    ) -> VariantNormalizationReport:
        """Clean one raw feed CSV into the clean variant CSV schema.

        When ``storage`` is given the clean table is persisted there as well.
        """

        input_path = Path(input_csv)
        output_path = Path(output_csv)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        raw = read_raw_feed(input_path)
        result = self.normalize(raw)
        result.frame.to_csv(output_path, index=False)
        if storage is not None:
            storage.persist(result.frame)

        result.report.output_path = output_path
        return result.report


def read_raw_feed(path: str | Path) -> pd.DataFrame:
    """Read a raw feed CSV as text, keeping ``NULL`` tokens and blanks literal."""

    return pd.read_csv(path, dtype=str, keep_default_na=False)
