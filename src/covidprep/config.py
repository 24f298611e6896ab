"""Configuration contracts and feed sentinels for covidprep transforms."""

from __future__ import annotations

from enum import Enum


NULL_TOKEN = "NULL"
WEIGHTED_MODEL = "weighted"
WEEKLY_INTERVAL = "weekly"
OTHER_LINEAGE = "Other"
USA_REGION = "USA"

PERCENT_PRECISION = 4


class MalformedValuePolicy(str, Enum):
    """How a percentage field that is neither numeric nor ``NULL`` is handled."""

    REJECT = "reject"
    MISSING = "missing"


class DuplicatePolicy(str, Enum):
    """How long-to-wide reshaping treats repeated (identifier, measure) pairs."""

    ERROR = "error"
    LAST = "last"


RAW_VARIANT_FIELDS: tuple[str, ...] = (
    "region",
    "week_ending",
    "lineage_code",
    "pct",
    "pct_ci_lo",
    "pct_ci_hi",
    "model_kind",
    "interval_kind",
    "revision_timestamp",
)

PERCENT_FIELDS: tuple[str, ...] = (
    "pct",
    "pct_ci_lo",
    "pct_ci_hi",
)

REVISION_KEY: tuple[str, ...] = (
    "week_ending",
    "lineage_code",
)

CLEAN_VARIANT_COLUMNS: tuple[str, ...] = (
    "region",
    "week",
    "lineage_code",
    "who_label",
    "display_variant",
    "pct",
    "pct_ci_lo",
    "pct_ci_hi",
)
