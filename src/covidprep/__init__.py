"""Reshaping and cleaning primitives for COVID-19 surveillance tables.

This package covers wide/long reshaping of case series and the CDC variant
proportion cleaning pass: revision deduplication, lineage labelling and
percentage normalization.
"""

from .config import (
    CLEAN_VARIANT_COLUMNS,
    NULL_TOKEN,
    OTHER_LINEAGE,
    PERCENT_FIELDS,
    RAW_VARIANT_FIELDS,
    USA_REGION,
    WEEKLY_INTERVAL,
    WEIGHTED_MODEL,
    DuplicatePolicy,
    MalformedValuePolicy,
)
from .lineages import LineageLabel, LineageLabelTable, attach_labels
from .models import CleanVariantRecord, iter_clean_records
from .percentages import normalize_percentage, normalize_percentage_column
from .prep import (
    CaseSeriesPreparer,
    VariantFeedProfile,
    VariantFeedProfileLoader,
    VariantRecordNormalizer,
    VariantShareSummariser,
    filter_weighted_weekly,
    summarise_variant_shares,
)
from .quality import MalformedValueError, ValueIssue
from .reshape import long_to_wide, wide_to_long
from .revisions import latest_revisions

__all__ = [
    "CLEAN_VARIANT_COLUMNS",
    "NULL_TOKEN",
    "OTHER_LINEAGE",
    "PERCENT_FIELDS",
    "RAW_VARIANT_FIELDS",
    "USA_REGION",
    "WEEKLY_INTERVAL",
    "WEIGHTED_MODEL",
    "DuplicatePolicy",
    "MalformedValuePolicy",
    "LineageLabel",
    "LineageLabelTable",
    "attach_labels",
    "CleanVariantRecord",
    "iter_clean_records",
    "normalize_percentage",
    "normalize_percentage_column",
    "CaseSeriesPreparer",
    "VariantFeedProfile",
    "VariantFeedProfileLoader",
    "VariantRecordNormalizer",
    "VariantShareSummariser",
    "filter_weighted_weekly",
    "summarise_variant_shares",
    "MalformedValueError",
    "ValueIssue",
    "long_to_wide",
    "wide_to_long",
    "latest_revisions",
]
