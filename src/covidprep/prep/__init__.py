"""Preparation pipelines for raw surveillance inputs."""

from .cases import NYT_MEASURES, CaseSeriesPreparer, CaseSeriesReport
from .profiles import VariantFeedProfile, VariantFeedProfileLoader
from .shares import (
    DEFAULT_START_WEEK,
    ShareSummaryReport,
    VariantShareSummariser,
    pivot_variant_shares,
    summarise_variant_shares,
)
from .variants import (
    VariantNormalizationReport,
    VariantNormalizationResult,
    VariantRecordNormalizer,
    filter_region,
    filter_weighted_weekly,
    read_raw_feed,
    select_feed_columns,
)

__all__ = [
    "NYT_MEASURES",
    "CaseSeriesPreparer",
    "CaseSeriesReport",
    "VariantFeedProfile",
    "VariantFeedProfileLoader",
    "DEFAULT_START_WEEK",
    "ShareSummaryReport",
    "VariantShareSummariser",
    "pivot_variant_shares",
    "summarise_variant_shares",
    "VariantNormalizationReport",
    "VariantNormalizationResult",
    "VariantRecordNormalizer",
    "filter_region",
    "filter_weighted_weekly",
    "read_raw_feed",
    "select_feed_columns",
]
