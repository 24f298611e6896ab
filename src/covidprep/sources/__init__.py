"""Upstream data retrieval for covidprep inputs."""

from .socrata import (
    CDC_DOMAIN,
    VARIANT_PROPORTIONS_DATASET,
    SocrataClient,
    fetch_variant_proportions,
)

__all__ = [
    "CDC_DOMAIN",
    "VARIANT_PROPORTIONS_DATASET",
    "SocrataClient",
    "fetch_variant_proportions",
]
