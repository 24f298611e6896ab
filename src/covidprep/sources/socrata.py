"""Minimal Socrata (SODA 2.x) client for CDC open-data feeds."""

from __future__ import annotations

import logging
from typing import Any

import pandas as pd
import requests

from covidprep.config import USA_REGION

LOGGER = logging.getLogger(__name__)

CDC_DOMAIN = "data.cdc.gov"
VARIANT_PROPORTIONS_DATASET = "jr58-6ysp"


class SocrataClient:
    """Page through a Socrata JSON resource into a DataFrame.

    Socrata omits null fields from JSON rows, so absent values come back as
    missing cells rather than ``"NULL"`` tokens. All values are kept as text.
    """

    def __init__(
        self,
        *,
        domain: str = CDC_DOMAIN,
        app_token: str | None = None,
        page_size: int = 50_000,
        timeout_s: int = 60,
        session: requests.Session | None = None,
    ) -> None:
        if page_size < 1:
            raise ValueError("page_size must be >= 1")
        self.domain = domain
        self.app_token = app_token
        self.page_size = page_size
        self.timeout_s = timeout_s
        self.session = session or requests.Session()

    def resource_url(self, dataset_id: str) -> str:
        return f"https://{self.domain}/resource/{dataset_id}.json"

    def fetch(self, dataset_id: str, *, where: str | None = None) -> pd.DataFrame:
        """Download every row of ``dataset_id``, optionally filtered by a SoQL ``$where``."""

        url = self.resource_url(dataset_id)
        headers = {"X-App-Token": self.app_token} if self.app_token else {}
        rows: list[dict[str, Any]] = []
        offset = 0

        while True:
            params: dict[str, Any] = {
                "$limit": self.page_size,
                "$offset": offset,
                "$order": ":id",
            }
            if where:
                params["$where"] = where

            page = self._get_page(url, params=params, headers=headers)
            rows.extend(page)
            LOGGER.info("Fetched %s row(s) from %s at offset %s", len(page), dataset_id, offset)

            if len(page) < self.page_size:
                break
            offset += self.page_size

        return pd.DataFrame.from_records(rows)

    def _get_page(
        self,
        url: str,
        *,
        params: dict[str, Any],
        headers: dict[str, str],
    ) -> list[dict[str, Any]]:
        try:
            response = self.session.get(url, params=params, headers=headers, timeout=self.timeout_s)
        except requests.RequestException as exc:
            raise RuntimeError(f"Failed to fetch {url}: {exc}") from exc

        if response.status_code != 200:
            raise RuntimeError(f"HTTP {response.status_code} fetching {url}")

        payload = response.json()
        if not isinstance(payload, list):
            raise RuntimeError(f"Unexpected Socrata payload from {url}: {type(payload).__name__}")
        return payload


def fetch_variant_proportions(
    client: SocrataClient,
    *,
    region: str | None = USA_REGION,
) -> pd.DataFrame:
    """Fetch the CDC variant proportion feed, limited to one region when given."""

    where = None
    if region is not None:
        escaped = region.replace("'", "''")
        where = f"usa_or_hhsregion = '{escaped}'"
    return client.fetch(VARIANT_PROPORTIONS_DATASET, where=where)
