import sys
from pathlib import Path
from typing import Any

import pytest
import requests

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from covidprep.sources import SocrataClient, fetch_variant_proportions  # noqa: E402


class _FakeResponse:
    def __init__(self, payload: Any, status_code: int = 200) -> None:
        self._payload = payload
        self.status_code = status_code

    def json(self) -> Any:
        return self._payload


class _FakeSession:
    def __init__(self, pages: list[Any], status_code: int = 200) -> None:
        self.pages = list(pages)
        self.status_code = status_code
        self.calls: list[dict[str, Any]] = []

    def get(self, url: str, *, params: dict, headers: dict, timeout: int) -> _FakeResponse:
        self.calls.append({"url": url, "params": dict(params), "headers": headers, "timeout": timeout})
        return _FakeResponse(self.pages.pop(0), status_code=self.status_code)


def test_fetch_pages_until_short_page() -> None:
    session = _FakeSession(
        [
            [{"variant": "BA.2", "share": "0.1"}, {"variant": "BA.1.1", "share": "0.2"}],
            [{"variant": "Other"}],
        ]
    )
    client = SocrataClient(page_size=2, session=session, app_token="token-123")

    frame = client.fetch("jr58-6ysp")

    assert frame["variant"].tolist() == ["BA.2", "BA.1.1", "Other"]
    assert frame["share"].isna().tolist() == [False, False, True]
    assert [call["params"]["$offset"] for call in session.calls] == [0, 2]
    assert session.calls[0]["url"] == "https://data.cdc.gov/resource/jr58-6ysp.json"
    assert session.calls[0]["headers"] == {"X-App-Token": "token-123"}
    assert session.calls[0]["params"]["$order"] == ":id"


def test_fetch_variant_proportions_filters_region() -> None:
    session = _FakeSession([[{"usa_or_hhsregion": "USA"}]])
    client = SocrataClient(session=session)

    fetch_variant_proportions(client, region="USA")

    assert session.calls[0]["params"]["$where"] == "usa_or_hhsregion = 'USA'"
    assert session.calls[0]["headers"] == {}


def test_fetch_all_regions_sends_no_filter() -> None:
    session = _FakeSession([[]])

    frame = fetch_variant_proportions(SocrataClient(session=session), region=None)

    assert frame.empty
    assert "$where" not in session.calls[0]["params"]


def test_http_error_raises_runtime_error() -> None:
    session = _FakeSession([{"message": "throttled"}], status_code=429)

    with pytest.raises(RuntimeError, match="HTTP 429"):
        SocrataClient(session=session).fetch("jr58-6ysp")


def test_transport_error_raises_runtime_error() -> None:
    class _BrokenSession:
        def get(self, *args: Any, **kwargs: Any) -> None:
            raise requests.ConnectionError("connection refused")

    with pytest.raises(RuntimeError, match="connection refused"):
        SocrataClient(session=_BrokenSession()).fetch("jr58-6ysp")


def test_page_size_must_be_positive() -> None:
    with pytest.raises(ValueError):
        SocrataClient(page_size=0, session=_FakeSession([]))
