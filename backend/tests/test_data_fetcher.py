import pytest
import requests

from app.core.config import Settings
from app.core.errors import SourceUnavailable
from app.services.data_fetcher import RecordSource


class FakeResponse:
    def __init__(self, payload=None, status_code=200, json_error=None):
        self.payload = payload
        self.status_code = status_code
        self.json_error = json_error

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        if self.json_error is not None:
            raise self.json_error
        return self.payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append((url, params, timeout))
        if self.error is not None:
            raise self.error
        return self.response


def _source(session, api_key="key"):
    return RecordSource("https://example.test/resource", api_key, limit=1000, timeout=7, session=session)


def test_fetch_sends_key_format_and_limit():
    session = FakeSession(FakeResponse({"records": [{"district_name": "Pune"}]}))

    records = _source(session).fetch_records()

    assert records == [{"district_name": "Pune"}]
    url, params, timeout = session.calls[0]
    assert url == "https://example.test/resource"
    assert params == {"api-key": "key", "format": "json", "limit": 1000}
    assert timeout == 7
    assert len(session.calls) == 1


def test_missing_records_key_yields_empty_list():
    session = FakeSession(FakeResponse({"status": "ok"}))

    assert _source(session).fetch_records() == []


def test_non_object_items_are_dropped():
    session = FakeSession(FakeResponse({"records": [{"district_name": "A"}, "junk", 3]}))

    assert _source(session).fetch_records() == [{"district_name": "A"}]


@pytest.mark.parametrize(
    "session",
    [
        FakeSession(error=requests.ConnectionError("refused")),
        FakeSession(error=requests.Timeout("slow")),
        FakeSession(FakeResponse({"records": []}, status_code=503)),
        FakeSession(FakeResponse(json_error=ValueError("not json"))),
        FakeSession(FakeResponse(["not", "an", "object"])),
        FakeSession(FakeResponse({"records": "nope"})),
    ],
    ids=["connection", "timeout", "status", "non-json", "non-object", "records-not-list"],
)
def test_failures_raise_source_unavailable(session):
    with pytest.raises(SourceUnavailable):
        _source(session).fetch_records()
    assert len(session.calls) == 1


def test_missing_api_key_fails_without_network():
    session = FakeSession(FakeResponse({"records": []}))

    with pytest.raises(SourceUnavailable):
        _source(session, api_key=None).fetch_records()
    assert session.calls == []


def test_from_settings_uses_configuration():
    cfg = Settings(API_KEY="abc", DATASET_URL="https://example.test/x", RECORD_LIMIT=250, REQUEST_TIMEOUT=5)

    source = RecordSource.from_settings(cfg)

    assert source.api_key == "abc"
    assert source.base_url == "https://example.test/x"
    assert source.limit == 250
    assert source.timeout == 5
