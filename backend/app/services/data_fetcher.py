import logging

import requests
from requests.adapters import HTTPAdapter

from app.core.config import settings
from app.core.errors import SourceUnavailable

logger = logging.getLogger("mgnrega.source")


def get_session():
    # No retries: one outbound call per fetch.
    s = requests.Session()
    s.mount("https://", HTTPAdapter(max_retries=0))
    s.mount("http://", HTTPAdapter(max_retries=0))
    s.headers.update({"User-Agent": "mgnrega-compare/1.0", "Accept": "application/json"})
    return s


class RecordSource:
    """Fetches one snapshot of raw MGNREGA district records from data.gov.in."""

    def __init__(self, base_url, api_key, limit=1000, timeout=30.0, session=None):
        self.base_url = base_url
        self.api_key = api_key
        self.limit = limit
        self.timeout = timeout
        self._session = session

    @classmethod
    def from_settings(cls, cfg=None):
        cfg = cfg or settings
        return cls(
            base_url=cfg.DATASET_URL,
            api_key=cfg.API_KEY,
            limit=cfg.RECORD_LIMIT,
            timeout=cfg.REQUEST_TIMEOUT,
        )

    @property
    def session(self):
        if self._session is None:
            self._session = get_session()
        return self._session

    def fetch_records(self):
        if not self.api_key or not self.base_url:
            raise SourceUnavailable("Missing API_KEY or DATASET_URL")

        params = {
            "api-key": self.api_key,
            "format": "json",
            "limit": self.limit,
        }

        logger.info("Fetching up to %d records from %s", self.limit, self.base_url)
        try:
            response = self.session.get(self.base_url, params=params, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise SourceUnavailable(f"API request failed: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise SourceUnavailable("API returned a non-JSON body") from e

        if not isinstance(data, dict):
            raise SourceUnavailable(f"Unexpected payload type {type(data).__name__}")

        records = data.get("records")
        if records is None:
            logger.warning("Payload has no records (status=%s)", data.get("status"))
            return []
        if not isinstance(records, list):
            raise SourceUnavailable("Payload 'records' is not a list")

        cleaned = [r for r in records if isinstance(r, dict)]
        if len(cleaned) != len(records):
            logger.warning("Dropped %d non-object records", len(records) - len(cleaned))

        logger.info("Fetched %d records", len(cleaned))
        return cleaned
