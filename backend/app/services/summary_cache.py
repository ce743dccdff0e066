import logging
import threading
import time
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from app.models.summary import DistrictSummary
from app.services.aggregator import aggregate_districts

logger = logging.getLogger("mgnrega.cache")

DEFAULT_TTL_SECONDS = 600


@dataclass(frozen=True)
class CacheEntry:
    timestamp: float
    summary: Tuple[DistrictSummary, ...]
    parse_failures: Dict[str, int] = field(default_factory=dict)


class SummaryCache:
    """Time-to-live memory in front of the record source and aggregator.

    A fresh entry is returned as-is. On a miss one caller refetches while the
    others wait on the refresh lock and then reuse its result.
    """

    def __init__(self, source, ttl_seconds=DEFAULT_TTL_SECONDS, clock=time.monotonic):
        self.source = source
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entry: Optional[CacheEntry] = None
        self._refresh_lock = threading.Lock()

    def _is_fresh(self, entry):
        return entry is not None and (self._clock() - entry.timestamp) < self.ttl_seconds

    def get_summary(self):
        entry = self._entry
        if self._is_fresh(entry):
            logger.debug("Summary cache hit")
            return entry.summary

        with self._refresh_lock:
            current = self._entry
            # replaced while we waited: share that refresh even if it is
            # already older than the ttl
            if current is not None and (current is not entry or self._is_fresh(current)):
                return current.summary
            return self._refresh().summary

    def _refresh(self):
        started = self._clock()
        records = self.source.fetch_records()
        failures = Counter()
        summary = tuple(aggregate_districts(records, failures))
        entry = CacheEntry(timestamp=started, summary=summary, parse_failures=dict(failures))
        self._entry = entry
        logger.info("Summary cache refreshed: %d districts", len(summary))
        return entry

    def clear(self):
        self._entry = None

    def age(self):
        entry = self._entry
        if entry is None:
            return None
        return max(0.0, self._clock() - entry.timestamp)

    def parse_failures(self):
        entry = self._entry
        return dict(entry.parse_failures) if entry is not None else {}
