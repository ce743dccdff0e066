from functools import lru_cache

from app.core.config import get_settings
from app.services.data_fetcher import RecordSource
from app.services.summary_cache import SummaryCache


@lru_cache(maxsize=1)
def get_record_source() -> RecordSource:
    return RecordSource.from_settings(get_settings())


@lru_cache(maxsize=1)
def get_summary_cache() -> SummaryCache:
    settings = get_settings()
    return SummaryCache(get_record_source(), ttl_seconds=settings.CACHE_TTL_SECONDS)
