import logging
import re
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from app.api.dependencies import get_record_source, get_summary_cache
from app.core.errors import NotFound
from app.models.summary import (
    SORTABLE_FIELDS,
    DistrictsResponse,
    DistrictSummary,
    HealthResponse,
    PairComparison,
)
from app.services.aggregator import distinct_district_names, filter_district_records
from app.services.data_fetcher import RecordSource
from app.services.district_report import compare_pair
from app.services.summary_cache import SummaryCache

logger = logging.getLogger("mgnrega.api")

router = APIRouter(prefix="/api")

DEFAULT_TOP = 10
MAX_TOP = 100
TOP_PREFIX = re.compile(r"\s*([+-]?\d+)")


# ---------- HELPERS ----------
def parse_top(top):
    """Leading integer of ``top`` clamped to [0, MAX_TOP]; no digits means DEFAULT_TOP."""
    match = TOP_PREFIX.match(str(top))
    n = int(match.group(1)) if match else DEFAULT_TOP
    return min(MAX_TOP, max(n, 0))


def sort_summary(summary, sortby):
    """Descending by ``sortby``; unknown fields leave the order as is."""
    out = list(summary)
    if sortby in SORTABLE_FIELDS:
        # sorted() is stable with reverse=True, so ties keep cache order
        out = sorted(out, key=lambda s: getattr(s, sortby), reverse=True)
    return out


# ---------- HEALTH ----------
@router.get("/health", response_model=HealthResponse)
def health(cache: SummaryCache = Depends(get_summary_cache)):
    return HealthResponse(
        status="ok",
        time=datetime.now(timezone.utc).isoformat(),
        cache_age_seconds=cache.age(),
        parse_failures=cache.parse_failures(),
    )


# ---------- DISTRICTS ----------
@router.get("/districts", response_model=DistrictsResponse)
def list_districts(source: RecordSource = Depends(get_record_source)):
    try:
        records = source.fetch_records()
    except Exception:  # noqa: BLE001
        logger.exception("Failed to load districts")
        raise HTTPException(status_code=500, detail="Failed to load districts")
    return DistrictsResponse(districts=distinct_district_names(records))


@router.get("/district/{name}")
def district_records(name: str, source: RecordSource = Depends(get_record_source)):
    try:
        records = source.fetch_records()
    except Exception:  # noqa: BLE001
        logger.exception("Error fetching data for district %s", name)
        raise HTTPException(status_code=500, detail="Error fetching data")

    filtered = filter_district_records(records, name)
    if not filtered:
        raise NotFound("No data found for this district.")
    return filtered


# ---------- COMPARE ----------
@router.get("/compare", response_model=List[DistrictSummary])
def compare(
    sortby: Optional[str] = None,
    top: Optional[str] = None,
    cache: SummaryCache = Depends(get_summary_cache),
):
    try:
        summary = cache.get_summary()
    except Exception:  # noqa: BLE001
        logger.exception("compare error")
        raise HTTPException(status_code=500, detail="Failed to compute comparison")

    out = list(summary)
    if sortby:
        out = sort_summary(out, sortby)
    if top:
        out = out[:parse_top(top)]
    return out


@router.get("/compare/pair", response_model=PairComparison)
def compare_two(
    a: str = Query(..., min_length=1),
    b: str = Query(..., min_length=1),
    source: RecordSource = Depends(get_record_source),
):
    try:
        records = source.fetch_records()
    except Exception:  # noqa: BLE001
        logger.exception("pair compare error for %s / %s", a, b)
        raise HTTPException(status_code=500, detail="Failed to fetch comparison data")

    return PairComparison(districts=[a, b], reports=compare_pair(records, a, b))
