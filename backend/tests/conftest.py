import pytest
from fastapi.testclient import TestClient

from app.api.dependencies import get_record_source, get_summary_cache
from app.main import app
from app.services.summary_cache import SummaryCache


def make_record(district, wage="0", emp_days="0", exp="0", women="0",
                fin_year="2024-2025", month="Jan", completed="0", ongoing="0"):
    return {
        "district_name": district,
        "fin_year": fin_year,
        "month": month,
        "Average_Wage_rate_per_day_per_person": wage,
        "Average_days_of_employment_provided_per_Household": emp_days,
        "Total_Exp": exp,
        "Women_Persondays": women,
        "Number_of_Completed_Works": completed,
        "Number_of_Ongoing_Works": ongoing,
    }


SAMPLE_RECORDS = [
    make_record("Pune", wage="300", emp_days="40", exp="1000.50", women="20",
                month="Feb", completed="5", ongoing="2"),
    make_record("PUNE", wage="200", emp_days="60", exp="999.5", women="30",
                month="Jan", completed="3", ongoing="1"),
    make_record("Nashik", wage="250", emp_days="50", exp="5000", women="40",
                month="Jan", completed="7", ongoing="4"),
    make_record("", wage="999", emp_days="1", exp="1", women="1"),
]


class FakeSource:
    def __init__(self, records=None, error=None):
        self.records = list(records or [])
        self.error = error
        self.calls = 0

    def fetch_records(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return [dict(r) for r in self.records]


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def record():
    return make_record


@pytest.fixture
def fake_source_cls():
    return FakeSource


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def source():
    return FakeSource(SAMPLE_RECORDS)


@pytest.fixture
def cache(source, clock):
    return SummaryCache(source, ttl_seconds=600, clock=clock)


@pytest.fixture
def client(source, cache):
    app.dependency_overrides[get_record_source] = lambda: source
    app.dependency_overrides[get_summary_cache] = lambda: cache
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
