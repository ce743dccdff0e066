# backend/app/services/aggregator.py
import logging
from collections import Counter

from app.models.summary import DistrictSummary
from app.utils import district_key, safe_float

logger = logging.getLogger("mgnrega.aggregate")

DISTRICT_FIELD = "district_name"
WAGE_FIELD = "Average_Wage_rate_per_day_per_person"
EMP_DAYS_FIELD = "Average_days_of_employment_provided_per_Household"
EXPENDITURE_FIELD = "Total_Exp"
WOMEN_PERSONDAYS_FIELD = "Women_Persondays"
COMPLETED_WORKS_FIELD = "Number_of_Completed_Works"
ONGOING_WORKS_FIELD = "Number_of_Ongoing_Works"


def _new_totals(district):
    return {
        "district": district,
        "count": 0,
        "sum_avg_wage": 0.0,
        "total_exp": 0.0,
        "total_emp_days": 0.0,
        "total_women_persondays": 0.0,
    }


def _finalize(totals):
    count = totals["count"]
    emp_days = totals["total_emp_days"]
    avg_wage = totals["sum_avg_wage"] / count if count else 0.0
    women_percent = totals["total_women_persondays"] / emp_days * 100 if emp_days else 0.0
    return DistrictSummary(
        district=totals["district"],
        avg_wage=round(avg_wage, 2),
        total_exp=round(totals["total_exp"], 2),
        total_emp_days=emp_days,
        women_persondays=totals["total_women_persondays"],
        women_percent=round(women_percent, 1),
        samples=count,
    )


def aggregate_districts(records, parse_failures=None):
    """Group raw records by district and compute one summary per district.

    Records without a district name are skipped. Numeric fields that fail to
    parse contribute 0; pass a ``Counter`` as ``parse_failures`` to collect
    how many values failed per field. Output keeps first-seen district order.
    """
    failures = parse_failures if parse_failures is not None else Counter()
    before = sum(failures.values())

    by_district = {}
    skipped = 0
    for rec in records:
        d = district_key(rec.get(DISTRICT_FIELD))
        if not d:
            skipped += 1
            continue
        entry = by_district.get(d)
        if entry is None:
            entry = by_district[d] = _new_totals(d)
        entry["count"] += 1
        entry["sum_avg_wage"] += safe_float(rec.get(WAGE_FIELD), WAGE_FIELD, failures)
        entry["total_exp"] += safe_float(rec.get(EXPENDITURE_FIELD), EXPENDITURE_FIELD, failures)
        entry["total_emp_days"] += safe_float(rec.get(EMP_DAYS_FIELD), EMP_DAYS_FIELD, failures)
        entry["total_women_persondays"] += safe_float(
            rec.get(WOMEN_PERSONDAYS_FIELD), WOMEN_PERSONDAYS_FIELD, failures
        )

    summary = [_finalize(totals) for totals in by_district.values()]

    failed = sum(failures.values()) - before
    logger.info(
        "Aggregated %d records into %d districts (%d without district, %d unparsable values)",
        len(records), len(summary), skipped, failed,
    )
    return summary


def distinct_district_names(records):
    """Distinct district names as they appear upstream, sorted."""
    names = set()
    for rec in records:
        name = rec.get(DISTRICT_FIELD)
        if isinstance(name, str) and name.strip():
            names.add(name.strip())
    return sorted(names)


def filter_district_records(records, name):
    """Records whose district name matches ``name`` ignoring case."""
    key = district_key(name)
    if not key:
        return []
    return [r for r in records if district_key(r.get(DISTRICT_FIELD)) == key]
