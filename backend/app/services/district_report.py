from app.models.summary import DistrictReport, ReportSummary, SeriesPoint
from app.services.aggregator import (
    COMPLETED_WORKS_FIELD,
    DISTRICT_FIELD,
    EMP_DAYS_FIELD,
    EXPENDITURE_FIELD,
    ONGOING_WORKS_FIELD,
    WAGE_FIELD,
    WOMEN_PERSONDAYS_FIELD,
    filter_district_records,
)
from app.core.errors import NotFound
from app.utils import safe_float

MONTH_ORDER = {
    "JAN": 1, "FEB": 2, "MAR": 3, "APR": 4, "MAY": 5, "JUN": 6,
    "JUL": 7, "AUG": 8, "SEP": 9, "OCT": 10, "NOV": 11, "DEC": 12,
}


def _month_number(month):
    if not isinstance(month, str):
        return 0
    return MONTH_ORDER.get(month.strip()[:3].upper(), 0)


def _text(v):
    return v.strip() if isinstance(v, str) else ""


def to_series_point(rec, failures=None):
    return SeriesPoint(
        fin_year=_text(rec.get("fin_year")),
        month=_text(rec.get("month")),
        district_name=_text(rec.get(DISTRICT_FIELD)),
        avg_wage=safe_float(rec.get(WAGE_FIELD), WAGE_FIELD, failures),
        emp_days=safe_float(rec.get(EMP_DAYS_FIELD), EMP_DAYS_FIELD, failures),
        completed=safe_float(rec.get(COMPLETED_WORKS_FIELD), COMPLETED_WORKS_FIELD, failures),
        ongoing=safe_float(rec.get(ONGOING_WORKS_FIELD), ONGOING_WORKS_FIELD, failures),
        total_exp=safe_float(rec.get(EXPENDITURE_FIELD), EXPENDITURE_FIELD, failures),
        women_persondays=safe_float(rec.get(WOMEN_PERSONDAYS_FIELD), WOMEN_PERSONDAYS_FIELD, failures),
    )


def build_series(records, failures=None):
    """Per-record points ordered by financial year, then calendar month."""
    points = [to_series_point(r, failures) for r in records]
    return sorted(points, key=lambda p: (p.fin_year, _month_number(p.month)))


def summarize_series(series):
    if not series:
        return ReportSummary()
    n = len(series)

    def total(key):
        return sum(getattr(p, key) for p in series)

    return ReportSummary(
        avg_wage=round(total("avg_wage") / n, 2),
        emp_days=round(total("emp_days") / n, 2),
        completed=total("completed"),
        ongoing=total("ongoing"),
        total_exp=round(total("total_exp"), 2),
        women_persondays=total("women_persondays"),
    )


def women_share_insight(district, series):
    total_women = sum(p.women_persondays for p in series)
    total_emp = sum(p.emp_days for p in series)
    percent = total_women / total_emp * 100 if total_emp else 0.0
    return (
        f"In {district}, women contributed approximately {percent:.1f}% "
        f"of total employment persondays."
    )


def build_district_report(records, district, failures=None):
    """Series, summary table and insight line for one district.

    Raises NotFound when no record matches ``district``.
    """
    matched = filter_district_records(records, district)
    if not matched:
        raise NotFound(f"No data found for district {district}.")
    series = build_series(matched, failures)
    return DistrictReport(
        district=district,
        series=series,
        summary=summarize_series(series),
        insight=women_share_insight(district, series),
    )


def compare_pair(records, district_a, district_b):
    return [
        build_district_report(records, district_a),
        build_district_report(records, district_b),
    ]
