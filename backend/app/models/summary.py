"""
Response schemas for the comparison endpoints.
"""
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

SORTABLE_FIELDS = (
    "avg_wage",
    "total_exp",
    "total_emp_days",
    "women_persondays",
    "women_percent",
    "samples",
)


class DistrictSummary(BaseModel):
    """Aggregated program statistics for one district."""
    district: str = Field(..., description="Upper-cased district name")
    avg_wage: float = Field(0.0, description="Mean average wage rate per person per day")
    total_exp: float = Field(0.0, description="Total expenditure, units as in the dataset")
    total_emp_days: float = Field(0.0, description="Sum of average employment days per household")
    women_persondays: float = Field(0.0, description="Sum of women persondays")
    women_percent: float = Field(0.0, description="Women persondays as a share of employment days")
    samples: int = Field(0, description="Number of contributing records")


class DistrictsResponse(BaseModel):
    districts: List[str]


class SeriesPoint(BaseModel):
    fin_year: str = ""
    month: str = ""
    district_name: str = ""
    avg_wage: float = 0.0
    emp_days: float = 0.0
    completed: float = 0.0
    ongoing: float = 0.0
    total_exp: float = 0.0
    women_persondays: float = 0.0


class ReportSummary(BaseModel):
    avg_wage: float = 0.0
    emp_days: float = 0.0
    completed: float = 0.0
    ongoing: float = 0.0
    total_exp: float = 0.0
    women_persondays: float = 0.0


class DistrictReport(BaseModel):
    district: str
    series: List[SeriesPoint]
    summary: ReportSummary
    insight: str


class PairComparison(BaseModel):
    districts: List[str]
    reports: List[DistrictReport]


class HealthResponse(BaseModel):
    status: str
    time: str
    cache_age_seconds: Optional[float] = None
    parse_failures: Dict[str, int] = Field(default_factory=dict)
