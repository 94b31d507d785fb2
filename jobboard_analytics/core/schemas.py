"""Core value objects for the analytics engine.

Every model is frozen: results are computed fresh per request and handed to
the caller, never mutated in place.
"""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

Date = date
Number = int | float


class TimeSeriesPoint(BaseModel):
    """Count of records falling in one bucket (day or month)."""

    model_config = ConfigDict(frozen=True)

    date: Date
    count: int = Field(default=0, ge=0)


class FunnelStage(BaseModel):
    """A named stage of an ordered pipeline, e.g. submitted -> accepted."""

    model_config = ConfigDict(frozen=True)

    name: str
    count: int = Field(default=0, ge=0)


class FunnelStageResult(BaseModel):
    """A funnel stage with its share of the entry stage and step conversion."""

    model_config = ConfigDict(frozen=True)

    name: str
    count: int
    percentage_of_total: int
    conversion_rate: int


class GrowthMetric(BaseModel):
    """Current vs. previous period count with integer growth percent."""

    model_config = ConfigDict(frozen=True)

    current: int
    previous: int
    rate_percent: int


class BreakdownItem(BaseModel):
    """One category of a grouped count (status, industry, role, ...)."""

    model_config = ConfigDict(frozen=True)

    label: str
    count: int
    percentage: int


class CandidateProfile(BaseModel):
    """Job seeker preferences used for matching.

    Skills are a case-insensitive set: blanks are dropped and entries that
    differ only in case collapse to the first spelling seen.
    """

    model_config = ConfigDict(frozen=True)

    skills: tuple[str, ...] = ()
    preferred_salary_min: Number | None = None
    preferred_salary_max: Number | None = None

    @field_validator("skills", mode="before")
    @classmethod
    def dedupe_skills(cls, v: object) -> tuple[str, ...]:
        if v is None:
            return ()
        if isinstance(v, str):
            v = (v,)
        seen: set[str] = set()
        result: list[str] = []
        for skill in v:  # type: ignore[attr-defined]
            cleaned = str(skill).strip()
            if not cleaned or cleaned.lower() in seen:
                continue
            seen.add(cleaned.lower())
            result.append(cleaned)
        return tuple(result)


class JobListing(BaseModel):
    """A published job considered for matching."""

    model_config = ConfigDict(frozen=True)

    id: int | str
    title: str = ""
    skills_required: tuple[str, ...] = ()
    salary_min: Number | None = None
    salary_max: Number | None = None


class JobMatch(BaseModel):
    """Match of one JobListing against a CandidateProfile."""

    model_config = ConfigDict(frozen=True)

    job_id: int | str
    job_title: str = ""
    skill_match_count: int = Field(default=0, ge=0)
    skill_score: float = Field(default=0.0, ge=0.0, le=100.0)
    salary_score: float = Field(default=0.0, ge=0.0, le=100.0)
    overall_score: int = Field(default=0, ge=0, le=100)


class JobPerformanceRecord(BaseModel):
    """Raw per-job activity counts plus descriptive fields for rollups."""

    model_config = ConfigDict(frozen=True)

    job_id: int | str
    views: int = Field(default=0, ge=0)
    applications: int = Field(default=0, ge=0)
    accepted_applications: int = Field(default=0, ge=0)
    days_active: int = Field(default=0, ge=0)

    title: str = ""
    status: str = ""
    industry: str | None = None
    location: str | None = None
    experience_level: str | None = None
    skills_required: tuple[str, ...] = ()
    salary_min: Number | None = None
    salary_max: Number | None = None
    published_at: datetime | None = None


class JobPerformance(BaseModel):
    """Derived per-job metrics. Rates are integer percents."""

    model_config = ConfigDict(frozen=True)

    record: JobPerformanceRecord
    conversion_rate: int
    success_rate: int
    avg_applications_per_day: float
    quality_score: int = Field(ge=0, le=100)
    lifecycle_stage: str

    @property
    def job_id(self) -> int | str:
        return self.record.job_id


class ApplicationRecord(BaseModel):
    """One application joined with the job and company it was sent to."""

    model_config = ConfigDict(frozen=True)

    id: int | str | None = None
    status: str = "pending"
    applied_at: datetime | None = None
    job_id: int | str | None = None
    job_title: str = ""
    company_id: int | str | None = None
    company_name: str = ""
    industry: str | None = None
    location: str | None = None
    experience_level: str | None = None
