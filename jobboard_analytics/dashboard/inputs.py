"""Already-fetched inputs for dashboard composition.

Optional scalar fields mean "not tracked upstream"; the composer replaces a
None with the configured fallback instead of failing.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from jobboard_analytics.core.schemas import CandidateProfile, JobListing


class ApplicationEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: str = "pending"
    applied_at: datetime | None = None
    job_id: int | str | None = None


class JobEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int | str | None = None
    status: str = "draft"
    created_at: datetime | None = None
    published_at: datetime | None = None
    industry: str | None = None
    location: str | None = None
    company_name: str | None = None
    company_verified: bool = False


class UserEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: str = "job_seeker"
    is_active: bool = True
    created_at: datetime | None = None


class CompanyEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_verified: bool = False
    created_at: datetime | None = None


class GeneralInputs(BaseModel):
    """Platform-wide activity for the general overview."""

    users: list[UserEvent] = Field(default_factory=list)
    jobs: list[JobEvent] = Field(default_factory=list)
    companies: list[CompanyEvent] = Field(default_factory=list)
    applications: list[ApplicationEvent] = Field(default_factory=list)


class JobSeekerInputs(BaseModel):
    """One job seeker's applications, profile and candidate jobs."""

    applications: list[ApplicationEvent] = Field(default_factory=list)
    # Profile field name -> value; empty or falsy values count as missing.
    profile_fields: dict[str, Any] = Field(default_factory=dict)
    candidate: CandidateProfile | None = None
    candidate_jobs: list[JobListing] = Field(default_factory=list)
    recent_applications: list[dict[str, Any]] = Field(default_factory=list)
    avg_response_time: int | None = None


class EmployerInputs(BaseModel):
    """One employer's company, jobs and the applications they received."""

    company_id: int | str
    company_name: str = ""
    is_verified: bool = False
    jobs: list[JobEvent] = Field(default_factory=list)
    applications: list[ApplicationEvent] = Field(default_factory=list)
    recent_applications: list[dict[str, Any]] = Field(default_factory=list)
    profile_completion: int | None = None
    avg_time_to_hire: int | None = None


class AdminInputs(BaseModel):
    """Everything the admin dashboard aggregates."""

    users: list[UserEvent] = Field(default_factory=list)
    jobs: list[JobEvent] = Field(default_factory=list)
    companies: list[CompanyEvent] = Field(default_factory=list)
    applications: list[ApplicationEvent] = Field(default_factory=list)
    # Overrides the figure derived from publication and hire timestamps.
    avg_time_to_hire: float | None = None
    active_sessions: int | None = None
