"""Report rows for export, one model per report kind.

``kind`` is the discriminator; the exporter dispatches on it to pick the
header set and column projection. Timestamps stay as the strings the data
layer returned so exports reproduce them byte for byte.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from jobboard_analytics.core.schemas import Number


class ApplicationReportRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["application"] = "application"
    id: int | str
    applied_at: str | None = None
    status: str | None = None
    job_title: str | None = None
    company_name: str | None = None
    applicant_name: str | None = None
    applicant_email: str | None = None
    cover_letter: str | None = None
    custom_cv_path: str | None = None


class JobReportRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["job"] = "job"
    id: int | str
    title: str | None = None
    status: str | None = None
    created_at: str | None = None
    company_name: str | None = None
    location_name: str | None = None
    industry_name: str | None = None
    salary_min: Number | None = None
    salary_max: Number | None = None
    experience_level: str | None = None
    employment_type: str | None = None
    application_count: int | None = None


class CompanyReportRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["company"] = "company"
    id: int | str
    name: str | None = None
    website_url: str | None = None
    size: str | None = None
    is_verified: bool | None = None
    created_at: str | None = None
    industry_name: str | None = None
    location_name: str | None = None
    job_count: int | None = None


class UserReportRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["user"] = "user"
    id: int | str
    email: str | None = None
    full_name: str | None = None
    role: str | None = None
    is_active: bool | None = None
    created_at: str | None = None
    experience_level: str | None = None
    is_looking_for_job: bool | None = None
    company_count: int | None = None


ReportRecord = Annotated[
    ApplicationReportRecord | JobReportRecord | CompanyReportRecord | UserReportRecord,
    Field(discriminator="kind"),
]

ReportRecordList = TypeAdapter(list[ReportRecord])

# report_type (plural, as requested by callers) -> record kind
REPORT_KINDS: dict[str, str] = {
    "applications": "application",
    "jobs": "job",
    "companies": "company",
    "users": "user",
}
