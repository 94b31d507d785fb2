"""Role-specific dashboard bundles assembled from already-fetched inputs.

No queries happen here: callers resolve their data first (see fetch.py) and
the composer only calls the pipeline functions and copies values into one of
four fixed shapes, substituting configured fallbacks for untracked figures.
"""

import logging
from collections.abc import Callable
from datetime import date, datetime, timedelta
from typing import Any

from pydantic import BaseModel, Field

from jobboard_analytics.core.config import AnalyticsSettings, DashboardFallbacks
from jobboard_analytics.core.rounding import round_int
from jobboard_analytics.core.schemas import (
    BreakdownItem,
    FunnelStageResult,
    GrowthMetric,
    JobMatch,
    TimeSeriesPoint,
)
from jobboard_analytics.dashboard.inputs import (
    AdminInputs,
    ApplicationEvent,
    EmployerInputs,
    GeneralInputs,
    JobEvent,
    JobSeekerInputs,
    UserEvent,
)
from jobboard_analytics.pipeline.breakdown import breakdown, count_by, fixed_breakdown
from jobboard_analytics.pipeline.funnel import application_funnel
from jobboard_analytics.pipeline.matcher import match_jobs
from jobboard_analytics.pipeline.performance import average_time_to_hire
from jobboard_analytics.pipeline.rates import month_over_month, ratio_percent, safe_average
from jobboard_analytics.pipeline.time_buckets import (
    bucket_trailing_days,
    count_since,
    month_start,
)

logger = logging.getLogger(__name__)

ROLES = ("job_seeker", "employer", "admin")
JOB_SEEKER_CHART_STATUSES = ("pending", "interviewing", "rejected", "accepted")


def _applied_at(event: ApplicationEvent) -> datetime | None:
    return event.applied_at


def _created_at(event: JobEvent | UserEvent) -> datetime | None:
    return event.created_at


def _or(value: Any, fallback: Any) -> Any:
    return fallback if value is None else value


# ---------------------------------------------------------------------------
# Output shapes
# ---------------------------------------------------------------------------


class GeneralDashboard(BaseModel):
    total_users: int
    total_jobs: int
    total_companies: int
    total_applications: int
    new_users_this_month: int
    new_jobs_this_month: int
    user_growth: GrowthMetric
    job_growth: GrowthMetric
    application_trend: list[TimeSeriesPoint]


class JobSeekerDashboard(BaseModel):
    is_profile_complete: bool
    profile_completion: int
    profile_views: int = 0
    total_applications: int
    pending_applications: int
    interview_applications: int
    rejected_applications: int
    accepted_applications: int
    application_success_rate: int
    avg_response_time: int
    applications_this_month: int
    recommended_jobs: int
    job_matches: list[JobMatch] = Field(default_factory=list)
    profile_improvement_tips: list[str] = Field(default_factory=list)
    recent_applications: list[dict[str, Any]] = Field(default_factory=list)
    application_activity: list[TimeSeriesPoint] = Field(default_factory=list)
    applications_by_status: list[BreakdownItem] = Field(default_factory=list)


class EmployerDashboard(BaseModel):
    company_id: int | str
    company_name: str
    is_verified: bool
    total_jobs_posted: int
    active_jobs: int
    draft_jobs: int
    archived_jobs: int
    total_applications_received: int
    profile_completion: int
    jobs_posted_this_month: int
    applications_this_month: int
    interviews_scheduled: int
    hires_made: int
    avg_applications_per_job: int
    avg_time_to_hire: int
    fill_rate: int
    pending_applications: int
    recent_applications: list[dict[str, Any]] = Field(default_factory=list)


class SystemHealth(BaseModel):
    platform_uptime: float
    avg_response_time: int
    error_rate: float
    storage_usage: int
    bandwidth_usage: int


class AdminDashboard(BaseModel):
    total_users: int
    total_jobs: int
    total_companies: int
    total_applications: int
    pending_verifications: int
    active_sessions: int
    user_growth: GrowthMetric
    new_users_today: int
    new_users_this_week: int
    new_users_this_month: int
    active_job_seekers: int
    active_employers: int
    inactive_users: int
    users_by_role: list[BreakdownItem]
    pending_job_approvals: int
    job_fill_rate: int
    application_success_rate: int
    user_retention_rate: int
    avg_time_to_hire: int
    application_funnel: list[FunnelStageResult]
    popular_industries: list[BreakdownItem]
    top_companies: list[BreakdownItem]
    geographic_distribution: list[BreakdownItem]
    daily_signups: list[TimeSeriesPoint]
    job_posting_trends: list[TimeSeriesPoint]
    application_trends: list[TimeSeriesPoint]
    system_health: SystemHealth


# ---------------------------------------------------------------------------
# Composition
# ---------------------------------------------------------------------------


def compose_general(
    inputs: GeneralInputs,
    today: date,
    settings: AnalyticsSettings | None = None,
) -> GeneralDashboard:
    settings = settings or AnalyticsSettings()
    this_month = month_start(today)
    user_growth = month_over_month(inputs.users, _created_at, today)
    job_growth = month_over_month(inputs.jobs, _created_at, today)
    return GeneralDashboard(
        total_users=len(inputs.users),
        total_jobs=len(inputs.jobs),
        total_companies=len(inputs.companies),
        total_applications=len(inputs.applications),
        new_users_this_month=count_since(inputs.users, _created_at, this_month),
        new_jobs_this_month=count_since(inputs.jobs, _created_at, this_month),
        user_growth=user_growth,
        job_growth=job_growth,
        application_trend=bucket_trailing_days(
            today, settings.dashboard.recent_days, inputs.applications, _applied_at,
        ),
    )


def profile_completion(fields: dict[str, Any]) -> int:
    """Percent of profile fields that hold a value."""
    filled = sum(1 for value in fields.values() if value)
    return ratio_percent(filled, len(fields))


def compose_job_seeker(
    inputs: JobSeekerInputs,
    today: date,
    settings: AnalyticsSettings | None = None,
) -> JobSeekerDashboard:
    settings = settings or AnalyticsSettings()
    fallbacks = settings.dashboard.fallbacks
    statuses = count_by(inputs.applications, lambda a: a.status)
    total = len(inputs.applications)
    completion = profile_completion(inputs.profile_fields)

    matches: list[JobMatch] = []
    if inputs.candidate is not None:
        matches = match_jobs(inputs.candidate, inputs.candidate_jobs, settings.matching)

    tips = []
    if completion < 100:
        tips.append("Fill in the missing profile fields to improve your chances of being hired")

    return JobSeekerDashboard(
        is_profile_complete=completion >= 100,
        profile_completion=completion,
        total_applications=total,
        pending_applications=statuses["pending"],
        interview_applications=statuses["interviewing"],
        rejected_applications=statuses["rejected"],
        accepted_applications=statuses["accepted"],
        application_success_rate=ratio_percent(statuses["accepted"], total),
        avg_response_time=_or(inputs.avg_response_time, fallbacks.job_seeker_avg_response_time),
        applications_this_month=count_since(inputs.applications, _applied_at, month_start(today)),
        recommended_jobs=len(matches),
        job_matches=matches,
        profile_improvement_tips=tips,
        recent_applications=inputs.recent_applications,
        application_activity=bucket_trailing_days(
            today, settings.dashboard.trend_days, inputs.applications, _applied_at,
        ),
        applications_by_status=fixed_breakdown(statuses, JOB_SEEKER_CHART_STATUSES, total),
    )


def compose_employer(
    inputs: EmployerInputs,
    today: date,
    settings: AnalyticsSettings | None = None,
) -> EmployerDashboard:
    settings = settings or AnalyticsSettings()
    fallbacks = settings.dashboard.fallbacks
    job_statuses = count_by(inputs.jobs, lambda j: j.status)
    app_statuses = count_by(inputs.applications, lambda a: a.status)
    total_jobs = len(inputs.jobs)
    total_applications = len(inputs.applications)
    this_month = month_start(today)

    return EmployerDashboard(
        company_id=inputs.company_id,
        company_name=inputs.company_name,
        is_verified=inputs.is_verified,
        total_jobs_posted=total_jobs,
        active_jobs=job_statuses["published"],
        draft_jobs=job_statuses["draft"],
        archived_jobs=job_statuses["archived"],
        total_applications_received=total_applications,
        profile_completion=_or(inputs.profile_completion, fallbacks.employer_profile_completion),
        jobs_posted_this_month=count_since(inputs.jobs, _created_at, this_month),
        applications_this_month=count_since(inputs.applications, _applied_at, this_month),
        interviews_scheduled=app_statuses["interviewing"],
        hires_made=app_statuses["accepted"],
        avg_applications_per_job=safe_average(total_applications, total_jobs),
        avg_time_to_hire=_or(inputs.avg_time_to_hire, fallbacks.employer_avg_time_to_hire),
        fill_rate=ratio_percent(app_statuses["accepted"], total_jobs),
        pending_applications=app_statuses["pending"],
        recent_applications=inputs.recent_applications,
    )


def _hire_pairs(
    jobs: list[JobEvent],
    applications: list[ApplicationEvent],
) -> list[tuple[datetime | None, datetime]]:
    """(published_at, accepted applied_at) for each published job with a hire.

    The first accepted application per job counts.
    """
    first_accept: dict[int | str, datetime] = {}
    for app in applications:
        if app.status == "accepted" and app.job_id is not None and app.applied_at is not None:
            first_accept.setdefault(app.job_id, app.applied_at)
    return [
        (job.published_at, first_accept[job.id])
        for job in jobs
        if job.status == "published" and job.id in first_accept
    ]


def _system_health(fallbacks: DashboardFallbacks) -> SystemHealth:
    return SystemHealth(
        platform_uptime=fallbacks.platform_uptime,
        avg_response_time=fallbacks.avg_response_time,
        error_rate=fallbacks.error_rate,
        storage_usage=fallbacks.storage_usage,
        bandwidth_usage=fallbacks.bandwidth_usage,
    )


def compose_admin(
    inputs: AdminInputs,
    today: date,
    settings: AnalyticsSettings | None = None,
) -> AdminDashboard:
    settings = settings or AnalyticsSettings()
    fallbacks = settings.dashboard.fallbacks
    trend_days = settings.dashboard.trend_days
    top_n = settings.dashboard.top_n

    active_users = [u for u in inputs.users if u.is_active]
    roles = count_by(active_users, lambda u: u.role)
    job_statuses = count_by(inputs.jobs, lambda j: j.status)
    app_statuses = count_by(inputs.applications, lambda a: a.status)
    total_applications = len(inputs.applications)
    pending_verifications = sum(1 for c in inputs.companies if not c.is_verified)
    user_growth = month_over_month(inputs.users, _created_at, today)
    published = [j for j in inputs.jobs if j.status == "published"]
    time_to_hire = _or(
        inputs.avg_time_to_hire,
        average_time_to_hire(_hire_pairs(inputs.jobs, inputs.applications)),
    )

    return AdminDashboard(
        total_users=len(inputs.users),
        total_jobs=len(inputs.jobs),
        total_companies=len(inputs.companies),
        total_applications=total_applications,
        pending_verifications=pending_verifications,
        active_sessions=_or(inputs.active_sessions, len(active_users)),
        user_growth=user_growth,
        new_users_today=count_since(inputs.users, _created_at, today),
        new_users_this_week=count_since(
            inputs.users, _created_at, today - timedelta(days=settings.dashboard.recent_days - 1),
        ),
        new_users_this_month=user_growth.current,
        active_job_seekers=roles["job_seeker"],
        active_employers=roles["employer"],
        inactive_users=len(inputs.users) - len(active_users),
        users_by_role=fixed_breakdown(roles, ROLES, len(active_users)),
        pending_job_approvals=job_statuses["pending_approval"],
        job_fill_rate=ratio_percent(app_statuses["accepted"], job_statuses["published"]),
        application_success_rate=ratio_percent(app_statuses["accepted"], total_applications),
        user_retention_rate=fallbacks.user_retention_rate,
        avg_time_to_hire=round_int(time_to_hire),
        application_funnel=application_funnel(app_statuses, total_applications),
        popular_industries=breakdown(
            count_by(published, lambda j: j.industry), len(published),
        )[:top_n],
        top_companies=breakdown(
            count_by([j for j in published if j.company_verified], lambda j: j.company_name),
            len(published),
        )[:top_n],
        geographic_distribution=breakdown(
            count_by(published, lambda j: j.location), len(published),
        )[:top_n],
        daily_signups=bucket_trailing_days(today, trend_days, inputs.users, _created_at),
        job_posting_trends=bucket_trailing_days(today, trend_days, inputs.jobs, _created_at),
        application_trends=bucket_trailing_days(
            today, trend_days, inputs.applications, _applied_at,
        ),
        system_health=_system_health(fallbacks),
    )


_COMPOSERS: dict[str, tuple[Callable[..., BaseModel], type[BaseModel]]] = {
    "general": (compose_general, GeneralInputs),
    "job_seeker": (compose_job_seeker, JobSeekerInputs),
    "employer": (compose_employer, EmployerInputs),
    "admin": (compose_admin, AdminInputs),
}


def compose_dashboard(
    role: str,
    inputs: BaseModel,
    today: date,
    settings: AnalyticsSettings | None = None,
) -> BaseModel:
    """Build the dashboard bundle for ``role`` from matching inputs."""
    entry = _COMPOSERS.get(role)
    if entry is None:
        msg = f"role must be one of {sorted(_COMPOSERS)}, got '{role}'"
        raise ValueError(msg)
    composer, input_type = entry
    if not isinstance(inputs, input_type):
        msg = f"'{role}' dashboard needs {input_type.__name__}, got {type(inputs).__name__}"
        raise ValueError(msg)
    logger.debug("Composing '%s' dashboard for %s", role, today)
    return composer(inputs, today, settings)
