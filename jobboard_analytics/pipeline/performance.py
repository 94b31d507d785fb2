"""Job performance scoring and the rollups of the job performance report.

quality_score = min(100, round(conversion * 0.3 + success * 0.4 + velocity * 0.3))
where velocity = min(avg_applications_per_day * 10, 30) so a single busy early
day cannot dominate the score.
"""

import logging
import math
from collections import Counter
from collections.abc import Callable, Iterable, Sequence
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict

from jobboard_analytics.core.config import PerformanceConfig
from jobboard_analytics.core.rounding import round_half_up, round_int
from jobboard_analytics.core.schemas import JobPerformance, JobPerformanceRecord
from jobboard_analytics.pipeline.rates import ratio_percent, safe_average

logger = logging.getLogger(__name__)

CONVERSION_WEIGHT = 0.3
SUCCESS_WEIGHT = 0.4
VELOCITY_WEIGHT = 0.3
VELOCITY_CAP = 30

# (max days active, stage), checked in order; anything older is "aging".
_LIFECYCLE_STAGES: list[tuple[int, str]] = [
    (7, "new"),
    (30, "active"),
    (60, "mature"),
]

_SECONDS_PER_DAY = 24 * 60 * 60


class GroupPerformance(BaseModel):
    """Totals for the jobs sharing one industry or location."""

    model_config = ConfigDict(frozen=True)

    name: str
    total_jobs: int
    total_views: int
    total_applications: int
    avg_views_per_job: int
    avg_applications_per_job: int
    conversion_rate: int


class SkillDemand(BaseModel):
    model_config = ConfigDict(frozen=True)

    skill: str
    demand_count: int


class SalaryBand(BaseModel):
    """Salary midpoints of jobs at one experience level."""

    model_config = ConfigDict(frozen=True)

    experience_level: str
    job_count: int
    avg_salary: int
    min_salary: float
    max_salary: float


class PerformanceOverview(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_jobs: int
    active_jobs: int
    total_views: int
    total_applications: int
    avg_views_per_job: int
    avg_applications_per_job: int
    overall_conversion_rate: int


class PerformanceReport(BaseModel):
    """Everything the job performance dashboard shows."""

    model_config = ConfigDict(frozen=True)

    overview: PerformanceOverview
    performance_metrics: list[JobPerformance]
    industry_performance: list[GroupPerformance]
    location_performance: list[GroupPerformance]
    trending_skills: list[SkillDemand]
    salary_analysis: list[SalaryBand]
    top_performing_jobs: list[JobPerformance]
    underperforming_jobs: list[JobPerformance]


def days_active_since(published_at: datetime | None, now: datetime) -> int:
    """Whole days since publication, rounded up; 0 if never published."""
    if published_at is None:
        return 0
    if published_at.tzinfo is None:
        published_at = published_at.replace(tzinfo=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    elapsed = (now - published_at).total_seconds() / _SECONDS_PER_DAY
    return max(0, math.ceil(elapsed))


def average_time_to_hire(hires: Iterable[tuple[datetime | None, datetime]]) -> float:
    """Mean whole days from publication to acceptance over (published_at, accepted_at) pairs.

    Pairs without a publication time are left out; no hires gives 0.
    """
    days = [days_active_since(published, accepted) for published, accepted in hires if published]
    if not days:
        return 0.0
    return sum(days) / len(days)


def lifecycle_stage(days_active: int) -> str:
    for max_days, stage in _LIFECYCLE_STAGES:
        if days_active <= max_days:
            return stage
    return "aging"


def quality_score(conversion_rate: int, success_rate: int, avg_applications_per_day: float) -> int:
    velocity = min(avg_applications_per_day * 10, VELOCITY_CAP)
    raw = (
        conversion_rate * CONVERSION_WEIGHT
        + success_rate * SUCCESS_WEIGHT
        + velocity * VELOCITY_WEIGHT
    )
    return min(100, round_int(raw))


def score_job_performance(record: JobPerformanceRecord) -> JobPerformance:
    """Derive conversion, success, velocity and quality for one job."""
    conversion = ratio_percent(record.applications, record.views)
    success = ratio_percent(record.accepted_applications, record.applications)
    if record.days_active > 0:
        per_day = round_half_up(record.applications / record.days_active, 1)
    else:
        per_day = 0.0

    return JobPerformance(
        record=record,
        conversion_rate=conversion,
        success_rate=success,
        avg_applications_per_day=per_day,
        quality_score=quality_score(conversion, success, per_day),
        lifecycle_stage=lifecycle_stage(record.days_active),
    )


def score_jobs(records: Sequence[JobPerformanceRecord]) -> list[JobPerformance]:
    return [score_job_performance(r) for r in records]


def top_performing(perfs: Sequence[JobPerformance], n: int = 10) -> list[JobPerformance]:
    """Best ``n`` jobs by quality score, highest first."""
    return sorted(perfs, key=lambda p: p.quality_score, reverse=True)[:n]


def underperforming(perfs: Sequence[JobPerformance], n: int = 5) -> list[JobPerformance]:
    """Worst ``n`` jobs by quality score, lowest first."""
    ranked = sorted(perfs, key=lambda p: p.quality_score, reverse=True)
    return list(reversed(ranked[-n:])) if n > 0 else []


def performance_overview(records: Sequence[JobPerformanceRecord]) -> PerformanceOverview:
    total_jobs = len(records)
    total_views = sum(r.views for r in records)
    total_applications = sum(r.applications for r in records)
    return PerformanceOverview(
        total_jobs=total_jobs,
        active_jobs=sum(1 for r in records if r.status == "published"),
        total_views=total_views,
        total_applications=total_applications,
        avg_views_per_job=safe_average(total_views, total_jobs),
        avg_applications_per_job=safe_average(total_applications, total_jobs),
        overall_conversion_rate=ratio_percent(total_applications, total_views),
    )


def group_performance(
    records: Sequence[JobPerformanceRecord],
    key: Callable[[JobPerformanceRecord], str | None],
) -> list[GroupPerformance]:
    """Aggregate jobs by ``key``, most applications first. Unkeyed jobs are skipped."""
    groups: dict[str, list[JobPerformanceRecord]] = {}
    for record in records:
        name = key(record)
        if name:
            groups.setdefault(name, []).append(record)

    result = []
    for name, members in groups.items():
        views = sum(r.views for r in members)
        applications = sum(r.applications for r in members)
        result.append(
            GroupPerformance(
                name=name,
                total_jobs=len(members),
                total_views=views,
                total_applications=applications,
                avg_views_per_job=safe_average(views, len(members)),
                avg_applications_per_job=safe_average(applications, len(members)),
                conversion_rate=ratio_percent(applications, views),
            )
        )
    result.sort(key=lambda g: g.total_applications, reverse=True)
    return result


def trending_skills(records: Sequence[JobPerformanceRecord], limit: int = 15) -> list[SkillDemand]:
    """Most requested skills across jobs, counted case-insensitively."""
    counts: Counter[str] = Counter(
        skill.strip().lower()
        for record in records
        for skill in record.skills_required
        if skill.strip()
    )
    return [
        SkillDemand(skill=skill[:1].upper() + skill[1:], demand_count=count)
        for skill, count in counts.most_common(limit)
    ]


def salary_by_experience(records: Sequence[JobPerformanceRecord]) -> list[SalaryBand]:
    """Salary midpoint statistics per experience level, best paid first.

    Only jobs quoting both a min and a max salary take part.
    """
    midpoints: dict[str, list[float]] = {}
    for record in records:
        if record.salary_min is None or record.salary_max is None:
            continue
        level = record.experience_level or "unknown"
        midpoints.setdefault(level, []).append((record.salary_min + record.salary_max) / 2)

    bands = [
        SalaryBand(
            experience_level=level,
            job_count=len(values),
            avg_salary=safe_average(sum(values), len(values)),
            min_salary=min(values),
            max_salary=max(values),
        )
        for level, values in midpoints.items()
    ]
    bands.sort(key=lambda b: b.avg_salary, reverse=True)
    return bands


def build_performance_report(
    records: Sequence[JobPerformanceRecord],
    config: PerformanceConfig | None = None,
) -> PerformanceReport:
    """Score every job and assemble the full performance report."""
    config = config or PerformanceConfig()
    perfs = score_jobs(records)
    logger.debug("build_performance_report: scored %d jobs", len(perfs))
    return PerformanceReport(
        overview=performance_overview(records),
        performance_metrics=perfs,
        industry_performance=group_performance(records, lambda r: r.industry),
        location_performance=group_performance(records, lambda r: r.location),
        trending_skills=trending_skills(records, config.trending_skills_limit),
        salary_analysis=salary_by_experience(records),
        top_performing_jobs=top_performing(perfs, config.top_n),
        underperforming_jobs=underperforming(perfs, config.bottom_n),
    )
