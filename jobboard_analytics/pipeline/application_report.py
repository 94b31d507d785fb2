"""Application report: status, industry, location and level breakdowns,
a daily timeline, per-company and per-job results, and the hiring funnel.

Every share is a percent of all applications in the report, so an
application without an industry still counts toward the industry total.
"""

import logging
from collections.abc import Callable, Sequence
from datetime import date

from pydantic import BaseModel, ConfigDict

from jobboard_analytics.core.config import ApplicationReportConfig
from jobboard_analytics.core.schemas import (
    ApplicationRecord,
    BreakdownItem,
    FunnelStageResult,
    TimeSeriesPoint,
)
from jobboard_analytics.pipeline.breakdown import breakdown, count_by
from jobboard_analytics.pipeline.funnel import application_funnel
from jobboard_analytics.pipeline.rates import ratio_percent
from jobboard_analytics.pipeline.time_buckets import bucket_by_day

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "N/A"
SENIOR_LEVEL = "senior_level"


class ApplicationGroupStats(BaseModel):
    """Applications sent to one company or one job, and how many were accepted."""

    model_config = ConfigDict(frozen=True)

    id: int | str
    name: str
    total_applications: int
    accepted_applications: int
    success_rate: int


class CandidateInsight(BaseModel):
    model_config = ConfigDict(frozen=True)

    metric: str
    value: str


class ApplicationReportSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_applications: int
    period: str
    success_rate: int
    avg_response_time: int
    most_active_industry: str
    most_active_location: str


class ApplicationReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    summary: ApplicationReportSummary
    status_breakdown: list[BreakdownItem]
    industry_analysis: list[BreakdownItem]
    location_analysis: list[BreakdownItem]
    timeline_analysis: list[TimeSeriesPoint]
    company_performance: list[ApplicationGroupStats]
    experience_level_trends: list[BreakdownItem]
    funnel_analysis: list[FunnelStageResult]
    top_performing_jobs: list[ApplicationGroupStats]
    candidate_insights: list[CandidateInsight]


def group_applications(
    records: Sequence[ApplicationRecord],
    key: Callable[[ApplicationRecord], tuple[int | str | None, str]],
) -> list[ApplicationGroupStats]:
    """Total and accepted applications per (id, name) key, busiest first.

    Records whose id is None are skipped. Ties keep first-seen order.
    """
    totals: dict[int | str, list[int]] = {}
    names: dict[int | str, str] = {}
    for record in records:
        group_id, name = key(record)
        if group_id is None:
            continue
        counts = totals.setdefault(group_id, [0, 0])
        names.setdefault(group_id, name)
        counts[0] += 1
        if record.status == "accepted":
            counts[1] += 1

    groups = [
        ApplicationGroupStats(
            id=group_id,
            name=names[group_id],
            total_applications=total,
            accepted_applications=accepted,
            success_rate=ratio_percent(accepted, total),
        )
        for group_id, (total, accepted) in totals.items()
    ]
    groups.sort(key=lambda g: g.total_applications, reverse=True)
    return groups


def _share_of(items: list[BreakdownItem], label: str) -> int:
    return next((item.percentage for item in items if item.label == label), 0)


def build_application_report(
    records: Sequence[ApplicationRecord],
    start: date,
    end: date,
    config: ApplicationReportConfig | None = None,
    include_companies: bool = True,
) -> ApplicationReport:
    """Aggregate the applications of one reporting period.

    Args:
        records: Applications already narrowed to the period and any filters.
        start: First day of the period; the timeline starts here.
        end: Last day of the period (inclusive).
        config: Top-jobs limit and the response-time figure; defaults apply.
        include_companies: Per-company results are for admins only, so
            employer reports pass False.
    """
    config = config or ApplicationReportConfig()
    total = len(records)
    statuses = count_by(records, lambda r: r.status)

    industries = breakdown(count_by(records, lambda r: r.industry), total)
    locations = breakdown(count_by(records, lambda r: r.location), total)
    levels = breakdown(count_by(records, lambda r: r.experience_level, default="unknown"), total)
    companies = (
        group_applications(records, lambda r: (r.company_id, r.company_name))
        if include_companies
        else []
    )
    jobs = group_applications(records, lambda r: (r.job_id, r.job_title))

    logger.debug("build_application_report: %d applications, %d jobs", total, len(jobs))
    return ApplicationReport(
        summary=ApplicationReportSummary(
            total_applications=total,
            period=f"{start.isoformat()} to {end.isoformat()}",
            success_rate=ratio_percent(statuses["accepted"], total),
            avg_response_time=config.avg_response_time_days,
            most_active_industry=industries[0].label if industries else NOT_AVAILABLE,
            most_active_location=locations[0].label if locations else NOT_AVAILABLE,
        ),
        # Status order is first-seen, the other breakdowns are busiest first.
        status_breakdown=breakdown(statuses, total, sort=False),
        industry_analysis=industries,
        location_analysis=locations,
        timeline_analysis=bucket_by_day(start, end, records, lambda r: r.applied_at),
        company_performance=companies,
        experience_level_trends=levels,
        funnel_analysis=application_funnel(statuses, total),
        top_performing_jobs=jobs[: config.top_jobs],
        candidate_insights=[
            CandidateInsight(
                metric="avg_response_time",
                value=f"{config.avg_response_time_days} days",
            ),
            CandidateInsight(
                metric="senior_candidates",
                value=f"{_share_of(levels, SENIOR_LEVEL)}%",
            ),
        ],
    )
