"""Funnel analysis over ordered stage counts.

Stage 0 is the entry population. Each stage reports its share of stage 0 and
its conversion from the stage immediately before it.
"""

import logging
from collections.abc import Mapping, Sequence

from jobboard_analytics.core.schemas import FunnelStage, FunnelStageResult
from jobboard_analytics.pipeline.rates import ratio_percent

logger = logging.getLogger(__name__)

APPLICATION_FUNNEL_STATUSES = ("reviewing", "interviewing", "accepted")

DEFAULT_FUNNEL_LABELS = {
    "submitted": "Applications",
    "reviewing": "Reviewing",
    "interviewing": "Interviewing",
    "accepted": "Accepted",
}


def analyze_funnel(stages: Sequence[FunnelStage]) -> list[FunnelStageResult]:
    """Compute percentage-of-total and stage-to-stage conversion.

    A stage following an empty stage converts at 100%, same as stage 0.
    """
    if not stages:
        return []

    total = stages[0].count
    results: list[FunnelStageResult] = []
    for index, stage in enumerate(stages):
        previous = stages[index - 1].count if index > 0 else 0
        if index > 0 and previous > 0:
            conversion = ratio_percent(stage.count, previous)
        else:
            conversion = 100
        results.append(
            FunnelStageResult(
                name=stage.name,
                count=stage.count,
                percentage_of_total=ratio_percent(stage.count, total),
                conversion_rate=conversion,
            )
        )
    return results


def application_funnel(
    status_counts: Mapping[str, int],
    total: int,
    labels: Mapping[str, str] | None = None,
) -> list[FunnelStageResult]:
    """Build the submitted -> reviewing -> interviewing -> accepted funnel.

    Args:
        status_counts: Application count per status.
        total: Number of submitted applications (the entry stage).
        labels: Optional display names keyed by "submitted" and status.
    """
    names = {**DEFAULT_FUNNEL_LABELS, **(labels or {})}
    stages = [FunnelStage(name=names["submitted"], count=total)]
    stages.extend(
        FunnelStage(name=names[status], count=status_counts.get(status, 0))
        for status in APPLICATION_FUNNEL_STATUSES
    )
    logger.debug("application_funnel: %d submitted", total)
    return analyze_funnel(stages)
