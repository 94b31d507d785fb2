"""Rule-based job matching for a candidate profile.

Score range: 0-100. overall = skill_score * 0.7 + salary_score * 0.3, rounded.
Skill matching is lenient: a candidate skill matches a required skill when
either is a case-insensitive substring of the other ("React" ~ "React.js").
"""

import logging
from collections.abc import Sequence

from jobboard_analytics.core.config import MatchingConfig
from jobboard_analytics.core.rounding import round_int
from jobboard_analytics.core.schemas import CandidateProfile, JobListing, JobMatch

logger = logging.getLogger(__name__)

SKILL_WEIGHT = 0.7
SALARY_WEIGHT = 0.3


def count_skill_matches(candidate_skills: Sequence[str], required_skills: Sequence[str]) -> int:
    """Number of candidate skills matched by at least one required skill."""
    required = [s.lower().strip() for s in required_skills if s.strip()]
    if not required:
        return 0
    matched = 0
    for skill in candidate_skills:
        skill_lower = skill.lower()
        if any(req in skill_lower or skill_lower in req for req in required):
            matched += 1
    return matched


def salary_overlap_score(
    candidate: CandidateProfile,
    job: JobListing,
) -> float:
    """Overlap of the two salary ranges as a percent of the wider range.

    0 unless both sides quote a min and a max. A zero-width widest range
    (both quote the same fixed figure) also scores 0.
    """
    bounds = (
        candidate.preferred_salary_min,
        candidate.preferred_salary_max,
        job.salary_min,
        job.salary_max,
    )
    if any(b is None for b in bounds):
        return 0.0
    cand_min, cand_max, job_min, job_max = bounds

    overlap = max(0, min(cand_max, job_max) - max(cand_min, job_min))
    span = max(cand_max - cand_min, job_max - job_min)
    if span <= 0:
        return 0.0
    return min(100.0, 100 * overlap / span)


def score_job(candidate: CandidateProfile, job: JobListing) -> JobMatch:
    """Score a single job against the candidate (no threshold applied)."""
    skill_matches = count_skill_matches(candidate.skills, job.skills_required)
    skill_score = 100 * skill_matches / len(candidate.skills) if candidate.skills else 0.0
    salary_score = salary_overlap_score(candidate, job)

    overall = round_int(skill_score * SKILL_WEIGHT + salary_score * SALARY_WEIGHT)
    overall = max(0, min(100, overall))

    return JobMatch(
        job_id=job.id,
        job_title=job.title,
        skill_match_count=skill_matches,
        skill_score=skill_score,
        salary_score=salary_score,
        overall_score=overall,
    )


def match_jobs(
    candidate: CandidateProfile,
    jobs: Sequence[JobListing],
    config: MatchingConfig | None = None,
) -> list[JobMatch]:
    """Score jobs, drop weak matches, and return the best first.

    Args:
        candidate: The job seeker's skills and salary preference.
        jobs: Candidate set of listings (typically at most 50).
        config: Threshold and result limit; defaults to 30 and 10.

    Returns:
        Matches with overall_score >= min_score, sorted descending (stable
        for ties), truncated to max_results.
    """
    config = config or MatchingConfig()
    scored = [score_job(candidate, job) for job in jobs]
    kept = [m for m in scored if m.overall_score >= config.min_score]
    dropped = len(scored) - len(kept)
    if dropped:
        logger.debug("match_jobs: dropped %d matches below %d", dropped, config.min_score)
    kept.sort(key=lambda m: m.overall_score, reverse=True)
    return kept[: config.max_results]
