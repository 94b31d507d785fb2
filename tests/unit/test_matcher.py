"""Tests for job-candidate matching."""

from jobboard_analytics.core.config import MatchingConfig
from jobboard_analytics.core.schemas import CandidateProfile, JobListing
from jobboard_analytics.pipeline.matcher import (
    count_skill_matches,
    match_jobs,
    salary_overlap_score,
    score_job,
)


def _candidate(
    *,
    skills: list[str] | None = None,
    salary_min: float | None = None,
    salary_max: float | None = None,
) -> CandidateProfile:
    return CandidateProfile(
        skills=skills if skills is not None else ["Python", "SQL"],
        preferred_salary_min=salary_min,
        preferred_salary_max=salary_max,
    )


def _job(
    job_id: int = 1,
    *,
    skills: list[str] | None = None,
    salary_min: float | None = None,
    salary_max: float | None = None,
) -> JobListing:
    return JobListing(
        id=job_id,
        title=f"Job {job_id}",
        skills_required=skills if skills is not None else ["Python"],
        salary_min=salary_min,
        salary_max=salary_max,
    )


# ---------------------------------------------------------------------------
# Skill overlap
# ---------------------------------------------------------------------------


class TestSkillMatches:
    def test_substring_both_directions(self) -> None:
        result = score_job(_candidate(skills=["React"]), _job(skills=["reactjs"]))
        assert result.skill_match_count == 1

    def test_candidate_skill_contains_required(self) -> None:
        assert count_skill_matches(["PostgreSQL"], ["sql"]) == 1

    def test_case_insensitive(self) -> None:
        assert count_skill_matches(["PYTHON"], ["python"]) == 1

    def test_no_overlap(self) -> None:
        assert count_skill_matches(["Go"], ["Java"]) == 0

    def test_counts_candidate_skills_not_required(self) -> None:
        # One candidate skill matching two required skills still counts once.
        assert count_skill_matches(["Java"], ["Java", "JavaScript"]) == 1

    def test_blank_required_skills_ignored(self) -> None:
        assert count_skill_matches(["Python"], ["", "  "]) == 0

    def test_blank_required_skill_matches_nothing(self) -> None:
        assert count_skill_matches(["Python", "SQL"], ["", "python"]) == 1

    def test_skill_score_is_share_of_candidate_skills(self) -> None:
        result = score_job(
            _candidate(skills=["Python", "SQL", "Docker", "AWS"]),
            _job(skills=["python", "docker"]),
        )
        assert result.skill_score == 50.0

    def test_no_candidate_skills(self) -> None:
        result = score_job(_candidate(skills=[]), _job(skills=["Python"]))
        assert result.skill_score == 0.0
        assert result.skill_match_count == 0

    def test_duplicate_candidate_skills_collapse(self) -> None:
        candidate = _candidate(skills=["React", "react", " REACT "])
        assert candidate.skills == ("React",)


# ---------------------------------------------------------------------------
# Salary overlap
# ---------------------------------------------------------------------------


class TestSalaryOverlap:
    def test_partial_overlap(self) -> None:
        candidate = _candidate(salary_min=1000, salary_max=2000)
        job = _job(salary_min=1500, salary_max=3500)
        # overlap 500, widest range 2000
        assert salary_overlap_score(candidate, job) == 25.0

    def test_contained_range(self) -> None:
        candidate = _candidate(salary_min=1000, salary_max=3000)
        job = _job(salary_min=1500, salary_max=2500)
        assert salary_overlap_score(candidate, job) == 50.0

    def test_identical_ranges(self) -> None:
        candidate = _candidate(salary_min=1000, salary_max=2000)
        job = _job(salary_min=1000, salary_max=2000)
        assert salary_overlap_score(candidate, job) == 100.0

    def test_disjoint(self) -> None:
        candidate = _candidate(salary_min=1000, salary_max=2000)
        job = _job(salary_min=3000, salary_max=4000)
        assert salary_overlap_score(candidate, job) == 0.0

    def test_missing_bound_scores_zero(self) -> None:
        candidate = _candidate(salary_min=1000, salary_max=None)
        job = _job(salary_min=1000, salary_max=2000)
        assert salary_overlap_score(candidate, job) == 0.0

    def test_job_without_salary(self) -> None:
        candidate = _candidate(salary_min=1000, salary_max=2000)
        assert salary_overlap_score(candidate, _job()) == 0.0

    def test_zero_width_ranges_score_zero(self) -> None:
        candidate = _candidate(salary_min=1500, salary_max=1500)
        job = _job(salary_min=1500, salary_max=1500)
        assert salary_overlap_score(candidate, job) == 0.0

    def test_zero_minimum_counts_as_present(self) -> None:
        candidate = _candidate(salary_min=0, salary_max=1000)
        job = _job(salary_min=0, salary_max=1000)
        assert salary_overlap_score(candidate, job) == 100.0


# ---------------------------------------------------------------------------
# Overall score and ranking
# ---------------------------------------------------------------------------


class TestScoreJob:
    def test_weighted_overall(self) -> None:
        candidate = _candidate(skills=["Python", "SQL"], salary_min=1000, salary_max=2000)
        job = _job(skills=["Python"], salary_min=1500, salary_max=3500)
        result = score_job(candidate, job)
        # 50 * 0.7 + 25 * 0.3 = 42.5 -> 43
        assert result.overall_score == 43

    def test_perfect_match(self) -> None:
        candidate = _candidate(skills=["Python"], salary_min=1, salary_max=2)
        job = _job(skills=["python"], salary_min=1, salary_max=2)
        assert score_job(candidate, job).overall_score == 100

    def test_carries_job_identity(self) -> None:
        result = score_job(_candidate(), _job(7))
        assert result.job_id == 7
        assert result.job_title == "Job 7"

    def test_single_string_skill_not_split(self) -> None:
        candidate = CandidateProfile(skills="React")
        result = score_job(candidate, _job(skills=["Java"]))
        assert result.skill_match_count == 0
        assert result.overall_score == 0


class TestMatchJobs:
    def test_empty_jobs(self) -> None:
        assert match_jobs(_candidate(), []) == []

    def test_no_skills_no_salary_is_empty(self) -> None:
        jobs = [_job(i) for i in range(5)]
        assert match_jobs(_candidate(skills=[]), jobs) == []

    def test_below_threshold_dropped(self) -> None:
        candidate = _candidate(skills=["Python", "SQL", "Go", "Rust"])
        # 1/4 skills -> 25 * 0.7 = 17.5 -> 18
        jobs = [_job(1, skills=["python"])]
        assert match_jobs(candidate, jobs) == []

    def test_threshold_inclusive(self) -> None:
        candidate = _candidate(skills=["a", "b", "c", "d", "e", "f", "g"])
        # 3/7 skills -> 42.857 * 0.7 = 30.0
        jobs = [_job(1, skills=["a", "b", "c"])]
        result = match_jobs(candidate, jobs)
        assert [m.overall_score for m in result] == [30]

    def test_sorted_descending(self) -> None:
        candidate = _candidate(skills=["Python", "SQL"])
        jobs = [
            _job(1, skills=["python"]),
            _job(2, skills=["python", "sql"]),
            _job(3, skills=["sql"]),
        ]
        result = match_jobs(candidate, jobs)
        assert [m.job_id for m in result] == [2, 1, 3]

    def test_ties_keep_input_order(self) -> None:
        candidate = _candidate(skills=["Python"])
        jobs = [_job(i, skills=["python"]) for i in (5, 3, 9)]
        assert [m.job_id for m in match_jobs(candidate, jobs)] == [5, 3, 9]

    def test_truncated_to_ten(self) -> None:
        jobs = [_job(i, skills=["python"]) for i in range(25)]
        result = match_jobs(_candidate(skills=["Python"]), jobs)
        assert len(result) == 10

    def test_scores_in_range(self) -> None:
        candidate = _candidate(skills=["Python", "SQL"], salary_min=10, salary_max=20)
        jobs = [
            _job(1, skills=["python", "sql"], salary_min=10, salary_max=20),
            _job(2, skills=["go"], salary_min=15, salary_max=50),
            _job(3, skills=["sql"], salary_min=0, salary_max=5),
        ]
        for m in match_jobs(candidate, jobs, MatchingConfig(min_score=0)):
            assert 0 <= m.overall_score <= 100

    def test_config_overrides(self) -> None:
        candidate = _candidate(skills=["Python", "SQL", "Go", "Rust"])
        jobs = [_job(i, skills=["python"]) for i in range(5)]
        result = match_jobs(candidate, jobs, MatchingConfig(min_score=10, max_results=2))
        assert len(result) == 2
