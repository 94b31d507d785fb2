"""Configuration models and YAML loader for the analytics engine."""

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field


class MatchingConfig(BaseModel):
    """Thresholds for job-candidate matching. Weights are fixed in the matcher."""

    min_score: int = Field(default=30, ge=0, le=100)
    max_results: int = Field(default=10, ge=1)


class PerformanceConfig(BaseModel):
    """Sizes of the ranked lists in the job performance report."""

    top_n: int = Field(default=10, ge=1)
    bottom_n: int = Field(default=5, ge=1)
    trending_skills_limit: int = Field(default=15, ge=1)


class ApplicationReportConfig(BaseModel):
    """Application report list sizes and untracked figures."""

    top_jobs: int = Field(default=10, ge=1)
    # Not derivable without status history.
    avg_response_time_days: int = 7


class ExportConfig(BaseModel):
    """Report export defaults."""

    locale: Literal["en", "vi"] = "en"
    default_window_days: int = Field(default=30, ge=1)


class DashboardFallbacks(BaseModel):
    """Placeholder figures shown when a metric is not tracked upstream."""

    employer_profile_completion: int = 85
    employer_avg_time_to_hire: int = 14
    job_seeker_avg_response_time: int = 3
    user_retention_rate: int = 85
    platform_uptime: float = 99.9
    avg_response_time: int = 150
    error_rate: float = 0.1
    storage_usage: int = 75
    bandwidth_usage: int = 60


class DashboardConfig(BaseModel):
    """Window sizes and fallbacks for dashboard composition."""

    trend_days: int = Field(default=30, ge=1)
    recent_days: int = Field(default=7, ge=1)
    top_n: int = Field(default=10, ge=1)
    fallbacks: DashboardFallbacks = Field(default_factory=DashboardFallbacks)


class AnalyticsSettings(BaseModel):
    """Top-level settings loaded from YAML."""

    matching: MatchingConfig = Field(default_factory=MatchingConfig)
    performance: PerformanceConfig = Field(default_factory=PerformanceConfig)
    application_report: ApplicationReportConfig = Field(default_factory=ApplicationReportConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
    dashboard: DashboardConfig = Field(default_factory=DashboardConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "AnalyticsSettings":
        """Load settings from a YAML file."""
        path = Path(path)
        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)
        raw: dict[str, Any] = yaml.safe_load(path.read_text()) or {}
        return cls.model_validate(raw)
