"""Tests for configuration models and YAML loading."""

from pathlib import Path
from textwrap import dedent

import pytest
from pydantic import ValidationError

from jobboard_analytics.core.config import (
    AnalyticsSettings,
    ApplicationReportConfig,
    DashboardConfig,
    ExportConfig,
    MatchingConfig,
    PerformanceConfig,
)

EXAMPLE_SETTINGS = Path(__file__).resolve().parents[2] / "config" / "settings.example.yaml"


class TestMatchingConfig:
    def test_defaults(self) -> None:
        m = MatchingConfig()
        assert m.min_score == 30
        assert m.max_results == 10

    def test_min_score_bounds(self) -> None:
        with pytest.raises(ValidationError):
            MatchingConfig(min_score=101)
        with pytest.raises(ValidationError):
            MatchingConfig(min_score=-1)

    def test_max_results_min_one(self) -> None:
        with pytest.raises(ValidationError):
            MatchingConfig(max_results=0)


class TestPerformanceConfig:
    def test_defaults(self) -> None:
        p = PerformanceConfig()
        assert (p.top_n, p.bottom_n, p.trending_skills_limit) == (10, 5, 15)


class TestExportConfig:
    def test_defaults(self) -> None:
        e = ExportConfig()
        assert e.locale == "en"
        assert e.default_window_days == 30

    def test_unknown_locale(self) -> None:
        with pytest.raises(ValidationError):
            ExportConfig(locale="fr")  # type: ignore[arg-type]


class TestDashboardConfig:
    def test_defaults(self) -> None:
        d = DashboardConfig()
        assert d.trend_days == 30
        assert d.recent_days == 7
        assert d.fallbacks.employer_profile_completion == 85
        assert d.top_n == 10
        assert d.fallbacks.platform_uptime == 99.9


class TestApplicationReportConfig:
    def test_defaults(self) -> None:
        a = ApplicationReportConfig()
        assert a.top_jobs == 10
        assert a.avg_response_time_days == 7

    def test_top_jobs_min_one(self) -> None:
        with pytest.raises(ValidationError):
            ApplicationReportConfig(top_jobs=0)


class TestAnalyticsSettings:
    def test_load_from_yaml(self, tmp_path: Path) -> None:
        yaml_content = dedent("""\
            matching:
              min_score: 50
            export:
              locale: vi
            dashboard:
              fallbacks:
                employer_avg_time_to_hire: 21
        """)
        config_file = tmp_path / "settings.yaml"
        config_file.write_text(yaml_content)

        settings = AnalyticsSettings.from_yaml(config_file)

        assert settings.matching.min_score == 50
        assert settings.matching.max_results == 10
        assert settings.export.locale == "vi"
        assert settings.dashboard.fallbacks.employer_avg_time_to_hire == 21
        assert settings.dashboard.fallbacks.user_retention_rate == 85

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        config_file = tmp_path / "settings.yaml"
        config_file.write_text("")
        settings = AnalyticsSettings.from_yaml(config_file)
        assert settings == AnalyticsSettings()

    def test_file_not_found(self) -> None:
        with pytest.raises(FileNotFoundError):
            AnalyticsSettings.from_yaml("/nonexistent/path.yaml")

    def test_invalid_value_raises(self, tmp_path: Path) -> None:
        config_file = tmp_path / "settings.yaml"
        config_file.write_text("performance:\n  top_n: 0\n")
        with pytest.raises(ValidationError):
            AnalyticsSettings.from_yaml(config_file)

    def test_load_example_settings(self) -> None:
        """The shipped example config must be valid and match the defaults."""
        settings = AnalyticsSettings.from_yaml(EXAMPLE_SETTINGS)
        assert settings == AnalyticsSettings()
