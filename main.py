"""CLI entry point for the job-board analytics engine.

Reads already-exported records from files, runs one engine operation and
prints (or writes) the result.
"""

import argparse
import json
import logging
import sys
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any

import yaml

from jobboard_analytics.core.config import AnalyticsSettings
from jobboard_analytics.core.schemas import (
    ApplicationRecord,
    CandidateProfile,
    JobListing,
    JobPerformanceRecord,
)
from jobboard_analytics.pipeline.application_report import build_application_report
from jobboard_analytics.pipeline.matcher import match_jobs
from jobboard_analytics.pipeline.performance import build_performance_report
from jobboard_analytics.reporting.exporter import export_report, resolve_date_range
from jobboard_analytics.reporting.records import REPORT_KINDS, ReportRecordList

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Job-board analytics - reports, matching and job performance",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to settings YAML file (default: built-in defaults)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # --- export subcommand ---
    export_parser = subparsers.add_parser("export", help="Export report records to CSV or JSON")
    export_parser.add_argument("--input", required=True, help="JSON file with report records")
    export_parser.add_argument(
        "--type",
        dest="report_type",
        required=True,
        choices=sorted(REPORT_KINDS),
        help="Report type",
    )
    export_parser.add_argument("--format", dest="fmt", default="csv", choices=["csv", "json"])
    export_parser.add_argument("--start", type=date.fromisoformat, help="Range start (YYYY-MM-DD)")
    export_parser.add_argument("--end", type=date.fromisoformat, help="Range end (YYYY-MM-DD)")
    export_parser.add_argument(
        "--output-dir",
        default=None,
        help="Write the file here under its suggested name instead of printing",
    )

    # --- match subcommand ---
    match_parser = subparsers.add_parser("match", help="Rank jobs for a candidate profile")
    match_parser.add_argument("--profile", required=True, help="Candidate profile YAML")
    match_parser.add_argument("--jobs", required=True, help="JSON file with job listings")

    # --- performance subcommand ---
    perf_parser = subparsers.add_parser("performance", help="Build the job performance report")
    perf_parser.add_argument("--input", required=True, help="JSON file with job activity records")

    # --- application-report subcommand ---
    report_parser = subparsers.add_parser(
        "application-report", help="Summarize applications over a period",
    )
    report_parser.add_argument("--input", required=True, help="JSON file with application records")
    report_parser.add_argument("--start", type=date.fromisoformat, help="Period start (YYYY-MM-DD)")
    report_parser.add_argument("--end", type=date.fromisoformat, help="Period end (YYYY-MM-DD)")
    report_parser.add_argument(
        "--employer",
        action="store_true",
        help="Employer view: leave out per-company results",
    )

    return parser.parse_args(argv)


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def load_settings(path: str | None) -> AnalyticsSettings:
    if path is None:
        return AnalyticsSettings()
    return AnalyticsSettings.from_yaml(path)


def _read_json_list(path: str | Path) -> list[dict[str, Any]]:
    path = Path(path)
    if not path.exists():
        msg = f"Input file not found: {path}"
        raise FileNotFoundError(msg)
    data = json.loads(path.read_text())
    if not isinstance(data, list):
        msg = f"{path} must contain a JSON list"
        raise ValueError(msg)
    return data


def cmd_export(args: argparse.Namespace, settings: AnalyticsSettings) -> None:
    """Handle export subcommand."""
    kind = REPORT_KINDS[args.report_type]
    raw = [{"kind": kind, **item} for item in _read_json_list(args.input)]
    records = ReportRecordList.validate_python(raw)

    start, end = resolve_date_range(
        args.start, args.end, datetime.now(timezone.utc), settings.export.default_window_days,
    )
    result = export_report(
        records, args.report_type, args.fmt, start, end, settings.export.locale,
    )

    if args.output_dir:
        out = Path(args.output_dir) / result.file_name
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(result.file_content)
        print(f"Wrote {result.total_records} records to {out} ({result.mime_type})")
    else:
        print(result.file_content)


def cmd_match(args: argparse.Namespace, settings: AnalyticsSettings) -> None:
    """Handle match subcommand."""
    profile_path = Path(args.profile)
    if not profile_path.exists():
        msg = f"Profile file not found: {profile_path}"
        raise FileNotFoundError(msg)
    candidate = CandidateProfile.model_validate(yaml.safe_load(profile_path.read_text()) or {})
    jobs = [JobListing.model_validate(item) for item in _read_json_list(args.jobs)]

    matches = match_jobs(candidate, jobs, settings.matching)
    logger.info("%d of %d jobs matched", len(matches), len(jobs))
    print(json.dumps([m.model_dump(mode="json") for m in matches], indent=2))


def cmd_performance(args: argparse.Namespace, settings: AnalyticsSettings) -> None:
    """Handle performance subcommand."""
    records = [JobPerformanceRecord.model_validate(item) for item in _read_json_list(args.input)]
    report = build_performance_report(records, settings.performance)
    print(report.model_dump_json(indent=2))


def cmd_application_report(args: argparse.Namespace, settings: AnalyticsSettings) -> None:
    """Handle application-report subcommand."""
    records = [ApplicationRecord.model_validate(item) for item in _read_json_list(args.input)]
    start, end = resolve_date_range(
        args.start, args.end, datetime.now(timezone.utc), settings.export.default_window_days,
    )
    report = build_application_report(
        records, start, end, settings.application_report, include_companies=not args.employer,
    )
    print(report.model_dump_json(indent=2))


COMMANDS = {
    "export": cmd_export,
    "match": cmd_match,
    "performance": cmd_performance,
    "application-report": cmd_application_report,
}


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        settings = load_settings(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        COMMANDS[args.command](args, settings)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
