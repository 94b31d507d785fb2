"""Serialize report records to CSV or JSON.

CSV quoting is deliberately narrower than the csv module's: a field is quoted
(with inner quotes doubled) only when it contains a comma, a double quote or
a newline. Rows are joined with a bare newline and the header comes first.
"""

import json
import logging
from collections.abc import Callable, Sequence
from datetime import date, datetime, timedelta
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

from jobboard_analytics.reporting.records import (
    REPORT_KINDS,
    ApplicationReportRecord,
    CompanyReportRecord,
    JobReportRecord,
    ReportRecord,
    ReportRecordList,
    UserReportRecord,
)

logger = logging.getLogger(__name__)

ExportFormat = Literal["csv", "json"]
Locale = Literal["en", "vi"]

MIME_TYPES: dict[str, str] = {
    "csv": "text/csv",
    "json": "application/json",
}

HEADERS: dict[str, dict[str, list[str]]] = {
    "en": {
        "applications": [
            "ID",
            "Applied Date",
            "Status",
            "Job Title",
            "Company Name",
            "Candidate Name",
            "Candidate Email",
            "Has Cover Letter",
            "Has CV",
        ],
        "jobs": [
            "ID",
            "Title",
            "Status",
            "Posted Date",
            "Company",
            "Location",
            "Industry",
            "Min Salary",
            "Max Salary",
            "Experience Level",
            "Employment Type",
            "Application Count",
        ],
        "companies": [
            "ID",
            "Company Name",
            "Website",
            "Size",
            "Verification Status",
            "Registration Date",
            "Industry",
            "Location",
            "Jobs Posted",
        ],
        "users": [
            "ID",
            "Email",
            "Full Name",
            "Role",
            "Status",
            "Registration Date",
            "Experience Level",
            "Looking For Job",
            "Companies Owned",
        ],
    },
    "vi": {
        "applications": [
            "ID",
            "Ngày ứng tuyển",
            "Trạng thái",
            "Tên công việc",
            "Tên công ty",
            "Tên ứng viên",
            "Email ứng viên",
            "Có thư xin việc",
            "Có CV",
        ],
        "jobs": [
            "ID",
            "Tiêu đề",
            "Trạng thái",
            "Ngày đăng",
            "Công ty",
            "Địa điểm",
            "Ngành nghề",
            "Mức lương tối thiểu",
            "Mức lương tối đa",
            "Kinh nghiệm",
            "Loại hình",
            "Số đơn ứng tuyển",
        ],
        "companies": [
            "ID",
            "Tên công ty",
            "Website",
            "Quy mô",
            "Trạng thái xác minh",
            "Ngày đăng ký",
            "Ngành nghề",
            "Địa điểm",
            "Số công việc đã đăng",
        ],
        "users": [
            "ID",
            "Email",
            "Họ tên",
            "Vai trò",
            "Trạng thái",
            "Ngày đăng ký",
            "Kinh nghiệm",
            "Đang tìm việc",
            "Số công ty sở hữu",
        ],
    },
}

# (true label, false label) per boolean-like field
LABELS: dict[str, dict[str, tuple[str, str]]] = {
    "en": {
        "yes_no": ("Yes", "No"),
        "verified": ("Verified", "Unverified"),
        "active": ("Active", "Inactive"),
    },
    "vi": {
        "yes_no": ("Có", "Không"),
        "verified": ("Đã xác minh", "Chưa xác minh"),
        "active": ("Hoạt động", "Không hoạt động"),
    },
}


class ExportResult(BaseModel):
    """A rendered export ready for the caller to deliver."""

    model_config = ConfigDict(frozen=True)

    file_content: str
    file_name: str
    mime_type: str
    total_records: int


def escape_csv_field(field: str) -> str:
    """Quote a field only if it holds a comma, a double quote or a newline."""
    if "," in field or '"' in field or "\n" in field:
        return '"' + field.replace('"', '""') + '"'
    return field


def _text(value: object) -> str:
    """Render an optional scalar; None and empty strings become ""."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _count(value: int | None) -> str:
    return str(value) if value is not None else "0"


def _flag(value: object, labels: tuple[str, str]) -> str:
    return labels[0] if value else labels[1]


def _application_row(r: ApplicationReportRecord, labels: dict[str, tuple[str, str]]) -> list[str]:
    return [
        _text(r.id),
        _text(r.applied_at),
        _text(r.status),
        _text(r.job_title),
        _text(r.company_name),
        _text(r.applicant_name),
        _text(r.applicant_email),
        _flag(r.cover_letter, labels["yes_no"]),
        _flag(r.custom_cv_path, labels["yes_no"]),
    ]


def _job_row(r: JobReportRecord, labels: dict[str, tuple[str, str]]) -> list[str]:
    return [
        _text(r.id),
        _text(r.title),
        _text(r.status),
        _text(r.created_at),
        _text(r.company_name),
        _text(r.location_name),
        _text(r.industry_name),
        _text(r.salary_min),
        _text(r.salary_max),
        _text(r.experience_level),
        _text(r.employment_type),
        _count(r.application_count),
    ]


def _company_row(r: CompanyReportRecord, labels: dict[str, tuple[str, str]]) -> list[str]:
    return [
        _text(r.id),
        _text(r.name),
        _text(r.website_url),
        _text(r.size),
        _flag(r.is_verified, labels["verified"]),
        _text(r.created_at),
        _text(r.industry_name),
        _text(r.location_name),
        _count(r.job_count),
    ]


def _user_row(r: UserReportRecord, labels: dict[str, tuple[str, str]]) -> list[str]:
    return [
        _text(r.id),
        _text(r.email),
        _text(r.full_name),
        _text(r.role),
        _flag(r.is_active, labels["active"]),
        _text(r.created_at),
        _text(r.experience_level),
        _flag(r.is_looking_for_job, labels["yes_no"]),
        _count(r.company_count),
    ]


_ROW_BUILDERS: dict[str, Callable[[Any, dict[str, tuple[str, str]]], list[str]]] = {
    "application": _application_row,
    "job": _job_row,
    "company": _company_row,
    "user": _user_row,
}


def _check_report_type(report_type: str) -> str:
    kind = REPORT_KINDS.get(report_type)
    if kind is None:
        msg = f"report_type must be one of {sorted(REPORT_KINDS)}, got '{report_type}'"
        raise ValueError(msg)
    return kind


def to_csv(records: Sequence[ReportRecord], report_type: str, locale: Locale = "en") -> str:
    """Render records as CSV text; empty input gives an empty string."""
    kind = _check_report_type(report_type)
    if not records:
        return ""

    labels = LABELS[locale]
    build_row = _ROW_BUILDERS[kind]
    lines = [",".join(escape_csv_field(h) for h in HEADERS[locale][report_type])]
    for record in records:
        if record.kind != kind:
            msg = f"cannot export a '{record.kind}' record in a '{report_type}' report"
            raise ValueError(msg)
        lines.append(",".join(escape_csv_field(f) for f in build_row(record, labels)))
    return "\n".join(lines)


def to_json(records: Sequence[ReportRecord]) -> str:
    """Pretty-print records (2-space indent) exactly as given."""
    data = ReportRecordList.dump_python(list(records), mode="json")
    return json.dumps(data, indent=2, ensure_ascii=False)


def parse_report_json(text: str) -> list[ReportRecord]:
    """Load records written by to_json."""
    return ReportRecordList.validate_json(text)


def format_report(
    records: Sequence[ReportRecord],
    report_type: str,
    fmt: ExportFormat,
    locale: Locale = "en",
) -> str:
    """Serialize records of one report type to ``fmt``."""
    _check_report_type(report_type)
    if fmt == "csv":
        return to_csv(records, report_type, locale)
    if fmt == "json":
        return to_json(records)
    msg = f"format must be one of {sorted(MIME_TYPES)}, got '{fmt}'"
    raise ValueError(msg)


def resolve_date_range(
    start: date | None,
    end: date | None,
    now: datetime,
    default_days: int = 30,
) -> tuple[date, date]:
    """Fill a missing end with today and a missing start with today - default_days.

    Both defaults are anchored on ``now``, never on each other: an explicit
    end older than the window with no start gives start > end.
    """
    end_day = end or now.date()
    start_day = start or (now - timedelta(days=default_days)).date()
    return start_day, end_day


def export_file_name(report_type: str, fmt: str, start: date, end: date) -> str:
    return f"{report_type}_report_{start.isoformat()}_{end.isoformat()}.{fmt}"


def export_report(
    records: Sequence[ReportRecord],
    report_type: str,
    fmt: ExportFormat,
    start: date,
    end: date,
    locale: Locale = "en",
) -> ExportResult:
    """Render records and attach the suggested file name and MIME type."""
    content = format_report(records, report_type, fmt, locale)
    result = ExportResult(
        file_content=content,
        file_name=export_file_name(report_type, fmt, start, end),
        mime_type=MIME_TYPES[fmt],
        total_records=len(records),
    )
    logger.info("Exported %d %s records as %s", len(records), report_type, fmt)
    return result
