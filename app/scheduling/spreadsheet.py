"""
Spreadsheet import, export and template workbooks (openpyxl).

Import layout is positional, starting at the first row whose first cell
is ``Rider Email``::

    Rider Email | Rider Name | Horse Name | Date | Time | Duration | Session Type | Notes

Row numbers in error messages are worksheet row numbers, so they match
what the user sees in their spreadsheet application.
"""

from __future__ import annotations

import datetime
import io
from dataclasses import dataclass, field
from typing import Any, Iterable

from dateutil import parser as date_parser
from openpyxl import Workbook, load_workbook
from openpyxl.styles import Font
from openpyxl.worksheet.worksheet import Worksheet

from app.models.enums import SessionType
from app.schemas.training_session import SessionDraft

HEADER_MARKER = "Rider Email"

SESSIONS_SHEET = "Training Sessions"
COMPETITIONS_SHEET = "Competitions"
TEMPLATE_SHEET = "Sessions Template"

SESSION_EXPORT_HEADERS = ["Date", "Time", "Rider", "Horse", "Type", "Duration (min)", "Status", "Notes"]
COMPETITION_EXPORT_HEADERS = ["Date", "Time", "Event", "Location", "Riders", "Status"]
TEMPLATE_HEADERS = [
    "Rider Email",
    "Rider Name",
    "Horse Name",
    "Date (YYYY-MM-DD)",
    "Time (HH:MM)",
    "Duration (minutes)",
    "Session Type",
    "Notes",
]
TEMPLATE_INSTRUCTIONS = (
    "INSTRUCTIONS: Fill in the rows below with your sessions. Session Type must be one of: "
    + ", ".join(t.value for t in SessionType)
)
TEMPLATE_EXAMPLES = [
    ["rider@example.com", "John Doe", "Thunder", "2026-01-10", "14:00", 60, "Lesson", "Focus on jumping technique"],
    ["rider@example.com", "John Doe", "Thunder", "2026-01-12", "10:30", 45, "Training", "Dressage practice"],
]

DEFAULT_DURATION = 60

_SESSION_TYPES = {t.value.lower(): t for t in SessionType}


class InvalidWorkbookError(ValueError):
    """The uploaded file is not a workbook in the expected layout."""


@dataclass
class ImportParseResult:
    drafts: list[SessionDraft] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


# ======================================================================
# Import
# ======================================================================


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def read_import_rows(content: bytes) -> list[tuple[int, tuple]]:
    """Data rows of the first worksheet as ``(row_number, values)`` pairs.

    Raises:
        InvalidWorkbookError: unreadable file or no ``Rider Email`` header row
    """
    try:
        workbook = load_workbook(io.BytesIO(content), read_only=True, data_only=True)
    except Exception as e:
        raise InvalidWorkbookError(f"Could not read workbook: {e}") from e

    try:
        sheet = workbook.worksheets[0]
        rows = list(sheet.iter_rows(values_only=True))
    finally:
        workbook.close()

    for index, row in enumerate(rows):
        if row and _text(row[0]) == HEADER_MARKER:
            # worksheet rows are 1-based; data starts right after the header
            return [(index + 2 + offset, data) for offset, data in enumerate(rows[index + 1:])]

    raise InvalidWorkbookError("Invalid file format. Please use the template file.")


def _parse_date(value: Any) -> datetime.date:
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    if isinstance(value, str):
        return date_parser.parse(value.strip()).date()
    raise ValueError(f"unsupported date value {value!r}")


def _parse_time(value: Any) -> datetime.time:
    if isinstance(value, datetime.datetime):
        return value.time()
    if isinstance(value, datetime.time):
        return value
    if isinstance(value, str):
        return date_parser.parse(value.strip()).time()
    raise ValueError(f"unsupported time value {value!r}")


def _parse_duration(value: Any) -> int:
    try:
        minutes = int(float(_text(value)))
    except (ValueError, OverflowError):
        return DEFAULT_DURATION
    return minutes if minutes > 0 else DEFAULT_DURATION


def reconcile_rows(rows: Iterable[tuple[int, tuple]], riders: dict[str, str]) -> ImportParseResult:
    """Validate import rows against the trainer's approved riders.

    Args:
        rows: ``(row_number, values)`` pairs as returned by :func:`read_import_rows`
        riders: approved rider emails (lower-cased) mapped to display names

    Returns:
        Drafts for every valid row and one error message per rejected row
    """
    result = ImportParseResult()

    for row_number, raw in rows:
        values = list(raw) + [None] * (8 - len(raw))
        if all(_text(v) == "" for v in values):
            continue

        rider_email = _text(values[0])
        rider_name = _text(values[1])
        horse_name = _text(values[2])
        date_value, time_value = values[3], values[4]
        type_text = _text(values[6])
        notes = _text(values[7])

        if not rider_email or _text(date_value) == "" or _text(time_value) == "":
            result.errors.append(f"Row {row_number}: Missing required fields (Rider Email, Date, or Time)")
            continue

        email = rider_email.lower()
        if email not in riders:
            result.errors.append(f"Row {row_number}: Rider {rider_email} is not connected to you")
            continue

        try:
            session_date = datetime.datetime.combine(_parse_date(date_value), _parse_time(time_value))
        except (ValueError, OverflowError):
            result.errors.append(f"Row {row_number}: Invalid date/time format")
            continue

        session_type = _SESSION_TYPES.get(type_text.lower()) if type_text else SessionType.LESSON
        if session_type is None:
            result.errors.append(f"Row {row_number}: Unknown session type '{type_text}'")
            continue

        result.drafts.append(SessionDraft(
            rider_email=email,
            rider_name=rider_name or riders[email],
            horse_name=horse_name or None,
            session_date=session_date,
            duration=_parse_duration(values[5]),
            session_type=session_type,
            notes=notes or None,
        ))

    return result


# ======================================================================
# Export / template
# ======================================================================


def _write_header(sheet: Worksheet, headers: list[str]) -> None:
    sheet.append(headers)
    bold_font = Font(bold=True)
    for cell in sheet[sheet.max_row]:
        cell.font = bold_font


def _autofit(sheet: Worksheet) -> None:
    for col in sheet.columns:
        max_length = max(len(str(cell.value or "")) for cell in col)
        sheet.column_dimensions[col[0].column_letter].width = min(max(max_length + 2, 10), 60)


def _to_bytes(workbook: Workbook) -> bytes:
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


def build_export_workbook(sessions: Iterable[Any], competitions: Iterable[Any]) -> bytes:
    """Two-sheet workbook of the given sessions and competitions."""
    workbook = Workbook()

    sheet = workbook.active
    sheet.title = SESSIONS_SHEET
    _write_header(sheet, SESSION_EXPORT_HEADERS)
    for s in sessions:
        sheet.append([
            s.session_date.strftime("%Y-%m-%d"),
            s.session_date.strftime("%H:%M"),
            s.rider_name or s.rider_email,
            s.horse_name or "-",
            s.session_type,
            s.duration,
            s.status,
            s.notes or "-",
        ])
    _autofit(sheet)

    sheet = workbook.create_sheet(COMPETITIONS_SHEET)
    _write_header(sheet, COMPETITION_EXPORT_HEADERS)
    for c in competitions:
        riders = ", ".join(r.get("rider_name") or r.get("rider_email", "") for r in (c.riders or []))
        sheet.append([
            c.competition_date.strftime("%Y-%m-%d"),
            c.competition_date.strftime("%H:%M"),
            c.name,
            c.location or "",
            riders or "-",
            c.status,
        ])
    _autofit(sheet)

    return _to_bytes(workbook)


def build_template_workbook() -> bytes:
    """Import template: instruction line, header row, two example rows."""
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = TEMPLATE_SHEET
    sheet.append([TEMPLATE_INSTRUCTIONS])
    sheet["A1"].font = Font(italic=True)
    _write_header(sheet, TEMPLATE_HEADERS)
    for example in TEMPLATE_EXAMPLES:
        sheet.append(example)
    return _to_bytes(workbook)


def export_filename(anchor: datetime.date) -> str:
    return f"Schedule_{anchor.strftime('%B_%Y')}.xlsx"
