"""Cell normalization.

Every value that leaves a worksheet goes through ``normalize_cell`` so the
rest of the exporter only ever deals with strings. The rules:

- text is returned unchanged, including text that already looks like an ISO
  date or duration;
- booleans become ``"true"`` / ``"false"``;
- numbers (whole numbers read from a numeric cell included) matched by the
  serial-date policy become ``YYYY-MM-DD``, other integral values an
  integer string, anything else ``str(value)``;
- datetimes, plain dates (at midnight) and times of day (on 1899-12-30)
  become ``YYYY-MM-DD HH:MM:SS``;
- durations become ``HH:MM:SS`` of their total seconds;
- error cells become ``"Error: <code>"``;
- empty cells become ``""``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Any

EXCEL_EPOCH = datetime(1899, 12, 30)
SECONDS_PER_DAY = 86400

DATE_FORMAT = "%Y-%m-%d"
DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True, slots=True)
class SerialDatePolicy:
    """Decides whether a bare float is really a spreadsheet date.

    Spreadsheets store dates as day counts, so a number cell that lost its
    date format still holds something like ``45123.0``. Values strictly
    between ``lower`` and ``upper`` (roughly 1982 to 2091) are treated as such
    serial dates.
    """

    lower: float = 30000
    upper: float = 70000
    enabled: bool = True

    def matches(self, value: float) -> bool:
        return self.enabled and self.lower < value < self.upper


DEFAULT_DATE_POLICY = SerialDatePolicy()
DISABLED_DATE_POLICY = SerialDatePolicy(enabled=False)


def serial_to_datetime(serial: float) -> datetime:
    """Interpret ``serial`` as days-and-fraction since 1899-12-30."""

    days = math.trunc(serial)
    seconds = int((serial - days) * SECONDS_PER_DAY)
    return EXCEL_EPOCH + timedelta(days=days, seconds=seconds)


def format_duration(total_seconds: int) -> str:
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    seconds = total_seconds % 60
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def _format_float(value: float, policy: SerialDatePolicy) -> str:
    if policy.matches(value):
        return (EXCEL_EPOCH + timedelta(days=int(value))).strftime(DATE_FORMAT)
    if value.is_integer():
        return str(int(value))
    return str(value)


def normalize_value(value: Any, data_type: str | None = None, policy: SerialDatePolicy = DEFAULT_DATE_POLICY) -> str:
    """Render a raw cell value as its canonical string."""

    if value is None:
        return ""
    if data_type == "e":
        return f"Error: {value}"
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        # openpyxl hands back whole numbers from numeric cells as int.
        if data_type == "n":
            return _format_float(float(value), policy)
        return str(value)
    if isinstance(value, float):
        if data_type == "d":
            return serial_to_datetime(value).strftime(DATETIME_FORMAT)
        return _format_float(value, policy)
    if isinstance(value, datetime):
        return value.strftime(DATETIME_FORMAT)
    if isinstance(value, date):
        return datetime.combine(value, time()).strftime(DATETIME_FORMAT)
    if isinstance(value, time):
        return datetime.combine(EXCEL_EPOCH.date(), value).strftime(DATETIME_FORMAT)
    if isinstance(value, timedelta):
        return format_duration(int(value.total_seconds()))
    return str(value)


def normalize_cell(cell: Any, policy: SerialDatePolicy = DEFAULT_DATE_POLICY) -> str:
    """Normalize an openpyxl cell (regular, read-only or empty)."""

    return normalize_value(cell.value, getattr(cell, "data_type", None), policy)


__all__ = [
    "DEFAULT_DATE_POLICY",
    "DISABLED_DATE_POLICY",
    "SerialDatePolicy",
    "format_duration",
    "normalize_cell",
    "normalize_value",
    "serial_to_datetime",
]
