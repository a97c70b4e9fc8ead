from __future__ import annotations

from datetime import date, datetime, time, timedelta
from types import SimpleNamespace

import pytest

from langexport.services.exporter.cells import (
    DISABLED_DATE_POLICY,
    SerialDatePolicy,
    normalize_cell,
    normalize_value,
    serial_to_datetime,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, ""),
        ("Hello {name}", "Hello {name}"),
        ("  padded  ", "  padded  "),
        ("2024-01-01T00:00:00", "2024-01-01T00:00:00"),
        ("PT1H30M", "PT1H30M"),
        (True, "true"),
        (False, "false"),
        (42, "42"),
        (-7, "-7"),
        (12.0, "12"),
        (1.5, "1.5"),
        (45000.0, "2023-03-15"),
        (45000.75, "2023-03-15"),
        (30000.0, "30000"),
        (70000.0, "70000"),
        (datetime(2024, 5, 10, 13, 45, 30), "2024-05-10 13:45:30"),
        (date(2024, 5, 10), "2024-05-10 00:00:00"),
        (time(8, 5, 0), "1899-12-30 08:05:00"),
        (timedelta(hours=1, minutes=30), "01:30:00"),
        (timedelta(hours=27, minutes=3, seconds=9), "27:03:09"),
    ],
)
def test_normalize_value(value, expected):
    assert normalize_value(value) == expected


def test_float_on_date_cell_is_serial_datetime():
    assert normalize_value(45000.5, "d") == "2023-03-15 12:00:00"


def test_whole_number_on_numeric_cell_uses_date_policy():
    assert normalize_value(45000, "n") == "2023-03-15"
    assert normalize_value(12, "n") == "12"
    assert normalize_value(45000, "n", DISABLED_DATE_POLICY) == "45000"
    assert normalize_value(45000) == "45000"


def test_error_cells_render_diagnostic():
    assert normalize_value("#DIV/0!", "e") == "Error: #DIV/0!"
    cell = SimpleNamespace(value="#N/A", data_type="e")
    assert normalize_cell(cell) == "Error: #N/A"


def test_normalize_cell_without_data_type():
    assert normalize_cell(SimpleNamespace(value=3)) == "3"


def test_date_policy_can_be_disabled():
    assert normalize_value(45000.0, policy=DISABLED_DATE_POLICY) == "45000"
    assert normalize_value(45000.5, policy=DISABLED_DATE_POLICY) == "45000.5"


def test_date_policy_can_be_swapped():
    policy = SerialDatePolicy(lower=0, upper=10)
    assert normalize_value(5.0, policy=policy) == "1900-01-04"
    assert normalize_value(45000.0, policy=policy) == "45000"


def test_serial_to_datetime():
    assert serial_to_datetime(45000.25) == datetime(2023, 3, 15, 6, 0, 0)
    assert serial_to_datetime(0) == datetime(1899, 12, 30)
