from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path
from typing import Callable, Dict, List, Sequence

import pytest
from openpyxl import Workbook

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Keep log files out of the user's home directory.
os.environ.setdefault("LANGEXPORT_HOME", tempfile.mkdtemp(prefix="langexport-tests-"))
os.environ.pop("LANGEXPORT_SETTINGS", None)

from langexport.core.progress import ProgressChannel, ProgressEvent  # noqa: E402

LANG_SHEET = "导出语言管理"
SHEET_SHEET = "导出sheet管理"

SheetSpec = Dict[str, Sequence[Sequence[object]]]


class RecordingReporter:
    """Reporter keeping every event in memory."""

    def __init__(self) -> None:
        self.events: List[ProgressEvent] = []

    def emit(self, event: ProgressEvent) -> None:
        self.events.append(event)

    def messages(self, type_: str | None = None) -> List[str]:
        return [e.message for e in self.events if type_ is None or e.type.value == type_]


def build_workbook(sheets: SheetSpec) -> Workbook:
    wb = Workbook()
    wb.remove(wb.active)
    for name, rows in sheets.items():
        ws = wb.create_sheet(title=name)
        for row in rows:
            ws.append(list(row))
    return wb


def sample_sheets() -> SheetSpec:
    return {
        LANG_SHEET: [["en"]],
        SHEET_SHEET: [["Common", "root"], ["Menu", ""]],
        "Common": [["key", "en"], ["greeting", "Hello {name}"]],
        "Menu": [["key", "en"], ["file", "File"]],
    }


@pytest.fixture()
def recorder() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture()
def channel(recorder: RecordingReporter) -> ProgressChannel:
    return ProgressChannel(recorder)


@pytest.fixture()
def make_workbook(tmp_path: Path) -> Callable[..., Path]:
    def _make(sheets: SheetSpec, name: str = "strings.xlsx") -> Path:
        path = tmp_path / name
        build_workbook(sheets).save(path)
        return path

    return _make


@pytest.fixture()
def workbook_factory() -> Callable[[SheetSpec], Workbook]:
    return build_workbook


@pytest.fixture()
def sample_spec() -> SheetSpec:
    return sample_sheets()


@pytest.fixture(autouse=True, scope="session")
def _configure_logging() -> None:
    """Bind the application logger before any CliRunner swaps stdout."""

    from langexport.core.logger import get_logger

    get_logger()
