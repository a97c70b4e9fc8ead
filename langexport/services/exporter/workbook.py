"""Read-only access to the source workbook."""

# Module responsibilities:
# - Open the workbook once per run and close it when the run ends.
# - Expose each worksheet as normalized rows carrying their spreadsheet row numbers.

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List

import openpyxl
from openpyxl.workbook.workbook import Workbook

from langexport.core.errors import SheetReadError, SourceNotFoundError, WorkbookOpenError

from .cells import DEFAULT_DATE_POLICY, SerialDatePolicy, normalize_cell
from .models import SheetRow

LOGGER = logging.getLogger(__name__)


class WorkbookReader:
    """Normalized, cached view over an openpyxl workbook."""

    def __init__(
        self,
        workbook: Workbook,
        policy: SerialDatePolicy = DEFAULT_DATE_POLICY,
        source: Path | None = None,
    ) -> None:
        self.workbook = workbook
        self.policy = policy
        self.source = source
        self._rows: Dict[str, List[SheetRow]] = {}

    @classmethod
    def open(cls, path: Path, policy: SerialDatePolicy = DEFAULT_DATE_POLICY) -> "WorkbookReader":
        """Load ``path`` with cached formula values.

        Raises:
            SourceNotFoundError: When the file does not exist.
            WorkbookOpenError: When openpyxl cannot parse it.
        """

        path = Path(path)
        if not path.exists():
            raise SourceNotFoundError(f"文件不存在: {path}")
        LOGGER.info("Opening workbook %s", path)
        try:
            workbook = openpyxl.load_workbook(path, data_only=True)
        except Exception as exc:  # noqa: BLE001 - openpyxl raises many unrelated types
            raise WorkbookOpenError(f"打开文件失败: {exc}") from exc
        return cls(workbook, policy=policy, source=path)

    @property
    def sheet_names(self) -> List[str]:
        return list(self.workbook.sheetnames)

    def has_sheet(self, name: str) -> bool:
        return name in self.workbook.sheetnames

    def rows(self, name: str) -> List[SheetRow]:
        """Return the used rows of ``name``, leading blank rows dropped.

        Raises:
            KeyError: When the sheet does not exist.
            SheetReadError: When the sheet exists but cannot be read.
        """

        if name in self._rows:
            return self._rows[name]
        if not self.has_sheet(name):
            raise KeyError(name)
        try:
            worksheet = self.workbook[name]
            rows: List[SheetRow] = []
            for number, cells in enumerate(worksheet.iter_rows(), start=1):
                row = SheetRow(number=number, values=tuple(normalize_cell(c, self.policy) for c in cells))
                if not rows and row.is_empty():
                    continue
                rows.append(row)
        except Exception as exc:  # noqa: BLE001 - chartsheets and corrupt parts surface differently
            raise SheetReadError(f"读取工作表 {name} 失败: {exc}") from exc
        self._rows[name] = rows
        return rows

    def close(self) -> None:
        self.workbook.close()

    def __enter__(self) -> "WorkbookReader":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
