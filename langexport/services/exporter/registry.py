"""Readers for the language and sheet registries."""

from __future__ import annotations

import logging
from typing import List

from langexport.config import ControlSheetNames
from langexport.core.errors import MissingControlSheetError

from .models import LanguageConfig, SheetConfig, SheetMode
from .workbook import WorkbookReader

LOGGER = logging.getLogger(__name__)

DEFAULT_CONTROL_SHEETS = ControlSheetNames()


def _registry_rows(workbook: WorkbookReader, sheet_name: str):
    if not workbook.has_sheet(sheet_name):
        raise MissingControlSheetError(sheet_name)
    return workbook.rows(sheet_name)


def read_languages(
    workbook: WorkbookReader,
    names: ControlSheetNames = DEFAULT_CONTROL_SHEETS,
) -> List[LanguageConfig]:
    """One ``LanguageConfig`` per row with a non-empty first cell, in row order."""

    configs: List[LanguageConfig] = []
    for row in _registry_rows(workbook, names.languages):
        code = row.cell(0)
        if code:
            configs.append(LanguageConfig(code=code))
    LOGGER.debug("Language registry: %s", [c.code for c in configs])
    return configs


def read_sheets(
    workbook: WorkbookReader,
    names: ControlSheetNames = DEFAULT_CONTROL_SHEETS,
    root_marker: str = "root",
) -> List[SheetConfig]:
    """One ``SheetConfig`` per row with a non-empty first cell.

    The second column selects the merge mode: exactly ``root_marker`` means
    root mode, anything else (blank or missing included) means nested.
    """

    configs: List[SheetConfig] = []
    for row in _registry_rows(workbook, names.sheets):
        name = row.cell(0)
        if not name:
            continue
        marker = row.cell(1)
        mode = SheetMode.ROOT if marker == root_marker else SheetMode.NESTED
        configs.append(SheetConfig(name=name, mode=mode))
    LOGGER.debug("Sheet registry: %s", [(c.name, c.mode.value) for c in configs])
    return configs
