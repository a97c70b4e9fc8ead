"""Builds one JSON document per language from the content sheets."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from langexport.core.errors import PlaceholderError, SheetReadError
from langexport.core.progress import ProgressChannel

from .models import ExportDocument, LanguageConfig, SheetConfig, SheetMode, SheetRow, TranslationTable
from .placeholders import validate_placeholders
from .workbook import WorkbookReader

LOGGER = logging.getLogger(__name__)


def find_language_column(header: SheetRow, code: str) -> Optional[int]:
    """Index of the first header equal to ``code``."""

    for index, value in enumerate(header.values):
        if value == code:
            return index
    return None


def _load_rows(workbook: WorkbookReader, sheet: SheetConfig, progress: ProgressChannel) -> Optional[List[SheetRow]]:
    if not workbook.has_sheet(sheet.name):
        progress.warning(f"找不到工作表: {sheet.name}")
        return None
    try:
        return workbook.rows(sheet.name)
    except SheetReadError as exc:
        progress.warning(str(exc))
        return None


def build_sheet_table(
    rows: List[SheetRow],
    sheet_name: str,
    language: str,
    progress: ProgressChannel,
) -> Optional[Dict[str, str]]:
    """Collect key -> value for ``language`` from one sheet's rows.

    Returns ``None`` when the sheet has no header for the language.

    Raises:
        PlaceholderError: When a value has unbalanced braces.
    """

    if not rows:
        return None
    header, body = rows[0], rows[1:]
    column = find_language_column(header, language)
    if column is None:
        LOGGER.debug("Sheet %s has no column for %s", sheet_name, language)
        return None

    table: Dict[str, str] = {}
    for row in body:
        key = row.cell(0)
        if not key:
            continue
        value = row.cell(column)
        if not value:
            progress.warning(
                f"空值警告 Sheet: '{sheet_name}' 行: {row.number} 列: '{language}' Key: '{key}'"
            )
        try:
            validate_placeholders(value)
        except PlaceholderError as exc:
            raise exc.with_context(sheet=sheet_name, row=row.number, language=language, key=key) from exc
        table[key] = value
    return table


def merge_tables(tables: TranslationTable, sheets: Iterable[SheetConfig]) -> ExportDocument:
    """Merge per-sheet tables into one document, in registry order.

    Root sheets are flattened into the top level, later sheets overwriting
    earlier keys; every other sheet becomes an object under its own name.
    """

    document: ExportDocument = {}
    for sheet in sheets:
        table = tables.get(sheet.name)
        if table is None:
            continue
        if sheet.mode is SheetMode.ROOT:
            document.update(table)
        else:
            document[sheet.name] = dict(table)
    return document


def assemble_language(
    workbook: WorkbookReader,
    language: LanguageConfig,
    sheets: List[SheetConfig],
    progress: ProgressChannel,
) -> ExportDocument:
    tables: TranslationTable = {}
    for sheet in sheets:
        rows = _load_rows(workbook, sheet, progress)
        if rows is None:
            continue
        table = build_sheet_table(rows, sheet.name, language.code, progress)
        if table is not None:
            tables[sheet.name] = table
    return merge_tables(tables, sheets)


def assemble(
    workbook: WorkbookReader,
    languages: List[LanguageConfig],
    sheets: List[SheetConfig],
    progress: ProgressChannel,
) -> Dict[str, ExportDocument]:
    """Build every language document before anything is written.

    A placeholder failure in any language propagates immediately, so a run
    either validates completely or produces nothing.
    """

    documents: Dict[str, ExportDocument] = {}
    for language in languages:
        progress.info(f"正在处理语言: {language.code}")
        documents[language.code] = assemble_language(workbook, language, sheets, progress)
    return documents
