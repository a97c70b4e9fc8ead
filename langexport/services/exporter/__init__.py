"""Exporter service package: workbook -> per-language JSON -> zip."""

from .archiver import output_dir_for, staging_directory, write_and_package, write_documents, zip_directory
from .assembler import assemble, build_sheet_table, merge_tables
from .cells import DEFAULT_DATE_POLICY, DISABLED_DATE_POLICY, SerialDatePolicy, normalize_cell, normalize_value
from .models import ExportDocument, LanguageConfig, PackageResult, SheetConfig, SheetMode, SheetRow
from .placeholders import placeholder_issue, validate_placeholders
from .registry import read_languages, read_sheets
from .workbook import WorkbookReader

__all__ = [
    "DEFAULT_DATE_POLICY",
    "DISABLED_DATE_POLICY",
    "ExportDocument",
    "LanguageConfig",
    "PackageResult",
    "SerialDatePolicy",
    "SheetConfig",
    "SheetMode",
    "SheetRow",
    "WorkbookReader",
    "assemble",
    "build_sheet_table",
    "merge_tables",
    "normalize_cell",
    "normalize_value",
    "output_dir_for",
    "placeholder_issue",
    "read_languages",
    "read_sheets",
    "staging_directory",
    "validate_placeholders",
    "write_and_package",
    "write_documents",
    "zip_directory",
]
