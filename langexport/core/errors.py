"""Custom exceptions used across langexport."""

from __future__ import annotations


class LangExportError(Exception):
    """Base error for the application."""


class ConfigError(LangExportError):
    """Configuration related error."""


class SourceNotFoundError(LangExportError):
    """Raised when the input workbook does not exist."""


class WorkbookOpenError(LangExportError):
    """Raised when the workbook cannot be parsed."""


class MissingControlSheetError(LangExportError):
    """Raised when a registry sheet is absent from the workbook."""

    def __init__(self, sheet_name: str) -> None:
        super().__init__(f"未找到工作表: {sheet_name}")
        self.sheet_name = sheet_name


class SheetReadError(LangExportError):
    """A content sheet exists but cannot be read. Recovered as a warning."""


class PlaceholderError(LangExportError):
    """Raised when a value has unbalanced braces. Aborts the whole run."""

    def __init__(
        self,
        reason: str,
        value: str,
        *,
        sheet: str | None = None,
        row: int | None = None,
        language: str | None = None,
        key: str | None = None,
    ) -> None:
        self.reason = reason
        self.value = value
        self.sheet = sheet
        self.row = row
        self.language = language
        self.key = key
        if sheet is None:
            message = f"占位符不完整: {value} ({reason})"
        else:
            message = (
                f"占位符校验失败 Sheet: '{sheet}' 行: {row} 语言: '{language}' "
                f"Key: '{key}' 值: '{value}' 错误: {reason}"
            )
        super().__init__(message)

    def with_context(self, *, sheet: str, row: int, language: str, key: str) -> "PlaceholderError":
        return PlaceholderError(self.reason, self.value, sheet=sheet, row=row, language=language, key=key)


class OutputError(LangExportError):
    """Raised when the output directory, a JSON file or the archive cannot be written."""


class EventDeliveryError(LangExportError):
    """Raised when a progress event cannot be delivered in strict mode."""
