"""Data models used by the exporter service."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Union


class SheetMode(str, Enum):
    """How a content sheet is merged into a language document."""

    ROOT = "root"
    NESTED = "nested"


@dataclass(frozen=True, slots=True)
class LanguageConfig:
    """One row of the language registry."""

    code: str


@dataclass(frozen=True, slots=True)
class SheetConfig:
    """One row of the sheet registry."""

    name: str
    mode: SheetMode = SheetMode.NESTED


@dataclass(frozen=True, slots=True)
class SheetRow:
    """Normalized row of a worksheet with its 1-based spreadsheet row number."""

    number: int
    values: tuple[str, ...]

    def cell(self, index: int) -> str:
        if index < len(self.values):
            return self.values[index]
        return ""

    def is_empty(self) -> bool:
        return not any(self.values)


# sheet name -> (key -> value) for a single language
TranslationTable = Dict[str, Dict[str, str]]
ExportDocument = Dict[str, Union[str, Dict[str, str]]]


@dataclass(slots=True)
class PackageResult:
    """Outcome of writing and archiving one run."""

    archive_path: Path
    written_files: List[Path] = field(default_factory=list)
    staging_removed: bool = True


__all__ = [
    "ExportDocument",
    "LanguageConfig",
    "PackageResult",
    "SheetConfig",
    "SheetMode",
    "SheetRow",
    "TranslationTable",
]
