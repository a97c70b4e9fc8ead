from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Callable

from pydantic import BaseModel

from langexport.config import ExportSettings, load_settings
from langexport.services.exporter import (
    SerialDatePolicy,
    WorkbookReader,
    assemble,
    output_dir_for,
    read_languages,
    read_sheets,
    write_and_package,
)

from .errors import EventDeliveryError, LangExportError
from .logger import get_logger
from .progress import CallbackReporter, ProgressChannel, ProgressEvent, ProgressReporter


class ExportResult(BaseModel):
    """Outcome of a successful export run."""

    source_path: str
    languages: list[str]
    sheets: list[str]
    archive_path: str
    file_count: int
    staging_removed: bool
    failed_deliveries: int = 0

    @property
    def summary(self) -> str:
        return f"完成导出 {self.file_count} 个语言文件并已压缩为 {self.archive_path}"


def date_policy_from(settings: ExportSettings) -> SerialDatePolicy:
    conf = settings.date_serial
    return SerialDatePolicy(lower=conf.lower, upper=conf.upper, enabled=conf.enabled)


class ExportPipeline:
    """Coordinates Open -> Registries -> Assemble -> Write & Package."""

    def __init__(
        self,
        settings: ExportSettings | None = None,
        logger=None,
        reporter: ProgressReporter | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.settings = settings or load_settings()
        self.logger = logger or get_logger()
        self.reporter = reporter
        self.clock = clock

    def run(self, path: str | Path) -> ExportResult:
        """Export ``path``; fatal errors are reported as an error event, then raised."""

        progress = ProgressChannel(
            self.reporter,
            strict=self.settings.progress.strict,
            logger=self.logger,
        )
        try:
            return self._run(Path(path), progress)
        except EventDeliveryError:
            raise
        except LangExportError as exc:
            progress.error(str(exc))
            raise

    def _run(self, source: Path, progress: ProgressChannel) -> ExportResult:
        settings = self.settings
        progress.info(f"开始处理文件: {source}")

        progress.info("正在打开 Excel 文件...")
        with WorkbookReader.open(source, policy=date_policy_from(settings)) as workbook:
            progress.success("Excel 文件已成功打开")

            languages = read_languages(workbook, settings.control_sheets)
            sheets = read_sheets(workbook, settings.control_sheets, root_marker=settings.root_mode_marker)
            progress.info(f"读取到 {len(languages)} 个语言, {len(sheets)} 个工作表")

            # Everything is validated before the first byte is written.
            documents = assemble(workbook, languages, sheets, progress)

        output_dir = output_dir_for(
            source,
            self.clock(),
            output_root=settings.output.root,
            timestamp_format=settings.output.timestamp_format,
        )
        package = write_and_package(
            output_dir,
            documents,
            progress,
            indent=settings.output.json_indent,
            keep_staging=settings.output.keep_staging,
        )

        result = ExportResult(
            source_path=str(source),
            languages=[language.code for language in languages],
            sheets=[sheet.name for sheet in sheets],
            archive_path=str(package.archive_path),
            file_count=len(package.written_files),
            staging_removed=package.staging_removed,
        )
        progress.success(result.summary)
        result.failed_deliveries = progress.failed_deliveries
        return result


def convert_excel_to_json(
    path: str | Path,
    progress_cb: Callable[[ProgressEvent], None] | None = None,
    settings: ExportSettings | None = None,
) -> str:
    """Host-facing entry point returning the human-readable summary."""

    reporter = CallbackReporter(progress_cb) if progress_cb is not None else None
    pipeline = ExportPipeline(settings=settings, reporter=reporter)
    return pipeline.run(path).summary
