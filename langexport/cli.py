"""Typer based command line entry points for langexport."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer

from langexport.config import ExportSettings, load_settings
from langexport.core.errors import ConfigError, LangExportError
from langexport.core.logger import get_logger
from langexport.core.pipeline import ExportPipeline, date_policy_from
from langexport.core.progress import CallbackReporter, EventType, ProgressEvent
from langexport.services.exporter import WorkbookReader, read_languages, read_sheets

EVENT_COLORS = {
    EventType.INFO: None,
    EventType.SUCCESS: typer.colors.GREEN,
    EventType.WARNING: typer.colors.YELLOW,
    EventType.ERROR: typer.colors.RED,
}

app = typer.Typer(help="Export localization workbooks into per-language JSON archives.")


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        "INFO",
        "--log-level",
        help="Set global logging level (e.g. DEBUG/INFO/WARNING).",
    ),
) -> None:
    """Configure global CLI behaviour before executing commands."""

    logger = get_logger()

    level_value = getattr(logging, log_level.upper(), None)
    if not isinstance(level_value, int):
        raise typer.BadParameter(f"Unknown log level: {log_level}")

    logger.setLevel(level_value)


def _echo_event(event: ProgressEvent) -> None:
    typer.secho(f"[{event.type.value}] {event.message}", fg=EVENT_COLORS[event.type], err=True)


def _load_settings_or_exit(settings_file: Optional[Path]) -> ExportSettings:
    try:
        return load_settings(settings_file)
    except ConfigError as exc:
        typer.secho(f"Unable to load settings: {exc}", fg=typer.colors.RED)
        raise typer.Exit(code=2) from exc


@app.command("export")
def cli_export(
    workbook: Path = typer.Argument(..., help="Path to the localization workbook (.xlsx)"),
    settings_file: Optional[Path] = typer.Option(None, "--settings", help="Override settings YAML file."),
    output_root: Optional[Path] = typer.Option(None, "--output-root", help="Directory receiving the archive (default: next to the workbook)."),
    no_date_heuristic: bool = typer.Option(False, "--no-date-heuristic", help="Keep bare floats as numbers instead of guessing dates."),
    strict_progress: bool = typer.Option(False, "--strict-progress", help="Abort when a progress event cannot be delivered."),
) -> None:
    """Export every registered language of WORKBOOK and zip the result."""

    settings = _load_settings_or_exit(settings_file)
    if output_root is not None:
        settings = settings.model_copy(
            update={"output": settings.output.model_copy(update={"root": output_root})}
        )
    if no_date_heuristic:
        settings = settings.model_copy(
            update={"date_serial": settings.date_serial.model_copy(update={"enabled": False})}
        )
    if strict_progress:
        settings = settings.model_copy(
            update={"progress": settings.progress.model_copy(update={"strict": True})}
        )

    pipeline = ExportPipeline(settings=settings, reporter=CallbackReporter(_echo_event))
    try:
        result = pipeline.run(workbook)
    except LangExportError as exc:
        typer.secho(f"Export failed: {exc}", fg=typer.colors.RED)
        raise typer.Exit(code=1) from exc
    typer.echo(result.summary)


@app.command("inspect")
def cli_inspect(
    workbook: Path = typer.Argument(..., help="Path to the localization workbook (.xlsx)"),
    settings_file: Optional[Path] = typer.Option(None, "--settings", help="Override settings YAML file."),
) -> None:
    """Print the language and sheet registries of WORKBOOK as JSON."""

    settings = _load_settings_or_exit(settings_file)
    try:
        with WorkbookReader.open(workbook, policy=date_policy_from(settings)) as reader:
            languages = read_languages(reader, settings.control_sheets)
            sheets = read_sheets(reader, settings.control_sheets, root_marker=settings.root_mode_marker)
            present = set(reader.sheet_names)
    except LangExportError as exc:
        typer.secho(f"Inspect failed: {exc}", fg=typer.colors.RED)
        raise typer.Exit(code=1) from exc

    payload = {
        "languages": [language.code for language in languages],
        "sheets": [
            {"name": sheet.name, "mode": sheet.mode.value, "present": sheet.name in present}
            for sheet in sheets
        ],
    }
    typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))


@app.command("gui")
def cli_gui() -> None:
    """Open the desktop window."""

    from langexport.app_gui.main_gui import main

    main()


if __name__ == "__main__":
    app()
