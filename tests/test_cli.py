"""CLI integration tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from langexport import cli


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()


def test_export_command(cli_runner: CliRunner, make_workbook, sample_spec, tmp_path: Path):
    source = make_workbook(sample_spec)
    exports = tmp_path / "exports"

    result = cli_runner.invoke(cli.app, ["export", str(source), "--output-root", str(exports)])

    assert result.exit_code == 0, result.output
    assert "完成导出 1 个语言文件并已压缩为" in result.output
    archives = list(exports.glob("strings_*.zip"))
    assert len(archives) == 1


def test_export_command_failure(cli_runner: CliRunner, make_workbook, sample_spec, tmp_path: Path):
    sample_spec["Menu"] = [["key", "en"], ["file", "File}"]]
    source = make_workbook(sample_spec)

    result = cli_runner.invoke(cli.app, ["export", str(source)])

    assert result.exit_code == 1
    assert "Export failed" in result.output
    assert sorted(p.name for p in tmp_path.iterdir()) == ["strings.xlsx"]


def test_export_command_bad_settings(cli_runner: CliRunner, make_workbook, sample_spec, tmp_path: Path):
    source = make_workbook(sample_spec)
    bad = tmp_path / "bad.yaml"
    bad.write_text("nope: true\n", encoding="utf-8")

    result = cli_runner.invoke(cli.app, ["export", str(source), "--settings", str(bad)])

    assert result.exit_code == 2


def test_inspect_command(cli_runner: CliRunner, make_workbook, sample_spec):
    sample_spec["导出sheet管理"] = [["Common", "root"], ["Menu", ""], ["Ghost"]]
    source = make_workbook(sample_spec)

    result = cli_runner.invoke(cli.app, ["inspect", str(source)])

    assert result.exit_code == 0, result.output
    start = result.output.index("{")
    payload = json.loads(result.output[start:])
    assert payload == {
        "languages": ["en"],
        "sheets": [
            {"name": "Common", "mode": "root", "present": True},
            {"name": "Menu", "mode": "nested", "present": True},
            {"name": "Ghost", "mode": "nested", "present": False},
        ],
    }


def test_inspect_missing_file(cli_runner: CliRunner, tmp_path: Path):
    result = cli_runner.invoke(cli.app, ["inspect", str(tmp_path / "absent.xlsx")])

    assert result.exit_code == 1
