from __future__ import annotations

import json
import zipfile
from datetime import datetime
from pathlib import Path

import pytest

from langexport.core.errors import OutputError
from langexport.services.exporter import archiver
from langexport.services.exporter.archiver import (
    archive_path_for,
    output_dir_for,
    staging_directory,
    write_and_package,
)

NOW = datetime(2024, 5, 10, 9, 30, 15)


def test_output_dir_naming(tmp_path: Path):
    source = tmp_path / "game.strings.xlsx"

    out = output_dir_for(source, NOW)

    assert out == tmp_path / "game.strings_20240510_093015"
    assert archive_path_for(out) == tmp_path / "game.strings_20240510_093015.zip"
    assert output_dir_for(source, NOW, output_root=tmp_path / "exports").parent == tmp_path / "exports"


def test_write_and_package(tmp_path: Path, channel, recorder):
    out = tmp_path / "nested" / "strings_20240510_093015"
    documents = {
        "en": {"greeting": "Hello {name}", "Menu": {"file": "File"}},
        "zh": {"greeting": "你好 {name}"},
    }

    result = write_and_package(out, documents, channel)

    assert result.archive_path == tmp_path / "nested" / "strings_20240510_093015.zip"
    assert result.staging_removed
    assert not out.exists()
    assert [p.name for p in result.written_files] == ["en.json", "zh.json"]

    with zipfile.ZipFile(result.archive_path) as archive:
        assert sorted(archive.namelist()) == [
            "strings_20240510_093015/en.json",
            "strings_20240510_093015/zh.json",
        ]
        assert all(info.compress_type == zipfile.ZIP_DEFLATED for info in archive.infolist())
        zh_text = archive.read("strings_20240510_093015/zh.json").decode("utf-8")
        en_text = archive.read("strings_20240510_093015/en.json").decode("utf-8")

    assert "你好 {name}" in zh_text
    assert en_text.startswith('{\n  "greeting"')
    assert json.loads(en_text) == documents["en"]
    assert any("已压缩文件夹为" in m for m in recorder.messages("success"))


def test_keep_staging(tmp_path: Path, channel):
    out = tmp_path / "run"

    result = write_and_package(out, {"en": {}}, channel, keep_staging=True)

    assert not result.staging_removed
    assert (out / "en.json").read_text(encoding="utf-8") == "{}"
    assert result.archive_path.exists()


def test_staging_directory_rolls_back(tmp_path: Path):
    out = tmp_path / "run"

    with pytest.raises(RuntimeError):
        with staging_directory(out):
            (out / "partial.json").write_text("{}", encoding="utf-8")
            raise RuntimeError("abort")

    assert not out.exists()


def test_archive_failure_removes_everything(tmp_path: Path, channel, monkeypatch):
    out = tmp_path / "run"

    def failing_zip(*args, **kwargs):
        raise OSError("disk full")

    monkeypatch.setattr(archiver.zipfile, "ZipFile", failing_zip)

    with pytest.raises(OutputError):
        write_and_package(out, {"en": {"a": "b"}}, channel)

    assert not out.exists()
    assert not (tmp_path / "run.zip").exists()


def test_cleanup_failure_is_only_a_warning(tmp_path: Path, channel, recorder, monkeypatch):
    out = tmp_path / "run"

    def failing_rmtree(path, *args, **kwargs):
        raise OSError("locked")

    monkeypatch.setattr(archiver.shutil, "rmtree", failing_rmtree)

    result = write_and_package(out, {"en": {"a": "b"}}, channel)

    assert result.archive_path.exists()
    assert not result.staging_removed
    assert any("删除文件夹失败" in m for m in recorder.messages("warning"))
