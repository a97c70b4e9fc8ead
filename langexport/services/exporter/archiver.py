"""JSON writer and zip packager for export runs."""

from __future__ import annotations

import json
import logging
import os
import shutil
import zipfile
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterator, List

from langexport.core.errors import OutputError
from langexport.core.progress import ProgressChannel

from .models import ExportDocument, PackageResult

LOGGER = logging.getLogger(__name__)

DEFAULT_TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"


def output_dir_for(
    source: Path,
    now: datetime,
    output_root: Path | None = None,
    timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT,
) -> Path:
    """``<root>/<stem>_<timestamp>``; root defaults to the source's folder."""

    stem = source.stem or "export"
    root = output_root if output_root is not None else source.parent
    return root / f"{stem}_{now.strftime(timestamp_format)}"


def archive_path_for(output_dir: Path) -> Path:
    return output_dir.parent / f"{output_dir.name}.zip"


@contextmanager
def staging_directory(path: Path) -> Iterator[Path]:
    """Create ``path`` for the duration of a run and remove it if the run fails."""

    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise OutputError(f"创建目录失败: {path}: {exc}") from exc
    try:
        yield path
    except BaseException:
        LOGGER.info("Rolling back staging directory %s", path)
        shutil.rmtree(path, ignore_errors=True)
        raise


def write_documents(
    output_dir: Path,
    documents: Dict[str, ExportDocument],
    indent: int = 2,
    progress: ProgressChannel | None = None,
) -> List[Path]:
    """Write one ``<code>.json`` per language."""

    written: List[Path] = []
    for code, document in documents.items():
        path = output_dir / f"{code}.json"
        try:
            path.write_text(json.dumps(document, ensure_ascii=False, indent=indent), encoding="utf-8")
        except OSError as exc:
            raise OutputError(f"写入文件失败: {path}: {exc}") from exc
        if progress is not None:
            progress.success(f"已导出语言文件: {path}")
        written.append(path)
    return written


def zip_directory(src_dir: Path, dst_file: Path) -> None:
    """Deflate every regular file under ``src_dir`` into ``dst_file``.

    Entry names are relative to ``src_dir.parent`` so the archive's single
    top-level entry is the directory itself.
    """

    base = src_dir.parent
    try:
        with zipfile.ZipFile(dst_file, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            for dirpath, dirnames, filenames in os.walk(src_dir):
                dirnames.sort()
                for filename in sorted(filenames):
                    path = Path(dirpath) / filename
                    if not path.is_file():
                        continue
                    archive.write(path, arcname=path.relative_to(base).as_posix())
    except OSError as exc:
        dst_file.unlink(missing_ok=True)
        raise OutputError(f"创建 zip 文件失败: {dst_file}: {exc}") from exc


def write_and_package(
    output_dir: Path,
    documents: Dict[str, ExportDocument],
    progress: ProgressChannel,
    indent: int = 2,
    keep_staging: bool = False,
) -> PackageResult:
    """Write the documents, zip the directory, then remove the directory.

    Any failure before the archive is complete removes the directory.
    Failing to remove it afterwards is only a warning.
    """

    archive_path = archive_path_for(output_dir)
    with staging_directory(output_dir):
        progress.success(f"导出文件夹创建完成: {output_dir}")
        written = write_documents(output_dir, documents, indent=indent, progress=progress)
        progress.info("正在压缩导出文件夹...")
        zip_directory(output_dir, archive_path)
        progress.success(f"已压缩文件夹为: {archive_path}")

    result = PackageResult(archive_path=archive_path, written_files=written, staging_removed=False)
    if keep_staging:
        return result
    try:
        shutil.rmtree(output_dir)
        result.staging_removed = True
    except OSError as exc:
        progress.warning(f"删除文件夹失败: {exc}")
    return result
