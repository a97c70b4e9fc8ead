"""Filesystem locations for langexport runtime files."""

from __future__ import annotations

import os
from pathlib import Path

DEFAULT_HOME = Path.home() / "LangExport"


def work_dir() -> Path:
    """Writable base for logs, honouring ``LANGEXPORT_HOME``."""

    env = os.getenv("LANGEXPORT_HOME")
    if env:
        return Path(env)
    return DEFAULT_HOME
