"""Whole-document JSON file storage."""

from __future__ import annotations

import json
import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Any

from localguide.core.errors import PersistenceFailure

logger = logging.getLogger(__name__)

# mkstemp creates 0600 files; published documents stay world-readable
DEFAULT_FILE_MODE = 0o644


def read_json(path: Path, default: Any) -> Any:
    """Return the decoded document, or ``default`` when the file does not exist."""
    if not path.exists():
        return default
    try:
        with path.open("r", encoding="utf-8") as fp:
            return json.load(fp)
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("failed to read %s: %s", path, exc)
        raise PersistenceFailure(f"failed to read {path.name}") from exc


def write_json_atomic(path: Path, data: Any) -> None:
    """Write to a temp file beside ``path`` and swap it in with ``os.replace``.

    On failure the previous file is left as it was.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(prefix=f".tmp_{path.stem}_", dir=path.parent)
    except OSError as exc:
        logger.error("failed to prepare %s: %s", path, exc)
        raise PersistenceFailure(f"failed to save {path.name}") from exc
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fp:
            json.dump(data, fp, ensure_ascii=False, indent=2)
        mode = stat.S_IMODE(path.stat().st_mode) if path.exists() else DEFAULT_FILE_MODE
        os.chmod(tmp, mode)
        os.replace(tmp, path)
    except (OSError, TypeError, ValueError) as exc:
        logger.error("failed to write %s: %s", path, exc)
        raise PersistenceFailure(f"failed to save {path.name}") from exc
    finally:
        if os.path.exists(tmp):
            os.remove(tmp)
