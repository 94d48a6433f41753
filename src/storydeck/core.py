"""Project discovery, configuration, and file helpers.

Convention-based discovery: each project has a `.storydeck/` directory
containing `config.json` (store filename, version), the JSON store itself
(`db.json` by default), and `storydeck.log`.
"""

from __future__ import annotations

import contextlib
import json
import logging
import os
from pathlib import Path
from typing import Any, TypedDict

logger = logging.getLogger(__name__)

STORYDECK_DIR_NAME = ".storydeck"
DB_FILENAME = "db.json"
CONFIG_FILENAME = "config.json"
CONFIG_VERSION = 1


class ProjectConfig(TypedDict, total=False):
    """Shape of .storydeck/config.json."""

    version: int
    db_file: str


def find_storydeck_root(start: Path | None = None) -> Path:
    """Walk up from start (default cwd) looking for .storydeck/ directory.

    Returns the .storydeck/ directory path (not the project root).
    """
    current = (start or Path.cwd()).resolve()
    for parent in [current, *current.parents]:
        candidate = parent / STORYDECK_DIR_NAME
        if candidate.is_dir():
            return candidate
    msg = f"No {STORYDECK_DIR_NAME}/ directory found in {current} or any parent"
    raise FileNotFoundError(msg)


def read_config(storydeck_dir: Path) -> ProjectConfig:
    """Read .storydeck/config.json. Returns defaults if missing or corrupt."""
    defaults = ProjectConfig(version=CONFIG_VERSION, db_file=DB_FILENAME)
    config_path = storydeck_dir / CONFIG_FILENAME
    if not config_path.exists():
        return defaults
    try:
        result = json.loads(config_path.read_text())
    except (json.JSONDecodeError, OSError) as exc:
        logger.warning("Failed to read %s, using defaults: %s", config_path, exc)
        return defaults
    if not isinstance(result, dict):
        logger.warning("Ignoring %s: expected a JSON object", config_path)
        return defaults
    db_file = result.get("db_file", DB_FILENAME)
    if not isinstance(db_file, str) or not db_file.strip():
        logger.warning("Invalid db_file %r in %s, falling back to %s", db_file, config_path, DB_FILENAME)
        db_file = DB_FILENAME
    return ProjectConfig(version=result.get("version", CONFIG_VERSION), db_file=db_file)


def write_config(storydeck_dir: Path, config: dict[str, Any] | ProjectConfig) -> None:
    """Write .storydeck/config.json."""
    config_path = storydeck_dir / CONFIG_FILENAME
    config_path.write_text(json.dumps(config, indent=2) + "\n")


def db_path_for(storydeck_dir: Path) -> Path:
    """Resolve the store file configured for a project directory."""
    config = read_config(storydeck_dir)
    return storydeck_dir / config.get("db_file", DB_FILENAME)


def write_atomic(path: Path, content: str) -> None:
    """Write content to path atomically via temp file + os.replace()."""
    tmp = path.with_suffix(path.suffix + ".tmp")
    try:
        tmp.write_text(content, encoding="utf-8")
        os.replace(tmp, path)
    except BaseException:
        with contextlib.suppress(OSError):
            tmp.unlink()
        raise
