"""Tests for structured logging."""

from __future__ import annotations

import json
import logging
import logging.handlers
import os
from pathlib import Path

from storydeck.db import TrackerDB
from storydeck.logging import setup_logging
from storydeck.models import Epic


def _records(log_dir: Path) -> list[dict[str, object]]:
    logger = logging.getLogger("storydeck")
    for handler in logger.handlers:
        handler.flush()
    return [json.loads(line) for line in (log_dir / "storydeck.log").read_text().splitlines()]


class TestSetupLogging:
    def test_creates_log_file(self, tmp_path: Path) -> None:
        logger = setup_logging(tmp_path)
        logger.info("test_message", extra={"action": "create_epic", "item_id": 3})
        record = _records(tmp_path)[-1]
        assert record["msg"] == "test_message"
        assert record["level"] == "INFO"
        assert record["action"] == "create_epic"
        assert record["item_id"] == 3

    def test_exception_is_recorded(self, tmp_path: Path) -> None:
        logger = setup_logging(tmp_path)
        try:
            raise ValueError("boom")
        except ValueError:
            logger.exception("failed", extra={"error": "ValueError"})
        record = _records(tmp_path)[-1]
        assert record["error"] == "ValueError"
        assert record["exception"] == "boom"

    def test_module_loggers_propagate(self, tmp_path: Path) -> None:
        setup_logging(tmp_path)
        db = TrackerDB.from_path(tmp_path / "db.json")
        db.create_epic(Epic("A", ""))
        record = _records(tmp_path)[-1]
        assert record["logger"] == "storydeck.db"
        assert record["action"] == "create_epic"
        assert record["item_id"] == 1

    def test_debug_suppressed_by_default(self, tmp_path: Path) -> None:
        logger = setup_logging(tmp_path)
        logger.debug("hidden")
        logger.info("shown")
        assert [r["msg"] for r in _records(tmp_path)] == ["shown"]

    def test_idempotent_setup(self, tmp_path: Path) -> None:
        logger1 = setup_logging(tmp_path)
        logger2 = setup_logging(tmp_path)
        assert logger1 is logger2
        assert len(logger1.handlers) == 1

    def test_new_directory_replaces_handler(self, tmp_path: Path) -> None:
        first = tmp_path / "first"
        second = tmp_path / "second"
        first.mkdir()
        second.mkdir()
        setup_logging(first)
        logger = setup_logging(second)
        file_handlers = [h for h in logger.handlers if isinstance(h, logging.handlers.RotatingFileHandler)]
        assert len(file_handlers) == 1
        assert file_handlers[0].baseFilename == os.path.abspath(str(second / "storydeck.log"))

    def teardown_method(self) -> None:
        """Clean up the storydeck logger handlers between tests."""
        logger = logging.getLogger("storydeck")
        for handler in logger.handlers[:]:
            handler.close()
            logger.removeHandler(handler)
