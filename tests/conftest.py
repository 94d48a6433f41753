"""Shared pytest fixtures for storydeck tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
from click.testing import CliRunner

from storydeck.core import DB_FILENAME, STORYDECK_DIR_NAME, write_config
from storydeck.db import TrackerDB
from storydeck.models import Epic, Status, Story
from storydeck.prompts import Prompts
from tests._db_factory import make_db


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "db.json"


@pytest.fixture
def db(db_path: Path) -> TrackerDB:
    """Fresh TrackerDB over a JSON file that does not exist yet."""
    return make_db(db_path)


@pytest.fixture
def populated_db(db: TrackerDB) -> TrackerDB:
    """TrackerDB pre-populated with a representative item set.

    Creates:
    - Epic 1 "Login" with stories 2 "Form" (in progress) and 3 "Reset password"
    - Epic 4 "Billing" with no stories
    """
    login = db.create_epic(Epic("Login", "User sign-in"))
    form = db.create_story(Story("Form", "Username and password fields"), login)
    reset = db.create_story(Story("Reset password", "Email a reset link"), login)
    db.update_story_status(form, Status.IN_PROGRESS)
    billing = db.create_epic(Epic("Billing", "Invoices"))
    db._test_ids: dict[str, int] = {"login": login, "form": form, "reset": reset, "billing": billing}  # type: ignore[attr-defined]
    return db


@pytest.fixture
def make_prompts() -> Callable[..., Prompts]:
    """Build a Prompts whose callbacks never touch the terminal.

    Any callback not overridden fails the test if it is called.
    """

    def _unexpected(*_args: object) -> None:
        pytest.fail("prompt called unexpectedly")

    def _make(**overrides: object) -> Prompts:
        callbacks: dict[str, object] = {
            "create_epic": _unexpected,
            "create_story": _unexpected,
            "update_status": _unexpected,
            "confirm_delete": _unexpected,
        }
        callbacks.update(overrides)
        return Prompts(**callbacks)  # type: ignore[arg-type]

    return _make


@pytest.fixture
def storydeck_project(tmp_path: Path) -> Path:
    """A tmp directory set up as a storydeck project (.storydeck/ with config + store).

    Returns the project root (parent of .storydeck/).
    """
    storydeck_dir = tmp_path / STORYDECK_DIR_NAME
    storydeck_dir.mkdir()
    write_config(storydeck_dir, {"version": 1, "db_file": DB_FILENAME})
    make_db(storydeck_dir / DB_FILENAME).initialize()
    return tmp_path


@pytest.fixture
def cli_runner() -> CliRunner:
    """Click CLI test runner."""
    return CliRunner()
