"""Interactive prompts the navigator calls to collect user input.

``Prompts`` bundles four callbacks. The defaults ask on the terminal via
click; tests swap in plain functions returning canned answers.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

import click

from storydeck.models import Epic, Status, Story

_SEPARATOR = "----------------------------"

_STATUS_CHOICES: dict[str, Status] = {
    "1": Status.OPEN,
    "2": Status.IN_PROGRESS,
    "3": Status.RESOLVED,
    "4": Status.CLOSED,
}

STATUS_MENU = ", ".join(f"{key} - {status.label}" for key, status in _STATUS_CHOICES.items())


def parse_status_choice(raw: str) -> Status | None:
    """Map a menu answer (``1``-``4``) to a Status. Anything else cancels."""
    return _STATUS_CHOICES.get(raw.strip())


def _ask(text: str) -> str:
    value: str = click.prompt(text, default="", show_default=False)
    return value.strip()


def prompt_create_epic() -> Epic:
    click.echo(_SEPARATOR)
    name = _ask("Epic Name")
    description = _ask("Epic Description")
    return Epic(name, description)


def prompt_create_story() -> Story:
    click.echo(_SEPARATOR)
    name = _ask("Story Name")
    description = _ask("Story Description")
    return Story(name, description)


def prompt_update_status() -> Status | None:
    click.echo(_SEPARATOR)
    return parse_status_choice(_ask(f"New Status ({STATUS_MENU})"))


def prompt_confirm_delete(message: str) -> bool:
    click.echo(_SEPARATOR)
    return click.confirm(message, default=False)


@dataclass
class Prompts:
    create_epic: Callable[[], Epic] = prompt_create_epic
    create_story: Callable[[], Story] = prompt_create_story
    update_status: Callable[[], Status | None] = prompt_update_status
    confirm_delete: Callable[[str], bool] = prompt_confirm_delete
