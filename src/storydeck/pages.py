"""TUI pages: the home epic list, epic detail, and story detail screens.

Each page renders itself with ``click.echo`` and turns one line of input
into at most one Action. Pages only read from the store; every mutation
is routed through the Navigator.

A detail page can outlive the item it shows (e.g. after a delete, going
back lands on a page for a removed epic). Such pages render a notice and
only accept ``p``.
"""

from __future__ import annotations

from typing import ClassVar, Protocol, runtime_checkable

import click

from storydeck.db import TrackerDB
from storydeck.errors import DrawError, InputError, PageError, StoreError
from storydeck.models import (
    Action,
    CreateEpic,
    CreateStory,
    DBState,
    DeleteEpic,
    DeleteStory,
    Exit,
    NavigateToEpicDetail,
    NavigateToPreviousPage,
    NavigateToStoryDetail,
    UpdateEpicStatus,
    UpdateStoryStatus,
)


@runtime_checkable
class Page(Protocol):
    """A screen on the navigator's stack.

    ``kind`` names the concrete page for diagnostics and tests; it plays
    no part in drawing or input handling.
    """

    kind: ClassVar[str]

    def draw(self) -> None: ...

    def handle_input(self, line: str) -> Action | None: ...


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def get_column_string(text: str, width: int) -> str:
    """Fit *text* into exactly *width* characters.

    Short text is right-padded with spaces; long text is truncated with a
    trailing ``...``. Widths below 4 leave no room for text, only dots.
    """
    if width <= 3:
        return "." * max(width, 0)
    if len(text) == width:
        return text
    if len(text) < width:
        return text.ljust(width)
    return text[: width - 3] + "..."


def _parse_id(line: str) -> int | None:
    if not line.isdecimal():
        return None
    return int(line)


def _read_state(db: TrackerDB, error_cls: type[PageError]) -> DBState:
    try:
        return db.read()
    except StoreError as exc:
        msg = f"failed to load store: {exc}"
        raise error_cls(msg) from exc


def _list_header(title: str) -> None:
    click.echo(title)
    click.echo("     id     |               name               |      status      ")


def _detail_header(title: str) -> None:
    click.echo(title)
    click.echo("  id  |     name     |         description         |    status    ")


def _detail_row(item_id: int, name: str, description: str, status: object) -> str:
    return (
        f"{get_column_string(str(item_id), 5)} "
        f"| {get_column_string(name, 12)} "
        f"| {get_column_string(description, 27)} "
        f"| {get_column_string(str(status), 13)}"
    )


def _list_row(item_id: int, name: str, status: object) -> str:
    return f"{get_column_string(str(item_id), 11)}| {get_column_string(name, 32)}| {get_column_string(str(status), 17)}"


# ---------------------------------------------------------------------------
# Pages
# ---------------------------------------------------------------------------


class HomePage:
    kind: ClassVar[str] = "home"

    def __init__(self, db: TrackerDB) -> None:
        self.db = db

    def __repr__(self) -> str:
        return "HomePage()"

    def draw(self) -> None:
        state = _read_state(self.db, DrawError)
        _list_header("----------------------------- EPICS -----------------------------")
        for epic_id in sorted(state.epics):
            epic = state.epics[epic_id]
            click.echo(_list_row(epic_id, epic.name, epic.status))
        click.echo()
        click.echo()
        click.echo("[q] quit | [c] create epic | [:id:] navigate to epic")

    def handle_input(self, line: str) -> Action | None:
        match line:
            case "q":
                return Exit()
            case "c":
                return CreateEpic()
        epic_id = _parse_id(line)
        if epic_id is None:
            return None
        state = _read_state(self.db, InputError)
        if epic_id in state.epics:
            return NavigateToEpicDetail(epic_id=epic_id)
        return None


class EpicDetail:
    kind: ClassVar[str] = "epic_detail"

    def __init__(self, epic_id: int, db: TrackerDB) -> None:
        self.epic_id = epic_id
        self.db = db

    def __repr__(self) -> str:
        return f"EpicDetail(epic_id={self.epic_id})"

    def draw(self) -> None:
        state = _read_state(self.db, DrawError)
        epic = state.epics.get(self.epic_id)
        _detail_header("------------------------------ EPIC ------------------------------")
        if epic is None:
            click.echo(f"Epic {self.epic_id} no longer exists.")
            click.echo()
            click.echo("[p] previous")
            return
        click.echo(_detail_row(self.epic_id, epic.name, epic.description, epic.status))
        click.echo()
        _list_header("---------------------------- STORIES ----------------------------")
        for story_id in epic.stories:
            story = state.stories.get(story_id)
            if story is None:
                continue
            click.echo(_list_row(story_id, story.name, story.status))
        click.echo()
        click.echo()
        click.echo("[p] previous | [u] update epic | [d] delete epic | [c] create story | [:id:] navigate to story")

    def handle_input(self, line: str) -> Action | None:
        if line == "p":
            return NavigateToPreviousPage()
        state = _read_state(self.db, InputError)
        epic = state.epics.get(self.epic_id)
        if epic is None:
            return None
        match line:
            case "u":
                return UpdateEpicStatus(epic_id=self.epic_id)
            case "d":
                return DeleteEpic(epic_id=self.epic_id)
            case "c":
                return CreateStory(epic_id=self.epic_id)
        story_id = _parse_id(line)
        if story_id is not None and story_id in epic.stories:
            return NavigateToStoryDetail(epic_id=self.epic_id, story_id=story_id)
        return None


class StoryDetail:
    kind: ClassVar[str] = "story_detail"

    def __init__(self, epic_id: int, story_id: int, db: TrackerDB) -> None:
        self.epic_id = epic_id
        self.story_id = story_id
        self.db = db

    def __repr__(self) -> str:
        return f"StoryDetail(epic_id={self.epic_id}, story_id={self.story_id})"

    def _exists(self, state: DBState) -> bool:
        return self.epic_id in state.epics and self.story_id in state.stories

    def draw(self) -> None:
        state = _read_state(self.db, DrawError)
        _detail_header("------------------------------ STORY ------------------------------")
        if not self._exists(state):
            click.echo(f"Story {self.story_id} no longer exists.")
            click.echo()
            click.echo("[p] previous")
            return
        story = state.stories[self.story_id]
        click.echo(_detail_row(self.story_id, story.name, story.description, story.status))
        click.echo()
        click.echo()
        click.echo("[p] previous | [u] update story | [d] delete story")

    def handle_input(self, line: str) -> Action | None:
        if line == "p":
            return NavigateToPreviousPage()
        if line not in ("u", "d"):
            return None
        state = _read_state(self.db, InputError)
        if not self._exists(state):
            return None
        if line == "u":
            return UpdateStoryStatus(story_id=self.story_id)
        return DeleteStory(epic_id=self.epic_id, story_id=self.story_id)
