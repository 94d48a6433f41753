"""Epic/story store backed by a single JSON file.

Every mutating call is a full read-modify-write: load the whole state,
apply the change in memory, then write the whole state back once. No state
is cached between calls, so two calls are only consistent when they run
one after the other (which is always the case in the single-threaded TUI).

Referential integrity is enforced here, not by callers:

- ``create_story`` appends the new id to its epic's ``stories`` list.
- ``delete_epic`` also removes every story the epic owns.
- ``delete_story`` removes the id from the epic list and the story record.

Missing ids are checked before anything is mutated, so a failed call never
writes.
"""

from __future__ import annotations

import dataclasses
import json
import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

from storydeck.core import write_atomic
from storydeck.errors import EpicNotFound, ParseError, ReadError, StoryNotFound, WriteError
from storydeck.models import DBState, Epic, Status, Story

logger = logging.getLogger(__name__)


@runtime_checkable
class Database(Protocol):
    """Storage backend: loads and saves the complete DBState."""

    def read_db(self) -> DBState: ...

    def write_db(self, state: DBState) -> None: ...


class JSONFileDatabase:
    """DBState persisted as one JSON document.

    A missing file reads as an empty state; a present file that cannot be
    decoded raises ParseError rather than being silently reset.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def __repr__(self) -> str:
        return f"JSONFileDatabase({str(self.path)!r})"

    def read_db(self) -> DBState:
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            logger.debug("No store at %s, starting from an empty state", self.path)
            return DBState()
        except OSError as exc:
            msg = f"Failed to read {self.path}: {exc}"
            raise ReadError(msg) from exc
        try:
            return DBState.from_dict(json.loads(raw.decode("utf-8")))
        except (ValueError, TypeError, KeyError, RecursionError) as exc:
            msg = f"Invalid store file {self.path}: {exc}"
            raise ParseError(msg) from exc

    def write_db(self, state: DBState) -> None:
        content = json.dumps(state.to_dict(), indent=2) + "\n"
        try:
            write_atomic(self.path, content)
        except OSError as exc:
            msg = f"Failed to write {self.path}: {exc}"
            raise WriteError(msg) from exc


class TrackerDB:
    """CRUD over epics and stories. Shared by the navigator and every page."""

    def __init__(self, database: Database) -> None:
        self.database = database

    @classmethod
    def from_path(cls, path: str | Path) -> TrackerDB:
        return cls(JSONFileDatabase(path))

    def __repr__(self) -> str:
        return f"TrackerDB({self.database!r})"

    def initialize(self) -> None:
        """Write the current (possibly empty) state so the store file exists."""
        self.database.write_db(self.read())

    # -- Reads ---------------------------------------------------------------

    def read(self) -> DBState:
        return self.database.read_db()

    def get_epic(self, epic_id: int) -> Epic | None:
        return self.read().epics.get(epic_id)

    def get_story(self, story_id: int) -> Story | None:
        return self.read().stories.get(story_id)

    # -- Mutations -----------------------------------------------------------

    def _next_id(self, state: DBState) -> int:
        state.last_item_id += 1
        return state.last_item_id

    def create_epic(self, epic: Epic) -> int:
        state = self.read()
        epic_id = self._next_id(state)
        # A new epic owns no stories yet.
        state.epics[epic_id] = dataclasses.replace(epic, stories=[])
        self.database.write_db(state)
        logger.info("Created epic %d", epic_id, extra={"action": "create_epic", "item_id": epic_id})
        return epic_id

    def create_story(self, story: Story, epic_id: int) -> int:
        state = self.read()
        epic = state.epics.get(epic_id)
        if epic is None:
            raise EpicNotFound(epic_id)
        story_id = self._next_id(state)
        state.stories[story_id] = dataclasses.replace(story)
        epic.stories.append(story_id)
        self.database.write_db(state)
        logger.info(
            "Created story %d in epic %d",
            story_id,
            epic_id,
            extra={"action": "create_story", "item_id": story_id},
        )
        return story_id

    def update_epic_status(self, epic_id: int, status: Status) -> None:
        state = self.read()
        epic = state.epics.get(epic_id)
        if epic is None:
            raise EpicNotFound(epic_id)
        old = epic.status
        epic.status = status
        self.database.write_db(state)
        logger.info(
            "Epic %d status %s -> %s",
            epic_id,
            old.value,
            status.value,
            extra={"action": "update_epic_status", "item_id": epic_id},
        )

    def update_story_status(self, story_id: int, status: Status) -> None:
        state = self.read()
        story = state.stories.get(story_id)
        if story is None:
            raise StoryNotFound(story_id)
        old = story.status
        story.status = status
        self.database.write_db(state)
        logger.info(
            "Story %d status %s -> %s",
            story_id,
            old.value,
            status.value,
            extra={"action": "update_story_status", "item_id": story_id},
        )

    def delete_epic(self, epic_id: int) -> None:
        state = self.read()
        epic = state.epics.pop(epic_id, None)
        if epic is None:
            raise EpicNotFound(epic_id)
        for story_id in epic.stories:
            state.stories.pop(story_id, None)
        self.database.write_db(state)
        logger.info(
            "Deleted epic %d with %d stories",
            epic_id,
            len(epic.stories),
            extra={"action": "delete_epic", "item_id": epic_id},
        )

    def delete_story(self, epic_id: int, story_id: int) -> None:
        state = self.read()
        if epic_id not in state.epics:
            raise EpicNotFound(epic_id)
        # Strip the id from every list, not just epic_id's, so no epic is
        # left pointing at the removed record.
        for epic in state.epics.values():
            if story_id in epic.stories:
                epic.stories = [sid for sid in epic.stories if sid != story_id]
        removed = state.stories.pop(story_id, None)
        self.database.write_db(state)
        logger.info(
            "Deleted story %d from epic %d%s",
            story_id,
            epic_id,
            "" if removed is not None else " (already absent)",
            extra={"action": "delete_story", "item_id": story_id},
        )
