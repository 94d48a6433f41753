"""Page-stack state machine driving the TUI.

The navigator owns the stack of pages, the prompt callbacks, and the shared
store handle. Navigation actions only change the stack; persistence actions
only call the store. Errors from the store or a prompt propagate unchanged,
and the stack is left as it was.
"""

from __future__ import annotations

import logging

from storydeck.db import TrackerDB
from storydeck.models import (
    Action,
    CreateEpic,
    CreateStory,
    DeleteEpic,
    DeleteStory,
    Exit,
    NavigateToEpicDetail,
    NavigateToPreviousPage,
    NavigateToStoryDetail,
    UpdateEpicStatus,
    UpdateStoryStatus,
)
from storydeck.pages import EpicDetail, HomePage, Page, StoryDetail
from storydeck.prompts import Prompts

logger = logging.getLogger(__name__)

DELETE_EPIC_MESSAGE = "Are you sure you want to delete this epic? All stories in this epic will also be deleted"
DELETE_STORY_MESSAGE = "Are you sure you want to delete this story?"


class Navigator:
    def __init__(self, db: TrackerDB, prompts: Prompts | None = None) -> None:
        self.db = db
        self.prompts = prompts if prompts is not None else Prompts()
        self._pages: list[Page] = [HomePage(db)]

    def get_current_page(self) -> Page | None:
        """Top of the stack, or None once the session is over."""
        return self._pages[-1] if self._pages else None

    @property
    def page_count(self) -> int:
        return len(self._pages)

    def handle_action(self, action: Action) -> None:
        logger.debug("Handling %r", action, extra={"action": type(action).__name__})
        match action:
            case NavigateToEpicDetail(epic_id=epic_id):
                self._pages.append(EpicDetail(epic_id, self.db))
            case NavigateToStoryDetail(epic_id=epic_id, story_id=story_id):
                self._pages.append(StoryDetail(epic_id, story_id, self.db))
            case NavigateToPreviousPage():
                if self._pages:
                    self._pages.pop()
            case CreateEpic():
                self.db.create_epic(self.prompts.create_epic())
            case UpdateEpicStatus(epic_id=epic_id):
                status = self.prompts.update_status()
                if status is None:
                    logger.info("Status update cancelled", extra={"action": "update_epic_status", "item_id": epic_id})
                    return
                self.db.update_epic_status(epic_id, status)
            case DeleteEpic(epic_id=epic_id):
                if not self.prompts.confirm_delete(DELETE_EPIC_MESSAGE):
                    logger.info("Delete declined", extra={"action": "delete_epic", "item_id": epic_id})
                    return
                self.db.delete_epic(epic_id)
            case CreateStory(epic_id=epic_id):
                self.db.create_story(self.prompts.create_story(), epic_id)
            case UpdateStoryStatus(story_id=story_id):
                status = self.prompts.update_status()
                if status is None:
                    logger.info("Status update cancelled", extra={"action": "update_story_status", "item_id": story_id})
                    return
                self.db.update_story_status(story_id, status)
            case DeleteStory(epic_id=epic_id, story_id=story_id):
                if not self.prompts.confirm_delete(DELETE_STORY_MESSAGE):
                    logger.info("Delete declined", extra={"action": "delete_story", "item_id": story_id})
                    return
                self.db.delete_story(epic_id, story_id)
            case Exit():
                self._pages.clear()
            case _:
                msg = f"Unknown action: {action!r}"
                raise TypeError(msg)
