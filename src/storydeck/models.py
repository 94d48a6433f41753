"""Domain types: work item status, epics, stories, the persisted state, and actions.

Pure data. Nothing here touches the filesystem or the terminal.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Status(Enum):
    """Lifecycle stage of an epic or story.

    Members are ordered OPEN < IN_PROGRESS < RESOLVED < CLOSED. The value is
    the name written to the store file.
    """

    OPEN = "Open"
    IN_PROGRESS = "InProgress"
    RESOLVED = "Resolved"
    CLOSED = "Closed"

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]

    @property
    def rank(self) -> int:
        return _STATUS_ORDER.index(self)

    def __str__(self) -> str:
        return self.label

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Status):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Status):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Status):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Status):
            return NotImplemented
        return self.rank >= other.rank


_STATUS_ORDER: tuple[Status, ...] = (Status.OPEN, Status.IN_PROGRESS, Status.RESOLVED, Status.CLOSED)

_STATUS_LABELS: dict[Status, str] = {
    Status.OPEN: "OPEN",
    Status.IN_PROGRESS: "IN PROGRESS",
    Status.RESOLVED: "RESOLVED",
    Status.CLOSED: "CLOSED",
}


def _require_str(data: dict[str, Any], key: str) -> str:
    value = data[key]
    if not isinstance(value, str):
        msg = f"{key} must be a string, got {type(value).__name__}"
        raise TypeError(msg)
    return value


def _parse_id(raw: Any) -> int:
    """Convert a store id (JSON object key or list entry) to a non-negative int."""
    if isinstance(raw, bool):
        msg = f"Invalid item id: {raw!r}"
        raise TypeError(msg)
    if isinstance(raw, str):
        if not raw.isdecimal():
            msg = f"Invalid item id: {raw!r}"
            raise ValueError(msg)
        return int(raw)
    if isinstance(raw, int) and raw >= 0:
        return raw
    msg = f"Invalid item id: {raw!r}"
    raise ValueError(msg)


@dataclass
class Story:
    name: str
    description: str
    status: Status = Status.OPEN

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "status": self.status.value,
        }

    @classmethod
    def from_dict(cls, data: Any) -> Story:
        if not isinstance(data, dict):
            msg = f"Story record must be an object, got {type(data).__name__}"
            raise TypeError(msg)
        return cls(
            name=_require_str(data, "name"),
            description=_require_str(data, "description"),
            status=Status(data["status"]),
        )


@dataclass
class Epic:
    name: str
    description: str
    status: Status = Status.OPEN
    stories: list[int] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "status": self.status.value,
            "stories": list(self.stories),
        }

    @classmethod
    def from_dict(cls, data: Any) -> Epic:
        if not isinstance(data, dict):
            msg = f"Epic record must be an object, got {type(data).__name__}"
            raise TypeError(msg)
        stories = data["stories"]
        if not isinstance(stories, list):
            msg = f"stories must be a list, got {type(stories).__name__}"
            raise TypeError(msg)
        return cls(
            name=_require_str(data, "name"),
            description=_require_str(data, "description"),
            status=Status(data["status"]),
            stories=[_parse_id(s) for s in stories],
        )


@dataclass
class DBState:
    """The complete persisted world.

    ``last_item_id`` is the id source shared by epics and stories. It only
    ever grows, so ids are never reused after a delete.
    """

    last_item_id: int = 0
    epics: dict[int, Epic] = field(default_factory=dict)
    stories: dict[int, Story] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "last_item_id": self.last_item_id,
            "epics": {str(k): v.to_dict() for k, v in sorted(self.epics.items())},
            "stories": {str(k): v.to_dict() for k, v in sorted(self.stories.items())},
        }

    @classmethod
    def from_dict(cls, data: Any) -> DBState:
        """Build a DBState from decoded JSON.

        Raises TypeError, ValueError or KeyError when *data* does not have
        the store's shape, when ``last_item_id`` is below an existing id, or
        when an epic lists a story that has no record.
        """
        if not isinstance(data, dict):
            msg = f"Store root must be an object, got {type(data).__name__}"
            raise TypeError(msg)
        epics = data["epics"]
        stories = data["stories"]
        if not isinstance(epics, dict) or not isinstance(stories, dict):
            msg = "epics and stories must be objects"
            raise TypeError(msg)
        state = cls(
            last_item_id=_parse_id(data["last_item_id"]),
            epics={_parse_id(k): Epic.from_dict(v) for k, v in epics.items()},
            stories={_parse_id(k): Story.from_dict(v) for k, v in stories.items()},
        )
        state._check_integrity()
        return state

    def _check_integrity(self) -> None:
        highest = max([*self.epics, *self.stories], default=0)
        if self.last_item_id < highest:
            msg = f"last_item_id {self.last_item_id} is below the highest stored id {highest}"
            raise ValueError(msg)
        for epic_id, epic in self.epics.items():
            dangling = [sid for sid in epic.stories if sid not in self.stories]
            if dangling:
                msg = f"Epic {epic_id} lists unknown stories: {dangling}"
                raise ValueError(msg)


# ---------------------------------------------------------------------------
# Actions: produced by pages, consumed by the Navigator
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NavigateToEpicDetail:
    epic_id: int


@dataclass(frozen=True)
class NavigateToStoryDetail:
    epic_id: int
    story_id: int


@dataclass(frozen=True)
class NavigateToPreviousPage:
    pass


@dataclass(frozen=True)
class CreateEpic:
    pass


@dataclass(frozen=True)
class UpdateEpicStatus:
    epic_id: int


@dataclass(frozen=True)
class DeleteEpic:
    epic_id: int


@dataclass(frozen=True)
class CreateStory:
    epic_id: int


@dataclass(frozen=True)
class UpdateStoryStatus:
    story_id: int


@dataclass(frozen=True)
class DeleteStory:
    epic_id: int
    story_id: int


@dataclass(frozen=True)
class Exit:
    pass


Action = (
    NavigateToEpicDetail
    | NavigateToStoryDetail
    | NavigateToPreviousPage
    | CreateEpic
    | UpdateEpicStatus
    | DeleteEpic
    | CreateStory
    | UpdateStoryStatus
    | DeleteStory
    | Exit
)
