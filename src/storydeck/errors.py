"""Exception hierarchy shared by the store, the pages and the driver loop.

A declined prompt is not an error: prompts return ``None`` or ``False``
and the navigator skips the store call.
"""

from __future__ import annotations


class TrackerError(Exception):
    """Base class for every failure the driver loop treats as fatal."""


class StoreError(TrackerError):
    """The persisted store could not be loaded, decoded, or written."""


class ReadError(StoreError):
    """The store file exists but could not be read."""


class ParseError(StoreError):
    """The store file is present but does not hold a valid serialized state."""


class WriteError(StoreError):
    """Persisting a computed state failed. The previous file is left in place."""


class NotFoundError(StoreError, KeyError):
    kind = "item"

    def __init__(self, item_id: int) -> None:
        self.item_id = item_id
        super().__init__(f"{self.kind.capitalize()} not found: {item_id}")

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return str(self.args[0])


class EpicNotFound(NotFoundError):
    kind = "epic"


class StoryNotFound(NotFoundError):
    kind = "story"


class PageError(TrackerError):
    pass


class DrawError(PageError):
    pass


class InputError(PageError):
    pass
