"""The TUI main loop: draw the current page, read a line, dispatch."""

from __future__ import annotations

import logging
from collections.abc import Callable

import click

from storydeck.errors import TrackerError
from storydeck.navigator import Navigator

logger = logging.getLogger(__name__)


def read_input_line() -> str:
    value: str = click.prompt("", default="", show_default=False, prompt_suffix="> ")
    return value


def run_loop(
    navigator: Navigator,
    *,
    read_line: Callable[[], str] = read_input_line,
    clear: Callable[[], None] = click.clear,
) -> None:
    """Run until the navigator's page stack is empty.

    Any TrackerError ends the session: it is reported on stderr, the user
    is asked to acknowledge it, and the error is re-raised.
    """
    while True:
        page = navigator.get_current_page()
        if page is None:
            logger.info("Page stack empty, leaving")
            return
        clear()
        stage = "render page"
        try:
            page.draw()
            line = read_line().strip()
            stage = f"handle input {line!r}"
            action = page.handle_input(line)
            if action is not None:
                stage = f"handle action {action!r}"
                navigator.handle_action(action)
        except TrackerError as exc:
            logger.exception("Failed to %s on %s page", stage, page.kind, extra={"error": type(exc).__name__})
            click.echo(f"failed to {stage}: {exc}", err=True)
            click.pause()
            raise
