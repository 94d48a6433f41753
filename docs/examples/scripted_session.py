#!/usr/bin/env python3
"""Drive the storydeck navigator without a terminal.

This example shows how the TUI pieces fit together:

  - A TrackerDB over a throwaway JSON file
  - A Navigator whose prompts return canned answers instead of asking
  - Pages producing actions from input lines, exactly as the driver loop does
  - The stale-page notice after deleting the epic being viewed

How to run:
    python docs/examples/scripted_session.py
"""

from __future__ import annotations

import tempfile
from pathlib import Path

from storydeck.db import TrackerDB
from storydeck.models import Epic, Status, Story
from storydeck.navigator import Navigator
from storydeck.prompts import Prompts


def feed(nav: Navigator, line: str) -> None:
    """Draw the current page, then handle one line of input."""
    page = nav.get_current_page()
    assert page is not None
    print(f"\n=== {page.kind} <- {line!r}")
    page.draw()
    action = page.handle_input(line)
    if action is not None:
        nav.handle_action(action)


def main() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        db = TrackerDB.from_path(Path(tmp) / "db.json")
        nav = Navigator(
            db,
            Prompts(
                create_epic=lambda: Epic("Checkout", "Cart to payment"),
                create_story=lambda: Story("Apply coupon", "Discount codes at checkout"),
                update_status=lambda: Status.RESOLVED,
                confirm_delete=lambda _message: True,
            ),
        )

        for line in ["c", "1", "c", "2", "u", "p", "d", "p", "q"]:
            feed(nav, line)

        print(f"\nPages left: {nav.page_count}")
        print(f"Store: {db.read()}")


if __name__ == "__main__":
    main()
