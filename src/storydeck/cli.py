"""CLI for the storydeck issue tracker.

Convention-based: discovers .storydeck/ by walking up from cwd.

Usage:
    storydeck init                  # Initialize .storydeck/ in cwd
    storydeck run                   # Start the TUI on the project store
    storydeck run --db ./db.json    # Start the TUI on an explicit store file
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from storydeck import __version__
from storydeck.core import (
    CONFIG_VERSION,
    DB_FILENAME,
    STORYDECK_DIR_NAME,
    db_path_for,
    find_storydeck_root,
    write_config,
)
from storydeck.db import TrackerDB
from storydeck.driver import run_loop
from storydeck.errors import TrackerError
from storydeck.logging import setup_logging
from storydeck.navigator import Navigator


def _resolve_db_path(db_path: Path | None) -> Path:
    """Explicit --db wins; otherwise use the discovered project's store."""
    if db_path is not None:
        return db_path
    try:
        storydeck_dir = find_storydeck_root()
    except FileNotFoundError:
        click.echo(f"No {STORYDECK_DIR_NAME}/ found. Run 'storydeck init' or pass --db.", err=True)
        sys.exit(1)
    return db_path_for(storydeck_dir)


@click.group()
@click.version_option(version=__version__, prog_name="storydeck")
def cli() -> None:
    """Storydeck — terminal epic and story tracker."""


@cli.command()
def init() -> None:
    """Initialize .storydeck/ in the current directory."""
    cwd = Path.cwd()
    storydeck_dir = cwd / STORYDECK_DIR_NAME

    if storydeck_dir.exists():
        click.echo(f"{STORYDECK_DIR_NAME}/ already exists in {cwd}")
        return

    storydeck_dir.mkdir()
    write_config(storydeck_dir, {"version": CONFIG_VERSION, "db_file": DB_FILENAME})

    db = TrackerDB.from_path(storydeck_dir / DB_FILENAME)
    try:
        db.initialize()
    except TrackerError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"Initialized {STORYDECK_DIR_NAME}/ in {cwd}")
    click.echo(f"  Store: {storydeck_dir / DB_FILENAME}")
    click.echo("\nNext: storydeck run")


@cli.command()
@click.option(
    "--db",
    "db_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Store file to use instead of the discovered project store",
)
def run(db_path: Path | None) -> None:
    """Start the interactive epic/story browser."""
    path = _resolve_db_path(db_path)
    if not path.parent.is_dir():
        click.echo(f"Error: directory does not exist: {path.parent}", err=True)
        sys.exit(1)
    setup_logging(path.parent)
    db = TrackerDB.from_path(path)

    # Fail before drawing anything if the store is unusable.
    try:
        db.read()
    except TrackerError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    try:
        run_loop(Navigator(db))
    except TrackerError:
        # Already reported by the loop.
        sys.exit(1)


if __name__ == "__main__":
    cli()
