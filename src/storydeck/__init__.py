"""Storydeck — terminal issue tracker for epics and their stories."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("storydeck")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"

from storydeck.db import TrackerDB
from storydeck.models import DBState, Epic, Status, Story
from storydeck.navigator import Navigator

__all__ = ["DBState", "Epic", "Navigator", "Status", "Story", "TrackerDB", "__version__"]
