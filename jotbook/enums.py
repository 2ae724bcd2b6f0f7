"""Enumerations shared across the notes model."""

from enum import Enum, IntFlag


class View(Enum):
    """The views an application can show."""

    NOTES = 0
    EDITOR = 1
    NOTEBOOKS = 2
    NOTEBOOK_NOTES = 3  # Notes view after opening a notebook
    TRASH = 4
    SEARCH = 5


class ViewMode(Enum):
    """The state a view can be in."""

    NORMAL = 0
    EMPTY = 1
    LOADING = 2
    DETACHED = 3
    SELECTION = 4


class ViewType(Enum):
    """How a collection of items is laid out."""

    GRID = 0
    LIST = 1


class Feature(IntFlag):
    """Capabilities an item or its provider may support."""

    NONE = 0
    COLOR = 1 << 0
    # Bold, italic, underline and strikethrough
    FORMAT = 1 << 1
    TRASH = 1 << 2
    NOTEBOOK = 1 << 3
    # A note may be part of at most one notebook
    ISOLATED_NOTEBOOK = 1 << 4
    CREATION_DATE = 1 << 5
    MODIFICATION_DATE = 1 << 6