"""The base class for notes."""

from __future__ import annotations

from abc import ABCMeta, abstractmethod
from typing import List, Optional

from .item import Item
from .note_buffer import NoteBuffer

__all__ = ["Note", "MARKUP_LINES_MAX"]

MARKUP_LINES_MAX = 20


class Note(Item, metaclass=ABCMeta):
    """A note: an item with a body of text.

    Subclasses decide how the content is stored and formatted.
    """

    @property
    @abstractmethod
    def text_content(self) -> Optional[str]:
        """The plain text of the note without formatting, or None."""

    @abstractmethod
    def set_text_content(self, content: Optional[str]) -> None:
        """Set the plain text of the note; it does not include the title."""

    @property
    @abstractmethod
    def raw_content(self) -> Optional[str]:
        """The content as it is saved, with whatever formatting it uses."""

    @property
    @abstractmethod
    def markup(self) -> Optional[str]:
        """The note as Pango-style markup, or None if there is nothing to show."""

    @property
    def tags(self) -> List:
        """The tags (labels) of the note; empty if unsupported."""
        return []

    @property
    def extension(self) -> str:
        """The file extension usually used for this kind of note."""
        return ".txt"

    @abstractmethod
    def set_content_from_buffer(self, buffer: NoteBuffer) -> None:
        """Take the title and content of the note from ``buffer``."""

    def set_content_to_buffer(self, buffer: NoteBuffer) -> None:
        """Replace the text of ``buffer`` with the title and content of the note."""
        if not isinstance(buffer, NoteBuffer):
            raise TypeError("buffer must be a NoteBuffer")

        raw_content = self.raw_content
        if raw_content:
            full_content = f"{self.title}\n{raw_content}"
        else:
            full_content = self.title

        buffer.set_text(full_content)
        buffer.modified = False