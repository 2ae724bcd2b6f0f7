"""Notes kept as plain text: the first line is the title, the rest the content."""

from __future__ import annotations

from typing import Optional, Tuple

from .note import Note
from .note_buffer import NoteBuffer

__all__ = ["PlainNote"]

_ENTITIES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    "'": "&apos;",
    '"': "&quot;",
}


def _is_escaped_control(char: str) -> bool:
    code = ord(char)
    return (
        0x1 <= code <= 0x8
        or code in (0xB, 0xC)
        or 0xE <= code <= 0x1F
        or 0x7F <= code <= 0x84
        or 0x86 <= code <= 0x9F
    )


def _escape_markup(text: str) -> str:
    """Escape text for use in markup, as character entities."""
    parts = []
    for char in text:
        entity = _ENTITIES.get(char)
        if entity is not None:
            parts.append(entity)
        elif _is_escaped_control(char):
            parts.append(f"&#x{ord(char):x};")
        else:
            parts.append(char)
    return "".join(parts)


def _split_title(data: str) -> Tuple[Optional[str], Optional[str]]:
    """Split text into a title and the content after the first newline."""
    if not data:
        return None, None
    parts = data.split("\n", 1)
    title = parts[0]
    content = parts[1] if len(parts) > 1 else None
    return title, content


class PlainNote(Note):
    """A note without formatting.

    The raw content and the text content are the same: the text after
    the title line, or None if there is none.
    """

    def __init__(self, *, content: Optional[str] = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self._content: Optional[str] = content

    @classmethod
    def from_data(cls, data: Optional[str]) -> "PlainNote":
        """Create a note from saved text; None gives an empty note."""
        if data is None:
            return cls()
        title, content = _split_title(data)
        return cls(title=title, content=content)

    @property
    def text_content(self) -> Optional[str]:
        """The content of the note below the title, or None."""
        return self._content

    def set_text_content(self, content: Optional[str]) -> None:
        """Replace the content below the title."""
        self._content = content

    @property
    def raw_content(self) -> Optional[str]:
        """The content as it is saved: the same as the text content."""
        return self._content

    @property
    def markup(self) -> Optional[str]:
        """The title in bold followed by the content, or None if both are empty."""
        title = self.title
        if not title and self._content is None:
            return None

        parts = []
        if title:
            parts.append(f"<b>{_escape_markup(title)}</b>")
        if self._content is not None:
            parts.append(f"\n\n{_escape_markup(self._content)}")
        return "".join(parts)

    def match(self, needle: str) -> bool:
        """Return True if the title or the content contains ``needle``, ignoring case."""
        if super().match(needle):
            return True
        return needle.casefold() in (self._content or "").casefold()

    def set_content_from_buffer(self, buffer: NoteBuffer) -> None:
        """Take the title from the first line of ``buffer`` and the content from the rest."""
        title, content = _split_title(buffer.text)
        self._content = content
        self.title = title