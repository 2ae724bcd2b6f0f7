"""A plain-text buffer with formatting tags, used to edit notes.

The first line of the buffer is the title of the note and always carries
the ``title`` tag. Text inserted at the start or the end of the buffer
gets the common ``font`` tag. The formatting tags ``b``, ``i``, ``s`` and
``u`` can be toggled on the selected text outside the title.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, List, Set, Tuple

__all__ = ["NoteBuffer"]

# Tags in order of priority. The order is significant: when notes are
# written out, tags are opened and closed in the order of their priority.
_TAG_ORDER = ("font", "title", "b", "i", "s", "u")
_PRIORITY = {name: index for index, name in enumerate(_TAG_ORDER)}

_FORMAT_TAGS = {
    "bold": "b",
    "italic": "i",
    "underline": "u",
    "strikethrough": "s",
}

_SAVED_NAMES = {"b": "b", "i": "i", "u": "u", "s": "s", "font": ""}

_FONT = "font"
_TITLE = "title"


def _check_tag(name: str) -> str:
    if name not in _PRIORITY:
        raise ValueError(f"unknown tag: {name!r}")
    return name


def _by_priority(names: Set[str]) -> List[str]:
    return sorted(names, key=_PRIORITY.__getitem__)


class NoteBuffer:
    """Text of a note with tags on character ranges.

    Offsets count characters. ``modified`` is set by every change of the
    text and by formatting; callers clear it once the content is saved.
    """

    def __init__(self) -> None:
        self._text = ""
        self._tags: List[Set[str]] = []
        self._insert_mark = 0
        self._bound_mark = 0
        self._freeze_count = 0
        self.modified = False

    # Text and lines

    @property
    def text(self) -> str:
        """The whole text of the buffer."""
        return self._text

    @property
    def char_count(self) -> int:
        """The number of characters in the buffer."""
        return len(self._text)

    @property
    def line_count(self) -> int:
        """The number of lines; an empty buffer has one line."""
        return self._text.count("\n") + 1

    def line_bounds(self, line: int) -> Tuple[int, int]:
        """Return the start and end offsets of ``line``, without its newline."""
        if not 0 <= line < self.line_count:
            raise IndexError(f"line {line} out of range")
        start = self._line_start(line)
        end = self._text.find("\n", start)
        return start, (len(self._text) if end < 0 else end)

    def get_text(self, start: int, end: int) -> str:
        """Return the text between two offsets."""
        start, end = self._check_range(start, end)
        return self._text[start:end]

    def set_text(self, text: str) -> None:
        """Replace the whole content of the buffer with ``text``."""
        self.delete(0, len(self._text))
        self.insert(0, text)

    def append(self, text: str) -> None:
        """Insert ``text`` at the end of the buffer."""
        self.insert(len(self._text), text)

    def insert(self, offset: int, text: str) -> None:
        """Insert ``text`` at ``offset``.

        The new characters carry the tags that span the insertion point.
        Unless the buffer is frozen, the title tag is kept on the first
        line and text inserted at either end gets the font tag.
        """
        self._check_offset(offset)
        if not text:
            return

        tracked = self._freeze_count == 0
        is_title = is_end = False
        if tracked:
            is_title = self._line_of(offset) == 0
            is_end = offset == len(self._text)
            if is_title:
                self._remove(_TITLE, offset, self._title_end())

        inherited = self._tags_spanning(offset)
        self._text = self._text[:offset] + text + self._text[offset:]
        self._tags[offset:offset] = [set(inherited) for _ in text]
        self._shift_marks_for_insert(offset, len(text))
        self.modified = True

        if not tracked:
            return

        end = offset + len(text)
        if offset == 0 or is_end:
            self._apply(_FONT, offset, end)
        if is_title:
            self._apply(_TITLE, 0, self._title_end())

    def delete(self, start: int, end: int) -> None:
        """Delete the text between two offsets.

        If the deletion touches the first line, the title and font tags
        are applied to the new first line.
        """
        start, end = self._check_range(start, end)
        if start == end:
            return

        self._text = self._text[:start] + self._text[end:]
        del self._tags[start:end]
        self._shift_marks_for_delete(start, end)
        self.modified = True

        if self._line_of(start) == 0:
            title_end = self._title_end()
            self._apply(_TITLE, 0, title_end)
            self._apply(_FONT, 0, title_end)

    # Tags

    def tags_at(self, offset: int) -> frozenset:
        """Return the names of the tags on the character at ``offset``."""
        self._check_offset(offset)
        if offset == len(self._text):
            return frozenset()
        return frozenset(self._tags[offset])

    def tag_ranges(self, name: str) -> List[Tuple[int, int]]:
        """Return the maximal ranges of characters that carry tag ``name``."""
        _check_tag(name)
        ranges: List[Tuple[int, int]] = []
        run_start = None
        for offset, tags in enumerate(self._tags):
            if name in tags:
                if run_start is None:
                    run_start = offset
            elif run_start is not None:
                ranges.append((run_start, offset))
                run_start = None
        if run_start is not None:
            ranges.append((run_start, len(self._tags)))
        return ranges

    def apply_tag(self, name: str, start: int, end: int) -> None:
        """Put tag ``name`` on the characters between two offsets."""
        _check_tag(name)
        start, end = self._check_range(start, end)
        self._apply(name, start, end)

    def remove_tag(self, name: str, start: int, end: int) -> None:
        """Take tag ``name`` off the characters between two offsets."""
        _check_tag(name)
        start, end = self._check_range(start, end)
        self._remove(name, start, end)

    def toggles(self, start: int = 0) -> Iterator[Tuple[int, List[str], List[str]]]:
        """Yield ``(offset, closed, opened)`` wherever tags change, from ``start`` on.

        ``closed`` holds the tags that end at ``offset`` and ``opened`` the
        tags that begin there, each in order of priority. The end of the
        buffer is included when tags end there.
        """
        self._check_offset(start)
        for offset in range(start, len(self._text) + 1):
            before = self._tags[offset - 1] if offset > 0 else set()
            after = self._tags[offset] if offset < len(self._tags) else set()
            closed = before - after
            opened = after - before
            if closed or opened:
                yield offset, _by_priority(closed), _by_priority(opened)

    def name_for_tag(self, tag: str) -> str:
        """Return the name a tag is saved under; empty for the font tag."""
        try:
            return _SAVED_NAMES[tag]
        except KeyError:
            raise ValueError(f"tag {tag!r} has no saved name") from None

    def tag_priority(self, tag: str) -> int:
        """Return the priority of a tag; higher wins."""
        return _PRIORITY[_check_tag(tag)]

    # Selection and formatting

    def select(self, start: int, end: int) -> None:
        """Select the text between two offsets; the cursor goes to ``end``."""
        self._check_offset(start)
        self._check_offset(end)
        self._bound_mark = start
        self._insert_mark = end

    def selection_bounds(self) -> Tuple[int, int]:
        """Return the selected range as ``(start, end)`` with start <= end."""
        return (
            min(self._insert_mark, self._bound_mark),
            max(self._insert_mark, self._bound_mark),
        )

    @property
    def has_selection(self) -> bool:
        """True if some text is selected."""
        return self._insert_mark != self._bound_mark

    def apply_format(self, tag_name: str) -> None:
        """Toggle a format on the selected text outside the title.

        ``tag_name`` is one of "bold", "italic", "underline" or
        "strikethrough". The format is removed if the selection already
        starts and ends with it, and applied otherwise.
        """
        if not self.has_selection:
            raise ValueError("no text is selected")

        start, end = self._exclude_title(*self.selection_bounds())
        if start == end:
            return

        try:
            tag = _FORMAT_TAGS[tag_name]
        except KeyError:
            raise ValueError(f"unknown format: {tag_name!r}") from None

        has_tag = tag in self._tags[start] and (
            (end < len(self._tags) and tag in self._tags[end])
            or self._ends_tag(end, tag)
        )
        if has_tag:
            self._remove(tag, start, end)
        else:
            self._apply(tag, start, end)
        self.modified = True

    def remove_all_tags(self) -> None:
        """Remove every tag from the selected text outside the title."""
        start, end = self._exclude_title(*self.selection_bounds())
        if start == end:
            return
        for tags in self._tags[start:end]:
            tags.clear()
        self.modified = True

    # Freezing

    def freeze(self) -> None:
        """Stop keeping title and font tags up to date on insertion."""
        self._freeze_count += 1

    def thaw(self) -> None:
        """Undo one call of :meth:`freeze`."""
        if self._freeze_count == 0:
            raise RuntimeError("buffer is not frozen")
        self._freeze_count -= 1

    @contextmanager
    def frozen(self) -> Iterator["NoteBuffer"]:
        """Keep the buffer frozen for the duration of a ``with`` block."""
        self.freeze()
        try:
            yield self
        finally:
            self.thaw()

    # Internals

    def _check_offset(self, offset: int) -> None:
        if not 0 <= offset <= len(self._text):
            raise IndexError(f"offset {offset} out of range")

    def _check_range(self, start: int, end: int) -> Tuple[int, int]:
        self._check_offset(start)
        self._check_offset(end)
        return (start, end) if start <= end else (end, start)

    def _line_of(self, offset: int) -> int:
        return self._text.count("\n", 0, offset)

    def _line_start(self, line: int) -> int:
        position = 0
        for _ in range(line):
            newline = self._text.find("\n", position)
            if newline < 0:
                return len(self._text)
            position = newline + 1
        return position

    def _title_end(self) -> int:
        newline = self._text.find("\n")
        return len(self._text) if newline < 0 else newline

    def _tags_spanning(self, offset: int) -> Set[str]:
        before = self._tags[offset - 1] if offset > 0 else set()
        after = self._tags[offset] if offset < len(self._tags) else set()
        return before & after

    def _ends_tag(self, offset: int, name: str) -> bool:
        if offset == 0 or name not in self._tags[offset - 1]:
            return False
        return offset == len(self._tags) or name not in self._tags[offset]

    def _apply(self, name: str, start: int, end: int) -> None:
        for tags in self._tags[start:end]:
            tags.add(name)

    def _remove(self, name: str, start: int, end: int) -> None:
        for tags in self._tags[start:end]:
            tags.discard(name)

    def _exclude_title(self, start: int, end: int) -> Tuple[int, int]:
        if self._line_of(start) > 0:
            return start, end
        if self._line_of(end) > 0:
            return self._line_start(1), end
        return end, end

    def _shift_marks_for_insert(self, offset: int, length: int) -> None:
        if self._insert_mark >= offset:
            self._insert_mark += length
        if self._bound_mark >= offset:
            self._bound_mark += length

    def _shift_marks_for_delete(self, start: int, end: int) -> None:
        def moved(mark: int) -> int:
            if mark >= end:
                return mark - (end - start)
            if mark > start:
                return start
            return mark

        self._insert_mark = moved(self._insert_mark)
        self._bound_mark = moved(self._bound_mark)