"""XML notes in the format Tomboy introduced and Bijiben extended.

Only the version 2 Bijiben format is parsed. Other recognised formats
are kept as raw data and are written out in the version 2 format.
"""

from __future__ import annotations

import logging
import time
import xml.etree.ElementTree as ElementTree
from functools import cmp_to_key
from typing import Dict, List, Optional

from .enums import Feature
from .item import parse_rgba
from .note import Note
from .note_buffer import NoteBuffer
from .tag_store import Tag, TagStore, compare_tags
from .xml_format import (
    BIJIBEN_XML_NS,
    COMMON_XML_HEAD,
    NoteFormat,
    close_tag,
    detect_format,
    escape_markup,
    format_tag,
    format_time_tag,
    iso_to_unix_time,
    text_from_xml,
)

__all__ = ["XmlNote"]

_log = logging.getLogger(__name__)

_CONTENT_OPEN = "<note-content>"
_CONTENT_CLOSE = "</note-content>"
_DOCUMENT_END = "</note-content></text></note>"
_FORMAT_TAGS = ("b", "i", "s", "u")

_BUFFER_ENTITIES = {
    "&lt;": "<",
    "&gt;": ">",
    "&amp;": "&",
    "&quote;": '"',
    "&quot;": '"',
    "&apos;": "'",
}

_TIME_FIELDS = {
    "create-date": "creation_time",
    "last-change-date": "modification_time",
    "last-metadata-change-date": "meta_modification_time",
}


def _local_name(element_tag: str) -> str:
    return element_tag.rsplit("}", 1)[-1]


def _saved_name(buffer: NoteBuffer, tag: str) -> str:
    try:
        return buffer.name_for_tag(tag)
    except ValueError:
        return ""


class XmlNote(Note):
    """A note stored as XML with bold, italic, strikethrough and underline."""

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._note_format = NoteFormat.BIJIBEN_2
        self._raw_data: Optional[str] = None
        self._raw_xml: Optional[str] = None
        self._content_start: Optional[int] = None
        self._text_cache: Optional[str] = None
        self._markup_cache: Optional[str] = None
        self._tags: List[Tag] = []

    @classmethod
    def from_data(cls, data: Optional[str], tag_store: Optional[TagStore] = None) -> "XmlNote":
        """Create a note from saved XML; None gives an empty note.

        Tags found in the note are added to ``tag_store`` if one is given.
        Raises ValueError if the data is not a known note format.
        """
        if data is None:
            return cls()

        note_format = detect_format(data)
        if note_format is NoteFormat.UNKNOWN:
            raise ValueError("data is not a known XML note format")

        note = cls()
        note._note_format = note_format

        if note_format is NoteFormat.BIJIBEN_2:
            position = data.find(_CONTENT_OPEN)
            if position < 0:
                raise ValueError("note has no <note-content> element")
            note._raw_xml = data
            note._content_start = position + len(_CONTENT_OPEN)
            note._parse(tag_store)
        else:
            note._raw_data = data

        return note

    def _parse(self, tag_store: Optional[TagStore]) -> None:
        parser = ElementTree.XMLPullParser(events=("end",))
        tags: List[Tag] = []
        try:
            parser.feed(self._raw_xml.encode("utf-8"))
            parser.close()
        except ElementTree.ParseError:
            pass

        try:
            for _, element in parser.read_events():
                self._apply_element(element, tag_store, tags)
        except ElementTree.ParseError:
            # Keep whatever was read before the document went wrong.
            pass

        self._tags = sorted(tags, key=cmp_to_key(compare_tags))

    def _apply_element(self, element, tag_store: Optional[TagStore], tags: List[Tag]) -> None:
        name = _local_name(element.tag)
        content = "".join(element.itertext())

        if name == "title":
            self.title = content
        elif name in _TIME_FIELDS:
            try:
                setattr(self, _TIME_FIELDS[name], iso_to_unix_time(content))
            except ValueError:
                _log.warning("Failed to parse time in <%s>: %s", name, content)
        elif name == "color":
            try:
                self.rgba = parse_rgba(content)
            except ValueError:
                _log.warning("Failed to parse color: %s", content)
        elif name == "tag":
            if tag_store is not None and content:
                tags.append(tag_store.insert(content))

    @property
    def note_format(self) -> NoteFormat:
        """The format the note was read from."""
        return self._note_format

    @property
    def _content_xml(self) -> Optional[str]:
        if self._raw_xml is None or self._content_start is None:
            return None
        return self._raw_xml[self._content_start:]

    def _update_text_cache(self) -> str:
        content = text_from_xml(self._raw_xml) if self._raw_xml is not None else ""
        self._text_cache = content.casefold()
        return self._text_cache

    @property
    def text_content(self) -> Optional[str]:
        """The case-folded plain text of the content, or None if it is empty."""
        text = self._text_cache
        if text is None:
            text = self._update_text_cache()
        return text or None

    def set_text_content(self, content: Optional[str]) -> None:
        """Ignored: the content of an XML note is only taken from a buffer."""

    def _header(self) -> str:
        parts = [
            COMMON_XML_HEAD,
            "\n",
            '<note version="2" ',
            f'xmlns:link="{BIJIBEN_XML_NS}/link" ',
            f'xmlns:size="{BIJIBEN_XML_NS}/size" ',
            f'xmlns="{BIJIBEN_XML_NS}">\n',
            format_tag("title", self.title),
            format_time_tag("last-change-date", self.modification_time),
            format_time_tag("last-metadata-change-date", self.meta_modification_time),
            format_time_tag("create-date", self.creation_time),
        ]
        if self.rgba is not None:
            parts.append(format_tag("color", self.rgba.to_string()))
        if self._tags:
            parts.append("<tags>\n")
            parts.extend(format_tag("tag", tag.name) for tag in self._tags)
            parts.append("</tags>\n")
        parts.append('<text xml:space="preserve"><note-content>')
        return "".join(parts)

    @property
    def raw_content(self) -> str:
        """The full XML document of the note."""
        if self._raw_xml is None:
            header = self._header()
            content = self.text_content
            body = f"\n{escape_markup(content)}" if content else ""
            self._raw_xml = header + body + _DOCUMENT_END
            self._content_start = len(header)
        return self._raw_xml

    @property
    def markup(self) -> str:
        """The content as Pango-style markup; empty if the note has no content."""
        if self._markup_cache is None:
            self._markup_cache = self._build_markup()
        return self._markup_cache

    def _build_markup(self) -> str:
        content = self._content_xml
        if content is None or content.startswith(_CONTENT_CLOSE):
            return ""

        markup = "<markup><span font='Cantarell'>"
        open_tags: List[str] = []
        start = tag_start = 0

        while True:
            tag_start = content.find("<", tag_start)
            if tag_start < 0:
                break
            markup += content[start:tag_start]
            tag_start += 1

            is_close = content.startswith("/", tag_start)
            if is_close:
                tag_start += 1

            tag_end = content.find(">", tag_start)
            if tag_end < 0:
                break

            tag = content[tag_start:tag_end]
            if tag == "note-content":
                break

            if tag in _FORMAT_TAGS:
                if is_close:
                    markup = close_tag(markup, tag, open_tags)
                else:
                    open_tags.insert(0, tag)
                    markup += f"<{tag}>"

            tag_start = start = tag_end + 1

        markup += "".join(f"</{tag}>" for tag in open_tags)
        return markup + "</span></markup>"

    @property
    def tags(self) -> List[Tag]:
        """The labels of the note, sorted by case-folded name."""
        return list(self._tags)

    @property
    def extension(self) -> str:
        """The file extension for XML notes."""
        return ".note"

    @property
    def features(self) -> Feature:
        """XML notes support colour, formatting and dates."""
        return (
            Feature.COLOR
            | Feature.FORMAT
            | Feature.CREATION_DATE
            | Feature.MODIFICATION_DATE
        )

    def match(self, needle: str) -> bool:
        """Return True if the title or the content contains ``needle``, ignoring case."""
        if super().match(needle):
            return True
        text = self._text_cache
        if text is None:
            text = self._update_text_cache()
        return needle.casefold() in text

    def set_content_to_buffer(self, buffer: NoteBuffer) -> None:
        """Replace the text of ``buffer`` with the title and formatted content."""
        if not isinstance(buffer, NoteBuffer):
            raise TypeError("buffer must be a NoteBuffer")

        buffer.set_text(self.title)

        content = self._content_xml
        if content is None or content.startswith(_CONTENT_CLOSE):
            return

        buffer.append("\n")
        marks: Dict[str, int] = {}
        start = end = 0
        length = len(content)

        while end < length:
            char = content[end]
            if char == "<":
                buffer.append(content[start:end])
                end += 1
                is_close = content.startswith("/", end)
                if is_close:
                    end += 1

                if content.startswith("note-content>", end):
                    break
                tag = next((t for t in _FORMAT_TAGS if content.startswith(t, end)), None)

                if tag is None:
                    _log.warning("Unexpected tag in note content at %d", end)
                elif is_close:
                    if tag in marks:
                        buffer.apply_tag(tag, marks.pop(tag), buffer.char_count)
                elif tag not in marks:
                    marks[tag] = buffer.char_count

                close = content.find(">", end)
                if close < 0:
                    return
                end = start = close + 1
            elif char == "&":
                buffer.append(content[start:end])
                entity_end = content.find(";", end)
                if entity_end < 0:
                    return
                entity = content[end:entity_end + 1]
                replacement = _BUFFER_ENTITIES.get(entity)
                if replacement is None:
                    _log.warning("Unknown entity in note content: %s", entity)
                else:
                    buffer.append(replacement)
                end = start = entity_end + 1
            else:
                end += 1

        buffer.apply_tag("font", 0, buffer.char_count)
        buffer.apply_tag("title", 0, buffer.line_bounds(0)[1])
        buffer.modified = False

    def set_content_from_buffer(self, buffer: NoteBuffer) -> None:
        """Take the title and formatted content from ``buffer`` and rebuild the XML."""
        now = int(time.time())
        if self.creation_time == 0:
            self.creation_time = now
        if self.meta_modification_time == 0:
            self.meta_modification_time = now
        self.modification_time = now

        title_end = buffer.line_bounds(0)[1]
        self.title = buffer.get_text(0, title_end)
        has_content = title_end < buffer.char_count

        header = self._header()
        body = ""

        if has_content:
            start = title_end + 1
            parts: List[str] = []
            open_tags: List[str] = []

            for offset, closed, opened in buffer.toggles(start):
                if offset != start:
                    parts.append(escape_markup(buffer.get_text(start, offset)))
                    start = offset

                text = "".join(parts)
                for tag in reversed(closed):
                    name = _saved_name(buffer, tag)
                    if name:
                        text = close_tag(text, name, open_tags)
                parts = [text]

                for tag in opened:
                    name = _saved_name(buffer, tag)
                    if name:
                        parts.append(f"<{name}>")
                        open_tags.insert(0, name)

            if start < buffer.char_count:
                parts.append(escape_markup(buffer.get_text(start, buffer.char_count)))
            parts.extend(f"</{name}>" for name in open_tags)
            body = "".join(parts)

        self._raw_xml = header + body + _DOCUMENT_END + "\n"
        self._content_start = len(header)
        self._text_cache = None
        self._markup_cache = None