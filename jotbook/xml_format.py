"""Helpers for reading and writing the XML note format.

The format is the one Tomboy introduced and Bijiben extended. Only the
pieces needed to detect the format version, write header tags, keep
formatting tags balanced and pull the plain text out of a note are
provided here.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import List, Optional

from .plain_note import _escape_markup

__all__ = [
    "COMMON_XML_HEAD",
    "BIJIBEN_XML_NS",
    "TOMBOY_XML_NS",
    "NoteFormat",
    "detect_format",
    "escape_markup",
    "format_tag",
    "unix_time_to_iso",
    "iso_to_unix_time",
    "format_time_tag",
    "close_tag",
    "text_from_xml",
]

COMMON_XML_HEAD = '<?xml version="1.0" encoding="UTF-8"?>'
BIJIBEN_XML_NS = "http://projects.gnome.org/bijiben"
TOMBOY_XML_NS = "http://beatniksoftware.com/tomboy"

# Shorter data cannot hold a complete note header.
_MIN_LENGTH = 100


class NoteFormat(Enum):
    """The dialect and version of an XML note."""

    UNKNOWN = 0
    TOMBOY_1 = 1
    TOMBOY_2 = 2
    TOMBOY_3 = 3
    BIJIBEN_1 = 4
    BIJIBEN_2 = 5


_BIJIBEN_VERSIONS = {
    "2": NoteFormat.BIJIBEN_2,
    "1": NoteFormat.BIJIBEN_1,
}

_TOMBOY_VERSIONS = {
    "0.3": NoteFormat.TOMBOY_3,
    "0.2": NoteFormat.TOMBOY_2,
    "0.1": NoteFormat.TOMBOY_1,
}


def _attribute_value(tag: str, attribute: str) -> Optional[str]:
    marker = f' {attribute}="'
    start = tag.find(marker)
    if start < 0:
        return None
    start += len(marker)
    end = tag.find('"', start)
    if end < 0:
        return None
    return tag[start:end]


def detect_format(data: str) -> NoteFormat:
    """Return the format of XML note data.

    The data is not validated; a partial document is enough as long as
    it holds the opening ``<note`` tag.
    """
    if data is None:
        raise ValueError("data must not be None")

    if len(data.encode("utf-8")) < _MIN_LENGTH:
        return NoteFormat.UNKNOWN

    start = data.find("<note ")
    if start < 0:
        return NoteFormat.UNKNOWN
    end = data.find(">", start)
    if end < 0:
        return NoteFormat.UNKNOWN
    note_tag = data[start:end]

    namespace = _attribute_value(note_tag, "xmlns")
    if namespace == BIJIBEN_XML_NS:
        versions = _BIJIBEN_VERSIONS
    elif namespace == TOMBOY_XML_NS:
        versions = _TOMBOY_VERSIONS
    else:
        return NoteFormat.UNKNOWN

    version = _attribute_value(note_tag, "version")
    if version is None:
        return NoteFormat.UNKNOWN
    return versions.get(version, NoteFormat.UNKNOWN)


def escape_markup(text: Optional[str]) -> str:
    """Escape text for XML; None and the empty string give ''."""
    if not text:
        return ""
    return _escape_markup(text)


def format_tag(tag: str, content: str) -> str:
    """Return ``<tag>content</tag>`` and a newline, with content escaped."""
    if not tag:
        raise ValueError("tag must not be empty")
    if content is None:
        raise ValueError("content must not be None")
    return f"<{tag}>{_escape_markup(content)}</{tag}>\n"


def unix_time_to_iso(unix_time: int) -> str:
    """Format seconds since the UNIX epoch as an ISO 8601 UTC time."""
    moment = datetime(1970, 1, 1, tzinfo=timezone.utc) + timedelta(seconds=unix_time)
    return moment.strftime("%Y-%m-%dT%H:%M:%SZ")


_ISO_RE = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})[Tt ](\d{2}):(\d{2}):(\d{2})"
    r"(?:[.,](\d+))?"
    r"(Z|z|[+-]\d{2}(?::?\d{2})?)?"
)


def _parse_offset(text: str) -> timezone:
    if text in ("Z", "z"):
        return timezone.utc
    sign = -1 if text[0] == "-" else 1
    digits = text[1:].replace(":", "")
    hours = int(digits[:2])
    minutes = int(digits[2:4]) if len(digits) > 2 else 0
    if hours > 23 or minutes > 59:
        raise ValueError(f"invalid time zone offset: {text!r}")
    return timezone(sign * timedelta(hours=hours, minutes=minutes))


def iso_to_unix_time(text: str) -> int:
    """Parse an ISO 8601 date and time into whole seconds since the UNIX epoch.

    Fractions of a second are dropped. A time without a zone is taken as
    local time. Raises ValueError if the text is not such a time.
    """
    match = _ISO_RE.fullmatch(text.strip())
    if match is None:
        raise ValueError(f"invalid ISO 8601 time: {text!r}")
    year, month, day, hour, minute, second = (int(g) for g in match.groups()[:6])
    zone = match.group(8)
    try:
        if zone is None:
            return int(datetime(year, month, day, hour, minute, second).timestamp())
        moment = datetime(
            year, month, day, hour, minute, second, tzinfo=_parse_offset(zone)
        )
    except ValueError as error:
        raise ValueError(f"invalid ISO 8601 time: {text!r}") from error
    delta = moment - datetime(1970, 1, 1, tzinfo=timezone.utc)
    return delta.days * 86400 + delta.seconds


def format_time_tag(tag: str, unix_time: int) -> str:
    """Return ``<tag>time</tag>`` and a newline, with the time in ISO 8601."""
    if not tag:
        raise ValueError("tag must not be empty")
    return f"<{tag}>{unix_time_to_iso(unix_time)}</{tag}>\n"


def close_tag(content: str, tag_name: str, open_tags: List[str]) -> str:
    """Close ``tag_name`` at the end of ``content`` and keep the nesting valid.

    ``open_tags`` lists the open tags, most recently opened first. Tags
    opened after ``tag_name`` are closed before it and reopened after it;
    a tag that would be closed right after being opened is dropped
    instead. ``tag_name`` is removed from ``open_tags`` and the new
    content is returned. Content is unchanged if the tag is not open.
    """
    try:
        index = open_tags.index(tag_name)
    except ValueError:
        return content

    parts = [content]
    text = content
    for name in open_tags[: index + 1]:
        opening = f"<{name}>"
        if text.endswith(opening):
            text = text[: -len(opening)]
        else:
            text += f"</{name}>"
    parts = [text]
    parts.extend(f"<{name}>" for name in reversed(open_tags[:index]))

    del open_tags[index]
    return "".join(parts)


_CONTENT_RE = re.compile(r"<note-content(?:\s[^>]*)?>(.*?)(?:</note-content>|\Z)", re.S)
_TAG_RE = re.compile(r"<[^>]*>")
_ENTITY_RE = re.compile(r"&(#[xX][0-9a-fA-F]+|#[0-9]+|[A-Za-z]+);")
_NAMED_ENTITIES = {"lt": "<", "gt": ">", "amp": "&", "quot": '"', "apos": "'"}


def _replace_entity(match: "re.Match[str]") -> str:
    name = match.group(1)
    if name.startswith(("#x", "#X")):
        return chr(int(name[2:], 16))
    if name.startswith("#"):
        return chr(int(name[1:]))
    return _NAMED_ENTITIES.get(name, match.group(0))


def text_from_xml(xml: str) -> str:
    """Return the plain text of the note content in ``xml``.

    Markup tags are stripped and character entities resolved. Data
    without a ``<note-content>`` element gives an empty string.
    """
    match = _CONTENT_RE.search(xml)
    if match is None:
        return ""
    return _ENTITY_RE.sub(_replace_entity, _TAG_RE.sub("", match.group(1)))