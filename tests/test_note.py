import pytest

from jotbook.enums import Feature
from jotbook.note import Note
from jotbook.note_buffer import NoteBuffer


class MemoNote(Note):
    def __init__(self, title=None, body=None):
        super().__init__(title=title)
        self._body = body

    @property
    def text_content(self):
        return self._body

    def set_text_content(self, content):
        self._body = content

    @property
    def raw_content(self):
        return self._body

    @property
    def markup(self):
        return None

    def set_content_from_buffer(self, buffer):
        title, _, body = buffer.text.partition("\n")
        self.title = title
        self._body = body or None


def test_note_is_abstract():
    with pytest.raises(TypeError):
        Note()


def test_content_to_buffer_with_body():
    note = MemoNote("Test", "Content")
    buffer = NoteBuffer()
    note.set_content_to_buffer(buffer)
    assert buffer.text == "Test\nContent"
    assert buffer.modified is False
    assert buffer.tag_ranges("title") == [buffer.line_bounds(0)]


@pytest.mark.parametrize("body", [None, ""])
def test_content_to_buffer_title_only(body):
    note = MemoNote("Test", body)
    buffer = NoteBuffer()
    note.set_content_to_buffer(buffer)
    assert buffer.text == "Test"
    assert buffer.line_count == 1


def test_content_to_buffer_empty_note():
    note = MemoNote()
    buffer = NoteBuffer()
    buffer.set_text("old text")
    note.set_content_to_buffer(buffer)
    assert buffer.text == ""
    assert buffer.modified is False


def test_content_to_buffer_requires_note_buffer():
    note = MemoNote("Test", "Content")
    with pytest.raises(TypeError):
        Note.set_content_to_buffer(note, "not a buffer")
    assert note.title == "Test"


def test_buffer_round_trip_through_note():
    note = MemoNote("Test", "Content")
    buffer = NoteBuffer()
    note.set_content_to_buffer(buffer)
    other = MemoNote()
    other.set_content_from_buffer(buffer)
    assert other.title == note.title
    assert other.raw_content == note.raw_content


def test_default_tags_and_extension():
    note = MemoNote("Test")
    assert note.tags == []
    assert note.extension == ".txt"
    assert note.features == Feature.NONE
    assert Note.is_modified(note) is True


def test_set_text_content_updates_text():
    note = MemoNote("Test")
    note.set_text_content("body")
    assert note.text_content == "body"
    assert Note.is_new(note) is True