import pytest

from jotbook.enums import Feature
from jotbook.item import parse_rgba
from jotbook.note_buffer import NoteBuffer
from jotbook.plain_note import PlainNote


def _check_with_change(note):
    note.uid = "test-uid"
    assert note.uid == "test-uid"

    assert note.is_modified()
    note.unset_modified()
    assert not note.is_modified()

    note.title = "test title"
    assert note.title == "test title"

    assert note.is_modified()
    note.unset_modified()
    assert not note.is_modified()

    rgba = parse_rgba("#123")
    note.rgba = rgba
    assert note.rgba is not None
    assert note.rgba == rgba

    assert note.is_modified()
    note.unset_modified()
    assert not note.is_modified()

    # Setting the same colour changes nothing
    note.rgba = rgba
    assert note.rgba == rgba
    assert not note.is_modified()


def test_empty():
    note = PlainNote.from_data(None)
    assert note.uid is None
    assert note.title == ""
    assert note.rgba is None
    assert note.is_new()
    assert not note.is_modified()
    assert note.features == Feature.NONE

    _check_with_change(note)


@pytest.mark.parametrize("data", [None, ""])
def test_new(data):
    note = PlainNote.from_data(data)
    assert note.title == ""
    assert note.raw_content is None
    assert note.text_content is None


def test_title():
    note = PlainNote.from_data("Some Randomly long test 😊")
    assert note.uid is None
    assert note.title == "Some Randomly long test 😊"
    assert note.raw_content is None

    _check_with_change(note)


def test_content():
    note = PlainNote.from_data("Some Randomly\nlong test 😊")
    assert note.uid is None
    assert note.title == "Some Randomly"
    assert note.raw_content == "long test 😊"
    assert note.text_content == "long test 😊"

    _check_with_change(note)


def test_content_keeps_later_newlines():
    note = PlainNote.from_data("Title\nline one\nline two")
    assert note.title == "Title"
    assert note.text_content == "line one\nline two"


def test_buffer():
    note = PlainNote.from_data(None)
    buffer = NoteBuffer()

    note.set_content_from_buffer(buffer)
    assert note.title == ""
    assert note.raw_content is None

    buffer.set_text("Title \t only")
    note.set_content_from_buffer(buffer)
    assert note.title == "Title \t only"
    assert note.raw_content is None

    buffer.set_text("Title\nand content")
    note.set_content_from_buffer(buffer)
    assert note.title == "Title"
    assert note.raw_content == "and content"


def test_content_to_buffer():
    note = PlainNote.from_data("Test\nContent")
    buffer = NoteBuffer()
    note.set_content_to_buffer(buffer)

    assert buffer.text == "Test\nContent"
    assert buffer.tag_ranges("title") == [(0, 4)]
    assert buffer.modified is False


def test_buffer_round_trip():
    note = PlainNote.from_data("Heading\nbody text\nmore")
    buffer = NoteBuffer()
    note.set_content_to_buffer(buffer)

    other = PlainNote.from_data(None)
    other.set_content_from_buffer(buffer)
    assert other.title == note.title
    assert other.text_content == note.text_content


def test_markup():
    note = PlainNote.from_data(None)
    assert note.markup is None

    note.title = "<html> tag & no content"
    assert note.markup == "<b>&lt;html&gt; tag &amp; no content</b>"

    note.set_text_content("\" It doesn't have <tag> \"")
    assert note.markup == (
        "<b>&lt;html&gt; tag &amp; no content</b>\n\n"
        "&quot; It doesn&apos;t have &lt;tag&gt; &quot;"
    )

    note.title = ""
    assert note.markup == "\n\n&quot; It doesn&apos;t have &lt;tag&gt; &quot;"


def test_search():
    note = PlainNote.from_data("Some Randomly\nlong test 😊")

    assert note.match("Some")
    assert note.match("some")
    assert note.match("soME")
    assert note.match("long test")
    assert not note.match("invalid")

    note.title = "ഒരു തലക്കെട്ടു"
    assert note.match("തല")

    note.title = "Русский"
    assert note.match("руссКИЙ")

    note.set_text_content("ß ഉള്ളടക്കം")
    assert note.match("руссКИЙ")
    assert note.match("ss")
    assert note.match("ഉള")
    assert not note.match("ഉള്ളി")


def test_search_without_content():
    note = PlainNote.from_data("Only a title")
    assert note.match("title")
    assert not note.match("body")


def test_time():
    note = PlainNote.from_data(None)
    assert note.creation_time == 0
    assert note.modification_time == 0


def test_set_text_content_does_not_mark_modified():
    note = PlainNote.from_data(None)
    note.set_text_content("new content")
    assert note.text_content == "new content"
    assert not note.is_modified()


def test_extension_and_tags():
    note = PlainNote.from_data("x")
    assert note.extension == ".txt"
    assert note.tags == []