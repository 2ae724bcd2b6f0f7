import functools

import pytest

from jotbook.enums import Feature
from jotbook.item import Item, Rgba, compare_items, parse_rgba


class Sample(Item):
    pass


def test_item_is_abstract():
    with pytest.raises(TypeError):
        Item()


def test_defaults():
    item = Sample()
    assert item.uid is None
    assert item.title == ""
    assert item.rgba is None
    assert item.creation_time == 0
    assert item.modification_time == 0
    assert item.meta_modification_time == 0
    assert Item.is_new(item) is True
    assert Item.is_modified(item) is False
    assert item.features == Feature.NONE


def test_uid_marks_modified():
    item = Sample()
    item.uid = "test-uid"
    assert item.uid == "test-uid"
    assert Item.is_modified(item) is True
    assert Item.is_new(item) is False
    Item.unset_modified(item)
    assert Item.is_modified(item) is False
    item.uid = "test-uid"
    assert Item.is_modified(item) is False


def test_title_marks_modified():
    item = Sample()
    item.title = "test title"
    assert item.title == "test title"
    assert Item.is_modified(item) is True
    Item.unset_modified(item)
    item.title = "test title"
    assert Item.is_modified(item) is False


def test_title_none_reads_empty():
    item = Sample(title="x")
    item.title = None
    assert item.title == ""
    assert Item.is_modified(item) is True


def test_constructor_title_marks_modified():
    assert Item.is_modified(Sample(title="Hello")) is True


def test_rgba_set_and_same_colour():
    item = Sample()
    colour = parse_rgba("#123")
    item.rgba = colour
    assert item.rgba == colour
    assert item.is_modified() is True
    item.unset_modified()
    item.rgba = parse_rgba("#123")
    assert item.rgba == colour
    assert item.is_modified() is False


def test_rgba_none_rejected():
    item = Sample()
    with pytest.raises(ValueError):
        item.rgba = None
    assert Item.is_modified(item) is False


def test_times_do_not_mark_modified():
    item = Sample()
    item.creation_time = 10
    item.modification_time = 20
    item.meta_modification_time = 30
    assert (item.creation_time, item.modification_time, item.meta_modification_time) == (10, 20, 30)
    assert Item.is_modified(item) is False


def test_negative_time_rejected():
    with pytest.raises(ValueError):
        Sample(creation_time=-1)
    item = Sample(creation_time=5)
    assert item.creation_time == 5
    assert Item.is_new(item) is True


def test_match_casefolds():
    item = Sample(title="Some Randomly")
    assert Item.match(item, "Some") is True
    assert Item.match(item, "soME") is True
    assert Item.match(item, "invalid") is False
    item.title = "Русский"
    assert Item.match(item, "руссКИЙ") is True
    item.title = "ഒരു തലക്കെട്ടു"
    assert Item.match(item, "തല") is True


def test_compare_items_orders_by_casefolded_title():
    a = Sample(title="apple")
    b = Sample(title="Banana")
    c = Sample(title="APPLE")
    assert compare_items(a, a) == 0
    assert compare_items(a, b) < 0
    assert compare_items(b, a) > 0
    assert compare_items(a, c) == 0
    ordered = sorted([b, a], key=functools.cmp_to_key(compare_items))
    assert [i.title for i in ordered] == ["apple", "Banana"]


def test_compare_untitled_sorts_first():
    assert compare_items(Sample(), Sample(title="a")) < 0


def test_parse_rgb_round_trip():
    colour = parse_rgba("rgb(239, 242, 209)")
    assert colour.to_string() == "rgb(239,242,209)"
    assert parse_rgba(colour.to_string()) == colour


def test_parse_rgba_with_alpha_round_trip():
    colour = parse_rgba("rgba(1,2,3,0.5)")
    assert colour.alpha == 0.5
    assert colour.to_string() == "rgba(1,2,3,0.5)"


def test_hex_short_form():
    assert parse_rgba("#123").to_string() == "rgb(17,34,51)"
    assert parse_rgba("#112233") == parse_rgba("#123")


def test_hex_extremes():
    assert parse_rgba("#fff") == Rgba(1.0, 1.0, 1.0, 1.0)
    assert parse_rgba("#000000") == Rgba(0.0, 0.0, 0.0, 1.0)


def test_named_colour():
    assert parse_rgba("white") == parse_rgba("#ffffff")


@pytest.mark.parametrize("text", ["", "#12", "#ggg", "rgb(1,2)", "rgba(1,2,3)", "nocolour"])
def test_invalid_colours(text):
    with pytest.raises(ValueError):
        parse_rgba(text)