# jotbook

Models for notes. The package has plain-text notes and XML notes in the
Tomboy/Bijiben format. It also has a tag (label) store and a text buffer.
The buffer tracks bold, italic, underline and strikethrough formatting,
and it keeps the first line marked as the title.

## Installing

```
pip install .
```

## Modules

- `jotbook.enums`: `View`, `ViewMode` and `ViewType`, plus the `Feature`
  flags (`COLOR`, `FORMAT`, `TRASH`, `NOTEBOOK`, `ISOLATED_NOTEBOOK`,
  `CREATION_DATE`, `MODIFICATION_DATE`).
- `jotbook.item`: the abstract `Item` base class, the `Rgba` colour,
  `parse_rgba()` and `compare_items()`.
- `jotbook.note`: the abstract `Note` base class.
- `jotbook.plain_note`: `PlainNote`.
- `jotbook.xml_note`: `XmlNote`.
- `jotbook.xml_format`: helpers for the XML format. They include
  `detect_format()`, `NoteFormat`, `format_tag()`, `format_time_tag()`,
  `unix_time_to_iso()`, `iso_to_unix_time()`, `close_tag()` and
  `text_from_xml()`.
- `jotbook.tag_store`: `Tag`, `TagStore` and `compare_tags()`.
- `jotbook.note_buffer`: `NoteBuffer`.

## Items

Every note is an `Item`. An item has these properties:

- `uid`, `title`, `rgba`
- `creation_time`, `modification_time`, `meta_modification_time`, in
  seconds since the UNIX epoch
- `features`

Changing `uid`, `title` or `rgba` marks the item as modified.
`unset_modified()` clears the mark. `is_new()` is true while `uid` is
`None`.

`parse_rgba()` reads `#rgb`-style hex, `rgb(...)`, `rgba(...)` and a few
colour names. It raises `ValueError` for anything else.

## Plain notes

The first line of a plain note is its title. The rest is its content.

```python
from jotbook.plain_note import PlainNote

note = PlainNote.from_data("Groceries\nmilk, eggs")
note.title          # "Groceries"
note.raw_content    # "milk, eggs"
note.text_content   # "milk, eggs"
note.markup         # "<b>Groceries</b>\n\nmilk, eggs"
note.match("EGGS")  # True; matching ignores case
```

## XML notes

```python
from jotbook.tag_store import TagStore
from jotbook.xml_note import XmlNote

store = TagStore()
note = XmlNote.from_data(xml_text, store)
note.title
note.text_content   # case-folded plain text of the content, or None
note.markup         # "<markup><span font='Cantarell'>...</span></markup>"
note.tags           # Tag objects, sorted by case-folded name
note.raw_content    # the full XML document
note.extension      # ".note"
```

`from_data` raises `ValueError` if the data is not a recognised note
format. Only version 2 Bijiben notes are parsed for their title, dates,
colour and tags. Other recognised formats are kept as they are.

When a note is loaded, its tags are added to the `TagStore` you pass in.
`TagStore.insert()` returns the tag that already exists when a name
matches without regard to case.

## Editing through a buffer

`NoteBuffer` holds the text of a note while it is being edited:

- It keeps the `"title"` tag on the first line.
- `select()` sets the selection.
- `apply_format()` toggles `"bold"`, `"italic"`, `"underline"` or
  `"strikethrough"` on the selected text outside the title.
- `remove_all_tags()` clears the formatting from the selection.
- `frozen()` is a context manager. While it is active, the buffer stops
  maintaining the title and font tags.

```python
from jotbook.note_buffer import NoteBuffer
from jotbook.xml_note import XmlNote

note = XmlNote()
buffer = NoteBuffer()
buffer.set_text("Title\nHello world")
buffer.select(6, 11)
buffer.apply_format("bold")
note.set_content_from_buffer(buffer)
note.title          # "Title"
# note.raw_content contains "<note-content><b>Hello</b> world</note-content>"
```

`set_content_to_buffer()` goes the other way. It fills a buffer from a
note.

## What this package does not do

This package is a library of models only. It has:

- no command-line tool
- no user interface
- no storage: it does not read or write note files or directories
- no notebooks or trash

You load and save the note text yourself. You then pass it to
`from_data()`, or take it from `raw_content`.

## Running the tests

```
pip install .[test]
pytest
```