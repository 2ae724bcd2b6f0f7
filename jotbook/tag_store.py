"""Tags (labels) for notes, and a store that keeps them unique."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from .item import Rgba

__all__ = ["Tag", "TagStore", "compare_tags"]


@dataclass(frozen=True, eq=False)
class Tag:
    """A label with a name and an optional colour.

    Two tags are the same label when their names match ignoring case.
    """

    name: str
    rgba: Optional[Rgba] = None
    key: str = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "key", self.name.casefold())


class TagStore:
    """An ordered collection of tags with unique case-insensitive names."""

    def __init__(self) -> None:
        self._tags: List[Tag] = []

    def insert(self, name: str, rgba: Optional[Rgba] = None) -> Tag:
        """Return the tag named ``name``, adding it if the store has none.

        An existing tag keeps its name and colour.
        """
        if not name:
            raise ValueError("tag name must not be empty")

        key = name.casefold()
        for tag in self._tags:
            if tag.key == key:
                return tag

        tag = Tag(name, rgba)
        self._tags.append(tag)
        return tag

    def __iter__(self) -> Iterator[Tag]:
        return iter(self._tags)

    def __len__(self) -> int:
        return len(self._tags)

    def __getitem__(self, index: int) -> Tag:
        return self._tags[index]


def compare_tags(a: Tag, b: Tag) -> int:
    """Compare two tags by case-folded name: negative, zero or positive."""
    if a.key == b.key:
        return 0
    return -1 if a.key < b.key else 1