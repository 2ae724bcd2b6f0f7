"""The base class for notes and notebooks, and the colour type they use."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .enums import Feature

__all__ = ["Rgba", "parse_rgba", "Item", "compare_items"]


def _clamp(value: float) -> float:
    return min(max(value, 0.0), 1.0)


@dataclass(frozen=True)
class Rgba:
    """A colour with red, green, blue and alpha channels in the range 0..1."""

    red: float
    green: float
    blue: float
    alpha: float = 1.0

    def to_string(self) -> str:
        """Return the colour as ``rgb(r,g,b)`` or ``rgba(r,g,b,a)``."""
        channels = ",".join(
            str(int(0.5 + _clamp(v) * 255.0)) for v in (self.red, self.green, self.blue)
        )
        if self.alpha > 0.999:
            return f"rgb({channels})"
        return f"rgba({channels},{_clamp(self.alpha):g})"

    def __str__(self) -> str:
        return self.to_string()


_NAMED_COLORS = {
    "black": (0, 0, 0),
    "white": (255, 255, 255),
    "red": (255, 0, 0),
    "green": (0, 255, 0),
    "blue": (0, 0, 255),
    "yellow": (255, 255, 0),
    "cyan": (0, 255, 255),
    "magenta": (255, 0, 255),
    "gray": (190, 190, 190),
    "grey": (190, 190, 190),
    "orange": (255, 165, 0),
    "purple": (160, 32, 240),
    "brown": (165, 42, 42),
    "pink": (255, 192, 203),
}


def _parse_channel(text: str) -> float:
    text = text.strip()
    try:
        if text.endswith("%"):
            return _clamp(float(text[:-1]) / 100.0)
        return _clamp(float(text) / 255.0)
    except ValueError:
        raise ValueError(f"invalid colour component: {text!r}") from None


def _parse_hex(digits: str) -> Rgba:
    if len(digits) not in (3, 6, 9, 12):
        raise ValueError(f"invalid hex colour: #{digits}")
    try:
        int(digits, 16)
    except ValueError:
        raise ValueError(f"invalid hex colour: #{digits}") from None
    width = len(digits) // 3
    scale = 16**width - 1
    red, green, blue = (
        int(digits[i * width:(i + 1) * width], 16) / scale for i in range(3)
    )
    return Rgba(red, green, blue, 1.0)


def parse_rgba(text: str) -> Rgba:
    """Parse a colour specification.

    Accepts ``#rgb`` style hex in 1 to 4 digits per channel,
    ``rgb(r,g,b)``, ``rgba(r,g,b,a)`` and a few colour names.
    Raises ValueError if the text is not a colour.
    """
    spec = text.strip()

    for prefix, has_alpha in (("rgba", True), ("rgb", False)):
        if spec.startswith(prefix):
            rest = spec[len(prefix):].strip()
            if not (rest.startswith("(") and rest.endswith(")")):
                raise ValueError(f"invalid colour: {text!r}")
            parts = rest[1:-1].split(",")
            if len(parts) != (4 if has_alpha else 3):
                raise ValueError(f"invalid colour: {text!r}")
            red, green, blue = (_parse_channel(p) for p in parts[:3])
            alpha = 1.0
            if has_alpha:
                try:
                    alpha = _clamp(float(parts[3].strip()))
                except ValueError:
                    raise ValueError(f"invalid alpha in colour: {text!r}") from None
            return Rgba(red, green, blue, alpha)

    if spec.startswith("#"):
        return _parse_hex(spec[1:])

    named = _NAMED_COLORS.get(spec.lower())
    if named is None:
        raise ValueError(f"unknown colour: {text!r}")
    return Rgba(*(v / 255.0 for v in named), 1.0)


def _check_time(value: int) -> int:
    if value < 0:
        raise ValueError(f"time must not be negative, got {value}")
    return value


class Item:
    """Base class for notes and notebooks.

    Not usable on its own: derive from it. Changing the uid, title or
    colour marks the item as modified; times do not.
    """

    def __init__(
        self,
        *,
        uid: Optional[str] = None,
        title: Optional[str] = None,
        rgba: Optional[Rgba] = None,
        creation_time: int = 0,
        modification_time: int = 0,
        meta_modification_time: int = 0,
    ) -> None:
        if type(self) is Item:
            raise TypeError("Item is abstract; instantiate a subclass")
        self._uid: Optional[str] = None
        self._title: Optional[str] = None
        self._rgba: Optional[Rgba] = None
        self._creation_time = 0
        self._modification_time = 0
        self._meta_modification_time = 0
        self._modified = False

        if uid is not None:
            self.uid = uid
        if title is not None:
            self.title = title
        if rgba is not None:
            self.rgba = rgba
        self.creation_time = creation_time
        self.modification_time = modification_time
        self.meta_modification_time = meta_modification_time

    def _set_modified(self) -> None:
        self._modified = True

    @property
    def uid(self) -> Optional[str]:
        """A unique identifier of the item, or None if it is not saved."""
        return self._uid

    @uid.setter
    def uid(self, value: Optional[str]) -> None:
        if self._uid == value:
            return
        self._uid = value
        self._set_modified()

    @property
    def title(self) -> str:
        """The title of the item; an empty string if unset."""
        return self._title if self._title is not None else ""

    @title.setter
    def title(self, value: Optional[str]) -> None:
        if self._title == value:
            return
        self._title = value
        self._set_modified()

    @property
    def rgba(self) -> Optional[Rgba]:
        """The colour of the item, or None if it has none."""
        return self._rgba

    @rgba.setter
    def rgba(self, value: Rgba) -> None:
        if value is None:
            raise ValueError("colour must not be None")
        if self._rgba is not None and self._rgba == value:
            return
        self._rgba = value
        self._set_modified()

    @property
    def creation_time(self) -> int:
        """Seconds since the UNIX epoch the item was created; 0 if unknown."""
        return self._creation_time

    @creation_time.setter
    def creation_time(self, value: int) -> None:
        self._creation_time = _check_time(value)

    @property
    def modification_time(self) -> int:
        """Seconds since the UNIX epoch the item was last modified; 0 if unknown."""
        return self._modification_time

    @modification_time.setter
    def modification_time(self, value: int) -> None:
        self._modification_time = _check_time(value)

    @property
    def meta_modification_time(self) -> int:
        """Seconds since the UNIX epoch the item's metadata was last modified."""
        return self._meta_modification_time

    @meta_modification_time.setter
    def meta_modification_time(self, value: int) -> None:
        self._meta_modification_time = _check_time(value)

    @property
    def features(self) -> Feature:
        """The features this item supports."""
        return Feature.NONE

    def is_modified(self) -> bool:
        """Return True if the item has changed since it was last saved."""
        return self._modified

    def unset_modified(self) -> None:
        """Mark the item as not modified."""
        self._modified = False

    def is_new(self) -> bool:
        """Return True if the item has not been saved yet."""
        return self._uid is None

    def match(self, needle: str) -> bool:
        """Return True if the title contains ``needle``, ignoring case."""
        return needle.casefold() in self.title.casefold()


def compare_items(a: Item, b: Item) -> int:
    """Compare two items by case-folded title: negative, zero or positive."""
    if a is b:
        return 0
    title_a = a._title.casefold() if a._title is not None else None
    title_b = b._title.casefold() if b._title is not None else None
    if title_a == title_b:
        return 0
    if title_a is None:
        return -1
    if title_b is None:
        return 1
    return -1 if title_a < title_b else 1