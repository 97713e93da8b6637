"""Playing cards and their console representations."""

from __future__ import annotations

from dataclasses import dataclass

ETER_VALUE = 5
HOLE_VALUE = ord("/")
HOLE_COLOR = "\033[0m"

_RESET = "\033[0m"
_BLACK_BACKGROUND = "\033[48;5;0m"
_TEXT_COLORS = {
    "red": "\033[38;5;9m",
    "blue": "\033[38;5;12m",
}
_COLOR_NAMES = {
    "red": "Red",
    "blue": "Blue",
}


@dataclass
class Card:
    """A card with a value, an owner colour and a face-up flag."""

    value: int = 0
    color: str = ""
    face_up: bool = True

    @classmethod
    def hole(cls) -> Card:
        """Return the marker card that fills a hole on the board."""
        return cls(HOLE_VALUE, HOLE_COLOR, True)

    @property
    def is_eter(self) -> bool:
        return self.value == ETER_VALUE

    @property
    def is_hole(self) -> bool:
        return self.value == HOLE_VALUE

    def swap(self, other: Card) -> None:
        """Exchange every attribute with another card."""
        self.value, other.value = other.value, self.value
        self.color, other.color = other.color, self.color
        self.face_up, other.face_up = other.face_up, self.face_up

    def _symbol(self) -> str:
        if not self.face_up:
            return '"'
        if self.is_hole:
            return "/"
        if self.is_eter:
            return "E"
        return str(self.value)

    def render(self) -> str:
        """Return the card as coloured terminal text."""
        text_color = _TEXT_COLORS.get(self.color)
        background = _BLACK_BACKGROUND if text_color else ""
        text_color = text_color or ""
        symbol = self._symbol()
        if self.face_up and self.is_hole:
            return symbol + _RESET
        return background + text_color + symbol + _RESET

    def describe(self) -> str:
        """Return a plain, uncoloured description of the card."""
        color_name = _COLOR_NAMES.get(self.color, "Default")
        return (
            f"Card(Value: {self._symbol()}, Color: {color_name}, "
            f"Position: {'True' if self.face_up else 'False'})"
        )

    def __str__(self) -> str:
        return self.render()