"""Players: their hands, played and eliminated cards, and the illusion rule."""

from __future__ import annotations

import copy as _copy
import re
from dataclasses import dataclass, field, replace
from typing import List, NamedTuple, Tuple

from eter.board import Board
from eter.card import Card

_NAME_PATTERN = re.compile(r"[A-Z]+[a-z]*")


class PlayedCard(NamedTuple):
    """A card that was put on the board, with the cell it went to."""

    card: Card
    position: Tuple[int, int]


def validate_name(name: str) -> str:
    """Return the name if it is capital letters followed by lower-case ones, else raise ValueError."""
    if _NAME_PATTERN.fullmatch(name) is None:
        raise ValueError(f"Invalid name: {name!r}")
    return name


@dataclass
class Player:
    """One of the two players of a match."""

    name: str = ""
    color: str = ""
    score: int = 0
    hand: List[Card] = field(default_factory=list)
    has_used_illusion: bool = False
    played_cards: List[PlayedCard] = field(default_factory=list)
    eliminated_cards: List[Card] = field(default_factory=list)

    def add_to_eliminated_cards(self, card: Card) -> None:
        """Record a card that was taken out of the game."""
        self.eliminated_cards.append(card)

    def add_to_hand(self, card: Card) -> None:
        """Take a card back into the hand; it always returns face up."""
        self.hand.append(replace(card, face_up=True))

    def add_played_card(self, card: Card, x: int, y: int) -> None:
        """Record that a card was played at (x, y)."""
        self.played_cards.append(PlayedCard(card, (x, y)))

    def remove_played_card(self, card: Card, x: int, y: int) -> bool:
        """Forget the first record of the card played at (x, y); return whether one was found."""
        for index, played in enumerate(self.played_cards):
            if played.card == card and played.position == (x, y):
                del self.played_cards[index]
                return True
        return False

    def _hand_index(self, card: Card) -> int:
        for index, held in enumerate(self.hand):
            if held == card:
                return index
        return -1

    def place_card(self, x: int, y: int, card: Card, board: Board) -> bool:
        """Move a card from the hand to the board; return False if it is not held or not allowed."""
        index = self._hand_index(card)
        if index < 0:
            return False
        if not board.place_card(x, y, card):
            return False
        del self.hand[index]
        self.add_played_card(card, x, y)
        return True

    def use_illusion(self, x: int, y: int, board: Board, illusion: Card) -> bool:
        """Play a held card face down on an empty cell; return whether it was placed."""
        if not board.is_valid_position(x, y):
            return False
        if not board.is_empty_cell(x, y):
            return False
        index = self._hand_index(illusion)
        illusion.face_up = False
        if index < 0:
            return False
        self.hand[index].face_up = False
        if self.place_card(x, y, self.hand[index], board):
            self.has_used_illusion = True
            return True
        return False

    def hand_listing(self) -> str:
        """Return one line per card in hand, with its index."""
        return "".join(
            f"at {index} is card {card}\n" for index, card in enumerate(self.hand)
        )

    def swap(self, other: Player) -> None:
        """Exchange the whole state with another player."""
        self.__dict__, other.__dict__ = other.__dict__, self.__dict__

    def copy(self) -> Player:
        """Return an independent copy of the player and all the cards it holds."""
        return _copy.deepcopy(self)