"""One match between two players: turns, covering illusions, explosions and round results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from eter.board import Board
from eter.card import Card
from eter.explosion import Explosion
from eter.player import Player


class RoundStatus(Enum):
    """The state of a round after a move."""

    ONGOING = "0"
    WON = "1"
    OUT_OF_CARDS = "2"
    BOARD_FULL = "3"


@dataclass(eq=False)
class Game:
    """The players, the board and the bookkeeping of a match."""

    player1: Player = field(default_factory=Player)
    player2: Player = field(default_factory=Player)
    game_mode: str = ""
    board: Board = field(default_factory=Board)
    is_player_turn: bool = True
    is_used_explosion: bool = False
    player1_wins: int = 0
    player2_wins: int = 0
    nr_round: int = 0
    returned_cards: List[Card] = field(default_factory=list)
    count_turn_for_returned_cards: int = 0

    def current_player(self) -> Player:
        """Return the player whose turn it is."""
        return self.player1 if self.is_player_turn else self.player2

    def opponent(self) -> Player:
        """Return the player who is waiting."""
        return self.player2 if self.is_player_turn else self.player1

    def switch_turn(self) -> None:
        self.is_player_turn = not self.is_player_turn

    def advance_returned_cards(self) -> None:
        """Count a turn after an explosion; on the third one hand the returned cards back."""
        if self.count_turn_for_returned_cards == 3:
            self.distribute_returned_cards()
        elif self.count_turn_for_returned_cards in (1, 2):
            self.count_turn_for_returned_cards += 1

    def distribute_returned_cards(self) -> None:
        """Give each returned card back to the player of its colour."""
        kept: List[Card] = []
        for card in self.returned_cards:
            if card.color == self.player1.color:
                self.player1.add_to_hand(card)
            elif card.color == self.player2.color:
                self.player2.add_to_hand(card)
            else:
                kept.append(card)
        self.returned_cards = kept

    @staticmethod
    def _card_at(player: Player, card_index: int) -> Card:
        if not 0 <= card_index < len(player.hand):
            raise IndexError(f"Invalid card index {card_index}")
        return player.hand[card_index]

    def place_from_hand(self, x: int, y: int, card_index: int) -> bool:
        """Play the current player's card at (x, y), covering a hidden card if one is there."""
        player = self.current_player()
        card = self._card_at(player, card_index)
        if self.board.is_valid_position(x, y):
            top = self.board.top(x, y)
            if top is not None and not top.face_up:
                return self.handle_card_cover(player, self.opponent(), x, y, card_index)
        return player.place_card(x, y, card, self.board)

    def play_illusion(self, x: int, y: int, card_index: int) -> bool:
        """Play the current player's card face down; each player may do this once."""
        player = self.current_player()
        if player.has_used_illusion:
            return False
        card = self._card_at(player, card_index)
        return player.use_illusion(x, y, self.board, card)

    def handle_card_cover(
        self, current_player: Player, opponent: Player, x: int, y: int, card_index: int
    ) -> bool:
        """Reveal a hidden card and cover it if the new card is stronger; return whether it was placed."""
        stack = self.board[(x, y)]
        if not stack:
            return False
        new_card = self._card_at(current_player, card_index)
        existing = stack[-1]
        if existing.color == current_player.color:
            return current_player.place_card(x, y, new_card, self.board)
        if existing.face_up:
            return False
        existing.face_up = True
        if new_card.value > existing.value:
            return current_player.place_card(x, y, new_card, self.board)
        del current_player.hand[card_index]
        current_player.add_to_eliminated_cards(new_card)
        return False

    def can_activate_explosion(self) -> bool:
        """Tell whether the explosion is still unused and two lines are complete."""
        return not self.is_used_explosion and self.board.is_two_line_complete()

    def activate_explosion(self, explosion: Optional[Explosion]) -> None:
        """Apply the chosen explosion, or pass None to decline; either way it is used up."""
        if explosion is not None:
            self.board = explosion.apply_effects()
            self.returned_cards = list(explosion.returned_cards)
            self.count_turn_for_returned_cards = 1
        self.is_used_explosion = True

    def verify_game_over(self) -> RoundStatus:
        """Check for a line, an empty hand or a full board, crediting a line to its player."""
        winner = self.board.find_winner()
        if winner == self.player1.color:
            self.player1_wins += 1
            return RoundStatus.WON
        if winner == self.player2.color:
            self.player2_wins += 1
            return RoundStatus.WON
        if not self.player1.hand or not self.player2.hand:
            return RoundStatus.OUT_OF_CARDS
        if self.board.is_board_full():
            return RoundStatus.BOARD_FULL
        return RoundStatus.ONGOING

    def reset_board(self) -> None:
        self.board.clear()