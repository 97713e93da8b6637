"""The explosion card: a grid of effects laid over the occupied part of the board."""

from __future__ import annotations

import random
from enum import IntEnum
from typing import Iterator, List, Optional, Tuple

from eter.board import Board
from eter.card import Card


class Effect(IntEnum):
    """What an explosion does to the cell under one of its squares."""

    NONE = 0
    REMOVE_CARD = 1
    RETURN_CARD = 2
    CREATE_HOLE = 3


_EFFECTS = (Effect.REMOVE_CARD, Effect.RETURN_CARD, Effect.CREATE_HOLE)
_EFFECT_WEIGHTS = (9, 9, 1)
_SYMBOLS = {
    Effect.CREATE_HOLE: "/ ",
    Effect.REMOVE_CARD: "X ",
    Effect.RETURN_CARD: "R ",
    Effect.NONE: "  ",
}
_LEGEND = (
    "This is what the explosion card looks like. \n"
    " / represents CREATE_HOLE. \n"
    " X represents REMOVE_CARD. \n"
    " R represents RETURN_CARD. \n"
)


def _effect_limits(size: int) -> Tuple[int, int]:
    return (2, 4) if size == 3 else (3, 6)


class Explosion:
    """An explosion of a given size, tried out on a copy of a board before it is applied."""

    def __init__(self, size: int, board: Board, rng: Optional[random.Random] = None) -> None:
        self.size = size
        self.original_board = board.copy()
        self.board = board.copy()
        self.effect_matrix: List[List[Effect]] = [
            [Effect.NONE] * size for _ in range(size)
        ]
        self.returned_cards: List[Card] = []
        self._rng = rng if rng is not None else random.Random()

    def generate_random_effects(self) -> None:
        """Fill the effect grid with random effects on random squares."""
        min_effects, max_effects = _effect_limits(self.size)
        if self.size * self.size < min_effects:
            raise ValueError(f"An explosion of size {self.size} cannot hold enough effects")
        while True:
            matrix = [[Effect.NONE] * self.size for _ in range(self.size)]
            positions = list(range(self.size * self.size))
            self._rng.shuffle(positions)
            count = 0
            for position in positions[:max_effects]:
                row, col = divmod(position, self.size)
                matrix[row][col] = self._rng.choices(_EFFECTS, weights=_EFFECT_WEIGHTS)[0]
                count += 1
            if count >= min_effects:
                self.effect_matrix = matrix
                return

    def rotate_clockwise(self) -> None:
        """Turn the effect grid a quarter turn clockwise."""
        self.effect_matrix = [list(row) for row in zip(*self.effect_matrix[::-1])]

    def rotate_counter_clockwise(self) -> None:
        """Turn the effect grid a quarter turn counter-clockwise."""
        self.effect_matrix = [list(row) for row in zip(*self.effect_matrix)][::-1]

    def render_effects(self) -> str:
        """Return a legend followed by the effect grid, one line per row."""
        rows = ("".join(_SYMBOLS[effect] for effect in row) + "\n" for row in self.effect_matrix)
        return _LEGEND + "".join(rows)

    @staticmethod
    def _span(low: int, high: int, board: Board) -> range:
        return range(low, min(high, board.index_max - 1) + 1)

    def _rows(self, board: Board) -> range:
        return self._span(board.index_line_min, board.index_line_max, board)

    def _cols(self, board: Board) -> range:
        return self._span(board.index_col_min, board.index_col_max, board)

    def _cells(self) -> Iterator[Tuple[int, int, int, int]]:
        """Yield (matrix row, matrix col, board row, board col) for each covered cell."""
        rows = self._rows(self.original_board)
        cols = self._cols(self.original_board)
        indices = range(len(self.effect_matrix))
        for m_row, row in zip(indices, rows):
            for m_col, col in zip(indices, cols):
                yield m_row, m_col, row, col

    def are_effects_adjacent(self) -> bool:
        """Tell whether every card left on the trial board still has a neighbour."""
        for row in self._rows(self.board):
            for col in self._cols(self.board):
                if self.board.grid[row][col] and not self.board.exist_non_adjacent_cards(row, col):
                    return False
        return True

    def verify_effects(self) -> None:
        """Drop effects that would hit an Eter card or leave a card isolated."""
        self.board = self.original_board.copy()
        for m_row, m_col, row, col in self._cells():
            effect = self.effect_matrix[m_row][m_col]
            top = self.board.top(row, col)
            if top is not None and top.is_eter:
                self.effect_matrix[m_row][m_col] = Effect.NONE
                continue
            if effect is Effect.NONE:
                continue
            if effect is Effect.CREATE_HOLE:
                self.board.create_hole(row, col)
            else:
                self.board.remove_card(row, col)
            if not self.are_effects_adjacent():
                self.effect_matrix[m_row][m_col] = Effect.NONE
                self.board = self.original_board.copy()

    def handle_apply_effects(self) -> None:
        """Apply every effect to a fresh copy of the board, collecting returned cards."""
        self.board = self.original_board.copy()
        for m_row, m_col, row, col in self._cells():
            effect = self.effect_matrix[m_row][m_col]
            if effect is Effect.REMOVE_CARD:
                self.board.remove_card(row, col)
            elif effect is Effect.RETURN_CARD:
                top = self.board.top(row, col)
                if top is not None:
                    self.board.remove_card(row, col)
                    self.returned_cards.append(top)
            elif effect is Effect.CREATE_HOLE:
                self.board.create_hole(row, col)

    def apply_effects(self) -> Board:
        """Verify, apply and return the resulting board with its bounds recomputed."""
        self.verify_effects()
        self.handle_apply_effects()
        self.board.update_after_removal()
        return self.board