"""The playing field: a square grid of card stacks with a moving bounding box."""

from __future__ import annotations

import copy as _copy
from typing import List, Optional

from eter.card import Card

Stack = List[Card]

UNSET_INDEX = 10
DEFAULT_DIM_MAX = 3
DEFAULT_INDEX_MAX = 7
NO_WINNER = "No winner yet"
SCORE_TIE = " "

_NEIGHBOURS = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1), (0, 1),
    (1, -1), (1, 0), (1, 1),
)


class Board:
    """A grid of optional card stacks; the occupied area may span at most ``dim_max`` cells."""

    def __init__(self) -> None:
        self.dim_max: int = DEFAULT_DIM_MAX
        self.index_max: int = DEFAULT_INDEX_MAX
        self.index_line_min: int = UNSET_INDEX
        self.index_line_max: int = UNSET_INDEX
        self.index_col_min: int = UNSET_INDEX
        self.index_col_max: int = UNSET_INDEX
        self.grid: List[List[Optional[Stack]]] = [
            [None] * self.index_max for _ in range(self.index_max)
        ]

    def copy(self) -> Board:
        """Return an independent copy of the board and all its cards."""
        return _copy.deepcopy(self)

    def _in_grid(self, x: int, y: int) -> bool:
        return 0 <= x < self.index_max and 0 <= y < self.index_max

    def _is_unset(self) -> bool:
        return (
            self.index_line_min == UNSET_INDEX
            and self.index_line_max == UNSET_INDEX
            and self.index_col_min == UNSET_INDEX
            and self.index_col_max == UNSET_INDEX
        )

    def _rows(self) -> range:
        return range(self.index_line_min, min(self.index_line_max, self.index_max - 1) + 1)

    def _cols(self) -> range:
        return range(self.index_col_min, min(self.index_col_max, self.index_max - 1) + 1)

    def _top(self, x: int, y: int) -> Optional[Card]:
        stack = self.grid[x][y]
        return stack[-1] if stack else None

    def __getitem__(self, position: tuple[int, int]) -> Optional[Stack]:
        x, y = position
        if not self.is_valid_position(x, y):
            raise IndexError("Invalid position")
        return self.grid[x][y]

    def top(self, x: int, y: int) -> Optional[Card]:
        """Return the top card at a cell, or None when the cell is empty."""
        if not self._in_grid(x, y):
            raise IndexError(f"Position ({x}, {y}) is outside the grid")
        return self._top(x, y)

    def is_valid_position(self, x: int, y: int) -> bool:
        """Tell whether a card may sit at (x, y) without stretching the field too far."""
        if not self._in_grid(x, y):
            return False
        if self._is_unset():
            return True
        line_min = min(self.index_line_min, x)
        line_max = max(self.index_line_max, x)
        col_min = min(self.index_col_min, y)
        col_max = max(self.index_col_max, y)
        return line_max - line_min < self.dim_max and col_max - col_min < self.dim_max

    def is_adjacent_to_occupied_space(self, x: int, y: int) -> bool:
        """Tell whether any valid neighbour of (x, y) holds a card."""
        for dx, dy in _NEIGHBOURS:
            nx, ny = x + dx, y + dy
            if self.is_valid_position(nx, ny) and self.grid[nx][ny]:
                return True
        return False

    def exist_non_adjacent_cards(self, x: int, y: int) -> bool:
        """Tell whether any neighbour of (x, y) in the grid holds a card."""
        for dx, dy in _NEIGHBOURS:
            nx, ny = x + dx, y + dy
            if self._in_grid(nx, ny) and self.grid[nx][ny]:
                return True
        return False

    def can_place_card(self, x: int, y: int, card: Card) -> bool:
        """Check the placement rules; on an empty board this anchors the field at (x, y)."""
        if not self.is_valid_position(x, y):
            return False
        stack = self.grid[x][y]
        if stack is not None:
            if not stack:
                return False
            top = stack[-1]
            if top.is_eter or card.is_eter:
                return False
            if card.color == top.color and not top.face_up:
                return False
            return card.value > top.value
        board_empty = all(cell is None for row in self.grid for cell in row)
        if board_empty:
            self.index_line_min = self.index_line_max = x
            self.index_col_min = self.index_col_max = y
            return True
        return self.is_adjacent_to_occupied_space(x, y)

    def place_card(self, x: int, y: int, card: Card) -> bool:
        """Put a card on top of the stack at (x, y); return False if the rules forbid it."""
        if not self.can_place_card(x, y, card):
            return False
        if self.grid[x][y] is None:
            self.grid[x][y] = []
        self.grid[x][y].append(card)
        self.index_line_min = min(self.index_line_min, x)
        self.index_line_max = max(self.index_line_max, x)
        self.index_col_min = min(self.index_col_min, y)
        self.index_col_max = max(self.index_col_max, y)
        return True

    def update_after_removal(self) -> None:
        """Recompute the bounding box of occupied cells."""
        occupied = [
            (i, j)
            for i, row in enumerate(self.grid)
            for j, cell in enumerate(row)
            if cell
        ]
        if occupied:
            rows = [i for i, _ in occupied]
            cols = [j for _, j in occupied]
            self.index_line_min, self.index_line_max = min(rows), max(rows)
            self.index_col_min, self.index_col_max = min(cols), max(cols)
        else:
            self.index_line_min = self.index_line_max = UNSET_INDEX
            self.index_col_min = self.index_col_max = UNSET_INDEX

    def remove_card(self, x: int, y: int) -> None:
        """Take the top card off the stack at (x, y), emptying the cell if nothing is left."""
        stack = self.grid[x][y]
        if stack:
            stack.pop()
            if not stack:
                self.grid[x][y] = None

    def _top_color_is(self, row: int, col: int, color: str) -> bool:
        top = self._top(row, col)
        return top is not None and top.color == color

    def _has_run(self, cells, color: str) -> bool:
        count = 0
        for row, col in cells:
            count = count + 1 if self._top_color_is(row, col, color) else 0
            if count >= self.dim_max:
                return True
        return False

    def is_vertical_line(self, color: str) -> bool:
        return any(
            self._has_run(((row, col) for row in self._rows()), color)
            for col in self._cols()
        )

    def is_horizontal_line(self, color: str) -> bool:
        return any(
            self._has_run(((row, col) for col in self._cols()), color)
            for row in self._rows()
        )

    def _diagonal_span(self) -> Optional[int]:
        span = self.index_line_max - self.index_line_min
        if span != self.index_col_max - self.index_col_min:
            return None
        return span

    def is_primary_diagonal_line(self, color: str) -> bool:
        span = self._diagonal_span()
        if span is None or self._is_unset():
            return False
        cells = (
            (self.index_line_min + i, self.index_col_min + i) for i in range(span + 1)
        )
        return self._has_run(cells, color)

    def is_secondary_diagonal_line(self, color: str) -> bool:
        span = self._diagonal_span()
        if span is None or self._is_unset():
            return False
        cells = (
            (self.index_line_min + i, self.index_col_max - i) for i in range(span + 1)
        )
        return self._has_run(cells, color)

    def _has_line(self, color: str) -> bool:
        return (
            self.is_horizontal_line(color)
            or self.is_vertical_line(color)
            or self.is_primary_diagonal_line(color)
            or self.is_secondary_diagonal_line(color)
        )

    def find_winner(self) -> str:
        """Return the colour that completed a line, checking red first."""
        for color in ("red", "blue"):
            if self._has_line(color):
                return color
        return NO_WINNER

    def find_winner_by_score(self) -> str:
        """Sum visible top cards per colour; hidden and Eter cards count one, holes nothing."""
        scores = {"blue": 0, "red": 0}
        for row in self._rows():
            for col in self._cols():
                top = self._top(row, col)
                if top is None or top.is_hole or top.color not in scores:
                    continue
                scores[top.color] += top.value if top.face_up and not top.is_eter else 1
        if scores["blue"] > scores["red"]:
            return "blue"
        if scores["red"] > scores["blue"]:
            return "red"
        return SCORE_TIE

    def is_empty_cell(self, x: int, y: int) -> bool:
        """Tell whether (x, y) is a valid position with no stack on it."""
        if not self.is_valid_position(x, y):
            return False
        return self.grid[x][y] is None

    def is_board_full(self) -> bool:
        occupied = sum(
            1 for row in self._rows() for col in self._cols() if self.grid[row][col] is not None
        )
        return occupied == self.dim_max * self.dim_max

    def is_two_line_complete(self) -> bool:
        """Tell whether two full lines exist: two rows, two columns, or one of each."""
        full_rows = sum(
            1
            for row in self._rows()
            if self.count_occupied_cells_on_row(row) == self.dim_max
        )
        full_cols = sum(
            1
            for col in self._cols()
            if self.count_occupied_cells_on_column(col) == self.dim_max
        )
        return full_rows == 2 or full_cols == 2 or (full_rows == 1 and full_cols == 1)

    def is_valid_row(self, row: int) -> bool:
        return self.index_line_min <= row <= self.index_line_max

    def is_valid_column(self, column: int) -> bool:
        return self.index_col_min <= column <= self.index_col_max

    def is_edge_row(self, row: int) -> bool:
        return row in (self.index_line_min, self.index_line_max)

    def is_edge_column(self, column: int) -> bool:
        return column in (self.index_col_min, self.index_col_max)

    def move_row(self, from_row: int, to_row: int) -> None:
        """Move the stacks of one row into another within the occupied columns."""
        for col in self._cols():
            self.grid[to_row][col] = self.grid[from_row][col]
            self.grid[from_row][col] = None

    def move_column(self, from_col: int, to_col: int) -> None:
        """Move the stacks of one column into another within the occupied rows."""
        for row in self._rows():
            self.grid[row][to_col] = self.grid[row][from_col]
            self.grid[row][from_col] = None

    def count_occupied_cells_on_row(self, row: int) -> int:
        return sum(1 for col in self._cols() if self.grid[row][col] is not None)

    def contains_own_card_on_row(self, row: int, color: str) -> bool:
        return any(self._top_color_is(row, col, color) for col in self._cols())

    def _eliminate(self, row: int, col: int) -> None:
        top = self._top(row, col)
        if top is None or top.is_eter or top.is_hole:
            return
        self.grid[row][col] = None

    def eliminate_cards_on_row(self, row: int) -> None:
        """Remove whole stacks on a row, sparing Eter cards and holes."""
        for col in self._cols():
            self._eliminate(row, col)

    def count_occupied_cells_on_column(self, col: int) -> int:
        return sum(1 for row in self._rows() if self.grid[row][col] is not None)

    def contains_own_card_on_column(self, col: int, color: str) -> bool:
        return any(self._top_color_is(row, col, color) for row in self._rows())

    def eliminate_cards_on_column(self, col: int) -> None:
        """Remove whole stacks on a column, sparing Eter cards and holes."""
        for row in self._rows():
            self._eliminate(row, col)

    def create_hole(self, row: int, col: int) -> None:
        """Replace a cell's stack with a hole, unless an Eter card lies on top."""
        top = self._top(row, col)
        if top is not None and top.is_eter:
            return
        self.grid[row][col] = [Card.hole()]

    def clear(self) -> None:
        """Empty every cell; the bounding box is left as it is."""
        for row in self.grid:
            row[:] = [None] * len(row)

    def swap(self, other: Board) -> None:
        """Exchange the whole state with another board."""
        self.__dict__, other.__dict__ = other.__dict__, self.__dict__

    def render(self) -> str:
        """Return the grid as coloured terminal text, one line per row."""
        lines = []
        for row in self.grid:
            cells = (stack[-1].render() + " " if stack else "  " for stack in row)
            lines.append("".join(cells) + "\n")
        return "".join(lines)

    def __str__(self) -> str:
        return self.render()