import pytest

from eter.board import Board, NO_WINNER, SCORE_TIE, UNSET_INDEX
from eter.card import Card, HOLE_VALUE


def test_constructor_defaults():
    board = Board()
    assert board.dim_max == 3
    assert board.index_max == 7
    assert board.index_line_min == 10
    assert board.index_line_max == 10
    assert board.index_col_min == 10
    assert board.index_col_max == 10
    assert len(board.grid) == 7
    for row in board.grid:
        assert len(row) == 7
        assert all(cell is None for cell in row)


def test_place_card_and_is_empty_cell():
    board = Board()
    assert board.place_card(3, 3, Card(3, "red", True)) is True
    assert board.is_empty_cell(3, 3) is False


def test_find_winner_horizontal_line():
    board = Board()
    red = Card(1, "red", True)
    for col in range(board.dim_max):
        board.place_card(2, col, red)
    assert board.find_winner() == "red"


def test_secondary_diagonal_line():
    board = Board()
    board.dim_max = 3
    board.place_card(0, 2, Card(1, "red", True))
    board.place_card(1, 1, Card(2, "red", True))
    board.place_card(2, 0, Card(4, "red", True))
    assert board.is_secondary_diagonal_line("red")
    board.place_card(1, 1, Card(4, "blue", True))
    assert not board.is_secondary_diagonal_line("red")


def test_primary_diagonal_line():
    board = Board()
    board.place_card(0, 0, Card(1, "blue", True))
    board.place_card(1, 1, Card(2, "blue", True))
    board.place_card(2, 2, Card(3, "blue", True))
    assert board.is_primary_diagonal_line("blue")
    assert not board.is_primary_diagonal_line("red")
    assert board.find_winner() == "blue"


def test_remove_card():
    board = Board()
    board.place_card(2, 2, Card(3, "blue", True))
    assert not board.is_empty_cell(2, 2)
    board.remove_card(2, 2)
    assert board.is_empty_cell(2, 2)


def test_remove_card_reveals_lower_card():
    board = Board()
    lower = Card(1, "red", True)
    board.place_card(2, 2, lower)
    board.place_card(2, 2, Card(3, "blue", True))
    board.remove_card(2, 2)
    assert board.top(2, 2) == lower


def test_eliminate_cards_on_row():
    board = Board()
    board.place_card(0, 0, Card(1, "red", True))
    board.place_card(0, 1, Card(1, "blue", True))
    board.place_card(0, 2, Card(2, "red", True))
    assert not any(board.is_empty_cell(0, col) for col in range(3))
    board.eliminate_cards_on_row(0)
    assert all(board.is_empty_cell(0, col) for col in range(3))


def test_eliminate_cards_on_column():
    board = Board()
    board.place_card(0, 0, Card(1, "red", True))
    board.place_card(1, 0, Card(1, "blue", True))
    board.place_card(2, 0, Card(2, "red", True))
    assert not any(board.is_empty_cell(row, 0) for row in range(3))
    board.eliminate_cards_on_column(0)
    assert all(board.is_empty_cell(row, 0) for row in range(3))


def test_eliminate_spares_eter_and_holes():
    board = Board()
    board.place_card(0, 0, Card(5, "red", True))
    board.place_card(0, 1, Card(2, "blue", True))
    board.place_card(0, 2, Card(2, "red", True))
    board.create_hole(0, 2)
    board.eliminate_cards_on_row(0)
    assert board.top(0, 0).is_eter
    assert board.top(0, 1) is None
    assert board.top(0, 2).is_hole


def test_is_adjacent_to_occupied_space():
    board = Board()
    board.place_card(3, 4, Card(1, "red", True))
    assert board.is_adjacent_to_occupied_space(3, 3)
    assert not board.is_adjacent_to_occupied_space(5, 5)


def test_exist_non_adjacent_cards_ignores_span_limit():
    board = Board()
    board.place_card(0, 0, Card(1, "red", True))
    assert board.exist_non_adjacent_cards(1, 1)
    assert not board.exist_non_adjacent_cards(4, 4)
    assert not board.exist_non_adjacent_cards(6, 6)


def test_find_winner_by_score():
    board = Board()
    board.place_card(0, 2, Card(4, "red", True))
    board.place_card(0, 3, Card(3, "blue", True))
    assert board.find_winner_by_score() == "red"


def test_find_winner_by_score_counts_hidden_and_eter_as_one():
    board = Board()
    board.place_card(0, 0, Card(4, "red", False))
    board.place_card(0, 1, Card(5, "red", True))
    board.place_card(0, 2, Card(3, "blue", True))
    assert board.find_winner_by_score() == "blue"


def test_find_winner_by_score_tie():
    board = Board()
    board.place_card(0, 0, Card(2, "red", True))
    board.place_card(0, 1, Card(2, "blue", True))
    assert board.find_winner_by_score() == SCORE_TIE


def test_is_valid_position():
    board = Board()
    assert board.is_valid_position(0, 0)
    last = board.index_max - 1
    assert board.is_valid_position(last, last)
    assert not board.is_valid_position(board.index_max, 0)
    assert not board.is_valid_position(0, board.index_max)
    assert not board.is_valid_position(-1, 0)
    assert not board.is_valid_position(0, -1)
    assert board.is_valid_position(3, 3)
    board.place_card(3, 3, Card(5, "red", True))
    assert board.is_valid_position(2, 3)
    assert not board.is_valid_position(0, 0)


def test_contains_own_card_on_row():
    board = Board()
    board.place_card(0, 0, Card(1, "blue", True))
    board.place_card(0, 1, Card(1, "red", True))
    assert board.contains_own_card_on_row(0, "red")
    assert not board.contains_own_card_on_row(0, "green")


def test_contains_own_card_on_column():
    board = Board()
    board.place_card(0, 0, Card(1, "blue", True))
    board.place_card(1, 0, Card(1, "red", True))
    assert board.contains_own_card_on_column(0, "red")
    assert not board.contains_own_card_on_column(0, "green")


def test_create_hole():
    board = Board()
    board.place_card(1, 1, Card(3, "red", True))
    board.create_hole(1, 1)
    assert not board.is_empty_cell(1, 1)
    assert board.grid[1][1][-1].value == ord("/")
    assert len(board.grid[1][1]) == 1


def test_create_hole_spares_eter():
    board = Board()
    eter_card = Card(5, "blue", True)
    board.place_card(1, 1, eter_card)
    board.create_hole(1, 1)
    assert board.top(1, 1) == eter_card


def test_count_occupied_cells_on_row():
    board = Board()
    board.place_card(0, 0, Card(1, "red", True))
    board.place_card(0, 1, Card(2, "blue", True))
    assert board.place_card(0, 4, Card(4, "blue", True)) is False
    assert board.count_occupied_cells_on_row(0) == 2


def test_count_occupied_cells_on_column():
    board = Board()
    board.place_card(0, 0, Card(1, "red", True))
    board.place_card(1, 0, Card(2, "blue", True))
    assert board.count_occupied_cells_on_column(0) == 2


def test_is_two_line_complete():
    board = Board()
    for col, value in enumerate((1, 2, 3, 4)):
        board.place_card(0, col, Card(value, "red", True))
    for col, value in enumerate((1, 2, 3, 4)):
        board.place_card(1, col, Card(value, "blue", True))
    assert board.is_two_line_complete()


def test_single_line_is_not_two_lines():
    board = Board()
    for col in range(3):
        board.place_card(0, col, Card(1, "red", True))
    assert not board.is_two_line_complete()


def test_update_after_removal():
    board = Board()
    board.place_card(1, 1, Card(2, "red", True))
    board.place_card(2, 2, Card(3, "blue", True))
    assert (board.index_line_min, board.index_line_max) == (1, 2)
    assert (board.index_col_min, board.index_col_max) == (1, 2)

    board.remove_card(2, 2)
    board.update_after_removal()
    assert (board.index_line_min, board.index_line_max) == (1, 1)
    assert (board.index_col_min, board.index_col_max) == (1, 1)

    board.remove_card(1, 1)
    board.update_after_removal()
    assert board.index_line_min == 10
    assert board.index_line_max == 10
    assert board.index_col_min == 10
    assert board.index_col_max == 10


def test_is_vertical_line():
    board = Board()
    for row, value in zip(range(1, 5), (1, 2, 3, 4)):
        board.place_card(row, 0, Card(value, "blue", True))
    assert board.is_vertical_line("blue")


def test_board_swap():
    board1 = Board()
    board2 = Board()
    board1.place_card(0, 0, Card(5, "red", True))
    board1.place_card(1, 1, Card(3, "blue", True))
    board2.place_card(2, 2, Card(7, "red", True))
    board2.place_card(3, 3, Card(9, "blue", True))

    board1.swap(board2)

    assert board1.grid[2][2][-1].value == 7
    assert board1.grid[3][3][-1].value == 9
    assert board2.grid[0][0][-1].value == 5
    assert board2.grid[1][1][-1].value == 3


def test_move_column():
    board = Board()
    board.place_card(0, 0, Card(4, "red", True))
    board.place_card(1, 0, Card(3, "blue", True))
    assert board.is_empty_cell(0, 2) and board.is_empty_cell(1, 2)

    board.move_column(0, 2)

    assert board.grid[0][2][-1].value == 4
    assert board.grid[1][2][-1].value == 3
    assert board.is_empty_cell(0, 0)
    assert board.is_empty_cell(1, 0)


def test_move_row():
    board = Board()
    board.place_card(0, 0, Card(2, "red", True))
    board.place_card(0, 1, Card(3, "blue", True))
    assert board.is_empty_cell(2, 0) and board.is_empty_cell(2, 1)

    board.move_row(0, 2)

    assert board.grid[2][0][-1].value == 2
    assert board.grid[2][1][-1].value == 3
    assert board.is_empty_cell(0, 0)
    assert board.is_empty_cell(0, 1)


def test_cannot_cover_eter_or_play_eter_on_stack():
    board = Board()
    board.place_card(2, 2, Card(5, "red", True))
    assert board.place_card(2, 2, Card(3, "red", True)) is False
    board.place_card(2, 3, Card(1, "blue", True))
    assert board.place_card(2, 3, Card(5, "red", True)) is False


def test_cover_requires_higher_value():
    board = Board()
    board.place_card(2, 2, Card(3, "red", True))
    assert board.place_card(2, 2, Card(2, "blue", True)) is False
    assert board.place_card(2, 2, Card(3, "blue", True)) is False
    assert board.place_card(2, 2, Card(4, "blue", True)) is True
    assert len(board.grid[2][2]) == 2


def test_cannot_cover_own_illusion():
    board = Board()
    board.place_card(2, 2, Card(1, "red", False))
    assert board.place_card(2, 2, Card(4, "red", True)) is False
    assert board.place_card(2, 2, Card(4, "blue", True)) is True


def test_non_adjacent_placement_rejected():
    board = Board()
    board.place_card(0, 0, Card(1, "red", True))
    assert board.place_card(2, 2, Card(1, "blue", True)) is False
    assert board.top(2, 2) is None


def test_find_winner_on_empty_board():
    assert Board().find_winner() == NO_WINNER


def test_is_board_full():
    board = Board()
    for row in range(3):
        for col in range(3):
            assert not board.is_board_full()
            board.place_card(row, col, Card(1, "red", True))
    assert board.is_board_full()


def test_valid_and_edge_rows_and_columns():
    board = Board()
    board.place_card(1, 1, Card(1, "red", True))
    board.place_card(2, 2, Card(1, "red", True))
    board.place_card(3, 3, Card(1, "red", True))
    assert board.is_valid_row(2) and not board.is_valid_row(0)
    assert board.is_valid_column(3) and not board.is_valid_column(4)
    assert board.is_edge_row(1) and board.is_edge_row(3) and not board.is_edge_row(2)
    assert board.is_edge_column(3) and not board.is_edge_column(2)


def test_clear_empties_cells_but_keeps_bounds():
    board = Board()
    board.place_card(1, 1, Card(1, "red", True))
    board.clear()
    assert all(cell is None for row in board.grid for cell in row)
    assert board.index_line_min == 1
    assert board.index_line_min != UNSET_INDEX


def test_copy_is_independent():
    board = Board()
    board.place_card(1, 1, Card(2, "red", True))
    clone = board.copy()
    clone.place_card(1, 1, Card(4, "blue", True))
    clone.top(1, 1).face_up = False
    assert board.top(1, 1) == Card(2, "red", True)
    assert len(board.grid[1][1]) == 1
    assert len(clone.grid[1][1]) == 2


def test_getitem_checks_position():
    board = Board()
    card = Card(2, "red", True)
    board.place_card(3, 3, card)
    assert board[(3, 3)] == [card]
    assert board[(2, 2)] is None
    with pytest.raises(IndexError):
        board[(0, 0)]


def test_top_outside_grid_raises():
    with pytest.raises(IndexError):
        Board().top(7, 0)


def test_render_empty_board():
    assert Board().render() == ("  " * 7 + "\n") * 7


def test_render_shows_top_card():
    board = Board()
    card = Card(3, "red", True)
    board.place_card(0, 0, card)
    first_line = board.render().split("\n")[0]
    assert first_line == card.render() + " " + "  " * 6
    assert str(board) == board.render()


def test_hole_marker_value():
    board = Board()
    board.place_card(0, 0, Card(1, "red", True))
    board.create_hole(0, 1)
    assert board.top(0, 1).value == HOLE_VALUE
    assert board.find_winner_by_score() == "red"