import pytest

from tictactoe_search.board import (
    EMPTY,
    O,
    X,
    current_player,
    deserialize_board,
    is_legal,
    is_valid_state,
    legal_moves,
    new_board,
    opponent,
    parse_board,
    render_board,
    serialize_board,
    to_index,
    to_row_col,
)
from tictactoe_search.errors import InvalidBoard


def test_legal_moves_are_row_major():
    b = new_board()
    b[4] = X
    assert legal_moves(b) == [(0, 0), (0, 1), (0, 2), (1, 0), (1, 2), (2, 0), (2, 1), (2, 2)]


def test_index_mapping():
    assert [to_index(*to_row_col(i)) for i in range(9)] == list(range(9))
    assert to_row_col(5) == (1, 2)


@pytest.mark.parametrize("row,col", [(-1, 0), (0, -1), (3, 0), (0, 3), (3, 3)])
def test_out_of_range_moves_are_illegal(row, col):
    assert not is_legal(new_board(), row, col)


def test_occupied_cell_is_illegal():
    b = deserialize_board("100020000")
    assert not is_legal(b, 0, 0)
    assert not is_legal(b, 1, 1)
    assert is_legal(b, 2, 2)


def test_current_player_alternates():
    assert current_player(new_board()) == X
    assert current_player(deserialize_board("100000000")) == O
    assert current_player(deserialize_board("100020000")) == X
    assert opponent(X) == O and opponent(O) == X


@pytest.mark.parametrize("raw,valid", [
    ("000000000", True),
    ("100020000", True),
    ("111220000", True),   # X won on its 3rd mark
    ("111222000", False),  # both complete a row
    ("220000000", False),  # O ahead of X
    ("111000000", False),  # X moved three times in a row
    ("222110110", False),  # O won but X has an extra mark
])
def test_is_valid_state(raw, valid):
    assert is_valid_state(deserialize_board(raw)) is valid


@pytest.mark.parametrize("bad", ["", "abc", "012345678", "0123456789", "12345678x"])
def test_parse_board_rejects_malformed_strings(bad):
    with pytest.raises(InvalidBoard):
        parse_board(bad)


def test_parse_board_accepts_digits():
    b = parse_board(" 100020000 ")
    assert serialize_board(b) == "100020000"
    assert b.count(EMPTY) == 7


def test_render_board_is_one_indexed():
    text = render_board(deserialize_board("100020000"))
    assert text.splitlines() == [
        "   1 2 3",
        "  ______",
        "1 |x _ _ ",
        "2 |_ o _ ",
        "3 |_ _ _ ",
    ]
