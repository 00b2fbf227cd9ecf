"""
Board model: representation, serialization, moves, legality, validity.
Teaching notes:
- State is a list of 9 cells in row-major order: 0=empty, 1=X, 2=O. X always starts.
- A move is a (row, col) pair, both 0-indexed; cell index = 3*row + col.
- Legal moves are enumerated by a raster scan, row by row. Every search mode
  visits children in this order, so ties resolve to the first move found.
"""
from typing import List, Tuple

from .errors import InvalidBoard

EMPTY = 0
X = 1
O = 2

SIZE = 3

LINES = [
    [0, 1, 2], [3, 4, 5], [6, 7, 8],
    [0, 3, 6], [1, 4, 7], [2, 5, 8],
    [0, 4, 8], [2, 4, 6],
]

SYMBOLS = {EMPTY: '_', X: 'x', O: 'o'}

Move = Tuple[int, int]


def new_board() -> List[int]:
    return [EMPTY] * (SIZE * SIZE)


def serialize_board(board: List[int]) -> str:
    return ''.join(str(cell) for cell in board)


def deserialize_board(board_str: str) -> List[int]:
    return [int(cell) for cell in board_str]


def parse_board(raw: str) -> List[int]:
    """Parse a user-supplied 9-digit board string, e.g. ``100020000``."""
    raw = (raw or "").strip()
    if len(raw) != SIZE * SIZE or any(c not in "012" for c in raw):
        raise InvalidBoard(f"Invalid board string {raw!r}. Must be 9 chars of 0/1/2.")
    return deserialize_board(raw)


def to_index(row: int, col: int) -> int:
    return SIZE * row + col


def to_row_col(index: int) -> Move:
    return index // SIZE, index % SIZE


def in_bounds(row: int, col: int) -> bool:
    return 0 <= row < SIZE and 0 <= col < SIZE


def is_legal(board: List[int], row: int, col: int) -> bool:
    return in_bounds(row, col) and board[to_index(row, col)] == EMPTY


def legal_moves(board: List[int]) -> List[Move]:
    return [to_row_col(i) for i, v in enumerate(board) if v == EMPTY]


def get_piece_counts(board: List[int]) -> Tuple[int, int]:
    return board.count(X), board.count(O)


def current_player(board: List[int]) -> int:
    x, o = get_piece_counts(board)
    return X if x == o else O


def opponent(player: int) -> int:
    return O if player == X else X


def is_valid_state(board: List[int]) -> bool:
    """True when the board can arise from the empty board by alternating play."""
    x_count, o_count = get_piece_counts(board)
    if not (x_count == o_count or x_count == o_count + 1):
        return False

    def count_wins(p: int) -> int:
        return sum(1 for line in LINES if all(board[i] == p for i in line))

    x_wins, o_wins = count_wins(X), count_wins(O)
    if x_wins > 0 and o_wins > 0:
        return False
    if x_wins > 0 and x_count != o_count + 1:
        return False
    if o_wins > 0 and x_count != o_count:
        return False
    return True


def render_board(board: List[int]) -> str:
    """Console rendering with 1-indexed row and column labels."""
    lines = ["   1 2 3", "  ______"]
    for r in range(SIZE):
        cells = " ".join(SYMBOLS[board[to_index(r, c)]] for c in range(SIZE))
        lines.append(f"{r + 1} |{cells} ")
    return "\n".join(lines)
