"""
Terminal-state detection: wins, full boards and draws.
Teaching notes:
- All checks are a fixed scan over the 8 lines, so they cost O(1).
- "X wins" and "O wins" are not checked for mutual exclusion; boards reached
  through alternating legal play never satisfy both.
"""
from typing import List

from .board import EMPTY, LINES


def is_winner(board: List[int], player: int) -> bool:
    for a, b, c in LINES:
        if board[a] == player and board[b] == player and board[c] == player:
            return True
    return False


def is_full(board: List[int]) -> bool:
    return EMPTY not in board


def get_winner(board: List[int]) -> int:
    for a, b, c in LINES:
        v = board[a]
        if v != EMPTY and v == board[b] and v == board[c]:
            return v
    return EMPTY


def is_draw(board: List[int]) -> bool:
    return is_full(board) and get_winner(board) == EMPTY


def is_terminal(board: List[int]) -> bool:
    return get_winner(board) != EMPTY or is_full(board)
