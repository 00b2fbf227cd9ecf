"""
Static evaluators for tic-tac-toe positions, always scored from X's side.

Two families:
- terminal scoring: +win if X has three in a row, -win if O has, the draw
  score on a full board, ``None`` otherwise;
- weighted line counting (Levy, Computer Gamesmanship):
      c3*w0 + n2*w1 + c2*w2 + n1*w3 + c1*w4
  where c3 is X's completed lines, n2/c2 are O's/X's lines with two marks and
  one empty cell, and n1/c1 are O's/X's lines with one mark and two empties.
"""
from dataclasses import dataclass
from typing import List, NamedTuple, Optional

from .board import EMPTY, LINES, O, X
from .rules import is_full, is_winner


@dataclass(frozen=True)
class ScoreScale:
    win: int
    draw: int = 0


BINARY_SCALE = ScoreScale(win=1)
DECIMAL_SCALE = ScoreScale(win=10)
HEURISTIC_SCALE = ScoreScale(win=5000)


class LineCounts(NamedTuple):
    c3: int
    n2: int
    c2: int
    n1: int
    c1: int


class Weights(NamedTuple):
    c3: int
    n2: int
    c2: int
    n1: int
    c1: int

    def horizon_bound(self) -> int:
        # A non-terminal board has no completed line, so c3 never contributes.
        return len(LINES) * (abs(self.n2) + abs(self.c2) + abs(self.n1) + abs(self.c1))


REFERENCE_WEIGHTS = Weights(123, -63, 31, -15, 7)
SIMPLIFIED_WEIGHTS = Weights(1230, -63, 31, 0, 0)
UNIT_WEIGHTS = Weights(1, -1, 1, -1, 1)

WEIGHT_SETS = {
    'reference': REFERENCE_WEIGHTS,
    'simplified': SIMPLIFIED_WEIGHTS,
    'unit': UNIT_WEIGHTS,
}


def terminal_score(board: List[int], scale: ScoreScale) -> Optional[int]:
    if is_winner(board, X):
        return scale.win
    if is_winner(board, O):
        return -scale.win
    if is_full(board):
        return scale.draw
    return None


def binary_score(board: List[int]) -> Optional[int]:
    return terminal_score(board, BINARY_SCALE)


def count_lines(board: List[int], player: int, marks: int) -> int:
    """Lines holding exactly ``marks`` of ``player`` and ``3 - marks`` empty cells."""
    cnt = 0
    for line in LINES:
        p = sum(1 for i in line if board[i] == player)
        e = sum(1 for i in line if board[i] == EMPTY)
        if p == marks and e == 3 - marks:
            cnt += 1
    return cnt


def line_counts(board: List[int]) -> LineCounts:
    return LineCounts(
        c3=count_lines(board, X, 3),
        n2=count_lines(board, O, 2),
        c2=count_lines(board, X, 2),
        n1=count_lines(board, O, 1),
        c1=count_lines(board, X, 1),
    )


def weighted_score(board: List[int], weights: Weights = REFERENCE_WEIGHTS) -> int:
    counts = line_counts(board)
    return sum(w * c for w, c in zip(weights, counts))
