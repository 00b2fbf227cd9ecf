"""
Exact reference values for checking the search modes.

Game values are from X's perspective: +1 X wins, 0 draw, -1 O wins, under
perfect play by both sides. Memoized on the board tuple, so the whole game
is solved once per process. The engine itself never consults this module.
"""
from collections import deque
from functools import lru_cache
from typing import List

from .board import EMPTY, X, current_player
from .rules import get_winner, is_full


def legal_cells(board_t: tuple) -> List[int]:
    return [i for i, v in enumerate(board_t) if v == EMPTY]


def apply_move_t(board_t: tuple, idx: int, player: int) -> tuple:
    lst = list(board_t)
    lst[idx] = player
    return tuple(lst)


def is_terminal_t(board_t: tuple) -> bool:
    return get_winner(list(board_t)) != EMPTY or is_full(list(board_t))


@lru_cache(maxsize=None)
def solve_value(board_t: tuple) -> int:
    w = get_winner(list(board_t))
    if w != EMPTY:
        return 1 if w == X else -1
    if is_full(list(board_t)):
        return 0
    p = current_player(list(board_t))
    values = [solve_value(apply_move_t(board_t, mv, p)) for mv in legal_cells(board_t)]
    return max(values) if p == X else min(values)


def reachable_states() -> List[tuple]:
    """Enumerate all states reachable from the empty board, breadth-first."""
    start = tuple([EMPTY] * 9)
    order = [start]
    q = deque([start])
    seen = {start}
    while q:
        s = q.popleft()
        if is_terminal_t(s):
            continue
        p = current_player(list(s))
        for mv in legal_cells(s):
            child = apply_move_t(s, mv, p)
            if child not in seen:
                seen.add(child)
                order.append(child)
                q.append(child)
    return order
