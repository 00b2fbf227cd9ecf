"""
Adversarial search over a single reusable board buffer.

Three interchangeable modes, all scored from X's side (X maximizes):
- exhaustive minimax over the full game tree;
- alpha-beta pruned minimax, equal in value to exhaustive minimax;
- depth-limited minimax returning the weighted line score at the horizon.

Each frame places its speculative mark, recurses, and clears the cell again
in ``finally``, so the buffer is back to its entry state whenever a call
returns. Children are visited in row-major order unless alpha-beta ordering
is requested. A buffer must not be shared across threads; give every
parallel branch its own copy.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .board import EMPTY, X, opponent
from .config import ARBITRARILY_HIGH, ARBITRARILY_LOW, EngineConfig, SearchMode
from .evaluation import (
    DECIMAL_SCALE,
    BINARY_SCALE,
    HEURISTIC_SCALE,
    REFERENCE_WEIGHTS,
    UNIT_WEIGHTS,
    ScoreScale,
    Weights,
    terminal_score,
    weighted_score,
)


@dataclass
class SearchSession:
    """Statistics for one or more searches, owned by the move selector."""

    nodes: int = 0
    cutoffs: int = 0
    leaf_evaluations: int = 0
    max_ply: int = 0

    def enter(self, ply: int) -> None:
        self.nodes += 1
        if ply > self.max_ply:
            self.max_ply = ply

    def as_dict(self) -> dict:
        return {
            'nodes': self.nodes,
            'cutoffs': self.cutoffs,
            'leaf_evaluations': self.leaf_evaluations,
            'max_ply': self.max_ply,
        }


def empty_cells(board: List[int]) -> List[int]:
    return [i for i in range(len(board)) if board[i] == EMPTY]


def order_by_lookahead(board: List[int], player: int, cells: List[int]) -> List[int]:
    """Sort candidate cells by a one-ply unit-weight line score, best first for ``player``.

    The sort is stable, so cells with equal scores keep row-major order.
    """
    keys = {}
    for i in cells:
        board[i] = player
        try:
            keys[i] = weighted_score(board, UNIT_WEIGHTS)
        finally:
            board[i] = EMPTY
    return sorted(cells, key=lambda i: keys[i], reverse=(player == X))


def minimax(
    board: List[int],
    player: int,
    session: SearchSession,
    scale: ScoreScale = DECIMAL_SCALE,
    ply: int = 0,
) -> int:
    session.enter(ply)
    score = terminal_score(board, scale)
    if score is not None:
        session.leaf_evaluations += 1
        return score

    maximizing = player == X
    best = ARBITRARILY_LOW if maximizing else ARBITRARILY_HIGH
    nxt = opponent(player)
    cells = empty_cells(board)
    for i in cells:
        board[i] = player
        try:
            value = minimax(board, nxt, session, scale, ply + 1)
        finally:
            board[i] = EMPTY
        if maximizing:
            if value > best:
                best = value
        elif value < best:
            best = value
    if not cells:
        # Unreachable with a correct terminal check: a board without empty
        # cells is full. Treated as a draw.
        return scale.draw
    return best


def alphabeta(
    board: List[int],
    player: int,
    session: SearchSession,
    alpha: int = ARBITRARILY_LOW,
    beta: int = ARBITRARILY_HIGH,
    scale: ScoreScale = BINARY_SCALE,
    order: bool = False,
    ply: int = 0,
) -> int:
    session.enter(ply)
    score = terminal_score(board, scale)
    if score is not None:
        session.leaf_evaluations += 1
        return score

    maximizing = player == X
    nxt = opponent(player)
    cells = empty_cells(board)
    if order:
        cells = order_by_lookahead(board, player, cells)
    if not cells:
        return scale.draw

    if maximizing:
        value = ARBITRARILY_LOW
        for i in cells:
            board[i] = player
            try:
                child = alphabeta(board, nxt, session, alpha, beta, scale, order, ply + 1)
            finally:
                board[i] = EMPTY
            if child > value:
                value = child
            if value > alpha:
                alpha = value
            if alpha >= beta:
                session.cutoffs += 1
                break
    else:
        value = ARBITRARILY_HIGH
        for i in cells:
            board[i] = player
            try:
                child = alphabeta(board, nxt, session, alpha, beta, scale, order, ply + 1)
            finally:
                board[i] = EMPTY
            if child < value:
                value = child
            if value < beta:
                beta = value
            if alpha >= beta:
                session.cutoffs += 1
                break
    return value


def depth_limited(
    board: List[int],
    player: int,
    session: SearchSession,
    depth: int = 0,
    max_depth: int = 2,
    scale: ScoreScale = HEURISTIC_SCALE,
    weights: Weights = REFERENCE_WEIGHTS,
) -> int:
    session.enter(depth)
    score = terminal_score(board, scale)
    if score is not None:
        session.leaf_evaluations += 1
        return score
    if depth >= max_depth:
        session.leaf_evaluations += 1
        return weighted_score(board, weights)

    maximizing = player == X
    best = ARBITRARILY_LOW if maximizing else ARBITRARILY_HIGH
    nxt = opponent(player)
    cells = empty_cells(board)
    for i in cells:
        board[i] = player
        try:
            value = depth_limited(board, nxt, session, depth + 1, max_depth, scale, weights)
        finally:
            board[i] = EMPTY
        if maximizing:
            if value > best:
                best = value
        elif value < best:
            best = value
    if not cells:
        return scale.draw
    return best


def search(
    board: List[int],
    player: int,
    config: EngineConfig,
    session: Optional[SearchSession] = None,
    depth: int = 0,
) -> int:
    """Score ``board`` with ``player`` to move under ``config``'s search mode."""
    if session is None:
        session = SearchSession()
    if config.mode is SearchMode.EXHAUSTIVE:
        return minimax(board, player, session, config.scale, depth)
    if config.mode is SearchMode.ALPHA_BETA:
        return alphabeta(
            board, player, session,
            ARBITRARILY_LOW, ARBITRARILY_HIGH,
            config.scale, config.order_moves, depth,
        )
    if config.mode is SearchMode.DEPTH_LIMITED:
        return depth_limited(
            board, player, session, depth, config.max_depth, config.scale, config.weights,
        )
    raise ValueError(f"Unsupported search mode: {config.mode!r}")
