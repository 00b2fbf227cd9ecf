"""
Move selection on top of the search engine.

For each legal move in row-major order the selector places the mark on a
private copy of the board, scores the resulting position with the opponent
to move, clears the mark, and keeps the move with the strictly best score
for the side choosing (maximum for X, minimum for O). Ties therefore go to
the first move found.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .board import EMPTY, X, Move, opponent, to_row_col
from .config import ARBITRARILY_HIGH, ARBITRARILY_LOW, EngineConfig
from .errors import IllegalMove
from .search import SearchSession, empty_cells, search


@dataclass
class SearchResult:
    move: Move
    score: int
    scored_moves: List[Tuple[Move, int]] = field(default_factory=list)
    nodes: int = 0
    cutoffs: int = 0


def select_move(
    board: List[int],
    player: int,
    config: EngineConfig,
    session: Optional[SearchSession] = None,
) -> SearchResult:
    if session is None:
        session = SearchSession()
    work = list(board)
    cells = empty_cells(work)
    if not cells:
        raise IllegalMove("No legal move available on a full board")

    nodes_before, cutoffs_before = session.nodes, session.cutoffs
    maximizing = player == X
    best_score = ARBITRARILY_LOW if maximizing else ARBITRARILY_HIGH
    best_cell: Optional[int] = None
    scored: List[Tuple[Move, int]] = []
    nxt = opponent(player)
    for i in cells:
        work[i] = player
        try:
            value = search(work, nxt, config, session)
        finally:
            work[i] = EMPTY
        scored.append((to_row_col(i), value))
        if best_cell is None or (value > best_score if maximizing else value < best_score):
            best_score = value
            best_cell = i

    result = SearchResult(
        move=to_row_col(best_cell),
        score=best_score,
        scored_moves=scored,
        nodes=session.nodes - nodes_before,
        cutoffs=session.cutoffs - cutoffs_before,
    )
    logging.debug(
        "mode=%s player=%d move=%s score=%d nodes=%d cutoffs=%d",
        config.mode.value, player, result.move, result.score, result.nodes, result.cutoffs,
    )
    return result


def choose_move(board: List[int], player: int, config: EngineConfig) -> Move:
    """Return the (row, col) the engine plays for ``player`` on ``board``."""
    return select_move(board, player, config).move
