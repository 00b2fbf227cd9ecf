"""tictactoe_search package.

Game-tree search for tic-tac-toe: exhaustive minimax, alpha-beta pruning and
depth-limited search with a weighted line-counting evaluator, plus a console
game loop, an audit export and a simple CLI.

Convenience imports are exposed for common workflows.
"""

from .board import EMPTY, O, X, legal_moves, new_board
from .config import PRESETS, EngineConfig, SearchMode
from .engine import SearchResult, choose_move, select_move
from .errors import ConfigError, IllegalMove, InvalidBoard
from .evaluation import REFERENCE_WEIGHTS, SIMPLIFIED_WEIGHTS, weighted_score
from .rules import is_full, is_winner
from .search import SearchSession, search

__all__ = [
    "EMPTY",
    "X",
    "O",
    "new_board",
    "legal_moves",
    "is_winner",
    "is_full",
    "weighted_score",
    "REFERENCE_WEIGHTS",
    "SIMPLIFIED_WEIGHTS",
    "SearchMode",
    "EngineConfig",
    "PRESETS",
    "SearchSession",
    "search",
    "SearchResult",
    "select_move",
    "choose_move",
    "IllegalMove",
    "InvalidBoard",
    "ConfigError",
]
