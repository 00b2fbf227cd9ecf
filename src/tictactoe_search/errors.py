"""Exceptions raised by the tic-tac-toe search package."""


class TicTacToeError(Exception):
    """Base class for package errors."""


class IllegalMove(TicTacToeError, ValueError):
    """Target cell is occupied, out of range, or no move is available."""


class InvalidBoard(TicTacToeError, ValueError):
    """Board string is malformed or describes an unreachable position."""


class ConfigError(TicTacToeError, ValueError):
    """Engine configuration is inconsistent or names an unknown preset."""
