"""Console game loop: a human against the search engine.

Rows and columns are shown and typed 1-indexed; everything below this layer
is 0-indexed.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from .board import (
    EMPTY, SIZE, SYMBOLS, X, Move, is_legal, new_board, opponent, render_board, to_index,
)
from .config import EngineConfig
from .engine import choose_move
from .errors import IllegalMove
from .rules import get_winner, is_full


@dataclass
class Game:
    board: List[int] = field(default_factory=new_board)
    to_move: int = X

    def play(self, row: int, col: int) -> None:
        if self.is_over():
            raise IllegalMove("Game is already over")
        if not is_legal(self.board, row, col):
            raise IllegalMove(f"Illegal move: row={row + 1} col={col + 1}")
        self.board[to_index(row, col)] = self.to_move
        self.to_move = opponent(self.to_move)

    def winner(self) -> int:
        return get_winner(self.board)

    def is_over(self) -> bool:
        return self.winner() != EMPTY or is_full(self.board)


def parse_human_move(text: str) -> Move:
    """Parse two 1-indexed integers, e.g. ``"2 3"``, into a 0-indexed (row, col)."""
    parts = text.replace(",", " ").split()
    if len(parts) != 2:
        raise IllegalMove(f"Expected row and column, got {text!r}")
    try:
        row, col = (int(p) - 1 for p in parts)
    except ValueError:
        raise IllegalMove(f"Row and column must be integers, got {text!r}") from None
    if not (0 <= row < SIZE and 0 <= col < SIZE):
        raise IllegalMove(f"Row and column must be between 1 and {SIZE}")
    return row, col


def play_console(
    config: EngineConfig,
    read: Optional[Callable[[str], str]] = None,
    write: Optional[Callable[[str], None]] = None,
) -> int:
    """Run one game on the console. Returns the winner, or EMPTY for a draw.

    ``read`` and ``write`` default to ``input`` and ``print``. An ``EOFError``
    from ``read`` propagates to the caller.
    """
    read = read or input
    write = write or print
    game = Game()
    computer = config.computer_player
    human = opponent(computer)

    while True:
        write("\n\n" + render_board(game.board))
        if game.to_move == computer:
            write(f"Computer's turn ({SYMBOLS[computer]}).")
            row, col = choose_move(game.board, computer, config)
            game.play(row, col)
            logging.debug("computer played row=%d col=%d", row + 1, col + 1)
        else:
            while True:
                text = read(f"Your turn ({SYMBOLS[human]}). Choose row and column: ")
                try:
                    row, col = parse_human_move(text)
                    game.play(row, col)
                    break
                except IllegalMove:
                    write("Illegal move! Please choose again!")

        if game.is_over():
            break

    write("\n\n" + render_board(game.board))
    winner = game.winner()
    if winner == computer:
        write("THE COMPUTER WON!")
    elif winner == human:
        write("YOU WON!")
    else:
        write("IT'S A DRAW!")
    return winner
