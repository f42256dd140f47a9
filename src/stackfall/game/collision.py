from __future__ import annotations

from .grid import Board
from .pieces import Piece


def collides(board: Board, piece: Piece) -> bool:
    """True if any block of `piece` is off the board or on an occupied cell."""
    for x, y in piece.cells():
        if not board.is_inside(x, y):
            return True
        if board.is_occupied(x, y):
            return True
    return False
