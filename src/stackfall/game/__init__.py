"""Game module for stackfall.

Exports the falling-block engine and its building blocks:
- Piece / PieceType: immutable pieces, the seven shapes and their transforms
- Board: the 10x32 grid with score, level and piece slots
- collides: placement legality
- settle: locking a piece and clearing full rows
- ScoringRules: line clear score table
- FallingBlockGame: command and gravity-tick state machine
"""

from .grid import Board, BoardSnapshot, GameState, HEIGHT, WIDTH
from .pieces import Piece, PieceType, PALETTE, color_for_value, random_piece_type
from .collision import collides
from .rules import ScoringRules
from .settlement import SettlementResult, find_full_rows, remove_row, settle
from .core import Command, FallingBlockGame, GameConfig

__all__ = [
    "Board",
    "BoardSnapshot",
    "HEIGHT",
    "WIDTH",
    "Piece",
    "PieceType",
    "PALETTE",
    "color_for_value",
    "random_piece_type",
    "collides",
    "ScoringRules",
    "SettlementResult",
    "find_full_rows",
    "remove_row",
    "settle",
    "Command",
    "FallingBlockGame",
    "GameConfig",
    "GameState",
]
