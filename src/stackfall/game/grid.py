from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

import numpy as np

from .pieces import Blocks, Piece


WIDTH = 10
HEIGHT = 32

Coordinate = Tuple[int, int]


class GameState(str, Enum):
    EMPTY = "empty"
    FALLING = "falling"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class ActivePieceView:
    color: int
    position: Coordinate
    blocks: Blocks


@dataclass(frozen=True)
class BoardSnapshot:
    """Read-only copy of everything a renderer needs for one frame."""

    cells: np.ndarray
    score: int
    level: int
    state: GameState
    lines_cleared_total: int
    active_piece: Optional[ActivePieceView]


class Board:
    """Fixed WIDTH x HEIGHT grid plus score, level and the two piece slots.

    Cells hold 0 when empty and the occupying piece's color code otherwise.
    Row 0 is the top of the board.
    """

    def __init__(self) -> None:
        self.width = WIDTH
        self.height = HEIGHT
        self.cells = np.zeros((self.height, self.width), dtype=np.int8)
        self.score = 0
        self.level = 1
        self.active_piece: Optional[Piece] = None
        # Reserved slot, nothing in the engine reads or writes it.
        self.stored_piece: Optional[Piece] = None

    def reset(self) -> None:
        self.cells.fill(0)
        self.score = 0
        self.level = 1
        self.active_piece = None
        self.stored_piece = None

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_occupied(self, x: int, y: int) -> bool:
        return bool(self.cells[y, x] != 0)

    def clone_state(self) -> np.ndarray:
        return self.cells.copy()

    def snapshot(self, state: GameState = GameState.EMPTY, lines_cleared_total: int = 0) -> BoardSnapshot:
        cells = self.clone_state()
        cells.flags.writeable = False
        active = None
        if self.active_piece is not None:
            p = self.active_piece
            active = ActivePieceView(color=p.color, position=p.position, blocks=p.blocks)
        return BoardSnapshot(
            cells=cells,
            score=self.score,
            level=self.level,
            state=state,
            lines_cleared_total=lines_cleared_total,
            active_piece=active,
        )
