from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from .collision import collides
from .grid import Board
from .pieces import Piece
from .rules import ScoringRules


logger = logging.getLogger(__name__)


@dataclass
class SettlementResult:
    rows_cleared: List[int] = field(default_factory=list)
    score_delta: int = 0

    @property
    def lines_cleared(self) -> int:
        return len(self.rows_cleared)


def find_full_rows(cells: np.ndarray) -> List[int]:
    """Indices of rows with every cell occupied, ascending."""
    return [int(r) for r in np.where(np.all(cells != 0, axis=1))[0]]


def remove_row(cells: np.ndarray, row: int) -> None:
    """Drop `row`, shifting rows 0..row-1 down by one and emptying row 0.

    Rows below `row` are left alone.
    """
    carried = np.zeros(cells.shape[1], dtype=cells.dtype)
    for i in range(row + 1):
        previous = cells[i].copy()
        cells[i] = carried
        carried = previous


def settle(board: Board, piece: Piece, rules: Optional[ScoringRules] = None) -> SettlementResult:
    """Lock `piece` into the board, clear full rows and add their score.

    The piece must sit at a legal position; settling an overlapping piece
    would overwrite another occupant.
    """
    rules = rules or ScoringRules()
    assert not collides(board, piece), "settled piece overlaps the board"

    for x, y in piece.cells():
        board.cells[y, x] = piece.color

    # Ascending order: each removal only touches rows at or above its index.
    rows = find_full_rows(board.cells)
    for row in rows:
        remove_row(board.cells, row)

    delta = rules.score_for_lines(len(rows))
    board.score += delta
    if rows:
        logger.debug("cleared rows %s for %d points", rows, delta)
    return SettlementResult(rows_cleared=rows, score_delta=delta)
