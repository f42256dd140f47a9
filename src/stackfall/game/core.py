from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

import numpy as np

from .collision import collides
from .grid import Board, BoardSnapshot, GameState
from .pieces import Piece, random_piece_type
from .rules import ScoringRules
from .settlement import SettlementResult, settle


logger = logging.getLogger(__name__)

TICK_EPSILON = 1e-9


class Command(IntEnum):
    SPAWN = 0
    MOVE_LEFT = 1
    MOVE_RIGHT = 2
    ROTATE = 3
    SOFT_DROP = 4
    HARD_DROP = 5


@dataclass
class GameConfig:
    gravity_interval: float = 0.5
    random_seed: Optional[int] = None

    def __post_init__(self) -> None:
        if not (self.gravity_interval > 0 and math.isfinite(self.gravity_interval)):
            raise ValueError(f"gravity_interval must be a positive number, got {self.gravity_interval!r}")


class FallingBlockGame:
    """Command and gravity-tick state machine driving one board.

    The game starts EMPTY; SPAWN puts a piece in play. Player commands only
    ever move the active piece to legal positions. Settling happens on a
    gravity tick that cannot move the piece down, and is always followed by
    the next spawn.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = rng if rng is not None else random.Random(self.config.random_seed)
        self.board = Board()
        self.state = GameState.EMPTY
        self.lines_cleared_total = 0
        self.last_settlement: Optional[SettlementResult] = None
        self._since_last_tick = 0.0

    @property
    def active_piece(self) -> Optional[Piece]:
        return self.board.active_piece

    @property
    def score(self) -> int:
        return self.board.score

    @property
    def game_over(self) -> bool:
        return self.state is GameState.GAME_OVER

    def reset(self) -> None:
        self.board.reset()
        self.state = GameState.EMPTY
        self.lines_cleared_total = 0
        self.last_settlement = None
        self._since_last_tick = 0.0

    def spawn(self) -> None:
        if self.game_over:
            return
        piece = Piece.spawn(random_piece_type(self.rng))
        self.board.active_piece = piece
        if collides(self.board, piece):
            self.state = GameState.GAME_OVER
            logger.info("spawn blocked at %s, game over with score %d", piece.position, self.board.score)
        else:
            self.state = GameState.FALLING

    def _try_replace(self, candidate: Piece) -> bool:
        if collides(self.board, candidate):
            return False
        self.board.active_piece = candidate
        return True

    def _lowest_position(self, piece: Piece) -> Piece:
        nxt = piece.drop()
        while not collides(self.board, nxt):
            piece = nxt
            nxt = piece.drop()
        return piece

    def handle(self, command: Command | int) -> bool:
        """Apply one player command. Returns True if the active piece changed."""
        command = Command(command)
        if command == Command.SPAWN:
            before = self.board.active_piece
            self.spawn()
            return self.board.active_piece is not before

        piece = self.board.active_piece
        if self.state is not GameState.FALLING or piece is None:
            return False

        if command == Command.MOVE_LEFT:
            return self._try_replace(piece.left())
        if command == Command.MOVE_RIGHT:
            return self._try_replace(piece.right())
        if command == Command.ROTATE:
            return self._try_replace(piece.rotate())
        if command == Command.SOFT_DROP:
            return self._try_replace(piece.drop())
        # HARD_DROP leaves the piece resting; the next tick settles it
        landed = self._lowest_position(piece)
        self.board.active_piece = landed
        return landed != piece

    def tick(self) -> None:
        """One gravity step: fall a row, or settle and spawn the next piece."""
        piece = self.board.active_piece
        if self.state is not GameState.FALLING or piece is None:
            return
        if self._try_replace(piece.drop()):
            return
        result = settle(self.board, piece, self.rules)
        self.lines_cleared_total += result.lines_cleared
        self.last_settlement = result
        logger.debug("settled piece at %s, score %d", piece.position, self.board.score)
        self.board.active_piece = None
        self.spawn()

    def advance(self, dt: float) -> int:
        """Accumulate `dt` seconds and run every whole gravity interval.

        Returns the number of ticks fired; the remainder carries over.
        """
        if not math.isfinite(dt) or dt < 0:
            raise ValueError(f"elapsed time must be a non-negative number, got {dt!r}")
        self._since_last_tick += dt
        interval = self.config.gravity_interval
        fired = 0
        # Summed frame deltas drift below exact multiples of the interval
        while self._since_last_tick + TICK_EPSILON >= interval:
            self._since_last_tick = max(0.0, self._since_last_tick - interval)
            self.tick()
            fired += 1
        return fired

    def snapshot(self) -> BoardSnapshot:
        return self.board.snapshot(state=self.state, lines_cleared_total=self.lines_cleared_total)

    def get_state(self) -> np.ndarray:
        # Overlay the active piece on a copy of the grid for observation
        state = self.board.clone_state()
        piece = self.board.active_piece
        # A blocked spawn overlaps settled cells, so it is not drawn
        if piece is not None and not self.game_over:
            for x, y in piece.cells():
                if self.board.is_inside(x, y):
                    # Negative marks the falling piece
                    state[y, x] = -piece.color
        return state
