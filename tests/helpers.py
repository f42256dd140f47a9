from __future__ import annotations

import random
from typing import Iterable, Sequence

from stackfall.game import FallingBlockGame, GameConfig, PieceType


class ScriptedRandom(random.Random):
    """Random source whose `choice` walks a fixed list of piece types, cycling."""

    def __init__(self, kinds: Sequence[PieceType]) -> None:
        super().__init__(0)
        self.kinds = list(kinds)
        self.draws = 0

    def choice(self, seq):  # type: ignore[override]
        kind = self.kinds[self.draws % len(self.kinds)]
        self.draws += 1
        assert kind in seq
        return kind


def make_game(*kinds: PieceType, gravity_interval: float = 0.5) -> FallingBlockGame:
    """Game whose spawns follow `kinds` (cycling)."""
    return FallingBlockGame(GameConfig(gravity_interval=gravity_interval), rng=ScriptedRandom(kinds or [PieceType.T]))


def fill_row(cells, row: int, value: int = 9, gaps: Iterable[int] = ()) -> None:
    """Occupy every cell of `row` except the `gaps` columns."""
    skip = set(gaps)
    for x in range(cells.shape[1]):
        if x not in skip:
            cells[row, x] = value
