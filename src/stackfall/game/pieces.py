from __future__ import annotations

import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, List, Tuple


Offset = Tuple[int, int]
Blocks = Tuple[Offset, Offset, Offset, Offset]


class PieceType(IntEnum):
    T = 1
    STRAIGHT = 2
    L = 3
    REV_L = 4
    BLOCK = 5
    S = 6
    Z = 7


# Blocks are (x, y) offsets around the rotation origin, y grows downward.
BASE_BLOCKS: Dict[PieceType, Blocks] = {
    PieceType.T: ((-1, 0), (0, 0), (1, 0), (0, 1)),
    PieceType.STRAIGHT: ((-1, 0), (0, 0), (1, 0), (2, 0)),
    PieceType.L: ((0, -1), (0, 0), (0, 1), (1, 1)),
    PieceType.REV_L: ((0, -1), (0, 0), (0, 1), (-1, 1)),
    PieceType.BLOCK: ((0, 0), (0, 1), (1, 0), (1, 1)),
    PieceType.S: ((0, 0), (1, 0), (-1, 1), (0, 1)),
    PieceType.Z: ((-1, 0), (0, 0), (0, 1), (1, 1)),
}

SPAWN_COLUMN = 4

SPAWN_POSITIONS: Dict[PieceType, Offset] = {
    kind: (SPAWN_COLUMN, 1 if kind in (PieceType.L, PieceType.REV_L) else 0)
    for kind in PieceType
}

# Cells store the color code; renderers look the RGB value up here.
PALETTE: Dict[int, Tuple[int, int, int]] = {
    0: (25, 25, 128),
    int(PieceType.T): (255, 0, 0),
    int(PieceType.STRAIGHT): (128, 76, 255),
    int(PieceType.L): (255, 255, 0),
    int(PieceType.REV_L): (0, 255, 255),
    int(PieceType.BLOCK): (0, 255, 0),
    int(PieceType.S): (255, 0, 255),
    int(PieceType.Z): (255, 128, 0),
}


def color_for_value(v: int) -> Tuple[int, int, int]:
    return PALETTE.get(abs(int(v)), (200, 200, 200))


@dataclass(frozen=True)
class Piece:
    """A falling piece as a plain value.

    Only the realized color code, block offsets and position are kept; the
    shape it was built from is forgotten. Every transform returns a new Piece
    and none of them check bounds or occupancy.
    """

    color: int
    blocks: Blocks
    position: Offset

    def __post_init__(self) -> None:
        if len(self.blocks) != 4:
            raise ValueError(f"a piece has exactly 4 blocks, got {len(self.blocks)}")

    @classmethod
    def spawn(cls, kind: PieceType) -> "Piece":
        return cls(color=int(kind), blocks=BASE_BLOCKS[kind], position=SPAWN_POSITIONS[kind])

    def _moved(self, dx: int, dy: int) -> "Piece":
        x, y = self.position
        return Piece(self.color, self.blocks, (x + dx, y + dy))

    def drop(self) -> "Piece":
        return self._moved(0, 1)

    def left(self) -> "Piece":
        return self._moved(-1, 0)

    def right(self) -> "Piece":
        return self._moved(1, 0)

    def rotate(self) -> "Piece":
        # (x, y) -> (y, -x) about the piece's own position
        rotated = tuple((y, -x) for x, y in self.blocks)
        return Piece(self.color, rotated, self.position)  # type: ignore[arg-type]

    def cells(self) -> List[Offset]:
        """Absolute (x, y) board coordinates of the four blocks."""
        px, py = self.position
        return [(px + dx, py + dy) for dx, dy in self.blocks]


def random_piece_type(rng: random.Random) -> PieceType:
    return rng.choice(list(PieceType))
