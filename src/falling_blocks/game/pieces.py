

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, List, NamedTuple, Tuple


class TetrominoType(IntEnum):
    I = 1
    O = 2
    T = 3
    S = 4
    Z = 5
    J = 6
    L = 7


class Rotation(IntEnum):
    R0 = 0
    R90 = 1
    R180 = 2
    R270 = 3

    def next(self) -> "Rotation":
        return Rotation((self.value + 1) % 4)


class Offset(NamedTuple):
    dx: int
    dy: int


Shape = Tuple[Offset, Offset, Offset, Offset]


class ShapeTableError(ValueError):
    """Raised when a kind/rotation pair is missing or malformed in the table."""


# One entry per distinct orientation; the list repeats cyclically over R0..R270.
BASE_SHAPES: Dict[TetrominoType, List[List[Tuple[int, int]]]] = {
    TetrominoType.I: [
        [(0, 0), (0, -1), (0, 1), (0, 2)],
        [(0, 0), (-1, 0), (1, 0), (2, 0)],
    ],
    TetrominoType.O: [
        [(0, 0), (1, 0), (0, 1), (1, 1)],
    ],
    TetrominoType.T: [
        [(0, 0), (-1, 0), (1, 0), (0, 1)],
        [(0, 0), (0, -1), (0, 1), (1, 0)],
        [(0, 0), (-1, 0), (1, 0), (0, -1)],
        [(0, 0), (0, -1), (0, 1), (-1, 0)],
    ],
    TetrominoType.S: [
        [(0, 0), (-1, 0), (0, -1), (1, -1)],
        [(0, 0), (0, -1), (1, 0), (1, 1)],
    ],
    TetrominoType.Z: [
        [(0, 0), (1, 0), (0, -1), (-1, -1)],
        [(0, 0), (0, -1), (-1, 0), (-1, 1)],
    ],
    TetrominoType.J: [
        [(0, 0), (1, 0), (-1, 0), (1, 1)],
        [(0, 0), (0, -1), (0, 1), (1, -1)],
        [(0, 0), (-1, 0), (1, 0), (-1, -1)],
        [(0, 0), (0, -1), (0, 1), (-1, 1)],
    ],
    TetrominoType.L: [
        [(0, 0), (-1, 0), (1, 0), (-1, 1)],
        [(0, 0), (0, -1), (0, 1), (1, 1)],
        [(0, 0), (-1, 0), (1, 0), (1, -1)],
        [(0, 0), (0, -1), (0, 1), (-1, -1)],
    ],
}


def _build_shape_table(
    base: Dict[TetrominoType, List[List[Tuple[int, int]]]]
) -> Dict[Tuple[TetrominoType, Rotation], Shape]:
    """Expand the base shapes over every (kind, rotation) pair and validate them."""
    table: Dict[Tuple[TetrominoType, Rotation], Shape] = {}
    for kind in TetrominoType:
        orientations = base.get(kind)
        if not orientations or 4 % len(orientations) != 0:
            raise ShapeTableError(f"{kind.name}: expected 1, 2 or 4 orientations")
        for rotation in Rotation:
            cells = orientations[rotation.value % len(orientations)]
            shape = tuple(Offset(dx, dy) for dx, dy in cells)
            if len(shape) != 4 or len(set(shape)) != 4:
                raise ShapeTableError(f"{kind.name}/{rotation.name}: expected 4 distinct offsets")
            table[(kind, rotation)] = shape  # type: ignore[assignment]
    return table


SHAPE_TABLE = _build_shape_table(BASE_SHAPES)


def shape_of(kind: TetrominoType, rotation: Rotation) -> Shape:
    return SHAPE_TABLE[(kind, rotation)]


def distinct_rotations(kind: TetrominoType) -> List[Shape]:
    """Unique shapes of a kind in rotation order (1 for O, 2 for I/S/Z, 4 otherwise)."""
    shapes: List[Shape] = []
    for rotation in Rotation:
        shape = shape_of(kind, rotation)
        if shape not in shapes:
            shapes.append(shape)
    return shapes


@dataclass(frozen=True)
class Piece:
    kind: TetrominoType
    rotation: Rotation = Rotation.R0

    def shape(self) -> Shape:
        return shape_of(self.kind, self.rotation)

    def rotated(self) -> "Piece":
        return Piece(self.kind, self.rotation.next())

    def cells_at(self, origin_x: int, origin_y: int) -> List[Tuple[int, int]]:
        """Absolute (column, row) cells with the anchor at (origin_x, origin_y)."""
        return [(origin_x + dx, origin_y + dy) for dx, dy in self.shape()]
