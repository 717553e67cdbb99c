from __future__ import annotations

import math
import random
from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Dict, List, Optional, Tuple

import numpy as np

from .grid import BOARD_WIDTH


class TetrominoType(IntEnum):
    I = 1
    O = 2
    T = 3
    S = 4
    Z = 5
    J = 6
    L = 7


Shape = np.ndarray


def _frozen(rows: List[List[int]]) -> Shape:
    arr = np.array(rows, dtype=np.int8)
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True)
class TetrominoDefinition:
    kind: TetrominoType
    shape: Shape
    color: str


TETROMINOES: Dict[TetrominoType, TetrominoDefinition] = {
    TetrominoType.I: TetrominoDefinition(
        TetrominoType.I,
        _frozen([[0, 0, 0, 0], [1, 1, 1, 1], [0, 0, 0, 0], [0, 0, 0, 0]]),
        "#00f0f0",
    ),
    TetrominoType.O: TetrominoDefinition(TetrominoType.O, _frozen([[1, 1], [1, 1]]), "#f0f000"),
    TetrominoType.T: TetrominoDefinition(
        TetrominoType.T, _frozen([[0, 1, 0], [1, 1, 1], [0, 0, 0]]), "#a000f0"
    ),
    TetrominoType.S: TetrominoDefinition(
        TetrominoType.S, _frozen([[0, 1, 1], [1, 1, 0], [0, 0, 0]]), "#00f000"
    ),
    TetrominoType.Z: TetrominoDefinition(
        TetrominoType.Z, _frozen([[1, 1, 0], [0, 1, 1], [0, 0, 0]]), "#f00000"
    ),
    TetrominoType.J: TetrominoDefinition(
        TetrominoType.J, _frozen([[1, 0, 0], [1, 1, 1], [0, 0, 0]]), "#0000f0"
    ),
    TetrominoType.L: TetrominoDefinition(
        TetrominoType.L, _frozen([[0, 0, 1], [1, 1, 1], [0, 0, 0]]), "#f0a000"
    ),
}


@dataclass(frozen=True)
class Position:
    x: int
    y: int


@dataclass(frozen=True, eq=False)
class Tetromino:
    type: TetrominoType
    shape: Shape
    color: str
    position: Position

    def __post_init__(self) -> None:
        # Own a read-only copy so pieces derived via replace() share nothing writable
        shape = np.array(self.shape, dtype=np.int8)
        shape.setflags(write=False)
        object.__setattr__(self, "shape", shape)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tetromino):
            return NotImplemented
        return (
            self.type == other.type
            and self.color == other.color
            and self.position == other.position
            and np.array_equal(self.shape, other.shape)
        )

    __hash__ = None  # type: ignore[assignment]

    def moved(self, dx: int, dy: int) -> "Tetromino":
        return replace(self, position=Position(self.position.x + dx, self.position.y + dy))

    def with_shape(self, shape: Shape) -> "Tetromino":
        return replace(self, shape=shape)

    def cells(self, dx: int = 0, dy: int = 0) -> List[Tuple[int, int]]:
        """Absolute (x, y) board coordinates of the occupied shape cells."""
        ys, xs = np.nonzero(self.shape)
        ox = self.position.x + dx
        oy = self.position.y + dy
        return [(ox + int(sx), oy + int(sy)) for sy, sx in zip(ys, xs)]


def spawn_x(shape: Shape) -> int:
    x = BOARD_WIDTH // 2 - math.ceil(shape.shape[1] / 2)
    return min(max(x, 0), BOARD_WIDTH - 1)


def new_tetromino(kind: TetrominoType) -> Tetromino:
    """Fresh piece of `kind` at its spawn position (top row, centered)."""
    definition = TETROMINOES[kind]
    return Tetromino(
        type=kind, shape=definition.shape, color=definition.color, position=Position(spawn_x(definition.shape), 0)
    )


def get_random_tetromino(rng: Optional[random.Random] = None) -> Tetromino:
    chooser = rng if rng is not None else random
    kind = chooser.choice(list(TetrominoType))
    return new_tetromino(kind)


def rotate_tetromino(piece: Tetromino) -> Shape:
    """Return the piece's shape rotated 90 degrees clockwise as a new array.

    Position, color and type are left to the caller; so is re-checking
    collision after the rotation.
    """
    return np.rot90(piece.shape, 1, axes=(1, 0)).copy()
