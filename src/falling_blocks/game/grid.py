from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, List

import numpy as np

if TYPE_CHECKING:
    from .pieces import Tetromino


BOARD_WIDTH = 10
BOARD_HEIGHT = 20


@dataclass(frozen=True)
class Cell:
    filled: bool = False
    color: str = ""


EMPTY_CELL = Cell()

Grid = List[List[Cell]]


@dataclass
class LineClearResult:
    new_board: Grid
    lines_cleared: int


def _empty_row() -> List[Cell]:
    return [EMPTY_CELL] * BOARD_WIDTH


def create_empty_board() -> Grid:
    """Board of BOARD_HEIGHT rows by BOARD_WIDTH unfilled cells, row 0 on top."""
    return [_empty_row() for _ in range(BOARD_HEIGHT)]


def check_collision(grid: Grid, piece: "Tetromino", dx: int = 0, dy: int = 0) -> bool:
    """True if `piece` shifted by (dx, dy) hits a wall, the floor or a filled cell.

    Cells above row 0 only collide with the side walls, so pieces may spawn
    partially above the visible board.
    """
    for x, y in piece.cells(dx, dy):
        if x < 0 or x >= BOARD_WIDTH or y >= BOARD_HEIGHT:
            return True
        if y >= 0 and grid[y][x].filled:
            return True
    return False


def merge_tetromino(grid: Grid, piece: "Tetromino") -> Grid:
    """Return a copy of `grid` with the piece's cells filled in its color.

    Cells outside the board are skipped.
    """
    new_grid = [list(row) for row in grid]
    locked = Cell(filled=True, color=piece.color)
    for x, y in piece.cells():
        if 0 <= x < BOARD_WIDTH and 0 <= y < BOARD_HEIGHT:
            new_grid[y][x] = locked
    return new_grid


def clear_lines(grid: Grid) -> LineClearResult:
    occupancy = board_to_array(grid)
    full_rows = np.all(occupancy != 0, axis=1)
    num = int(np.count_nonzero(full_rows))
    if num == 0:
        return LineClearResult(new_board=[list(row) for row in grid], lines_cleared=0)
    kept = [list(row) for row, full in zip(grid, full_rows) if not full]
    new_board = [_empty_row() for _ in range(num)] + kept
    return LineClearResult(new_board=new_board, lines_cleared=num)


def board_to_array(grid: Grid) -> np.ndarray:
    """Occupancy matrix of the board: 1 for filled cells, 0 for empty ones."""
    return np.array([[1 if cell.filled else 0 for cell in row] for row in grid], dtype=np.int8)


def get_max_height(grid: Grid) -> int:
    # Height counts from the floor up to the topmost filled row
    non_empty_rows = np.where(np.any(board_to_array(grid) != 0, axis=1))[0]
    if non_empty_rows.size == 0:
        return 0
    return len(grid) - int(non_empty_rows[0])


def count_holes(grid: Grid) -> int:
    occupancy = board_to_array(grid)
    holes = 0
    for x in range(occupancy.shape[1]):
        seen_block = False
        for cell in occupancy[:, x]:
            if cell != 0:
                seen_block = True
            elif seen_block:
                holes += 1
    return holes
