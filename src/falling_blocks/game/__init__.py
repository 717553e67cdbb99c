"""Game module for Falling Blocks.

Exports the rules core and the session that drives it:
- grid: board cells, collision, merging and line clearing
- pieces: the seven tetrominoes, random spawning and rotation
- rules: scoring, leveling and drop speed
- GameSession: caller-side state (active piece, score, level, game over)
"""

from .grid import (
    BOARD_HEIGHT,
    BOARD_WIDTH,
    EMPTY_CELL,
    Cell,
    Grid,
    LineClearResult,
    board_to_array,
    check_collision,
    clear_lines,
    count_holes,
    create_empty_board,
    get_max_height,
    merge_tetromino,
)
from .pieces import (
    TETROMINOES,
    Position,
    Tetromino,
    TetrominoType,
    get_random_tetromino,
    new_tetromino,
    rotate_tetromino,
)
from .rules import ScoringRules, calculate_level, calculate_score, get_drop_speed
from .core import Action, GameConfig, GameSession, StepResult

__all__ = [
    "BOARD_HEIGHT",
    "BOARD_WIDTH",
    "EMPTY_CELL",
    "Cell",
    "Grid",
    "LineClearResult",
    "board_to_array",
    "check_collision",
    "clear_lines",
    "count_holes",
    "create_empty_board",
    "get_max_height",
    "merge_tetromino",
    "TETROMINOES",
    "Position",
    "Tetromino",
    "TetrominoType",
    "get_random_tetromino",
    "new_tetromino",
    "rotate_tetromino",
    "ScoringRules",
    "calculate_level",
    "calculate_score",
    "get_drop_speed",
    "Action",
    "GameConfig",
    "GameSession",
    "StepResult",
]
