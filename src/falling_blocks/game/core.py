from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Tuple

import numpy as np

from .grid import (
    BOARD_HEIGHT,
    BOARD_WIDTH,
    board_to_array,
    check_collision,
    clear_lines,
    create_empty_board,
    merge_tetromino,
)
from .pieces import Position, Tetromino, get_random_tetromino, rotate_tetromino
from .rules import ScoringRules

logger = logging.getLogger(__name__)


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE = 2
    SOFT_DROP = 3
    HARD_DROP = 4
    NONE = 5


@dataclass
class GameConfig:
    random_seed: Optional[int] = None
    # Horizontal offsets tried in order after a rotation; empty means reject
    wall_kicks: Tuple[int, ...] = (0, -1, 1, -2, 2)


@dataclass
class StepResult:
    lines_cleared: int = 0
    score_delta: int = 0
    locked: bool = False
    game_over: bool = False


class GameSession:
    """Caller-side game state driven through the pure grid/piece/rules API.

    The session owns the board, the active and next pieces, and the
    score/level counters. Every board change goes through `merge_tetromino`
    and `clear_lines`, so the board is replaced, never edited in place.
    """

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = random.Random(self.config.random_seed)
        self.board = create_empty_board()
        self.current_piece: Optional[Tetromino] = None
        self.next_piece: Optional[Tetromino] = None
        self.score = 0
        self.lines_cleared_total = 0
        self.level = 1
        self.game_over = False
        self.paused = False
        self.reset()

    def seed(self, seed: Optional[int]) -> None:
        self.rng.seed(seed)

    def reset(self) -> None:
        self.board = create_empty_board()
        self.score = 0
        self.lines_cleared_total = 0
        self.level = self.rules.level_for_lines(0)
        self.game_over = False
        self.paused = False
        self.current_piece = None
        self.next_piece = get_random_tetromino(self.rng)
        self._spawn_piece()

    @property
    def drop_interval_ms(self) -> int:
        return self.rules.drop_speed(self.level)

    @property
    def active(self) -> bool:
        return self.current_piece is not None and not self.game_over and not self.paused

    def toggle_pause(self) -> bool:
        if not self.game_over:
            self.paused = not self.paused
        return self.paused

    def _spawn_piece(self) -> None:
        assert self.next_piece is not None
        self.current_piece = self.next_piece
        self.next_piece = get_random_tetromino(self.rng)
        # A blocked spawn position ends the session
        if check_collision(self.board, self.current_piece):
            self.game_over = True
            logger.debug("spawned %s collides, game over at score %d", self.current_piece.type.name, self.score)

    def _move(self, dx: int, dy: int) -> bool:
        if not self.active:
            return False
        assert self.current_piece is not None
        if check_collision(self.board, self.current_piece, dx, dy):
            return False
        self.current_piece = self.current_piece.moved(dx, dy)
        return True

    def rotate(self) -> bool:
        if not self.active:
            return False
        assert self.current_piece is not None
        rotated = self.current_piece.with_shape(rotate_tetromino(self.current_piece))
        for kick in self.config.wall_kicks:
            if not check_collision(self.board, rotated, kick, 0):
                self.current_piece = rotated.moved(kick, 0)
                return True
        return False

    def ghost_position(self) -> Optional[Position]:
        """Where the active piece would land on a hard drop, or None once the game is over."""
        if self.current_piece is None or self.game_over:
            return None
        distance = self._drop_distance()
        return Position(self.current_piece.position.x, self.current_piece.position.y + distance)

    def _drop_distance(self) -> int:
        assert self.current_piece is not None
        distance = 0
        while not check_collision(self.board, self.current_piece, 0, distance + 1):
            distance += 1
        return distance

    def _lock_piece(self) -> StepResult:
        assert self.current_piece is not None
        merged = merge_tetromino(self.board, self.current_piece)
        cleared = clear_lines(merged)
        self.board = cleared.new_board
        lines = cleared.lines_cleared
        gained = self.rules.score_for_lines(lines, self.level)
        self.score += gained
        self.lines_cleared_total += lines
        self.level = self.rules.level_for_lines(self.lines_cleared_total)
        if lines:
            logger.debug("cleared %d line(s) for %d points, level %d", lines, gained, self.level)
        self._spawn_piece()
        return StepResult(lines_cleared=lines, score_delta=gained, locked=True, game_over=self.game_over)

    def _fall(self, cell_score: int) -> StepResult:
        if self._move(0, 1):
            self.score += cell_score
            return StepResult(score_delta=cell_score)
        return self._lock_piece()

    def tick(self) -> StepResult:
        """Gravity step: move the active piece down one row or lock it."""
        if not self.active:
            return StepResult(game_over=self.game_over)
        return self._fall(0)

    def soft_drop(self) -> StepResult:
        if not self.active:
            return StepResult(game_over=self.game_over)
        return self._fall(self.rules.soft_drop_cell_score)

    def hard_drop(self) -> StepResult:
        if not self.active:
            return StepResult(game_over=self.game_over)
        assert self.current_piece is not None
        distance = self._drop_distance()
        self.current_piece = self.current_piece.moved(0, distance)
        bonus = distance * self.rules.hard_drop_cell_score
        self.score += bonus
        result = self._lock_piece()
        result.score_delta += bonus
        return result

    def step(self, action: Action) -> StepResult:
        if not self.active:
            return StepResult(game_over=self.game_over)

        if action == Action.LEFT:
            self._move(-1, 0)
        elif action == Action.RIGHT:
            self._move(1, 0)
        elif action == Action.ROTATE:
            self.rotate()
        elif action == Action.SOFT_DROP:
            return self.soft_drop()
        elif action == Action.HARD_DROP:
            return self.hard_drop()
        return StepResult()

    def get_state(self) -> np.ndarray:
        # Locked cells read 1; the falling piece reads -type
        state = board_to_array(self.board)
        if self.current_piece is not None and not self.game_over:
            for x, y in self.current_piece.cells():
                if 0 <= y < BOARD_HEIGHT and 0 <= x < BOARD_WIDTH:
                    state[y, x] = -int(self.current_piece.type)
        return state
