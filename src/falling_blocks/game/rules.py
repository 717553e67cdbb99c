from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    line_clear_scores: tuple[int, int, int, int] = (100, 300, 500, 800)
    lines_per_level: int = 10
    base_drop_ms: int = 1000
    drop_step_ms: int = 100
    min_drop_ms: int = 100
    soft_drop_cell_score: int = 0
    hard_drop_cell_score: int = 0

    def score_for_lines(self, lines: int, level: int = 1) -> int:
        if lines <= 0:
            return 0
        if 1 <= lines <= 4:
            base = self.line_clear_scores[lines - 1]
        else:
            # Not reachable with four-cell pieces; extrapolate past the last tier
            base = self.line_clear_scores[-1] + (lines - 4) * 400
        return base * level

    def level_for_lines(self, total_lines: int) -> int:
        return 1 + max(total_lines, 0) // self.lines_per_level

    def drop_speed(self, level: int) -> int:
        """Milliseconds between automatic one-row drops at `level`."""
        return max(self.min_drop_ms, self.base_drop_ms - (level - 1) * self.drop_step_ms)


DEFAULT_RULES = ScoringRules()


def calculate_score(lines_cleared: int, level: int) -> int:
    return DEFAULT_RULES.score_for_lines(lines_cleared, level)


def calculate_level(total_lines_cleared: int) -> int:
    return DEFAULT_RULES.level_for_lines(total_lines_cleared)


def get_drop_speed(level: int) -> int:
    return DEFAULT_RULES.drop_speed(level)
