from __future__ import annotations

import pytest

from falling_blocks.game import ScoringRules, calculate_level, calculate_score, get_drop_speed


@pytest.mark.parametrize(
    "lines, level, expected",
    [
        (0, 1, 0),
        (0, 7, 0),
        (1, 1, 100),
        (1, 2, 200),
        (2, 1, 300),
        (2, 3, 900),
        (3, 1, 500),
        (4, 1, 800),
        (4, 5, 4000),
        (1, 10, 1000),
        (4, 10, 8000),
    ],
)
def test_calculate_score(lines, level, expected):
    assert calculate_score(lines, level) == expected


def test_score_beyond_four_lines_extends_last_tier():
    assert calculate_score(5, 1) == 1200
    assert calculate_score(-1, 3) == 0


@pytest.mark.parametrize(
    "total, level",
    [(0, 1), (5, 1), (9, 1), (10, 2), (19, 2), (20, 3), (50, 6), (100, 11), (999, 100)],
)
def test_calculate_level(total, level):
    assert calculate_level(total) == level


@pytest.mark.parametrize("level, speed", [(1, 1000), (2, 900), (3, 800), (5, 600), (10, 100), (20, 100)])
def test_get_drop_speed(level, speed):
    assert get_drop_speed(level) == speed


def test_drop_speed_floor_and_monotonic():
    speeds = [get_drop_speed(level) for level in range(1, 101)]
    assert min(speeds) >= 100
    assert all(a >= b for a, b in zip(speeds, speeds[1:]))


def test_custom_rules():
    rules = ScoringRules(line_clear_scores=(40, 100, 300, 1200), lines_per_level=5, min_drop_ms=50)
    assert rules.score_for_lines(4, 2) == 2400
    assert rules.level_for_lines(12) == 3
    assert rules.drop_speed(30) == 50
