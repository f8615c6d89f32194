"""
Scoring for found words.

score() runs a fixed chain of stages over a base value. Each stage result is
rounded before the next stage sees it, so the order matters:

1. time bonus for a quick find
2. combo multiplier for a streak of quick finds
3. difficulty multiplier
4. no-hints bonus
5. first-win-of-the-day multiplier
"""

import math
from typing import Callable, Iterable, List, Optional

from .models import (
    DIFFICULTY_MULTIPLIERS,
    Modifier,
    ModifierTarget,
    ScoreContext,
    ScoreMultiplier,
    TimeSlow,
)


BASE_WORD_POINTS = 100
MIN_WORD_POINTS = 10

# A find within this many seconds keeps the combo going
COMBO_WINDOW = 5

NO_HINTS_BONUS = 100
FIRST_WIN_MULTIPLIER = 1.2
COMBO_STEP = 0.1


def round_half_up(value: float) -> int:
    """Round .5 up, as the game always has (not banker's rounding)."""
    return int(math.floor(value + 0.5))


def time_bonus(points: float, context: ScoreContext) -> float:
    if context.time_since_last_word < 2:
        return points + 100  # Super fast
    if context.time_since_last_word < 5:
        return points + 50
    if context.time_since_last_word < 10:
        return points + 25
    return points


def combo_bonus(points: float, context: ScoreContext) -> float:
    # 10% per combo step
    if context.time_since_last_word < COMBO_WINDOW:
        return points * (1 + context.combo_count * COMBO_STEP)
    return points


def difficulty_bonus(points: float, context: ScoreContext) -> float:
    return points * DIFFICULTY_MULTIPLIERS.get(context.difficulty, 1)


def no_hints_bonus(points: float, context: ScoreContext) -> float:
    if not context.hints_used:
        return points + NO_HINTS_BONUS
    return points


def first_win_bonus(points: float, context: ScoreContext) -> float:
    if context.is_first_win_today:
        return points * FIRST_WIN_MULTIPLIER
    return points


SCORE_STAGES: List[Callable[[float, ScoreContext], float]] = [
    time_bonus,
    combo_bonus,
    difficulty_bonus,
    no_hints_bonus,
    first_win_bonus,
]


def score(base_score: int = BASE_WORD_POINTS, context: Optional[ScoreContext] = None) -> int:
    """
    Compute the points for one found word.

    Args:
        base_score: Starting points before any stage is applied
        context: Timing, difficulty, combo and bonus flags for this find

    Returns:
        Integer score after all stages (no minimum floor is applied here)
    """
    context = context or ScoreContext()
    points = base_score
    for stage in SCORE_STAGES:
        points = round_half_up(stage(points, context))
    return points


def is_live(modifier: Modifier, now: float) -> bool:
    """Check a timed modifier has not expired at the given round time."""
    expires_at = getattr(modifier, "expires_at", None)
    return expires_at is None or now < expires_at


def apply_active_modifiers(
    value: float,
    modifiers: Iterable[Modifier],
    target: ModifierTarget = "score",
    now: float = 0,
) -> float:
    """
    Fold the live modifiers for a target over a value.

    Score multipliers act on "score", time slows act on "timer"; hints, wild
    cards and no-ops leave the value unchanged. Score results are rounded.
    """
    result = value
    for modifier in modifiers:
        if not is_live(modifier, now):
            continue
        if target == "score" and isinstance(modifier, ScoreMultiplier):
            result = result * modifier.factor
        elif target == "timer" and isinstance(modifier, TimeSlow):
            result = result * modifier.factor

    if target == "score":
        return round_half_up(result)
    return result
