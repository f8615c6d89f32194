"""
Pydantic models for the game layer.

This module contains the difficulty tables, score inputs, modifier variants,
round results and configuration used throughout the game layer. The logic
classes (RoundStateMachine, Challenge, GameTimer, ...) live in their own files.
"""

from typing import Annotated, Any, Dict, List, Literal, Optional, Union
from pydantic import BaseModel, Field

from ..grid.models import WordPlacement


# Type aliases
Difficulty = Literal["baby", "easy", "medium", "hard"]
RoundStatus = Literal["idle", "active", "complete"]
FoundReason = Literal["found", "duplicate", "not_in_list", "inactive", "no_match", "busy"]
EventType = Literal[
    "round_started",
    "word_found",
    "round_completed",
    "round_cancelled",
    "challenge_completed",
]
ModifierTarget = Literal["score", "timer"]


GRID_SIZES: Dict[str, int] = {
    "baby": 8,
    "easy": 8,
    "medium": 10,
    "hard": 12,
}
DEFAULT_GRID_SIZE = 10

WORD_COUNTS: Dict[str, int] = {
    "baby": 1,
    "easy": 5,
    "medium": 8,
    "hard": 12,
}
DEFAULT_WORD_COUNT = 8

TARGET_SCORES: Dict[str, int] = {
    "baby": 3000,
    "easy": 5000,
    "medium": 10000,
    "hard": 15000,
}
DEFAULT_TARGET_SCORE = 10000

DIFFICULTY_MULTIPLIERS: Dict[str, float] = {
    "baby": 0.5,
    "easy": 1,
    "medium": 1.5,
    "hard": 2,
}

TOTAL_CHALLENGE_ROUNDS = 10


def grid_size_for(difficulty: str) -> int:
    """Grid width/height for a difficulty."""
    return GRID_SIZES.get(difficulty, DEFAULT_GRID_SIZE)


def word_count_for(difficulty: str) -> int:
    """Number of words requested per round for a difficulty."""
    return WORD_COUNTS.get(difficulty, DEFAULT_WORD_COUNT)


def target_score_for(difficulty: str) -> int:
    """Cumulative challenge score needed to succeed at a difficulty."""
    return TARGET_SCORES.get(difficulty, DEFAULT_TARGET_SCORE)


class ScoreContext(BaseModel):
    """Per-word inputs to the scoring function."""
    time_since_last_word: float = Field(default=0, ge=0)
    difficulty: str = "medium"
    combo_count: int = Field(default=0, ge=0)
    hints_used: bool = False
    is_first_win_today: bool = False


# Modifier variants. Expiry times are round-elapsed seconds; None never expires.

class NoModifier(BaseModel):
    kind: Literal["none"] = "none"


class ScoreMultiplier(BaseModel):
    """Multiplies points earned while active."""
    kind: Literal["score_multiplier"] = "score_multiplier"
    factor: float = Field(default=2.0, gt=0)
    expires_at: Optional[float] = None


class TimeSlow(BaseModel):
    """Scales the timer's tick rate while active."""
    kind: Literal["time_slow"] = "time_slow"
    factor: float = Field(default=0.5, gt=0)
    expires_at: Optional[float] = None


class Hint(BaseModel):
    """Reveal the position of one unfound word."""
    kind: Literal["hint"] = "hint"


class WildCard(BaseModel):
    """Count one unfound word as found."""
    kind: Literal["wild_card"] = "wild_card"


Modifier = Annotated[
    Union[NoModifier, ScoreMultiplier, TimeSlow, Hint, WildCard],
    Field(discriminator="kind"),
]


class ChallengeState(BaseModel):
    """Snapshot of a ten-round challenge."""
    is_active: bool = False
    current_round: int = Field(default=1, ge=1)
    total_rounds: int = TOTAL_CHALLENGE_ROUNDS
    target_score: int = DEFAULT_TARGET_SCORE
    cumulative_score: int = 0
    round_scores: List[int] = Field(default_factory=list)
    category: Optional[str] = None
    difficulty: Optional[str] = None
    started_at: Optional[str] = None
    completed: bool = False
    success: bool = False


class WordFoundResult(BaseModel):
    """Result of reporting a word (or a selection) to the round."""
    found: bool
    reason: FoundReason
    word: Optional[str] = None
    points: int = 0
    total_found: int = 0
    total_words: int = 0
    complete: bool = False


class RoundEvent(BaseModel):
    """Notification sent to round observers."""
    type: EventType
    word: Optional[str] = None
    points: int = 0
    state: Dict[str, Any] = Field(default_factory=dict)


class GameConfig(BaseModel):
    """Configuration for a game session."""
    category: str = "animals"
    difficulty: Difficulty = "medium"
    seed: Optional[int] = None
    categories_file: Optional[str] = None
    storage_path: Optional[str] = None
    namespace: str = "wordsearch:"
    challenge: bool = False
    verbose: bool = False


class ModifierOutcome(BaseModel):
    """What activating a modifier did to the round."""
    applied: bool
    modifier: Optional[Modifier] = None
    hint: Optional[WordPlacement] = None  # Set for Hint
    found: Optional[WordFoundResult] = None  # Set for WildCard
