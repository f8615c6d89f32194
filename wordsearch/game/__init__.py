"""Rules layer: rounds, challenges, scoring and player progress."""

from .models import (
    Difficulty,
    RoundStatus,
    GRID_SIZES,
    WORD_COUNTS,
    TARGET_SCORES,
    DIFFICULTY_MULTIPLIERS,
    TOTAL_CHALLENGE_ROUNDS,
    grid_size_for,
    word_count_for,
    target_score_for,
    ScoreContext,
    Modifier,
    NoModifier,
    ScoreMultiplier,
    TimeSlow,
    Hint,
    WildCard,
    ModifierOutcome,
    ChallengeState,
    WordFoundResult,
    RoundEvent,
    GameConfig,
)
from .scoring import score, apply_active_modifiers, round_half_up
from .categories import CategorySource, DEFAULT_CATEGORIES
from .timer import GameTimer
from .storage import StorageService
from .challenge import Challenge
from .stats import UserStats, GameRecord, GameSummary, Achievement
from .deck import CardDeck, Card, CardResult
from .round import RoundStateMachine

__all__ = [
    # Models
    "Difficulty",
    "RoundStatus",
    "GRID_SIZES",
    "WORD_COUNTS",
    "TARGET_SCORES",
    "DIFFICULTY_MULTIPLIERS",
    "TOTAL_CHALLENGE_ROUNDS",
    "grid_size_for",
    "word_count_for",
    "target_score_for",
    "ScoreContext",
    "Modifier",
    "NoModifier",
    "ScoreMultiplier",
    "TimeSlow",
    "Hint",
    "WildCard",
    "ModifierOutcome",
    "ChallengeState",
    "WordFoundResult",
    "RoundEvent",
    "GameConfig",
    # Scoring
    "score",
    "apply_active_modifiers",
    "round_half_up",
    # Collaborators
    "CategorySource",
    "DEFAULT_CATEGORIES",
    "GameTimer",
    "StorageService",
    "Challenge",
    "UserStats",
    "GameRecord",
    "GameSummary",
    "Achievement",
    "CardDeck",
    "Card",
    "CardResult",
    # State machine
    "RoundStateMachine",
]
