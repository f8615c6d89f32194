"""
Player statistics, records and achievements.

Stats are keyed per category and difficulty ("animals-medium") and saved
through the persistence collaborator after every game.
"""

import logging
from datetime import date
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .storage import StorageService


logger = logging.getLogger(__name__)

USER_STATS_KEY = "user_stats"

SPEED_DEMON_SECONDS = 60
PERFECT_AIM_MIN_ATTEMPTS = 5
COMBO_MASTER_COMBO = 5
HIGH_ROLLER_SCORE = 10000


AchievementType = Literal["speed", "accuracy", "combo", "score"]


class Achievement(BaseModel):
    """An achievement earned at the end of a game."""
    type: AchievementType
    title: str
    description: str


class FastestWin(BaseModel):
    category: str
    difficulty: str
    time: int


class GameRecord(BaseModel):
    """Everything needed to record one finished (or abandoned) game."""
    category: str
    difficulty: str
    score: int = 0
    time_seconds: int = Field(default=0, ge=0)
    words_found: int = Field(default=0, ge=0)
    total_words: int = Field(default=0, ge=0)
    attempts: int = Field(default=0, ge=0)
    max_combo: int = Field(default=0, ge=0)
    won: bool = False


class GameSummary(BaseModel):
    """What record_game changed."""
    new_high_score: bool = False
    new_best_time: bool = False
    achievements: List[Achievement] = Field(default_factory=list)


def stats_key(category: str, difficulty: str) -> str:
    return f"{category}-{difficulty}"


def accuracy(words_found: int, attempts: int) -> int:
    """Found words as a percentage of selection attempts (100 with no attempts)."""
    if attempts == 0:
        return 100
    return min(100, int(words_found / attempts * 100 + 0.5))


def check_achievements(record: GameRecord) -> List[Achievement]:
    """Achievements earned by a single game."""
    achievements = []

    if record.won and record.time_seconds < SPEED_DEMON_SECONDS:
        achievements.append(Achievement(
            type="speed",
            title="Speed Demon",
            description="Complete a game in under 1 minute",
        ))

    if record.attempts > PERFECT_AIM_MIN_ATTEMPTS and accuracy(record.words_found, record.attempts) == 100:
        achievements.append(Achievement(
            type="accuracy",
            title="Perfect Aim",
            description="100% accuracy with more than 5 attempts",
        ))

    if record.max_combo >= COMBO_MASTER_COMBO:
        achievements.append(Achievement(
            type="combo",
            title="Combo Master",
            description="Get a 5x combo",
        ))

    if record.score > HIGH_ROLLER_SCORE:
        achievements.append(Achievement(
            type="score",
            title="High Roller",
            description="Score over 10,000 points",
        ))

    return achievements


class UserStats(BaseModel):
    """
    Lifetime statistics for the local player.

    Attributes:
        wins: Number of completed rounds
        high_scores: Best score per "category-difficulty"
        best_times: Fastest completion in seconds per "category-difficulty"
        total_games_played: Games recorded, won or not
        total_words_found: Words found across all games
        total_time_played: Seconds played across all games
        average_game_time: Whole seconds per game
        fastest_win: Fastest completed game overall
        last_win_date: ISO date of the most recent win
        storage: Optional persistence collaborator
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    wins: int = 0
    high_scores: Dict[str, int] = Field(default_factory=dict)
    best_times: Dict[str, int] = Field(default_factory=dict)
    total_games_played: int = 0
    total_words_found: int = 0
    total_time_played: int = 0
    average_game_time: int = 0
    fastest_win: Optional[FastestWin] = None
    last_win_date: Optional[str] = None
    storage: Optional[StorageService] = Field(default=None, exclude=True)

    @classmethod
    def load(cls, storage: Optional[StorageService] = None) -> "UserStats":
        """
        Restore stats from storage, or start fresh.

        Args:
            storage: Persistence collaborator to read from and save to

        Returns:
            A UserStats bound to the given storage
        """
        saved = storage.get(USER_STATS_KEY) if storage is not None else None
        if not saved:
            return cls(storage=storage)

        try:
            stats = cls.model_validate(saved)
        except ValidationError as e:
            logger.warning("Ignoring unreadable saved stats, starting fresh: %s", e)
            return cls(storage=storage)
        stats.storage = storage
        return stats

    def save(self) -> bool:
        if self.storage is None:
            return False
        return self.storage.set(USER_STATS_KEY, self.model_dump(mode="json"))

    def get_high_score(self, category: str, difficulty: str) -> int:
        return self.high_scores.get(stats_key(category, difficulty), 0)

    def get_best_time(self, category: str, difficulty: str) -> Optional[int]:
        return self.best_times.get(stats_key(category, difficulty))

    @property
    def win_rate(self) -> float:
        """Percentage of recorded games that were won, to one decimal."""
        if self.total_games_played == 0:
            return 0.0
        return round(self.wins / self.total_games_played * 100, 1)

    def is_first_win_today(self, today: Optional[date] = None) -> bool:
        """True if no game has been won yet on the given day."""
        today = today or date.today()
        return self.last_win_date != today.isoformat()

    def update_high_score(self, category: str, difficulty: str, score: int) -> bool:
        key = stats_key(category, difficulty)
        if score > self.high_scores.get(key, 0):
            self.high_scores[key] = score
            return True
        return False

    def update_best_time(self, category: str, difficulty: str, seconds: int) -> bool:
        key = stats_key(category, difficulty)
        current = self.best_times.get(key)
        if current is None or seconds < current:
            self.best_times[key] = seconds
            return True
        return False

    def record_game(self, record: GameRecord, today: Optional[date] = None) -> GameSummary:
        """
        Fold a finished game into the lifetime stats and save them.

        High scores are kept for every game; best times, wins and the
        fastest win only count completed games.

        Args:
            record: The game to record
            today: Date of the game (defaults to today)

        Returns:
            Flags for new records plus any achievements earned
        """
        today = today or date.today()
        summary = GameSummary()

        self.total_games_played += 1
        self.total_words_found += record.words_found
        self.total_time_played += record.time_seconds
        self.average_game_time = self.total_time_played // self.total_games_played

        summary.new_high_score = self.update_high_score(record.category, record.difficulty, record.score)

        if record.won:
            self.wins += 1
            self.last_win_date = today.isoformat()
            summary.new_best_time = self.update_best_time(
                record.category, record.difficulty, record.time_seconds
            )
            if self.fastest_win is None or record.time_seconds < self.fastest_win.time:
                self.fastest_win = FastestWin(
                    category=record.category,
                    difficulty=record.difficulty,
                    time=record.time_seconds,
                )

        summary.achievements = check_achievements(record)
        if summary.achievements:
            logger.info("Achievements earned: %s", ", ".join(a.title for a in summary.achievements))

        self.save()
        return summary

    def reset(self) -> None:
        """Clear all stats and records."""
        self.wins = 0
        self.high_scores = {}
        self.best_times = {}
        self.total_games_played = 0
        self.total_words_found = 0
        self.total_time_played = 0
        self.average_game_time = 0
        self.fastest_win = None
        self.last_win_date = None
        self.save()
