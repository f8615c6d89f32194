"""
Round and challenge state machine.

A round goes idle -> active -> complete. Starting a round draws words from a
category, places them into a fresh grid and starts the timer; the round is
complete once every placed word has been found. Completing a round reports
its score to the challenge (when one is running) and to the player stats.

Collaborators (categories, timer, storage, stats, challenge, card deck and
random source) are passed in explicitly so tests can control all of them.
"""

import logging
import random
import threading
from datetime import date
from typing import Any, Callable, Dict, List, Optional, Sequence

from ..errors import EmptyWordSourceError
from ..grid import (
    Coordinate,
    Grid,
    PlacementResult,
    WordPlacement,
    check_selection,
    place_words,
    selection_path,
    snap_endpoint,
)
from ..grid.selection import as_coordinate
from .categories import CategorySource
from .challenge import Challenge
from .deck import CardDeck, CardResult
from .models import (
    EventType,
    Hint,
    Modifier,
    ModifierOutcome,
    RoundEvent,
    RoundStatus,
    ScoreContext,
    ScoreMultiplier,
    TimeSlow,
    WildCard,
    WordFoundResult,
    grid_size_for,
    word_count_for,
)
from .scoring import (
    BASE_WORD_POINTS,
    COMBO_WINDOW,
    MIN_WORD_POINTS,
    apply_active_modifiers,
    is_live,
    score,
)
from .stats import GameRecord, GameSummary, UserStats
from .storage import StorageService
from .timer import GameTimer


logger = logging.getLogger(__name__)

RoundListener = Callable[[RoundEvent], None]


class RoundStateMachine:
    """
    Runs rounds and challenges for a single player.

    Attributes:
        status: "idle", "active" or "complete"
        category: Category of the current round
        difficulty: Difficulty of the current round
        grid: Letter grid of the current round
        words: Words actually placed in the grid, in display order
        found_words: Words found so far, in the order they were found
        score: Points earned this round
        combo: Current streak of quick finds
        attempts: Selections submitted this round
        active_modifiers: Score and timer modifiers currently in play
    """

    def __init__(
        self,
        categories: Optional[CategorySource] = None,
        timer: Optional[GameTimer] = None,
        storage: Optional[StorageService] = None,
        stats: Optional[UserStats] = None,
        challenge: Optional[Challenge] = None,
        rng: Optional[random.Random] = None,
        deck: Optional[CardDeck] = None,
        today: Optional[date] = None,
    ):
        self.categories = categories or CategorySource()
        self.timer = timer or GameTimer()
        self.storage = storage
        self.stats = stats if stats is not None else UserStats.load(storage)
        self.challenge = challenge if challenge is not None else Challenge(storage=storage)
        self.rng = rng or random.Random()
        self.deck = deck
        self.today = today

        self._listeners: List[RoundListener] = []
        self._selection_lock = threading.Lock()
        self._reset_round()

    def _reset_round(self) -> None:
        self.status: RoundStatus = "idle"
        self.category: Optional[str] = None
        self.difficulty: Optional[str] = None
        self.placement: Optional[PlacementResult] = None
        self.grid: Grid = []
        self.words: List[str] = []
        self.found_words: List[str] = []
        self.score = 0
        self.combo = 0
        self.max_combo = 0
        self.attempts = 0
        self.hints_used = False
        self.first_win_today = False
        self.last_word_time = 0
        self.active_modifiers: List[Modifier] = []
        self.current_selection: List[Coordinate] = []
        self.last_summary: Optional[GameSummary] = None

    # Observers

    def subscribe(self, listener: RoundListener) -> Callable[[], None]:
        """
        Register a callback for round events.

        Returns:
            A function that removes the callback again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, event_type: EventType, word: Optional[str] = None, points: int = 0) -> None:
        event = RoundEvent(type=event_type, word=word, points=points, state=self.get_state())
        for listener in list(self._listeners):
            listener(event)

    # Properties

    @property
    def is_active(self) -> bool:
        return self.status == "active"

    @property
    def is_paused(self) -> bool:
        return self.is_active and not self.timer.is_running

    @property
    def total_words(self) -> int:
        return len(self.words)

    @property
    def remaining_words(self) -> List[str]:
        return [w for w in self.words if w not in self.found_words]

    @property
    def progress(self) -> int:
        """Percentage of words found."""
        if not self.words:
            return 0
        return int(len(self.found_words) / len(self.words) * 100 + 0.5)

    # Round lifecycle

    def start_round(self, category: str, difficulty: str = "medium") -> PlacementResult:
        """
        Start a new round, replacing any round in progress.

        Args:
            category: Category to draw words from
            difficulty: Selects grid size, word count and score multiplier

        Returns:
            The placement result; its placed words are the round's word list

        Raises:
            EmptyWordSourceError: If the category has no words, or none could be placed
        """
        requested = self.categories.get_random_words(category, word_count_for(difficulty), self.rng)
        if not requested:
            raise EmptyWordSourceError(category)

        placement = place_words(
            requested,
            grid_size_for(difficulty),
            rng=self.rng,
            category_words=self.categories.get_category_words(category),
        )

        # Display order follows what was actually placed
        words = list(dict.fromkeys(placement.placed_words))
        if not words:
            raise EmptyWordSourceError(category, f"None of the words from {category} fit the grid")

        if placement.failed_words:
            logger.info(
                "Round starting with %d/%d words (failed: %s)",
                len(words), len(requested), ", ".join(placement.failed_words),
            )

        self._reset_round()
        self.category = category
        self.difficulty = difficulty
        self.placement = placement
        self.grid = placement.grid
        self.words = words
        self.first_win_today = self.stats.is_first_win_today(self.today)

        if self.deck is not None:
            self.deck.deal()

        self.status = "active"
        self.timer.reset()
        self.timer.start()

        logger.info("Round started: %s/%s with %d words", category, difficulty, len(words))
        self._emit("round_started")
        return placement

    def pause(self) -> bool:
        """Stop the timer without resetting it. Returns False if there is nothing to pause."""
        if not self.is_active or not self.timer.is_running:
            return False
        self.timer.stop()
        return True

    def resume(self) -> bool:
        if not self.is_paused:
            return False
        self.timer.start()
        return True

    def cancel(self) -> None:
        """Leave the current round. Nothing from it is kept or recorded."""
        if self.status == "idle":
            return
        self.timer.reset()
        self._reset_round()
        logger.info("Round cancelled")
        self._emit("round_cancelled")

    def tick(self, seconds: int = 1) -> int:
        """
        Advance the round clock and drop expired modifiers.

        Live time slow modifiers scale the tick rate.

        Returns:
            Elapsed seconds after the tick
        """
        now = self.timer.elapsed_seconds
        rate = apply_active_modifiers(1.0, self.active_modifiers, target="timer", now=now)
        elapsed = self.timer.tick(seconds, rate=rate)

        self.active_modifiers = [m for m in self.active_modifiers if is_live(m, elapsed)]
        if self.deck is not None:
            self.deck.expire(elapsed)
        return elapsed

    # Finding words

    def _result(self, found: bool, reason: str, word: Optional[str] = None, points: int = 0) -> WordFoundResult:
        return WordFoundResult(
            found=found,
            reason=reason,
            word=word,
            points=points,
            total_found=len(self.found_words),
            total_words=len(self.words),
            complete=self.status == "complete",
        )

    def word_found(self, word: str) -> WordFoundResult:
        """
        Mark a word as found and score it.

        Unknown words and words already found are rejected without changing
        the score.

        Args:
            word: Word from the round's word list (case-insensitive)

        Returns:
            Whether the word counted, the points it earned and round progress
        """
        if not self.is_active or self.is_paused:
            return self._result(False, "inactive", word)

        canonical = word.strip().upper()
        if canonical not in self.words:
            return self._result(False, "not_in_list", canonical)
        if canonical in self.found_words:
            return self._result(False, "duplicate", canonical)

        return self._mark_found(canonical)

    def _mark_found(self, word: str) -> WordFoundResult:
        now = self.timer.elapsed_seconds
        time_since_last_word = now - self.last_word_time
        self.last_word_time = now

        context = ScoreContext(
            time_since_last_word=time_since_last_word,
            difficulty=self.difficulty,
            combo_count=self.combo,
            hints_used=self.hints_used,
            is_first_win_today=self.first_win_today,
        )
        points = score(BASE_WORD_POINTS, context)
        points = apply_active_modifiers(points, self.active_modifiers, target="score", now=now)
        points = max(MIN_WORD_POINTS, points)

        if time_since_last_word < COMBO_WINDOW:
            self.combo += 1
        else:
            self.combo = 0
        self.max_combo = max(self.max_combo, self.combo)

        self.found_words.append(word)
        self.score += points
        logger.debug("Found %s for %d points (%d/%d)", word, points, len(self.found_words), len(self.words))

        if self.deck is not None:
            self.deck.reward(self.rng)

        if len(self.found_words) == len(self.words):
            self.status = "complete"

        self._emit("word_found", word=word, points=points)
        if self.status == "complete":
            self._on_complete()

        return self._result(True, "found", word, points)

    def _on_complete(self) -> None:
        self.timer.stop()
        elapsed = self.timer.elapsed_seconds
        logger.info("Round complete: %d points in %s", self.score, self.timer.formatted_time)

        challenge_finished = False
        if self.challenge.is_active and not self.challenge.state.completed:
            state = self.challenge.complete_round(self.score)
            challenge_finished = state.completed

        self.last_summary = self.stats.record_game(
            GameRecord(
                category=self.category,
                difficulty=self.difficulty,
                score=self.score,
                time_seconds=elapsed,
                words_found=len(self.found_words),
                total_words=len(self.words),
                attempts=self.attempts,
                max_combo=self.max_combo,
                won=True,
            ),
            today=self.today,
        )

        self._emit("round_completed", points=self.score)
        if challenge_finished:
            self._emit("challenge_completed", points=self.challenge.state.cumulative_score)

    # Selections

    def update_selection(self, start: Any, current: Any) -> List[Coordinate]:
        """
        Track a drag in progress, snapped to the nearest straight line.

        Args:
            start: Cell where the drag began
            current: Cell under the pointer

        Returns:
            The cells the selection currently covers
        """
        if not self.is_active:
            self.current_selection = []
            return []

        start = as_coordinate(start)
        end = snap_endpoint(start, as_coordinate(current), len(self.grid))
        self.current_selection = selection_path(start, end)
        return self.current_selection

    def clear_selection(self) -> None:
        self.current_selection = []

    def submit_selection(self, selection: Optional[Sequence[Any]] = None) -> WordFoundResult:
        """
        Check a selection against the grid and mark the matched word found.

        Only one selection is resolved at a time; a selection submitted while
        another is still being resolved is rejected as busy.

        Args:
            selection: Cells of the selection; defaults to the tracked drag

        Returns:
            Same as word_found, with reason "no_match" when no word was selected
        """
        if not self._selection_lock.acquire(blocking=False):
            return self._result(False, "busy")

        try:
            cells = list(selection) if selection is not None else list(self.current_selection)
            self.current_selection = []

            if not self.is_active or self.is_paused:
                return self._result(False, "inactive")

            self.attempts += 1
            outcome = check_selection(self.grid, cells, self.words)
            if outcome.word is None:
                logger.debug("Selection rejected (%s): %r", outcome.status, outcome.candidate)
                return self._result(False, "no_match")

            return self.word_found(outcome.word)
        finally:
            self._selection_lock.release()

    # Hints and modifiers

    def use_hint(self) -> Optional[WordPlacement]:
        """
        Reveal where a random unfound word is. Forfeits the no-hints bonus.

        Returns:
            The placement of an unfound word, or None if there is none
        """
        remaining = self.remaining_words
        if not self.is_active or self.is_paused or not remaining:
            return None

        self.hints_used = True
        word = self.rng.choice(remaining)
        return self.placement.placement_for(word)

    def activate_modifier(self, modifier: Modifier) -> ModifierOutcome:
        """
        Put a modifier into play.

        Score multipliers and time slows stay active until they expire. A hint
        reveals a word, a wild card finds one.

        Args:
            modifier: The modifier to apply

        Returns:
            What the modifier did
        """
        if not self.is_active or self.is_paused:
            return ModifierOutcome(applied=False, modifier=modifier)

        if isinstance(modifier, (ScoreMultiplier, TimeSlow)):
            self.active_modifiers.append(modifier)
            return ModifierOutcome(applied=True, modifier=modifier)

        if isinstance(modifier, Hint):
            hint = self.use_hint()
            return ModifierOutcome(applied=hint is not None, modifier=modifier, hint=hint)

        if isinstance(modifier, WildCard):
            remaining = self.remaining_words
            if not remaining:
                return ModifierOutcome(applied=False, modifier=modifier)
            found = self._mark_found(self.rng.choice(remaining))
            return ModifierOutcome(applied=True, modifier=modifier, found=found)

        return ModifierOutcome(applied=False, modifier=modifier)

    def draw_card(self) -> Optional[CardResult]:
        """Draw from the card deck, if the round has one."""
        if self.deck is None or not self.is_active or self.is_paused:
            return None
        return self.deck.draw_card(self.timer.elapsed_seconds)

    def play_card(self, card_id: str) -> Optional[ModifierOutcome]:
        """
        Play a card from the hand and activate its modifier.

        Returns:
            The modifier outcome, or None if the card could not be played
        """
        if self.deck is None or not self.is_active or self.is_paused:
            return None

        result = self.deck.play_card(card_id, self.timer.elapsed_seconds)
        if not result.success:
            logger.debug("Could not play card %s: %s", card_id, result.reason)
            return None
        return self.activate_modifier(result.modifier)

    # Challenge

    def start_challenge(self, category: str, difficulty: str = "medium") -> PlacementResult:
        """
        Start a ten-round challenge and its first round.

        Returns:
            The placement result of the first round
        """
        self.challenge.init_challenge(category, difficulty)
        return self.start_round(category, difficulty)

    def next_challenge_round(self) -> Optional[PlacementResult]:
        """
        Advance the challenge and start its next round.

        A round that was cancelled before it was scored is played again
        rather than skipped.

        Returns:
            The new round's placement, or None if a round is still in
            progress or the challenge is over
        """
        if not self.challenge.is_active or self.status == "active":
            return None
        if self.challenge.round_scored and not self.challenge.next_round():
            return None

        state = self.challenge.state
        return self.start_round(state.category, state.difficulty)

    def exit_challenge(self) -> None:
        """Abandon the challenge and the round in progress."""
        self.challenge.exit_challenge()
        self.cancel()

    def resume_challenge(self) -> Optional[PlacementResult]:
        """
        Continue a challenge saved by an earlier session.

        Returns:
            The placement of the restored round, or None if nothing was saved
        """
        if not self.challenge.load_state():
            return None

        # A finished round was already scored; continue with the next one
        if self.challenge.round_scored and not self.challenge.next_round():
            return None
        state = self.challenge.state
        return self.start_round(state.category, state.difficulty)

    # State

    def get_state(self) -> Dict:
        """
        Get the current round state as a dictionary.

        Returns:
            Dictionary containing grid, words, score, timing and challenge state
        """
        return {
            "status": self.status,
            "category": self.category,
            "difficulty": self.difficulty,
            "grid": [list(row) for row in self.grid],
            "words": list(self.words),
            "found_words": list(self.found_words),
            "total_found": len(self.found_words),
            "total_words": len(self.words),
            "progress": self.progress,
            "score": self.score,
            "combo": self.combo,
            "attempts": self.attempts,
            "hints_used": self.hints_used,
            "elapsed_seconds": self.timer.elapsed_seconds,
            "formatted_time": self.timer.formatted_time,
            "is_paused": self.is_paused,
            "active_modifiers": [m.model_dump() for m in self.active_modifiers],
            "challenge": self.challenge.get_state() if self.challenge.is_active else None,
        }
