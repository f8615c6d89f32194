"""
Ten-round challenge aggregator.

A challenge plays the same category and difficulty ten times in a row and
adds up the round scores. Success is only decided after the last round.
"""

import logging
from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .models import ChallengeState, TOTAL_CHALLENGE_ROUNDS, target_score_for
from .storage import StorageService


logger = logging.getLogger(__name__)

CHALLENGE_STATE_KEY = "challenge_state"


class Challenge(BaseModel):
    """
    Tracks progress through a challenge.

    Attributes:
        state: Current challenge snapshot
        storage: Optional persistence collaborator for saving/restoring state
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    state: ChallengeState = Field(default_factory=ChallengeState)
    storage: Optional[StorageService] = None

    @property
    def is_active(self) -> bool:
        return self.state.is_active

    @property
    def round_scored(self) -> bool:
        """True once the current round has a recorded score."""
        return len(self.state.round_scores) >= self.state.current_round

    @property
    def rounds_remaining(self) -> int:
        """Rounds left to play, counting the current one if not yet scored."""
        return max(0, self.state.total_rounds - len(self.state.round_scores))

    @property
    def progress(self) -> float:
        """Fraction of the target score reached so far (0.0 - 1.0)."""
        if self.state.target_score <= 0:
            return 1.0
        return min(1.0, self.state.cumulative_score / self.state.target_score)

    def init_challenge(self, category: str, difficulty: str) -> ChallengeState:
        """
        Start a new challenge, discarding any previous one.

        Args:
            category: Category every round draws from
            difficulty: Difficulty of every round, also selects the target score

        Returns:
            The fresh challenge state
        """
        self.state = ChallengeState(
            is_active=True,
            current_round=1,
            total_rounds=TOTAL_CHALLENGE_ROUNDS,
            target_score=target_score_for(difficulty),
            category=category,
            difficulty=difficulty,
            started_at=datetime.now().isoformat(),
        )
        logger.info(
            "Challenge started: %s/%s, target %d",
            category, difficulty, self.state.target_score,
        )
        self.save_state()
        return self.state

    def complete_round(self, round_score: int) -> ChallengeState:
        """
        Record the score of the current round.

        After the final round the challenge is marked completed and success
        is decided against the target (reaching it exactly counts).

        Args:
            round_score: Total points earned in the round

        Returns:
            The updated challenge state
        """
        if not self.state.is_active or self.state.completed:
            logger.debug("Ignoring round score %d, no challenge in progress", round_score)
            return self.state

        self.state.round_scores.append(round_score)
        self.state.cumulative_score += round_score

        if self.state.current_round >= self.state.total_rounds:
            self.state.completed = True
            self.state.success = self.state.cumulative_score >= self.state.target_score
            logger.info(
                "Challenge finished: %d/%d (%s)",
                self.state.cumulative_score,
                self.state.target_score,
                "success" if self.state.success else "failed",
            )

        self.save_state()
        return self.state

    def next_round(self) -> bool:
        """
        Move to the next round.

        Returns:
            True if there is another round to play, False once completed
        """
        if not self.state.is_active or self.state.completed:
            return False
        if self.state.current_round >= self.state.total_rounds:
            return False

        self.state.current_round += 1
        self.save_state()
        return True

    def exit_challenge(self) -> None:
        """Abandon the challenge and forget its saved state."""
        self.state = ChallengeState()
        if self.storage is not None:
            self.storage.remove(CHALLENGE_STATE_KEY)

    def save_state(self) -> bool:
        """Persist the current state. Returns False when only held in memory."""
        if self.storage is None:
            return False
        return self.storage.set(CHALLENGE_STATE_KEY, self.state.model_dump())

    def load_state(self) -> bool:
        """
        Restore a previously saved challenge.

        Returns:
            True if a saved, unfinished challenge was restored
        """
        if self.storage is None:
            return False

        saved = self.storage.get(CHALLENGE_STATE_KEY)
        if not saved:
            return False

        try:
            state = ChallengeState.model_validate(saved)
        except ValidationError as e:
            logger.warning("Ignoring unreadable saved challenge: %s", e)
            return False
        if not state.is_active or state.completed:
            return False

        self.state = state
        logger.info("Resumed challenge at round %d", state.current_round)
        return True

    def get_state(self) -> Dict:
        """Challenge snapshot plus derived progress values."""
        return {
            **self.state.model_dump(),
            "rounds_remaining": self.rounds_remaining,
            "progress": self.progress,
        }
