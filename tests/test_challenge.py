"""Test suite for the ten-round challenge aggregator."""

import logging

import pytest

from wordsearch.game import Challenge, ChallengeState, StorageService


def play_rounds(challenge: Challenge, scores):
    for i, round_score in enumerate(scores):
        challenge.complete_round(round_score)
        if i < len(scores) - 1:
            assert challenge.next_round() is True


class TestInitChallenge:
    @pytest.mark.parametrize("difficulty,target", [
        ("baby", 3000), ("easy", 5000), ("medium", 10000), ("hard", 15000), ("unknown", 10000),
    ])
    def test_target_from_difficulty(self, difficulty, target):
        """Target score follows the difficulty, medium for unknown ones."""
        challenge = Challenge()
        state = challenge.init_challenge("animals", difficulty)
        assert state.target_score == target

    def test_fresh_state(self):
        """A new challenge starts at round one with nothing scored."""
        challenge = Challenge()
        challenge.init_challenge("animals", "easy")
        state = challenge.state
        assert state.is_active is True
        assert state.current_round == 1
        assert state.total_rounds == 10
        assert state.cumulative_score == 0
        assert state.round_scores == []
        assert state.started_at is not None

    def test_restart_discards_previous(self):
        """Starting again throws away the old scores."""
        challenge = Challenge()
        challenge.init_challenge("animals", "easy")
        challenge.complete_round(700)
        challenge.init_challenge("fruits", "hard")
        assert challenge.state.round_scores == []
        assert challenge.state.category == "fruits"


class TestChallengeArithmetic:
    def test_exact_target_is_success(self):
        """Ten rounds of 500 on easy reach the 5000 target exactly."""
        challenge = Challenge()
        challenge.init_challenge("animals", "easy")

        play_rounds(challenge, [500] * 10)

        state = challenge.state
        assert state.completed is True
        assert state.cumulative_score == 5000
        assert state.success is True

    def test_below_target_fails(self):
        """One point short of the target is a failed challenge."""
        challenge = Challenge()
        challenge.init_challenge("animals", "easy")
        play_rounds(challenge, [499] * 10)
        assert challenge.state.completed is True
        assert challenge.state.success is False

    def test_success_only_decided_after_last_round(self):
        """Passing the target early does not end the challenge."""
        challenge = Challenge()
        challenge.init_challenge("animals", "easy")
        play_rounds(challenge, [6000])
        assert challenge.state.completed is False
        assert challenge.state.success is False
        assert challenge.rounds_remaining == 9

    def test_no_round_after_completion(self):
        """A finished challenge neither advances nor takes more scores."""
        challenge = Challenge()
        challenge.init_challenge("animals", "easy")
        play_rounds(challenge, [500] * 10)

        assert challenge.next_round() is False
        challenge.complete_round(1000)
        assert challenge.state.cumulative_score == 5000
        assert challenge.state.current_round == 10

    def test_round_scored(self):
        """The current round counts as scored only after complete_round."""
        challenge = Challenge()
        challenge.init_challenge("animals", "easy")
        assert challenge.round_scored is False

        challenge.complete_round(400)
        assert challenge.round_scored is True

        challenge.next_round()
        assert challenge.round_scored is False

    def test_progress(self):
        """Progress is the fraction of the target reached."""
        challenge = Challenge()
        challenge.init_challenge("animals", "easy")
        challenge.complete_round(2500)
        assert challenge.progress == 0.5

    def test_scores_ignored_without_challenge(self):
        """Scores reported with no challenge running are dropped."""
        challenge = Challenge()
        challenge.complete_round(500)
        assert challenge.state.round_scores == []


class TestChallengePersistence:
    def test_save_and_load(self):
        """A saved challenge is restored with its scores and target."""
        storage = StorageService()
        challenge = Challenge(storage=storage)
        challenge.init_challenge("animals", "medium")
        challenge.complete_round(1200)

        restored = Challenge(storage=storage)
        assert restored.load_state() is True
        assert restored.state.round_scores == [1200]
        assert restored.state.target_score == 10000

    def test_completed_challenge_not_resumed(self):
        """Finished challenges stay finished."""
        storage = StorageService()
        challenge = Challenge(storage=storage)
        challenge.init_challenge("animals", "easy")
        play_rounds(challenge, [500] * 10)

        assert Challenge(storage=storage).load_state() is False

    def test_exit_clears_saved_state(self):
        """Exiting resets the state and removes it from storage."""
        storage = StorageService()
        challenge = Challenge(storage=storage)
        challenge.init_challenge("animals", "easy")
        challenge.exit_challenge()

        assert challenge.state == ChallengeState()
        assert storage.get("challenge_state") is None

    def test_without_storage(self):
        """Without storage nothing is saved or loaded."""
        challenge = Challenge()
        challenge.init_challenge("animals", "easy")
        assert challenge.save_state() is False
        assert challenge.load_state() is False

    @pytest.mark.parametrize("saved", [
        {"is_active": True, "current_round": "first"},
        ["not", "a", "challenge"],
        "garbage",
    ])
    def test_unreadable_saved_state(self, saved, caplog):
        """Saved data that does not validate is ignored with a warning."""
        storage = StorageService()
        storage.set("challenge_state", saved)
        challenge = Challenge(storage=storage)

        with caplog.at_level(logging.WARNING):
            assert challenge.load_state() is False

        assert challenge.state == ChallengeState()
        assert "Ignoring unreadable saved challenge" in caplog.text
