from wordsearch.game import GameTimer


class TestGameTimer:
    def test_ticks_only_while_running(self):
        """Ticks only count while the timer runs."""
        timer = GameTimer()
        timer.tick()
        assert timer.elapsed_seconds == 0

        timer.start()
        timer.tick()
        timer.tick(2)
        assert timer.elapsed_seconds == 3

    def test_stop_keeps_elapsed(self):
        """Stopping keeps the elapsed time."""
        timer = GameTimer()
        timer.start()
        timer.tick(4)
        timer.stop()
        timer.tick(10)
        assert timer.elapsed_seconds == 4
        assert timer.is_running is False

    def test_reset(self):
        """Reset clears time and stops the timer."""
        timer = GameTimer()
        timer.start()
        timer.tick(4)
        timer.reset()
        assert timer.elapsed_seconds == 0
        assert timer.is_running is False

    def test_half_rate(self):
        """Half speed advances one second every two ticks."""
        timer = GameTimer()
        timer.start()
        assert timer.tick(rate=0.5) == 0
        assert timer.tick(rate=0.5) == 1
        assert timer.tick(rate=0.5) == 1

    def test_formatted_time(self):
        """Elapsed time is shown as MM:SS."""
        timer = GameTimer(elapsed_seconds=125)
        assert timer.formatted_time == "02:05"
        assert GameTimer().formatted_time == "00:00"
