from pydantic import BaseModel, Field


class GameTimer(BaseModel):
    """
    Per-round elapsed time in whole seconds.

    The timer does not own a clock. Whatever drives the game (a UI loop, the
    CLI, a test) calls tick() once per second; ticks while stopped are ignored.
    Stopping keeps the elapsed time, reset() clears it.

    Attributes:
        elapsed_seconds: Whole seconds counted while running
        is_running: Whether ticks currently count
    """

    elapsed_seconds: int = Field(default=0, ge=0)
    is_running: bool = False
    _progress: float = 0.0

    def start(self) -> None:
        """Start counting ticks (no-op if already running)."""
        self.is_running = True

    def stop(self) -> None:
        """Stop counting ticks without clearing elapsed time."""
        self.is_running = False

    def reset(self) -> None:
        """Stop the timer and clear elapsed time."""
        self.stop()
        self.elapsed_seconds = 0
        self._progress = 0.0

    def tick(self, seconds: int = 1, rate: float = 1.0) -> int:
        """
        Advance the timer.

        Args:
            seconds: Number of one-second ticks to apply
            rate: Speed factor; 0.5 advances one second every two ticks

        Returns:
            The elapsed seconds after the tick
        """
        if not self.is_running or seconds <= 0:
            return self.elapsed_seconds

        self._progress += seconds * rate
        whole = int(self._progress)
        if whole > 0:
            self.elapsed_seconds += whole
            self._progress -= whole
        return self.elapsed_seconds

    @property
    def formatted_time(self) -> str:
        """Elapsed time as MM:SS."""
        minutes, seconds = divmod(self.elapsed_seconds, 60)
        return f"{minutes:02d}:{seconds:02d}"
