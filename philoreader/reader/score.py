"""ScoreAccumulator - Session experience points (XP)."""

from philoreader.schemas import ScoreState


class ScoreAccumulator:
    """Monotonically increasing XP total. Never decremented or reset."""

    def __init__(self, state: ScoreState | None = None):
        self.state = state or ScoreState()

    @property
    def xp(self) -> int:
        return self.state.xp

    def add_xp(self, amount: int) -> int:
        """Add a non-negative amount and return the new total."""
        if amount < 0:
            raise ValueError(f"XP amount must be non-negative, got {amount}")
        self.state.xp += amount
        return self.state.xp
