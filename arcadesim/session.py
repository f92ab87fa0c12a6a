"""Session state machine.

A session is ACTIVE until a terminal signal moves it to OVER. OVER is
terminal: only reset() brings the session back to ACTIVE with a zero score.
"""
from enum import Enum
from typing import Optional


class SessionState(Enum):
    """Session states.

    States:
        ACTIVE: Ticks advance the simulation and input is accepted
        OVER: Score frozen, input ignored until reset
    """
    ACTIVE = "active"
    OVER = "over"


class Session:
    """Score and running/over flag for one play session."""

    def __init__(self):
        self._state = SessionState.ACTIVE
        self._score = 0
        self._reason: Optional[str] = None
        self._final_score: Optional[int] = None
        self._best_score = 0

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_over(self) -> bool:
        return self._state == SessionState.OVER

    @property
    def score(self) -> int:
        return self._score

    @property
    def reason(self) -> Optional[str]:
        """Why the session ended, None while active."""
        return self._reason

    @property
    def final_score(self) -> Optional[int]:
        """Score at the moment the session ended, None while active."""
        return self._final_score

    @property
    def best_score(self) -> int:
        """Highest final score since the session object was created."""
        return self._best_score

    def add_score(self, delta: int) -> int:
        """Add points while active.

        Args:
            delta: Non-negative points to add

        Returns:
            The current score (unchanged while over)

        Raises:
            ValueError: If delta is negative
        """
        if delta < 0:
            raise ValueError(f"Score delta must be non-negative, got {delta}")
        if self._state == SessionState.ACTIVE:
            self._score += delta
        return self._score

    def end(self, reason: str) -> bool:
        """Move to OVER.

        Returns:
            True if this call ended the session, False if it was already over
        """
        if self._state == SessionState.OVER:
            return False
        self._state = SessionState.OVER
        self._reason = reason
        self._final_score = self._score
        self._best_score = max(self._best_score, self._score)
        return True

    def reset(self) -> None:
        """Start a fresh session. Safe to call in any state."""
        self._state = SessionState.ACTIVE
        self._score = 0
        self._reason = None
        self._final_score = None

    def restore(self, score: int) -> None:
        """Return to an earlier active point with the given score."""
        self.reset()
        self._score = score

    def __repr__(self) -> str:
        return f"Session(state={self._state.value}, score={self._score})"
