"""Abstract interfaces for the game layer.

Follows Dependency Inversion: the high-level GameController depends on
these ABCs, not on concrete player/clock/oracle implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import IntEnum, auto
from typing import TYPE_CHECKING, Protocol

from chessgate.core.enums import Color

if TYPE_CHECKING:
    from chessgate.core.move import Move


# ── Outcomes ─────────────────────────────────────────────────────────────────


class SelectOutcome(IntEnum):
    """What a square selection did to the session."""

    IGNORED = auto()
    SELECTED = auto()
    DESELECTED = auto()
    COMMITTED = auto()
    PENDING = auto()  # gated move awaiting authorization


class Authorization(IntEnum):
    """Answer from an authorization oracle for a pending move."""

    AUTHORIZED = auto()
    DENIED = auto()


@dataclass(frozen=True, slots=True)
class PendingMove:
    """A gated move waiting for authorization."""

    request_id: int
    move: Move
    color: Color


MoveDelivery = Callable[["Move | None"], None]
AuthorizationCallback = Callable[[int, Authorization], None]  # request_id, outcome


# ── Time control presets ─────────────────────────────────────────────────────


class TimeControl:
    """Immutable time-control definition.

    Args:
        initial_seconds: Starting time per player.
        increment_seconds: Per-move increment (Fischer).
    """

    __slots__ = ("initial_seconds", "increment_seconds")

    def __init__(self, initial_seconds: float, increment_seconds: float = 0.0) -> None:
        if initial_seconds <= 0:
            raise ValueError(f"initial_seconds must be positive, got {initial_seconds}")
        if increment_seconds < 0:
            raise ValueError(
                f"increment_seconds must not be negative, got {increment_seconds}"
            )
        self.initial_seconds = initial_seconds
        self.increment_seconds = increment_seconds

    # Common presets
    @classmethod
    def blitz_3m(cls) -> TimeControl:
        return cls(180, 0)

    @classmethod
    def blitz_5m(cls) -> TimeControl:
        return cls(300, 0)

    @classmethod
    def rapid_10m(cls) -> TimeControl:
        return cls(600, 0)

    @classmethod
    def unlimited(cls) -> TimeControl:
        """No time limit."""
        return cls(float("inf"), 0)

    @property
    def is_unlimited(self) -> bool:
        return self.initial_seconds == float("inf")

    def __repr__(self) -> str:
        if self.is_unlimited:
            return "TimeControl(unlimited)"
        mins = self.initial_seconds / 60
        if self.increment_seconds:
            return f"TimeControl({mins:.0f}m+{self.increment_seconds:.0f}s)"
        return f"TimeControl({mins:.0f}m)"


# ── Abstract interfaces ─────────────────────────────────────────────────────


class OpponentPolicy(Protocol):
    """Chooses one move out of the legal moves offered."""

    def choose(self, moves: Sequence[Move]) -> Move | None: ...


class IPlayer(ABC):
    """Interface for a game participant (human or policy-driven)."""

    @property
    @abstractmethod
    def color(self) -> Color: ...

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def is_human(self) -> bool: ...

    @abstractmethod
    def request_move(self, moves: Sequence[Move], deliver: MoveDelivery) -> None:
        """Begin the move-selection process.

        For humans this is a no-op (they interact via square selection).
        Policy players call *deliver* exactly once, possibly later.
        """

    @abstractmethod
    def cancel(self) -> None:
        """Drop an outstanding move request (no-op for humans)."""


class IAuthorizationOracle(ABC):
    """Decides whether a pending gated move may be committed."""

    @abstractmethod
    def request(self, pending: PendingMove, respond: AuthorizationCallback) -> None:
        """Start deciding *pending*; call *respond* once, possibly later."""

    @abstractmethod
    def cancel(self) -> None:
        """Abandon the outstanding request without responding."""


class IClock(ABC):
    """Interface for a tick-driven chess clock."""

    @abstractmethod
    def start(self, color: Color) -> None:
        """Start the clock for *color*."""

    @abstractmethod
    def stop(self) -> None:
        """Pause the running clock."""

    @abstractmethod
    def switch(self) -> None:
        """Switch to the other player's clock."""

    @abstractmethod
    def tick(self, seconds: float) -> None:
        """Take *seconds* off the running side's time."""

    @abstractmethod
    def remaining(self, color: Color) -> float:
        """Seconds remaining for *color*."""

    @abstractmethod
    def is_flag_fallen(self, color: Color) -> bool:
        """Has *color* run out of time?"""

    @abstractmethod
    def add_increment(self, color: Color) -> None:
        """Add Fischer increment after a move."""
