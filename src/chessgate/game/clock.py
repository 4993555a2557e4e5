"""Tick-driven chess clock with Fischer increment support."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from chessgate.core.enums import Color
from chessgate.game.interfaces import IClock, TimeControl

FlagCallback = Callable[[Color], None]


@dataclass(frozen=True, slots=True)
class ClockSnapshot:
    """Serializable clock state."""

    white_remaining: float
    black_remaining: float
    active_color: Color | None
    is_running: bool


class Clock(IClock):
    """Dual countdown tracking remaining time for both players.

    Time only passes through :meth:`tick`; a host timer (see
    :mod:`chessgate.game.qt_bridge`) feeds it. When the running side hits
    zero the clock stops and every ``on_flag`` listener is called once.
    """

    __slots__ = (
        "_time_control",
        "_remaining",
        "_active_color",
        "_running",
        "_flagged",
        "on_flag",
    )

    def __init__(self, time_control: TimeControl) -> None:
        self._time_control = time_control
        self._remaining: dict[Color, float] = {
            Color.WHITE: time_control.initial_seconds,
            Color.BLACK: time_control.initial_seconds,
        }
        self._active_color: Color | None = None
        self._running: bool = False
        self._flagged: Color | None = None
        self.on_flag: list[FlagCallback] = []

    # ── IClock implementation ────────────────────────────────────────────

    def start(self, color: Color) -> None:
        if self._flagged is not None:
            return
        self._active_color = color
        self._running = True

    def stop(self) -> None:
        self._running = False

    def switch(self) -> None:
        """Hand the running clock to the other player."""
        if self._active_color is None or self._flagged is not None:
            return
        self._active_color = self._active_color.opposite

    def tick(self, seconds: float) -> None:
        if not self._running or self._active_color is None or seconds <= 0:
            return
        color = self._active_color
        self._remaining[color] = max(0.0, self._remaining[color] - seconds)
        if self._remaining[color] <= 0.0:
            self._flagged = color
            self._running = False
            for cb in list(self.on_flag):
                cb(color)

    def remaining(self, color: Color) -> float:
        return max(0.0, self._remaining[color])

    def is_flag_fallen(self, color: Color) -> bool:
        return self.remaining(color) <= 0.0

    def add_increment(self, color: Color) -> None:
        if self._flagged is not None:
            return
        self._remaining[color] += self._time_control.increment_seconds

    # ── Extra helpers ────────────────────────────────────────────────────

    @property
    def is_unlimited(self) -> bool:
        return self._time_control.is_unlimited

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def active_color(self) -> Color | None:
        return self._active_color

    @property
    def flagged(self) -> Color | None:
        """The side whose time ran out, if any."""
        return self._flagged

    def set_remaining(self, color: Color, seconds: float) -> None:
        """Manually override remaining time (for testing / host override)."""
        self._remaining[color] = seconds

    def snapshot(self) -> ClockSnapshot:
        return ClockSnapshot(
            white_remaining=self.remaining(Color.WHITE),
            black_remaining=self.remaining(Color.BLACK),
            active_color=self._active_color,
            is_running=self._running,
        )

    def restore(self, snapshot: ClockSnapshot) -> None:
        """Restore clock state previously captured with :meth:`snapshot`."""
        self._remaining[Color.WHITE] = snapshot.white_remaining
        self._remaining[Color.BLACK] = snapshot.black_remaining
        self._active_color = snapshot.active_color
        self._running = snapshot.is_running and snapshot.active_color is not None
        self._flagged = None
