"""GameSettings — per-game configuration."""

from __future__ import annotations

from dataclasses import dataclass, field

from chessgate.core.enums import Color
from chessgate.game.interfaces import TimeControl

DEFAULT_AUTHORIZATION_TIMEOUT = 15


@dataclass
class GameSettings:
    """All configurable knobs for one game."""

    # Gate: colors whose moves need authorization before they are applied
    gated_colors: frozenset[Color] = frozenset()
    authorization_timeout: int = DEFAULT_AUTHORIZATION_TIMEOUT  # countdown units

    # Opponent policy "thinking" delay before its move is delivered
    opponent_delay_ms: int = 600

    # Clock
    time_control: TimeControl = field(default_factory=TimeControl.unlimited)
    clock_tick_ms: int = 100

    def __post_init__(self) -> None:
        self.gated_colors = frozenset(self.gated_colors)
        if self.authorization_timeout <= 0:
            raise ValueError(
                "authorization_timeout must be positive, "
                f"got {self.authorization_timeout}"
            )
        if self.opponent_delay_ms < 0:
            raise ValueError(
                f"opponent_delay_ms must not be negative, got {self.opponent_delay_ms}"
            )
        if self.clock_tick_ms <= 0:
            raise ValueError(
                f"clock_tick_ms must be positive, got {self.clock_tick_ms}"
            )

    def is_gated(self, color: Color) -> bool:
        return color in self.gated_colors
