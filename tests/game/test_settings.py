"""Tests for GameSettings."""

import pytest

from chessgate.core.enums import Color
from chessgate.game.interfaces import TimeControl
from chessgate.game.settings import GameSettings


class TestGameSettings:
    def test_defaults(self) -> None:
        s = GameSettings()
        assert s.gated_colors == frozenset()
        assert s.authorization_timeout == 15
        assert s.opponent_delay_ms == 600
        assert s.clock_tick_ms == 100
        assert s.time_control.is_unlimited

    def test_gated_colors_normalized(self) -> None:
        s = GameSettings(gated_colors=[Color.WHITE])  # type: ignore[arg-type]
        assert s.gated_colors == frozenset({Color.WHITE})
        assert s.is_gated(Color.WHITE)
        assert not s.is_gated(Color.BLACK)

    def test_custom_time_control(self) -> None:
        s = GameSettings(time_control=TimeControl.blitz_5m())
        assert s.time_control.initial_seconds == 300

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"authorization_timeout": 0},
            {"opponent_delay_ms": -1},
            {"clock_tick_ms": 0},
        ],
    )
    def test_rejects_bad_values(self, kwargs: dict[str, int]) -> None:
        with pytest.raises(ValueError):
            GameSettings(**kwargs)
