"""Qt timers that feed time-based events into the game layer.

The game layer itself never waits: clocks, oracle countdowns and policy
"thinking" delays are driven from the Qt event loop through these objects.
"""

from __future__ import annotations

import time
from collections.abc import Callable

from PyQt6.QtCore import QObject, QTimer, pyqtSignal, pyqtSlot

from chessgate.core.enums import Color, GameStatus
from chessgate.core.types import Square
from chessgate.game.controller import GameController
from chessgate.game.interfaces import OpponentPolicy, PendingMove, SelectOutcome
from chessgate.game.oracle import Question, QuestionOracle, QuestionSource
from chessgate.game.player import HumanPlayer, PolicyPlayer
from chessgate.game.session import SessionSnapshot
from chessgate.game.settings import GameSettings


class DelayedScheduler:
    """Player scheduler that runs the delivery after *delay_ms* on the event loop."""

    __slots__ = ("_delay_ms",)

    def __init__(self, delay_ms: int) -> None:
        self._delay_ms = max(0, delay_ms)

    @property
    def delay_ms(self) -> int:
        return self._delay_ms

    def __call__(self, fn: Callable[[], None]) -> None:
        QTimer.singleShot(self._delay_ms, fn)


class ClockDriver(QObject):
    """Ticks the controller's clock with wall-clock time while a game runs."""

    time_changed = pyqtSignal(float, float)  # white, black remaining
    flag_fallen = pyqtSignal(int)  # color

    def __init__(self, controller: GameController, interval_ms: int = 100) -> None:
        super().__init__()
        self._controller = controller
        self._last_tick = 0.0
        self._timer = QTimer(self)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self._on_timeout)

    @property
    def is_active(self) -> bool:
        return self._timer.isActive()

    def start(self) -> None:
        self._last_tick = time.monotonic()
        self._timer.start()

    def stop(self) -> None:
        self._timer.stop()

    @pyqtSlot()
    def _on_timeout(self) -> None:
        now = time.monotonic()
        self.advance(now - self._last_tick)
        self._last_tick = now

    def advance(self, seconds: float) -> None:
        """Feed *seconds* into the clock and publish the result."""
        controller = self._controller
        clock = controller.clock
        if clock is None:
            self.stop()
            return

        controller.tick(seconds)
        self.time_changed.emit(
            clock.remaining(Color.WHITE), clock.remaining(Color.BLACK)
        )

        session = controller.session
        if session.is_game_over:
            self.stop()
            if session.expired_color is not None:
                self.flag_fallen.emit(int(session.expired_color))


class OracleTicker(QObject):
    """Counts a :class:`QuestionOracle` down once per second while it waits."""

    question_asked = pyqtSignal(object, object)  # Question, PendingMove
    remaining_changed = pyqtSignal(int)

    def __init__(self, oracle: QuestionOracle, interval_ms: int = 1000) -> None:
        super().__init__()
        self._oracle = oracle
        self._timer = QTimer(self)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self._on_timeout)
        oracle.on_question.append(self._on_question)

    @property
    def is_active(self) -> bool:
        return self._timer.isActive()

    def _on_question(self, question: Question, pending: PendingMove) -> None:
        self.question_asked.emit(question, pending)
        self.remaining_changed.emit(self._oracle.remaining)
        self._timer.start()

    @pyqtSlot()
    def _on_timeout(self) -> None:
        oracle = self._oracle
        if not oracle.is_active:
            self._timer.stop()
            return
        oracle.tick()
        self.remaining_changed.emit(oracle.remaining)
        if not oracle.is_active:
            self._timer.stop()


class GameHost(QObject):
    """A human against a policy opponent, wired to Qt timers from settings.

    Owns the oracle, the controller and the timer objects, so a
    presentation layer only has to forward square clicks and answers.
    """

    game_over = pyqtSignal(object, object)  # GameStatus, winner (Color | None)

    def __init__(
        self,
        source: QuestionSource,
        settings: GameSettings | None = None,
    ) -> None:
        super().__init__()
        self._settings = settings if settings is not None else GameSettings()
        timeout = self._settings.authorization_timeout
        self.oracle = QuestionOracle(source, timeout=timeout)
        self.controller = GameController(self.oracle)
        self.clock_driver = ClockDriver(self.controller, self._settings.clock_tick_ms)
        self.oracle_ticker = OracleTicker(self.oracle)
        self.scheduler = DelayedScheduler(self._settings.opponent_delay_ms)
        self.controller.events.on_game_over.append(self._on_game_over)

    @property
    def settings(self) -> GameSettings:
        return self._settings

    def new_game(
        self,
        human_color: Color = Color.WHITE,
        policy: OpponentPolicy | None = None,
        snapshot: SessionSnapshot | None = None,
    ) -> None:
        human = HumanPlayer(human_color, "You")
        opponent = PolicyPlayer(human_color.opposite, policy, scheduler=self.scheduler)
        players = {human_color: human, human_color.opposite: opponent}

        self.clock_driver.stop()
        self.controller.new_game(
            players[Color.WHITE],
            players[Color.BLACK],
            settings=self._settings,
            snapshot=snapshot,
        )
        if self.controller.clock is not None:
            self.clock_driver.start()

    def select_square(self, sq: Square) -> SelectOutcome:
        return self.controller.select_square(sq)

    def answer(self, index: int) -> bool:
        return self.oracle.answer(index)

    def _on_game_over(self, status: GameStatus, winner: Color | None) -> None:
        self.clock_driver.stop()
        self.game_over.emit(status, winner)
