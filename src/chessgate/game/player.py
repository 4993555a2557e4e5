"""Concrete player implementations and the reference opponent policy."""

from __future__ import annotations

import random
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from chessgate.core.enums import Color
from chessgate.game.interfaces import IPlayer, MoveDelivery, OpponentPolicy

if TYPE_CHECKING:
    from chessgate.core.move import Move

Scheduler = Callable[[Callable[[], None]], None]


def run_now(fn: Callable[[], None]) -> None:
    """Scheduler that runs *fn* immediately."""
    fn()


class RandomPolicy:
    """Uniform random choice among the legal moves."""

    __slots__ = ("_rng",)

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng if rng is not None else random.Random()

    def choose(self, moves: Sequence[Move]) -> Move | None:
        if not moves:
            return None
        return self._rng.choice(list(moves))


class HumanPlayer(IPlayer):
    """A human participant whose moves come from square selection.

    ``request_move`` is a no-op because humans select moves interactively.
    """

    __slots__ = ("_color", "_name")

    def __init__(self, color: Color, name: str = "") -> None:
        self._color = color
        self._name = name or f"Player ({color})"

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return True

    def request_move(self, moves: Sequence[Move], deliver: MoveDelivery) -> None:
        pass  # Human moves arrive via GameController.select_square()

    def cancel(self) -> None:
        pass


class PolicyPlayer(IPlayer):
    """A computer participant that delegates the choice to a policy.

    The choice is made when the move is requested; *scheduler* decides
    when it is handed back (immediately by default, or after a delay via
    :class:`chessgate.game.qt_bridge.DelayedScheduler`).

    Args:
        color: Side the policy plays.
        policy: Object with ``choose(moves) -> Move | None``.
        name: Display name.
        scheduler: ``(callable) -> None`` that runs the delivery.
    """

    __slots__ = ("_color", "_name", "_policy", "_scheduler", "_generation")

    def __init__(
        self,
        color: Color,
        policy: OpponentPolicy | None = None,
        name: str = "Computer",
        scheduler: Scheduler | None = None,
    ) -> None:
        self._color = color
        self._name = name
        self._policy: OpponentPolicy = policy if policy is not None else RandomPolicy()
        self._scheduler: Scheduler = scheduler if scheduler is not None else run_now
        self._generation = 0

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return False

    def request_move(self, moves: Sequence[Move], deliver: MoveDelivery) -> None:
        self._generation += 1
        generation = self._generation
        choice = self._policy.choose(moves)

        def _deliver() -> None:
            if generation != self._generation:
                return  # cancelled or superseded
            deliver(choice)

        self._scheduler(_deliver)

    def cancel(self) -> None:
        self._generation += 1
