"""GameController — the central orchestrator of a chess game.

Coordinates: players, clock, authorization oracle and the GameSession.
Listeners subscribe to :attr:`GameController.events`, which survives
``new_game`` even though the session itself is replaced.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable

from chessgate.core.enums import Color
from chessgate.core.move import Move
from chessgate.core.types import Square
from chessgate.game.clock import Clock
from chessgate.game.interfaces import (
    Authorization,
    IAuthorizationOracle,
    IPlayer,
    SelectOutcome,
)
from chessgate.game.session import GameEvents, GameSession, SessionSnapshot
from chessgate.game.settings import GameSettings

_LOGGER = logging.getLogger(__name__)


class GameController:
    """Orchestrates a full game: routes selections and policy moves into the
    session, sends gated moves to the oracle, runs the clock and prompts
    whoever moves next.

    Thread-safety: methods are designed to be called from a single thread
    (the Qt event loop). Delayed inputs (policy moves, oracle answers,
    clock ticks) are stamped on request and dropped if the game has moved
    on by the time they arrive.
    """

    __slots__ = (
        "_session",
        "_players",
        "_clock",
        "_oracle",
        "_settings",
        "_game_id",
        "_deliveries",
        "_draining",
        "events",
    )

    def __init__(self, oracle: IAuthorizationOracle | None = None) -> None:
        self.events = GameEvents()
        self._settings = GameSettings()
        self._session = GameSession(events=self.events)
        self._players: dict[Color, IPlayer] = {}
        self._clock: Clock | None = None
        self._oracle = oracle
        self._game_id = 0
        self._deliveries: deque[Callable[[], None]] = deque()
        self._draining = False

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def session(self) -> GameSession:
        return self._session

    @property
    def clock(self) -> Clock | None:
        return self._clock

    @property
    def oracle(self) -> IAuthorizationOracle | None:
        return self._oracle

    @property
    def settings(self) -> GameSettings:
        return self._settings

    @property
    def current_player(self) -> IPlayer | None:
        return self._players.get(self._session.turn)

    def player(self, color: Color) -> IPlayer | None:
        return self._players.get(color)

    # ── Game lifecycle ───────────────────────────────────────────────────

    def new_game(
        self,
        white: IPlayer,
        black: IPlayer,
        settings: GameSettings | None = None,
        snapshot: SessionSnapshot | None = None,
    ) -> None:
        """Throw away the current game and start a fresh one."""
        settings = settings if settings is not None else GameSettings()
        if settings.gated_colors and self._oracle is None:
            raise ValueError("Gated moves need an authorization oracle")

        self._shut_down()
        self._game_id += 1
        self._players = {Color.WHITE: white, Color.BLACK: black}
        self._settings = settings

        if settings.time_control.is_unlimited:
            self._clock = None
        else:
            self._clock = Clock(settings.time_control)
            self._clock.on_flag.append(self._on_flag)

        if snapshot is not None:
            self._session = GameSession.from_snapshot(
                snapshot, gated_colors=settings.gated_colors, events=self.events
            )
        else:
            self._session = GameSession(
                gated_colors=settings.gated_colors, events=self.events
            )

        _LOGGER.debug("New game %s: %s vs %s", self._game_id, white.name, black.name)
        self._prompt_current_player()

    # ── Inputs ───────────────────────────────────────────────────────────

    def select_square(self, sq: Square) -> SelectOutcome:
        """Square click from the presentation layer (human turns only)."""
        cp = self.current_player
        if cp is not None and not cp.is_human:
            return SelectOutcome.IGNORED
        mover = self._session.turn
        outcome = self._session.select_square(sq)
        self._after_outcome(outcome, mover)
        return outcome

    def submit_move(self, move: Move) -> bool:
        """Submit a whole move. Returns True if it was committed or gated."""
        mover = self._session.turn
        outcome = self._session.submit_move(move)
        self._after_outcome(outcome, mover)
        return outcome in (SelectOutcome.COMMITTED, SelectOutcome.PENDING)

    def legal_moves(self, sq: Square) -> frozenset[Square]:
        return self._session.legal_moves(sq)

    def resolve_authorization(self, request_id: int, outcome: Authorization) -> bool:
        """Oracle answer for the pending move; stale answers are ignored."""
        mover = self._session.turn
        if not self._session.resolve_authorization(request_id, outcome):
            return False
        self._after_turn_change(mover, moved=outcome == Authorization.AUTHORIZED)
        return True

    def tick(self, seconds: float) -> None:
        """Let *seconds* pass on the running clock."""
        if self._clock is None or self._session.is_game_over:
            return
        self._clock.tick(seconds)

    def expire_time(self, color: Color) -> bool:
        """*color*'s time ran out. Ignored once the game is over."""
        if not self._session.expire_time(color):
            return False
        self._shut_down()
        return True

    # ── Internal helpers ─────────────────────────────────────────────────

    def _after_outcome(self, outcome: SelectOutcome, mover: Color) -> None:
        if outcome == SelectOutcome.PENDING:
            pending = self._session.pending
            if pending is not None and self._oracle is not None:
                self._oracle.request(pending, self.resolve_authorization)
        elif outcome == SelectOutcome.COMMITTED:
            self._after_turn_change(mover, moved=True)

    def _after_turn_change(self, mover: Color, *, moved: bool) -> None:
        if self._session.is_game_over:
            self._shut_down()
            return

        if self._clock is not None:
            if moved:
                self._clock.add_increment(mover)
            self._clock.switch()

        self._prompt_current_player()

    def _prompt_current_player(self) -> None:
        """Ask the side to move for a move."""
        session = self._session
        if session.is_game_over:
            return
        cp = self.current_player
        if cp is None:
            return

        if self._clock is not None and not self._clock.is_running:
            self._clock.start(session.turn)

        if not cp.is_human:
            game_id, ply = self._game_id, session.ply
            cp.request_move(
                session.all_legal_moves(),
                lambda move: self._queue_policy_move(game_id, ply, move),
            )

    def _queue_policy_move(self, game_id: int, ply: int, move: Move | None) -> None:
        """Policy deliveries run one after another from a single loop.

        A player that answers inside ``request_move`` lands here while an
        outer call is still draining; its move is picked up by that loop
        instead of nesting another turn on the stack.
        """
        self._deliveries.append(lambda: self._on_policy_move(game_id, ply, move))
        if self._draining:
            return
        self._draining = True
        try:
            while self._deliveries:
                self._deliveries.popleft()()
        finally:
            self._draining = False

    def _on_policy_move(self, game_id: int, ply: int, move: Move | None) -> None:
        session = self._session
        if (
            move is None
            or game_id != self._game_id
            or ply != session.ply
            or session.is_game_over
            or session.pending is not None
        ):
            _LOGGER.debug("Dropping policy move %s requested at ply %s", move, ply)
            return
        self.submit_move(move)

    def _on_flag(self, color: Color) -> None:
        self.expire_time(color)

    def _shut_down(self) -> None:
        """Stop everything that could still deliver input to this game."""
        if self._clock is not None:
            self._clock.stop()
        if self._oracle is not None:
            self._oracle.cancel()
        for player in self._players.values():
            player.cancel()
