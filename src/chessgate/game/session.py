"""GameSession — board, turn, status and the move-commit protocol.

The session is the only owner of the board and the captured-pieces log.
All changes go through :meth:`GameSession.select_square`,
:meth:`GameSession.submit_move`, :meth:`GameSession.commit`,
:meth:`GameSession.resolve_authorization` and
:meth:`GameSession.expire_time`; none of them raise for bad input, they
report a no-op instead.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from chessgate.core.board import Board
from chessgate.core.enums import Color, GameStatus, PieceType
from chessgate.core.move import Move
from chessgate.core.move_generator import MoveGenerator
from chessgate.core.piece import Piece
from chessgate.core.rules import Rules
from chessgate.core.types import Square
from chessgate.game.interfaces import Authorization, PendingMove, SelectOutcome

_LOGGER = logging.getLogger(__name__)

_PROMOTION_RANK: dict[Color, int] = {Color.WHITE: 0, Color.BLACK: 7}

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[Move, "GameSession"], None]
StatusCallback = Callable[[GameStatus], None]
PendingCallback = Callable[[PendingMove], None]
ResolvedCallback = Callable[[PendingMove, Authorization], None]
ForfeitCallback = Callable[[Color], None]  # color that lost its turn
GameOverCallback = Callable[[GameStatus, "Color | None"], None]  # status, winner


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_status_changed: list[StatusCallback] = field(default_factory=list)
    on_authorization_requested: list[PendingCallback] = field(default_factory=list)
    on_authorization_resolved: list[ResolvedCallback] = field(default_factory=list)
    on_turn_forfeited: list[ForfeitCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class SessionSnapshot:
    """Everything needed to rebuild a session."""

    board: Board
    turn: Color
    captured: tuple[Piece, ...] = ()


# ── Session ──────────────────────────────────────────────────────────────────


class GameSession:
    """One game in progress: board, side to move, status, captures, selection
    and at most one gated move awaiting authorization."""

    __slots__ = (
        "_board",
        "_turn",
        "_status",
        "_captured",
        "_selected",
        "_selected_moves",
        "_pending",
        "_next_request_id",
        "_ply",
        "_expired",
        "_gated_colors",
        "events",
    )

    def __init__(
        self,
        board: Board | None = None,
        turn: Color = Color.WHITE,
        captured: Iterable[Piece] = (),
        gated_colors: Iterable[Color] = (),
        events: GameEvents | None = None,
    ) -> None:
        self._board = board if board is not None else Board.initial()
        self._turn = turn
        self._captured: list[Piece] = list(captured)
        self._selected: Square | None = None
        self._selected_moves: frozenset[Square] = frozenset()
        self._pending: PendingMove | None = None
        self._next_request_id = 1
        self._ply = 0
        self._expired: Color | None = None
        self._gated_colors = frozenset(gated_colors)
        self.events = events if events is not None else GameEvents()
        self._status = Rules.status(self._board, self._turn) or GameStatus.ONGOING

    @classmethod
    def from_snapshot(
        cls,
        snapshot: SessionSnapshot,
        gated_colors: Iterable[Color] = (),
        events: GameEvents | None = None,
    ) -> GameSession:
        return cls(
            board=snapshot.board,
            turn=snapshot.turn,
            captured=snapshot.captured,
            gated_colors=gated_colors,
            events=events,
        )

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(self._board, self._turn, tuple(self._captured))

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def board(self) -> Board:
        return self._board

    @property
    def turn(self) -> Color:
        return self._turn

    @property
    def status(self) -> GameStatus:
        return self._status

    @property
    def captured(self) -> tuple[Piece, ...]:
        """Captured pieces in capture order."""
        return tuple(self._captured)

    @property
    def selected(self) -> Square | None:
        return self._selected

    @property
    def selected_moves(self) -> frozenset[Square]:
        """Cached legal destinations of the selected square."""
        return self._selected_moves

    @property
    def pending(self) -> PendingMove | None:
        return self._pending

    @property
    def ply(self) -> int:
        """Number of turn changes so far (commits and forfeits)."""
        return self._ply

    @property
    def expired_color(self) -> Color | None:
        return self._expired

    @property
    def is_game_over(self) -> bool:
        return self._expired is not None or self._status.is_terminal

    @property
    def winner(self) -> Color | None:
        if self._expired is not None:
            return self._expired.opposite
        return Rules.winner(self._status, self._turn)

    def is_gated(self, color: Color) -> bool:
        return color in self._gated_colors

    def legal_moves(self, sq: Square) -> frozenset[Square]:
        """Legal destinations from *sq* for the side to move (for highlighting)."""
        if self.is_game_over or not sq.is_valid:
            return frozenset()
        piece = self._board.piece_at(sq)
        if piece is None or piece.color != self._turn:
            return frozenset()
        return MoveGenerator(self._board).legal_destinations(sq)

    def all_legal_moves(self) -> list[Move]:
        """Every legal move for the side to move."""
        if self.is_game_over:
            return []
        return MoveGenerator(self._board).legal_moves(self._turn)

    # ── Selection ────────────────────────────────────────────────────────

    def select_square(self, sq: Square) -> SelectOutcome:
        """Select a piece, deselect it, or move it to a highlighted square."""
        if self.is_game_over or self._pending is not None or not sq.is_valid:
            return SelectOutcome.IGNORED

        if self._selected is not None:
            if sq in self._selected_moves:
                return self._route(Move(self._selected, sq))
            if sq == self._selected:
                self._clear_selection()
                return SelectOutcome.DESELECTED

        piece = self._board.piece_at(sq)
        if piece is None or piece.color != self._turn:
            return SelectOutcome.IGNORED

        self._selected = sq
        self._selected_moves = MoveGenerator(self._board).legal_destinations(sq)
        return SelectOutcome.SELECTED

    def submit_move(self, move: Move) -> SelectOutcome:
        """Validate *move* for the side to move, then commit or gate it."""
        if self.is_game_over or self._pending is not None:
            return SelectOutcome.IGNORED
        if move.to_sq not in self.legal_moves(move.from_sq):
            return SelectOutcome.IGNORED
        return self._route(move)

    # ── Commit protocol ──────────────────────────────────────────────────

    def commit(self, move: Move) -> bool:
        """Apply *move* with all side effects and advance the turn.

        The move is trusted to be legal; the only precondition is a piece
        on ``move.from_sq``. Returns False (and changes nothing) otherwise,
        after the game ended, or while a gated move is pending.
        """
        if self.is_game_over or self._pending is not None:
            return False
        return self._apply(move)

    def resolve_authorization(self, request_id: int, outcome: Authorization) -> bool:
        """Deliver the oracle's answer for the pending move.

        Answers for another request, with nothing pending, or after the game
        ended are ignored and return False.
        """
        pending = self._pending
        if pending is None or pending.request_id != request_id or self.is_game_over:
            _LOGGER.debug(
                "Ignoring stale %s for request %s", outcome.name, request_id
            )
            return False

        self._pending = None
        for cb in self.events.on_authorization_resolved:
            cb(pending, outcome)

        if outcome == Authorization.AUTHORIZED:
            _LOGGER.debug("Move %s authorized", pending.move)
            self._apply(pending.move)
        else:
            _LOGGER.debug("Move %s denied, %s forfeits", pending.move, pending.color)
            self._forfeit(pending.color)
        return True

    def expire_time(self, color: Color) -> bool:
        """*color* ran out of time: the opponent wins immediately."""
        if self.is_game_over:
            _LOGGER.debug("Ignoring time expiry for %s after game over", color)
            return False

        self._expired = color
        self._pending = None
        self._clear_selection()
        self._set_status(GameStatus.CHECKMATE)
        return True

    # ── Internal helpers ─────────────────────────────────────────────────

    def _route(self, move: Move) -> SelectOutcome:
        if self.is_gated(self._turn):
            pending = PendingMove(self._next_request_id, move, self._turn)
            self._next_request_id += 1
            self._pending = pending
            _LOGGER.debug(
                "Move %s awaiting authorization (request %s)", move, pending.request_id
            )
            for cb in self.events.on_authorization_requested:
                cb(pending)
            return SelectOutcome.PENDING

        if not self._apply(move):
            return SelectOutcome.IGNORED
        return SelectOutcome.COMMITTED

    def _apply(self, move: Move) -> bool:
        from_sq, to_sq = move.from_sq, move.to_sq
        board = self._board
        piece = board.piece_at(from_sq)
        if piece is None or not to_sq.is_valid or from_sq == to_sq:
            return False

        # Castling: the king travels two files, the rook lands beside it.
        if piece.piece_type == PieceType.KING and abs(from_sq.file - to_sq.file) > 1:
            kingside = to_sq.file > from_sq.file
            rook_from = Square(from_sq.rank, 7 if kingside else 0)
            rook_to = from_sq.offset(0, 1 if kingside else -1)
            rook = board.piece_at(rook_from)
            if rook is not None:
                board = board.with_move(rook_from, rook_to)
                board = board.with_piece(rook_to, rook.moved())

        captured = board.piece_at(to_sq)

        placed = piece.moved()
        if (
            placed.piece_type == PieceType.PAWN
            and to_sq.rank == _PROMOTION_RANK[placed.color]
        ):
            placed = Piece(placed.color, PieceType.QUEEN, has_moved=True)

        self._board = board.with_move(from_sq, to_sq).with_piece(to_sq, placed)
        if captured is not None:
            self._captured.append(captured)

        self._clear_selection()
        self._turn = self._turn.opposite
        self._ply += 1

        for cb in self.events.on_move:
            cb(move, self)
        self._refresh_status()
        return True

    def _forfeit(self, color: Color) -> None:
        self._clear_selection()
        self._turn = self._turn.opposite
        self._ply += 1
        for cb in self.events.on_turn_forfeited:
            cb(color)
        self._refresh_status()

    def _refresh_status(self) -> None:
        if self._expired is not None:
            return
        status = Rules.status(self._board, self._turn)
        if status is None:
            _LOGGER.debug("King missing, status left at %s", self._status.name)
            return
        self._set_status(status)

    def _set_status(self, status: GameStatus) -> None:
        if status != self._status:
            self._status = status
            for cb in self.events.on_status_changed:
                cb(status)
        if self.is_game_over:
            winner = self.winner
            _LOGGER.info("Game over: %s, winner %s", status.name, winner)
            for game_over_cb in self.events.on_game_over:
                game_over_cb(status, winner)

    def _clear_selection(self) -> None:
        self._selected = None
        self._selected_moves = frozenset()
