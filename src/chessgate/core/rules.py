"""High-level chess rules: check, checkmate, stalemate."""

from __future__ import annotations

from chessgate.core.board import Board
from chessgate.core.enums import Color, GameStatus
from chessgate.core.move_generator import MoveGenerator


class Rules:
    """Static rule-checker that operates on a :class:`Board` and a turn."""

    @staticmethod
    def is_in_check(board: Board, turn: Color) -> bool:
        return MoveGenerator(board).is_in_check(turn)

    @staticmethod
    def is_checkmate(board: Board, turn: Color) -> bool:
        return Rules.status(board, turn) == GameStatus.CHECKMATE

    @staticmethod
    def is_stalemate(board: Board, turn: Color) -> bool:
        return Rules.status(board, turn) == GameStatus.STALEMATE

    @staticmethod
    def status(board: Board, turn: Color) -> GameStatus | None:
        """Status of *turn* on *board*.

        Returns None when either king is missing; callers keep whatever
        status they had.
        """
        if any(board.king_square(color) is None for color in Color):
            return None

        gen = MoveGenerator(board)
        in_check = gen.is_in_check(turn)
        has_legal_moves = gen.has_legal_moves(turn)

        if in_check:
            return GameStatus.CHECK if has_legal_moves else GameStatus.CHECKMATE
        return GameStatus.ONGOING if has_legal_moves else GameStatus.STALEMATE

    @staticmethod
    def winner(status: GameStatus, turn: Color) -> Color | None:
        """The winning side for a board-decided *status*, if any."""
        if status == GameStatus.CHECKMATE:
            return turn.opposite
        return None
