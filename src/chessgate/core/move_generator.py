"""Pseudo-legal and legal move generation over a board snapshot."""

from __future__ import annotations

from chessgate.core.attacks import (
    KING_OFFSETS,
    KNIGHT_OFFSETS,
    SLIDER_DIRS,
    is_square_attacked,
    ray,
)
from chessgate.core.board import Board
from chessgate.core.enums import Color, PieceType
from chessgate.core.move import Move
from chessgate.core.piece import Piece
from chessgate.core.types import Square


class MoveGenerator:
    """Stateless move generation for one :class:`Board` snapshot.

    Legality is checked by building a derived board per candidate and
    asking whether the mover's king is attacked on it; the board handed in
    is never modified.
    """

    __slots__ = ("_board",)

    def __init__(self, board: Board) -> None:
        self._board = board

    # -- Public API ---------------------------------------------------------

    def legal_destinations(self, sq: Square) -> frozenset[Square]:
        """Pseudo-legal destinations of the piece on *sq* that do not leave
        its own king attacked."""
        piece = self._board.piece_at(sq)
        if piece is None:
            return frozenset()
        return frozenset(
            to_sq
            for to_sq in self.pseudo_legal_destinations(sq)
            if not self.leaves_king_attacked(sq, to_sq)
        )

    def legal_moves(self, color: Color) -> list[Move]:
        """Every legal move for *color*, grouped by origin square."""
        moves: list[Move] = []
        for from_sq in self._board.pieces(color):
            for to_sq in sorted(self.legal_destinations(from_sq)):
                moves.append(Move(from_sq, to_sq))
        return moves

    def has_legal_moves(self, color: Color) -> bool:
        return any(self.legal_destinations(sq) for sq in self._board.pieces(color))

    def leaves_king_attacked(self, from_sq: Square, to_sq: Square) -> bool:
        """Would moving *from_sq* -> *to_sq* leave the mover's king attacked?

        A board without a king for the mover counts as "not attacked".
        """
        piece = self._board.piece_at(from_sq)
        if piece is None:
            return False
        after = self._board.with_move(from_sq, to_sq)
        king_sq = after.king_square(piece.color)
        if king_sq is None:
            return False
        return is_square_attacked(after, king_sq, piece.color.opposite)

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent? False if it has none."""
        king_sq = self._board.king_square(color)
        if king_sq is None:
            return False
        return is_square_attacked(self._board, king_sq, color.opposite)

    def pseudo_legal_destinations(self, sq: Square) -> frozenset[Square]:
        """Destinations by movement rules only (own king safety ignored)."""
        piece = self._board.piece_at(sq)
        if piece is None:
            return frozenset()

        targets: set[Square] = set()
        pt = piece.piece_type
        if pt == PieceType.PAWN:
            self._gen_pawn(sq, piece, targets)
        elif pt == PieceType.KNIGHT:
            self._gen_steps(sq, piece.color, KNIGHT_OFFSETS, targets)
        elif pt == PieceType.KING:
            self._gen_steps(sq, piece.color, KING_OFFSETS, targets)
            self._gen_castling(sq, piece, targets)
        else:
            self._gen_sliding(sq, piece.color, SLIDER_DIRS[pt], targets)
        return frozenset(targets)

    # -- Piece-specific generators (private) -------------------------------

    def _gen_pawn(self, sq: Square, piece: Piece, targets: set[Square]) -> None:
        board = self._board
        step = piece.color.forward

        one_step = sq.offset(step, 0)
        if one_step.is_valid and board.is_empty(one_step):
            targets.add(one_step)
            if not piece.has_moved:
                two_step = sq.offset(2 * step, 0)
                if two_step.is_valid and board.is_empty(two_step):
                    targets.add(two_step)

        for df in (-1, 1):
            cap_sq = sq.offset(step, df)
            target = board.piece_at(cap_sq)
            if target is not None and target.color != piece.color:
                targets.add(cap_sq)

    def _gen_steps(
        self,
        sq: Square,
        color: Color,
        offsets: tuple[tuple[int, int], ...],
        targets: set[Square],
    ) -> None:
        board = self._board
        for dr, df in offsets:
            to_sq = sq.offset(dr, df)
            if not to_sq.is_valid:
                continue
            target = board.piece_at(to_sq)
            if target is None or target.color != color:
                targets.add(to_sq)

    def _gen_sliding(
        self,
        sq: Square,
        color: Color,
        dirs: tuple[tuple[int, int], ...],
        targets: set[Square],
    ) -> None:
        board = self._board
        for dr, df in dirs:
            for to_sq in ray(board, sq, dr, df):
                target = board.piece_at(to_sq)
                if target is None or target.color != color:
                    targets.add(to_sq)

    def _gen_castling(self, king_sq: Square, king: Piece, targets: set[Square]) -> None:
        if king.has_moved:
            return

        board = self._board
        opponent = king.color.opposite
        if is_square_attacked(board, king_sq, opponent):
            return

        for rook_file, direction in ((7, 1), (0, -1)):
            rook = board.piece_at(Square(king_sq.rank, rook_file))
            if rook is None or not rook.is_a(king.color, PieceType.ROOK):
                continue
            if rook.has_moved:
                continue

            lo, hi = sorted((king_sq.file, rook_file))
            between = (Square(king_sq.rank, f) for f in range(lo + 1, hi))
            if not all(board.is_empty(s) for s in between):
                continue

            passed = king_sq.offset(0, direction)
            dest = king_sq.offset(0, 2 * direction)
            if not dest.is_valid or dest.file == rook_file:
                continue
            if is_square_attacked(board, passed, opponent):
                continue
            if is_square_attacked(board, dest, opponent):
                continue
            targets.add(dest)
