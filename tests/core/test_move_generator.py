"""Tests for MoveGenerator: per-piece movement, castling and the legality filter."""

import pytest

from chessgate.core.board import Board
from chessgate.core.enums import Color, PieceType
from chessgate.core.move_generator import MoveGenerator
from chessgate.core.notation import board_from_placement
from chessgate.core.piece import Piece
from chessgate.core.types import (
    A1, A3, B1, B3, C1, C2, C3, C4, D1, D2, D3, D4, D5, D6, D7, D8,
    E1, E2, E3, E4, E5, E6, E7, E8, F1, F2, F3, F4, G1, G3, G8, C8,
    H1, H2, B2, B4, G2,
    Square,
)


def _pseudo(board: Board, sq: Square) -> frozenset[Square]:
    return MoveGenerator(board).pseudo_legal_destinations(sq)


def _legal(board: Board, sq: Square) -> frozenset[Square]:
    return MoveGenerator(board).legal_destinations(sq)


# ── Pawns ────────────────────────────────────────────────────────────────────


class TestPawnMoves:
    def test_initial_single_and_double_step(self) -> None:
        assert _pseudo(Board.initial(), E2) == {E3, E4}

    def test_black_pawn_moves_toward_white(self) -> None:
        assert _pseudo(Board.initial(), E7) == {E6, E5}

    def test_blocked_pawn_has_no_moves(self) -> None:
        board = board_from_placement("4k3/8/8/8/8/4p3/4P3/4K3")
        assert _pseudo(board, E2) == frozenset()

    def test_double_step_needs_both_squares_empty(self) -> None:
        board = board_from_placement("4k3/8/8/8/4n3/8/4P3/4K3")
        assert _pseudo(board, E2) == {E3}

    def test_moved_pawn_single_step_only(self) -> None:
        board = board_from_placement("4k3/8/8/8/8/4P3/8/4K3")
        assert board[E3].has_moved
        assert _pseudo(board, E3) == {E4}

    def test_moved_flag_blocks_double_step(self) -> None:
        board = Board.initial().with_piece(E2, Piece(Color.WHITE, PieceType.PAWN, True))
        assert _pseudo(board, E2) == {E3}

    def test_diagonal_capture_enemy_only(self) -> None:
        board = board_from_placement("4k3/8/8/3p1P2/4P3/8/8/4K3")
        assert _pseudo(board, E4) == {E5, D5}

    def test_black_pawn_captures_downward(self) -> None:
        board = board_from_placement("4k3/8/8/3p1P2/4P3/8/8/4K3")
        assert _pseudo(board, D5) == {D4, E4}

    def test_no_diagonal_move_onto_empty_square(self) -> None:
        board = board_from_placement("4k3/8/8/8/8/8/4P3/4K3")
        assert D3 not in _pseudo(board, E2)
        assert F3 not in _pseudo(board, E2)


# ── Pieces ───────────────────────────────────────────────────────────────────


class TestPieceMoves:
    def test_rook_stops_at_blockers(self) -> None:
        board = board_from_placement("4k3/8/8/8/1p1R2P1/8/8/4K3")
        dests = _pseudo(board, D4)
        assert dests == {C4, B4, E4, F4, D5, D6, D7, D8, D3, D2, D1}

    def test_rook_boxed_in_at_start(self) -> None:
        assert _pseudo(Board.initial(), A1) == frozenset()

    def test_bishop_boxed_in_at_start(self) -> None:
        assert _pseudo(Board.initial(), C1) == frozenset()

    def test_knight_from_start(self) -> None:
        assert _pseudo(Board.initial(), B1) == {A3, C3}

    def test_knight_in_corner(self) -> None:
        board = board_from_placement("4k3/8/8/8/8/8/8/N3K3")
        assert _pseudo(board, A1) == {B3, C2}

    def test_queen_on_open_board(self) -> None:
        board = board_from_placement("4k3/8/8/8/3Q4/8/8/4K3")
        assert len(_pseudo(board, D4)) == 27

    def test_king_in_corner(self) -> None:
        board = board_from_placement("4k3/8/8/8/8/8/8/7K")
        assert _pseudo(board, H1) == {G1, G2, H2}

    def test_king_cannot_take_own_piece(self) -> None:
        board = board_from_placement("4k3/8/8/8/8/8/3P4/4K3")
        assert D2 not in _pseudo(board, E1)

    def test_empty_square_has_no_moves(self) -> None:
        assert _pseudo(Board.initial(), E4) == frozenset()
        assert _legal(Board.initial(), E4) == frozenset()


# ── Castling ─────────────────────────────────────────────────────────────────

CASTLING = "r3k2r/8/8/8/8/8/8/R3K2R"


class TestCastling:
    def test_both_sides_available(self) -> None:
        board = board_from_placement(CASTLING)
        assert _legal(board, E1) == {D1, D2, E2, F2, F1, G1, C1}

    def test_black_both_sides_available(self) -> None:
        board = board_from_placement(CASTLING)
        assert {G8, C8} <= _legal(board, E8)

    def test_moved_king_cannot_castle(self) -> None:
        board = board_from_placement(CASTLING)
        board = board.with_piece(E1, board[E1].moved())
        dests = _legal(board, E1)
        assert G1 not in dests and C1 not in dests

    def test_moved_rook_blocks_its_side_only(self) -> None:
        board = board_from_placement(CASTLING)
        board = board.with_piece(H1, board[H1].moved())
        dests = _legal(board, E1)
        assert G1 not in dests
        assert C1 in dests

    def test_missing_rook(self) -> None:
        board = board_from_placement(CASTLING).with_piece(A1, None)
        dests = _legal(board, E1)
        assert C1 not in dests
        assert G1 in dests

    def test_enemy_rook_in_corner(self) -> None:
        board = board_from_placement(CASTLING).with_piece(
            H1, Piece(Color.BLACK, PieceType.ROOK)
        )
        assert G1 not in _pseudo(board, E1)

    def test_piece_between_blocks(self) -> None:
        board = board_from_placement(CASTLING)
        board = board.with_piece(G1, Piece(Color.WHITE, PieceType.KNIGHT))
        assert G1 not in _legal(board, E1)

    def test_piece_on_b_file_blocks_queenside(self) -> None:
        board = board_from_placement(CASTLING)
        board = board.with_piece(B1, Piece(Color.WHITE, PieceType.KNIGHT))
        dests = _legal(board, E1)
        assert C1 not in dests
        assert G1 in dests

    def test_attacked_pass_through_square(self) -> None:
        board = board_from_placement(CASTLING)
        board = board.with_piece(F3, Piece(Color.BLACK, PieceType.ROOK))
        dests = _legal(board, E1)
        assert G1 not in dests
        assert C1 in dests

    def test_attacked_destination(self) -> None:
        board = board_from_placement(CASTLING)
        board = board.with_piece(G3, Piece(Color.BLACK, PieceType.ROOK))
        assert G1 not in _legal(board, E1)

    def test_king_in_check_cannot_castle(self) -> None:
        board = board_from_placement(CASTLING)
        board = board.with_piece(E3, Piece(Color.BLACK, PieceType.ROOK))
        dests = _pseudo(board, E1)
        assert G1 not in dests and C1 not in dests

    def test_attacked_b_file_does_not_matter(self) -> None:
        board = board_from_placement(CASTLING)
        board = board.with_piece(B3, Piece(Color.BLACK, PieceType.ROOK))
        assert C1 in _legal(board, E1)

    def test_restoring_preconditions_restores_castling(self) -> None:
        original = board_from_placement(CASTLING)
        blocked = original.with_piece(F1, Piece(Color.WHITE, PieceType.BISHOP))
        assert G1 not in _legal(blocked, E1)
        restored = blocked.with_piece(F1, None)
        assert G1 in _legal(restored, E1)

    def test_castling_field_marks_pieces_moved(self) -> None:
        board = board_from_placement(CASTLING + " Kq")
        assert _legal(board, E1) >= {G1}
        assert C1 not in _legal(board, E1)
        assert C8 in _legal(board, E8)
        assert G8 not in _legal(board, E8)


# ── Legality filter ──────────────────────────────────────────────────────────

POSITIONS = [
    "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR",
    "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R",
    "4k3/4r3/8/8/8/8/4B3/4K3",
    "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR",
    "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8",
]


class TestLegalityFilter:
    def test_pinned_bishop_cannot_move(self) -> None:
        board = board_from_placement("4k3/4r3/8/8/8/8/4B3/4K3")
        assert _pseudo(board, E2)
        assert _legal(board, E2) == frozenset()

    def test_king_must_leave_check(self) -> None:
        board = board_from_placement("4k3/8/8/8/8/8/8/r3K3")
        assert _legal(board, E1) == {D2, E2, F2}

    def test_king_cannot_capture_defended_piece(self) -> None:
        board = board_from_placement("4k3/8/8/8/8/8/3q4/3rK3")
        assert D2 not in _legal(board, E1)

    def test_twenty_opening_moves(self) -> None:
        gen = MoveGenerator(Board.initial())
        assert len(gen.legal_moves(Color.WHITE)) == 20
        assert len(gen.legal_moves(Color.BLACK)) == 20

    def test_missing_king_does_not_crash(self) -> None:
        board = board_from_placement("4k3/8/8/8/8/8/8/R7")
        assert _legal(board, A1) == _pseudo(board, A1)
        assert not MoveGenerator(board).is_in_check(Color.WHITE)

    def test_source_board_untouched(self) -> None:
        board = board_from_placement("4k3/4r3/8/8/8/8/4B3/4K3")
        before = repr(board)
        _legal(board, E2)
        _legal(board, E1)
        assert repr(board) == before

    @pytest.mark.parametrize("placement", POSITIONS)
    def test_closure(self, placement: str) -> None:
        board = board_from_placement(placement)
        gen = MoveGenerator(board)
        for color in Color:
            for sq in board.pieces(color):
                legal = gen.legal_destinations(sq)
                for dest in gen.pseudo_legal_destinations(sq):
                    after = MoveGenerator(board.with_move(sq, dest))
                    assert after.is_in_check(color) == (dest not in legal), (
                        f"{placement}: {sq}->{dest}"
                    )
