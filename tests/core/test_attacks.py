"""Tests for attack detection."""

import pytest

from chessgate.core.attacks import (
    attacks_from,
    is_square_attacked,
    is_square_attacked_by_scan,
    ray,
)
from chessgate.core.board import Board
from chessgate.core.enums import Color
from chessgate.core.notation import board_from_placement
from chessgate.core.types import (
    A8, B8, D3, D4, D5, D8, E3, E4, E5, F4, F5, F6, H4,
    all_squares,
)


class TestPawnAttacks:
    def test_white_pawn_attacks_forward_diagonals(self) -> None:
        board = board_from_placement("4k3/8/8/8/4P3/8/8/4K3")
        assert attacks_from(board, E4) == {D5, F5}
        assert is_square_attacked(board, D5, Color.WHITE)
        assert is_square_attacked(board, F5, Color.WHITE)

    def test_white_pawn_does_not_attack_behind(self) -> None:
        board = board_from_placement("4k3/8/8/8/4P3/8/8/4K3")
        assert not is_square_attacked(board, D3, Color.WHITE)

    def test_pawn_does_not_attack_square_ahead(self) -> None:
        board = board_from_placement("4k3/8/8/8/4P3/8/8/4K3")
        assert not is_square_attacked(board, E5, Color.WHITE)

    def test_black_pawn_attacks_downward(self) -> None:
        board = board_from_placement("4k3/8/8/4p3/8/8/8/4K3")
        assert attacks_from(board, E5) == {D4, F4}
        assert is_square_attacked(board, D4, Color.BLACK)
        assert not is_square_attacked(board, F6, Color.BLACK)

    def test_pawn_on_edge_attacks_one_square(self) -> None:
        board = board_from_placement("4k3/P7/8/8/8/8/8/4K3")
        assert is_square_attacked(board, B8, Color.WHITE)
        assert not is_square_attacked(board, A8, Color.WHITE)


class TestSliders:
    def test_ray_includes_first_blocker(self) -> None:
        board = board_from_placement("4k3/8/8/8/3R1p2/8/8/4K3")
        assert ray(board, D4, 0, 1) == [E4, F4]

    def test_ray_to_edge(self) -> None:
        board = board_from_placement("4k3/8/8/8/3R4/8/8/4K3")
        assert ray(board, D4, 0, 1)[-1] == H4

    def test_blocked_rook_does_not_attack_beyond(self) -> None:
        board = board_from_placement("3rk3/8/8/3p4/8/8/8/4K3")
        assert is_square_attacked(board, D5, Color.BLACK)
        assert not is_square_attacked(board, D4, Color.BLACK)

    def test_queen_diagonal(self) -> None:
        board = board_from_placement("4k3/8/8/8/8/8/8/q3K3")
        assert is_square_attacked(board, D4, Color.BLACK)
        assert not is_square_attacked(board, E3, Color.BLACK)

    def test_empty_board_has_no_attacks(self) -> None:
        board = Board.empty()
        assert not any(is_square_attacked(board, sq, Color.WHITE) for sq in all_squares())
        assert attacks_from(board, D8) == frozenset()


POSITIONS = [
    "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR",
    "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R",
    "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8",
    "r3k2r/Pppp1ppp/1b3nbN/nP6/BBP1P3/q4N2/Pp1P2PP/R2Q1RK1",
    "rnbq1k1r/pp1Pbppp/2p5/8/2B5/8/PPP1NnPP/RNBQK2R",
]


class TestStrategiesAgree:
    @pytest.mark.parametrize("placement", POSITIONS)
    def test_every_square_both_colors(self, placement: str) -> None:
        board = board_from_placement(placement)
        for sq in all_squares():
            for color in Color:
                assert is_square_attacked(board, sq, color) == is_square_attacked_by_scan(
                    board, sq, color
                ), f"{placement}: {sq} by {color}"
