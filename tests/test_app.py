"""Tests for the headless self-play entry point."""

import pytest

from chessgate.app import main, play_self_game
from chessgate.core.enums import Color
from chessgate.core.move_generator import MoveGenerator


class TestSelfPlay:
    def test_stops_at_ply_limit(self) -> None:
        controller = play_self_game(seed=5, max_plies=10)
        session = controller.session
        assert session.ply == 10 or session.is_game_over

    def test_same_seed_same_game(self) -> None:
        a = play_self_game(seed=11, max_plies=40).session
        b = play_self_game(seed=11, max_plies=40).session
        assert a.board == b.board
        assert a.ply == b.ply

    @pytest.mark.slow
    @pytest.mark.parametrize("seed", range(8))
    def test_kings_survive_full_games(self, seed: int) -> None:
        session = play_self_game(seed=seed, max_plies=300).session
        assert session.board.king_square(Color.WHITE) is not None
        assert session.board.king_square(Color.BLACK) is not None
        if session.is_game_over:
            assert session.status.is_terminal
            assert not MoveGenerator(session.board).has_legal_moves(session.turn)


class TestMain:
    def test_prints_final_position(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["--seed", "3", "--max-plies", "6"]) == 0
        out = capsys.readouterr().out
        assert "a b c d e f g h" in out
        assert "plies:" in out

    def test_unicode_board(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["--seed", "3", "--max-plies", "0", "--unicode"]) == 0
        out = capsys.readouterr().out
        assert "8 ♜ ♞ ♝ ♛ ♚ ♝ ♞ ♜" in out
