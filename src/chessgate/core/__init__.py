"""Core domain layer — pure chess rules with zero external dependencies.

Quick start::

    from chessgate.core import Board, Color, MoveGenerator, parse_square

    board = Board.initial()
    gen = MoveGenerator(board)
    print(sorted(gen.legal_destinations(parse_square("e2"))))
"""

from chessgate.core.attacks import (
    attacks_from,
    is_square_attacked,
    is_square_attacked_by_scan,
)
from chessgate.core.board import Board
from chessgate.core.enums import Color, GameStatus, PieceType
from chessgate.core.move import Move
from chessgate.core.move_generator import MoveGenerator
from chessgate.core.notation import (
    STARTING_PLACEMENT,
    board_from_placement,
    board_to_placement,
)
from chessgate.core.piece import Piece
from chessgate.core.rules import Rules
from chessgate.core.types import Square, all_squares, parse_square

__all__ = [
    # Enums
    "Color",
    "GameStatus",
    "PieceType",
    # Types / helpers
    "Square",
    "all_squares",
    "parse_square",
    # Domain objects
    "Board",
    "Move",
    "MoveGenerator",
    "Piece",
    "Rules",
    # Attacks
    "attacks_from",
    "is_square_attacked",
    "is_square_attacked_by_scan",
    # Notation
    "STARTING_PLACEMENT",
    "board_from_placement",
    "board_to_placement",
]
