"""Placement strings: FEN-style board text for building and printing boards.

Only the piece-placement field is mandatory. An optional second field
lists castling availability (``KQkq`` or ``-``); kings and rooks whose
right is absent are marked as moved. Pawns off their starting rank are
always marked as moved.
"""

from __future__ import annotations

from chessgate.core.board import Board
from chessgate.core.enums import Color, PieceType
from chessgate.core.piece import Piece
from chessgate.core.types import Square

STARTING_PLACEMENT = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"

_PAWN_START_RANK: dict[Color, int] = {Color.WHITE: 6, Color.BLACK: 1}
_BACK_RANK: dict[Color, int] = {Color.WHITE: 7, Color.BLACK: 0}

# castling character -> (color, rook file)
_CASTLING_CHARS: dict[str, tuple[Color, int]] = {
    "K": (Color.WHITE, 7),
    "Q": (Color.WHITE, 0),
    "k": (Color.BLACK, 7),
    "q": (Color.BLACK, 0),
}


def board_from_placement(text: str) -> Board:
    """Parse ``"<placement> [castling]"`` into a :class:`Board`."""
    parts = text.split()
    if not (1 <= len(parts) <= 2):
        raise ValueError(f"Invalid placement (need 1-2 fields): {text!r}")

    rows = parts[0].split("/")
    if len(rows) != 8:
        raise ValueError(f"Invalid placement (must contain 8 ranks): {text!r}")

    pieces: dict[Square, Piece] = {}
    for rank, row_text in enumerate(rows):
        file = 0
        for ch in row_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise ValueError(f"Invalid placement digit {ch!r}: {text!r}")
                file += step
            else:
                if file >= 8:
                    raise ValueError(f"Invalid placement rank width: {text!r}")
                piece = Piece.from_char(ch)
                if (
                    piece.piece_type == PieceType.PAWN
                    and rank != _PAWN_START_RANK[piece.color]
                ):
                    piece = piece.moved()
                pieces[Square(rank, file)] = piece
                file += 1
            if file > 8:
                raise ValueError(f"Invalid placement rank width: {text!r}")
        if file != 8:
            raise ValueError(f"Invalid placement rank width: {text!r}")

    if len(parts) == 2:
        _apply_castling_field(pieces, parts[1])

    return Board.from_pieces(pieces)


def _apply_castling_field(pieces: dict[Square, Piece], field: str) -> None:
    rights: set[tuple[Color, int]] = set()
    if field != "-":
        for ch in field:
            right = _CASTLING_CHARS.get(ch)
            if right is None or right in rights:
                raise ValueError(f"Invalid castling field: {field!r}")
            rights.add(right)

    for sq, piece in list(pieces.items()):
        if piece.piece_type == PieceType.ROOK:
            on_back_rank = sq.rank == _BACK_RANK[piece.color]
            keep = on_back_rank and (piece.color, sq.file) in rights
        elif piece.piece_type == PieceType.KING:
            keep = any(color == piece.color for color, _ in rights)
        else:
            continue
        if not keep:
            pieces[sq] = piece.moved()


def board_to_placement(board: Board) -> str:
    """Serialise the piece placement of *board* (first FEN field)."""
    rows: list[str] = []
    for rank in range(8):
        empty = 0
        row = ""
        for file in range(8):
            piece = board.piece_at(Square(rank, file))
            if piece is None:
                empty += 1
            else:
                if empty:
                    row += str(empty)
                    empty = 0
                row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)
    return "/".join(rows)
