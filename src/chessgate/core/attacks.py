"""Attack detection: is a square attacked by a given side?

Two independent strategies are provided. :func:`is_square_attacked` tests
attack patterns outward from the target square; :func:`is_square_attacked_by_scan`
walks every piece of the attacking side and checks its attack set. They
must agree, and neither consults the legality filter.
"""

from __future__ import annotations

from chessgate.core.board import Board
from chessgate.core.enums import Color, PieceType
from chessgate.core.types import Square

# (d_rank, d_file) offsets
KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

SLIDER_DIRS: dict[PieceType, tuple[tuple[int, int], ...]] = {
    PieceType.BISHOP: BISHOP_DIRS,
    PieceType.ROOK: ROOK_DIRS,
    PieceType.QUEEN: QUEEN_DIRS,
}


def ray(board: Board, sq: Square, d_rank: int, d_file: int) -> list[Square]:
    """Squares from *sq* in one direction, up to and including the first
    occupied square."""
    squares: list[Square] = []
    cur = sq.offset(d_rank, d_file)
    while cur.is_valid:
        squares.append(cur)
        if board.piece_at(cur) is not None:
            break
        cur = cur.offset(d_rank, d_file)
    return squares


def pawn_attack_squares(sq: Square, color: Color) -> list[Square]:
    """The two diagonals one step in *color*'s forward direction."""
    step = color.forward
    return [
        target
        for target in (sq.offset(step, -1), sq.offset(step, 1))
        if target.is_valid
    ]


def attacks_from(board: Board, sq: Square) -> frozenset[Square]:
    """Every square the piece on *sq* attacks, whoever occupies it.

    Pawns attack diagonally only, and castling never attacks anything.
    """
    piece = board.piece_at(sq)
    if piece is None:
        return frozenset()

    pt = piece.piece_type
    if pt == PieceType.PAWN:
        return frozenset(pawn_attack_squares(sq, piece.color))
    if pt == PieceType.KNIGHT or pt == PieceType.KING:
        offsets = KNIGHT_OFFSETS if pt == PieceType.KNIGHT else KING_OFFSETS
        return frozenset(
            target
            for target in (sq.offset(dr, df) for dr, df in offsets)
            if target.is_valid
        )

    targets: set[Square] = set()
    for dr, df in SLIDER_DIRS[pt]:
        targets.update(ray(board, sq, dr, df))
    return frozenset(targets)


def is_square_attacked(board: Board, sq: Square, by_color: Color) -> bool:
    """Is *sq* attacked by any piece of *by_color*?"""
    # A pawn of by_color attacks sq from one step "behind" it.
    back = -by_color.forward
    for df in (-1, 1):
        piece = board.piece_at(sq.offset(back, df))
        if piece is not None and piece.is_a(by_color, PieceType.PAWN):
            return True

    for dr, df in KNIGHT_OFFSETS:
        piece = board.piece_at(sq.offset(dr, df))
        if piece is not None and piece.is_a(by_color, PieceType.KNIGHT):
            return True

    for dr, df in KING_OFFSETS:
        piece = board.piece_at(sq.offset(dr, df))
        if piece is not None and piece.is_a(by_color, PieceType.KING):
            return True

    for dirs, attackers in (
        (BISHOP_DIRS, (PieceType.BISHOP, PieceType.QUEEN)),
        (ROOK_DIRS, (PieceType.ROOK, PieceType.QUEEN)),
    ):
        for dr, df in dirs:
            squares = ray(board, sq, dr, df)
            if not squares:
                continue
            piece = board.piece_at(squares[-1])
            if (
                piece is not None
                and piece.color == by_color
                and piece.piece_type in attackers
            ):
                return True

    return False


def is_square_attacked_by_scan(board: Board, sq: Square, by_color: Color) -> bool:
    """Same answer as :func:`is_square_attacked`, computed piece by piece."""
    return any(sq in attacks_from(board, origin) for origin in board.pieces(by_color))
