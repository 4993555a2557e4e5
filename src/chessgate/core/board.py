"""Board - immutable piece placement on an 8x8 grid."""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from chessgate.core.enums import Color, PieceType
from chessgate.core.piece import Piece
from chessgate.core.types import Square

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


def _index(sq: Square) -> int:
    return sq.rank * 8 + sq.file


class Board:
    """Immutable 64-square snapshot.

    Every "mutation" returns a new board, so legality checks can build a
    derived board, query it and drop it without touching the original.
    """

    __slots__ = ("_squares",)

    def __init__(self, squares: tuple[Piece | None, ...] | None = None) -> None:
        if squares is None:
            squares = (None,) * 64
        if len(squares) != 64:
            raise ValueError(f"Board needs 64 squares, got {len(squares)}")
        self._squares = squares

    # -- Element access -----------------------------------------------------

    @staticmethod
    def is_valid(sq: Square) -> bool:
        return sq.is_valid

    def piece_at(self, sq: Square) -> Piece | None:
        """Piece on *sq*, or None when empty or off the board."""
        if not sq.is_valid:
            return None
        return self._squares[_index(sq)]

    def __getitem__(self, sq: Square) -> Piece | None:
        return self.piece_at(sq)

    def is_empty(self, sq: Square) -> bool:
        return self.piece_at(sq) is None

    # -- Query helpers ------------------------------------------------------

    def occupied(self) -> Iterator[tuple[Square, Piece]]:
        """All (square, piece) pairs, rank by rank."""
        for idx, piece in enumerate(self._squares):
            if piece is not None:
                yield Square(idx >> 3, idx & 7), piece

    def pieces(self, color: Color) -> list[Square]:
        """All squares occupied by *color*."""
        return [sq for sq, piece in self.occupied() if piece.color == color]

    def count(self, color: Color, piece_type: PieceType) -> int:
        return sum(
            1 for _, piece in self.occupied() if piece.is_a(color, piece_type)
        )

    def king_square(self, color: Color) -> Square | None:
        """The first king of *color*, or None if it is missing."""
        for sq, piece in self.occupied():
            if piece.is_a(color, PieceType.KING):
                return sq
        return None

    # -- Derived boards -----------------------------------------------------

    def with_piece(self, sq: Square, piece: Piece | None) -> Board:
        """Copy with *sq* set to *piece* (None clears it)."""
        if not sq.is_valid:
            return self
        squares = list(self._squares)
        squares[_index(sq)] = piece
        return Board(tuple(squares))

    def with_move(self, from_sq: Square, to_sq: Square) -> Board:
        """Copy with the piece on *from_sq* relocated to *to_sq*.

        Whatever stood on *to_sq* is overwritten. Castling rooks, promotion
        and ``has_moved`` are the commit step's business, not the board's.
        """
        if not (from_sq.is_valid and to_sq.is_valid) or from_sq == to_sq:
            return self
        squares = list(self._squares)
        squares[_index(to_sq)] = squares[_index(from_sq)]
        squares[_index(from_sq)] = None
        return Board(tuple(squares))

    # -- Factory ------------------------------------------------------------

    @classmethod
    def empty(cls) -> Board:
        return cls()

    @classmethod
    def from_pieces(cls, pieces: Mapping[Square, Piece]) -> Board:
        squares: list[Piece | None] = [None] * 64
        for sq, piece in pieces.items():
            if not sq.is_valid:
                raise ValueError(f"Square off the board: {sq!r}")
            squares[_index(sq)] = piece
        return cls(tuple(squares))

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        pieces: dict[Square, Piece] = {}
        for file, pt in enumerate(_BACK_RANK):
            pieces[Square(0, file)] = Piece(Color.BLACK, pt)
            pieces[Square(1, file)] = Piece(Color.BLACK, PieceType.PAWN)
            pieces[Square(6, file)] = Piece(Color.WHITE, PieceType.PAWN)
            pieces[Square(7, file)] = Piece(Color.WHITE, pt)
        return cls.from_pieces(pieces)

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares

    def __hash__(self) -> int:
        return hash(self._squares)

    def __repr__(self) -> str:
        return self.diagram()

    def diagram(self, symbols: bool = False) -> str:
        """Text diagram, 8th rank first; *symbols* uses unicode chess glyphs."""
        rows: list[str] = []
        for rank in range(8):
            row = []
            for file in range(8):
                p = self._squares[rank * 8 + file]
                if p is None:
                    row.append(".")
                else:
                    row.append(p.symbol if symbols else str(p))
            rows.append(f"{8 - rank} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
