"""Square value type and coordinate helpers.

Board layout (rank index grows toward White's side):
    rank 0 = 8th rank (Black's back rank), a8=(0, 0) ... h8=(0, 7)
    rank 7 = 1st rank (White's back rank), a1=(7, 0) ... h1=(7, 7)
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import NamedTuple

_FILES = "abcdefgh"


class Square(NamedTuple):
    """A (rank, file) pair. May be off-board; check :attr:`is_valid`."""

    rank: int
    file: int

    @property
    def is_valid(self) -> bool:
        return 0 <= self.rank < 8 and 0 <= self.file < 8

    def offset(self, d_rank: int, d_file: int) -> Square:
        return Square(self.rank + d_rank, self.file + d_file)

    @property
    def name(self) -> str:
        """Algebraic name, e.g. (7, 4) -> 'e1'."""
        return _FILES[self.file] + str(8 - self.rank)

    def __str__(self) -> str:
        return self.name if self.is_valid else f"({self.rank}, {self.file})"


def parse_square(name: str) -> Square:
    """Parse square name, e.g. 'e4' -> Square(4, 4)."""
    if len(name) != 2 or name[0] not in _FILES or name[1] not in "12345678":
        raise ValueError(f"Invalid square name: {name!r}")
    return Square(8 - int(name[1]), _FILES.index(name[0]))


def all_squares() -> Iterator[Square]:
    """Every on-board square, rank by rank from the 8th rank down."""
    for rank in range(8):
        for file in range(8):
            yield Square(rank, file)


# ── Named square constants ──────────────────────────────────────────────────

A8, B8, C8, D8, E8, F8, G8, H8 = (Square(0, f) for f in range(8))
A7, B7, C7, D7, E7, F7, G7, H7 = (Square(1, f) for f in range(8))
A6, B6, C6, D6, E6, F6, G6, H6 = (Square(2, f) for f in range(8))
A5, B5, C5, D5, E5, F5, G5, H5 = (Square(3, f) for f in range(8))
A4, B4, C4, D4, E4, F4, G4, H4 = (Square(4, f) for f in range(8))
A3, B3, C3, D3, E3, F3, G3, H3 = (Square(5, f) for f in range(8))
A2, B2, C2, D2, E2, F2, G2, H2 = (Square(6, f) for f in range(8))
A1, B1, C1, D1, E1, F1, G1, H1 = (Square(7, f) for f in range(8))
