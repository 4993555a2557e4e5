"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass

from chessgate.core.types import Square


@dataclass(frozen=True, slots=True)
class Move:
    """A from/to pair.

    Captures, castling and promotion are not recorded here; the commit
    step derives them from the board.
    """

    from_sq: Square
    to_sq: Square

    def __str__(self) -> str:
        return f"{self.from_sq}{self.to_sq}"

    @property
    def uci(self) -> str:
        """UCI long-algebraic notation (without promotion suffix)."""
        return str(self)
