"""chessgate — a chess rules engine with gated move commits."""

__version__ = "0.1.0"
