"""Headless entry point: two random policies play one game to the end."""

from __future__ import annotations

import argparse
import logging
import random
from collections import deque
from collections.abc import Callable

from chessgate.core.enums import Color
from chessgate.game.controller import GameController
from chessgate.game.player import PolicyPlayer, RandomPolicy

_LOGGER = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="chessgate", description=__doc__)
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    parser.add_argument(
        "--max-plies", type=int, default=400, help="stop after this many half-moves"
    )
    parser.add_argument(
        "--unicode", action="store_true", help="draw pieces as chess glyphs"
    )
    parser.add_argument("--log-level", default="WARNING", help="logging level")
    return parser.parse_args(argv)


def play_self_game(seed: int | None = None, max_plies: int = 400) -> GameController:
    """Play random vs random until the game ends or *max_plies* is reached."""
    rng = random.Random(seed)
    tasks: deque[Callable[[], None]] = deque()

    controller = GameController()
    controller.new_game(
        PolicyPlayer(Color.WHITE, RandomPolicy(rng), "White", scheduler=tasks.append),
        PolicyPlayer(Color.BLACK, RandomPolicy(rng), "Black", scheduler=tasks.append),
    )

    session = controller.session
    while tasks and session.ply < max_plies:
        tasks.popleft()()

    return controller


def main(argv: list[str] | None = None) -> int:
    """Run one self-play game and print the final position."""
    args = _parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    controller = play_self_game(args.seed, args.max_plies)
    session = controller.session
    print(session.board.diagram(symbols=args.unicode))
    print(f"plies: {session.ply}  status: {session.status.name.lower()}")
    if session.winner is not None:
        print(f"winner: {session.winner}")
    elif not session.is_game_over:
        _LOGGER.info("Stopped after %s plies without a result", session.ply)
        print("no result")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
