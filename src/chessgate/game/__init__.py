"""Game management layer — session, controller, players, clock, oracle.

Quick start::

    from chessgate.core import Color, parse_square
    from chessgate.game import GameController, HumanPlayer, PolicyPlayer

    ctrl = GameController()
    ctrl.new_game(
        white=HumanPlayer(Color.WHITE, "Alice"),
        black=PolicyPlayer(Color.BLACK),
    )
    ctrl.select_square(parse_square("e2"))
    ctrl.select_square(parse_square("e4"))
"""

from chessgate.game.clock import Clock, ClockSnapshot
from chessgate.game.controller import GameController
from chessgate.game.interfaces import (
    Authorization,
    IAuthorizationOracle,
    IClock,
    IPlayer,
    OpponentPolicy,
    PendingMove,
    SelectOutcome,
    TimeControl,
)
from chessgate.game.oracle import Question, QuestionBank, QuestionOracle
from chessgate.game.player import HumanPlayer, PolicyPlayer, RandomPolicy
from chessgate.game.session import GameEvents, GameSession, SessionSnapshot
from chessgate.game.settings import GameSettings

__all__ = [
    # Interfaces
    "Authorization",
    "IAuthorizationOracle",
    "IClock",
    "IPlayer",
    "OpponentPolicy",
    "PendingMove",
    "SelectOutcome",
    "TimeControl",
    # Concrete
    "Clock",
    "ClockSnapshot",
    "GameController",
    "GameEvents",
    "GameSession",
    "GameSettings",
    "HumanPlayer",
    "PolicyPlayer",
    "Question",
    "QuestionBank",
    "QuestionOracle",
    "RandomPolicy",
    "SessionSnapshot",
]
