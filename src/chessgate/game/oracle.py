"""Question-based authorization oracle for gated moves.

A pending move is authorized by answering a multiple-choice question
correctly. A wrong answer, or letting the countdown run out, denies it.
Where the questions come from is the host's business: any zero-argument
callable returning a :class:`Question` will do.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from chessgate.game.interfaces import (
    Authorization,
    AuthorizationCallback,
    IAuthorizationOracle,
    PendingMove,
)
from chessgate.game.settings import DEFAULT_AUTHORIZATION_TIMEOUT

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Question:
    """A multiple-choice question with exactly one correct answer."""

    prompt: str
    answers: tuple[str, ...]
    correct_index: int
    category: str = ""

    def __post_init__(self) -> None:
        if len(self.answers) < 2:
            raise ValueError(f"Question needs at least two answers: {self.prompt!r}")
        if not (0 <= self.correct_index < len(self.answers)):
            raise ValueError(
                f"correct_index {self.correct_index} out of range for {self.prompt!r}"
            )

    @property
    def correct_answer(self) -> str:
        return self.answers[self.correct_index]

    def is_correct(self, index: int) -> bool:
        return index == self.correct_index


QuestionSource = Callable[[], Question]
QuestionCallback = Callable[[Question, PendingMove], None]


class QuestionBank:
    """Question source that deals from a shuffled deck, reshuffling when empty."""

    __slots__ = ("_questions", "_rng", "_deck")

    def __init__(
        self, questions: Iterable[Question], rng: random.Random | None = None
    ) -> None:
        self._questions = list(questions)
        if not self._questions:
            raise ValueError("QuestionBank needs at least one question")
        self._rng = rng if rng is not None else random.Random()
        self._deck: list[Question] = []

    def __call__(self) -> Question:
        if not self._deck:
            self._deck = self._questions.copy()
            self._rng.shuffle(self._deck)
        return self._deck.pop()

    def __len__(self) -> int:
        return len(self._questions)


class QuestionOracle(IAuthorizationOracle):
    """Authorizes a pending move when its question is answered correctly.

    Time is counted in abstract units through :meth:`tick`; the Qt bridge
    ticks once per second. Each request gets exactly one response.
    """

    __slots__ = (
        "_source",
        "_timeout",
        "_pending",
        "_respond",
        "_question",
        "_remaining",
        "on_question",
    )

    def __init__(
        self,
        source: QuestionSource,
        timeout: int = DEFAULT_AUTHORIZATION_TIMEOUT,
    ) -> None:
        if timeout <= 0:
            raise ValueError(f"timeout must be positive, got {timeout}")
        self._source = source
        self._timeout = timeout
        self._pending: PendingMove | None = None
        self._respond: AuthorizationCallback | None = None
        self._question: Question | None = None
        self._remaining = 0
        self.on_question: list[QuestionCallback] = []

    # ── IAuthorizationOracle ─────────────────────────────────────────────

    def request(self, pending: PendingMove, respond: AuthorizationCallback) -> None:
        if self._pending is not None:
            dropped = self._pending.request_id
            _LOGGER.debug("Dropping request %s for %s", dropped, pending.request_id)
        question = self._source()
        self._pending = pending
        self._respond = respond
        self._question = question
        self._remaining = self._timeout
        for cb in self.on_question:
            cb(question, pending)

    def cancel(self) -> None:
        self._pending = None
        self._respond = None
        self._question = None
        self._remaining = 0

    # ── Answering ────────────────────────────────────────────────────────

    def answer(self, index: int) -> bool:
        """Answer the current question. Returns False if none is open."""
        question = self._question
        if question is None:
            return False
        if question.is_correct(index):
            outcome = Authorization.AUTHORIZED
        else:
            outcome = Authorization.DENIED
        self._finish(outcome)
        return True

    def tick(self, units: int = 1) -> None:
        """Advance the countdown; reaching zero denies the move."""
        if self._pending is None or units <= 0:
            return
        self._remaining = max(0, self._remaining - units)
        if self._remaining == 0:
            _LOGGER.debug("Request %s timed out", self._pending.request_id)
            self._finish(Authorization.DENIED)

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def is_active(self) -> bool:
        return self._pending is not None

    @property
    def current_question(self) -> Question | None:
        return self._question

    @property
    def remaining(self) -> int:
        return self._remaining

    @property
    def timeout(self) -> int:
        return self._timeout

    # ── Internal ─────────────────────────────────────────────────────────

    def _finish(self, outcome: Authorization) -> None:
        pending, respond = self._pending, self._respond
        self.cancel()
        if pending is not None and respond is not None:
            respond(pending.request_id, outcome)
