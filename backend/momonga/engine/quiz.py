"""Quiz Engine — question sequencing, score accumulation, persona classification.

Usage:
    engine = QuizEngine(catalog, presenter)
    engine.start()                      # presents question 0
    engine.answer(2, question_index=0)  # folds choice 2 into the scores
    ...
    result = engine.answer(0, question_index=6)  # last answer -> Classification

Ties in the final ranking are broken at random on every classification run:
the persona table is shuffled once and then stable-sorted by score, so any
ordering of tied personas is equally likely and the result is still a
well-defined total order.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from momonga.engine.errors import DataUnavailable, InvalidChoice, QuizStateError, StaleAnswer
from momonga.engine.random_source import RandomSource, default_random
from momonga.models.catalog import Persona, Question

if TYPE_CHECKING:
    from momonga.catalog.store import CatalogStore
    from momonga.engine.presenter import Presenter

logger = logging.getLogger(__name__)


class QuizPhase(enum.Enum):
    IDLE = "idle"
    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"


@dataclass
class QuizSession:
    """Accumulator for one quiz run. Private to the engine."""

    question_index: int = 0
    scores: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class Classification:
    winner: Persona
    runner_up: Persona | None
    # Final score table, best first, ties already broken
    ranking: tuple[tuple[str, int], ...]

    def score_of(self, persona_id: str) -> int:
        for pid, score in self.ranking:
            if pid == persona_id:
                return score
        raise KeyError(persona_id)


def rank_scores(scores: Mapping[str, int], rng: RandomSource) -> list[tuple[str, int]]:
    """Order persona ids by descending score, ties in random order."""
    items = list(scores.items())
    rng.shuffle(items)
    items.sort(key=lambda kv: -kv[1])
    return items


def classify(
    scores: Mapping[str, int],
    types: Mapping[str, Persona],
    rng: RandomSource | None = None,
) -> Classification:
    """Rank personas and return the winner plus the runner-up (if any)."""
    if not scores:
        raise DataUnavailable("no persona types to classify into")
    ranking = rank_scores(scores, rng or default_random())
    winner = types[ranking[0][0]]
    runner_up = types[ranking[1][0]] if len(ranking) > 1 else None
    return Classification(winner=winner, runner_up=runner_up, ranking=tuple(ranking))


class QuizEngine:
    """Drives one visitor through the question list: IDLE -> IN_PROGRESS -> COMPLETE."""

    def __init__(
        self,
        catalog: CatalogStore,
        presenter: Presenter | None = None,
        rng: RandomSource | None = None,
    ) -> None:
        self.catalog = catalog
        self.presenter = presenter
        self.rng = rng or default_random()
        self._phase = QuizPhase.IDLE
        self._session: QuizSession | None = None
        self._result: Classification | None = None

    @property
    def phase(self) -> QuizPhase:
        return self._phase

    @property
    def total_questions(self) -> int:
        return len(self.catalog.questions)

    @property
    def question_index(self) -> int | None:
        if self._session is None or self._phase is not QuizPhase.IN_PROGRESS:
            return None
        return self._session.question_index

    @property
    def current_question(self) -> Question | None:
        index = self.question_index
        if index is None:
            return None
        return self.catalog.questions[index]

    @property
    def result(self) -> Classification | None:
        return self._result

    def start(self) -> Question:
        """Begin a fresh run. Any run in progress is discarded."""
        questions = self.catalog.questions
        types = self.catalog.types
        if not questions:
            raise DataUnavailable("no questions in catalog")
        if not types:
            raise DataUnavailable("no persona types in catalog")

        self._session = QuizSession(scores={t.id: 0 for t in types})
        self._result = None
        self._phase = QuizPhase.IN_PROGRESS
        logger.debug("Quiz started: %d questions, %d types", len(questions), len(types))
        self._present_current()
        return questions[0]

    def answer(self, choice_index: int, question_index: int | None = None) -> Classification | None:
        """Score one choice for the current question.

        `question_index` names the question the answer was given for. Once the
        engine has advanced, answers for the earlier question are rejected
        with StaleAnswer, so repeated input cannot score a question twice.
        Returns the Classification after the last question, else None.
        """
        if self._phase is not QuizPhase.IN_PROGRESS or self._session is None:
            raise QuizStateError(f"cannot answer while quiz is {self._phase.value}")

        session = self._session
        if question_index is not None and question_index != session.question_index:
            raise StaleAnswer(expected=session.question_index, received=question_index)

        question = self.catalog.questions[session.question_index]
        if not 0 <= choice_index < len(question.choices):
            raise InvalidChoice(choice_index, len(question.choices))

        for persona_id, delta in question.choices[choice_index].scores.items():
            if persona_id not in session.scores:
                logger.debug("Ignoring score for unknown type %s", persona_id)
                continue
            session.scores[persona_id] += delta

        session.question_index += 1
        if session.question_index >= self.total_questions:
            return self._complete()

        self._present_current()
        return None

    def abandon(self) -> None:
        """Drop the in-progress run (visitor navigated away)."""
        if self._phase is QuizPhase.IN_PROGRESS:
            logger.debug("Quiz abandoned at question %d", self._session.question_index)
        self._session = None
        self._result = None
        self._phase = QuizPhase.IDLE

    def _present_current(self) -> None:
        if self.presenter is None:
            return
        index = self._session.question_index
        self.presenter.show_question(self.catalog.questions[index], index, self.total_questions)

    def _complete(self) -> Classification:
        types = {pid: self.catalog.get_type_by_id(pid) for pid in self._session.scores}
        result = classify(self._session.scores, types, self.rng)
        self._phase = QuizPhase.COMPLETE
        self._session = None
        self._result = result
        logger.info(
            "Quiz complete: %s (runner-up %s)",
            result.winner.id,
            result.runner_up.id if result.runner_up else "-",
        )
        return result
