"""Error taxonomy for the diagnosis engine.

Only DataUnavailable reaches the visitor as a notification. Dangling bean
references, empty recommendation lists and a missing alternate are resolved
by filtering/fallback and never raised.
"""

from __future__ import annotations

DATA_UNAVAILABLE_MESSAGE = "データの読み込みに失敗しました"


class MomongaError(Exception):
    """Base class for engine errors."""


class DataUnavailable(MomongaError):
    """Catalog failed to load, or has nothing to run a flow with."""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__(detail or DATA_UNAVAILABLE_MESSAGE)


class QuizStateError(MomongaError):
    """Operation not valid in the quiz's current phase."""


class StaleAnswer(QuizStateError):
    """Answer addressed to a question the quiz has already moved past."""

    def __init__(self, expected: int, received: int) -> None:
        self.expected = expected
        self.received = received
        super().__init__(f"answer for question {received} rejected; current question is {expected}")


class InvalidChoice(MomongaError):
    def __init__(self, choice_index: int, choice_count: int) -> None:
        self.choice_index = choice_index
        self.choice_count = choice_count
        super().__init__(f"choice {choice_index} out of range (0..{choice_count - 1})")


class GachaBusy(MomongaError):
    """A pull was requested while the previous spin is still running."""


class SessionNotFound(MomongaError):
    def __init__(self, session_id: str) -> None:
        self.session_id = session_id
        super().__init__(f"unknown session: {session_id}")


class BeanNotFound(MomongaError):
    def __init__(self, bean_id: str) -> None:
        self.bean_id = bean_id
        super().__init__(f"unknown bean: {bean_id}")
