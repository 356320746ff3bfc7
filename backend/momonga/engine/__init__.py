"""Momonga Coffee diagnosis engine."""

from momonga.engine.flows import CoffeeFlow, SessionRegistry
from momonga.engine.gacha import Gacha
from momonga.engine.presenter import Presenter, RecordingPresenter, Screen
from momonga.engine.quiz import Classification, QuizEngine, QuizPhase, classify
from momonga.engine.selector import Recommendation, RecommendationSelector

__all__ = [
    "Classification",
    "CoffeeFlow",
    "Gacha",
    "Presenter",
    "QuizEngine",
    "QuizPhase",
    "Recommendation",
    "RecommendationSelector",
    "RecordingPresenter",
    "Screen",
    "SessionRegistry",
    "classify",
]
