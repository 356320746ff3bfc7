"""Presentation contract — what the engine asks the UI layer to show.

The engine never touches markup. It calls a Presenter; the HTTP layer uses
RecordingPresenter, which keeps the latest view so it can be returned as JSON.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

from momonga.chart.canvas import ChartCanvas
from momonga.chart.options import ChartOptions
from momonga.chart.renderer import render
from momonga.engine.selector import BlendPart, Recommendation
from momonga.models.catalog import Bean, Question, ScoreVector

logger = logging.getLogger(__name__)


class Screen(str, enum.Enum):
    TOP = "top"
    DIAGNOSIS = "diagnosis"
    RESULT = "result"
    GACHA = "gacha"
    BLEND = "blend"


class Presenter(Protocol):
    def show_screen(self, screen: Screen) -> None: ...

    def show_question(self, question: Question, index: int, total: int) -> None: ...

    def show_diagnosis(self, recommendation: Recommendation) -> None: ...

    def show_omakase(self, recommendation: Recommendation) -> None: ...

    def show_gacha(self, bean: Bean | None) -> None: ...

    def show_blend(self, bean: Bean, parts: tuple[BlendPart, ...]) -> None: ...

    def render_chart(
        self,
        target_id: str,
        scores: ScoreVector | Mapping[str, Any],
        options: ChartOptions | None = None,
    ) -> None: ...

    def notify(self, message: str) -> None: ...


@dataclass
class QuestionState:
    question: Question
    index: int
    total: int


@dataclass
class ViewState:
    screen: Screen = Screen.TOP
    question: QuestionState | None = None
    result: Recommendation | None = None
    gacha: Bean | None = None
    blend: tuple[Bean, tuple[BlendPart, ...]] | None = None
    # target id -> rendered SVG markup
    charts: dict[str, str] = field(default_factory=dict)
    notifications: list[str] = field(default_factory=list)


class RecordingPresenter:
    """Keeps the most recent view per screen; charts rendered on request."""

    def __init__(self, chart_options: ChartOptions | None = None) -> None:
        self.chart_options = chart_options or ChartOptions()
        self.view = ViewState()

    def show_screen(self, screen: Screen) -> None:
        logger.debug("Screen -> %s", screen.value)
        self.view.screen = screen
        # A new screen starts without stale charts or toasts
        self.view.charts = {}
        self.view.notifications = []

    def show_question(self, question: Question, index: int, total: int) -> None:
        self.view.question = QuestionState(question=question, index=index, total=total)

    def show_diagnosis(self, recommendation: Recommendation) -> None:
        self.view.question = None
        self.view.result = recommendation

    def show_omakase(self, recommendation: Recommendation) -> None:
        self.view.question = None
        self.view.result = recommendation

    def show_gacha(self, bean: Bean | None) -> None:
        self.view.gacha = bean

    def show_blend(self, bean: Bean, parts: tuple[BlendPart, ...]) -> None:
        self.view.blend = (bean, parts)

    def render_chart(
        self,
        target_id: str,
        scores: ScoreVector | Mapping[str, Any],
        options: ChartOptions | None = None,
    ) -> None:
        canvas = ChartCanvas(title=target_id)
        render(scores, canvas, options or self.chart_options)
        self.view.charts[target_id] = canvas.to_svg()

    def notify(self, message: str) -> None:
        logger.info("Notify: %s", message)
        self.view.notifications.append(message)
