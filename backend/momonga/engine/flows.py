"""Visitor flows — diagnosis, omakase, gacha and blend breakdown.

One CoffeeFlow per visitor. It owns that visitor's quiz engine and gacha
machine and tells the presenter which screen to show. Leaving the diagnosis
screen drops the quiz in progress.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from collections import OrderedDict
from collections.abc import Awaitable, Callable, Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from momonga.engine.errors import (
    DATA_UNAVAILABLE_MESSAGE,
    BeanNotFound,
    DataUnavailable,
    SessionNotFound,
)
from momonga.engine.gacha import DEFAULT_SPIN_SECONDS, Gacha
from momonga.engine.presenter import Presenter, Screen
from momonga.engine.quiz import QuizEngine
from momonga.engine.random_source import RandomSource, default_random
from momonga.engine.selector import BlendPart, Recommendation, RecommendationSelector
from momonga.models.catalog import Bean

if TYPE_CHECKING:
    from momonga.catalog.store import CatalogStore

logger = logging.getLogger(__name__)

MAIN_CHART = "radar-chart-main"
GACHA_CHART = "radar-chart-gacha"


def blend_chart_id(bean_id: str) -> str:
    return f"blend-chart-{bean_id}"


class CoffeeFlow:
    def __init__(
        self,
        catalog: CatalogStore,
        presenter: Presenter,
        rng: RandomSource | None = None,
        gacha_spin_seconds: float = DEFAULT_SPIN_SECONDS,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        rng = rng or default_random()
        self.catalog = catalog
        self.presenter = presenter
        self.quiz = QuizEngine(catalog, presenter, rng)
        self.selector = RecommendationSelector(catalog, rng)
        self.gacha = Gacha(catalog, rng, spin_seconds=gacha_spin_seconds, sleep=sleep)
        self.current_bean: Bean | None = None
        self.screen = Screen.TOP
        # Bumped on every screen change; a spin only publishes to the visit it started on
        self._visit = 0

    @contextmanager
    def _notify_on_data_error(self) -> Iterator[None]:
        try:
            yield
        except DataUnavailable as e:
            logger.error("Data unavailable: %s", e)
            self.presenter.notify(DATA_UNAVAILABLE_MESSAGE)
            raise

    def _show_screen(self, screen: Screen) -> None:
        self.screen = screen
        self._visit += 1
        self.presenter.show_screen(screen)

    def go_top(self) -> None:
        self.quiz.abandon()
        self._show_screen(Screen.TOP)

    def start_diagnosis(self) -> None:
        """Start (or restart) the quiz on the diagnosis screen."""
        with self._notify_on_data_error():
            self._show_screen(Screen.DIAGNOSIS)
            self.quiz.start()

    def answer(self, choice_index: int, question_index: int | None = None) -> Recommendation | None:
        """Score one answer; after the last question, show the result."""
        with self._notify_on_data_error():
            classification = self.quiz.answer(choice_index, question_index)
            if classification is None:
                return None
            recommendation = self.selector.diagnose(classification)
            self._show_result(recommendation)
            return recommendation

    def omakase(self) -> Recommendation:
        with self._notify_on_data_error():
            self.quiz.abandon()
            recommendation = self.selector.omakase()
            self._show_result(recommendation)
            return recommendation

    def open_gacha(self) -> None:
        self.quiz.abandon()
        self.gacha.reset()
        self._show_screen(Screen.GACHA)
        self.presenter.show_gacha(None)

    async def pull_gacha(self) -> Bean:
        """Spin and reveal a bean.

        The spin always finishes and is kept in `gacha.last_result`, but it is
        only shown if the visitor is still on the same gacha screen.
        """
        visit = self._visit
        with self._notify_on_data_error():
            bean = await self.gacha.pull()
        if self.screen is not Screen.GACHA or self._visit != visit:
            logger.debug("Gacha result %s dropped, visitor left the screen", bean.id)
            return bean
        self.current_bean = bean
        self.presenter.show_gacha(bean)
        self.presenter.render_chart(GACHA_CHART, bean.scores)
        return bean

    def show_blend(self, bean_id: str | None = None) -> tuple[BlendPart, ...]:
        """Break a blend into its component beans, one chart each."""
        bean = self.catalog.get_bean_by_id(bean_id) if bean_id else self.current_bean
        if bean is None:
            raise BeanNotFound(bean_id or "")
        parts = self.selector.decompose_blend(bean)
        self._show_screen(Screen.BLEND)
        self.presenter.show_blend(bean, parts)
        for part in parts:
            self.presenter.render_chart(blend_chart_id(part.bean.id), part.bean.scores)
        return parts

    def _show_result(self, recommendation: Recommendation) -> None:
        self.current_bean = recommendation.bean
        self._show_screen(Screen.RESULT)
        if recommendation.omakase:
            self.presenter.show_omakase(recommendation)
        else:
            self.presenter.show_diagnosis(recommendation)
        self.presenter.render_chart(MAIN_CHART, recommendation.bean.scores)


class SessionRegistry:
    """In-memory visitor flows keyed by id. Oldest dropped past `limit`."""

    def __init__(self, limit: int = 1000) -> None:
        self.limit = limit
        self._flows: OrderedDict[str, CoffeeFlow] = OrderedDict()

    def __len__(self) -> int:
        return len(self._flows)

    def add(self, flow: CoffeeFlow) -> str:
        session_id = uuid.uuid4().hex
        self._flows[session_id] = flow
        while len(self._flows) > self.limit:
            dropped, _ = self._flows.popitem(last=False)
            logger.info("Session limit reached, dropped %s", dropped)
        return session_id

    def get(self, session_id: str) -> CoffeeFlow:
        flow = self._flows.get(session_id)
        if flow is None:
            raise SessionNotFound(session_id)
        self._flows.move_to_end(session_id)
        return flow

    def discard(self, session_id: str) -> None:
        flow = self._flows.pop(session_id, None)
        if flow is not None:
            flow.quiz.abandon()

    def clear(self) -> None:
        self._flows.clear()
