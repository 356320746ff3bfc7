"""Gacha — random bean picker with a fixed-length spin."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from momonga.engine.errors import DataUnavailable, GachaBusy
from momonga.engine.random_source import RandomSource, default_random
from momonga.models.catalog import Bean

if TYPE_CHECKING:
    from momonga.catalog.store import CatalogStore

logger = logging.getLogger(__name__)

DEFAULT_SPIN_SECONDS = 0.9


class Gacha:
    """One visitor's gacha machine.

    `is_spinning` guards against a second pull while a spin is animating.
    A started spin cannot be cancelled; it always finishes and reveals a bean.
    """

    def __init__(
        self,
        catalog: CatalogStore,
        rng: RandomSource | None = None,
        spin_seconds: float = DEFAULT_SPIN_SECONDS,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.catalog = catalog
        self.rng = rng or default_random()
        self.spin_seconds = spin_seconds
        self._sleep = sleep
        self._spinning = False
        self.last_result: Bean | None = None

    @property
    def is_spinning(self) -> bool:
        return self._spinning

    def reset(self) -> None:
        """Back to the stage for another pull."""
        self.last_result = None

    async def pull(self) -> Bean:
        if self._spinning:
            raise GachaBusy("gacha is already spinning")
        self._spinning = True
        try:
            await self._sleep(self.spin_seconds)
            bean = self.catalog.get_random_bean(self.rng)
        finally:
            self._spinning = False

        if bean is None:
            raise DataUnavailable("豆データが見つかりません")
        self.last_result = bean
        logger.debug("Gacha revealed %s", bean.id)
        return bean
