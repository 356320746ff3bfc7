"""Recommendation Selector — picks beans for a classified persona."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from momonga.engine.errors import DataUnavailable
from momonga.engine.random_source import RandomSource, default_random
from momonga.models.catalog import Bean, BlendComponent, Persona

if TYPE_CHECKING:
    from momonga.catalog.store import CatalogStore
    from momonga.engine.quiz import Classification

logger = logging.getLogger(__name__)

# Fixed, non-personalized label shown for the omakase ("leave it to us") pick
OMAKASE_PERSONA = Persona(
    id="omakase",
    name="迷わなくて正解です",
    description="店主が自信を持っておすすめする一杯をどうぞ。",
    personality="",
    emoji="🙏",
)

DEFAULT_EMOJI = "☕"


@dataclass(frozen=True)
class Recommendation:
    persona: Persona
    bean: Bean
    alternate: Bean | None = None
    alternate_persona: Persona | None = None
    omakase: bool = False


@dataclass(frozen=True)
class BlendPart:
    component: BlendComponent
    bean: Bean


class RecommendationSelector:
    def __init__(self, catalog: CatalogStore, rng: RandomSource | None = None) -> None:
        self.catalog = catalog
        self.rng = rng or default_random()

    def pick_primary(self, persona: Persona) -> Bean:
        """Random recommended bean; falls back to featured, then first bean."""
        bean = None
        if persona.recommended_bean_ids:
            bean_id = self.rng.choice(persona.recommended_bean_ids)
            bean = self.catalog.get_bean_by_id(bean_id)
            if bean is None:
                logger.debug("Type %s recommends missing bean %s", persona.id, bean_id)
        if bean is None:
            bean = self.catalog.get_featured_bean()
        if bean is None and self.catalog.beans:
            bean = self.catalog.beans[0]
        if bean is None:
            raise DataUnavailable("catalog has no beans")
        return bean

    def pick_alternate(self, runner_up: Persona, primary: Bean) -> Bean | None:
        """First resolvable bean of the runner-up that is not the primary."""
        for bean_id in runner_up.recommended_bean_ids:
            if bean_id == primary.id:
                continue
            bean = self.catalog.get_bean_by_id(bean_id)
            if bean is not None:
                return bean
        return None

    def recommend(self, winner: Persona, runner_up: Persona | None = None) -> Recommendation:
        bean = self.pick_primary(winner)
        alternate = self.pick_alternate(runner_up, bean) if runner_up is not None else None
        return Recommendation(
            persona=winner,
            bean=bean,
            alternate=alternate,
            alternate_persona=runner_up if alternate is not None else None,
        )

    def diagnose(self, classification: Classification) -> Recommendation:
        return self.recommend(classification.winner, classification.runner_up)

    def omakase(self, bean: Bean | None = None) -> Recommendation:
        """Direct pick with no quiz: the given bean, or the featured one."""
        if bean is None:
            bean = self.catalog.get_featured_bean()
        if bean is None:
            raise DataUnavailable("catalog has no beans")
        return Recommendation(persona=OMAKASE_PERSONA, bean=bean, omakase=True)

    def decompose_blend(self, bean: Bean) -> tuple[BlendPart, ...]:
        """Resolved component beans of a blend, in declared order."""
        if not bean.is_blend:
            return ()
        parts = []
        for comp in bean.blend.components:
            comp_bean = self.catalog.get_bean_by_id(comp.bean_id)
            if comp_bean is None:
                logger.debug("Blend %s: skipping missing component %s", bean.id, comp.bean_id)
                continue
            parts.append(BlendPart(component=comp, bean=comp_bean))
        return tuple(parts)


def alternate_message(bean: Bean, persona: Persona) -> str:
    return f"「{persona.name}」の一面もあるあなたには、{bean.name}もおすすめ。"


def share_text(persona_name: str) -> str:
    return (
        f"私のコーヒータイプは「{persona_name}」でした！"
        "あなたもモモンガコーヒーで診断してみよう ☕🐿️"
    )


SHARE_TITLE = "モモンガコーヒー診断結果"
