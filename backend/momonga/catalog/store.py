"""Catalog Store — read-only beans / persona types / questions + JSON loader.

The store itself performs no validation so tests can hand it arbitrary
(even dangling) data. `load_catalog` is the boundary that parses the three
JSON documents and drops references to beans or personas that do not exist.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from momonga.engine.errors import DataUnavailable
from momonga.engine.random_source import RandomSource, default_random
from momonga.models.catalog import Bean, Persona, Question

logger = logging.getLogger(__name__)

BEANS_FILE = "beans.json"
TYPES_FILE = "types.json"
QUESTIONS_FILE = "questions.json"

# Bundled sample catalog
DEFAULT_CATALOG_DIR = Path(__file__).resolve().parents[1] / "data"


class CatalogStore:
    """Process-wide, read-only catalog snapshot."""

    def __init__(
        self,
        beans: Iterable[Bean] = (),
        types: Iterable[Persona] = (),
        questions: Iterable[Question] = (),
    ) -> None:
        self._beans: tuple[Bean, ...] = tuple(beans)
        self._types: tuple[Persona, ...] = tuple(types)
        self._questions: tuple[Question, ...] = tuple(questions)
        self._beans_by_id = {b.id: b for b in reversed(self._beans)}
        self._types_by_id = {t.id: t for t in reversed(self._types)}

    @property
    def beans(self) -> tuple[Bean, ...]:
        return self._beans

    @property
    def types(self) -> tuple[Persona, ...]:
        return self._types

    @property
    def questions(self) -> tuple[Question, ...]:
        return self._questions

    @property
    def is_empty(self) -> bool:
        return not self._beans

    def get_bean_by_id(self, bean_id: str) -> Bean | None:
        return self._beans_by_id.get(bean_id)

    def get_type_by_id(self, type_id: str) -> Persona | None:
        return self._types_by_id.get(type_id)

    def get_featured_bean(self) -> Bean | None:
        """First bean flagged featured, else the first bean, else None."""
        for bean in self._beans:
            if bean.featured:
                return bean
        return self._beans[0] if self._beans else None

    def get_random_bean(self, rng: RandomSource | None = None) -> Bean | None:
        if not self._beans:
            return None
        return (rng or default_random()).choice(self._beans)


def _read_json(path: Path) -> Any:
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise DataUnavailable(f"cannot read {path.name}: {e}") from e


def _check_references(
    beans: list[Bean], types: list[Persona], questions: list[Question],
) -> tuple[list[Bean], list[Persona], list[Question]]:
    """Drop blend components, recommendations and score keys that point nowhere."""
    bean_ids = {b.id for b in beans}
    type_ids = {t.id for t in types}

    checked_beans: list[Bean] = []
    for bean in beans:
        if bean.blend is not None:
            components = []
            for comp in bean.blend.components:
                if comp.bean_id not in bean_ids:
                    logger.warning("Invalid beanId reference: %s in %s", comp.bean_id, bean.id)
                    continue
                components.append(comp)
            if len(components) != len(bean.blend.components):
                blend = bean.blend.model_copy(update={"components": tuple(components)})
                bean = bean.model_copy(update={"blend": blend})
        checked_beans.append(bean)

    checked_types: list[Persona] = []
    for persona in types:
        valid = tuple(bid for bid in persona.recommended_bean_ids if bid in bean_ids)
        for bid in persona.recommended_bean_ids:
            if bid not in bean_ids:
                logger.warning("Invalid recommendedBeanId: %s in type %s", bid, persona.id)
        if len(valid) != len(persona.recommended_bean_ids):
            persona = persona.model_copy(update={"recommended_bean_ids": valid})
        checked_types.append(persona)

    checked_questions: list[Question] = []
    for qi, question in enumerate(questions):
        choices = []
        for choice in question.choices:
            unknown = [k for k in choice.scores if k not in type_ids]
            for key in unknown:
                logger.warning("Unknown type %s in scores of question %d", key, qi)
            if unknown:
                scores = {k: v for k, v in choice.scores.items() if k in type_ids}
                choice = choice.model_copy(update={"scores": scores})
            choices.append(choice)
        checked_questions.append(question.model_copy(update={"choices": tuple(choices)}))

    return checked_beans, checked_types, checked_questions


def load_catalog(directory: str | Path) -> CatalogStore:
    """Load and reference-check beans.json, types.json and questions.json.

    Raises DataUnavailable on any I/O, JSON or schema failure, or when the
    catalog holds no beans.
    """
    directory = Path(directory)
    raw_beans = _read_json(directory / BEANS_FILE)
    raw_types = _read_json(directory / TYPES_FILE)
    raw_questions = _read_json(directory / QUESTIONS_FILE)
    if isinstance(raw_questions, dict):
        raw_questions = raw_questions.get("questions", [])

    try:
        beans = [Bean.model_validate(b) for b in raw_beans]
        types = [Persona.model_validate(t) for t in raw_types]
        questions = [Question.model_validate(q) for q in raw_questions]
    except (TypeError, ValidationError) as e:
        raise DataUnavailable(f"catalog schema error: {e}") from e

    if not beans:
        raise DataUnavailable("catalog has no beans")

    beans, types, questions = _check_references(beans, types, questions)
    logger.info(
        "Catalog loaded: %d beans, %d types, %d questions",
        len(beans), len(types), len(questions),
    )
    return CatalogStore(beans, types, questions)


async def aload_catalog(directory: str | Path) -> CatalogStore:
    """Run the loader in a worker thread, off the event loop."""
    return await asyncio.to_thread(load_catalog, directory)


# Singleton, populated by the app lifespan once the load succeeds
_catalog: CatalogStore | None = None


def get_catalog() -> CatalogStore | None:
    return _catalog


def set_catalog(catalog: CatalogStore | None) -> None:
    global _catalog
    _catalog = catalog
