"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import MutableSequence, Sequence
from typing import Any

import pytest

from momonga.catalog.store import DEFAULT_CATALOG_DIR, CatalogStore, load_catalog
from momonga.models.catalog import Bean, Choice, Persona, Question, ScoreVector


class ScriptedRandom:
    """Deterministic RandomSource.

    choice() returns seq[i] for the next queued index (0 once the queue is
    empty); shuffle() keeps the order, or reverses it when reverse_shuffle.
    """

    def __init__(self, choices: Sequence[int] = (), reverse_shuffle: bool = False) -> None:
        self.choices = list(choices)
        self.reverse_shuffle = reverse_shuffle

    def choice(self, seq: Sequence[Any]) -> Any:
        index = self.choices.pop(0) if self.choices else 0
        return seq[index]

    def shuffle(self, x: MutableSequence[Any]) -> None:
        if self.reverse_shuffle:
            x.reverse()


def make_bean(bean_id: str, **kwargs: Any) -> Bean:
    data: dict[str, Any] = {
        "id": bean_id,
        "name": kwargs.pop("name", bean_id.title()),
        "roastLabel": "中煎り",
        "description": f"{bean_id} description",
    }
    data.update(kwargs)
    return Bean.model_validate(data)


def make_persona(persona_id: str, recommended: Sequence[str] = ()) -> Persona:
    return Persona(id=persona_id, name=f"{persona_id} type", recommended_bean_ids=tuple(recommended))


def make_question(*choice_scores: dict[str, int], text: str = "Q") -> Question:
    return Question(
        text=text,
        choices=tuple(Choice(text=f"choice {i}", scores=s) for i, s in enumerate(choice_scores)),
    )


# A small catalog: "a" recommends x/y, "b" recommends y/z, "c" recommends nothing
BEANS = [
    make_bean("x", scores=ScoreVector(acidity=4, aroma=5)),
    make_bean("y", featured=True, scores=ScoreVector(bitterness=5, body=4)),
    make_bean("z", baseUrl="https://shop.example/z"),
    make_bean(
        "house",
        type="blend",
        blend={
            "concept": "house blend",
            "components": [
                {"beanId": "x", "role": "base", "ratio": 60},
                {"beanId": "y", "role": "accent", "ratio": 40},
            ],
        },
    ),
]

TYPES = [
    make_persona("a", ["x", "y"]),
    make_persona("b", ["y", "z"]),
    make_persona("c"),
]

QUESTIONS = [
    make_question({"a": 2}, {"b": 2}, {"c": 1, "b": 1}, text="Q1"),
    make_question({"a": 1, "c": 1}, {"b": 3}, text="Q2"),
    make_question({"c": 2}, {"a": 2}, text="Q3"),
]


@pytest.fixture
def catalog() -> CatalogStore:
    return CatalogStore(BEANS, TYPES, QUESTIONS)


@pytest.fixture
def bundled_catalog() -> CatalogStore:
    return load_catalog(DEFAULT_CATALOG_DIR)


@pytest.fixture
def scripted() -> ScriptedRandom:
    return ScriptedRandom()
