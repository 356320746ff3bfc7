"""Tests for the quiz state machine, score accumulation and classification."""

from __future__ import annotations

import random
from collections import Counter

import pytest

from momonga.catalog.store import CatalogStore
from momonga.engine.errors import DataUnavailable, InvalidChoice, QuizStateError, StaleAnswer
from momonga.engine.quiz import QuizEngine, QuizPhase, classify, rank_scores
from tests.conftest import BEANS, TYPES, ScriptedRandom, make_persona, make_question


class RecordingQuestions:
    """Minimal presenter stand-in that only tracks shown questions."""

    def __init__(self) -> None:
        self.shown: list[tuple[str, int, int]] = []

    def show_question(self, question, index, total) -> None:
        self.shown.append((question.text, index, total))


def _run(engine: QuizEngine, choices: list[int]):
    engine.start()
    result = None
    for i, choice in enumerate(choices):
        result = engine.answer(choice, question_index=i)
    return result


class TestLifecycle:
    def test_start_presents_first_question(self, catalog):
        presenter = RecordingQuestions()
        engine = QuizEngine(catalog, presenter, ScriptedRandom())
        question = engine.start()
        assert question.text == "Q1"
        assert engine.phase is QuizPhase.IN_PROGRESS
        assert engine.question_index == 0
        assert presenter.shown == [("Q1", 0, 3)]

    def test_questions_presented_in_order(self, catalog):
        presenter = RecordingQuestions()
        engine = QuizEngine(catalog, presenter, ScriptedRandom())
        result = _run(engine, [0, 0, 0])
        assert [s[1] for s in presenter.shown] == [0, 1, 2]
        assert engine.result is result
        assert engine.phase is QuizPhase.COMPLETE
        assert engine.current_question is None

    def test_start_without_questions_fails(self):
        engine = QuizEngine(CatalogStore(BEANS, TYPES, []))
        with pytest.raises(DataUnavailable):
            engine.start()
        assert engine.phase is QuizPhase.IDLE

    def test_start_without_types_fails(self):
        engine = QuizEngine(CatalogStore(BEANS, [], [make_question({"a": 1})]))
        with pytest.raises(DataUnavailable):
            engine.start()

    def test_answer_before_start_rejected(self, catalog):
        engine = QuizEngine(catalog)
        with pytest.raises(QuizStateError):
            engine.answer(0)

    def test_answer_after_completion_rejected(self, catalog):
        engine = QuizEngine(catalog, rng=ScriptedRandom())
        _run(engine, [0, 0, 0])
        with pytest.raises(QuizStateError):
            engine.answer(0)

    def test_abandon_discards_progress(self, catalog):
        engine = QuizEngine(catalog, rng=ScriptedRandom())
        engine.start()
        engine.answer(1, question_index=0)
        engine.abandon()
        assert engine.phase is QuizPhase.IDLE
        assert engine.question_index is None
        # A restart begins from zero: b's 2 points from the abandoned run are gone
        result = _run(engine, [0, 0, 0])
        assert result.score_of("b") == 0

    def test_restart_resets_scores(self, catalog):
        engine = QuizEngine(catalog, rng=ScriptedRandom())
        first = _run(engine, [0, 0, 1])
        second = _run(engine, [0, 0, 1])
        assert first.ranking == second.ranking


class TestDuplicateAnswers:
    def test_second_answer_for_same_question_is_stale(self, catalog):
        engine = QuizEngine(catalog, rng=ScriptedRandom())
        engine.start()
        engine.answer(0, question_index=0)
        with pytest.raises(StaleAnswer) as exc_info:
            engine.answer(0, question_index=0)
        assert exc_info.value.expected == 1
        assert exc_info.value.received == 0
        assert engine.question_index == 1

    def test_stale_answer_is_not_scored(self, catalog):
        engine = QuizEngine(catalog, rng=ScriptedRandom())
        engine.start()
        engine.answer(0, question_index=0)  # a +2
        with pytest.raises(StaleAnswer):
            engine.answer(0, question_index=0)
        engine.answer(1, question_index=1)  # b +3
        result = engine.answer(0, question_index=2)  # c +2
        assert result.score_of("a") == 2
        assert result.score_of("b") == 3

    def test_answer_for_future_question_rejected(self, catalog):
        engine = QuizEngine(catalog)
        engine.start()
        with pytest.raises(StaleAnswer):
            engine.answer(0, question_index=2)
        assert engine.question_index == 0

    def test_invalid_choice_leaves_state_untouched(self, catalog):
        engine = QuizEngine(catalog)
        engine.start()
        with pytest.raises(InvalidChoice):
            engine.answer(5, question_index=0)
        with pytest.raises(InvalidChoice):
            engine.answer(-1, question_index=0)
        assert engine.question_index == 0


class TestAccumulation:
    def test_seven_questions_single_persona(self):
        questions = [make_question({"a": 2}, {"b": 1}) for _ in range(7)]
        types = [make_persona("a"), make_persona("b"), make_persona("c")]
        engine = QuizEngine(CatalogStore(BEANS, types, questions), rng=random.Random(1))
        result = _run(engine, [0] * 7)
        assert result.score_of("a") == 14
        assert result.score_of("b") == 0
        assert result.score_of("c") == 0
        assert result.winner.id == "a"

    def test_totals_are_sum_of_chosen_deltas(self, catalog):
        engine = QuizEngine(catalog, rng=ScriptedRandom())
        result = _run(engine, [2, 0, 0])
        # Q1 c+1 b+1, Q2 a+1 c+1, Q3 c+2
        assert result.score_of("a") == 1
        assert result.score_of("b") == 1
        assert result.score_of("c") == 4
        assert result.winner.id == "c"

    def test_answer_order_does_not_change_totals(self):
        deltas = [{"a": 3, "b": -1}, {"b": 2}, {"a": -2, "c": 5}, {"c": 1, "a": 1}]
        types = [make_persona("a"), make_persona("b"), make_persona("c")]
        forward = QuizEngine(CatalogStore(BEANS, types, [make_question(d) for d in deltas]))
        backward = QuizEngine(CatalogStore(BEANS, types, [make_question(d) for d in reversed(deltas)]))
        r1 = _run(forward, [0] * 4)
        r2 = _run(backward, [0] * 4)
        assert dict(r1.ranking) == dict(r2.ranking) == {"a": 2, "b": 1, "c": 6}

    def test_unknown_persona_in_scores_ignored(self):
        types = [make_persona("a"), make_persona("b")]
        engine = QuizEngine(CatalogStore(BEANS, types, [make_question({"ghost": 9, "b": 1})]))
        result = _run(engine, [0])
        assert dict(result.ranking) == {"a": 0, "b": 1}


class TestClassification:
    def test_unique_maximum_always_wins(self):
        types = {p: make_persona(p) for p in "abcd"}
        scores = {"a": 3, "b": 7, "c": 7, "d": 9}
        for seed in range(50):
            result = classify(scores, types, random.Random(seed))
            assert result.winner.id == "d"
            assert result.runner_up.id in {"b", "c"}

    def test_tie_broken_by_shuffle_then_stable_sort(self):
        types = {p: make_persona(p) for p in "abc"}
        scores = {"a": 5, "b": 5, "c": 1}
        kept = classify(scores, types, ScriptedRandom())
        reversed_ = classify(scores, types, ScriptedRandom(reverse_shuffle=True))
        assert [pid for pid, _ in kept.ranking] == ["a", "b", "c"]
        assert [pid for pid, _ in reversed_.ranking] == ["b", "a", "c"]

    def test_tie_winner_is_roughly_uniform(self):
        types = {p: make_persona(p) for p in "ab"}
        scores = {"a": 4, "b": 4}
        rng = random.Random(20240601)
        wins = Counter(classify(scores, types, rng).winner.id for _ in range(2000))
        assert 850 < wins["a"] < 1150
        assert 850 < wins["b"] < 1150

    def test_three_way_tie_every_persona_can_win(self):
        scores = {"a": 2, "b": 2, "c": 2}
        rng = random.Random(7)
        winners = Counter(rank_scores(scores, rng)[0][0] for _ in range(900))
        assert set(winners) == {"a", "b", "c"}
        assert min(winners.values()) > 200

    def test_duplicate_persona_id_resolves_to_first(self):
        first = make_persona("a", ["x"])
        duplicate = make_persona("a", ["y"]).model_copy(update={"name": "shadow"})
        store = CatalogStore(BEANS, [first, make_persona("b"), duplicate], [make_question({"a": 1})])
        result = _run(QuizEngine(store, rng=ScriptedRandom()), [0])
        assert result.winner is first
        assert result.winner is store.get_type_by_id("a")

    def test_single_persona_has_no_runner_up(self):
        result = classify({"a": 0}, {"a": make_persona("a")}, ScriptedRandom())
        assert result.winner.id == "a"
        assert result.runner_up is None

    def test_empty_scores_rejected(self):
        with pytest.raises(DataUnavailable):
            classify({}, {}, ScriptedRandom())
