"""Tests for primary/alternate bean selection, omakase and blend breakdown."""

from __future__ import annotations

import pytest

from momonga.catalog.store import CatalogStore
from momonga.engine.errors import DataUnavailable
from momonga.engine.quiz import Classification
from momonga.engine.selector import (
    OMAKASE_PERSONA,
    RecommendationSelector,
    alternate_message,
    share_text,
)
from tests.conftest import BEANS, ScriptedRandom, make_bean, make_persona


class TestPrimary:
    def test_random_pick_among_recommended(self, catalog):
        selector = RecommendationSelector(catalog, ScriptedRandom(choices=[1]))
        assert selector.pick_primary(make_persona("p", ["x", "z"])).id == "z"

    def test_every_recommended_bean_reachable(self, catalog):
        persona = make_persona("p", ["x", "y", "z"])
        picks = {
            RecommendationSelector(catalog, ScriptedRandom(choices=[i])).pick_primary(persona).id
            for i in range(3)
        }
        assert picks == {"x", "y", "z"}

    def test_empty_recommendations_fall_back_to_featured(self, catalog):
        selector = RecommendationSelector(catalog, ScriptedRandom())
        assert selector.pick_primary(make_persona("p")).id == "y"

    def test_dangling_recommendation_falls_back_to_featured(self, catalog):
        selector = RecommendationSelector(catalog, ScriptedRandom())
        assert selector.pick_primary(make_persona("p", ["missing"])).id == "y"

    def test_without_featured_flag_first_bean_is_used(self):
        store = CatalogStore([make_bean("first"), make_bean("second")], [], [])
        selector = RecommendationSelector(store, ScriptedRandom())
        assert selector.pick_primary(make_persona("p", ["gone"])).id == "first"

    def test_empty_catalog_is_an_error(self):
        selector = RecommendationSelector(CatalogStore(), ScriptedRandom())
        with pytest.raises(DataUnavailable):
            selector.pick_primary(make_persona("p", ["x"]))


class TestAlternate:
    def test_skips_primary_bean(self, catalog):
        selector = RecommendationSelector(catalog)
        primary = catalog.get_bean_by_id("x")
        alt = selector.pick_alternate(make_persona("r", ["x", "y"]), primary)
        assert alt.id == "y"

    def test_only_primary_means_no_alternate(self, catalog):
        selector = RecommendationSelector(catalog)
        primary = catalog.get_bean_by_id("x")
        assert selector.pick_alternate(make_persona("r", ["x", "x"]), primary) is None

    def test_skips_unresolvable_ids(self, catalog):
        selector = RecommendationSelector(catalog)
        primary = catalog.get_bean_by_id("x")
        alt = selector.pick_alternate(make_persona("r", ["ghost", "x", "z"]), primary)
        assert alt.id == "z"

    def test_empty_runner_up_list(self, catalog):
        selector = RecommendationSelector(catalog)
        assert selector.pick_alternate(make_persona("r"), catalog.get_bean_by_id("x")) is None

    def test_recommend_without_runner_up(self, catalog):
        selector = RecommendationSelector(catalog, ScriptedRandom())
        rec = selector.recommend(make_persona("a", ["x"]))
        assert rec.bean.id == "x"
        assert rec.alternate is None
        assert rec.alternate_persona is None

    def test_diagnose_uses_winner_and_runner_up(self, catalog):
        selector = RecommendationSelector(catalog, ScriptedRandom(choices=[0]))
        winner = catalog.get_type_by_id("a")
        runner_up = catalog.get_type_by_id("b")
        classification = Classification(winner, runner_up, (("a", 3), ("b", 2)))
        rec = selector.diagnose(classification)
        assert rec.persona.id == "a"
        assert rec.bean.id == "x"
        assert rec.alternate.id == "y"
        assert rec.alternate_persona.id == "b"
        assert not rec.omakase


class TestOmakase:
    def test_defaults_to_featured_bean(self, catalog):
        rec = RecommendationSelector(catalog).omakase()
        assert rec.bean.id == "y"
        assert rec.persona is OMAKASE_PERSONA
        assert rec.omakase
        assert rec.alternate is None

    def test_explicit_bean(self, catalog):
        rec = RecommendationSelector(catalog).omakase(catalog.get_bean_by_id("z"))
        assert rec.bean.id == "z"

    def test_empty_catalog(self):
        with pytest.raises(DataUnavailable):
            RecommendationSelector(CatalogStore()).omakase()


class TestBlend:
    def test_components_resolved_in_order(self, catalog):
        parts = RecommendationSelector(catalog).decompose_blend(catalog.get_bean_by_id("house"))
        assert [p.bean.id for p in parts] == ["x", "y"]
        assert [p.component.role for p in parts] == ["base", "accent"]
        assert parts[0].component.ratio == 60

    def test_missing_component_dropped(self):
        blend = make_bean(
            "b1",
            type="blend",
            blend={"components": [{"beanId": "x", "ratio": 60}, {"beanId": "y", "ratio": 40}]},
        )
        store = CatalogStore([make_bean("x"), blend], [], [])
        parts = RecommendationSelector(store).decompose_blend(blend)
        assert len(parts) == 1
        assert parts[0].bean.id == "x"
        assert parts[0].component.ratio == 60

    def test_ratio_optional(self, catalog):
        blend = make_bean("b2", type="blend", blend={"components": [{"beanId": "z", "role": "solo"}]})
        parts = RecommendationSelector(catalog).decompose_blend(blend)
        assert parts[0].component.ratio is None

    def test_single_origin_has_no_parts(self, catalog):
        assert RecommendationSelector(catalog).decompose_blend(catalog.get_bean_by_id("x")) == ()

    def test_blend_type_without_blend_data(self):
        bean = make_bean("odd", type="blend")
        assert not bean.is_blend
        assert RecommendationSelector(CatalogStore(BEANS)).decompose_blend(bean) == ()


def test_alternate_message_mentions_persona_and_bean(catalog):
    msg = alternate_message(catalog.get_bean_by_id("y"), make_persona("b"))
    assert "「b type」" in msg
    assert "Y" in msg


def test_share_text():
    assert "「夜ふかしタイプ」" in share_text("夜ふかしタイプ")
