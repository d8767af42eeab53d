"""
Selector and Projector Tests.

============================================================
PURPOSE
============================================================
The projection contract of field selectors.

TEST CATEGORIES:
- project(): keys kept, unselected keys become unchecked
- Equivalence: is_(v, m, s) == is_(v, project(m, s))
- merge_selectors()

============================================================
"""

import pytest

from core.guards import ArrayRule, is_, is_int, is_list, is_number, is_str, unchecked
from core.selectors import INCLUDE, merge_selectors, project


TRADE_MAP = {
    "price": is_number,
    "amount": is_number,
}

ENTITY_MAP = {
    "symbol": is_str,
    "timestamp": is_int,
    "trades": ArrayRule(this=is_list, every=TRADE_MAP),
    "stats": {
        "high": is_number,
        "low": is_number,
    },
}


# ============================================================
# PROJECT
# ============================================================

class TestProject:
    """Tests for project()."""

    def test_none_selector_keeps_full_map(self):
        assert project(ENTITY_MAP, None) is ENTITY_MAP

    def test_keys_are_never_dropped(self):
        projected = project(ENTITY_MAP, {"symbol": INCLUDE})

        assert set(projected) == set(ENTITY_MAP)

    def test_included_key_keeps_rule(self):
        projected = project(ENTITY_MAP, {"symbol": INCLUDE, "trades": INCLUDE})

        assert projected["symbol"] is is_str
        assert projected["trades"] is ENTITY_MAP["trades"]
        assert projected["timestamp"] is unchecked
        assert projected["stats"] is unchecked

    def test_nested_selector_projects_nested_map(self):
        projected = project(ENTITY_MAP, {"stats": {"high": INCLUDE}})

        assert projected["stats"]["high"] is is_number
        assert projected["stats"]["low"] is unchecked

    def test_nested_selector_projects_array_elements(self):
        projected = project(ENTITY_MAP, {"trades": {"price": INCLUDE}})

        rule = projected["trades"]
        assert isinstance(rule, ArrayRule)
        assert rule.this is is_list
        assert rule.every["price"] is is_number
        assert rule.every["amount"] is unchecked

    def test_projection_is_read_only(self):
        projected = project(ENTITY_MAP, {"symbol": INCLUDE})

        with pytest.raises(TypeError):
            projected["symbol"] = is_int


# ============================================================
# EQUIVALENCE
# ============================================================

SELECTORS = [
    None,
    {},
    {"symbol": INCLUDE},
    {"trades": INCLUDE},
    {"trades": {"amount": INCLUDE}},
    {"stats": {"low": INCLUDE}, "timestamp": INCLUDE},
    {"unknown": INCLUDE},
]

VALUES = [
    {"symbol": "ETH-BTC", "timestamp": 1, "trades": [{"price": 1, "amount": 2}], "stats": {"high": 2, "low": 1}},
    {"symbol": "ETH-BTC", "timestamp": "1", "trades": [], "stats": {"high": 2, "low": 1}},
    {"symbol": "ETH-BTC", "timestamp": 1, "trades": [{"price": "1", "amount": 2}], "stats": {"high": 2}},
    {"symbol": 1, "trades": None},
    {},
    None,
]


class TestEquivalence:
    """Validating with a selector equals validating against the projection."""

    @pytest.mark.parametrize("selector", SELECTORS)
    @pytest.mark.parametrize("value", VALUES)
    def test_projection_matches_selector(self, value, selector):
        assert is_(value, ENTITY_MAP, selector) == is_(value, project(ENTITY_MAP, selector))

    def test_unchecked_keys_may_be_absent(self):
        value = {"symbol": "ETH-BTC"}

        assert is_(value, project(ENTITY_MAP, {"symbol": INCLUDE}))
        assert not is_(value, ENTITY_MAP)


# ============================================================
# MERGE
# ============================================================

class TestMergeSelectors:
    """Tests for merge_selectors()."""

    def test_union_of_keys(self):
        merged = merge_selectors({"symbol": INCLUDE}, {"timestamp": INCLUDE})

        assert merged == {"symbol": True, "timestamp": True}

    def test_include_wins_over_nested(self):
        merged = merge_selectors({"stats": {"high": INCLUDE}}, {"stats": INCLUDE})

        assert merged == {"stats": True}

    def test_nested_selectors_merge(self):
        merged = merge_selectors({"stats": {"high": INCLUDE}}, {"stats": {"low": INCLUDE}})

        assert merged == {"stats": {"high": True, "low": True}}

    def test_none_absorbs(self):
        assert merge_selectors({"symbol": INCLUDE}, None) is None
