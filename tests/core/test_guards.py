"""
Validator Tests.

============================================================
PURPOSE
============================================================
Accept/reject decisions of the structural validator.

TEST CATEGORIES:
- Primitive guards and guard factories
- Full-shape validation (no selector)
- Selector-scoped validation
- Array rules
- Totality: the validator never raises

============================================================
"""

import pytest

from core.guards import (
    ArrayRule,
    ValidationResult,
    equals,
    is_,
    is_bool,
    is_int,
    is_list,
    is_number,
    is_str,
    list_of,
    mapping_of,
    one_of,
    optional,
    tuple_of,
    unchecked,
    validate,
)


ORDER_MAP = {
    "price": is_number,
    "amount": is_number,
    "side": one_of("BUY", "SELL"),
}

BOOK_MAP = {
    "_comment": is_str,
    "BUY": ArrayRule(this=is_list, every=tuple_of(is_number, is_number, is_number)),
    "SELL": ArrayRule(this=is_list, every=tuple_of(is_number, is_number, is_number)),
    "timestamp": is_int,
}

ACCOUNT_MAP = {
    "name": is_str,
    "active": is_bool,
    "orders": ArrayRule(this=is_list, every=ORDER_MAP),
    "limits": {
        "daily": is_number,
        "currency": is_str,
    },
}


@pytest.fixture
def account():
    return {
        "name": "main",
        "active": True,
        "orders": [
            {"price": 100, "amount": 1.5, "side": "BUY"},
            {"price": 101.25, "amount": 2, "side": "SELL"},
        ],
        "limits": {"daily": 1000, "currency": "BTC"},
    }


# ============================================================
# PRIMITIVE GUARDS
# ============================================================

class TestPrimitiveGuards:
    """Tests for the primitive guards and factories."""

    def test_numbers_exclude_bool(self):
        assert is_number(1)
        assert is_number(1.5)
        assert not is_number(True)
        assert not is_int(False)
        assert not is_int(1.0)

    def test_list_excludes_strings(self):
        assert is_list([])
        assert is_list((1, 2))
        assert not is_list("abc")
        assert not is_list(b"abc")

    def test_equals_is_type_exact(self):
        assert equals(True)(True)
        assert not equals(True)(1)
        assert not equals(0)(False)
        assert equals("OK")("OK")

    def test_one_of(self):
        guard = one_of("bid", "ask")

        assert guard("bid")
        assert not guard("BID")
        assert not guard(None)

    def test_optional(self):
        guard = optional(is_str)

        assert guard(None)
        assert guard("x")
        assert not guard(1)

    def test_tuple_of(self):
        guard = tuple_of(is_number, is_str)

        assert guard([1, "a"])
        assert guard([1, "a", "extra"])
        assert not guard([1])
        assert not guard(["a", 1])
        assert not tuple_of(is_number, is_number, strict=True)([1, 2, 3])

    def test_list_of_and_mapping_of(self):
        assert list_of(is_str)(["a", "b"])
        assert not list_of(is_str)(["a", 1])
        assert mapping_of(is_number)({"BTC": 1.0, "ETH": 2})
        assert not mapping_of(is_number)({"BTC": "1.0"})

    def test_unchecked_accepts_anything(self):
        assert unchecked(None)
        assert unchecked(object())


# ============================================================
# FULL SHAPE
# ============================================================

class TestFullShape:
    """Tests for validation without a selector."""

    def test_valid_value_matches(self, account):
        assert is_(account, ACCOUNT_MAP)

    def test_missing_key_rejected(self, account):
        del account["active"]

        result = validate(account, ACCOUNT_MAP)

        assert not result.matched
        assert result.reason == "$.active: missing"

    def test_wrong_primitive_rejected(self, account):
        account["limits"]["daily"] = "1000"

        result = validate(account, ACCOUNT_MAP)

        assert not result
        assert result.reason.startswith("$.limits.daily:")

    def test_extra_keys_ignored(self, account):
        account["unexpected"] = 1

        assert is_(account, ACCOUNT_MAP)

    @pytest.mark.parametrize("value", [None, 1, "text", [], [{"name": "main"}]])
    def test_non_object_rejected(self, value):
        assert is_(value, ACCOUNT_MAP) is False

    def test_unexpected_null_rejected(self, account):
        account["limits"] = None

        assert not is_(account, ACCOUNT_MAP)

    def test_result_is_truthy_on_match(self, account):
        result = validate(account, ACCOUNT_MAP)

        assert result == ValidationResult(True)
        assert bool(result)


# ============================================================
# SELECTOR
# ============================================================

class TestSelector:
    """Tests for selector-scoped validation."""

    def test_subset_never_rejects_full_value(self, account):
        selectors = [
            {},
            {"name": True},
            {"orders": True},
            {"orders": {"price": True}},
            {"limits": {"currency": True}},
            {"name": True, "active": True, "orders": True, "limits": True},
        ]

        for selector in selectors:
            assert is_(account, ACCOUNT_MAP, selector), selector

    def test_selection_narrows_obligation(self, account):
        account["active"] = "yes"

        assert not is_(account, ACCOUNT_MAP)
        assert is_(account, ACCOUNT_MAP, {"name": True, "orders": True})

    def test_selected_key_still_checked(self, account):
        account["name"] = 42

        assert not is_(account, ACCOUNT_MAP, {"name": True})

    def test_nested_selector_scopes_nested_map(self, account):
        account["limits"]["daily"] = None

        assert is_(account, ACCOUNT_MAP, {"limits": {"currency": True}})
        assert not is_(account, ACCOUNT_MAP, {"limits": True})

    def test_nested_selector_applies_per_array_element(self, account):
        account["orders"][1]["side"] = "HOLD"

        assert is_(account, ACCOUNT_MAP, {"orders": {"price": True, "amount": True}})
        assert not is_(account, ACCOUNT_MAP, {"orders": {"side": True}})

    def test_unknown_selector_keys_ignored(self, account):
        assert is_(account, ACCOUNT_MAP, {"name": True, "nickname": True, "limits": {"weekly": True}})

    def test_false_flag_excludes(self, account):
        account["active"] = None

        assert is_(account, ACCOUNT_MAP, {"active": False, "name": True})

    def test_selected_missing_key_rejected(self, account):
        del account["limits"]

        assert not is_(account, ACCOUNT_MAP, {"limits": {"currency": True}})

    def test_selector_on_non_object_rejected(self):
        assert not is_(None, ACCOUNT_MAP, {"name": True})


# ============================================================
# ARRAY RULES
# ============================================================

class TestArrayRules:
    """Tests for {this, every} rules."""

    def test_empty_array_matches(self):
        rule = ArrayRule(this=is_list, every=ORDER_MAP)

        assert is_([], rule)

    def test_bad_element_rejected(self):
        rule = ArrayRule(this=is_list, every=ORDER_MAP)

        result = validate([{"price": 1, "amount": 1, "side": "BUY"}, {"price": "x"}], rule)

        assert not result.matched
        assert result.reason.startswith("$[1]")

    def test_container_guard_checked_first(self):
        rule = ArrayRule(this=is_list, every=is_number)

        assert not is_({"0": 1}, rule)
        assert not is_("123", rule)

    def test_order_book_sides(self):
        book = {
            "_comment": "generated",
            "BUY": [[100, 1, 100]],
            "SELL": [[101, 2, 202]],
            "timestamp": 1,
        }

        assert is_(book, BOOK_MAP)

        book["SELL"].append([101, "2", 202])
        assert not is_(book, BOOK_MAP)
        assert is_(book, BOOK_MAP, {"BUY": True})


# ============================================================
# TOTALITY
# ============================================================

class TestTotality:
    """The validator reports a mismatch instead of raising."""

    def test_raising_guard_is_mismatch(self):
        def explode(value):
            raise KeyError("boom")

        assert is_({"a": 1}, {"a": explode}) is False

    def test_guard_on_wrong_type_is_mismatch(self):
        def first_is_positive(value):
            return value[0] > 0

        assert not is_({"a": 5}, {"a": first_is_positive})
        assert is_({"a": [1]}, {"a": first_is_positive})

    @pytest.mark.parametrize("error", [ZeroDivisionError, ArithmeticError, RuntimeError, LookupError])
    def test_any_guard_exception_is_mismatch(self, error):
        def explode(value):
            raise error("boom")

        assert is_({"a": 1}, {"a": explode}) is False

    def test_division_guard(self):
        assert is_({"a": 1}, {"a": lambda v: 1 / 0}) is False
        assert not validate({"a": 1}, {"a": lambda v: 1 / 0}).matched
