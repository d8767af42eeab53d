"""
Core Module - Guards and Structural Validator.

============================================================
RESPONSIBILITY
============================================================
Checks an untyped decoded JSON value against a declarative
description of its expected shape.

- Guard: a total predicate for one field
- ArrayRule: container check plus per-element check
- GuardsMap: field name -> Guard | GuardsMap | ArrayRule
- validate / is_: the single authority on "does this value
  match the expected shape"

============================================================
RULES
============================================================
- A GuardsMap lists every key of the entity it describes.
  Partial checks are expressed with a selector, never with a
  partial map.
- Without a selector every key is required and checked.
- With a selector only the named keys are checked; a nested
  selector scopes the check of a nested entity or of each
  element of an array of entities.
- The validator never raises. A guard that raises counts as
  a mismatch.

============================================================
"""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union


logger = logging.getLogger(__name__)


Guard = Callable[[Any], bool]

# Selector values are True (include) or a nested selector; see core.selectors.
Selector = Mapping[str, Any]


@dataclass(frozen=True)
class ArrayRule:
    """Rule for an array field: ``this`` checks the container, ``every`` each element."""

    this: Guard
    every: Union[Guard, "GuardsMap"]


GuardsMap = Mapping[str, Union[Guard, "GuardsMap", ArrayRule]]

Rules = Union[GuardsMap, ArrayRule, Guard]


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a validation: matched, or the location and cause of the first mismatch."""

    matched: bool
    reason: Optional[str] = None

    def __bool__(self) -> bool:
        return self.matched


_MATCHED = ValidationResult(True)


# ============================================================
# GUARD FACTORIES
# ============================================================

def is_bool(value: Any) -> bool:
    return isinstance(value, bool)


def is_str(value: Any) -> bool:
    return isinstance(value, str)


def is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_null(value: Any) -> bool:
    return value is None


def is_mapping(value: Any) -> bool:
    return isinstance(value, Mapping)


def is_list(value: Any) -> bool:
    return _is_sequence(value)


def unchecked(value: Any) -> bool:
    """Placeholder for a field nobody asked about: accepts anything, even absence."""
    return True


def equals(expected: Any) -> Guard:
    """Exact match; ``True`` does not equal ``1``."""

    def guard(value: Any) -> bool:
        return type(value) is type(expected) and value == expected

    guard.__name__ = f"equals({expected!r})"
    return guard


def one_of(*allowed: Any) -> Guard:
    def guard(value: Any) -> bool:
        return any(type(value) is type(a) and value == a for a in allowed)

    guard.__name__ = f"one_of{allowed!r}"
    return guard


def optional(inner: Guard) -> Guard:
    def guard(value: Any) -> bool:
        return value is None or inner(value)

    guard.__name__ = f"optional({_guard_name(inner)})"
    return guard


def tuple_of(*guards: Guard, strict: bool = False) -> Guard:
    """
    Positional array, e.g. ``[price, amount, volume]``.

    Args:
        guards: One guard per position
        strict: Require the exact length instead of at least ``len(guards)``
    """

    def guard(value: Any) -> bool:
        if not _is_sequence(value):
            return False
        if len(value) < len(guards) or (strict and len(value) != len(guards)):
            return False
        return all(g(item) for g, item in zip(guards, value))

    guard.__name__ = f"tuple_of({', '.join(_guard_name(g) for g in guards)})"
    return guard


def list_of(inner: Guard) -> Guard:
    def guard(value: Any) -> bool:
        return _is_sequence(value) and all(inner(item) for item in value)

    guard.__name__ = f"list_of({_guard_name(inner)})"
    return guard


def mapping_of(value_guard: Guard) -> Guard:
    """Object with arbitrary string keys whose values all satisfy ``value_guard``."""

    def guard(value: Any) -> bool:
        return isinstance(value, Mapping) and all(
            isinstance(k, str) and value_guard(v) for k, v in value.items()
        )

    guard.__name__ = f"mapping_of({_guard_name(value_guard)})"
    return guard


# ============================================================
# VALIDATOR
# ============================================================

def validate(
    value: Any,
    rules: Rules,
    selector: Optional[Selector] = None,
) -> ValidationResult:
    """
    Validate a decoded value against a GuardsMap, ArrayRule or Guard.

    Args:
        value: Decoded JSON value
        rules: Expected shape
        selector: Optional subset of fields to check

    Returns:
        ValidationResult with the first mismatch, if any
    """
    reason = _check_rule(value, rules, selector, "$")
    if reason is None:
        return _MATCHED
    logger.debug(f"[validator] Mismatch: {reason}")
    return ValidationResult(False, reason)


def is_(
    value: Any,
    rules: Rules,
    selector: Optional[Selector] = None,
) -> bool:
    """Return True if ``value`` matches ``rules`` (scoped by ``selector``)."""
    return validate(value, rules, selector).matched


def _check_rule(
    value: Any,
    rule: Any,
    selector: Optional[Selector],
    path: str,
) -> Optional[str]:
    if isinstance(rule, ArrayRule):
        return _check_array(value, rule, selector, path)
    if isinstance(rule, Mapping):
        return _check_map(value, rule, selector, path)
    if _apply(rule, value):
        return None
    return f"{path}: {_describe(value)} rejected by {_guard_name(rule)}"


def _check_map(
    value: Any,
    guards_map: GuardsMap,
    selector: Optional[Selector],
    path: str,
) -> Optional[str]:
    if not isinstance(value, Mapping):
        return f"{path}: expected an object, got {_describe(value)}"

    for key, rule, sub_selector in _selected_rules(guards_map, selector):
        if key not in value:
            if rule is unchecked:
                continue
            return f"{path}.{key}: missing"
        reason = _check_rule(value[key], rule, sub_selector, f"{path}.{key}")
        if reason is not None:
            return reason
    return None


def _check_array(
    value: Any,
    rule: ArrayRule,
    selector: Optional[Selector],
    path: str,
) -> Optional[str]:
    if not _apply(rule.this, value):
        return f"{path}: {_describe(value)} rejected by {_guard_name(rule.this)}"
    if not _is_sequence(value):
        return f"{path}: expected an array, got {_describe(value)}"

    for index, item in enumerate(value):
        # A nested selector only narrows element maps; a plain element guard applies in full.
        reason = _check_rule(item, rule.every, selector, f"{path}[{index}]")
        if reason is not None:
            return reason
    return None


def _selected_rules(guards_map: GuardsMap, selector: Optional[Selector]):
    """Yield (key, rule, nested selector) for every key that must be checked."""
    if selector is None:
        for key, rule in guards_map.items():
            yield key, rule, None
        return

    for key, flag in selector.items():
        if key not in guards_map:
            continue
        if flag is True:
            yield key, guards_map[key], None
        elif isinstance(flag, Mapping):
            yield key, guards_map[key], flag


def _apply(guard: Guard, value: Any) -> bool:
    try:
        return bool(guard(value))
    except Exception as e:
        logger.debug(f"[validator] Guard {_guard_name(guard)} raised {e!r}")
        return False


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def _guard_name(guard: Any) -> str:
    return getattr(guard, "__name__", repr(guard))


def _describe(value: Any) -> str:
    text = repr(value)
    if len(text) > 60:
        text = text[:57] + "..."
    return f"{type(value).__name__} {text}"
