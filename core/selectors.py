"""
Core Module - Field Selectors and Projector.

============================================================
RESPONSIBILITY
============================================================
Lets a caller ask for a subset of an entity's fields.

A selector mirrors the entity's shape. Every leaf is the
inclusion marker ``INCLUDE`` or a nested selector:

    {"data": {"BUY": INCLUDE, "SELL": INCLUDE}}

- INCLUDE: check the field in full
- nested selector: check the field, but only the sub-fields
  named therein (for arrays: in every element)
- absent key: do not check the field

Unknown keys are ignored, so a selector written against a
newer entity still works against an older map.

============================================================
PROJECTION CONTRACT
============================================================
For entity ``T`` and selector ``S`` the projected result
``FieldsSelectorResult[T, S]`` has:

- ``T[k]`` for keys marked INCLUDE
- the projected nested entity for keys with a nested selector
  (an array of projected elements for array fields)
- an unchecked, permissive type for every other key; the key
  is not removed

The runtime value is never altered. ``project`` computes the
GuardsMap that a selector leaves in force, so that

    is_(v, m, s) == is_(v, project(m, s))

holds for every value ``v``.

============================================================
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Dict, Optional, Union

from core.guards import ArrayRule, GuardsMap, unchecked


INCLUDE = True

FieldsSelector = Mapping[str, Union[bool, "FieldsSelector"]]

# Runtime view of a projected entity: the decoded mapping itself.
FieldsSelectorResult = Mapping[str, Any]


def project(
    guards_map: GuardsMap,
    selector: Optional[FieldsSelector],
) -> GuardsMap:
    """
    Compute the rules a selector leaves in force.

    Args:
        guards_map: Full rules of the entity
        selector: Requested fields (None means the full shape)

    Returns:
        GuardsMap with the same keys, unselected ones mapped to ``unchecked``
    """
    if selector is None:
        return guards_map

    projected: Dict[str, Any] = {}
    for key, rule in guards_map.items():
        flag = selector.get(key)
        if flag is True:
            projected[key] = rule
        elif isinstance(flag, Mapping):
            projected[key] = _project_rule(rule, flag)
        else:
            projected[key] = unchecked
    return MappingProxyType(projected)


def _project_rule(rule: Any, selector: FieldsSelector) -> Any:
    if isinstance(rule, ArrayRule):
        if isinstance(rule.every, Mapping):
            return ArrayRule(this=rule.this, every=project(rule.every, selector))
        return rule
    if isinstance(rule, Mapping):
        return project(rule, selector)
    return rule


def merge_selectors(*selectors: Optional[FieldsSelector]) -> Optional[FieldsSelector]:
    """
    Union of selectors; INCLUDE wins over a nested selector.

    None stands for "everything" and absorbs the others.
    """
    merged: Dict[str, Any] = {}
    for selector in selectors:
        if selector is None:
            return None
        for key, flag in selector.items():
            current = merged.get(key)
            if flag is True or current is True:
                merged[key] = True
            elif isinstance(flag, Mapping):
                merged[key] = merge_selectors(current, flag) if isinstance(current, Mapping) else dict(flag)
    return merged
