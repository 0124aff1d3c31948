"""
Smart/Default Classifier

Routes filters handled by the heuristic ("smart") evaluator away from those the
default evaluator handles.
"""

from collections.abc import Mapping
from typing import Any, Optional

from filtersplit.models.filters import (
    CROSS_TABLE_TAG,
    CrossTableValue,
    Filter,
    FilterSet,
    coerce_filter_set,
    coerce_node,
    is_cross_table_marker,
    is_filter_set_payload,
    is_sequence,
)

SMART = "smart"
DEFAULT = "default"
HAS_ANY_OF = "hasAnyOf"

# Only these keys survive a recursive split of a cross-table payload.
CROSS_TABLE_KEYS = (DEFAULT, SMART)

__all__ = [
    "CROSS_TABLE_KEYS",
    "CROSS_TABLE_TAG",
    "DEFAULT",
    "HAS_ANY_OF",
    "SMART",
    "smart_default_indexer",
]


def _embedded_set(value: Any) -> Optional[FilterSet]:
    """Second element of a list value as a FilterSet, whatever its tag."""
    if isinstance(value, CrossTableValue):
        return value.embedded
    if not (is_sequence(value) and len(value) > 1):
        return None
    nested = value[1]
    if isinstance(nested, FilterSet):
        return nested
    if is_filter_set_payload(nested):
        return coerce_filter_set(nested)
    return None


def _has_any_of_value(value: Any) -> bool:
    if isinstance(value, CrossTableValue):
        return True
    return is_sequence(value) and len(value) > 1


def smart_default_indexer(node: Any) -> Optional[str]:
    """
    Classify a single filter as "smart", "default" or excluded (None).

    - No operator: excluded. This covers filter sets passed in directly.
    - ``smart`` operator: "smart", unless its value is a cross-table marker.
    - ``hasAnyOf`` whose embedded set holds a ``smart`` filter at its top
      level: "smart".
    - Anything else: "default".

    Plain mappings are accepted and coerced first. Never recurses.
    """
    if isinstance(node, Mapping):
        node = coerce_node(node)
    if not isinstance(node, Filter) or not node.operator:
        return None

    if node.operator == SMART:
        if is_cross_table_marker(node.value):
            return None
        return SMART

    if node.operator == HAS_ANY_OF and _has_any_of_value(node.value):
        nested = _embedded_set(node.value)
        if nested is not None and any(
            isinstance(child, Filter) and child.operator == SMART for child in nested.filters
        ):
            return SMART

    return DEFAULT
