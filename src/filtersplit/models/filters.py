"""
Filter Domain Model

Tagged node types for hierarchical filter trees, plus coercion from the
plain-mapping shape callers usually hold:

    {
        "conjunction": "and",
        "filtersSet": [
            {"operator": "eq", "value": 2},                   # Filter
            {"filtersSet": [...]},                            # nested FilterSet
            {"operator": "hasAnyOf",
             "value": ["cross-table", {"filtersSet": [...]}]}, # cross-table Filter
        ],
    }

Attributes absent from the input hold MISSING, so ``to_dict`` echoes back
exactly the keys that were present (``None`` and ``""`` included).
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)

CROSS_TABLE_TAG = "cross-table"

_FILTER_KEYS = {"operator", "value", "conjunction"}
_SET_KEYS = {"conjunction", "filtersSet"}


class _Missing:
    """Falsy marker for an attribute the input node did not carry."""

    _instance: Optional["_Missing"] = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"

    def __reduce__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


class FilterShapeError(ValueError):
    """Raised by strict coercion when a payload is not a filter tree."""


@dataclass(frozen=True)
class FilterSet:
    """Ordered group of filters and nested sets joined by a conjunction."""

    filters: tuple["FilterNode", ...] = ()
    conjunction: Optional[str] = MISSING
    extra: dict[str, Any] = field(default_factory=dict, hash=False)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = dict(self.extra)
        if self.conjunction is not MISSING:
            payload["conjunction"] = self.conjunction
        payload["filtersSet"] = [node.to_dict() for node in self.filters]
        return payload


@dataclass(frozen=True)
class CrossTableValue:
    """Value of a filter that embeds a whole filter tree for another table."""

    embedded: FilterSet
    trailing: tuple[Any, ...] = ()

    def to_list(self) -> list[Any]:
        return [CROSS_TABLE_TAG, self.embedded.to_dict(), *self.trailing]


@dataclass(frozen=True)
class Filter:
    """Single leaf criterion."""

    operator: Optional[str] = MISSING
    value: Any = MISSING
    conjunction: Optional[str] = MISSING
    extra: dict[str, Any] = field(default_factory=dict, hash=False)

    @property
    def is_cross_table(self) -> bool:
        return isinstance(self.value, CrossTableValue)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = dict(self.extra)
        if self.operator is not MISSING:
            payload["operator"] = self.operator
        if isinstance(self.value, CrossTableValue):
            payload["value"] = self.value.to_list()
        elif self.value is not MISSING:
            payload["value"] = self.value
        if self.conjunction is not MISSING:
            payload["conjunction"] = self.conjunction
        return payload


FilterNode = Union[Filter, FilterSet]


def is_sequence(value: Any) -> bool:
    """True for list-like values; strings and bytes are not filter sequences."""
    return isinstance(value, (list, tuple))


def is_cross_table_marker(value: Any) -> bool:
    """True if a value carries the cross-table tag, well-formed or not."""
    if isinstance(value, CrossTableValue):
        return True
    return is_sequence(value) and len(value) > 0 and value[0] == CROSS_TABLE_TAG


def is_filter_set_payload(payload: Any) -> bool:
    return isinstance(payload, Mapping) and is_sequence(payload.get("filtersSet"))


def _coerce_value(value: Any, *, strict: bool) -> Any:
    if not (is_sequence(value) and len(value) >= 2 and value[0] == CROSS_TABLE_TAG):
        return value
    embedded = value[1]
    if isinstance(embedded, FilterSet):
        return CrossTableValue(embedded=embedded, trailing=tuple(value[2:]))
    if is_filter_set_payload(embedded):
        return CrossTableValue(
            embedded=_coerce_set(embedded, strict=strict),
            trailing=tuple(value[2:]),
        )
    return value


def _coerce_set(payload: Mapping[str, Any], *, strict: bool) -> FilterSet:
    filters = []
    for idx, entry in enumerate(payload["filtersSet"]):
        node = coerce_node(entry, strict=strict)
        if node is None:
            logger.debug("Skipping malformed filter entry at index %d: %r", idx, entry)
            continue
        filters.append(node)
    return FilterSet(
        filters=tuple(filters),
        conjunction=payload.get("conjunction", MISSING),
        extra={k: v for k, v in payload.items() if k not in _SET_KEYS},
    )


def coerce_node(payload: Any, *, strict: bool = False) -> Optional[FilterNode]:
    """
    Build a Filter or FilterSet from a mapping.

    Model instances pass through unchanged. A mapping whose ``filtersSet`` is a
    list becomes a FilterSet; any other mapping is a leaf Filter (a non-list
    ``filtersSet`` is kept in ``extra``). Anything else yields None, or raises
    FilterShapeError when ``strict`` is set.
    """
    if isinstance(payload, (Filter, FilterSet)):
        return payload
    if not isinstance(payload, Mapping):
        if strict:
            raise FilterShapeError(
                f"Filter entries must be mappings; got {type(payload).__name__}."
            )
        return None
    if is_filter_set_payload(payload):
        return _coerce_set(payload, strict=strict)

    return Filter(
        operator=payload.get("operator", MISSING),
        value=_coerce_value(payload.get("value", MISSING), strict=strict),
        conjunction=payload.get("conjunction", MISSING),
        extra={k: v for k, v in payload.items() if k not in _FILTER_KEYS},
    )


def coerce_filter_set(payload: Any, *, strict: bool = False) -> Optional[FilterSet]:
    """
    Build the top-level FilterSet of a tree.

    Returns None for an absent tree or one whose ``filtersSet`` is not a list.
    """
    if isinstance(payload, FilterSet):
        return payload
    if is_filter_set_payload(payload):
        return _coerce_set(payload, strict=strict)
    if strict:
        raise FilterShapeError("Expected a mapping with a 'filtersSet' list.")
    return None


def partitions_to_dict(partitions: Mapping[str, FilterSet]) -> dict[str, dict[str, Any]]:
    return {key: filter_set.to_dict() for key, filter_set in partitions.items()}
