"""
Filter Splitter

Partitions a filter tree into one tree per classification key while keeping
the original nesting and conjunctions inside each partition.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Optional, Union

from filtersplit.classification.smart_default import (
    CROSS_TABLE_KEYS,
    HAS_ANY_OF,
    smart_default_indexer,
)
from filtersplit.diagnostics import SplitDiagnostics
from filtersplit.models.filters import (
    Filter,
    FilterNode,
    FilterSet,
    coerce_filter_set,
    partitions_to_dict,
)
from filtersplit.models.flags import TraverseFlags

logger = logging.getLogger(__name__)

DEFAULT_CONJUNCTION = "and"

SplitKeyFunction = Callable[[FilterNode], Optional[str]]
FlagsLike = Union[TraverseFlags, Mapping[str, Any], None]


@dataclass
class _Bucket:
    conjunction: str
    filters: list[FilterNode] = field(default_factory=list)


class FilterSplitter:
    """Splits a single tree level; nested levels get their own instance."""

    def __init__(
        self,
        tree: FilterSet,
        split_foo: SplitKeyFunction,
        flags: TraverseFlags,
        diagnostics: Optional[SplitDiagnostics] = None,
    ):
        self.tree = tree
        self.split_foo = split_foo
        self.flags = flags
        self.diagnostics = diagnostics
        self._buckets: dict[str, _Bucket] = {}

    def split(self) -> dict[str, FilterSet]:
        for item in self.tree.filters:
            if isinstance(item, FilterSet) and self.flags.sub_filters:
                self._process_group(item)
            else:
                self._process_simple(item, self.tree.conjunction)

        return {
            key: FilterSet(filters=tuple(bucket.filters), conjunction=bucket.conjunction)
            for key, bucket in self._buckets.items()
            if bucket.filters
        }

    def _get_or_create(self, key: str, conjunction: Optional[str]) -> _Bucket:
        bucket = self._buckets.get(key)
        if bucket is None:
            bucket = _Bucket(conjunction or self.tree.conjunction or DEFAULT_CONJUNCTION)
            self._buckets[key] = bucket
        return bucket

    def _nested(self, tree: FilterSet) -> dict[str, FilterSet]:
        return FilterSplitter(tree, self.split_foo, self.flags, self.diagnostics).split()

    def _incr(self, counter: str) -> None:
        if self.diagnostics is not None:
            self.diagnostics.incr(counter)

    def _process_group(self, group: FilterSet) -> None:
        nested = self._nested(group)
        if self.diagnostics is not None:
            self.diagnostics.record_group(len(nested))

        # Only unary and binary splits can be mirrored as sibling groups.
        if len(nested) not in (1, 2):
            logger.debug(
                "Dropping nested filter set spanning %d keys",
                len(nested),
                extra={"split_event": "group_dropped", "key_count": len(nested)},
            )
            return

        for key, partition in nested.items():
            rebuilt = replace(group, filters=partition.filters)
            self._get_or_create(key, self.tree.conjunction).filters.append(rebuilt)

    def _process_simple(self, node: FilterNode, parent_conjunction: Optional[str]) -> None:
        if isinstance(node, Filter) and node.operator == HAS_ANY_OF and node.is_cross_table:
            self._process_cross_table(node, parent_conjunction)
            return

        key = self.split_foo(node)
        if not key:
            logger.debug(
                "Excluding filter with no split key: %r",
                node,
                extra={
                    "split_event": "filter_excluded",
                    "operator": getattr(node, "operator", None) or None,
                },
            )
            self._incr("filters_excluded_count")
            return

        self._get_or_create(key, node.conjunction or parent_conjunction).filters.append(node)
        self._incr("filters_routed_count")

    def _process_cross_table(self, node: Filter, parent_conjunction: Optional[str]) -> None:
        self._incr("cross_table_filters_count")
        inner = self._nested(node.value.embedded)

        dropped = [key for key in inner if key not in CROSS_TABLE_KEYS]
        if dropped:
            logger.debug(
                "Cross-table filter does not propagate keys %s",
                dropped,
                extra={"split_event": "cross_table_keys_dropped", "keys": dropped},
            )

        for key in CROSS_TABLE_KEYS:
            if key not in inner:
                continue
            value = replace(node.value, embedded=inner[key], trailing=())
            bucket = self._get_or_create(key, node.conjunction or parent_conjunction)
            bucket.filters.append(replace(node, value=value))


def split_filters(
    filters: Union[FilterSet, Mapping[str, Any], None],
    split_foo: SplitKeyFunction = smart_default_indexer,
    traverse_flags: FlagsLike = None,
    *,
    diagnostics: Optional[SplitDiagnostics] = None,
) -> dict[str, FilterSet]:
    """
    Split a filter tree into per-key subsets.

    Args:
        filters: Tree to split, as a FilterSet or a plain mapping with a
            ``filtersSet`` list. Absent or malformed trees yield ``{}``.
        split_foo: Maps a leaf Filter to its key; a falsy result excludes it.
        traverse_flags: TraverseFlags or a mapping of them. With
            ``sub_filters`` off, nested sets are handed to ``split_foo`` as-is.
        diagnostics: Optional counters, aggregated across the whole recursion.

    Returns:
        Mapping of key to FilterSet, in the order keys were first seen. Nested
        sets whose filters span more than two keys are dropped. Cross-table
        filters are re-split and only their "default" and "smart" branches are
        kept, whatever keys ``split_foo`` produces.
    """
    tree = coerce_filter_set(filters)
    if tree is None:
        return {}
    flags = TraverseFlags.coerce(traverse_flags)
    return FilterSplitter(tree, split_foo, flags, diagnostics).split()


def split_filters_as_dicts(
    filters: Union[FilterSet, Mapping[str, Any], None],
    split_foo: SplitKeyFunction = smart_default_indexer,
    traverse_flags: FlagsLike = None,
) -> dict[str, dict[str, Any]]:
    """Same as split_filters, with plain dictionaries in and out."""
    return partitions_to_dict(split_filters(filters, split_foo, traverse_flags))
