"""
Traversal flags for the filter splitter.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional, Union


@dataclass(frozen=True)
class TraverseFlags:
    """
    Controls how the splitter walks a filter tree.

    ``cross_filters`` is accepted for interface compatibility only: cross-table
    payloads are always split recursively whatever its value.
    """

    cross_filters: bool = False
    sub_filters: bool = True

    @classmethod
    def from_mapping(cls, payload: Optional[Mapping[str, Any]]) -> "TraverseFlags":
        """Accepts camelCase (``subFilters``) or snake_case (``sub_filters``) keys."""
        if not payload:
            return cls()
        cross = payload.get("crossFilters", payload.get("cross_filters", False))
        sub = payload.get("subFilters", payload.get("sub_filters", True))
        return cls(cross_filters=bool(cross), sub_filters=bool(sub))

    @classmethod
    def coerce(cls, value: Union["TraverseFlags", Mapping[str, Any], None]) -> "TraverseFlags":
        if isinstance(value, TraverseFlags):
            return value
        return cls.from_mapping(value)


DEFAULT_TRAVERSE_FLAGS = TraverseFlags()
