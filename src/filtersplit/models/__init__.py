"""
Filter Domain Models

Export the filter tree node types for external consumption.
"""

from typing import TYPE_CHECKING

__all__ = ["Filter", "FilterSet", "CrossTableValue", "TraverseFlags"]


if TYPE_CHECKING:
    from .filters import CrossTableValue, Filter, FilterSet
    from .flags import TraverseFlags


def __getattr__(name: str) -> type:
    if name in ("Filter", "FilterSet", "CrossTableValue"):
        from . import filters

        return getattr(filters, name)
    if name == "TraverseFlags":
        from .flags import TraverseFlags

        return TraverseFlags
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
