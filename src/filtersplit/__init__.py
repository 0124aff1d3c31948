"""
Filter Split

Partitions hierarchical filter trees by evaluation strategy.
"""

from .classification import smart_default_indexer
from .models.filters import (
    CrossTableValue,
    Filter,
    FilterSet,
    FilterShapeError,
    coerce_filter_set,
    partitions_to_dict,
)
from .models.flags import TraverseFlags
from .splitting import split_filters, split_filters_as_dicts

__all__ = [
    "CrossTableValue",
    "Filter",
    "FilterSet",
    "FilterShapeError",
    "TraverseFlags",
    "coerce_filter_set",
    "partitions_to_dict",
    "smart_default_indexer",
    "split_filters",
    "split_filters_as_dicts",
]

__version__ = "0.1.0"
