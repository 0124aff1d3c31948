"""
Splitting Submodule

Exports the recursive filter tree splitter.
"""

from .splitter import DEFAULT_CONJUNCTION, FilterSplitter, split_filters, split_filters_as_dicts

__all__ = ["DEFAULT_CONJUNCTION", "FilterSplitter", "split_filters", "split_filters_as_dicts"]
