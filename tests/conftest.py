"""
Shared pytest fixtures for test suite.
"""

import pytest

from filter_builders import eq, smart


@pytest.fixture
def mixed_tree():
    """Top-level smart and default filters with a mixed nested group."""
    return {
        "conjunction": "or",
        "filtersSet": [
            smart(1),
            eq(2),
            {"conjunction": "and", "filtersSet": [smart(3), eq(4), eq(5)]},
        ],
    }


@pytest.fixture
def letter_indexer():
    """Returns a classifier keyed on the first letter of the operator."""

    def _classify(node):
        operator = getattr(node, "operator", None)
        return operator[0] if operator else None

    return _classify
