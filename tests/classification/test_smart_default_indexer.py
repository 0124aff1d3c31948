"""
Unit tests for the smart/default classifier.
"""

import pytest

from filter_builders import cross_table, eq, smart
from filtersplit.classification import CROSS_TABLE_KEYS, smart_default_indexer
from filtersplit.models.filters import CrossTableValue, Filter, FilterSet, coerce_node


def test_smart_operator():
    assert smart_default_indexer(smart(42)) == "smart"


def test_other_operator_is_default():
    assert smart_default_indexer(eq("X")) == "default"


@pytest.mark.parametrize("payload", [{"value": "no-operator"}, {"operator": "", "value": 1}])
def test_missing_operator_is_excluded(payload):
    assert smart_default_indexer(payload) is None


def test_smart_cross_table_marker_is_excluded():
    assert smart_default_indexer({"operator": "smart", "value": ["cross-table", {"filtersSet": []}]}) is None
    # Malformed payloads still carry the marker.
    assert smart_default_indexer({"operator": "smart", "value": ["cross-table"]}) is None


def test_smart_with_other_list_value():
    assert smart_default_indexer({"operator": "smart", "value": ["a", "b"]}) == "smart"


def test_has_any_of_with_smart_child_is_smart():
    assert smart_default_indexer(cross_table(eq(1), smart(2))) == "smart"


def test_has_any_of_without_smart_child_is_default():
    assert smart_default_indexer(cross_table(eq(1))) == "default"


def test_has_any_of_only_inspects_top_level_children():
    nested = cross_table({"filtersSet": [smart(1)]})
    assert smart_default_indexer(nested) == "default"


def test_has_any_of_with_plain_list_is_default():
    assert smart_default_indexer({"operator": "hasAnyOf", "value": ["a", "b"]}) == "default"
    assert smart_default_indexer({"operator": "hasAnyOf", "value": ["a"]}) == "default"


def test_has_any_of_with_model_set_in_list():
    node = Filter(operator="hasAnyOf", value=["x", FilterSet(filters=(Filter(operator="smart"),))])
    assert smart_default_indexer(node) == "smart"


def test_filter_set_is_excluded():
    assert smart_default_indexer({"filtersSet": [smart(1)]}) is None
    assert smart_default_indexer(FilterSet()) is None


def test_accepts_model_nodes():
    node = coerce_node(cross_table(smart(1)))
    assert isinstance(node.value, CrossTableValue)
    assert smart_default_indexer(node) == "smart"


def test_cross_table_keys():
    assert CROSS_TABLE_KEYS == ("default", "smart")


def test_has_any_of_with_other_tag_mapping_payload_is_smart():
    payload = {"operator": "hasAnyOf", "value": ["other", {"filtersSet": [smart(1)]}]}
    assert smart_default_indexer(payload) == "smart"
    assert smart_default_indexer(coerce_node(payload)) == "smart"


def test_has_any_of_with_other_tag_model_payload_is_smart():
    node = Filter(operator="hasAnyOf", value=["other", FilterSet(filters=(Filter(operator="smart"),))])
    assert smart_default_indexer(node) == "smart"


def test_has_any_of_with_other_tag_without_smart_is_default():
    payload = {"operator": "hasAnyOf", "value": ["other", {"filtersSet": [eq(1)]}]}
    assert smart_default_indexer(payload) == "default"
