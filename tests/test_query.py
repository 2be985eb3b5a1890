"""Tests for the query engine: suggestions, filtering, sorting, categories."""

import json

import pytest

from conftest import raw_item
from core.catalog import ITEM_LIST_KEY, parse_catalog
from core.models import SORT_ASC, SORT_DESC, QueryState, SortSpec
from core.query import (
    distinct_categories,
    filter_items,
    is_high_tier,
    run_query,
    sort_by_drop_level,
    sort_items,
    suggest_names,
)


def _catalog(*items):
    return parse_catalog(json.dumps({ITEM_LIST_KEY: list(items)}, ensure_ascii=False))


class TestSuggestNames:

    def test_substring_matches_in_catalog_order(self, sample_catalog):
        assert suggest_names(sample_catalog, "炎") == ["炎の剣", "炎の弓", "炎の盾"]

    def test_limit(self):
        catalog = _catalog(*[raw_item(f"剣{i}") for i in range(10)])
        assert suggest_names(catalog, "剣") == [f"剣{i}" for i in range(5)]
        assert suggest_names(catalog, "剣", limit=2) == ["剣0", "剣1"]

    def test_case_sensitive(self):
        catalog = _catalog(raw_item("Sword"), raw_item("sword"))
        assert suggest_names(catalog, "Sw") == ["Sword"]

    def test_empty_query_matches_everything(self, sample_catalog):
        assert len(suggest_names(sample_catalog, "")) == 5

    def test_markup_does_not_match(self, sample_catalog):
        assert suggest_names(sample_catalog, "<c:") == []

    def test_empty_catalog(self):
        assert suggest_names((), "x") == []


class TestFilterItems:

    def test_result_is_ordered_subsequence(self, sample_catalog):
        result = filter_items(sample_catalog, "の", None)
        positions = [sample_catalog.index(it) for it in result]
        assert positions == sorted(positions)
        assert all("の" in it.display_name for it in result)

    def test_query_matches_normalized_name(self, sample_catalog):
        result = filter_items(sample_catalog, "炎の剣", None)
        assert [it.serial for it in result] == [1]

    def test_category_filter_is_exact(self, sample_catalog):
        result = filter_items(sample_catalog, "", "剣")
        assert [it.serial for it in result] == [1, 4]
        assert filter_items(sample_catalog, "", "剣士") == []

    def test_empty_category_means_no_filter(self, sample_catalog):
        assert len(filter_items(sample_catalog, "", "")) == 5

    def test_query_and_category_combined(self, sample_catalog):
        result = filter_items(sample_catalog, "炎", "剣")
        assert [it.serial for it in result] == [1]

    def test_empty_catalog(self):
        assert filter_items((), "x", None) == []

    def test_does_not_mutate_catalog(self, sample_catalog):
        before = list(sample_catalog)
        filter_items(sample_catalog, "炎", None)
        assert list(sample_catalog) == before


class TestSorting:

    def test_ascending(self, sample_catalog):
        levels = [it.drop_level for it in sort_by_drop_level(sample_catalog, SORT_ASC)]
        assert levels == [100, 500, 800, 800, 1200]

    def test_descending(self, sample_catalog):
        levels = [it.drop_level for it in sort_by_drop_level(sample_catalog, SORT_DESC)]
        assert levels == [1200, 800, 800, 500, 100]

    def test_ties_keep_input_order(self, sample_catalog):
        asc = [it.serial for it in sort_by_drop_level(sample_catalog, SORT_ASC)]
        desc = [it.serial for it in sort_by_drop_level(sample_catalog, SORT_DESC)]
        assert asc.index(3) < asc.index(5)
        assert desc.index(3) < desc.index(5)

    def test_reversed_ascending_equals_descending_without_ties(self):
        catalog = _catalog(*[raw_item(f"i{lv}", drop_level=lv) for lv in (5, 300, 1, 99)])
        asc = sort_by_drop_level(catalog, SORT_ASC)
        desc = sort_by_drop_level(catalog, SORT_DESC)
        assert list(reversed(asc)) == desc

    def test_returns_new_list(self, sample_catalog):
        result = sort_by_drop_level(sample_catalog, SORT_ASC)
        assert isinstance(result, list)
        assert [it.serial for it in sample_catalog] == [1, 2, 3, 4, 5]

    def test_sort_by_required_stat(self, sample_catalog):
        result = sort_items(sample_catalog, SortSpec(key="strength", direction=SORT_DESC))
        assert [it.serial for it in result] == [2, 1, 4, 3, 5]

    def test_unknown_key_keeps_order(self, sample_catalog):
        result = sort_items(sample_catalog, SortSpec(key="no_such_field"))
        assert [it.serial for it in result] == [1, 2, 3, 4, 5]


class TestDistinctCategories:

    def test_sorted_without_duplicates(self, sample_catalog):
        cats = distinct_categories(sample_catalog)
        assert cats == sorted(set(cats))
        assert set(cats) == {"剣", "斧", "弓", "盾"}

    def test_empty_category_is_skipped(self):
        catalog = _catalog(raw_item("a", category=""), raw_item("b", category="Z"))
        assert distinct_categories(catalog) == ["Z"]

    def test_empty_catalog(self):
        assert distinct_categories(()) == []


class TestRunQuery:

    def test_markup_stripped_and_sorted_descending(self):
        catalog = _catalog(
            raw_item("★Sword<c:red></c>", drop_level=500),
            raw_item("Axe", drop_level=1200),
        )
        state = QueryState(sort=SortSpec(direction=SORT_DESC))
        result = run_query(catalog, state)
        assert [(it.display_name, it.drop_level) for it in result] == [
            ("Axe", 1200),
            ("Sword", 500),
        ]

    def test_filter_then_sort(self, sample_catalog):
        state = QueryState(query="炎").toggled_sort()
        result = run_query(sample_catalog, state)
        assert [it.serial for it in result] == [3, 5, 1]

    def test_empty_catalog(self):
        assert run_query((), QueryState(query="x")) == ()

    def test_item_without_strength_still_sorts(self):
        catalog = _catalog(raw_item("a", drop_level=2), raw_item("b", drop_level=1, strength=5))
        result = run_query(catalog, QueryState())
        assert [it.display_name for it in result] == ["b", "a"]
        assert result[1].required_stats.strength == 0


class TestQueryState:

    def test_helpers_return_new_values(self):
        state = QueryState()
        changed = state.with_query("剣").with_category("斧").toggled_sort()
        assert state == QueryState()
        assert changed.query == "剣"
        assert changed.category == "斧"
        assert changed.sort.direction == SORT_DESC
        assert changed.toggled_sort().sort.direction == SORT_ASC

    def test_blank_category_is_unset(self):
        assert QueryState().with_category("").category is None

    def test_is_frozen(self):
        with pytest.raises(AttributeError):
            QueryState().query = "x"


@pytest.mark.parametrize("level,expected", [(999, False), (1000, True), (1200, True)])
def test_is_high_tier(level, expected):
    (item,) = _catalog(raw_item("x", drop_level=level))
    assert is_high_tier(item) is expected
