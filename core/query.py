# core/query.py
"""
Pure query functions over an in-memory catalog.

Nothing here keeps state between calls or mutates the catalog; the whole
pipeline is re-run on every change to the QueryState. There is no index.
"""
from typing import Iterable, List, Optional, Sequence, Tuple

from .models import SORT_DESC, ItemRecord, QueryState, SortSpec

HIGH_TIER_DROP_LEVEL = 1000
SUGGESTION_LIMIT = 5


def suggest_names(
    catalog: Iterable[ItemRecord], query: str, limit: int = SUGGESTION_LIMIT
) -> List[str]:
    """
    Display names containing `query`, in catalog order, at most `limit`.
    An empty query matches everything; callers decide whether to show them.
    """
    out: List[str] = []
    if limit <= 0:
        return out
    for item in catalog:
        if query in item.display_name:
            out.append(item.display_name)
            if len(out) >= limit:
                break
    return out


def filter_items(
    catalog: Iterable[ItemRecord], query: str, category: Optional[str] = None
) -> List[ItemRecord]:
    return [
        item
        for item in catalog
        if query in item.display_name
        and (not category or item.category == category)
    ]


def _numeric_field(item: ItemRecord, key: str):
    for section in (item.basic_info, item.required_stats):
        value = getattr(section, key, None)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return value
    return 0


def sort_items(items: Iterable[ItemRecord], spec: SortSpec) -> List[ItemRecord]:
    # sorted() is stable, and reverse=True keeps input order among ties too
    return sorted(
        items,
        key=lambda it: _numeric_field(it, spec.key),
        reverse=spec.direction == SORT_DESC,
    )


def sort_by_drop_level(items: Iterable[ItemRecord], direction: str) -> List[ItemRecord]:
    return sort_items(items, SortSpec(key="drop_level", direction=direction))


def distinct_categories(catalog: Iterable[ItemRecord]) -> List[str]:
    return sorted({item.category for item in catalog if item.category})


def run_query(catalog: Sequence[ItemRecord], state: QueryState) -> Tuple[ItemRecord, ...]:
    # filter first so the sort only sees what survives
    filtered = filter_items(catalog, state.query, state.category)
    return tuple(sort_items(filtered, state.sort))


def is_high_tier(item: ItemRecord, threshold: int = HIGH_TIER_DROP_LEVEL) -> bool:
    return item.drop_level >= threshold
