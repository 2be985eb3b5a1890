# core/diff.py
from typing import Dict, Iterable, List, Sequence, Tuple

from .decoder import decode_legacy
from .models import ItemRecord
from .text import normalize_display_name

BULLET = "・"


def parse_diff_feed(data: bytes) -> List[str]:
    """
    Turn the legacy-encoded diff feed into bullet lines.
    The feed is presentation text: one changed item name per line,
    blank lines dropped, nothing else interpreted.
    """
    text = decode_legacy(data)
    # only \n (with an optional \r) ends a line; other separators stay in the name
    lines = (line.rstrip("\r") for line in text.split("\n"))
    return [f"{BULLET}{line.strip()}" for line in lines if line.strip()]


def format_diff_block(entries: Iterable[str]) -> str:
    return "\n".join(entries)


def _entry_name(entry: str) -> str:
    name = entry.strip()
    if name.startswith(BULLET):
        name = name[len(BULLET):].strip()
    return normalize_display_name(name)


def reconcile_diff_feed(
    catalog: Sequence[ItemRecord], entries: Iterable[str]
) -> Tuple[List[ItemRecord], List[str]]:
    """
    Match diff feed entries against the current catalog by display name.
    Returns (matched_items in catalog order, names not found in the catalog).
    """
    wanted: List[str] = []
    for entry in entries:
        name = _entry_name(entry)
        if name and name not in wanted:
            wanted.append(name)

    wanted_set = set(wanted)
    matched = [it for it in catalog if it.display_name in wanted_set]
    found = {it.display_name for it in matched}
    unmatched = [name for name in wanted if name not in found]
    return matched, unmatched


def diff_catalogs(
    previous: Iterable[ItemRecord], current: Iterable[ItemRecord]
) -> tuple[List[ItemRecord], List[ItemRecord], List[Tuple[ItemRecord, ItemRecord]]]:
    """
    Compute added, removed and changed items between two snapshots.
    Items are keyed by display name; when a name repeats, the first one wins.
    Returns:
      (added_items, removed_items, changed[(before, after)])
    """
    old_map: Dict[str, ItemRecord] = {}
    for it in previous:
        old_map.setdefault(it.display_name, it)
    new_map: Dict[str, ItemRecord] = {}
    for it in current:
        new_map.setdefault(it.display_name, it)

    added = [it for name, it in new_map.items() if name not in old_map]
    removed = [it for name, it in old_map.items() if name not in new_map]

    changed: List[Tuple[ItemRecord, ItemRecord]] = []
    for name, new_item in new_map.items():
        old_item = old_map.get(name)
        if old_item is not None and old_item != new_item:
            changed.append((old_item, new_item))

    return added, removed, changed
