# core/report.py
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from jinja2 import Environment, FileSystemLoader, select_autoescape

from core.diff import format_diff_block
from core.models import ItemRecord, NewsItem, QueryState, SORT_ASC
from core.query import is_high_tier
from core.text import normalize_description_line

TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"
env = Environment(
    loader=FileSystemLoader(str(TEMPLATE_DIR)),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)

MISSING_STAT = "—"
NO_ITEMS_MESSAGE = "アイテムデータが見つかりません"


def _item_context(item: ItemRecord) -> Dict[str, Any]:
    info = item.basic_info
    stats = item.required_stats
    return {
        "serial": info.serial,
        "name": item.display_name,
        "high_tier": is_high_tier(item),
        "damage_str": f"{info.min_damage} - {info.max_damage}",
        "price_str": f"{info.price} G",
        "drop_level": info.drop_level,
        "category": info.category or MISSING_STAT,
        "required_level": stats.level,
        "required_strength": stats.strength,
        "creation_traits": [normalize_description_line(l) for l in item.creation_traits],
        "unique_traits": [normalize_description_line(l) for l in item.unique_traits],
    }


def build_context(
    items: Sequence[ItemRecord],
    state: QueryState,
    catalog_size: int,
    error: Optional[str] = None,
    suggestions: Optional[List[str]] = None,
    categories: Optional[List[str]] = None,
    diff_entries: Optional[List[str]] = None,
    diff_error: Optional[str] = None,
    diff_matched: Optional[Sequence[ItemRecord]] = None,
    diff_unmatched: Optional[List[str]] = None,
    news: Optional[List[NewsItem]] = None,
    latest_news_date: Optional[str] = None,
    loaded_at: Optional[str] = None,
) -> Dict[str, Any]:
    return {
        "title": "アイテム検索",
        "query": state.query,
        "category": state.category or "",
        "sort_arrow": "↑" if state.sort.direction == SORT_ASC else "↓",
        "error": error,
        "empty_message": NO_ITEMS_MESSAGE if not error and catalog_size == 0 else None,
        "summary_text": f"{len(items)} / {catalog_size} 件",
        "items": [_item_context(it) for it in items],
        "suggestions": suggestions or [],
        "categories": [
            {"name": c, "active": c == state.category} for c in categories or []
        ],
        "diff_block": format_diff_block(diff_entries or []),
        "diff_error": diff_error,
        "diff_matched": [it.display_name for it in diff_matched or []],
        "diff_unmatched": diff_unmatched or [],
        "news": news or [],
        "latest_news_date": latest_news_date,
        "loaded_at": loaded_at,
    }


def build_plaintext_report(**kwargs) -> str:
    template = env.get_template("catalog_text.txt")
    return template.render(**build_context(**kwargs))


def build_html_report(**kwargs) -> str:
    template = env.get_template("catalog.html")
    return template.render(**build_context(**kwargs))


REPORT_BUILDERS = {
    "text": build_plaintext_report,
    "html": build_html_report,
}

OUTPUT_FORMAT = os.getenv("OUTPUT_FORMAT", "text").strip().lower()
if OUTPUT_FORMAT not in REPORT_BUILDERS:
    OUTPUT_FORMAT = "text"
