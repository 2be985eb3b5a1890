# core/catalog.py
import json
import math
from typing import Any, Dict, List, Tuple

from .decoder import decode_legacy
from .errors import CatalogFormatError
from .logger import get_logger
from .models import BasicInfo, ItemRecord, RequiredStats

logger = get_logger(__name__)

ITEM_LIST_KEY = "アイテム一覧"
BASIC_INFO_KEY = "基本情報"
REQUIRED_STATS_KEY = "要求ステータス"
CREATION_TRAITS_KEY = "アイテム情報"
UNIQUE_TRAITS_KEY = "ユニーク情報"

# source key -> BasicInfo attribute (numeric fields only)
BASIC_NUMERIC_FIELDS = {
    "シリアル": "serial",
    "最小ダメージ": "min_damage",
    "最大ダメージ": "max_damage",
    "価格": "price",
    "ドロップレベル": "drop_level",
    "攻撃範囲": "attack_range",
    "攻撃速度": "attack_speed",
}
NAME_KEY = "名前"
CATEGORY_KEY = "種類"

REQUIRED_STAT_FIELDS = {
    "レベル": "level",
    "力": "strength",
    "体力": "vitality",
    "知力": "intelligence",
    "器用さ": "dexterity",
    "素早さ": "agility",
}


def _as_number(value: Any) -> int | float:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        s = value.strip().replace(",", "")
        try:
            return int(s)
        except ValueError:
            try:
                value = float(s)
            except ValueError:
                return 0
    if not isinstance(value, float) or not math.isfinite(value):
        # NaN and infinities would break every numeric sort
        return 0
    return int(value) if value.is_integer() else value


def _as_lines(value: Any) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    if not isinstance(value, list):
        return ()
    return tuple(str(v) for v in value if v is not None)


def item_from_dict(obj: Any, index: int = 0) -> ItemRecord:
    """
    Build one ItemRecord from its JSON object.
    Only a missing/empty name is fatal; every other field has a default.
    """
    if not isinstance(obj, dict):
        raise CatalogFormatError(
            f"Item #{index} is {type(obj).__name__}, expected an object"
        )

    info = obj.get(BASIC_INFO_KEY)
    if not isinstance(info, dict):
        raise CatalogFormatError(f"Item #{index} has no '{BASIC_INFO_KEY}' object")

    name = info.get(NAME_KEY)
    if not isinstance(name, str) or not name:
        raise CatalogFormatError(f"Item #{index} has no '{NAME_KEY}'")

    numeric = {
        attr: _as_number(info.get(key)) for key, attr in BASIC_NUMERIC_FIELDS.items()
    }
    category = info.get(CATEGORY_KEY)
    basic = BasicInfo(
        name=name,
        category=str(category) if category is not None else "",
        **numeric,
    )

    stats_obj = obj.get(REQUIRED_STATS_KEY)
    if not isinstance(stats_obj, dict):
        stats_obj = {}
    stats = RequiredStats(
        **{attr: _as_number(stats_obj.get(key)) for key, attr in REQUIRED_STAT_FIELDS.items()}
    )

    return ItemRecord(
        basic_info=basic,
        required_stats=stats,
        creation_traits=_as_lines(obj.get(CREATION_TRAITS_KEY)),
        unique_traits=_as_lines(obj.get(UNIQUE_TRAITS_KEY)),
    )


def parse_catalog(text: str) -> Tuple[ItemRecord, ...]:
    """
    Parse decoded snapshot text into a catalog.
    A document without the item list key is an empty catalog, not an error;
    anything else that doesn't fit the expected shape raises CatalogFormatError.
    """
    try:
        data: Dict[str, Any] = json.loads(text)
    except json.JSONDecodeError as e:
        raise CatalogFormatError(f"Snapshot is not valid JSON: {e}") from e
    except RecursionError as e:
        raise CatalogFormatError("Snapshot is nested too deeply to parse") from e

    if not isinstance(data, dict):
        raise CatalogFormatError(
            f"Snapshot top level is {type(data).__name__}, expected an object"
        )

    raw_items = data.get(ITEM_LIST_KEY)
    if raw_items is None:
        logger.info("Snapshot has no '%s' key; catalog is empty.", ITEM_LIST_KEY)
        return ()

    if not isinstance(raw_items, list):
        raise CatalogFormatError(
            f"'{ITEM_LIST_KEY}' is {type(raw_items).__name__}, expected a list"
        )

    items: List[ItemRecord] = [item_from_dict(obj, i) for i, obj in enumerate(raw_items)]
    logger.info("Parsed %d catalog items.", len(items))
    return tuple(items)


def load_catalog_bytes(data: bytes) -> Tuple[ItemRecord, ...]:
    return parse_catalog(decode_legacy(data))
