import json

import pytest

from core.catalog import ITEM_LIST_KEY, parse_catalog


def raw_item(name, drop_level=0, category="", serial=0, strength=None, **extra):
    info = {
        "名前": name,
        "シリアル": serial,
        "最小ダメージ": 10,
        "最大ダメージ": 20,
        "価格": 100,
        "ドロップレベル": drop_level,
        "種類": category,
    }
    stats = {"レベル": 1}
    if strength is not None:
        stats["力"] = strength
    item = {
        "基本情報": info,
        "要求ステータス": stats,
        "アイテム情報": ["攻撃力+10\u0001"],
        "ユニーク情報": [],
    }
    item.update(extra)
    return item


def encode_snapshot(items, key=ITEM_LIST_KEY) -> bytes:
    doc = {key: items} if key else {}
    return json.dumps(doc, ensure_ascii=False).encode("cp932")


@pytest.fixture
def sample_raw_items():
    return [
        raw_item("★炎の剣<c:red></c>", drop_level=500, category="剣", serial=1, strength=30),
        raw_item("氷の斧", drop_level=1200, category="斧", serial=2, strength=45),
        raw_item("<c:blue>炎の弓</c>", drop_level=800, category="弓", serial=3),
        raw_item("鉄の剣", drop_level=100, category="剣", serial=4, strength=10),
        raw_item("炎の盾<n>", drop_level=800, category="盾", serial=5),
    ]


@pytest.fixture
def sample_catalog(sample_raw_items):
    return parse_catalog(json.dumps({ITEM_LIST_KEY: sample_raw_items}, ensure_ascii=False))


@pytest.fixture
def snapshot_file(tmp_path, sample_raw_items):
    path = tmp_path / "items.json"
    path.write_bytes(encode_snapshot(sample_raw_items))
    return path
