# core/models.py
from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

from .text import normalize_display_name

SORT_ASC = "asc"
SORT_DESC = "desc"


@dataclass(frozen=True)
class BasicInfo:
    """
    Basic item properties. Numeric fields default to 0 so that sorting
    and display never have to special-case a missing value.
    """
    name: str
    serial: int = 0
    min_damage: int = 0
    max_damage: int = 0
    price: int = 0
    drop_level: int = 0
    attack_range: int = 0
    attack_speed: int = 0
    category: str = ""


@dataclass(frozen=True)
class RequiredStats:
    level: int = 0
    strength: int = 0
    vitality: int = 0
    intelligence: int = 0
    dexterity: int = 0
    agility: int = 0


@dataclass(frozen=True)
class ItemRecord:
    basic_info: BasicInfo
    required_stats: RequiredStats = field(default_factory=RequiredStats)
    creation_traits: Tuple[str, ...] = ()
    unique_traits: Tuple[str, ...] = ()
    display_name: str = field(init=False, compare=False)

    def __post_init__(self):
        # Normalized once per load instead of once per keystroke
        object.__setattr__(
            self, "display_name", normalize_display_name(self.basic_info.name)
        )

    @property
    def serial(self) -> int:
        return self.basic_info.serial

    @property
    def drop_level(self) -> int:
        return self.basic_info.drop_level

    @property
    def category(self) -> str:
        return self.basic_info.category


@dataclass(frozen=True)
class NewsItem:
    date: str
    content: str


@dataclass(frozen=True)
class SortSpec:
    key: str = "drop_level"
    direction: str = SORT_ASC

    def toggled(self) -> "SortSpec":
        return replace(
            self, direction=SORT_DESC if self.direction == SORT_ASC else SORT_ASC
        )


@dataclass(frozen=True)
class QueryState:
    """
    Everything the query engine needs besides the catalog itself.
    Changing any input means building a new QueryState.
    """
    query: str = ""
    category: Optional[str] = None
    sort: SortSpec = field(default_factory=SortSpec)

    def with_query(self, query: str) -> "QueryState":
        return replace(self, query=query)

    def with_category(self, category: Optional[str]) -> "QueryState":
        return replace(self, category=category or None)

    def toggled_sort(self) -> "QueryState":
        return replace(self, sort=self.sort.toggled())
