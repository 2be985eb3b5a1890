# core/session.py
import datetime
import threading
from contextlib import contextmanager
from typing import Iterator, List, Optional, Tuple

import pytz

from fetchers import fetch_bytes

from .catalog import load_catalog_bytes
from .diff import parse_diff_feed, reconcile_diff_feed
from .errors import CatalogError, DecodeFailure
from .logger import get_logger
from .models import ItemRecord, NewsItem, QueryState
from .news import latest_update_date, parse_news
from .query import distinct_categories, run_query, suggest_names

logger = get_logger(__name__)

CATALOG = "catalog"
DIFF_FEED = "diff"
NEWS_FEED = "news"


def now_utc_iso() -> str:
    return datetime.datetime.now(tz=pytz.UTC).isoformat()


class CatalogSession:
    """
    The load boundary around the pure query engine.

    Loads are all-or-nothing: on any CatalogError the resource is replaced
    by its empty value and a user-visible message is recorded; nothing is
    raised to the caller. A second load of a resource while the first is
    still running is refused.
    """

    def __init__(self):
        self.catalog: Tuple[ItemRecord, ...] = ()
        self.error: Optional[str] = None
        self.loaded_at: Optional[str] = None
        self.diff_entries: List[str] = []
        self.diff_error: Optional[str] = None
        self.news: List[NewsItem] = []
        self.selected_serial: Optional[int] = None
        self._in_flight: set[str] = set()
        self._lock = threading.Lock()

    @contextmanager
    def _guard(self, resource: str) -> Iterator[bool]:
        with self._lock:
            if resource in self._in_flight:
                acquired = False
            else:
                self._in_flight.add(resource)
                acquired = True
        try:
            yield acquired
        finally:
            if acquired:
                with self._lock:
                    self._in_flight.discard(resource)

    def load_catalog(self, location: str) -> bool:
        with self._guard(CATALOG) as acquired:
            if not acquired:
                logger.warning("Catalog load already in progress; ignoring %s", location)
                return False
            try:
                catalog = load_catalog_bytes(fetch_bytes(location))
            except CatalogError as e:
                logger.error("Catalog load from %s failed: %s", location, e)
                self.catalog = ()
                self.error = e.user_message
                self.loaded_at = None
                return False

            self.catalog = catalog
            self.error = None
            self.loaded_at = now_utc_iso()
            if self.selected_serial is not None and self.selected_item is None:
                logger.info(
                    "Selected serial %s is not in the new snapshot; clearing selection.",
                    self.selected_serial,
                )
                self.selected_serial = None
            logger.info("Catalog loaded from %s: %d items.", location, len(catalog))
            return True

    def load_diff_feed(self, location: str) -> bool:
        with self._guard(DIFF_FEED) as acquired:
            if not acquired:
                logger.warning("Diff feed load already in progress; ignoring %s", location)
                return False
            try:
                entries = parse_diff_feed(fetch_bytes(location))
            except CatalogError as e:
                logger.error("Diff feed load from %s failed: %s", location, e)
                self.diff_entries = []
                self.diff_error = e.user_message
                return False

            self.diff_entries = entries
            self.diff_error = None
            logger.info("Diff feed loaded from %s: %d entries.", location, len(entries))
            return True

    def load_news(self, location: str) -> bool:
        with self._guard(NEWS_FEED) as acquired:
            if not acquired:
                logger.warning("News load already in progress; ignoring %s", location)
                return False
            try:
                raw = fetch_bytes(location)
                try:
                    text = raw.decode("utf-8")
                except UnicodeDecodeError as e:
                    raise DecodeFailure(f"News feed is not UTF-8: {e}") from e
            except CatalogError as e:
                logger.error("News load from %s failed: %s", location, e)
                self.news = []
                return False

            self.news = parse_news(text)
            logger.info("News loaded from %s: %d entries.", location, len(self.news))
            return True

    def view(self, state: QueryState) -> Tuple[ItemRecord, ...]:
        return run_query(self.catalog, state)

    def categories(self) -> List[str]:
        return distinct_categories(self.catalog)

    def suggestions(self, state: QueryState) -> List[str]:
        if not state.query:
            return []
        return suggest_names(self.catalog, state.query)

    def changed_items(self) -> Tuple[List[ItemRecord], List[str]]:
        return reconcile_diff_feed(self.catalog, self.diff_entries)

    def latest_news_date(self) -> Optional[str]:
        return latest_update_date(self.news)

    def select(self, serial: Optional[int]) -> Optional[ItemRecord]:
        self.selected_serial = serial
        return self.selected_item

    @property
    def selected_item(self) -> Optional[ItemRecord]:
        if self.selected_serial is None:
            return None
        for item in self.catalog:
            if item.serial == self.selected_serial:
                return item
        return None
