# core/news.py
import datetime
from typing import List, Optional, Sequence

from .logger import get_logger
from .models import NewsItem

logger = get_logger(__name__)

DATE_FORMATS = ("%Y-%m-%d", "%Y/%m/%d", "%Y.%m.%d")


def parse_news_date(value: str) -> Optional[datetime.datetime]:
    s = value.strip()
    for fmt in DATE_FORMATS:
        try:
            return datetime.datetime.strptime(s, fmt)
        except ValueError:
            continue
    try:
        parsed = datetime.datetime.fromisoformat(s)
    except ValueError:
        return None
    # compare naive with naive
    return parsed.replace(tzinfo=None)


def parse_news(text: str) -> List[NewsItem]:
    """
    Parse `<date>:<content>` lines, latest first.
    Malformed lines are logged and dropped; undated entries go last.
    """
    items: List[NewsItem] = []
    for line in text.splitlines():
        if not line.strip():
            continue
        date, sep, content = line.partition(":")
        if not sep or not date.strip() or not content.strip():
            logger.warning("Skipping malformed news line: %r", line)
            continue
        items.append(NewsItem(date=date.strip(), content=content.strip()))

    dated = []
    undated: List[NewsItem] = []
    for item in items:
        parsed = parse_news_date(item.date)
        if parsed is None:
            logger.warning("Unrecognized news date %r; listing it last.", item.date)
            undated.append(item)
        else:
            dated.append((parsed, item))

    dated.sort(key=lambda pair: pair[0], reverse=True)
    return [item for _, item in dated] + undated


def latest_update_date(news: Sequence[NewsItem]) -> Optional[str]:
    return news[0].date if news else None
