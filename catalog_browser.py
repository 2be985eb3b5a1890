import os
import sys
from typing import Optional, TextIO

from core.logger import get_logger
from core.models import SORT_ASC, SORT_DESC, QueryState, SortSpec
from core.report import OUTPUT_FORMAT, REPORT_BUILDERS
from core.session import CatalogSession

logger = get_logger(__name__)

MODE = os.getenv("MODE", "once").lower()  # "once" or "interactive"
CATALOG_URL = os.getenv("CATALOG_URL", "public/items.json")
DIFF_URL = os.getenv("DIFF_URL", "public/diff.txt")
NEWS_URL = os.getenv("NEWS_URL", "public/news.txt")


def initial_state() -> QueryState:
    direction = os.getenv("SORT_ORDER", SORT_ASC).strip().lower()
    if direction not in (SORT_ASC, SORT_DESC):
        logger.warning("Unknown SORT_ORDER '%s'; using '%s'.", direction, SORT_ASC)
        direction = SORT_ASC
    return QueryState(
        query=os.getenv("QUERY", ""),
        category=os.getenv("CATEGORY", "").strip() or None,
        sort=SortSpec(direction=direction),
    )


def render(
    session: CatalogSession, state: QueryState, output_format: str = OUTPUT_FORMAT
) -> str:
    builder = REPORT_BUILDERS.get(output_format, REPORT_BUILDERS["text"])
    matched, unmatched = session.changed_items()
    return builder(
        items=session.view(state),
        state=state,
        catalog_size=len(session.catalog),
        error=session.error,
        suggestions=session.suggestions(state),
        categories=session.categories(),
        diff_entries=session.diff_entries,
        diff_error=session.diff_error,
        diff_matched=matched,
        diff_unmatched=unmatched,
        news=session.news,
        latest_news_date=session.latest_news_date(),
        loaded_at=session.loaded_at,
    )


def start_session(with_diff: bool = False) -> CatalogSession:
    session = CatalogSession()
    session.load_catalog(CATALOG_URL)
    if NEWS_URL:
        session.load_news(NEWS_URL)
    if with_diff and DIFF_URL:
        session.load_diff_feed(DIFF_URL)
    return session


def run_once(out: TextIO = sys.stdout) -> int:
    session = start_session(with_diff=bool(os.getenv("SHOW_DIFF")))
    out.write(render(session, initial_state()))
    return 1 if session.error else 0


def apply_command(
    session: CatalogSession, state: QueryState, line: str
) -> Optional[QueryState]:
    """
    Apply one line of interactive input and return the next state,
    or None to quit. Anything not starting with ':' is the new query.
    """
    if not line.startswith(":"):
        return state.with_query(line)

    cmd, _, arg = line[1:].partition(" ")
    arg = arg.strip()
    if cmd in ("q", "quit"):
        return None
    if cmd == "sort":
        return state.toggled_sort()
    if cmd == "cat":
        return state.with_category(arg or None)
    if cmd == "cats":
        logger.info("Categories: %s", ", ".join(session.categories()) or "(none)")
        return state
    if cmd == "diff":
        session.load_diff_feed(arg or DIFF_URL)
        return state
    if cmd == "select":
        try:
            item = session.select(int(arg))
        except ValueError:
            logger.warning("select expects a serial number, got %r", arg)
            return state
        if item is None:
            logger.info("No item with serial %s in the catalog.", arg)
        else:
            logger.info("Selected %s (serial %s).", item.display_name, item.serial)
        return state
    if cmd == "reload":
        session.load_catalog(arg or CATALOG_URL)
        return state

    logger.warning("Unknown command ':%s'", cmd)
    return state


def run_interactive(inp: TextIO = sys.stdin, out: TextIO = sys.stdout) -> int:
    session = start_session()
    state = initial_state()
    out.write(render(session, state))

    for raw in inp:
        next_state = apply_command(session, state, raw.rstrip("\n"))
        if next_state is None:
            break
        state = next_state
        out.write(render(session, state))
        out.flush()

    return 0


if __name__ == "__main__":
    try:
        if MODE == "interactive":
            raise SystemExit(run_interactive())
        else:
            raise SystemExit(run_once())
    except Exception as e:
        logger.exception("Fatal catalog browser error: %s", e)
        raise SystemExit(2)
