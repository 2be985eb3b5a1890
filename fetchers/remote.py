# fetchers/remote.py
import os

import requests

from core.errors import ResourceUnavailable
from core.logger import get_logger

logger = get_logger(__name__)

USER_AGENT = os.getenv(
    "CATALOG_USER_AGENT",
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36",
)
PROXY_URL = os.getenv("CATALOG_PROXY_URL", "").strip()
FETCH_TIMEOUT = float(os.getenv("FETCH_TIMEOUT", "30"))

SESSION = requests.Session()
SESSION.headers.update({"User-Agent": USER_AGENT})
if PROXY_URL:
    SESSION.proxies.update({"http": PROXY_URL, "https": PROXY_URL})


def fetch_bytes(url: str) -> bytes:
    """
    GET a resource and return the raw body. The body is never decoded
    here: the snapshot and diff feed are not UTF-8.
    One attempt only; a failed fetch is reported, not retried.
    """
    logger.info("Fetching %s", url)
    try:
        r = SESSION.get(url, timeout=FETCH_TIMEOUT)
        r.raise_for_status()
    except requests.RequestException as e:
        raise ResourceUnavailable(f"Fetch failed for {url}: {e}") from e
    logger.debug("Fetched %d bytes from %s", len(r.content), url)
    return r.content
