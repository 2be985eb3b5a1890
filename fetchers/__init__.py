# fetchers/__init__.py
from urllib.parse import urlparse

from . import remote
from . import local

FETCHERS = {
    "http": remote.fetch_bytes,
    "https": remote.fetch_bytes,
    "file": local.fetch_bytes,
    "": local.fetch_bytes,
}


def fetch_bytes(location: str) -> bytes:
    """Dispatch on the URL scheme; bare paths are read from disk."""
    scheme = urlparse(location).scheme.lower()
    # "C:\\..." parses as scheme "c"
    fetcher = FETCHERS.get(scheme, local.fetch_bytes)
    return fetcher(location)
