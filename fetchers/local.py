# fetchers/local.py
from pathlib import Path
from urllib.parse import unquote, urlparse

from core.errors import ResourceUnavailable
from core.logger import get_logger

logger = get_logger(__name__)


def _to_path(location: str) -> Path:
    if location.startswith("file://"):
        return Path(unquote(urlparse(location).path))
    return Path(location)


def fetch_bytes(location: str) -> bytes:
    path = _to_path(location)
    logger.info("Reading %s", path)
    try:
        return path.read_bytes()
    except OSError as e:
        raise ResourceUnavailable(f"Cannot read {path}: {e}") from e
