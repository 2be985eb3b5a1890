# core/decoder.py
import codecs
import os

from .errors import DecodeFailure
from .logger import get_logger

logger = get_logger(__name__)

# cp932 is the Shift-JIS variant browsers use for "shift-jis"
LEGACY_ENCODING = os.getenv("LEGACY_ENCODING", "cp932").strip() or "cp932"
LEGACY_DECODE_ERRORS = os.getenv("LEGACY_DECODE_ERRORS", "replace").strip() or "replace"


def decode_legacy(
    data: bytes,
    encoding: str = LEGACY_ENCODING,
    errors: str = LEGACY_DECODE_ERRORS,
) -> str:
    """
    Decode a legacy-encoded payload with a single fixed codec.
    With errors="replace" only malformed sequences become U+FFFD;
    anything the codec rejects outright is raised as DecodeFailure.
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise DecodeFailure(f"Expected bytes, got {type(data).__name__}")

    try:
        codecs.lookup(encoding)
    except LookupError as e:
        raise DecodeFailure(f"Unknown legacy encoding '{encoding}'") from e

    try:
        text = bytes(data).decode(encoding, errors=errors)
    except UnicodeDecodeError as e:
        raise DecodeFailure(f"Malformed {encoding} payload: {e}") from e
    except LookupError as e:
        raise DecodeFailure(f"Unknown decode error handler '{errors}'") from e

    replaced = text.count("\ufffd")
    if replaced and errors == "replace":
        logger.warning(
            "Decoded %d bytes as %s with %d replacement characters.",
            len(data), encoding, replaced,
        )
    return text
