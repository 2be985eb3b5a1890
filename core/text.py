# core/text.py
import re

RARITY_MARK = "★"

# <c:red> opening color tags, <n> line breaks, stray </c> closers
_NAME_MARKUP = re.compile(r"<c:[^>]+>|<n>|</c>")
_CONTROL_SEPARATORS = re.compile("[\u0001\u0002]")


def normalize_display_name(raw: str | None) -> str:
    """
    Strip the rarity glyph and inline markup from an item name.
    Loops to a fixed point so that removing one token can't leave
    another behind (e.g. "<<n>c:red>").
    """
    if not raw:
        return ""
    text = raw
    while True:
        cleaned = _NAME_MARKUP.sub("", text.replace(RARITY_MARK, ""))
        if cleaned == text:
            return cleaned
        text = cleaned


def normalize_description_line(raw: str | None) -> str:
    if not raw:
        return ""
    return _CONTROL_SEPARATORS.sub("", raw)
