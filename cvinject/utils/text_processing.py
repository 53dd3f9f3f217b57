"""
Text processing utilities shared by the parser, injector and renderers.
"""

import re
from typing import Iterable, List

# Glyphs that open a bullet line in pasted resume text
BULLET_GLYPHS = "•-*▪▸►"

BULLET_PREFIX = re.compile(rf"^[{re.escape(BULLET_GLYPHS)}]\s*")


def strip_bullet_glyph(text: str, glyphs: str = BULLET_GLYPHS) -> str:
    """
    Remove one leading bullet glyph and the whitespace after it.

    Example:
        >>> strip_bullet_glyph("• Built systems.")
        'Built systems.'
        >>> strip_bullet_glyph("-Go", glyphs="•-*")
        'Go'
    """
    if glyphs == BULLET_GLYPHS:
        return BULLET_PREFIX.sub("", text)
    return re.sub(rf"^[{re.escape(glyphs)}]\s*", "", text)


def dedupe_case_insensitive(items: Iterable[str]) -> List[str]:
    """
    Drop entries equal to an earlier one under case-insensitive comparison.

    The first spelling encountered is kept and insertion order is preserved.

    Example:
        >>> dedupe_case_insensitive(["Python", "go", "python", "Go"])
        ['Python', 'go']
    """
    seen = set()
    result = []
    for item in items:
        key = item.casefold()
        if key in seen:
            continue
        seen.add(key)
        result.append(item)
    return result


def truncate_display(text: str, max_len: int) -> str:
    """
    Truncate text for log display with ellipsis if needed.

    Example:
        >>> truncate_display("this is a very long string", 10)
        'this is...'
    """
    return text if len(text) <= max_len else text[: max_len - 3] + "..."
