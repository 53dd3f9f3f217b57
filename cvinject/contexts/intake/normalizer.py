"""
Raw resume text normalizer for the Intake context.

Text pasted from PDFs and word processors carries Windows line endings,
non-breaking spaces and invisible zero-width characters that defeat the
whole-line heading patterns. These are cleaned before parsing. Bullet glyphs
and dashes are left alone because the parser keys on them.
"""

import re

# Unicode replacements: problematic char -> replacement
UNICODE_REPLACEMENTS = {
    "\u00a0": " ",  # non-breaking space
    "\u202f": " ",  # narrow no-break space
    "\u200b": "",  # zero-width space
    "\u200c": "",  # zero-width non-joiner
    "\u200d": "",  # zero-width joiner
    "\u2060": "",  # word joiner
    "\ufeff": "",  # BOM
}

LINE_ENDINGS = re.compile(r"\r\n?")


def normalize_resume_text(text: str) -> str:
    """
    Normalize line endings and invisible characters.

    Args:
        text: Raw resume text

    Returns:
        Text using "\\n" line endings with invisible characters removed

    Example:
        >>> normalize_resume_text("\\ufeffJOHN\\r\\nSKILLS\\u00a0\\r\\n")
        'JOHN\\nSKILLS \\n'
    """
    text = LINE_ENDINGS.sub("\n", text)

    for char, replacement in UNICODE_REPLACEMENTS.items():
        text = text.replace(char, replacement)

    return text
