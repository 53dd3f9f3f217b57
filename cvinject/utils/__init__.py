"""
Shared utilities for cvinject.

Common functionality used across contexts:
- Logger setup with provenance tracking
- Text processing helpers
- Base exception type
"""

from cvinject.utils.exceptions import CVInjectError
from cvinject.utils.text_processing import dedupe_case_insensitive, strip_bullet_glyph

__all__ = ["CVInjectError", "dedupe_case_insensitive", "strip_bullet_glyph"]
