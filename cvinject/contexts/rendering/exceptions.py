"""Exceptions raised by the Rendering context."""

from typing import List, Optional

from cvinject.utils.exceptions import CVInjectError


class ArchiveError(CVInjectError):
    """Raised when parts do not fit a store-only ZIP32 archive."""

    pass


class ExportError(CVInjectError):
    """
    Raised when one format of a multi-format export fails.

    Attributes:
        format: Format that failed ("docx", "pdf" or "txt")
        produced: Formats already produced before the failure
        original_error: The underlying exception
    """

    def __init__(
        self,
        format: str,
        produced: Optional[List[str]] = None,
        original_error: Optional[Exception] = None,
    ):
        self.format = format
        self.produced = produced or []
        self.original_error = original_error

        parts = [f"Failed to export {format}"]
        if original_error:
            parts.append(f": {original_error}")
        if self.produced:
            parts.append(f" (already produced: {', '.join(self.produced)})")

        super().__init__("".join(parts))
