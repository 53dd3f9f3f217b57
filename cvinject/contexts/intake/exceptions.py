"""Exceptions raised by the Intake context."""

from cvinject.utils.exceptions import CVInjectError


class ResumeParseError(CVInjectError, ValueError):
    """Raised in strict mode when resume text is empty or yields no document."""

    pass


class InvalidKeywordGroupsError(CVInjectError, ValueError):
    """
    Raised when the keyword groups object is malformed.

    Attributes:
        group: Name of the offending bucket, if the problem is bucket-specific
    """

    def __init__(self, message: str, group: str = None):
        self.group = group
        if group:
            message = f"{message} (group: '{group}')"
        super().__init__(message)
