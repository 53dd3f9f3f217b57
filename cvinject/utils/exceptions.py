"""Base exception shared by all cvinject contexts."""


class CVInjectError(Exception):
    """Root of the cvinject exception hierarchy."""

    pass
