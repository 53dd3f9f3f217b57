"""
Rendering context logger.

Logging interface for the rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from loguru directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[render]"


def _log_info(message: str) -> None:
    """Log info message with [render] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [render] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [render] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_payload_built(format_name: str, size: int, elapsed_ms: float) -> None:
    """Log a finished byte payload."""
    _log_debug(f"Built {format_name}: {size} bytes in {elapsed_ms:.1f}ms")


def log_export_result(result) -> None:
    """
    Log the outcome of a multi-format export.

    Args:
        result: ExportResult from export_all_formats()
    """
    formats = ", ".join(f.format for f in result.files) or "none"
    if result.success:
        _log_success(f"All formats exported: {formats}")
    else:
        _log_error(f"Export failed: {result.error}")
        _log_error(f"  Produced before failure: {formats}")


def log_validation_result(result) -> None:
    """
    Log ATS validation checks.

    Args:
        result: ValidationResult from validate_ats_compatibility()
    """
    if result.is_valid:
        _log_success("ATS validation passed")
        return
    failed = [name for name, passed in result.checks.items() if not passed]
    _log_warning(f"ATS validation failed: {', '.join(failed)}")
