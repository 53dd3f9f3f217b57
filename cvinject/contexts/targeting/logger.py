"""
Targeting context logger.

Logging interface for the targeting context with automatic [target] prefix.
All targeting modules should import from this module, not from loguru directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[target]"


def _log_info(message: str) -> None:
    """Log info message with [target] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [target] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [target] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_injection_result(stats) -> None:
    """
    Log injection statistics.

    Args:
        stats: InjectionStats from inject_keywords()
    """
    _log_success(
        f"Injection complete: {stats.total_injections} injections "
        f"({stats.skills_added} skills, {stats.bullets_modified} bullets, "
        f"{stats.new_bullets_created} new bullets) in {stats.timing_ms:.1f}ms"
    )
    if stats.keywords_covered:
        _log_debug(f"  Covered: {', '.join(stats.keywords_covered)}")
