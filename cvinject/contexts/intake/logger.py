"""
Intake context logger.

Logging interface for the intake context with automatic [intake] prefix.
All intake modules should import from this module, not from loguru directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[intake]"


def _log_info(message: str) -> None:
    """Log info message with [intake] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [intake] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [intake] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_parse_result(document) -> None:
    """
    Log a one-line summary of a parsed resume.

    Args:
        document: ResumeDocument returned by parse_resume_text()
    """
    _log_info(
        f"Parsed resume: name='{document.personal.name}', "
        f"roles={len(document.experience)}, skills={len(document.skills.hard)}"
    )
    _log_debug(
        f"  bullets={document.bullet_count}, education={len(document.education)}, "
        f"certifications={len(document.certifications)}, summary_chars={len(document.summary)}"
    )


def log_keywords_normalized(keywords) -> None:
    """Log how many keywords landed in each priority tier."""
    counts = {}
    for keyword in keywords:
        counts[keyword.priority.value] = counts.get(keyword.priority.value, 0) + 1
    breakdown = ", ".join(f"{tier}={count}" for tier, count in counts.items()) or "none"
    _log_debug(f"Normalized {len(keywords)} keywords ({breakdown})")
