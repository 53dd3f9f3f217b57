"""
Generic loguru setup shared by every cvinject context.

Library modules never add sinks themselves; they log through their context
wrapper (contexts/{context}/logger.py). Sinks are configured here, once, by
whoever drives a run (the CLI or a caller's own script).
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "{time:HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"


def setup_logger(
    context_name: str,
    log_dir: Optional[Path] = None,
    extra_provenance: Optional[dict] = None,
    console_level: str = "INFO",
) -> Optional[Path]:
    """
    Configure loguru sinks for a run and write the provenance header.

    Console output is always enabled. A DEBUG-level file sink is added only
    when log_dir is given.

    Args:
        context_name: Log file stem (e.g., "pipeline", "render")
        log_dir: Directory for this run's log file, created if missing
        extra_provenance: Additional key-value pairs for the provenance header
        console_level: Minimum level shown on stdout

    Returns:
        Path to the log file, or None when logging to console only

    Example:
        from cvinject.utils.logger import setup_logger

        log_file = setup_logger(
            context_name="pipeline",
            log_dir=Path("outs/logs/tailor_20260101_120000"),
            extra_provenance={"Resume": "resume.txt"},
        )
    """
    logger.remove()

    for level_name, color in LEVEL_COLORS.items():
        logger.level(level_name, color=color)

    log_file = None
    if log_dir is not None:
        log_dir.mkdir(exist_ok=True, parents=True)
        log_file = log_dir / f"{context_name}.log"
        logger.add(log_file, format=FILE_FORMAT, level="DEBUG")

    logger.add(sys.stdout, format=CONSOLE_FORMAT, level=console_level, colorize=True)

    log_provenance(extra_provenance)

    return log_file


def log_provenance(extra_context: Optional[dict] = None) -> None:
    """
    Log where and how the current run was launched.

    Args:
        extra_context: Additional key-value pairs to log after the standard ones
    """
    logger.debug("=" * 80)
    logger.debug(f"Script: {sys.argv[0]}")
    logger.debug(f"Command: {' '.join(sys.argv)}")
    logger.debug(f"Working directory: {Path.cwd()}")
    logger.debug(f"Python: {sys.version.split()[0]}")

    for key, value in (extra_context or {}).items():
        logger.debug(f"{key}: {value}")

    logger.debug("=" * 80)
