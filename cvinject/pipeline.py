"""
End-to-end resume tailoring pipeline.

Chains the contexts in a fixed order:

    parse (intake) -> normalize keywords (intake) -> inject (targeting)
    -> render text / docx / pdf (templating, rendering) -> match score

A parse failure short-circuits with a failed PipelineResult; nothing after it
runs. Errors raised while rendering propagate to the caller.
"""

import random
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from loguru import logger

from cvinject.contexts.intake import Keyword, normalize_keywords, parse_resume_text
from cvinject.contexts.rendering import build_docx, build_pdf
from cvinject.contexts.targeting import DEFAULT_CONFIG, InjectionConfig, InjectionStats, inject_keywords
from cvinject.contexts.templating import ResumeDocument, export_pdf_sections, render_plaintext

PARSE_FAILURE_MESSAGE = "Failed to parse CV"

CONTEXT_PREFIX = "[pipeline]"


def _log_info(message: str) -> None:
    """Log info message with [pipeline] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [pipeline] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


@dataclass
class PipelineResult:
    """
    Everything produced by one pipeline run.

    Attributes:
        success: False only when the resume could not be parsed
        error: Failure message when success is False
        document: Injected document
        text: Canonical plain-text rendering
        docx: .docx bytes
        pdf: .pdf bytes
        pdf_sections: Per-section strings for an external PDF generator
        stats: Injection statistics
        match_score: Percentage of keywords found in text (0-100)
        matched: Keywords found in text, in keyword order
        missing: Keywords not found in text, in keyword order
        timing_ms: Wall time of the run, observational only
    """

    success: bool
    error: Optional[str] = None
    document: Optional[ResumeDocument] = None
    text: str = ""
    docx: bytes = b""
    pdf: bytes = b""
    pdf_sections: Dict[str, Any] = field(default_factory=dict)
    stats: Optional[InjectionStats] = None
    match_score: int = 0
    matched: List[str] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)
    timing_ms: float = 0.0

    @property
    def tailored_text(self) -> str:
        """Alias of text for callers of the older result shape."""
        return self.text


def compute_match(text: str, keywords: Sequence[Keyword]) -> Tuple[int, List[str], List[str]]:
    """
    Score how many keywords appear in text.

    A keyword matches if it occurs case-insensitively as a substring. The
    score is rounded half up; it is 0 when there are no keywords.

    Returns:
        (match_score, matched, missing)

    Example:
        >>> kws = normalize_keywords({"highROI": ["Python", "Rust"]})
        >>> compute_match("python developer", kws)
        (50, ['Python'], ['Rust'])
    """
    lowered = text.lower()
    matched, missing = [], []
    for keyword in keywords:
        (matched if keyword.text.lower() in lowered else missing).append(keyword.text)

    if not keywords:
        return 0, matched, missing
    score = int(100 * len(matched) / len(keywords) + 0.5)
    return score, matched, missing


def run_pipeline(
    raw_text: Optional[str],
    keyword_groups: Optional[Mapping[str, Any]],
    config: InjectionConfig = DEFAULT_CONFIG,
    location_override: Optional[str] = None,
    rng: Optional[random.Random] = None,
) -> PipelineResult:
    """
    Parse, inject, render and score a resume in one call.

    Args:
        raw_text: Resume text
        keyword_groups: Priority buckets of keyword strings (see normalize_keywords)
        config: Injection limits and phrasing
        location_override: Replaces the parsed location when given
        rng: Random source for metric phrases (seed it for reproducible output)

    Returns:
        PipelineResult; success is False with error "Failed to parse CV" when
        the text could not be parsed

    Raises:
        InvalidKeywordGroupsError: If keyword_groups is malformed

    Example:
        >>> result = run_pipeline(resume_text, {"highROI": ["Kubernetes"]})
        >>> result.match_score
        100
    """
    start = time.perf_counter()
    _log_info("Starting tailoring pipeline")

    document = parse_resume_text(raw_text)
    if document is None:
        _log_error(PARSE_FAILURE_MESSAGE)
        return PipelineResult(success=False, error=PARSE_FAILURE_MESSAGE)

    keywords = normalize_keywords(keyword_groups)
    injection = inject_keywords(
        document, keywords, config=config, location_override=location_override, rng=rng
    )
    injected = injection.document

    max_bullets = config.max_rendered_bullets
    text = render_plaintext(injected, max_bullets=max_bullets)
    docx = build_docx(injected, max_bullets=max_bullets)
    pdf = build_pdf(injected, max_bullets=max_bullets)

    match_score, matched, missing = compute_match(text, keywords)
    timing_ms = (time.perf_counter() - start) * 1000
    _log_info(f"Pipeline complete in {timing_ms:.0f}ms | Match: {match_score}%")

    return PipelineResult(
        success=True,
        document=injected,
        text=text,
        docx=docx,
        pdf=pdf,
        pdf_sections=export_pdf_sections(injected),
        stats=injection.stats,
        match_score=match_score,
        matched=matched,
        missing=missing,
        timing_ms=timing_ms,
    )
