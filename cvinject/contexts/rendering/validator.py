"""
ATS compatibility checks on rendered plain text.

Audits the text form of a resume for patterns that screening systems parse
badly or penalize. Each check is independent; the result is valid only when
every check passes.

Checks:
- natural_bullets: no bullet line made of four or more bare capitalized
  words (keyword stuffing such as "- Python Docker Kubernetes Terraform")
- comma_skills: the SKILLS section (a line holding only the heading) is a
  comma-separated list, allowing at most two bulleted lines (category headers)
- standard_sections: EXPERIENCE, SKILLS and EDUCATION all appear
- no_bold_overuse: no Markdown-style bold markers leaked into the text
- plain_text_parseable: no control characters other than tab and newline
"""

import re
from dataclasses import dataclass, field
from typing import Dict

from cvinject.contexts.rendering.logger import log_validation_result

STUFFED_BULLET = re.compile(r"^[-•*]\s*([A-Z][a-z]+\s*){4,}$", re.MULTILINE)
SKILLS_SECTION = re.compile(
    r"^SKILLS[ \t]*:?[ \t]*$[\s\S]*?(?=^(?:EDUCATION|CERTIFICATIONS)\b|\Z)", re.IGNORECASE | re.MULTILINE
)
BULLET_LINE = re.compile(r"^[-•*]\s", re.MULTILINE)
BOLD_MARKER = re.compile(r"\*\*[^*\n]+\*\*")
UNPARSEABLE_CHARS = re.compile(r"[\x00-\x08\x0b-\x1f\x7f]")

REQUIRED_SECTIONS = ("EXPERIENCE", "SKILLS", "EDUCATION")
MAX_SKILL_BULLETS = 2


@dataclass
class ValidationResult:
    """
    Result of ATS validation.

    Attributes:
        is_valid: Whether every check passed
        checks: Check name -> passed
    """

    is_valid: bool
    checks: Dict[str, bool] = field(default_factory=dict)

    @property
    def failed_checks(self):
        return [name for name, passed in self.checks.items() if not passed]


def has_stuffed_bullets(text: str) -> bool:
    return STUFFED_BULLET.search(text) is not None


def skills_are_comma_separated(text: str) -> bool:
    """True if no SKILLS section exists or it has at most two bullet lines."""
    match = SKILLS_SECTION.search(text)
    if match is None:
        return True
    return len(BULLET_LINE.findall(match.group(0))) <= MAX_SKILL_BULLETS


def has_standard_sections(text: str) -> bool:
    lowered = text.lower()
    return all(section.lower() in lowered for section in REQUIRED_SECTIONS)


def validate_ats_compatibility(text: str) -> ValidationResult:
    """
    Run every ATS check on rendered plain text.

    Args:
        text: Output of render_plaintext() or any resume text

    Returns:
        ValidationResult with per-check outcomes

    Example:
        >>> result = validate_ats_compatibility("EXPERIENCE\\n...\\nSKILLS\\nPython, Go")
        >>> result.checks["standard_sections"]
        False
    """
    checks = {
        "natural_bullets": not has_stuffed_bullets(text),
        "comma_skills": skills_are_comma_separated(text),
        "standard_sections": has_standard_sections(text),
        "no_bold_overuse": BOLD_MARKER.search(text) is None,
        "plain_text_parseable": UNPARSEABLE_CHARS.search(text) is None,
    }
    result = ValidationResult(is_valid=all(checks.values()), checks=checks)
    log_validation_result(result)
    return result
