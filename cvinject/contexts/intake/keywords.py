"""
Keyword normalization for the Intake context.

The upstream keyword strategy hands over a dict of priority buckets, each an
ordered list of keyword strings. This module flattens it into an ordered
sequence of Keyword records carrying the priority tier and the resume
sections the injector may place each keyword in.

Bucket names and aliases (first non-empty alias wins):
- high:         "highROI" or "highPriority"   -> targets experience + skills
- medium:       "mediumROI" or "mediumPriority" -> targets experience
- low:          "lowROI" or "lowPriority"     -> targets summary
- unclassified: "unclassified"                 -> medium priority, experience
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, FrozenSet, List, Optional

from cvinject.contexts.intake.exceptions import InvalidKeywordGroupsError
from cvinject.contexts.intake.logger import _log_warning, log_keywords_normalized


class Priority(Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Target(Enum):
    SUMMARY = "summary"
    EXPERIENCE = "experience"
    SKILLS = "skills"


@dataclass(frozen=True)
class Keyword:
    """
    A keyword with its priority tier and permitted injection targets.

    Attributes:
        text: Keyword as supplied (surrounding whitespace stripped)
        priority: Priority tier
        targets: Sections the injector may place this keyword in
    """

    text: str
    priority: Priority
    targets: FrozenSet[Target]

    def targets_section(self, target: Target) -> bool:
        return target in self.targets


# (aliases, priority, targets), in processing order
KEYWORD_GROUPS = (
    (("highROI", "highPriority"), Priority.HIGH, frozenset({Target.EXPERIENCE, Target.SKILLS})),
    (("mediumROI", "mediumPriority"), Priority.MEDIUM, frozenset({Target.EXPERIENCE})),
    (("lowROI", "lowPriority"), Priority.LOW, frozenset({Target.SUMMARY})),
    (("unclassified",), Priority.MEDIUM, frozenset({Target.EXPERIENCE})),
)

KNOWN_GROUP_NAMES = {alias for aliases, _, _ in KEYWORD_GROUPS for alias in aliases}


def _resolve_bucket(keyword_groups: Mapping, aliases: tuple) -> List[str]:
    """Return the first non-empty bucket among aliases, validated."""
    for alias in aliases:
        bucket = keyword_groups.get(alias)
        if not bucket:
            continue
        if isinstance(bucket, str) or not isinstance(bucket, Sequence):
            raise InvalidKeywordGroupsError("Keyword group must be a list of strings", group=alias)
        for item in bucket:
            if not isinstance(item, str):
                raise InvalidKeywordGroupsError(
                    f"Keyword must be a string, got {type(item).__name__}", group=alias
                )
        return list(bucket)
    return []


def normalize_keywords(keyword_groups: Optional[Mapping[str, Any]]) -> List[Keyword]:
    """
    Flatten priority-bucketed keywords into an ordered Keyword list.

    Order is fixed: high, medium, low, then unclassified; source order is kept
    within each bucket. Missing buckets count as empty and blank strings are
    skipped. Unknown bucket names are ignored with a warning.

    Args:
        keyword_groups: Mapping of bucket name to list of keyword strings (None allowed)

    Returns:
        Ordered list of Keyword records

    Raises:
        InvalidKeywordGroupsError: If keyword_groups is not a mapping, or a bucket
            is not a list of strings

    Example:
        >>> kws = normalize_keywords({"highROI": ["Docker"], "lowROI": ["Agile"]})
        >>> [(k.text, k.priority.value) for k in kws]
        [('Docker', 'high'), ('Agile', 'low')]
    """
    if keyword_groups is None:
        return []
    if not isinstance(keyword_groups, Mapping):
        raise InvalidKeywordGroupsError(
            f"Keyword groups must be a mapping, got {type(keyword_groups).__name__}"
        )

    unknown = sorted(str(name) for name in keyword_groups if name not in KNOWN_GROUP_NAMES)
    if unknown:
        _log_warning(f"Ignoring unknown keyword groups: {unknown}")

    keywords = []
    for aliases, priority, targets in KEYWORD_GROUPS:
        for text in _resolve_bucket(keyword_groups, aliases):
            text = text.strip()
            if text:
                keywords.append(Keyword(text=text, priority=priority, targets=targets))

    log_keywords_normalized(keywords)
    return keywords
