"""
Intake Context

Responsibilities:
- Parses raw resume text into the structured ResumeDocument model
- Normalizes priority-bucketed keyword groups into ordered Keyword records

Owns: Text segmentation heuristics, keyword priority/target assignment
Never: Modifies a document after creating it, or decides where keywords go
"""

from cvinject.contexts.intake.exceptions import InvalidKeywordGroupsError, ResumeParseError
from cvinject.contexts.intake.keywords import Keyword, Priority, Target, normalize_keywords
from cvinject.contexts.intake.resume_parser import parse_resume_text

__all__ = [
    "parse_resume_text",
    "normalize_keywords",
    "Keyword",
    "Priority",
    "Target",
    "ResumeParseError",
    "InvalidKeywordGroupsError",
]
