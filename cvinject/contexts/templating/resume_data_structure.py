"""
Resume Document Structure

Structured representation of a parsed resume. This is the interface between
contexts:

Intake produces ResumeDocument instances from raw text.
Targeting receives one and returns a new, keyword-enriched instance.
Templating and Rendering serialize it to text, DOCX and PDF.

Documents are treated as values: nothing downstream of the parser mutates a
document it was handed. Code that needs a modified document works on
ResumeDocument.clone().
"""

import copy
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List

from cvinject.utils.text_processing import dedupe_case_insensitive


@dataclass
class PersonalInfo:
    """Contact block from the top of the resume. Every field may be empty."""

    name: str = ""
    location: str = ""
    email: str = ""
    phone: str = ""
    linkedin: str = ""
    github: str = ""

    @property
    def contact_items(self) -> List[str]:
        """Non-empty location, email and phone, in display order."""
        return [item for item in (self.location, self.email, self.phone) if item]

    @property
    def link_items(self) -> List[str]:
        """Non-empty LinkedIn and GitHub handles, in display order."""
        return [item for item in (self.linkedin, self.github) if item]


@dataclass
class ExperienceEntry:
    """
    One role in the work history.

    Attributes:
        title: Job title (may be empty when the header line had no separator)
        company: Employer, or the first segment of the header line
        dates: Date range text such as "2020-Present"
        bullets: Achievement lines in source order; synthetic bullets go last
    """

    title: str = ""
    company: str = ""
    dates: str = ""
    bullets: List[str] = field(default_factory=list)

    @property
    def heading(self) -> str:
        return f"{self.company} | {self.title}"


@dataclass
class EducationEntry:
    """Education line. Only degree is filled by the text parser."""

    degree: str = ""
    school: str = ""
    dates: str = ""


@dataclass
class Skills:
    """
    Skill lists.

    hard keeps insertion order and, once normalized, holds no two entries
    equal under case-insensitive comparison.
    """

    hard: List[str] = field(default_factory=list)
    soft: List[str] = field(default_factory=list)

    def has_hard_skill(self, skill: str) -> bool:
        key = skill.casefold()
        return any(existing.casefold() == key for existing in self.hard)

    def add_hard_skill(self, skill: str) -> bool:
        """Append skill unless already present (ignoring case). Returns True if added."""
        if self.has_hard_skill(skill):
            return False
        self.hard.append(skill)
        return True

    def normalize(self) -> None:
        self.hard = dedupe_case_insensitive(self.hard)


@dataclass
class ResumeDocument:
    """
    Structured resume.

    Attributes:
        personal: Name and contact details
        summary: Professional summary paragraph
        experience: Roles in source order
        skills: Hard and soft skill lists
        education: Education entries in source order
        certifications: Certification names in source order
    """

    personal: PersonalInfo = field(default_factory=PersonalInfo)
    summary: str = ""
    experience: List[ExperienceEntry] = field(default_factory=list)
    skills: Skills = field(default_factory=Skills)
    education: List[EducationEntry] = field(default_factory=list)
    certifications: List[str] = field(default_factory=list)

    def clone(self) -> "ResumeDocument":
        """Independent deep copy; mutating the clone never affects self."""
        return copy.deepcopy(self)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @property
    def bullet_count(self) -> int:
        return sum(len(entry.bullets) for entry in self.experience)
