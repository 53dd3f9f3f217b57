"""
Regex patterns for segmenting plain-text resumes.

Pattern classes are frozen dataclasses with class-level compiled patterns,
grouped by what they detect. The parser only ever reads them.
"""

import re
from dataclasses import dataclass

# =============================================================================
# SECTION HEADINGS
# =============================================================================


@dataclass(frozen=True)
class SectionHeadingPatterns:
    """
    Whole-line, case-insensitive section headings.

    A heading may carry trailing whitespace or a colon ("Skills:").
    """

    SUMMARY: re.Pattern = re.compile(
        r"^(PROFESSIONAL\s*SUMMARY|SUMMARY|PROFILE|OBJECTIVE)[\s:]*$", re.IGNORECASE
    )
    EXPERIENCE: re.Pattern = re.compile(
        r"^(EXPERIENCE|WORK\s*EXPERIENCE|EMPLOYMENT|PROFESSIONAL\s*EXPERIENCE)[\s:]*$",
        re.IGNORECASE,
    )
    SKILLS: re.Pattern = re.compile(
        r"^(SKILLS|TECHNICAL\s*SKILLS|CORE\s*SKILLS|KEY\s*SKILLS)[\s:]*$", re.IGNORECASE
    )
    EDUCATION: re.Pattern = re.compile(
        r"^(EDUCATION|ACADEMIC|QUALIFICATIONS)[\s:]*$", re.IGNORECASE
    )
    CERTIFICATIONS: re.Pattern = re.compile(
        r"^(CERTIFICATIONS?|LICENSES?|CREDENTIALS?)[\s:]*$", re.IGNORECASE
    )


# Tested in this order; the first match decides the section
SECTION_HEADINGS = (
    ("summary", SectionHeadingPatterns.SUMMARY),
    ("experience", SectionHeadingPatterns.EXPERIENCE),
    ("skills", SectionHeadingPatterns.SKILLS),
    ("education", SectionHeadingPatterns.EDUCATION),
    ("certifications", SectionHeadingPatterns.CERTIFICATIONS),
)


def match_section_heading(line: str):
    """
    Return the section name a heading line opens, or None.

    Example:
        >>> match_section_heading("Work Experience:")
        'experience'
        >>> match_section_heading("Built a compiler") is None
        True
    """
    for section, pattern in SECTION_HEADINGS:
        if pattern.match(line):
            return section
    return None


# =============================================================================
# CONTACT HEADER
# =============================================================================

KNOWN_CITIES = ("Dublin", "London", "New York", "San Francisco")

_KNOWN_CITY_PATTERN = "|".join(re.escape(city) for city in KNOWN_CITIES)


@dataclass(frozen=True)
class ContactPatterns:
    """Patterns tested against each of the first header lines."""

    EMAIL: re.Pattern = re.compile(r"[\w.-]+@[\w.-]+\.\w+")

    # Digits with optional +, spaces, dashes and parentheses; digit count checked separately
    PHONE: re.Pattern = re.compile(r"\+?[\d\s\-()]{10,}")

    LINKEDIN: re.Pattern = re.compile(r"linkedin\.com/in/[\w-]+", re.IGNORECASE)

    GITHUB: re.Pattern = re.compile(r"github\.com/[\w-]+", re.IGNORECASE)

    # "Austin, TX" / "Cork, IE"
    TRAILING_REGION_CODE: re.Pattern = re.compile(r",\s*[A-Z]{2,}\s*$")

    # "Cork, Munster, Ireland"
    CITY_REGION: re.Pattern = re.compile(r",\s*\w+\s*,\s*\w+")

    KNOWN_CITY: re.Pattern = re.compile(_KNOWN_CITY_PATTERN, re.IGNORECASE)

    # Separators removed from a line taken as the location
    LOCATION_NOISE: re.Pattern = re.compile(r"[|•]")

    # Lines containing these never become the name
    NAME_EXCLUDED: re.Pattern = re.compile(r"[@|•]")

    NAME_START: re.Pattern = re.compile(r"^[A-Z]")


MIN_PHONE_DIGITS = 10


def looks_like_location(line: str) -> bool:
    """
    Heuristic location test for a header line.

    Example:
        >>> looks_like_location("Austin, TX")
        True
        >>> looks_like_location("Python, Go")
        False
    """
    return bool(
        ContactPatterns.TRAILING_REGION_CODE.search(line)
        or ContactPatterns.CITY_REGION.search(line)
        or ContactPatterns.KNOWN_CITY.search(line)
    )


# =============================================================================
# EXPERIENCE
# =============================================================================


@dataclass(frozen=True)
class ExperiencePatterns:
    """Patterns for role headers and bullets inside the experience section."""

    # "Company | Title | Dates" with |, en dash or hyphen separators; dates optional
    # Any hyphen separates, so a hyphenated prose line ("real-time") also reads as a role
    ROLE_HEADER: re.Pattern = re.compile(r"^(.+?)\s*[|–-]\s*(.+?)(?:\s*[|–-]\s*(.+))?$")

    # "2019 - 2021", "2020–Present"
    DATE_RANGE: re.Pattern = re.compile(r"\d{4}\s*[-–]\s*(Present|\d{4})", re.IGNORECASE)

    # A bullet glyph followed by whitespace
    BULLET: re.Pattern = re.compile(r"^[•\-*▪▸►]\s")


@dataclass(frozen=True)
class ListPatterns:
    """Patterns for comma-style lists (skills)."""

    SEPARATOR: re.Pattern = re.compile(r"[,;]")


MIN_SKILL_LENGTH = 2
MAX_SKILL_LENGTH = 40
MIN_EDUCATION_LENGTH = 6
HEADER_LINE_COUNT = 10
MIN_NAME_LENGTH = 4
