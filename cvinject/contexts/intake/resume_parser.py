"""
Plain-text resume parsing for the Intake context.

Turns free-text resumes into ResumeDocument instances with two passes:

1. Header pass over the first lines: name, email, phone, LinkedIn, GitHub
   and location. Every header line is tested for every contact field and a
   later match overwrites an earlier one (the name is the exception: the
   first qualifying line wins).
2. Section pass over all lines: a line-at-a-time state machine whose state
   is the current section. A heading line switches section and is consumed;
   any other line is handed to the current section's handler.

This is heuristic segmentation, not language understanding. Lines that fit no
rule are dropped rather than reported.
"""

from typing import List, Optional

from cvinject.contexts.intake.exceptions import ResumeParseError
from cvinject.contexts.intake.logger import _log_debug, _log_warning, log_parse_result
from cvinject.contexts.intake.normalizer import normalize_resume_text
from cvinject.contexts.intake.patterns import (
    HEADER_LINE_COUNT,
    MAX_SKILL_LENGTH,
    MIN_EDUCATION_LENGTH,
    MIN_NAME_LENGTH,
    MIN_PHONE_DIGITS,
    MIN_SKILL_LENGTH,
    ContactPatterns,
    ExperiencePatterns,
    ListPatterns,
    looks_like_location,
    match_section_heading,
)
from cvinject.contexts.templating.resume_data_structure import (
    EducationEntry,
    ExperienceEntry,
    PersonalInfo,
    ResumeDocument,
)
from cvinject.utils.text_processing import strip_bullet_glyph, truncate_display

HEADER_SECTION = "header"

# Skill and certification lines only strip these glyphs
LIST_BULLET_GLYPHS = "•-*"


def parse_header(lines: List[str]) -> PersonalInfo:
    """
    Extract contact details from the top of a resume.

    Args:
        lines: Leading lines of the resume (callers pass the first ten)

    Returns:
        PersonalInfo with whichever fields were detected
    """
    personal = PersonalInfo()

    for line in lines:
        trimmed = line.strip()
        if not trimmed:
            continue

        if (
            not personal.name
            and len(trimmed) >= MIN_NAME_LENGTH
            and ContactPatterns.NAME_START.match(trimmed)
            and not ContactPatterns.NAME_EXCLUDED.search(trimmed)
        ):
            personal.name = trimmed

        email = ContactPatterns.EMAIL.search(trimmed)
        if email:
            personal.email = email.group(0)

        for phone in ContactPatterns.PHONE.finditer(trimmed):
            candidate = phone.group(0).strip()
            if sum(ch.isdigit() for ch in candidate) >= MIN_PHONE_DIGITS:
                personal.phone = candidate
                break

        linkedin = ContactPatterns.LINKEDIN.search(trimmed)
        if linkedin:
            personal.linkedin = linkedin.group(0)

        github = ContactPatterns.GITHUB.search(trimmed)
        if github:
            personal.github = github.group(0)

        if looks_like_location(trimmed):
            personal.location = ContactPatterns.LOCATION_NOISE.sub("", trimmed).strip()

    return personal


def parse_role_header(line: str) -> Optional[ExperienceEntry]:
    """
    Build an empty role from a "Company | Title | Dates" style line.

    A line without separators still opens a role when it carries a year
    range ("2019 - 2021", "2020-Present"); the company then falls back to the
    text before the first "|".

    Returns:
        New ExperienceEntry, or None if the line is not a role header

    Example:
        >>> parse_role_header("Acme Co | Engineer | 2020-Present")
        ExperienceEntry(title='Engineer', company='Acme Co', dates='2020-Present', bullets=[])
    """
    role_match = ExperiencePatterns.ROLE_HEADER.match(line)
    date_match = ExperiencePatterns.DATE_RANGE.search(line)

    if not role_match and not date_match:
        return None

    if role_match:
        company, title, dates = role_match.group(1), role_match.group(2), role_match.group(3)
    else:
        company, title, dates = None, None, None

    return ExperienceEntry(
        title=title or "",
        company=company or line.split("|")[0].strip(),
        dates=dates or (date_match.group(0) if date_match else ""),
    )


def split_skill_line(line: str) -> List[str]:
    """
    Split a skills line on commas and semicolons.

    Pieces shorter than 2 or longer than 40 characters are dropped.

    Example:
        >>> split_skill_line("- Python, Go; C")
        ['Python', 'Go']
    """
    stripped = strip_bullet_glyph(line, glyphs=LIST_BULLET_GLYPHS)
    pieces = [piece.strip() for piece in ListPatterns.SEPARATOR.split(stripped)]
    return [piece for piece in pieces if MIN_SKILL_LENGTH <= len(piece) <= MAX_SKILL_LENGTH]


class ResumeTextParser:
    """
    Section state machine over resume lines.

    One transition per line: a heading line moves to its section (first
    matching heading pattern wins) and is not treated as content. Leaving a
    section flushes what it was accumulating, so the open role and the summary
    buffer are committed exactly once.

    Usage:
        document = ResumeTextParser().parse(text)
    """

    def __init__(self):
        self.document = ResumeDocument()
        self.section = HEADER_SECTION
        self.current_role: Optional[ExperienceEntry] = None
        self.summary_lines: List[str] = []

    def parse(self, text: str) -> ResumeDocument:
        lines = text.split("\n")

        self.document.personal = parse_header(lines[:HEADER_LINE_COUNT])

        for line in lines:
            trimmed = line.strip()

            next_section = match_section_heading(trimmed)
            if next_section is not None:
                self._enter_section(next_section)
                continue

            if trimmed:
                self._handle_line(trimmed)

        self._flush()
        self.document.skills.normalize()

        return self.document

    def _enter_section(self, section: str) -> None:
        _log_debug(f"Section '{self.section}' -> '{section}'")
        self._flush()
        self.section = section

    def _flush(self) -> None:
        """Commit whatever the current section has pending."""
        if self.section == "summary" and self.summary_lines:
            self.document.summary = " ".join(self.summary_lines).strip()
        if self.section == "experience" and self.current_role is not None:
            self.document.experience.append(self.current_role)
            self.current_role = None
        self.summary_lines = []

    def _handle_line(self, line: str) -> None:
        handler = getattr(self, f"_handle_{self.section}_line", None)
        if handler is not None:
            handler(line)

    def _handle_summary_line(self, line: str) -> None:
        self.summary_lines.append(line)

    def _handle_experience_line(self, line: str) -> None:
        if ExperiencePatterns.BULLET.match(line):
            if self.current_role is None:
                _log_debug(f"Dropped bullet outside any role: '{truncate_display(line, 60)}'")
                return
            self.current_role.bullets.append(strip_bullet_glyph(line))
            return

        role = parse_role_header(line)
        if role is not None:
            if self.current_role is not None:
                self.document.experience.append(self.current_role)
            self.current_role = role

    def _handle_skills_line(self, line: str) -> None:
        self.document.skills.hard.extend(split_skill_line(line))

    def _handle_education_line(self, line: str) -> None:
        if len(line) >= MIN_EDUCATION_LENGTH:
            self.document.education.append(EducationEntry(degree=line))

    def _handle_certifications_line(self, line: str) -> None:
        self.document.certifications.append(strip_bullet_glyph(line, glyphs=LIST_BULLET_GLYPHS))


def parse_resume_text(raw_text: Optional[str], strict: bool = False) -> Optional[ResumeDocument]:
    """
    Parse raw resume text into a ResumeDocument.

    Args:
        raw_text: Resume text, already decoded
        strict: Raise ResumeParseError instead of returning None on empty input

    Returns:
        Parsed document, or None if raw_text is None, empty or whitespace only

    Raises:
        ResumeParseError: If strict and there is nothing to parse

    Example:
        >>> doc = parse_resume_text("JANE DOE\\nSKILLS\\nPython, Go")
        >>> doc.skills.hard
        ['Python', 'Go']
    """
    if not raw_text or not raw_text.strip():
        _log_warning("Resume text is empty; nothing to parse")
        if strict:
            raise ResumeParseError("Resume text is empty")
        return None

    document = ResumeTextParser().parse(normalize_resume_text(raw_text))
    log_parse_result(document)
    return document
