"""
Plain-text rendering of resume documents.

The plain-text form is the canonical rendering: it is what gets attached as
the .txt payload, what the match score is computed against and what the ATS
validator audits. Rendering is pure and deterministic.

Layout:
    NAME
    location | email | phone
    linkedin | github            (only if either is set)

    PROFESSIONAL SUMMARY         (only if a summary exists)
    ...

    EXPERIENCE
    Company | Title
    Dates                        (only if set)
    • bullet                     (first six bullets)

    SKILLS
    Python, Go, ...

    EDUCATION
    Degree

    CERTIFICATIONS
    Cert A, Cert B

Sections without content are omitted entirely.
"""

from typing import Dict, List

from cvinject.contexts.templating.resume_data_structure import ResumeDocument

BULLET_GLYPH = "•"
FIELD_SEPARATOR = " | "
LIST_SEPARATOR = ", "
MAX_RENDERED_BULLETS = 6

SUMMARY_HEADING = "PROFESSIONAL SUMMARY"
EXPERIENCE_HEADING = "EXPERIENCE"
SKILLS_HEADING = "SKILLS"
EDUCATION_HEADING = "EDUCATION"
CERTIFICATIONS_HEADING = "CERTIFICATIONS"


def render_plaintext(document: ResumeDocument, max_bullets: int = MAX_RENDERED_BULLETS) -> str:
    """
    Render a document as ATS-friendly plain text.

    Args:
        document: Document to render
        max_bullets: Bullets shown per role

    Returns:
        Newline-joined lines; every section but certifications ends with a blank line
    """
    personal = document.personal
    lines: List[str] = [personal.name.upper(), FIELD_SEPARATOR.join(personal.contact_items)]
    if personal.link_items:
        lines.append(FIELD_SEPARATOR.join(personal.link_items))
    lines.append("")

    if document.summary:
        lines.extend([SUMMARY_HEADING, document.summary, ""])

    if document.experience:
        lines.append(EXPERIENCE_HEADING)
        for entry in document.experience:
            lines.append(entry.heading)
            if entry.dates:
                lines.append(entry.dates)
            lines.extend(f"{BULLET_GLYPH} {bullet}" for bullet in entry.bullets[:max_bullets])
            lines.append("")

    if document.skills.hard:
        lines.extend([SKILLS_HEADING, LIST_SEPARATOR.join(document.skills.hard), ""])

    if document.education:
        lines.append(EDUCATION_HEADING)
        lines.extend(entry.degree for entry in document.education)
        lines.append("")

    if document.certifications:
        lines.extend([CERTIFICATIONS_HEADING, LIST_SEPARATOR.join(document.certifications)])

    return "\n".join(lines)


def export_pdf_sections(document: ResumeDocument) -> Dict[str, object]:
    """
    Flatten a document into per-section strings for an external PDF generator.

    Unlike render_plaintext(), experience keeps every bullet and the contact
    line leads with the phone number.

    Returns:
        Dict with keys contact (name, contact_line, links_line), summary,
        experience, skills, education, certifications
    """
    personal = document.personal

    experience_blocks = []
    for entry in document.experience:
        block = [entry.heading]
        if entry.dates:
            block.append(entry.dates)
        block.extend(f"{BULLET_GLYPH} {bullet}" for bullet in entry.bullets)
        experience_blocks.append("\n".join(block))

    contact_line = [item for item in (personal.phone, personal.email, personal.location) if item]

    return {
        "contact": {
            "name": personal.name,
            "contact_line": FIELD_SEPARATOR.join(contact_line),
            "links_line": FIELD_SEPARATOR.join(personal.link_items),
        },
        "summary": document.summary,
        "experience": "\n\n".join(experience_blocks),
        "skills": LIST_SEPARATOR.join(document.skills.hard),
        "education": "\n".join(entry.degree for entry in document.education),
        "certifications": LIST_SEPARATOR.join(document.certifications),
    }
