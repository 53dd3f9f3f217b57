"""
Templating Context

Responsibilities:
- Defines the structured resume document model shared by every context
- Renders documents to canonical plain text
- Flattens documents into per-section strings for external generators

Owns: ResumeDocument structure, plain-text layout
Never: Decides keyword placement or builds binary formats
"""

from cvinject.contexts.templating.resume_data_structure import (
    EducationEntry,
    ExperienceEntry,
    PersonalInfo,
    ResumeDocument,
    Skills,
)
from cvinject.contexts.templating.text_exporter import export_pdf_sections, render_plaintext

__all__ = [
    # Data structure classes
    "ResumeDocument",
    "PersonalInfo",
    "ExperienceEntry",
    "EducationEntry",
    "Skills",
    # Rendering helpers
    "render_plaintext",
    "export_pdf_sections",
]
