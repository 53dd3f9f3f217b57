"""
cvinject - ATS keyword injection for free-text resumes

Parses a plain-text resume into a structured document, injects priority-tiered
keywords to raise its match rate against applicant tracking systems, and
exports the result as plain text, DOCX and PDF byte payloads.

Architecture:
- Intake Context: Resume text parsing and keyword normalization
- Targeting Context: Keyword injection with anti-stuffing limits
- Templating Context: Document model and plain-text rendering
- Rendering Context: DOCX/PDF byte builders, multi-format export, ATS validation
"""

__version__ = "0.1.0"
