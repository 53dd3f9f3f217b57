"""
Rendering Context

Responsibilities:
- Packs OOXML parts into a store-only ZIP archive (CRC-32 included)
- Builds the .docx and .pdf byte payloads from a ResumeDocument
- Exports every format in one call
- Audits rendered text for ATS compatibility

Owns: Binary formats, export bookkeeping, ATS checks
Never: Modifies document content
"""

from cvinject.contexts.rendering.archive_writer import ArchiveWriter, crc32, pack_archive
from cvinject.contexts.rendering.docx_builder import build_docx, escape_xml
from cvinject.contexts.rendering.exceptions import ArchiveError, ExportError
from cvinject.contexts.rendering.exporter import (
    ExportedFile,
    ExportResult,
    build_docx_async,
    build_pdf_async,
    export_all_formats,
    export_all_formats_async,
)
from cvinject.contexts.rendering.pdf_writer import build_pdf, escape_pdf_text
from cvinject.contexts.rendering.validator import ValidationResult, validate_ats_compatibility

__all__ = [
    # Binary formats
    "crc32",
    "pack_archive",
    "ArchiveWriter",
    "build_docx",
    "build_pdf",
    "escape_xml",
    "escape_pdf_text",
    # Export
    "export_all_formats",
    "export_all_formats_async",
    "build_docx_async",
    "build_pdf_async",
    "ExportResult",
    "ExportedFile",
    # Validation
    "validate_ats_compatibility",
    "ValidationResult",
    # Errors
    "ArchiveError",
    "ExportError",
]
