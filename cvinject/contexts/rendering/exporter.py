"""
Multi-format export of an injected resume.

Produces the .docx, .pdf and .txt payloads in that order. Errors are caught
per run: the result records the failure message and keeps the files that
were produced before it.

The async variants run the byte builders in a worker thread so an event
loop is not blocked. Formats are still produced one after another.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from cvinject.contexts.rendering.docx_builder import DOCX_MEDIA_TYPE, build_docx
from cvinject.contexts.rendering.exceptions import ExportError
from cvinject.contexts.rendering.logger import _log_info, log_export_result
from cvinject.contexts.rendering.pdf_writer import PDF_MEDIA_TYPE, build_pdf
from cvinject.contexts.templating.resume_data_structure import ResumeDocument
from cvinject.contexts.templating.text_exporter import MAX_RENDERED_BULLETS, render_plaintext

TEXT_MEDIA_TYPE = "text/plain"
DEFAULT_BASE_NAME = "ATS_CV"


@dataclass
class ExportedFile:
    """One rendered payload, ready to be saved or attached."""

    format: str
    filename: str
    content: bytes
    media_type: str

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass
class ExportResult:
    """
    Outcome of export_all_formats().

    Attributes:
        success: Whether every format was produced
        files: Files produced, in export order (partial on failure)
        error: Failure message, if any
    """

    success: bool = True
    files: List[ExportedFile] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def formats(self) -> List[str]:
        return [f.format for f in self.files]

    def get(self, format: str) -> Optional[ExportedFile]:
        """Return the file for a format, or None if it was not produced."""
        for exported in self.files:
            if exported.format == format:
                return exported
        return None


def build_text(document: ResumeDocument, max_bullets: int = MAX_RENDERED_BULLETS) -> bytes:
    """Plain-text payload, UTF-8 encoded."""
    return render_plaintext(document, max_bullets).encode("utf-8")


# (format, builder, media type), in export order; builders take (document, max_bullets)
EXPORT_FORMATS: Tuple[Tuple[str, Callable[[ResumeDocument, int], bytes], str], ...] = (
    ("docx", build_docx, DOCX_MEDIA_TYPE),
    ("pdf", build_pdf, PDF_MEDIA_TYPE),
    ("txt", build_text, TEXT_MEDIA_TYPE),
)


def _record_failure(result: ExportResult, format: str, error: Exception) -> None:
    export_error = ExportError(format, produced=result.formats, original_error=error)
    result.success = False
    result.error = str(export_error)


def export_all_formats(
    document: ResumeDocument,
    base_name: str = DEFAULT_BASE_NAME,
    max_bullets: int = MAX_RENDERED_BULLETS,
) -> ExportResult:
    """
    Render a document to every supported format.

    Args:
        document: Injected document to export
        base_name: Filename stem; files are named {base_name}.{format}
        max_bullets: Bullets per role in every format

    Returns:
        ExportResult; on failure, success is False, error holds the message and
        files holds the formats produced before the failure

    Example:
        >>> result = export_all_formats(doc, base_name="Jane_Doe_CV")
        >>> [f.filename for f in result.files]
        ['Jane_Doe_CV.docx', 'Jane_Doe_CV.pdf', 'Jane_Doe_CV.txt']
    """
    _log_info(f"Exporting all formats as '{base_name}'")
    result = ExportResult()

    for format, builder, media_type in EXPORT_FORMATS:
        try:
            content = builder(document, max_bullets)
        except Exception as e:
            _record_failure(result, format, e)
            break
        result.files.append(ExportedFile(format, f"{base_name}.{format}", content, media_type))

    log_export_result(result)
    return result


async def build_docx_async(document: ResumeDocument, max_bullets: int = MAX_RENDERED_BULLETS) -> bytes:
    """build_docx() in a worker thread."""
    return await asyncio.to_thread(build_docx, document, max_bullets)


async def build_pdf_async(document: ResumeDocument, max_bullets: int = MAX_RENDERED_BULLETS) -> bytes:
    """build_pdf() in a worker thread."""
    return await asyncio.to_thread(build_pdf, document, max_bullets)


async def export_all_formats_async(
    document: ResumeDocument,
    base_name: str = DEFAULT_BASE_NAME,
    max_bullets: int = MAX_RENDERED_BULLETS,
) -> ExportResult:
    """
    Async counterpart of export_all_formats().

    Each builder runs in a worker thread and is awaited before the next one
    starts.
    """
    _log_info(f"Exporting all formats as '{base_name}' (async)")
    result = ExportResult()

    for format, builder, media_type in EXPORT_FORMATS:
        try:
            content = await asyncio.to_thread(builder, document, max_bullets)
        except Exception as e:
            _record_failure(result, format, e)
            break
        result.files.append(ExportedFile(format, f"{base_name}.{format}", content, media_type))

    log_export_result(result)
    return result
