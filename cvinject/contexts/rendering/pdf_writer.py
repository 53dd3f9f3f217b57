"""
Minimal single-page PDF writer.

Lays a ResumeDocument out top-down on a US Letter page without real text
metrics: a vertical cursor starts near the top and moves down by fixed steps,
with wrapped paragraphs approximated as ceil(len / column width) lines. Each
laid-out line becomes one text-showing operation in the content stream.

The file always has the same seven-object skeleton:

    1 catalog, 2 page tree, 3 page, 4 content stream,
    5 Helvetica (regular), 6 Helvetica-Bold

(object 0 is the free-list head). Offsets in the cross-reference table are
recorded while the bytes are written, so they are exact.
"""

import io
import math
import re
import time
from dataclasses import dataclass
from typing import List

from cvinject.contexts.rendering.logger import log_payload_built
from cvinject.contexts.templating.resume_data_structure import ResumeDocument
from cvinject.contexts.templating.text_exporter import (
    BULLET_GLYPH,
    CERTIFICATIONS_HEADING,
    EDUCATION_HEADING,
    EXPERIENCE_HEADING,
    FIELD_SEPARATOR,
    LIST_SEPARATOR,
    MAX_RENDERED_BULLETS,
    SKILLS_HEADING,
    SUMMARY_HEADING,
)

PDF_MEDIA_TYPE = "application/pdf"

PAGE_WIDTH = 612
PAGE_HEIGHT = 792
TOP_Y = 750
LINE_HEIGHT = 14
LEFT_MARGIN = 72
CENTER_X = PAGE_WIDTH // 2
BULLET_INDENT = 10

SUMMARY_COLUMNS = 80
BULLET_COLUMNS = 85

NAME_SIZE = 18
HEADING_SIZE = 12
ENTRY_HEADING_SIZE = 11
BODY_SIZE = 10

REGULAR_FONT = "/F1"
BOLD_FONT = "/F2"

# PDF standard encoding for the base-14 fonts; unmappable characters become "?"
TEXT_ENCODING = "cp1252"

CONTROL_CHARS = re.compile(r"[\x00-\x1f]")


@dataclass
class PdfTextLine:
    """One positioned run of text."""

    text: str
    x: int
    y: int
    size: int = BODY_SIZE
    bold: bool = False


def escape_pdf_text(text: str) -> str:
    """
    Make text safe inside a PDF literal string.

    Backslashes and parentheses are escaped; control characters are removed.

    Example:
        >>> print(escape_pdf_text("Team (lead)"))
        Team \\(lead\\)
    """
    text = text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")
    return CONTROL_CHARS.sub("", text)


def _wrapped_line_count(text: str, columns: int) -> int:
    return math.ceil(len(text) / columns)


def layout_lines(document: ResumeDocument, max_bullets: int = MAX_RENDERED_BULLETS) -> List[PdfTextLine]:
    """
    Compute the positioned text lines for a document.

    Args:
        document: Document to lay out
        max_bullets: Bullets shown per role

    Returns:
        Lines in drawing order, y decreasing
    """
    personal = document.personal
    lines: List[PdfTextLine] = []
    y = TOP_Y

    lines.append(PdfTextLine(personal.name.upper(), CENTER_X, y, size=NAME_SIZE, bold=True))
    y -= 24

    lines.append(PdfTextLine(FIELD_SEPARATOR.join(personal.contact_items), CENTER_X, y))
    y -= 16

    if personal.link_items:
        lines.append(PdfTextLine(FIELD_SEPARATOR.join(personal.link_items), CENTER_X, y))
        y -= 24

    if document.summary:
        y -= 12
        lines.append(PdfTextLine(SUMMARY_HEADING, LEFT_MARGIN, y, size=HEADING_SIZE, bold=True))
        y -= 16
        lines.append(PdfTextLine(document.summary, LEFT_MARGIN, y))
        y -= _wrapped_line_count(document.summary, SUMMARY_COLUMNS) * LINE_HEIGHT + 12

    if document.experience:
        lines.append(PdfTextLine(EXPERIENCE_HEADING, LEFT_MARGIN, y, size=HEADING_SIZE, bold=True))
        y -= 18
        for entry in document.experience:
            lines.append(
                PdfTextLine(entry.heading, LEFT_MARGIN, y, size=ENTRY_HEADING_SIZE, bold=True)
            )
            y -= LINE_HEIGHT
            if entry.dates:
                lines.append(PdfTextLine(entry.dates, LEFT_MARGIN, y))
                y -= LINE_HEIGHT
            for bullet in entry.bullets[:max_bullets]:
                lines.append(
                    PdfTextLine(f"{BULLET_GLYPH} {bullet}", LEFT_MARGIN + BULLET_INDENT, y)
                )
                y -= _wrapped_line_count(bullet, BULLET_COLUMNS) * LINE_HEIGHT
            y -= 8

    if document.skills.hard:
        y -= 8
        lines.append(PdfTextLine(SKILLS_HEADING, LEFT_MARGIN, y, size=HEADING_SIZE, bold=True))
        y -= 16
        lines.append(PdfTextLine(LIST_SEPARATOR.join(document.skills.hard), LEFT_MARGIN, y))
        y -= 20

    if document.education:
        lines.append(PdfTextLine(EDUCATION_HEADING, LEFT_MARGIN, y, size=HEADING_SIZE, bold=True))
        y -= 16
        for entry in document.education:
            lines.append(PdfTextLine(entry.degree, LEFT_MARGIN, y))
            y -= LINE_HEIGHT

    if document.certifications:
        y -= 8
        lines.append(
            PdfTextLine(CERTIFICATIONS_HEADING, LEFT_MARGIN, y, size=HEADING_SIZE, bold=True)
        )
        y -= 16
        lines.append(PdfTextLine(LIST_SEPARATOR.join(document.certifications), LEFT_MARGIN, y))

    return lines


def build_content_stream(lines: List[PdfTextLine]) -> bytes:
    """Encode laid-out lines as a PDF content stream, one BT/ET block per line."""
    stream = io.BytesIO()
    for line in lines:
        font = BOLD_FONT if line.bold else REGULAR_FONT
        text = escape_pdf_text(line.text).encode(TEXT_ENCODING, errors="replace")
        stream.write(f"BT {font} {line.size} Tf {line.x} {line.y} Td (".encode("ascii"))
        stream.write(text)
        stream.write(b") Tj ET\n")
    return stream.getvalue()


class PdfObjectWriter:
    """
    Writes numbered indirect objects and records their byte offsets.

    Objects must be added in number order starting at 1; finish() appends the
    cross-reference table and trailer.
    """

    HEADER = b"%PDF-1.4\n%\xe2\xe3\xcf\xd3\n"

    def __init__(self):
        self._buffer = io.BytesIO()
        self._buffer.write(self.HEADER)
        self.offsets: List[int] = []

    def add(self, body: bytes) -> int:
        number = len(self.offsets) + 1
        self.offsets.append(self._buffer.tell())
        self._buffer.write(f"{number} 0 obj\n".encode("ascii"))
        self._buffer.write(body)
        self._buffer.write(b"\nendobj\n")
        return number

    def add_stream(self, data: bytes) -> int:
        body = f"<< /Length {len(data)} >>\nstream\n".encode("ascii") + data + b"endstream"
        return self.add(body)

    def finish(self, root: int) -> bytes:
        xref_offset = self._buffer.tell()
        size = len(self.offsets) + 1

        self._buffer.write(f"xref\n0 {size}\n".encode("ascii"))
        self._buffer.write(b"0000000000 65535 f \n")
        for offset in self.offsets:
            self._buffer.write(f"{offset:010d} 00000 n \n".encode("ascii"))

        self._buffer.write(
            f"trailer\n<< /Size {size} /Root {root} 0 R >>\nstartxref\n{xref_offset}\n%%EOF\n".encode(
                "ascii"
            )
        )
        return self._buffer.getvalue()


def _font_object(base_font: str) -> bytes:
    return (
        f"<< /Type /Font /Subtype /Type1 /BaseFont /{base_font} "
        f"/Encoding /WinAnsiEncoding >>"
    ).encode("ascii")


def build_pdf(document: ResumeDocument, max_bullets: int = MAX_RENDERED_BULLETS) -> bytes:
    """
    Build a one-page PDF for a resume.

    Args:
        document: Document to render
        max_bullets: Bullets shown per role

    Returns:
        PDF bytes
    """
    start = time.perf_counter()

    writer = PdfObjectWriter()
    catalog = writer.add(b"<< /Type /Catalog /Pages 2 0 R >>")
    writer.add(b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>")
    writer.add(
        (
            f"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 {PAGE_WIDTH} {PAGE_HEIGHT}] "
            f"/Contents 4 0 R /Resources << /Font << {REGULAR_FONT} 5 0 R {BOLD_FONT} 6 0 R >> >> >>"
        ).encode("ascii")
    )
    writer.add_stream(build_content_stream(layout_lines(document, max_bullets=max_bullets)))
    writer.add(_font_object("Helvetica"))
    writer.add(_font_object("Helvetica-Bold"))
    data = writer.finish(root=catalog)

    log_payload_built("pdf", len(data), (time.perf_counter() - start) * 1000)
    return data
