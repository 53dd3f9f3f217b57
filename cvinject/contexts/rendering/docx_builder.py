"""
DOCX (WordprocessingML) package builder.

Renders a ResumeDocument into the five XML parts of a minimal OOXML package
and packs them with the store-only ArchiveWriter. Part markup lives in Jinja2
templates under templates/docx/; every piece of resume text passes through
the `xml` filter before it reaches markup.
"""

import time
from pathlib import Path
from typing import Dict

from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, TemplateNotFound

from cvinject.contexts.rendering.archive_writer import pack_archive
from cvinject.contexts.rendering.logger import log_payload_built
from cvinject.contexts.templating.resume_data_structure import ResumeDocument
from cvinject.contexts.templating.text_exporter import (
    BULLET_GLYPH,
    FIELD_SEPARATOR,
    LIST_SEPARATOR,
    MAX_RENDERED_BULLETS,
)

DOCX_TEMPLATES_PATH = Path(__file__).parent / "templates" / "docx"

DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

DEFAULT_FONT = "Calibri"
DEFAULT_FONT_SIZE_HALF_POINTS = 22

# Archive entry name -> template name, in archive order
PACKAGE_PARTS = {
    "[Content_Types].xml": "content_types.xml.jinja",
    "_rels/.rels": "package_rels.xml.jinja",
    "word/document.xml": "document.xml.jinja",
    "word/styles.xml": "styles.xml.jinja",
    "word/_rels/document.xml.rels": "document_rels.xml.jinja",
}

XML_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&apos;"),
)


def escape_xml(text) -> str:
    """
    Escape the five XML metacharacters.

    Ampersands are replaced first so existing entities are escaped, not kept.

    Example:
        >>> escape_xml('R&D <team> "A" \\'B\\'')
        'R&amp;D &lt;team&gt; &quot;A&quot; &apos;B&apos;'
    """
    if text is None:
        return ""
    text = str(text)
    for char, entity in XML_ESCAPES:
        text = text.replace(char, entity)
    return text


class DocxTemplateRegistry:
    """
    Loads and caches the Jinja2 templates for OOXML package parts.

    Autoescaping is off; escaping is explicit through the `xml` filter so
    that structural markup inside templates is never touched.
    """

    def __init__(self, templates_path: Path = None):
        if templates_path is None:
            templates_path = DOCX_TEMPLATES_PATH

        self.templates_path = templates_path
        self._cache: Dict[str, Template] = {}

        self.env = Environment(
            loader=FileSystemLoader(str(templates_path)),
            undefined=StrictUndefined,
            autoescape=False,
            keep_trailing_newline=False,
        )
        self.env.filters["xml"] = escape_xml

    def get_template(self, template_name: str) -> Template:
        """
        Get a part template, loading and caching it on first use.

        Raises:
            TemplateNotFound: If the template file doesn't exist
        """
        if template_name in self._cache:
            return self._cache[template_name]

        try:
            template = self.env.get_template(template_name)
        except TemplateNotFound as e:
            raise TemplateNotFound(
                f"DOCX part template not found: {self.templates_path / template_name}"
            ) from e

        self._cache[template_name] = template
        return template

    def is_cached(self, template_name: str) -> bool:
        return template_name in self._cache


_registry = DocxTemplateRegistry()


def build_docx_parts(
    document: ResumeDocument,
    max_bullets: int = MAX_RENDERED_BULLETS,
    registry: DocxTemplateRegistry = None,
) -> Dict[str, str]:
    """
    Render the XML parts of a DOCX package.

    Args:
        document: Document to render
        max_bullets: Bullets shown per role
        registry: Template registry (module default if None)

    Returns:
        Archive entry name -> XML text, in archive order
    """
    registry = registry or _registry

    context = {
        "personal": document.personal,
        "summary": document.summary,
        "experience": document.experience,
        "skills": document.skills.hard,
        "education": document.education,
        "certifications": document.certifications,
        "max_bullets": max_bullets,
        "bullet_glyph": BULLET_GLYPH,
        "separator": FIELD_SEPARATOR,
        "list_separator": LIST_SEPARATOR,
        "font": DEFAULT_FONT,
        "font_size": DEFAULT_FONT_SIZE_HALF_POINTS,
    }

    return {
        part_name: registry.get_template(template_name).render(**context)
        for part_name, template_name in PACKAGE_PARTS.items()
    }


def build_docx(document: ResumeDocument, max_bullets: int = MAX_RENDERED_BULLETS) -> bytes:
    """
    Build a .docx file for a resume.

    Args:
        document: Document to render
        max_bullets: Bullets shown per role

    Returns:
        Bytes of a store-only OOXML package, directly openable by word processors
    """
    start = time.perf_counter()
    data = pack_archive(build_docx_parts(document, max_bullets=max_bullets))
    log_payload_built("docx", len(data), (time.perf_counter() - start) * 1000)
    return data
