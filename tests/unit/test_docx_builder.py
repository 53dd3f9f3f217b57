"""Unit tests for the DOCX package builder."""

import io
import xml.etree.ElementTree as ET
import zipfile

import pytest
from jinja2 import TemplateNotFound

from cvinject.contexts.rendering import build_docx, escape_xml
from cvinject.contexts.rendering.docx_builder import (
    PACKAGE_PARTS,
    DocxTemplateRegistry,
    build_docx_parts,
)
from cvinject.contexts.templating import ExperienceEntry, PersonalInfo, ResumeDocument, Skills

W_NS = "{http://schemas.openxmlformats.org/wordprocessingml/2006/main}"


def paragraph_texts(document_xml: str):
    """Concatenated run text of every paragraph in a document.xml part."""
    root = ET.fromstring(document_xml.encode("utf-8"))
    return ["".join(t.text or "" for t in p.iter(f"{W_NS}t")) for p in root.iter(f"{W_NS}p")]


@pytest.mark.unit
class TestEscapeXml:
    def test_all_metacharacters(self):
        assert escape_xml("&<>\"'") == "&amp;&lt;&gt;&quot;&apos;"

    def test_ampersand_first(self):
        """An existing entity is escaped again, not passed through."""
        assert escape_xml("&amp;") == "&amp;amp;"

    def test_plain_text_unchanged(self):
        assert escape_xml("Built systems • 30%") == "Built systems • 30%"

    def test_none(self):
        assert escape_xml(None) == ""


@pytest.mark.unit
def test_template_registry_caches():
    registry = DocxTemplateRegistry()
    first = registry.get_template("document.xml.jinja")
    assert registry.is_cached("document.xml.jinja")
    assert registry.get_template("document.xml.jinja") is first


@pytest.mark.unit
def test_template_registry_missing_template():
    with pytest.raises(TemplateNotFound):
        DocxTemplateRegistry().get_template("numbering.xml.jinja")


@pytest.mark.unit
class TestParts:
    """The five XML parts."""

    def test_part_order(self, full_document):
        assert list(build_docx_parts(full_document)) == [
            "[Content_Types].xml",
            "_rels/.rels",
            "word/document.xml",
            "word/styles.xml",
            "word/_rels/document.xml.rels",
        ]

    def test_every_part_is_well_formed(self, full_document):
        for name, xml in build_docx_parts(full_document).items():
            assert xml.startswith("<?xml"), name
            ET.fromstring(xml.encode("utf-8"))

    def test_body_mirrors_text_layout(self, full_document):
        texts = paragraph_texts(build_docx_parts(full_document)["word/document.xml"])
        assert texts[:3] == [
            "JANE DOE",
            "Austin, TX | jane.doe@example.com | (512) 555-0142",
            "linkedin.com/in/janedoe | github.com/janedoe",
        ]
        assert "PROFESSIONAL SUMMARY" in texts
        assert "Globex Corp | Senior Engineer" in texts
        assert "2021-Present" in texts
        assert "• Led migration of batch jobs to streaming." in texts
        assert "Python, SQL, Kafka, Airflow" in texts
        assert "BSc Computer Science, University of Texas" in texts
        assert texts[-2:] == ["CERTIFICATIONS", "AWS Solutions Architect"]

    def test_user_text_escaped(self):
        document = ResumeDocument(
            personal=PersonalInfo(name="Tom <O'Brien>"),
            experience=[ExperienceEntry(title="R&D", company="A & B", bullets=['Said "hi" & left'])],
            skills=Skills(hard=["C++", "<script>"]),
        )
        xml = build_docx_parts(document)["word/document.xml"]

        assert "Tom &lt;O&apos;Brien&gt;" in xml
        assert "A &amp; B | R&amp;D" in xml
        assert "<script>" not in xml

        texts = paragraph_texts(xml)
        assert "Tom <O'Brien>" in texts
        assert '• Said "hi" & left' in texts
        assert "C++, <script>" in texts

    def test_bullets_limited(self):
        entry = ExperienceEntry(title="Dev", company="Acme", bullets=[f"Task {i}" for i in range(8)])
        texts = paragraph_texts(build_docx_parts(ResumeDocument(experience=[entry]))["word/document.xml"])
        assert "• Task 5" in texts
        assert "• Task 6" not in texts

    def test_optional_paragraphs_omitted(self):
        document = ResumeDocument(
            personal=PersonalInfo(name="Ann Lee"),
            experience=[ExperienceEntry(title="Dev", company="Acme")],
        )
        texts = paragraph_texts(build_docx_parts(document)["word/document.xml"])
        assert "PROFESSIONAL SUMMARY" not in texts
        assert "SKILLS" not in texts
        assert texts.count("") == 1  # empty contact line only

    def test_styles_define_headings(self, minimal_document):
        styles = build_docx_parts(minimal_document)["word/styles.xml"]
        root = ET.fromstring(styles.encode("utf-8"))
        style_ids = {s.get(f"{W_NS}styleId") for s in root.iter(f"{W_NS}style")}
        assert {"Normal", "Heading1", "Heading2", "Title"} <= style_ids
        assert 'w:ascii="Calibri"' in styles


@pytest.mark.unit
class TestPackage:
    """The packed .docx file."""

    def test_opens_as_zip(self, full_document):
        with zipfile.ZipFile(io.BytesIO(build_docx(full_document))) as archive:
            assert archive.namelist() == list(PACKAGE_PARTS)
            assert archive.testzip() is None

    def test_content_types_cover_parts(self, full_document):
        with zipfile.ZipFile(io.BytesIO(build_docx(full_document))) as archive:
            content_types = archive.read("[Content_Types].xml").decode("utf-8")
            assert 'PartName="/word/document.xml"' in content_types
            rels = archive.read("_rels/.rels").decode("utf-8")
            assert 'Target="word/document.xml"' in rels

    def test_deterministic(self, full_document):
        assert build_docx(full_document) == build_docx(full_document)
