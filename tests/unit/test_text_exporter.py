"""Unit tests for plain-text rendering."""

import pytest

from cvinject.contexts.templating import (
    ExperienceEntry,
    PersonalInfo,
    ResumeDocument,
    export_pdf_sections,
    render_plaintext,
)


@pytest.mark.unit
def test_minimal_layout(minimal_document):
    assert render_plaintext(minimal_document) == (
        "JOHN SMITH\n"
        "john@x.com\n"
        "\n"
        "EXPERIENCE\n"
        "Acme Co | Engineer\n"
        "2020-Present\n"
        "• Built systems.\n"
        "\n"
        "SKILLS\n"
        "Python, Go\n"
        "\n"
        "EDUCATION\n"
        "BSc CS\n"
    )


@pytest.mark.unit
def test_full_layout_headings(full_document):
    lines = render_plaintext(full_document).split("\n")

    assert lines[0] == "JANE DOE"
    assert lines[1] == "Austin, TX | jane.doe@example.com | (512) 555-0142"
    assert lines[2] == "linkedin.com/in/janedoe | github.com/janedoe"
    assert lines[3] == ""
    assert lines[4] == "PROFESSIONAL SUMMARY"
    assert "Initech | Software Engineer" in lines
    assert "Python, SQL, Kafka, Airflow" in lines
    assert lines[-2:] == ["CERTIFICATIONS", "AWS Solutions Architect"]


@pytest.mark.unit
def test_name_uppercased():
    document = ResumeDocument(personal=PersonalInfo(name="Jane Doe"))
    assert render_plaintext(document).startswith("JANE DOE\n")


@pytest.mark.unit
def test_empty_sections_omitted():
    document = ResumeDocument(personal=PersonalInfo(name="Jane Doe", email="j@d.io"))
    text = render_plaintext(document)
    for heading in ("PROFESSIONAL SUMMARY", "EXPERIENCE", "SKILLS", "EDUCATION", "CERTIFICATIONS"):
        assert heading not in text


@pytest.mark.unit
def test_bullets_truncated_to_six():
    entry = ExperienceEntry(title="Dev", company="Acme", bullets=[f"Task {i}" for i in range(9)])
    text = render_plaintext(ResumeDocument(experience=[entry]))
    assert "• Task 5" in text
    assert "• Task 6" not in text


@pytest.mark.unit
def test_missing_dates_line_omitted():
    entry = ExperienceEntry(title="Dev", company="Acme", bullets=["Shipped"])
    lines = render_plaintext(ResumeDocument(experience=[entry])).split("\n")
    heading_index = lines.index("Acme | Dev")
    assert lines[heading_index + 1] == "• Shipped"


@pytest.mark.unit
def test_rendering_is_idempotent(full_document):
    assert render_plaintext(full_document) == render_plaintext(full_document)


@pytest.mark.unit
class TestPdfSections:
    """Flattened per-section view."""

    def test_contact(self, full_document):
        contact = export_pdf_sections(full_document)["contact"]
        assert contact == {
            "name": "JANE DOE",
            "contact_line": "(512) 555-0142 | jane.doe@example.com | Austin, TX",
            "links_line": "linkedin.com/in/janedoe | github.com/janedoe",
        }

    def test_experience_keeps_every_bullet(self):
        entry = ExperienceEntry(title="Dev", company="Acme", bullets=[f"Task {i}" for i in range(9)])
        sections = export_pdf_sections(ResumeDocument(experience=[entry]))
        assert "• Task 8" in sections["experience"]

    def test_roles_separated_by_blank_line(self, full_document):
        blocks = export_pdf_sections(full_document)["experience"].split("\n\n")
        assert [block.split("\n")[0] for block in blocks] == [
            "Globex Corp | Senior Engineer",
            "Initech | Software Engineer",
        ]

    def test_lists_and_text(self, full_document):
        sections = export_pdf_sections(full_document)
        assert sections["skills"] == "Python, SQL, Kafka, Airflow"
        assert sections["education"] == "BSc Computer Science, University of Texas"
        assert sections["certifications"] == "AWS Solutions Architect"
        assert sections["summary"].startswith("Backend engineer")
