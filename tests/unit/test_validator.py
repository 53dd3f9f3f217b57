"""Unit tests for ATS compatibility checks."""

import pytest

from cvinject.contexts.rendering import validate_ats_compatibility
from cvinject.contexts.templating import render_plaintext

CLEAN_TEXT = """JANE DOE
Austin, TX | jane@doe.io

EXPERIENCE
Acme | Engineer
• Built a billing service used by 2M customers.

SKILLS
Python, Go, Kubernetes

EDUCATION
BSc Computer Science
"""


@pytest.mark.unit
def test_clean_text_passes():
    result = validate_ats_compatibility(CLEAN_TEXT)
    assert result.is_valid
    assert all(result.checks.values())
    assert result.failed_checks == []


@pytest.mark.unit
def test_rendered_resume_passes(full_document):
    assert validate_ats_compatibility(render_plaintext(full_document)).is_valid


@pytest.mark.unit
def test_check_names():
    assert set(validate_ats_compatibility(CLEAN_TEXT).checks) == {
        "natural_bullets",
        "comma_skills",
        "standard_sections",
        "no_bold_overuse",
        "plain_text_parseable",
    }


@pytest.mark.unit
class TestStuffing:
    @pytest.mark.parametrize(
        "line",
        ["- Python Docker Kubernetes Terraform", "• Agile Scrum Kanban Jira Confluence", "* Aws Gcp Azure Oracle"],
    )
    def test_stuffed_bullets_flagged(self, line):
        result = validate_ats_compatibility(CLEAN_TEXT + line)
        assert result.checks["natural_bullets"] is False
        assert result.is_valid is False

    @pytest.mark.parametrize(
        "line",
        ["- Python Docker Kubernetes", "- Used Python with Docker and Kubernetes", "- Built APIs Using Go Daily"],
    )
    def test_natural_bullets_pass(self, line):
        assert validate_ats_compatibility(CLEAN_TEXT + line).checks["natural_bullets"] is True


@pytest.mark.unit
class TestSkillsFormat:
    def test_bulleted_skills_flagged(self):
        text = CLEAN_TEXT.replace(
            "Python, Go, Kubernetes", "- Python\n- Go\n- Kubernetes"
        )
        assert validate_ats_compatibility(text).checks["comma_skills"] is False

    def test_two_category_bullets_allowed(self):
        text = CLEAN_TEXT.replace(
            "Python, Go, Kubernetes", "- Languages: Python, Go\n- Platforms: Kubernetes"
        )
        assert validate_ats_compatibility(text).checks["comma_skills"] is True

    def test_word_skills_in_prose_is_not_a_heading(self):
        text = (
            "PROFESSIONAL SUMMARY\nEngineer with strong leadership skills.\n\n"
            "EXPERIENCE\nAcme | Engineer\n- Built APIs.\n- Ran migrations.\n- Mentored juniors.\n\n"
            "SKILLS\nPython, Go\n\nEDUCATION\nBSc"
        )
        assert validate_ats_compatibility(text).checks["comma_skills"] is True

    def test_heading_with_colon(self):
        text = CLEAN_TEXT.replace("SKILLS\nPython, Go, Kubernetes", "Skills:\n- Python\n- Go\n- Kubernetes")
        assert validate_ats_compatibility(text).checks["comma_skills"] is False

    def test_no_skills_section(self):
        assert validate_ats_compatibility("EXPERIENCE\nEDUCATION").checks["comma_skills"] is True


@pytest.mark.unit
class TestStandardSections:
    def test_missing_education(self):
        result = validate_ats_compatibility(CLEAN_TEXT.replace("EDUCATION", "TRAINING"))
        assert result.checks["standard_sections"] is False
        assert result.is_valid is False
        assert "standard_sections" in result.failed_checks

    def test_case_insensitive(self):
        text = "Experience\n- Did things.\nSkills\nPython, Go\nEducation\nBSc"
        assert validate_ats_compatibility(text).checks["standard_sections"] is True


@pytest.mark.unit
def test_bold_markers_flagged():
    assert validate_ats_compatibility(CLEAN_TEXT + "**Python** expert").checks["no_bold_overuse"] is False


@pytest.mark.unit
def test_control_characters_flagged():
    assert validate_ats_compatibility(CLEAN_TEXT + "\x0c").checks["plain_text_parseable"] is False
