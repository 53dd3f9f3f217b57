"""
Integration tests for the full tailoring pipeline: parse, inject, render, score.
"""

import io
import random
import zipfile

import pytest
from PyPDF2 import PdfReader

from cvinject.contexts.intake import InvalidKeywordGroupsError, normalize_keywords, parse_resume_text
from cvinject.contexts.rendering import validate_ats_compatibility
from cvinject.contexts.targeting import InjectionConfig
from cvinject.pipeline import PARSE_FAILURE_MESSAGE, compute_match, run_pipeline

SIX_HIGH = {"highROI": ["Kubernetes", "Terraform", "Docker", "Ansible", "Rust", "Go"]}


@pytest.mark.integration
def test_minimal_resume_parses(minimal_resume_text):
    """The smallest complete resume parses into every field it carries."""
    document = parse_resume_text(minimal_resume_text)

    assert document.personal.name == "JOHN SMITH"
    assert document.personal.email == "john@x.com"
    assert [e.company for e in document.experience] == ["Acme Co"]
    assert document.experience[0].bullets == ["Built systems."]
    assert document.skills.hard == ["Python", "Go"]
    assert [e.degree for e in document.education] == ["BSc CS"]


@pytest.mark.integration
def test_six_high_priority_keywords(minimal_resume_text):
    """At most five skills are added, one bullet exists, nothing is placed twice."""
    result = run_pipeline(minimal_resume_text, SIX_HIGH, rng=random.Random(1))

    assert result.success
    stats = result.stats
    assert stats.skills_added <= 5
    assert stats.bullets_modified <= 1
    assert stats.total_injections <= 15
    assert len(stats.keywords_covered) == len(set(stats.keywords_covered))

    hard = [skill.casefold() for skill in result.document.skills.hard]
    assert len(hard) == len(set(hard))


@pytest.mark.integration
class TestMatchScore:
    def test_all_absent_scores_zero(self):
        score, matched, missing = compute_match(
            "unrelated text", normalize_keywords({"lowROI": ["Haskell", "Erlang"]})
        )
        assert (score, matched, missing) == (0, [], ["Haskell", "Erlang"])

    def test_all_present_scores_hundred(self, minimal_resume_text):
        result = run_pipeline(minimal_resume_text, SIX_HIGH, rng=random.Random(1))
        assert result.match_score == 100
        assert result.missing == []

    def test_no_keywords_scores_zero(self, minimal_resume_text):
        result = run_pipeline(minimal_resume_text, {})
        assert result.match_score == 0
        assert result.matched == result.missing == []

    def test_low_priority_keywords_stay_missing(self, minimal_resume_text):
        """Low-priority keywords target the summary and are never injected."""
        result = run_pipeline(minimal_resume_text, {"lowROI": ["Haskell"], "highROI": ["Rust"]})
        assert result.matched == ["Rust"]
        assert result.missing == ["Haskell"]
        assert result.match_score == 50

    def test_rounds_half_up(self):
        keywords = normalize_keywords(
            {"highROI": ["Python"], "mediumROI": ["Go"], "lowROI": ["Rust", "Zig", "Nim", "Odin", "Ada", "Elm"]}
        )
        score, _, _ = compute_match("python go", keywords)
        assert score == 25

        keywords = normalize_keywords(
            {"highROI": ["Python"], "lowROI": ["Zig", "Nim", "Ada", "Elm", "Odin", "Lua", "Go"]}
        )
        score, _, _ = compute_match("python", keywords)
        assert score == 13


@pytest.mark.integration
class TestPipelineResult:
    """Everything bundled in one successful run."""

    def test_artifacts(self, full_resume_text):
        result = run_pipeline(full_resume_text, SIX_HIGH, rng=random.Random(3))

        assert result.success and result.error is None
        assert result.text.startswith("JANE DOE\n")
        assert result.tailored_text == result.text
        assert result.pdf.startswith(b"%PDF-1.4")
        assert result.pdf_sections["contact"]["name"] == "JANE DOE"
        assert result.timing_ms >= 0

        with zipfile.ZipFile(io.BytesIO(result.docx)) as archive:
            assert archive.testzip() is None
            document_xml = archive.read("word/document.xml").decode("utf-8")
        assert "Kubernetes" in document_xml

        reader = PdfReader(io.BytesIO(result.pdf))
        assert "Kubernetes" in reader.pages[0].extract_text()

    def test_rendered_text_passes_ats_checks(self, full_resume_text):
        result = run_pipeline(full_resume_text, SIX_HIGH, rng=random.Random(3))
        assert validate_ats_compatibility(result.text).is_valid

    def test_location_override(self, full_resume_text):
        result = run_pipeline(full_resume_text, SIX_HIGH, location_override="Remote (EU)")
        assert result.document.personal.location == "Remote (EU)"
        assert "Remote (EU) | jane.doe@example.com" in result.text

    def test_config_limits_rendering_and_injection(self, full_resume_text):
        config = InjectionConfig(max_high_prio_skills=1, max_rendered_bullets=1)
        result = run_pipeline(full_resume_text, SIX_HIGH, config=config, rng=random.Random(3))

        assert result.stats.skills_added == 1
        assert result.text.count("• ") == len(result.document.experience)

    def test_seeded_runs_identical(self, full_resume_text):
        first = run_pipeline(full_resume_text, SIX_HIGH, rng=random.Random(11))
        second = run_pipeline(full_resume_text, SIX_HIGH, rng=random.Random(11))
        assert first.text == second.text
        assert first.docx == second.docx
        assert first.pdf == second.pdf


@pytest.mark.integration
@pytest.mark.parametrize("raw_text", [None, "", "  \n "])
def test_unparseable_input(raw_text):
    """Parse failure short-circuits with an explicit failure result."""
    result = run_pipeline(raw_text, SIX_HIGH)

    assert result.success is False
    assert result.error == PARSE_FAILURE_MESSAGE
    assert result.document is None
    assert result.docx == b"" and result.pdf == b""


@pytest.mark.integration
def test_malformed_keyword_groups_raise(minimal_resume_text):
    with pytest.raises(InvalidKeywordGroupsError):
        run_pipeline(minimal_resume_text, {"highROI": "Kubernetes"})


@pytest.mark.integration
def test_rerun_with_same_document_is_isolated(full_resume_text):
    """Repeated runs with different keyword sets never leak into each other."""
    first = run_pipeline(full_resume_text, {"highROI": ["Rust"]}, rng=random.Random(5))
    second = run_pipeline(full_resume_text, {"highROI": ["Elixir"]}, rng=random.Random(5))

    assert "Rust" in first.document.skills.hard
    assert "Rust" not in second.document.skills.hard
    assert "Elixir" in second.document.skills.hard
