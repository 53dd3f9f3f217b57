"""Unit tests for keyword group normalization."""

import pytest

from cvinject.contexts.intake import (
    InvalidKeywordGroupsError,
    Priority,
    Target,
    normalize_keywords,
)


@pytest.mark.unit
def test_bucket_order_is_fixed():
    """High, medium, low, then unclassified regardless of mapping order."""
    keywords = normalize_keywords(
        {
            "unclassified": ["Jira"],
            "lowROI": ["Agile"],
            "mediumROI": ["CI/CD"],
            "highROI": ["Docker", "Kubernetes"],
        }
    )
    assert [k.text for k in keywords] == ["Docker", "Kubernetes", "CI/CD", "Agile", "Jira"]


@pytest.mark.unit
def test_priorities_and_targets():
    keywords = normalize_keywords(
        {"highROI": ["Docker"], "mediumROI": ["CI/CD"], "lowROI": ["Agile"], "unclassified": ["Jira"]}
    )
    by_text = {k.text: k for k in keywords}

    assert by_text["Docker"].priority is Priority.HIGH
    assert by_text["Docker"].targets == frozenset({Target.EXPERIENCE, Target.SKILLS})
    assert by_text["CI/CD"].targets == frozenset({Target.EXPERIENCE})
    assert by_text["Agile"].priority is Priority.LOW
    assert by_text["Agile"].targets_section(Target.SUMMARY)
    assert by_text["Jira"].priority is Priority.MEDIUM


@pytest.mark.unit
class TestAliases:
    """Each priority accepts a ROI name and a Priority name."""

    def test_priority_alias(self):
        keywords = normalize_keywords({"highPriority": ["Rust"], "lowPriority": ["Scrum"]})
        assert [(k.text, k.priority) for k in keywords] == [
            ("Rust", Priority.HIGH),
            ("Scrum", Priority.LOW),
        ]

    def test_first_non_empty_alias_wins(self):
        keywords = normalize_keywords({"highROI": ["Go"], "highPriority": ["Rust"]})
        assert [k.text for k in keywords] == ["Go"]

    def test_empty_alias_falls_through(self):
        keywords = normalize_keywords({"mediumROI": [], "mediumPriority": ["Helm"]})
        assert [k.text for k in keywords] == ["Helm"]


@pytest.mark.unit
@pytest.mark.parametrize("groups", [None, {}, {"highROI": []}])
def test_empty_groups(groups):
    assert normalize_keywords(groups) == []


@pytest.mark.unit
def test_blank_strings_skipped_and_text_stripped():
    keywords = normalize_keywords({"highROI": ["  Docker ", "", "   "]})
    assert [k.text for k in keywords] == ["Docker"]


@pytest.mark.unit
def test_unknown_groups_ignored():
    keywords = normalize_keywords({"veryHighROI": ["Cobol"], "highROI": ["Go"]})
    assert [k.text for k in keywords] == ["Go"]


@pytest.mark.unit
class TestInvalidGroups:
    def test_not_a_mapping(self):
        with pytest.raises(InvalidKeywordGroupsError):
            normalize_keywords(["Docker"])

    def test_bucket_is_string(self):
        with pytest.raises(InvalidKeywordGroupsError) as exc_info:
            normalize_keywords({"highROI": "Docker"})
        assert exc_info.value.group == "highROI"

    def test_bucket_item_not_string(self):
        with pytest.raises(InvalidKeywordGroupsError):
            normalize_keywords({"mediumROI": ["Docker", 3]})

    def test_is_value_error(self):
        with pytest.raises(ValueError):
            normalize_keywords({"lowROI": 5})
