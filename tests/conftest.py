"""Shared resume fixtures."""

import random

import pytest

from cvinject.contexts.intake import parse_resume_text

MINIMAL_RESUME = (
    "JOHN SMITH\n"
    "john@x.com\n"
    "EXPERIENCE\n"
    "Acme Co | Engineer | 2020-Present\n"
    "- Built systems.\n"
    "SKILLS\n"
    "Python, Go\n"
    "EDUCATION\n"
    "BSc CS"
)

FULL_RESUME = """JANE DOE
Austin, TX
jane.doe@example.com | (512) 555-0142
linkedin.com/in/janedoe | github.com/janedoe

PROFESSIONAL SUMMARY
Backend engineer with eight years of experience
building data platforms.

EXPERIENCE
Globex Corp | Senior Engineer | 2021-Present
• Led migration of batch jobs to streaming.
• Cut cloud spend by 30%.
Initech – Software Engineer – 2017 – 2021
- Built internal APIs
- Mentored two junior engineers.

TECHNICAL SKILLS
Python, SQL; Kafka
python, Airflow

EDUCATION
BSc Computer Science, University of Texas

CERTIFICATIONS
- AWS Solutions Architect
"""


@pytest.fixture
def minimal_resume_text():
    return MINIMAL_RESUME


@pytest.fixture
def full_resume_text():
    return FULL_RESUME


@pytest.fixture
def minimal_document():
    return parse_resume_text(MINIMAL_RESUME)


@pytest.fixture
def full_document():
    return parse_resume_text(FULL_RESUME)


@pytest.fixture
def rng():
    return random.Random(42)
