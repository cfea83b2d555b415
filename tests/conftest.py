import pytest

from ingestion.document_models import CanonicalResume, Experience, Project


@pytest.fixture
def raw_resume():
    return {
        "name": "Jordan Lee",
        "title": "Data Engineer",
        "summary": "Builds data pipelines. Likes clean schemas.",
        "skills": ["Python", "SQL", "Python", "Go", "go"],
        "contact": {"email": "jordan@example.com", "linkedin": "linkedin.com/in/jordan"},
        "experience": [
            {
                "role": "Engineer",
                "company": "Acme",
                "start": "2020",
                "end": "2022",
                "bullets": ["Built X", "Shipped Y"],
            },
            {"company": "Globex"},
            {"location": "Nowhere"},
        ],
        "projects": [
            {"name": "Atlas", "stack": ["Python", "Spark"], "details": ["Indexed maps"]},
            {"desc": "Unnamed but described."},
            {"stack": "Rust"},
        ],
        "education": [
            {"degree": "B.S.", "field": "Computer Science", "school": "State U", "year": 2019},
            {},
        ],
    }


@pytest.fixture
def acme_resume():
    return CanonicalResume(
        summary="Engineer with a taste for tooling.",
        experience=(
            Experience(
                role="Engineer",
                company="Acme",
                start="2020",
                end="2022",
                highlights=("Built X",),
            ),
        ),
        projects=tuple(Project(name=f"Project {n}") for n in "ABCDE"),
    )
