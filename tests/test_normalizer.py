import pytest

from ingestion.document_models import CanonicalResume
from ingestion.normalizer import normalize_resume


@pytest.mark.parametrize("raw", [{}, None, [], "resume", {"unrelated": {"x": 1}}])
def test_unrecognized_documents_normalize_to_empty(raw):
    resume = normalize_resume(raw)

    assert resume == CanonicalResume()
    assert resume.skills == ()
    assert resume.experience == ()
    assert resume.projects == ()
    assert resume.education == ()


def test_type_mismatched_fields_are_treated_as_absent():
    raw = {
        "name": ["not", "a", "string"],
        "skills": 42,
        "experience": {"role": "Engineer"},
        "projects": "Atlas",
        "education": [None, 3, "State U"],
        "contact": "jordan@example.com",
    }

    resume = normalize_resume(raw)

    assert resume.name is None
    assert resume.skills == ()
    assert resume.experience == ()
    assert resume.projects == ()
    assert resume.education == ()
    assert resume.contact is None


def test_flat_skill_list_is_deduplicated_case_sensitively(raw_resume):
    resume = normalize_resume(raw_resume)
    assert resume.skills == ("Python", "SQL", "Go", "go")


def test_keyword_objects_skills():
    raw = {
        "skills": [
            {"name": "Web", "keywords": ["HTML", "CSS", "HTML"]},
            {"name": "Docker"},
            {"name": "Data", "keywords": ["SQL"]},
        ]
    }
    assert normalize_resume(raw).skills == ("HTML", "CSS", "Docker", "SQL")


def test_bucketed_skills_preserve_first_occurrence():
    raw = {
        "technical_skills": {
            "programming_languages": ["Python", "SQL"],
            "software": ["Excel", "Python"],
            "certifications": "PMP",
        }
    }
    assert normalize_resume(raw).skills == ("Python", "SQL", "Excel", "PMP")


def test_skills_object_takes_priority_over_technical_skills():
    raw = {"skills": {"core": ["Go"]}, "technical_skills": {"languages": ["Rust"]}}
    assert normalize_resume(raw).skills == ("Go",)


def test_delimited_skill_string():
    raw = {"skills": "Python, SQL; Go | Python\nDocker,  "}
    assert normalize_resume(raw).skills == ("Python", "SQL", "Go", "Docker")


def test_experience_synonyms_and_filtering(raw_resume):
    raw_resume["experience"].append(
        {"highlights": ["Only a bullet survives"], "startDate": "2018"}
    )
    raw_resume["experience"].append(
        {"position": "Analyst", "employer": "Initech", "endDate": 2017}
    )

    exp = normalize_resume(raw_resume).experience

    assert [(e.role, e.company) for e in exp] == [
        ("Engineer", "Acme"),
        (None, "Globex"),
        (None, None),
        ("Analyst", "Initech"),
    ]
    assert exp[0].highlights == ("Built X", "Shipped Y")
    assert exp[2].highlights == ("Only a bullet survives",)
    assert exp[2].start == "2018"
    assert exp[3].end == "2017"


def test_json_resume_work_section_is_used_when_experience_missing():
    raw = {"work": [{"name": "Acme", "position": "Lead", "highlights": "Ran things"}]}

    exp = normalize_resume(raw).experience

    assert len(exp) == 1
    assert exp[0].company == "Acme"
    assert exp[0].role == "Lead"
    assert exp[0].highlights == ("Ran things",)


def test_projects_keep_named_or_described_entries(raw_resume):
    projects = normalize_resume(raw_resume).projects

    assert [p.name for p in projects] == ["Atlas", None]
    atlas = projects[0]
    assert atlas.stack == "Python, Spark"
    assert atlas.highlights == ("Indexed maps",)
    assert atlas.description == "Indexed maps"
    assert projects[1].description == "Unnamed but described."


def test_education_and_contact(raw_resume):
    resume = normalize_resume(raw_resume)

    assert len(resume.education) == 1
    edu = resume.education[0]
    assert (edu.degree, edu.field, edu.institution, edu.end) == (
        "B.S.",
        "Computer Science",
        "State U",
        "2019",
    )
    assert resume.contact.email == "jordan@example.com"
    assert resume.contact.linkedin == "linkedin.com/in/jordan"


def test_basics_block_fallbacks():
    raw = {
        "basics": {
            "name": "Sam",
            "label": "Designer",
            "summary": "Designs  things.",
            "email": "sam@example.com",
            "profiles": [
                {"network": "GitHub", "url": "https://github.com/sam"},
                {"network": "LinkedIn", "url": "https://linkedin.com/in/sam"},
            ],
        }
    }

    resume = normalize_resume(raw)

    assert resume.name == "Sam"
    assert resume.title == "Designer"
    assert resume.summary == "Designs things."
    assert resume.contact.email == "sam@example.com"
    assert resume.contact.linkedin == "https://linkedin.com/in/sam"


def test_top_level_location_and_basics_city():
    assert normalize_resume({"location": "Lisbon"}).location == "Lisbon"
    assert normalize_resume({"basics": {"location": {"city": "Porto"}}}).location == "Porto"
    assert normalize_resume({"location": {"city": 7, "nested": True}}).location is None


def test_summary_falls_back_to_current_title():
    assert normalize_resume({"title": "Designer"}).summary == "Currently Designer."
    assert normalize_resume({"title": "Designer", "summary": "Draws."}).summary == "Draws."
