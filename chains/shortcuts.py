"""
Deterministic answers for common intents, served straight from the
canonical résumé without retrieval or a model call.

Every sentence template drops clauses whose fields are missing, so an entry
without dates never renders "()" and a nameless project never renders a
leading separator.
"""

from __future__ import annotations

import re
from typing import Callable, List, Optional, Tuple

from ingestion.cleaners import first_sentences
from ingestion.document_models import CanonicalResume, Education, Experience, Project

NO_EXPERIENCE = "I do not have experience details available in my current resume data."
NO_PROJECTS = "I do not have project details available in my current resume data."
NO_SKILLS = "I do not have skills listed in the current resume data."
NO_EDUCATION = "I do not have education details available in my current resume data."


def _sentence(text: str) -> str:
    text = text.strip()
    if not text:
        return ""
    return text if text[-1] in ".!?" else f"{text}."


def _join_present(sep: str, *parts: Optional[str]) -> str:
    return sep.join(p for p in parts if p)


def _clause(text: str) -> str:
    return text.rstrip(" .!?;")


def _experience_sentence(job: Experience) -> str:
    head = _join_present(" at ", job.role, job.company) or "A role"
    dates = _join_present(" - ", job.start, job.end)
    out = _sentence(f"{head} ({dates})" if dates else head)
    if job.highlights:
        contributions = "; ".join(_clause(h) for h in job.highlights[:2])
        out += " " + _sentence(f"Key contributions include {contributions}")
    return out


def _project_sentence(proj: Project) -> str:
    head = proj.name or "A project"
    if proj.stack:
        head = f"{head} using {proj.stack}"
    out = _sentence(head)
    desc = first_sentences(proj.description, 1)
    if desc:
        out += " " + _sentence(desc)
    return out


def _education_sentence(edu: Education) -> str:
    what = _join_present(" in ", edu.degree, edu.field)
    if what and edu.institution:
        head = f"{what} at {edu.institution}"
    else:
        head = what or edu.institution or ""
    when = _join_present(" - ", edu.start, edu.end)
    if head and when:
        head = f"{head} ({when})"
    return _sentence(head)


def summarize_experience(
    resume: CanonicalResume, limit: int = 5, include_summary: bool = True
) -> str:
    if not resume.experience:
        return NO_EXPERIENCE
    items = [_experience_sentence(e) for e in resume.experience[:limit]]
    lead = _sentence(first_sentences(resume.summary, 1)) if include_summary else ""
    return " ".join(p for p in [lead, *items] if p)


def summarize_projects(resume: CanonicalResume, limit: int = 5) -> str:
    if not resume.projects:
        return NO_PROJECTS
    return " ".join(_project_sentence(p) for p in resume.projects[:limit])


def summarize_skills(resume: CanonicalResume) -> str:
    if not resume.skills:
        return NO_SKILLS
    return f"Here are my primary skills: {', '.join(resume.skills)}."


def summarize_education(resume: CanonicalResume) -> str:
    sentences = [s for s in (_education_sentence(e) for e in resume.education) if s]
    return " ".join(sentences) if sentences else NO_EDUCATION


def generic_summary(resume: CanonicalResume) -> str:
    parts: List[str] = []
    if resume.summary:
        parts.append(first_sentences(resume.summary, 2))
    parts.append(summarize_experience(resume, 3, include_summary=False))
    parts.append(f"Projects: {summarize_projects(resume, 3)}")
    parts.append(summarize_skills(resume))
    parts.append(summarize_education(resume))
    return "\n\n".join(p for p in parts if p)


# First match wins; order matters ("top 3 projects" before "projects").
SHORTCUT_RULES: Tuple[Tuple[Callable[[str], bool], Callable[[CanonicalResume], str]], ...] = (
    (
        lambda q: not q or re.match(r"^(hi|hello|hey)\b", q) is not None,
        generic_summary,
    ),
    (
        lambda q: q in ("experience", "experience?")
        or re.search(r"summarize.*experience", q) is not None,
        lambda r: summarize_experience(r, 5),
    ),
    (
        lambda q: re.search(r"top\s*3\s*projects?", q) is not None,
        lambda r: summarize_projects(r, 3),
    ),
    (
        lambda q: re.search(r"projects?|portfolio", q) is not None,
        lambda r: summarize_projects(r, 5),
    ),
    (lambda q: re.search(r"skills?", q) is not None, summarize_skills),
    (
        lambda q: re.search(r"education|degree|university|college", q) is not None,
        summarize_education,
    ),
)


def route_shortcut(question, resume: CanonicalResume) -> Optional[str]:
    """Answer a known intent directly, or return None to continue to retrieval."""
    q = question.strip().lower() if isinstance(question, str) else ""
    for matches, answer in SHORTCUT_RULES:
        if matches(q):
            return answer(resume)
    return None
