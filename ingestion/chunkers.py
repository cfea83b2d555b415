from __future__ import annotations

from typing import List, Optional

from ingestion.document_models import (
    CanonicalResume,
    Education,
    Experience,
    Fragment,
    Project,
)


def _lines(*parts: Optional[str]) -> str:
    return "\n".join(p for p in parts if p)


def _experience_header(job: Experience) -> str:
    who = " at ".join(p for p in (job.role, job.company) if p)
    dates = " – ".join(p for p in (job.start, job.end) if p)
    return _lines(f"Experience: {who}" if who else None, dates, job.location)


def _project_header(proj: Project) -> str:
    description = proj.description
    # descriptions synthesized from the details list would just repeat the bullets
    if proj.highlights and description == " ".join(proj.highlights):
        description = None
    return _lines(
        f"Project: {proj.name}" if proj.name else None,
        description,
        f"Stack: {proj.stack}" if proj.stack else None,
    )


def _education_line(edu: Education) -> str:
    degree = " in ".join(p for p in (edu.degree, edu.field) if p)
    parts = [
        f"Education: {degree}" if degree else None,
        edu.institution,
        edu.end or edu.start,
    ]
    line = " — ".join(p for p in parts if p)
    if line and not line.startswith("Education:"):
        line = f"Education: {line}"
    return line


def _with_bullets(prefix: str, header: str, bullets) -> List[Fragment]:
    if bullets:
        return [
            Fragment(f"{prefix}-{j}", _lines(header, f"• {b}"))
            for j, b in enumerate(bullets)
        ]
    if header:
        return [Fragment(prefix, header)]
    return []


def chunk_resume(resume: CanonicalResume) -> List[Fragment]:
    """
    Split the canonical résumé into independently retrievable fragments.

    One fragment for the profile header (name, title, location), one per
    summary, skill list, experience bullet, project bullet and
    education entry, so a single strong bullet can surface on its own. Order
    follows the résumé; it is only a tie-break, not a ranking.
    """
    out: List[Fragment] = []

    profile = _lines(
        f"Name: {resume.name}" if resume.name else None,
        f"Title: {resume.title}" if resume.title else None,
        f"Location: {resume.location}" if resume.location else None,
    )
    if profile:
        out.append(Fragment("profile", profile))

    if resume.summary:
        out.append(Fragment("summary", f"Summary: {resume.summary}"))

    if resume.target_roles:
        out.append(Fragment("targets", f"Target roles: {', '.join(resume.target_roles)}"))

    if resume.skills:
        out.append(Fragment("skills", f"Skills: {', '.join(resume.skills)}"))

    for i, job in enumerate(resume.experience):
        out.extend(_with_bullets(f"exp-{i}", _experience_header(job), job.highlights))

    for i, proj in enumerate(resume.projects):
        out.extend(_with_bullets(f"proj-{i}", _project_header(proj), proj.highlights))

    for i, edu in enumerate(resume.education):
        line = _education_line(edu)
        if line:
            out.append(Fragment(f"edu-{i}", line))

    contact = resume.contact
    if contact and (contact.email or contact.linkedin):
        lines = []
        if contact.email:
            lines.append(f"Email: {contact.email}")
        if contact.linkedin:
            lines.append(f"LinkedIn: {contact.linkedin}")
        out.append(Fragment("contact", " | ".join(lines)))

    return [f for f in out if f.text.strip()]
