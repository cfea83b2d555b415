"""
Map a loosely-structured résumé JSON document onto CanonicalResume.

Every field is read through an ordered chain of extraction strategies. The
first strategy that produces a non-empty value wins; anything with an
unexpected shape is treated as absent. Nothing in this module raises on bad
input.
"""

from __future__ import annotations

import re
from typing import Any, Callable, Iterable, List, Mapping, Optional, Sequence, Tuple

from common.logger import get_logger
from ingestion.cleaners import normalize_text
from ingestion.document_models import (
    CanonicalResume,
    Contact,
    Education,
    Experience,
    Project,
    RawDocument,
)

log = get_logger(__name__)

KeyPath = Tuple[str, ...]

_SKILL_DELIMITERS = re.compile(r"[,;|\n]")


def _text(value: Any) -> Optional[str]:
    """Coerce a scalar into cleaned text; None for empty or non-scalar values."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        value = str(value)
    if not isinstance(value, str):
        return None
    cleaned = normalize_text(value)
    return cleaned or None


def _text_list(value: Any) -> List[str]:
    """A list of strings, or a single scalar promoted to a one-item list."""
    if isinstance(value, (list, tuple)):
        out = []
        for item in value:
            t = _text(item)
            if t:
                out.append(t)
        return out
    t = _text(value)
    return [t] if t else []


def _unique(items: Iterable[str]) -> Tuple[str, ...]:
    # case-sensitive, first occurrence wins
    return tuple(dict.fromkeys(items))


def _dig(data: Any, path: KeyPath) -> Any:
    cur = data
    for key in path:
        if not isinstance(cur, Mapping):
            return None
        cur = cur.get(key)
    return cur


def _first_text(data: Any, paths: Sequence[KeyPath]) -> Optional[str]:
    for path in paths:
        t = _text(_dig(data, path))
        if t:
            return t
    return None


def _first_text_list(data: Any, keys: Sequence[str]) -> List[str]:
    for key in keys:
        items = _text_list(_dig(data, (key,)))
        if items:
            return items
    return []


def _first_records(data: Any, keys: Sequence[str]) -> List[Mapping[str, Any]]:
    """First non-empty list of objects found under one of `keys`."""
    for key in keys:
        value = _dig(data, (key,))
        if isinstance(value, list):
            records = [r for r in value if isinstance(r, Mapping)]
            if records:
                return records
    return []


def _run_chain(raw: RawDocument, strategies: Sequence[Callable[[RawDocument], List[str]]]) -> List[str]:
    for strategy in strategies:
        found = strategy(raw)
        if found:
            return found
    return []


def _skills_flat_list(raw: RawDocument) -> List[str]:
    value = raw.get("skills")
    if not isinstance(value, list):
        return []
    return _text_list([item for item in value if isinstance(item, str)])


def _skills_keyword_objects(raw: RawDocument) -> List[str]:
    # JSON Resume style: [{"name": "Web", "keywords": ["HTML", "CSS"]}]
    value = raw.get("skills")
    if not isinstance(value, list):
        return []
    out: List[str] = []
    for item in value:
        if not isinstance(item, Mapping):
            continue
        out.extend(_text_list(item.get("keywords")) or _text_list(item.get("name")))
    return out


def _skills_from_categories(value: Any) -> List[str]:
    if not isinstance(value, Mapping):
        return []
    out: List[str] = []
    for bucket in value.values():
        out.extend(_text_list(bucket))
    return out


def _skills_categories(raw: RawDocument) -> List[str]:
    return _skills_from_categories(raw.get("skills"))


def _skills_technical_categories(raw: RawDocument) -> List[str]:
    return _skills_from_categories(raw.get("technical_skills"))


def _skills_delimited(raw: RawDocument) -> List[str]:
    value = raw.get("skills")
    if not isinstance(value, str):
        return []
    return _text_list(_SKILL_DELIMITERS.split(value))


SKILL_STRATEGIES: Tuple[Callable[[RawDocument], List[str]], ...] = (
    _skills_flat_list,
    _skills_keyword_objects,
    _skills_categories,
    _skills_technical_categories,
    _skills_delimited,
)


def _experience_entry(rec: Mapping[str, Any]) -> Experience:
    return Experience(
        role=_first_text(rec, [("role",), ("title",), ("position",)]),
        company=_first_text(
            rec, [("company",), ("organization",), ("employer",), ("name",)]
        ),
        location=_first_text(rec, [("location",)]),
        start=_first_text(rec, [("start",), ("startDate",), ("start_date",)]),
        end=_first_text(rec, [("end",), ("endDate",), ("end_date",)]),
        highlights=tuple(
            _first_text_list(
                rec, ["bullets", "highlights", "responsibilities", "achievements"]
            )
        ),
    )


def _project_stack(rec: Mapping[str, Any]) -> Optional[str]:
    for key in ("stack", "tech", "technologies", "keywords"):
        value = rec.get(key)
        if isinstance(value, list):
            joined = ", ".join(_text_list(value))
            if joined:
                return joined
        else:
            t = _text(value)
            if t:
                return t
    return None


def _project_entry(rec: Mapping[str, Any]) -> Project:
    highlights = _first_text_list(rec, ["details", "highlights", "bullets"])
    details = _text_list(rec.get("details"))
    description = _first_text(rec, [("description",), ("desc",), ("summary",)])
    if not description and details:
        description = " ".join(details)
    return Project(
        name=_first_text(rec, [("name",), ("title",)]),
        description=description,
        stack=_project_stack(rec),
        highlights=tuple(highlights),
    )


def _education_entry(rec: Mapping[str, Any]) -> Education:
    return Education(
        institution=_first_text(
            rec, [("school",), ("institution",), ("university",), ("name",)]
        ),
        degree=_first_text(rec, [("degree",), ("studyType",)]),
        field=_first_text(rec, [("field",), ("area",), ("major",), ("minor",)]),
        start=_first_text(rec, [("start",), ("startDate",)]),
        end=_first_text(
            rec,
            [
                ("expected_graduation",),
                ("graduation",),
                ("end",),
                ("endDate",),
                ("year",),
            ],
        ),
    )


def _linkedin_profile(raw: RawDocument) -> Optional[str]:
    profiles = _dig(raw, ("basics", "profiles"))
    if not isinstance(profiles, list):
        return None
    for p in profiles:
        if isinstance(p, Mapping) and str(p.get("network", "")).lower() == "linkedin":
            return _text(p.get("url")) or _text(p.get("username"))
    return None


def _contact(raw: RawDocument) -> Optional[Contact]:
    email = _first_text(raw, [("contact", "email"), ("email",), ("basics", "email")])
    linkedin = _first_text(
        raw, [("contact", "linkedin"), ("linkedin",), ("links", "linkedin")]
    ) or _linkedin_profile(raw)
    if not email and not linkedin:
        return None
    return Contact(email=email, linkedin=linkedin)


def _has_any(entry: Education) -> bool:
    return any((entry.institution, entry.degree, entry.field, entry.start, entry.end))


def normalize_resume(raw: Any) -> CanonicalResume:
    """Build the canonical résumé from whatever `raw` happens to contain."""
    if not isinstance(raw, Mapping):
        raw = {}

    experience = [
        _experience_entry(r) for r in _first_records(raw, ["experience", "work", "employment"])
    ]
    # filter after extraction so highlight-only entries survive
    experience = [e for e in experience if e.role or e.company or e.highlights]

    projects = [_project_entry(r) for r in _first_records(raw, ["projects"])]
    projects = [p for p in projects if p.name or p.description]

    education = [_education_entry(r) for r in _first_records(raw, ["education"])]
    education = [e for e in education if _has_any(e)]

    title = _first_text(raw, [("title",), ("basics", "label"), ("headline",)])
    summary = _first_text(
        raw, [("summary",), ("basics", "summary"), ("about",), ("objective",)]
    )
    if not summary and title:
        summary = f"Currently {title}."
    skills = _run_chain(raw, SKILL_STRATEGIES) + _text_list(raw.get("languages_spoken"))

    resume = CanonicalResume(
        name=_first_text(raw, [("name",), ("basics", "name"), ("full_name",)]),
        title=title,
        location=_first_text(raw, [("location",), ("basics", "location", "city")]),
        summary=summary,
        skills=_unique(skills),
        experience=tuple(experience),
        projects=tuple(projects),
        education=tuple(education),
        contact=_contact(raw),
        target_roles=_unique(_text_list(raw.get("target_roles"))),
    )
    log.debug(
        "Normalized résumé: experience=%d projects=%d skills=%d education=%d",
        len(resume.experience),
        len(resume.projects),
        len(resume.skills),
        len(resume.education),
    )
    return resume
