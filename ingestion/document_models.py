from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

# Parsed résumé JSON as loaded from disk; any key may be missing or oddly shaped
RawDocument = Dict[str, Any]


@dataclass(frozen=True)
class Experience:
    role: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    start: Optional[str] = None
    end: Optional[str] = None
    highlights: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Project:
    name: Optional[str] = None
    description: Optional[str] = None
    stack: Optional[str] = None  # comma-joined technologies
    highlights: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Education:
    institution: Optional[str] = None
    degree: Optional[str] = None
    field: Optional[str] = None
    start: Optional[str] = None
    end: Optional[str] = None  # graduation date or year


@dataclass(frozen=True)
class Contact:
    email: Optional[str] = None
    linkedin: Optional[str] = None


@dataclass(frozen=True)
class CanonicalResume:
    name: Optional[str] = None
    title: Optional[str] = None
    location: Optional[str] = None
    summary: Optional[str] = None
    skills: Tuple[str, ...] = ()
    experience: Tuple[Experience, ...] = ()
    projects: Tuple[Project, ...] = ()
    education: Tuple[Education, ...] = ()
    contact: Optional[Contact] = None
    target_roles: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Fragment:
    fragment_id: str  # origin-encoding id, e.g. "exp-2-1"
    text: str


@dataclass(frozen=True)
class ScoredFragment:
    fragment_id: str
    text: str
    score: float
