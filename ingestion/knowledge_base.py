from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Sequence, Tuple

from common.logger import get_logger
from ingestion.chunkers import chunk_resume
from ingestion.document_models import CanonicalResume, Fragment, RawDocument
from ingestion.hash_utils import fragment_set_version
from ingestion.loaders import load_resume_document
from ingestion.normalizer import normalize_resume

log = get_logger(__name__)


@dataclass(frozen=True)
class ResumeKnowledgeBase:
    """Immutable snapshot of one résumé: canonical model plus its fragments."""

    resume: CanonicalResume
    fragments: Tuple[Fragment, ...]
    version: str

    @classmethod
    def from_raw(cls, raw: RawDocument) -> "ResumeKnowledgeBase":
        resume = normalize_resume(raw)
        fragments = tuple(chunk_resume(resume))
        version = fragment_set_version(fragments)
        log.info("Built %d fragments (version %s)", len(fragments), version[:10])
        return cls(resume=resume, fragments=fragments, version=version)

    @classmethod
    def load(cls, candidates: Sequence[Path | str] | None = None) -> "ResumeKnowledgeBase":
        return cls.from_raw(load_resume_document(candidates))
