from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterable, List, Sequence

import orjson

from common.config import yaml_config
from common.logger import get_logger
from ingestion.document_models import RawDocument

log = get_logger(__name__)


def candidate_paths(candidates: Iterable[Path | str] | None = None) -> List[Path]:
    """Candidate résumé locations, resolved against the working directory."""
    raw = candidates if candidates is not None else yaml_config.app.resume_paths
    return [Path(p) if Path(p).is_absolute() else Path.cwd() / p for p in raw]


def describe_candidates(
    candidates: Iterable[Path | str] | None = None,
) -> List[Dict[str, Any]]:
    return [{"path": str(p), "exists": p.is_file()} for p in candidate_paths(candidates)]


def _read_json_object(path: Path) -> RawDocument | None:
    try:
        data = orjson.loads(path.read_bytes())
    except (OSError, orjson.JSONDecodeError) as e:
        log.error("Failed to read résumé %s: %s", path, e)
        return None
    if not isinstance(data, dict):
        log.warning("Ignoring %s: top-level JSON is %s, not an object", path, type(data).__name__)
        return None
    return data


def load_resume_document(candidates: Sequence[Path | str] | None = None) -> RawDocument:
    """
    Load the first candidate that exists and parses to a JSON object.

    Never raises for a missing or broken file; returns an empty mapping so
    downstream components degrade instead of failing.
    """
    for path in candidate_paths(candidates):
        if not path.is_file():
            continue
        doc = _read_json_object(path)
        if doc is not None:
            log.debug("Loaded résumé from %s (keys=%s)", path, sorted(doc))
            return doc

    log.warning("No résumé document found; continuing with an empty one.")
    return {}
