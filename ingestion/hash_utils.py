import hashlib
from typing import Iterable

from ingestion.document_models import Fragment


def sha1_text(s: str) -> str:
    return hashlib.sha1(s.encode("utf-8")).hexdigest()


def fragment_set_version(fragments: Iterable[Fragment]) -> str:
    """Stable hash of a fragment list; changes whenever any id or text changes."""
    return sha1_text("\n".join(f"{f.fragment_id}\t{f.text}" for f in fragments))
