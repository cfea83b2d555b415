from __future__ import annotations

import math
import re
from typing import List, Mapping, Sequence

from ingestion.document_models import Fragment, ScoredFragment

_TOKEN = re.compile(r"[a-z0-9]+")


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """dot(a, b) / (|a| * |b|), or 0.0 when either vector has zero magnitude."""
    dot = sum(x * y for x, y in zip(a, b))
    mag_a = math.sqrt(sum(x * x for x in a))
    mag_b = math.sqrt(sum(y * y for y in b))
    if not mag_a or not mag_b:
        return 0.0
    return dot / (mag_a * mag_b)


def tokenize(question: str) -> List[str]:
    """Distinct lowercase alphanumeric tokens, in first-seen order."""
    return list(dict.fromkeys(_TOKEN.findall(question.lower())))


def _top_k(scored: List[ScoredFragment], top_k: int) -> List[ScoredFragment]:
    # sorted() is stable, so equal scores keep fragment order
    return sorted(scored, key=lambda s: s.score, reverse=True)[: max(top_k, 0)]


def lexical_rank(
    question: str, fragments: Sequence[Fragment], top_k: int = 6
) -> List[ScoredFragment]:
    """
    Score each fragment by how many question tokens occur in its text.
    Fragments with no overlap are dropped entirely.
    """
    tokens = tokenize(question)
    if not tokens:
        return []
    scored: List[ScoredFragment] = []
    for f in fragments:
        haystack = f.text.lower()
        score = sum(1 for t in tokens if t in haystack)
        if score > 0:
            scored.append(ScoredFragment(f.fragment_id, f.text, float(score)))
    return _top_k(scored, top_k)


def embedding_rank(
    query_vector: Sequence[float],
    fragments: Sequence[Fragment],
    vectors: Mapping[str, Sequence[float]],
    top_k: int = 6,
) -> List[ScoredFragment]:
    scored = [
        ScoredFragment(
            f.fragment_id,
            f.text,
            cosine_similarity(query_vector, vectors.get(f.fragment_id, ())),
        )
        for f in fragments
    ]
    return _top_k(scored, top_k)
