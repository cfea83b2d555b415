from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Dict, List, Optional, Sequence

from common.logger import get_logger
from ingestion.document_models import Fragment
from ingestion.hash_utils import fragment_set_version

log = get_logger(__name__)

EmbedDocuments = Callable[[List[str]], Awaitable[List[List[float]]]]


class EmbeddingCache:
    """
    Fragment id -> embedding vector for the current fragment-set version.

    Concurrent callers for the same version share one in-flight task, so a
    cold start issues a single embeddings request no matter how many
    questions arrive at once. The entry is replaced when the version changes.
    """

    def __init__(self):
        self._version: Optional[str] = None
        self._vectors: Dict[str, List[float]] = {}
        self._pending: Dict[str, asyncio.Task] = {}

    @property
    def version(self) -> Optional[str]:
        return self._version

    async def get_or_embed(
        self, fragments: Sequence[Fragment], embed_documents: EmbedDocuments
    ) -> Dict[str, List[float]]:
        if not fragments:
            return {}
        version = fragment_set_version(fragments)
        if version == self._version:
            return self._vectors

        # no await between lookup and insert: the check-and-set is atomic on the loop
        task = self._pending.get(version)
        if task is None:
            task = asyncio.ensure_future(self._embed(version, list(fragments), embed_documents))
            self._pending[version] = task
        else:
            log.debug("Joining in-flight fragment embedding for version %s", version[:10])
        # shield: one caller timing out must not cancel the shared computation
        return await asyncio.shield(task)

    async def _embed(
        self, version: str, fragments: List[Fragment], embed_documents: EmbedDocuments
    ) -> Dict[str, List[float]]:
        try:
            vectors = await embed_documents([f.text for f in fragments])
        finally:
            self._pending.pop(version, None)

        if len(vectors) != len(fragments):
            raise ValueError(
                f"Embedding backend returned {len(vectors)} vectors for {len(fragments)} fragments"
            )
        self._version = version
        self._vectors = {f.fragment_id: list(v) for f, v in zip(fragments, vectors)}
        log.info("Embedded %d fragments (version %s)", len(fragments), version[:10])
        return self._vectors
