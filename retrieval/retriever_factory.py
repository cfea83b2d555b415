from __future__ import annotations

from typing import List, Optional, Sequence

import openai
from langchain_core.embeddings import Embeddings

from common.config import yaml_config
from common.errors import EmbeddingBackendError
from common.logger import get_logger
from ingestion.document_models import Fragment, ScoredFragment
from retrieval.embedding_cache import EmbeddingCache
from retrieval.scoring import embedding_rank, lexical_rank

log = get_logger(__name__)

# Errors that mean "this backend will never work as configured", not "try again"
MISCONFIGURATION_ERRORS = (
    openai.AuthenticationError,
    openai.PermissionDeniedError,
    openai.NotFoundError,
)

# Shared by every retriever in the process; lives until restart
FRAGMENT_EMBEDDINGS = EmbeddingCache()


class ResumeRetriever:
    """
    Rank résumé fragments against a question.

    Uses embedding cosine similarity when an embedding backend is available
    and falls back to lexical token overlap when it is missing or rejected as
    misconfigured. Transient backend failures surface as EmbeddingBackendError.
    """

    def __init__(
        self,
        embeddings: Optional[Embeddings] = None,
        cache: Optional[EmbeddingCache] = None,
        k: Optional[int] = None,
    ):
        self.embeddings = embeddings
        self.cache = cache if cache is not None else FRAGMENT_EMBEDDINGS
        self.k = k if k is not None else yaml_config.retrieval.k

    @property
    def mode(self) -> str:
        return "embedding" if self.embeddings is not None else "lexical"

    async def aretrieve(
        self,
        question: str,
        fragments: Sequence[Fragment],
        top_k: Optional[int] = None,
    ) -> List[ScoredFragment]:
        top_k = top_k if top_k is not None else self.k
        question = (question or "").strip()
        if not question or not fragments:
            return []

        if self.embeddings is None:
            return lexical_rank(question, fragments, top_k)

        try:
            vectors = await self.cache.get_or_embed(
                fragments, self.embeddings.aembed_documents
            )
            query_vector = await self.embeddings.aembed_query(question)
        except MISCONFIGURATION_ERRORS as e:
            log.warning("Embedding backend misconfigured (%s); using lexical retrieval.", e)
            return lexical_rank(question, fragments, top_k)
        except Exception as e:
            log.error("Embedding request failed: %s", e, exc_info=True)
            raise EmbeddingBackendError(f"Embedding request failed: {e}") from e

        ranked = embedding_rank(query_vector, fragments, vectors, top_k)
        log.debug("Retrieved %s", [s.fragment_id for s in ranked])
        return ranked


def build_retriever(
    embeddings: Optional[Embeddings] = None,
    mode: Optional[str] = None,  # "embedding" | "lexical"
    k: Optional[int] = None,
    cache: Optional[EmbeddingCache] = None,
) -> ResumeRetriever:
    """
    Return a retriever for the configured mode. Embedding mode without a
    backend degrades to lexical.
    """
    mode = mode or yaml_config.retrieval.mode
    if mode == "lexical":
        retriever = ResumeRetriever(embeddings=None, cache=cache, k=k)
    elif mode == "embedding":
        retriever = ResumeRetriever(embeddings=embeddings, cache=cache, k=k)
    else:
        raise ValueError(f"Unsupported retrieval mode: {mode}")
    log.info("Built %s retriever k=%d", retriever.mode, retriever.k)
    return retriever
