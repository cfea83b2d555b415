from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, List, Optional

from langchain_core.output_parsers import StrOutputParser
from langchain_core.runnables import Runnable

from chains.prompts import EMPTY_CONTEXT, FALLBACK_ANSWER, QA_PROMPT
from chains.shortcuts import route_shortcut
from common.config import yaml_config
from common.errors import CompletionBackendError, ConfigurationError
from common.logger import get_logger
from ingestion.cleaners import strip_markdown_emphasis
from ingestion.document_models import ScoredFragment
from ingestion.knowledge_base import ResumeKnowledgeBase
from retrieval.context_builder import assemble_context
from retrieval.retriever_factory import ResumeRetriever, build_retriever

log = get_logger(__name__)


@dataclass(frozen=True)
class ResumeAnswer:
    answer: str
    route: str  # "shortcut" | "model"
    fragments: List[ScoredFragment]


def coerce_question(question: Any) -> str:
    return question.strip() if isinstance(question, str) else ""


class ResumeAnswerer:
    """
    Question answering over one résumé:
      1) Known intents are answered directly from the canonical résumé
      2) Otherwise fragments are retrieved and assembled into a context block
      3) The QA model answers from that context in a single call

    Defaults come from config/config.yaml, but constructor args override.
    """

    def __init__(
        self,
        kb: ResumeKnowledgeBase,
        llm: Optional[Runnable] = None,
        retriever: Optional[ResumeRetriever] = None,
        *,
        shortcuts_enabled: Optional[bool] = None,
        max_context_chars: Optional[int] = None,
        candidate_name: Optional[str] = None,
        pronouns: Optional[str] = None,
    ):
        self.kb = kb
        self.llm = llm
        self.retriever = retriever or build_retriever()
        self.shortcuts_enabled = (
            yaml_config.shortcuts.enabled if shortcuts_enabled is None else shortcuts_enabled
        )
        self.max_context_chars = max_context_chars or yaml_config.context.max_chars
        self.candidate_name = (
            candidate_name or yaml_config.app.candidate_name or kb.resume.name or "the candidate"
        )
        self.pronouns = pronouns or yaml_config.app.pronouns

    async def _complete(self, context: str, question: str) -> str:
        if self.llm is None:
            raise ConfigurationError("No QA model configured.")
        chain = QA_PROMPT | self.llm | StrOutputParser()
        try:
            return await chain.ainvoke(
                {
                    "candidate": self.candidate_name,
                    "pronouns": self.pronouns,
                    "context": context or EMPTY_CONTEXT,
                    "question": question,
                }
            )
        except Exception as e:
            log.error("QA LLM invocation failed: %s", e, exc_info=True)
            raise CompletionBackendError(f"Completion request failed: {e}") from e

    async def aask(self, question: Any, *, top_k: Optional[int] = None) -> ResumeAnswer:
        question = coerce_question(question)

        if self.shortcuts_enabled:
            shortcut = route_shortcut(question, self.kb.resume)
            if shortcut is not None:
                return ResumeAnswer(answer=shortcut, route="shortcut", fragments=[])

        scored = await self.retriever.aretrieve(question, self.kb.fragments, top_k)
        context = assemble_context(scored, max_chars=self.max_context_chars)
        if not context:
            log.info("No grounding context for question; answering without it.")

        raw = await self._complete(context, question or "Introduce yourself.")
        answer = strip_markdown_emphasis(str(raw)) or FALLBACK_ANSWER
        return ResumeAnswer(answer=answer, route="model", fragments=scored)

    def ask(self, question: Any, *, top_k: Optional[int] = None) -> ResumeAnswer:
        return asyncio.run(self.aask(question, top_k=top_k))
