from __future__ import annotations

import argparse

from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from chains.resume_answerer import ResumeAnswer, ResumeAnswerer
from chains.suggestions import SUGGESTED_QUESTIONS
from common.config import yaml_config
from common.errors import BackendError, ConfigurationError, ResumeAssistantError
from common.logger import get_logger
from ingestion.knowledge_base import ResumeKnowledgeBase
from models.embeddings import load_embeddings
from models.llm import load_llm
from retrieval.retriever_factory import build_retriever

log = get_logger(__name__)

APOLOGY = "Sorry, I can't answer that right now. Please try again in a moment."


@retry(
    retry=retry_if_exception_type(BackendError),
    stop=stop_after_attempt(yaml_config.cli.retry_attempts),
    wait=wait_exponential(multiplier=1, min=1, max=8),
    reraise=True,
)
def _ask_with_retry(answerer: ResumeAnswerer, question: str, k: int | None) -> ResumeAnswer:
    return answerer.ask(question, top_k=k)


def main():
    parser = argparse.ArgumentParser(description="Ask a question about the résumé.")
    parser.add_argument("question", type=str, nargs="?", default="")
    parser.add_argument("--k", type=int, default=None)
    parser.add_argument("--mode", choices=["embedding", "lexical"], default=None)
    parser.add_argument("--no-shortcuts", action="store_true")
    parser.add_argument("--sources", action="store_true", help="Print retrieved fragments")
    parser.add_argument("--suggest", action="store_true", help="List suggested questions")
    args = parser.parse_args()

    if args.suggest:
        for q in SUGGESTED_QUESTIONS:
            print(f"- {q}")
        return

    question = args.question.strip()
    if not question:
        parser.error("a question is required (or use --suggest)")

    kb = ResumeKnowledgeBase.load()
    mode = args.mode or yaml_config.retrieval.mode
    embeddings = load_embeddings() if mode == "embedding" else None
    retriever = build_retriever(embeddings=embeddings, mode=mode, k=args.k)

    # shortcut intents still answer without a model
    try:
        llm = load_llm("llm_qa")
    except ConfigurationError as e:
        log.warning("QA model unavailable: %s", e)
        llm = None

    answerer = ResumeAnswerer(
        kb,
        llm=llm,
        retriever=retriever,
        shortcuts_enabled=False if args.no_shortcuts else None,
    )
    try:
        result = _ask_with_retry(answerer, question, args.k)
    except ResumeAssistantError as e:
        log.error("Question failed: %s", e)
        print(APOLOGY)
        raise SystemExit(1)

    print("\n=== ANSWER ===\n")
    print(result.answer)

    if args.sources and result.fragments:
        print("\n=== SOURCES ===\n")
        for s in result.fragments:
            print(f"- [{s.fragment_id}] ({s.score:.3f}) {s.text.splitlines()[0]}")


if __name__ == "__main__":
    main()
