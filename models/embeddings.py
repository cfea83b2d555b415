from __future__ import annotations

from typing import Optional

from langchain_core.embeddings import Embeddings
from langchain_huggingface.embeddings import HuggingFaceEmbeddings
from langchain_openai import OpenAIEmbeddings

from common.config import secrets, yaml_config
from common.logger import get_logger

log = get_logger(__name__)


def load_embeddings() -> Optional[Embeddings]:
    """
    Build the embedding backend named in config, or None when it is disabled
    or cannot be configured. Retrieval falls back to lexical scoring on None.
    """
    cfg = yaml_config.embeddings

    if cfg.provider == "none":
        return None

    if cfg.provider == "openai":
        if not secrets.openai_api_key:
            log.warning("OPENAI_API_KEY not set; using lexical retrieval.")
            return None
        return OpenAIEmbeddings(model=cfg.model_name, api_key=secrets.openai_api_key)

    if cfg.provider == "huggingface":
        try:
            return HuggingFaceEmbeddings(model_name=cfg.model_name)
        except Exception as e:
            log.warning("HuggingFace embeddings unavailable (%s); using lexical retrieval.", e)
            return None

    raise ValueError(f"Unsupported embeddings provider: {cfg.provider}")
