from __future__ import annotations

from langchain_core.language_models import BaseLanguageModel
from langchain_ollama import OllamaLLM
from langchain_openai import ChatOpenAI

from common.config import secrets, yaml_config
from common.errors import ConfigurationError
from common.logger import get_logger

log = get_logger(__name__)


def load_llm(config_section: str = "llm_qa") -> BaseLanguageModel:
    """
    Load the answer-generation model described by a config section.
    """
    cfg = getattr(yaml_config, config_section)

    if cfg.provider == "openai":
        if not secrets.openai_api_key:
            raise ConfigurationError("Missing OPENAI_API_KEY")
        log.info("Using OpenAI chat model %s", cfg.model_name)
        return ChatOpenAI(
            model=cfg.model_name,
            temperature=cfg.temperature,
            api_key=secrets.openai_api_key,
        )
    if cfg.provider == "ollama":
        log.info("Using Ollama model %s", cfg.model_name)
        return OllamaLLM(model=cfg.model_name, temperature=cfg.temperature)

    raise ValueError(f"Unsupported provider: {cfg.provider}")
