from __future__ import annotations

import os
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[1] / "config" / "config.yaml"


class AppConfig(BaseModel):
    # Tried in order, relative to the working directory
    resume_paths: List[Path] = Field(
        default_factory=lambda: [
            Path("data/resume.json"),
            Path("frontend/src/data/resume.json"),
            Path("src/data/resume.json"),
            Path("../frontend/src/data/resume.json"),
        ]
    )
    candidate_name: Optional[str] = None
    pronouns: str = "they/them"


class EmbeddingsConfig(BaseModel):
    provider: str = Field(default="openai", pattern="^(openai|huggingface|none)$")
    model_name: str = "text-embedding-3-small"


class RetrievalConfig(BaseModel):
    mode: str = Field(default="embedding", pattern="^(embedding|lexical)$")
    k: int = Field(default=6, ge=1)


class ContextConfig(BaseModel):
    max_chars: Optional[int] = Field(default=6000, ge=1)


class LLMConfig(BaseModel):
    provider: str = Field(default="openai", pattern="^(openai|ollama)$")
    model_name: str = "gpt-4o-mini"
    temperature: float = 0.25


class ShortcutsConfig(BaseModel):
    enabled: bool = True


class CLIConfig(BaseModel):
    retry_attempts: int = Field(default=3, ge=1)


class GlobalYAMLConfig(BaseModel):
    app: AppConfig = Field(default_factory=AppConfig)
    embeddings: EmbeddingsConfig = Field(default_factory=EmbeddingsConfig)
    retrieval: RetrievalConfig = Field(default_factory=RetrievalConfig)
    context: ContextConfig = Field(default_factory=ContextConfig)
    llm_qa: LLMConfig = Field(default_factory=LLMConfig)
    shortcuts: ShortcutsConfig = Field(default_factory=ShortcutsConfig)
    cli: CLIConfig = Field(default_factory=CLIConfig)


def load_yaml_config(path: Path | None = None) -> GlobalYAMLConfig:
    path = Path(path or os.getenv("RESUME_RAG_CONFIG") or DEFAULT_CONFIG_PATH)
    if not path.exists():
        return GlobalYAMLConfig()
    with open(path, "r") as f:
        raw = yaml.safe_load(f) or {}
    return GlobalYAMLConfig(**raw)


class Secrets(BaseSettings):
    # Read from OPENAI_API_KEY
    openai_api_key: Optional[str] = None

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


yaml_config = load_yaml_config()
secrets = Secrets()
