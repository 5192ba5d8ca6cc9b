from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from .core.classifier import DEFAULT_GENERIC_TERMS, DEFAULT_LANDMARK_VOCABULARY


class RegistrySettings(BaseModel):
    path: Optional[Path] = None

    @field_validator("path", mode="before")
    @classmethod
    def _expand_path(cls, value: Optional[str | Path]) -> Optional[Path]:
        if value is None:
            return None
        return Path(value).expanduser().resolve()


class MatchingSettings(BaseModel):
    exact_min_confidence: float = Field(default=75.0, ge=0, le=100)
    alternative_min_confidence: float = Field(default=75.0, ge=0, le=100)
    similarity_min_confidence: float = Field(default=70.0, ge=0, le=100)
    similarity_min_score: float = Field(default=0.7, ge=0, le=1)
    keyword_trigger_confidence: float = Field(default=85.0, ge=0, le=100)
    keyword_candidate_confidence: float = Field(default=75.0, ge=0, le=100)
    keyword_min_score: float = Field(default=0.3, ge=0, le=1)
    generic_trigger_confidence: float = Field(default=85.0, ge=0, le=100)
    generic_min_labels: int = Field(default=2, ge=1)


class ClassifierSettings(BaseModel):
    landmark_keywords: List[str] = Field(default_factory=lambda: list(DEFAULT_LANDMARK_VOCABULARY))
    generic_terms: List[str] = Field(default_factory=lambda: list(DEFAULT_GENERIC_TERMS))
    image_signal_confidence: float = Field(default=70.0, ge=0, le=100)

    @model_validator(mode="after")
    def _require_vocabulary(self) -> "ClassifierSettings":
        if not any(term.strip() for term in self.landmark_keywords):
            raise ValueError("classifier.landmark_keywords must contain at least one term")
        return self


class PipelineSettings(BaseModel):
    disabled_tiers: List[str] = Field(default_factory=list)


class Settings(BaseModel):
    registry: RegistrySettings = RegistrySettings()
    matching: MatchingSettings = MatchingSettings()
    classifier: ClassifierSettings = ClassifierSettings()
    pipeline: PipelineSettings = PipelineSettings()

    @classmethod
    def load(cls, path: Path) -> "Settings":
        with path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
        return cls.model_validate(raw or {})


CONFIG_CANDIDATES = (
    "landmark-resolver.yaml",
    "landmark-resolver.yml",
    "config.yaml",
    "config.yml",
)


def find_config(explicit_path: Optional[Path]) -> Optional[Path]:
    if explicit_path:
        if not explicit_path.exists():
            raise FileNotFoundError(f"Config file not found: {explicit_path}")
        return explicit_path
    cwd = Path.cwd()
    for name in CONFIG_CANDIDATES:
        candidate = cwd / name
        if candidate.exists():
            return candidate
    return None


def load_settings(explicit_path: Optional[Path] = None) -> Settings:
    config_path = find_config(explicit_path)
    if config_path is None:
        return Settings()
    return Settings.load(config_path)
