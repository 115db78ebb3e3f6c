"""Pydantic configuration schema for CLI YAML input."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ScaleOverride(BaseModel):
    ranks: dict[str, int] | None = None
    aliases: dict[str, str] | None = None

    model_config = ConfigDict(extra="forbid")


class ScalesConfig(BaseModel):
    grade: ScaleOverride | None = None
    education: ScaleOverride | None = None
    experience: ScaleOverride | None = None

    model_config = ConfigDict(extra="forbid")


class CoverageSettings(BaseModel):
    min_similarity: float | None = Field(default=None, ge=0, le=100)

    model_config = ConfigDict(extra="forbid")


class EvaluatorConfig(BaseModel):
    skills: CoverageSettings | None = None
    qualifications: CoverageSettings | None = None

    model_config = ConfigDict(extra="forbid")


class AppConfig(BaseModel):
    scales: ScalesConfig = Field(default_factory=ScalesConfig)
    evaluators: EvaluatorConfig = Field(default_factory=EvaluatorConfig)

    def to_settings(self) -> dict[str, Any]:
        settings: dict[str, Any] = {}
        scale_settings = self.scales.model_dump(exclude_none=True)
        if scale_settings:
            settings["scales"] = scale_settings
        evaluator_settings = self.evaluators.model_dump(exclude_none=True)
        if evaluator_settings:
            settings["evaluators"] = evaluator_settings
        return settings


def load_config(raw: Any) -> AppConfig:
    if raw is None:
        return AppConfig()
    if not isinstance(raw, dict):
        raise ValueError("Config must be a mapping")
    return AppConfig.model_validate(raw)


__all__ = ["AppConfig", "CoverageSettings", "EvaluatorConfig", "ScaleOverride", "ScalesConfig", "load_config"]
