"""Pydantic configuration model with YAML loading."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field

_DEFAULT_CONFIG_NAME = "emlinter.yaml"


class FormatConfig(BaseModel):
    """HTML formatter settings."""

    indent: str = "  "


class ContrastConfig(BaseModel):
    """Contrast analyzer settings."""

    threshold: float = Field(default=4.5, ge=1.0, le=21.0)
    step: float = Field(default=0.01, gt=0.0, le=0.5)


class MinifyConfig(BaseModel):
    """HTML minifier settings."""

    keep_head: bool = False
    keep_styles: bool = False


class OutputConfig(BaseModel):
    """Report output settings."""

    report_format: Literal["json", "markdown"] = "markdown"


class EmlinterConfig(BaseModel):
    """Top-level configuration for EMLinter."""

    format: FormatConfig = Field(default_factory=FormatConfig)
    contrast: ContrastConfig = Field(default_factory=ContrastConfig)
    minify: MinifyConfig = Field(default_factory=MinifyConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @classmethod
    def load(cls, path: Path | None = None) -> EmlinterConfig:
        """Load config from a YAML file.

        Search order when *path* is None:
          1. ./emlinter.yaml
          2. ~/.config/emlinter/emlinter.yaml

        Returns default config if no file is found.
        """
        if path is not None:
            return cls._from_yaml(path)

        candidates = [
            Path.cwd() / _DEFAULT_CONFIG_NAME,
            Path.home() / ".config" / "emlinter" / _DEFAULT_CONFIG_NAME,
        ]
        for candidate in candidates:
            if candidate.is_file():
                return cls._from_yaml(candidate)

        return cls()

    @classmethod
    def _from_yaml(cls, path: Path) -> EmlinterConfig:
        raw: dict[str, Any] = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        return cls.model_validate(raw)
