"""Configuration loading utilities for Scrubby."""
from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .exceptions import ConfigError
from .models import DetectorKind
from .scanner import ScannerConfig
from .scanner.entropy import DEFAULT_ENTROPY_THRESHOLD, DEFAULT_MIN_LENGTH

_LOG_LEVELS = {"critical", "error", "warning", "info", "debug"}


class LoggingConfig(BaseModel):
    level: str = Field(default="WARNING", description="Logging verbosity level")

    def normalized_level(self) -> str:
        return self.level.upper()

    @field_validator("level")
    @classmethod
    def _validate_level(cls, value: str) -> str:
        if value.lower() not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level '{value}'")
        return value


class ScrubConfig(BaseModel):
    stable_placeholders: bool = Field(default=False, description="Number placeholders per value (<EMAIL_1>)")
    json_report: bool = Field(default=False, description="Print a JSON report instead of the text summary")
    interval_ms: int = Field(default=750, ge=100, description="Clipboard poll interval for watch mode")


class TokenConfig(BaseModel):
    min_length: int = Field(default=DEFAULT_MIN_LENGTH, ge=8, le=4096)
    entropy_threshold: float = Field(default=DEFAULT_ENTROPY_THRESHOLD, gt=0.0, le=8.0)
    allow_list: List[str] = Field(default_factory=list, description="Extra words never treated as secrets")


class DetectorConfig(BaseModel):
    disabled: List[DetectorKind] = Field(default_factory=list)
    token: TokenConfig = Field(default_factory=TokenConfig)

    def scanner_config(self) -> ScannerConfig:
        return ScannerConfig(
            disabled=tuple(self.disabled),
            min_token_length=self.token.min_length,
            entropy_threshold=self.token.entropy_threshold,
            allow_list=tuple(self.token.allow_list),
        )


class AppConfig(BaseModel):
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    scrub: ScrubConfig = Field(default_factory=ScrubConfig)
    detectors: DetectorConfig = Field(default_factory=DetectorConfig)


DEFAULT_CONFIG = AppConfig()


def load_config(path: Optional[Path] = None) -> AppConfig:
    if path is None:
        return DEFAULT_CONFIG.model_copy(deep=True)
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
    except OSError as exc:
        raise ConfigError(f"Failed to read config {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Config {path} is not valid YAML: {exc}") from exc
    try:
        return AppConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration in {path}: {exc}") from exc


def dump_default_config(target: Path) -> None:
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("w", encoding="utf-8") as handle:
        yaml.safe_dump(DEFAULT_CONFIG.model_dump(mode="json"), handle, sort_keys=False)
