"""Configuration loading from environment variables."""

from __future__ import annotations

import os

from clusterlint.models.config import (
    AnalysisConfig,
    APIConfig,
    ClusterlintConfig,
    LogConfig,
    OutputConfig,
)

OUTPUT_FORMATS = ("text", "json")
FAIL_ON_LEVELS = ("error", "warning", "info", "never")
NAMER_STYLES = ("default", "resource")


def _env(key: str, default: str = "") -> str:
    return os.environ.get(f"CLUSTERLINT_{key}", default)


def _env_int(key: str, default: int, min_val: int | None = None, max_val: int | None = None) -> int:
    val = int(_env(key, str(default)))
    if min_val is not None:
        val = max(val, min_val)
    if max_val is not None:
        val = min(val, max_val)
    return val


def _validate_choice(name: str, value: str, choices: tuple[str, ...]) -> str:
    if value.lower() not in choices:
        raise ValueError(f"Invalid {name}: {value}. Must be one of {set(choices)}")
    return value.lower()


def _validate_log_level(value: str) -> str:
    return _validate_choice("log level", value, ("debug", "info", "warning", "error"))


def load_config() -> ClusterlintConfig:
    """Load configuration from CLUSTERLINT_* environment variables."""
    return ClusterlintConfig(
        output=OutputConfig(
            format=_validate_choice("output format", _env("OUTPUT_FORMAT", "text"), OUTPUT_FORMATS),
            namer=_validate_choice("namer", _env("NAMER", "default"), NAMER_STYLES),
        ),
        analysis=AnalysisConfig(
            fail_on=_validate_choice("fail-on level", _env("FAIL_ON", "error"), FAIL_ON_LEVELS),
            max_workers=_env_int("MAX_WORKERS", 1, min_val=1, max_val=16),
        ),
        api=APIConfig(
            port=_env_int("API_PORT", 8080, min_val=1024, max_val=65535),
        ),
        log=LogConfig(
            level=_validate_log_level(_env("LOG_LEVEL", "warning")),
        ),
    )
