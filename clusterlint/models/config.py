"""Configuration data structures."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class OutputConfig:
    """How reports are rendered by the CLI."""

    format: str = "text"  # "text" | "json"
    namer: str = "default"  # "default" | "resource"


@dataclass
class AnalysisConfig:
    """Analysis pass execution settings."""

    fail_on: str = "error"  # "error" | "warning" | "info" | "never"
    max_workers: int = 1


@dataclass
class APIConfig:
    """REST API settings."""

    port: int = 8080


@dataclass
class LogConfig:
    """Logging settings."""

    level: str = "warning"


@dataclass
class ClusterlintConfig:
    """Top-level clusterlint configuration."""

    output: OutputConfig = field(default_factory=OutputConfig)
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    api: APIConfig = field(default_factory=APIConfig)
    log: LogConfig = field(default_factory=LogConfig)
