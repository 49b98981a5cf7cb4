"""Tests for environment-based configuration loading."""

from __future__ import annotations

import pytest

from clusterlint.config import load_config


class TestLoadConfig:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for key in ("OUTPUT_FORMAT", "NAMER", "FAIL_ON", "MAX_WORKERS", "API_PORT", "LOG_LEVEL"):
            monkeypatch.delenv(f"CLUSTERLINT_{key}", raising=False)
        config = load_config()

        assert config.output.format == "text"
        assert config.output.namer == "default"
        assert config.analysis.fail_on == "error"
        assert config.analysis.max_workers == 1
        assert config.api.port == 8080
        assert config.log.level == "warning"

    def test_overrides_are_normalized(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CLUSTERLINT_OUTPUT_FORMAT", "JSON")
        monkeypatch.setenv("CLUSTERLINT_FAIL_ON", "Warning")
        monkeypatch.setenv("CLUSTERLINT_NAMER", "resource")
        monkeypatch.setenv("CLUSTERLINT_LOG_LEVEL", "DEBUG")
        config = load_config()

        assert config.output.format == "json"
        assert config.analysis.fail_on == "warning"
        assert config.output.namer == "resource"
        assert config.log.level == "debug"

    def test_numeric_values_are_clamped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CLUSTERLINT_MAX_WORKERS", "100")
        monkeypatch.setenv("CLUSTERLINT_API_PORT", "80")
        config = load_config()

        assert config.analysis.max_workers == 16
        assert config.api.port == 1024

    @pytest.mark.parametrize(
        ("key", "value"),
        [
            ("OUTPUT_FORMAT", "xml"),
            ("FAIL_ON", "critical"),
            ("NAMER", "fancy"),
            ("LOG_LEVEL", "trace"),
            ("MAX_WORKERS", "many"),
        ],
    )
    def test_invalid_values_raise(self, monkeypatch: pytest.MonkeyPatch, key: str, value: str) -> None:
        monkeypatch.setenv(f"CLUSTERLINT_{key}", value)
        with pytest.raises(ValueError):
            load_config()
