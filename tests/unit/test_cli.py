"""Tests for the clusterlint Click CLI."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from clusterlint import __version__
from clusterlint.cli import cli


@pytest.fixture
def runner(monkeypatch: pytest.MonkeyPatch) -> CliRunner:
    for key in ("OUTPUT_FORMAT", "NAMER", "FAIL_ON", "MAX_WORKERS", "LOG_LEVEL"):
        monkeypatch.delenv(f"CLUSTERLINT_{key}", raising=False)
    return CliRunner()


class TestAnalyzeCommand:
    def test_clean_input_exits_zero(self, runner: CliRunner, fixtures_dir: Path) -> None:
        result = runner.invoke(cli, ["--log-level", "error", "analyze", str(fixtures_dir / "healthy.json")])
        assert result.exit_code == 0
        assert "No problems found." in result.output

    def test_error_marker_exits_one(self, runner: CliRunner, fixtures_dir: Path) -> None:
        result = runner.invoke(cli, ["--log-level", "error", "analyze", str(fixtures_dir / "lonely-route.yaml")])
        assert result.exit_code == 1
        assert "MissingServiceWarning (1):" in result.output

    def test_warning_passes_by_default(self, runner: CliRunner, fixtures_dir: Path) -> None:
        result = runner.invoke(
            cli, ["--log-level", "error", "analyze", str(fixtures_dir / "missing-route-port.yaml")]
        )
        assert result.exit_code == 0
        assert "MissingRoutePortWarning" in result.output

    def test_fail_on_warning(self, runner: CliRunner, fixtures_dir: Path) -> None:
        result = runner.invoke(
            cli,
            [
                "--log-level",
                "error",
                "analyze",
                "--fail-on",
                "warning",
                str(fixtures_dir / "missing-route-port.yaml"),
            ],
        )
        assert result.exit_code == 1

    def test_json_output(self, runner: CliRunner, fixtures_dir: Path) -> None:
        result = runner.invoke(
            cli,
            [
                "--log-level",
                "error",
                "analyze",
                "-o",
                "json",
                "--namer",
                "resource",
                str(fixtures_dir / "invalid-route.yaml"),
            ],
        )
        assert result.exit_code == 1
        data = json.loads(result.output)
        assert [m["key"] for m in data["markers"]] == ["PathBasedPassthroughErr"]
        assert data["markers"][0]["node"] == "route/secure-api -n shop"

    def test_output_from_environment(
        self, runner: CliRunner, fixtures_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("CLUSTERLINT_OUTPUT_FORMAT", "json")
        result = runner.invoke(cli, ["--log-level", "error", "analyze", str(fixtures_dir / "healthy.json")])
        assert json.loads(result.output)["markers"] == []

    def test_multiple_files_share_one_graph(self, runner: CliRunner, fixtures_dir: Path, tmp_path: Path) -> None:
        service = tmp_path / "svc.yaml"
        service.write_text(
            "kind: Service\nmetadata:\n  name: does-not-exist\n  namespace: shop\nspec:\n  ports:\n  - port: 80\n"
        )
        result = runner.invoke(
            cli,
            ["--log-level", "error", "analyze", str(fixtures_dir / "lonely-route.yaml"), str(service)],
        )
        assert result.exit_code == 0

    def test_missing_file_exits_two(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(cli, ["--log-level", "error", "analyze", str(tmp_path / "absent.yaml")])
        assert result.exit_code == 2

    def test_no_modelled_objects_exits_two(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "cm.yaml"
        path.write_text("kind: ConfigMap\nmetadata:\n  name: x\n")
        result = runner.invoke(cli, ["--log-level", "error", "analyze", str(path)])
        assert result.exit_code == 2

    def test_invalid_environment_is_usage_error(
        self, runner: CliRunner, fixtures_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("CLUSTERLINT_FAIL_ON", "sometimes")
        result = runner.invoke(cli, ["analyze", str(fixtures_dir / "healthy.json")])
        assert result.exit_code == 2


class TestVersionCommand:
    def test_prints_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["version"])
        assert result.exit_code == 0
        assert result.output.strip() == __version__
