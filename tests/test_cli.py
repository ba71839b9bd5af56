"""Smoke tests for the CLI.

These tests drive every command against documents written to a
temporary directory.
"""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from buildutil import __version__
from buildutil.cli import app

runner = CliRunner()


def write(path: Path, data: dict) -> Path:
    """Write a JSON document and return its path."""
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


@pytest.fixture
def build_file(tmp_path: Path) -> Path:
    """A running source build of config 'app'."""
    return write(
        tmp_path / "build.json",
        {
            "kind": "Build",
            "metadata": {
                "name": "app-3",
                "namespace": "ci",
                "labels": {
                    "openshift.io/build-config.name": "app",
                    "openshift.io/build.start-policy": "Parallel",
                },
                "annotations": {"openshift.io/build.number": "3"},
            },
            "spec": {
                "strategy": {
                    "type": "Source",
                    "sourceStrategy": {
                        "from": {"kind": "ImageStreamTag", "name": "python:3.12"},
                    },
                }
            },
            "status": {"phase": "Running"},
        },
    )


@pytest.fixture
def build_list_file(tmp_path: Path) -> Path:
    """A build list with two builds of 'app' and one of 'web'."""
    labels = {"openshift.io/build-config.name": "app"}
    return write(
        tmp_path / "builds.json",
        {
            "kind": "BuildList",
            "metadata": {"resourceVersion": "88"},
            "items": [
                {
                    "metadata": {"name": "app-1", "namespace": "ci", "labels": labels},
                    "status": {"phase": "Complete"},
                },
                {
                    "metadata": {"name": "app-2", "namespace": "ci", "labels": labels},
                    "status": {"phase": "Pending"},
                },
                {
                    "metadata": {
                        "name": "web-1",
                        "namespace": "ci",
                        "labels": {"openshift.io/build-config.name": "web"},
                    },
                },
            ],
        },
    )


class TestCLIHelp:
    """Test CLI help and version commands."""

    def test_help_returns_zero(self) -> None:
        """CLI --help should return exit code 0."""
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "Build decision helpers" in result.stdout

    def test_version_flag(self) -> None:
        """CLI --version should print version and exit 0."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_short_version_flag(self) -> None:
        """CLI -V should print version and exit 0."""
        result = runner.invoke(app, ["-V"])
        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_no_args_shows_help(self) -> None:
        """CLI with no args should show help."""
        result = runner.invoke(app, [])
        assert "Usage:" in result.stdout

    def test_invalid_log_level(self) -> None:
        """An unknown --log-level should fail."""
        result = runner.invoke(app, ["--log-level", "LOUD", "config"])
        assert result.exit_code == 1
        assert "Invalid log level" in result.stdout

    def test_invalid_environment_settings(self) -> None:
        """An invalid BUILDUTIL_ variable should fail without a traceback."""
        result = runner.invoke(
            app, ["config"], env={"BUILDUTIL_LOG_LEVEL": "VERBOSE"}
        )
        assert result.exit_code == 1
        assert "Invalid configuration" in result.stdout
        assert "Traceback" not in result.stdout

    def test_invalid_settings_with_log_level_flag(self) -> None:
        """Settings should be validated even when --log-level is given."""
        result = runner.invoke(
            app,
            ["--log-level", "DEBUG", "config"],
            env={"BUILDUTIL_TRUSTED_ENV_NAMES": '["BAD NAME"]'},
        )
        assert result.exit_code == 1
        assert "Invalid configuration" in result.stdout


class TestCLIConfig:
    """Test CLI config command."""

    def test_config_command(self) -> None:
        """CLI config should show configuration."""
        result = runner.invoke(app, ["config"])
        assert result.exit_code == 0
        assert "Log level" in result.stdout
        assert "BUILD_LOGLEVEL" in result.stdout

    def test_config_json(self) -> None:
        """CLI config --json should output JSON."""
        result = runner.invoke(app, ["config", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["log_level"] == "INFO"

    def test_config_reports_effective_whitelist(self, tmp_path, monkeypatch) -> None:
        """Names added by a .env file should not be reported as trusted."""
        monkeypatch.delenv("BUILDUTIL_TRUSTED_ENV_NAMES", raising=False)
        (tmp_path / ".env").write_text(
            'BUILDUTIL_TRUSTED_ENV_NAMES=["LD_PRELOAD"]\n', encoding="utf-8"
        )
        monkeypatch.chdir(tmp_path)

        result = runner.invoke(app, ["config", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["trusted_env_names"] == ["BUILD_LOGLEVEL", "GIT_SSL_NO_VERIFY"]


class TestCLIBuildsInspect:
    """Test builds inspect command."""

    def test_inspect_json(self, build_file) -> None:
        """Should report every decision for the build."""
        result = runner.invoke(app, ["builds", "inspect", str(build_file), "--json"])
        assert result.exit_code == 0

        data = json.loads(result.stdout)
        assert data["complete"] is False
        assert data["run_policy"] == "Parallel"
        assert data["config_name"] == "app"
        assert data["version"] == 3
        assert data["build_number"] == 3
        assert data["build_number_error"] is None
        assert data["input_reference"] == {
            "kind": "ImageStreamTag",
            "name": "python:3.12",
        }

    def test_inspect_text(self, build_file) -> None:
        """Human output should list the decisions."""
        result = runner.invoke(app, ["builds", "inspect", str(build_file)])
        assert result.exit_code == 0
        assert "ci/app-3" in result.stdout
        assert "Parallel" in result.stdout
        assert "python:3.12" in result.stdout

    def test_inspect_without_build_number(self, tmp_path) -> None:
        """A missing build number should be reported, not fail the command."""
        path = write(tmp_path / "b.json", {"metadata": {"name": "x", "namespace": "ci"}})
        result = runner.invoke(app, ["builds", "inspect", str(path), "--json"])
        assert result.exit_code == 0

        data = json.loads(result.stdout)
        assert data["version"] == 0
        assert data["build_number"] is None
        assert "does not have" in data["build_number_error"]
        assert data["run_policy"] == "Serial"
        assert data["input_reference"] is None

    def test_inspect_missing_file(self, tmp_path) -> None:
        """A missing file should exit with code 1."""
        result = runner.invoke(app, ["builds", "inspect", str(tmp_path / "no.json")])
        assert result.exit_code == 1
        assert "Failed to load build" in result.stdout

    def test_inspect_invalid_document(self, tmp_path) -> None:
        """A schema violation should exit with code 1."""
        path = write(tmp_path / "b.json", {"spec": {"strategy": {"type": "Magic"}}})
        result = runner.invoke(app, ["builds", "inspect", str(path)])
        assert result.exit_code == 1


class TestCLIBuildsList:
    """Test builds list command."""

    def test_list_config_builds(self, build_list_file) -> None:
        """Should list only builds of the requested config."""
        result = runner.invoke(
            app, ["builds", "list", str(build_list_file), "--config", "app", "--json"]
        )
        assert result.exit_code == 0

        data = json.loads(result.stdout)
        assert [b["metadata"]["name"] for b in data["items"]] == ["app-1", "app-2"]
        assert data["metadata"]["resourceVersion"] == "88"

    def test_list_active(self, build_list_file) -> None:
        """--active should keep only builds that are not complete."""
        result = runner.invoke(
            app,
            ["builds", "list", str(build_list_file), "-c", "app", "--active", "--json"],
        )
        data = json.loads(result.stdout)
        assert [b["metadata"]["name"] for b in data["items"]] == ["app-2"]

    def test_list_complete(self, build_list_file) -> None:
        """--complete should keep only finished builds."""
        result = runner.invoke(
            app,
            ["builds", "list", str(build_list_file), "-c", "app", "--complete", "--json"],
        )
        data = json.loads(result.stdout)
        assert [b["metadata"]["name"] for b in data["items"]] == ["app-1"]

    def test_list_conflicting_flags(self, build_list_file) -> None:
        """--active and --complete together should fail."""
        result = runner.invoke(
            app,
            ["builds", "list", str(build_list_file), "-c", "app", "--active", "--complete"],
        )
        assert result.exit_code == 1

    def test_list_text_empty(self, build_list_file) -> None:
        """An unknown config should report no builds."""
        result = runner.invoke(
            app, ["builds", "list", str(build_list_file), "--config", "nope"]
        )
        assert result.exit_code == 0
        assert "No builds found" in result.stdout

    def test_list_other_namespace(self, build_list_file) -> None:
        """Builds outside the namespace should not be listed."""
        result = runner.invoke(
            app,
            ["builds", "list", str(build_list_file), "-c", "app", "-n", "prod", "--json"],
        )
        assert json.loads(result.stdout)["items"] == []


class TestCLIOtherCommands:
    """Test next-name, configs, pods and env commands."""

    def test_next_name(self) -> None:
        """Should print the composed build name."""
        result = runner.invoke(app, ["builds", "next-name", "my-build", "3"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "my-build-3"

    def test_configs_paused(self, tmp_path) -> None:
        """Should report a paused build config."""
        path = write(
            tmp_path / "bc.json",
            {
                "metadata": {
                    "name": "app",
                    "annotations": {"openshift.io/build-config.paused": "True"},
                }
            },
        )
        result = runner.invoke(app, ["configs", "paused", str(path), "--json"])
        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"name": "app", "paused": True}

    def test_configs_not_paused(self, tmp_path) -> None:
        """A config without the annotation is not paused."""
        path = write(tmp_path / "bc.json", {"metadata": {"name": "app"}})
        result = runner.invoke(app, ["configs", "paused", str(path)])
        assert result.exit_code == 0
        assert "not paused" in result.stdout

    def test_pods_build_name(self, tmp_path) -> None:
        """Should print the build a pod executes."""
        path = write(
            tmp_path / "pod.json",
            {
                "metadata": {
                    "name": "app-1-build",
                    "annotations": {"openshift.io/build.name": "app-1"},
                }
            },
        )
        result = runner.invoke(app, ["pods", "build-name", str(path)])
        assert result.exit_code == 0
        assert result.stdout.strip() == "app-1"

    def test_pods_build_name_not_build_pod(self, tmp_path) -> None:
        """A pod without the annotation should fail."""
        path = write(tmp_path / "pod.json", {"metadata": {"name": "web"}})
        result = runner.invoke(app, ["pods", "build-name", str(path)])
        assert result.exit_code == 1

    def test_env_merge(self, tmp_path) -> None:
        """Should merge only whitelisted variables."""
        source = write(
            tmp_path / "source.json",
            {
                "env": [
                    {"name": "BUILD_LOGLEVEL", "value": "5"},
                    {"name": "LD_PRELOAD", "value": "evil.so"},
                    {"name": "GIT_SSL_NO_VERIFY", "value": "true"},
                ]
            },
        )
        output = write(
            tmp_path / "output.json",
            {"env": [{"name": "BUILD_LOGLEVEL", "value": "0"}]},
        )

        result = runner.invoke(app, ["env", "merge", str(source), str(output), "--json"])
        assert result.exit_code == 0
        assert json.loads(result.stdout) == [
            {"name": "BUILD_LOGLEVEL", "value": "5"},
            {"name": "GIT_SSL_NO_VERIFY", "value": "true"},
        ]

    def test_env_merge_no_source_precedence(self, tmp_path) -> None:
        """--no-source-precedence should keep output values."""
        source = write(
            tmp_path / "source.json", {"env": [{"name": "BUILD_LOGLEVEL", "value": "5"}]}
        )
        output = write(
            tmp_path / "output.json", {"env": [{"name": "BUILD_LOGLEVEL", "value": "0"}]}
        )

        result = runner.invoke(
            app, ["env", "merge", str(source), str(output), "--no-source-precedence"]
        )
        assert result.exit_code == 0
        assert result.stdout.strip() == "BUILD_LOGLEVEL=0"

    def test_env_merge_bad_document(self, tmp_path) -> None:
        """A document without an env key should fail."""
        source = write(tmp_path / "source.json", {"vars": []})
        output = write(tmp_path / "output.json", {"env": []})
        result = runner.invoke(app, ["env", "merge", str(source), str(output)])
        assert result.exit_code == 1
