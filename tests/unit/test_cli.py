#
# SPDX-FileCopyrightText: Copyright (c) provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Tests for the remotegit command line."""

import json
from pathlib import Path

from click.testing import CliRunner
from provide.testkit.mocking import AsyncMock, patch
import pytest

from remotegit.cli.main import cli
from remotegit.config import load_config
from remotegit.errors import CommandExecutionError, ConnectError
from remotegit.protocols import CommandResult, OperationResult, Project, StepResult


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def mock_orchestrator():
    """Replace the orchestrator the repository commands build from config."""
    orchestrator = AsyncMock()
    with patch("remotegit.cli.git_cmds.GitOperationOrchestrator") as orchestrator_cls:
        orchestrator_cls.from_config.return_value = orchestrator
        yield orchestrator


class TestMainCLI:
    def test_cli_help(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        assert "remotegit" in result.output
        for command in ("config", "test-connection", "projects", "files", "clone", "pull", "push", "status", "remove"):
            assert command in result.output

    def test_cli_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        version_file = Path(__file__).parent.parent.parent / "VERSION"
        assert version_file.read_text().strip() in result.output

    def test_push_requires_message(self, runner: CliRunner, config_file: Path) -> None:
        result = runner.invoke(cli, ["-c", str(config_file), "push", "/srv/projects/widget"])

        assert result.exit_code == 2
        assert "--message" in result.output


class TestConfigCommands:
    def test_init_writes_configured_file(self, runner: CliRunner, tmp_path: Path) -> None:
        config_path = tmp_path / "config.json"
        result = runner.invoke(
            cli,
            [
                "-c",
                str(config_path),
                "config",
                "init",
                "--host",
                "git.example.com",
                "--password",
                "s3cret",
                "--working-dir",
                "/srv/projects",
            ],
        )

        assert result.exit_code == 0, result.output
        assert "✅ Configuration saved successfully" in result.output
        saved = load_config(config_path)
        assert saved.is_configured
        assert saved.host == "git.example.com"
        assert saved.working_dir == "/srv/projects"
        assert json.loads(config_path.read_text())["ssh_port"] == "22"

    def test_init_rejects_key_auth_without_key(self, runner: CliRunner, tmp_path: Path) -> None:
        config_path = tmp_path / "config.json"
        result = runner.invoke(
            cli, ["-c", str(config_path), "config", "init", "--host", "h", "--auth-method", "key"]
        )

        assert result.exit_code == 1
        assert "no key path provided" in result.output
        assert not config_path.exists()

    def test_init_warns_about_insecure_policy(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(
            cli,
            [
                "-c",
                str(tmp_path / "config.json"),
                "config",
                "init",
                "--host",
                "h",
                "--password",
                "pw",
                "--host-key-policy",
                "insecure",
            ],
        )

        assert result.exit_code == 0
        assert "Host key verification disabled" in result.output

    def test_show_masks_secrets(self, runner: CliRunner, config_file: Path) -> None:
        result = runner.invoke(cli, ["-c", str(config_file), "config", "show"])

        assert result.exit_code == 0
        assert "s3cret" not in result.output
        assert "********" in result.output
        assert "GitHub token missing" in result.output

    def test_show_secrets_flag(self, runner: CliRunner, config_file: Path) -> None:
        result = runner.invoke(cli, ["-c", str(config_file), "config", "show", "--show-secrets"])

        assert result.exit_code == 0
        assert "s3cret" in result.output

    def test_show_without_file_reports_unconfigured(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(cli, ["-c", str(tmp_path / "missing.json"), "config", "show"])

        assert result.exit_code == 0
        assert "Not configured yet" in result.output

    def test_show_invalid_json(self, runner: CliRunner, tmp_path: Path) -> None:
        config_path = tmp_path / "config.json"
        config_path.write_text("{not json")

        result = runner.invoke(cli, ["-c", str(config_path), "config", "show"])

        assert result.exit_code == 1
        assert "not valid JSON" in result.output


class TestTestConnection:
    def test_success_prints_probe_output(self, runner: CliRunner, config_file: Path) -> None:
        probe = CommandResult(command="hostname && pwd", output="git-box\n/home/deploy\n")
        with patch("remotegit.cli.config_cmds.probe_connection", return_value=probe):
            result = runner.invoke(cli, ["-c", str(config_file), "test-connection"])

        assert result.exit_code == 0
        assert "✅ git-box\n/home/deploy" in result.output

    def test_connect_failure(self, runner: CliRunner, config_file: Path) -> None:
        with patch(
            "remotegit.cli.config_cmds.probe_connection",
            side_effect=ConnectError("SSH authentication failed: bad password"),
        ):
            result = runner.invoke(cli, ["-c", str(config_file), "test-connection"])

        assert result.exit_code == 1
        assert "SSH authentication failed" in result.output

    def test_missing_credentials(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(cli, ["-c", str(tmp_path / "missing.json"), "test-connection"])

        assert result.exit_code == 1
        assert "SSH host is not configured" in result.output


class TestRepositoryCommands:
    def test_requires_configuration(self, runner: CliRunner, tmp_path: Path, mock_orchestrator) -> None:
        result = runner.invoke(cli, ["-c", str(tmp_path / "missing.json"), "status", "/srv/projects/widget"])

        assert result.exit_code == 1
        assert "Not configured" in result.output
        mock_orchestrator.status.assert_not_called()

    def test_clone_success(self, runner: CliRunner, config_file: Path, mock_orchestrator) -> None:
        mock_orchestrator.clone.return_value = OperationResult(
            operation="clone", output="Cloning into 'widget'...\n"
        )

        result = runner.invoke(
            cli, ["-c", str(config_file), "clone", "https://github.com/acme/widget.git", "-b", "develop"]
        )

        assert result.exit_code == 0
        assert "✅ Clone completed successfully!" in result.output
        assert "Cloning into 'widget'" in result.output
        mock_orchestrator.clone.assert_awaited_once_with("https://github.com/acme/widget.git", "develop")
        mock_orchestrator.close.assert_awaited_once()

    def test_push_failure(self, runner: CliRunner, config_file: Path, mock_orchestrator) -> None:
        mock_orchestrator.push.return_value = OperationResult(
            operation="push",
            output="\nnothing to commit, working tree clean\n",
            error="git commit failed: Process exited with status 1",
        )

        result = runner.invoke(cli, ["-c", str(config_file), "push", "/srv/projects/widget", "-m", "wip"])

        assert result.exit_code == 1
        assert "❌ Push error: git commit failed" in result.output
        assert "nothing to commit" in result.output
        mock_orchestrator.push.assert_awaited_once_with("/srv/projects/widget", "wip")

    def test_credential_update_failure_is_shown(
        self, runner: CliRunner, config_file: Path, mock_orchestrator
    ) -> None:
        mock_orchestrator.pull.return_value = OperationResult(
            operation="pull",
            output="Already up to date.\n",
            credential_update=StepResult(
                name="credential_update",
                command="git remote get-url origin",
                success=False,
                error="could not read origin URL: Process exited with status 2",
            ),
        )

        result = runner.invoke(cli, ["-c", str(config_file), "pull", "/srv/projects/widget"])

        assert result.exit_code == 0
        assert "Remote URL was not updated" in result.output
        assert "✅ Pull completed successfully!" in result.output

    def test_status_header(self, runner: CliRunner, config_file: Path, mock_orchestrator) -> None:
        mock_orchestrator.status.return_value = OperationResult(operation="status", output="On branch main\n")

        result = runner.invoke(cli, ["-c", str(config_file), "status", "/srv/projects/widget"])

        assert result.exit_code == 0
        assert "📊 Repository Status:\nOn branch main" in result.output

    def test_remove_needs_confirmation(self, runner: CliRunner, config_file: Path, mock_orchestrator) -> None:
        result = runner.invoke(cli, ["-c", str(config_file), "remove", "/srv/projects/widget"], input="n\n")

        assert result.exit_code != 0
        mock_orchestrator.remove.assert_not_called()

    def test_remove_with_yes(self, runner: CliRunner, config_file: Path, mock_orchestrator) -> None:
        mock_orchestrator.remove.return_value = OperationResult(
            operation="remove", output="Check: exists\nCommand: rm -rf /srv/projects/widget\nResult: \nConfirm: deleted"
        )

        result = runner.invoke(cli, ["-c", str(config_file), "remove", "/srv/projects/widget", "--yes"])

        assert result.exit_code == 0
        assert "✅ Project removed successfully!" in result.output
        assert "Confirm: deleted" in result.output

    def test_projects_json(self, runner: CliRunner, config_file: Path, mock_orchestrator) -> None:
        mock_orchestrator.list_projects.return_value = [Project(name="widget", path="/srv/projects/widget")]

        result = runner.invoke(cli, ["-c", str(config_file), "projects", "--json"])

        assert result.exit_code == 0
        assert json.loads(result.stdout) == {
            "projects": [{"name": "widget", "path": "/srv/projects/widget"}],
            "error": None,
        }

    def test_projects_failure_json(self, runner: CliRunner, config_file: Path, mock_orchestrator) -> None:
        mock_orchestrator.list_projects.side_effect = CommandExecutionError(
            "find /srv/projects -maxdepth 2 -name .git -type d",
            exit_status=1,
            output="find: '/srv/projects': No such file or directory\n",
        )

        result = runner.invoke(cli, ["-c", str(config_file), "projects", "--json"])

        assert result.exit_code == 1
        payload = json.loads(result.stdout)
        assert payload["projects"] == []
        assert payload["error"].startswith("Failed to get project list")
        assert "No such file or directory" in payload["error"]

    def test_projects_table(self, runner: CliRunner, config_file: Path, mock_orchestrator) -> None:
        mock_orchestrator.list_projects.return_value = [Project(name="widget", path="/srv/projects/widget")]

        result = runner.invoke(cli, ["-c", str(config_file), "projects"])

        assert result.exit_code == 0
        assert "widget" in result.output


# 🔼⚙️🔚
