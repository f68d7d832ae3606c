"""Tests for the command line interface."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from worklog.cli import app
from worklog.config import CONFIG_FILENAME

runner = CliRunner()


def invoke(workspace: Path, *args: str):
    return runner.invoke(app, ["--workspace", str(workspace), *args])


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    result = invoke(tmp_path, "init", "--name", "notes")
    assert result.exit_code == 0, result.output
    return tmp_path


def test_init(tmp_path: Path) -> None:
    """Test initializing a workspace."""
    result = runner.invoke(app, ["init", str(tmp_path / "ws")])

    assert result.exit_code == 0, result.output
    assert "Initialized workspace" in result.output
    assert (tmp_path / "ws" / CONFIG_FILENAME).exists()
    assert (tmp_path / "ws" / "templates" / "daily.md").exists()


def test_init_twice_fails(workspace: Path) -> None:
    result = invoke(workspace, "init")

    assert result.exit_code == 1
    assert "already initialized" in result.output


def test_requires_initialized_workspace(tmp_path: Path) -> None:
    result = invoke(tmp_path, "daily", "list")

    assert result.exit_code == 1
    assert "not initialized" in result.output


def test_daily_commands(workspace: Path) -> None:
    """Test creating, tagging, linking and listing daily logs."""
    result = invoke(workspace, "daily", "new", "2026-01-12", "-p", "alpha", "-t", "backend")
    assert result.exit_code == 0, result.output
    assert (workspace / "daily" / "2026-01-12.md").exists()

    result = invoke(workspace, "daily", "new", "2026-01-12")
    assert result.exit_code == 1
    assert "already exists" in result.output

    result = invoke(workspace, "daily", "tag", "#infra", "--date", "2026-01-12")
    assert result.exit_code == 0, result.output
    assert "backend, infra" in result.output

    result = invoke(workspace, "daily", "link", "https://github.com/acme/app/pull/3", "-d", "2026-01-12")
    assert result.exit_code == 0, result.output
    assert "PRs: 1" in result.output

    result = invoke(workspace, "daily", "highlight", "2026-01-12")
    assert result.exit_code == 0, result.output

    result = invoke(workspace, "daily", "list", "--highlight")
    assert "⭐ 2026-01-12  [2026-W03]  alpha" in result.output

    result = invoke(workspace, "daily", "show", "2026-01-12")
    assert result.exit_code == 0, result.output
    assert "date: 2026-01-12" in result.output
    assert "weekly_highlight: true" in result.output


def test_daily_show_missing(workspace: Path) -> None:
    result = invoke(workspace, "daily", "show", "2026-01-12")
    assert result.exit_code == 1
    assert "not found" in result.output


def test_daily_list_empty(workspace: Path) -> None:
    result = invoke(workspace, "daily", "list")
    assert result.exit_code == 0
    assert "No daily logs found" in result.output


def test_weekly_generate(workspace: Path) -> None:
    """Test generating and showing a weekly report."""
    invoke(workspace, "daily", "new", "2026-01-12", "-p", "alpha")
    invoke(workspace, "daily", "new", "2026-01-13")
    invoke(workspace, "daily", "highlight", "2026-01-13")

    result = invoke(workspace, "weekly", "generate", "2026-W03")
    assert result.exit_code == 0, result.output
    assert "Daily logs: 2" in result.output
    assert "Highlights: 1" in result.output
    assert "Projects: alpha" in result.output

    result = invoke(workspace, "weekly", "show", "2026-W03")
    assert result.exit_code == 0, result.output
    assert "# Week 2026-W03 Weekly Report" in result.output
    assert "### 2026-01-13" in result.output

    result = invoke(workspace, "weekly", "list")
    assert "2026-W03  2026-01-12 - 2026-01-18  alpha" in result.output


def test_weekly_new_and_invalid_week(workspace: Path) -> None:
    result = invoke(workspace, "weekly", "new", "2026-W02")
    assert result.exit_code == 0, result.output
    assert (workspace / "weekly" / "2026-W02.md").exists()

    result = invoke(workspace, "weekly", "generate", "2026-3")
    assert result.exit_code == 1
    assert "Invalid date value" in result.output


def test_project_commands(workspace: Path) -> None:
    """Test creating a project and changing its status."""
    result = invoke(workspace, "project", "new", "Speech Model", "--repo", "acme/speech")
    assert result.exit_code == 0, result.output
    assert (workspace / "projects" / "speech-model.md").exists()

    result = invoke(workspace, "project", "status", "Speech Model", "Done")
    assert result.exit_code == 0, result.output
    assert "is now Done" in result.output

    result = invoke(workspace, "project", "list", "--status", "Done")
    assert "Speech Model  [Done]  software  https://github.com/acme/speech" in result.output

    result = invoke(workspace, "project", "status", "Speech Model", "Paused")
    assert result.exit_code == 1
    assert "Invalid project status" in result.output


def test_project_new_rejects_unusable_name(workspace: Path) -> None:
    result = invoke(workspace, "project", "new", "!!!", "--repo", "acme/a")
    assert result.exit_code == 1
    assert "no usable characters" in result.output

    result = invoke(workspace, "project", "new", "Alpha", "--repo", " ")
    assert result.exit_code == 1
    assert "repository cannot be empty" in result.output
    assert list((workspace / "projects").iterdir()) == []


def test_malformed_config_section(tmp_path: Path) -> None:
    (tmp_path / CONFIG_FILENAME).write_text("directories: logs\n", encoding="utf-8")

    result = invoke(tmp_path, "daily", "list")
    assert result.exit_code == 1
    assert "must be a mapping" in result.output
