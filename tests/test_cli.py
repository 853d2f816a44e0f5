"""Tests for the command line interface."""

import os
from pathlib import Path

import pytest
from typer.testing import CliRunner

from contindex.cli import app

PADDING = "plain words that carry no signal about any topic here"

SOURCE = f"""# Service Handbook

## Auth Flow
Users sign in with oauth and receive a jwt token after login. {PADDING}

## Data Layer
Tables live in postgres and the schema is versioned with migrations. {PADDING}
"""

runner = CliRunner()


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("CONTINDEX_TEMPLATE", "CONTINDEX_CONTEXT_DIR", "CONTINDEX_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def project(tmp_path: Path) -> Path:
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def source(tmp_path: Path) -> Path:
    path = tmp_path / "CLAUDE.md"
    path.write_text(SOURCE, encoding="utf-8")
    return path


def _invoke(project: Path, *args: str):
    missing_config = project.parent / "no-config.yaml"
    return runner.invoke(app, ["--path", str(project), "--config", str(missing_config), *args])


class TestGlobalOptions:
    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "contindex 0.0.3" in result.output

    def test_help(self) -> None:
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for command in ("init", "convert", "update", "template"):
            assert command in result.output

    def test_invalid_log_level_from_env(
        self, project: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("CONTINDEX_LOG_LEVEL", "verbose")
        result = _invoke(project, "template", "list")

        assert result.exit_code == 1
        assert "Error:" in result.output
        assert "invalid log level" in result.output

    def test_invalid_log_level_from_config(self, project: Path, tmp_path: Path) -> None:
        config = tmp_path / "contindex.yaml"
        config.write_text("logging:\n  level: loud\n", encoding="utf-8")

        result = runner.invoke(
            app, ["--path", str(project), "--config", str(config), "template", "list"]
        )
        assert result.exit_code == 1
        assert "invalid log level 'loud'" in result.output


class TestInitCommand:
    def test_init(self, project: Path) -> None:
        result = _invoke(project, "init", "--template", "claude")

        assert result.exit_code == 0, result.output
        assert "Successfully initialized" in result.output
        assert (project / "CLAUDE.md").is_file()
        assert (project / "context" / ".gitkeep").is_file()

    def test_init_twice_fails(self, project: Path) -> None:
        _invoke(project, "init", "-t", "claude")
        result = _invoke(project, "init", "-t", "claude")

        assert result.exit_code == 1
        assert "Error: context directory already exists" in result.output

    def test_init_force(self, project: Path) -> None:
        _invoke(project, "init", "-t", "claude")
        result = _invoke(project, "init", "-t", "claude", "--force")
        assert result.exit_code == 0, result.output

    def test_unknown_template(self, project: Path) -> None:
        result = _invoke(project, "init", "--template", "vim")
        assert result.exit_code == 1
        assert "Error: unsupported template: vim" in result.output


class TestConvertCommand:
    def test_convert(self, project: Path, source: Path) -> None:
        result = _invoke(project, "convert", "--source", str(source), "--template", "claude")

        assert result.exit_code == 0, result.output
        assert "Successfully converted" in result.output
        assert "Created 2 chapter files in context/ directory" in result.output
        assert (project / "context" / "auth-flow-oauth-authentication.md").is_file()
        assert (project / "backup" / "CLAUDE.md").is_file()
        index = (project / "CLAUDE.md").read_text(encoding="utf-8")
        assert "2. **data-layer-postgresql-database**" in index

    def test_convert_dry_run(self, project: Path, source: Path) -> None:
        result = _invoke(project, "convert", "--source", str(source), "--dry-run")

        assert result.exit_code == 0, result.output
        assert "PREVIEW: Would create 2 context files:" in result.output
        assert "1. auth-flow-oauth-authentication.md" in result.output
        assert "Key terms: jwt, oauth" in result.output
        assert "Total estimated tokens:" in result.output
        assert list(project.iterdir()) == []

    def test_convert_no_backup(self, project: Path, source: Path) -> None:
        result = _invoke(project, "convert", "--source", str(source), "--no-backup")

        assert result.exit_code == 0, result.output
        assert "Backup: skipped" in result.output
        assert not (project / "backup").exists()

    def test_convert_custom_dirs(self, project: Path, source: Path) -> None:
        result = _invoke(
            project,
            "convert",
            "--source",
            str(source),
            "--context-dir",
            "docs",
            "--backup-dir",
            "originals",
        )

        assert result.exit_code == 0, result.output
        assert (project / "docs" / "data-layer-postgresql-database.md").is_file()
        assert (project / "originals" / "CLAUDE.md").is_file()

    def test_missing_source(self, project: Path, tmp_path: Path) -> None:
        result = _invoke(project, "convert", "--source", str(tmp_path / "missing.md"))
        assert result.exit_code == 1
        assert "Error: file does not exist" in result.output

    def test_no_content(self, project: Path, tmp_path: Path) -> None:
        empty = tmp_path / "empty.md"
        empty.write_text("# Title\n\nshort\n", encoding="utf-8")

        result = _invoke(project, "convert", "--source", str(empty))
        assert result.exit_code == 1
        assert "Error: no content sections found in source file" in result.output

    def test_conflict(self, project: Path, source: Path) -> None:
        (project / "context").mkdir()
        (project / "context" / "existing.md").write_text("x", encoding="utf-8")

        result = _invoke(project, "convert", "--source", str(source))
        assert result.exit_code == 1
        assert "--force" in result.output

    def test_template_from_config(self, project: Path, source: Path, tmp_path: Path) -> None:
        config = tmp_path / "contindex.yaml"
        config.write_text("project:\n  template: gemini\n", encoding="utf-8")

        result = runner.invoke(
            app,
            ["--path", str(project), "--config", str(config), "convert", "--source", str(source)],
        )
        assert result.exit_code == 0, result.output
        assert (project / "GEMINI.md").is_file()


class TestUpdateCommand:
    def test_update(self, project: Path) -> None:
        _invoke(project, "init", "-t", "claude")
        (project / "context" / "setup.md").write_text("# setup\n", encoding="utf-8")

        result = _invoke(project, "update", "--template", "claude", "--force")

        assert result.exit_code == 0, result.output
        assert "Successfully updated index file" in result.output
        assert "1. context/setup.md" in result.output
        assert "**setup** - `context/setup.md`" in (project / "CLAUDE.md").read_text(
            encoding="utf-8"
        )

    def test_no_chapters(self, project: Path) -> None:
        _invoke(project, "init", "-t", "claude")
        result = _invoke(project, "update", "--template", "claude")

        assert result.exit_code == 0
        assert "No chapter files found in" in result.output

    def test_up_to_date(self, project: Path, source: Path) -> None:
        _invoke(project, "convert", "--source", str(source), "--template", "claude")
        index = project / "CLAUDE.md"
        newest = max(p.stat().st_mtime_ns for p in (project / "context").iterdir())
        later = newest + 10_000_000_000
        os.utime(index, ns=(later, later))

        result = _invoke(project, "update", "--template", "claude")
        assert result.exit_code == 0
        assert "Index file is up to date" in result.output

    def test_missing_context_dir(self, project: Path) -> None:
        result = _invoke(project, "update")
        assert result.exit_code == 1
        assert "Error: context directory not found" in result.output


class TestTemplateCommands:
    def test_list(self, project: Path) -> None:
        result = _invoke(project, "template", "list")

        assert result.exit_code == 0
        for name in ("generic", "claude", "cursor", "copilot", "gemini"):
            assert name in result.output
        assert ".github/copilot-instructions.md" in result.output

    def test_show_preview(self, project: Path) -> None:
        result = _invoke(project, "template", "show", "claude")

        assert result.exit_code == 0
        assert "--- Template Preview ---" in result.output
        assert "sample-project" in result.output

    def test_show_raw(self, project: Path) -> None:
        result = _invoke(project, "template", "show", "claude", "--raw")

        assert result.exit_code == 0
        assert "--- Raw Template Content ---" in result.output
        assert "$project_name" in result.output

    def test_info(self, project: Path) -> None:
        result = _invoke(project, "template", "info", "copilot")

        assert result.exit_code == 0
        assert "Main file: copilot-instructions.md" in result.output
        assert "Subdirectory: .github" in result.output
        assert "GitHub Copilot (primary)" in result.output

    def test_unknown(self, project: Path) -> None:
        result = _invoke(project, "template", "info", "vim")
        assert result.exit_code == 1
        assert "Error: unsupported template: vim" in result.output
