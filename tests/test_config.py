"""Tests for configuration loading."""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from contindex.config import AppConfig, LoggingConfig, load_config


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("CONTINDEX_TEMPLATE", "CONTINDEX_CONTEXT_DIR", "CONTINDEX_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


class TestAppConfigDefaults:
    """Test that AppConfig provides sensible defaults."""

    def test_default_config_creates_successfully(self) -> None:
        config = AppConfig()
        assert config.app.name == "contindex"
        assert config.app.version == "0.0.3"

    def test_default_project_config(self) -> None:
        config = AppConfig()
        assert config.project.template == "claude"
        assert config.project.context_dir == "context"
        assert config.project.backup_dir == "backup"
        assert config.project.create_backup is True

    def test_default_segmentation_and_naming(self) -> None:
        config = AppConfig()
        assert config.segmentation.min_word_count == 10
        assert config.naming.max_identifier_length == 60
        assert config.naming.default_identifier == "general-context"
        assert config.naming.deduplicate is True

    def test_default_summary_config(self) -> None:
        config = AppConfig()
        assert config.summary.max_length == 100
        assert config.summary.min_sentence_length == 10
        assert config.summary.chars_per_token == 4

    def test_default_limits(self) -> None:
        config = AppConfig()
        assert config.limits.max_file_size_bytes == 50 * 1024 * 1024
        assert config.limits.max_path_length == 255
        assert config.limits.binary_threshold == 0.3
        assert config.limits.binary_check_bytes == 512

    def test_default_logging(self) -> None:
        config = AppConfig()
        assert config.logging.level == "WARNING"


class TestLoadConfig:
    """Test loading config from YAML files."""

    def test_load_from_yaml(self, tmp_path: Path) -> None:
        yaml_data = {
            "project": {"template": "cursor", "context_dir": "chapters"},
            "segmentation": {"min_word_count": 25},
        }
        config_file = tmp_path / "contindex.yaml"
        config_file.write_text(yaml.dump(yaml_data))

        config = load_config(config_file)
        assert config.project.template == "cursor"
        assert config.project.context_dir == "chapters"
        assert config.segmentation.min_word_count == 25
        # Other fields keep defaults
        assert config.project.backup_dir == "backup"
        assert config.naming.max_identifier_length == 60

    def test_load_missing_yaml_uses_defaults(self, tmp_path: Path) -> None:
        config = load_config(tmp_path / "nonexistent.yaml")
        assert config.app.name == "contindex"

    def test_load_empty_yaml_uses_defaults(self, tmp_path: Path) -> None:
        config_file = tmp_path / "contindex.yaml"
        config_file.write_text("")
        config = load_config(config_file)
        assert config.project.template == "claude"

    def test_env_vars_override_yaml(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        config_file = tmp_path / "contindex.yaml"
        config_file.write_text(yaml.dump({"project": {"template": "cursor"}}))

        monkeypatch.setenv("CONTINDEX_TEMPLATE", "gemini")
        monkeypatch.setenv("CONTINDEX_CONTEXT_DIR", "docs")
        monkeypatch.setenv("CONTINDEX_LOG_LEVEL", "debug")

        config = load_config(config_file)
        assert config.project.template == "gemini"
        assert config.project.context_dir == "docs"
        assert config.logging.level == "DEBUG"

    def test_load_project_config_yaml(self) -> None:
        """Test loading the project's own contindex.yaml."""
        config_path = Path(__file__).parent.parent / "contindex.yaml"
        config = load_config(config_path)
        assert config.app.name == "contindex"
        assert config.project.template == "claude"
        assert config.naming.default_identifier == "general-context"


class TestLoggingLevel:
    """Test validation of the configured log level."""

    def test_level_is_upper_cased(self) -> None:
        assert LoggingConfig(level="debug").level == "DEBUG"

    def test_invalid_level_rejected(self) -> None:
        with pytest.raises(ValidationError, match="invalid log level 'verbose'"):
            LoggingConfig(level="verbose")

    def test_invalid_level_in_yaml(self, tmp_path: Path) -> None:
        config_file = tmp_path / "contindex.yaml"
        config_file.write_text(yaml.dump({"logging": {"level": "loud"}}))
        with pytest.raises(ValidationError):
            load_config(config_file)

    def test_invalid_level_in_env(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("CONTINDEX_LOG_LEVEL", "verbose")
        with pytest.raises(ValidationError, match="invalid log level"):
            load_config(tmp_path / "missing.yaml")
