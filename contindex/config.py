"""Configuration loader for contindex."""

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_CONFIG_PATH = "contindex.yaml"

LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class AppInfo(BaseModel):
    """Application metadata."""

    name: str = "contindex"
    version: str = "0.0.3"


class ProjectConfig(BaseModel):
    """Defaults for the index/chapter layout of a project."""

    template: str = "claude"
    context_dir: str = "context"
    backup_dir: str = "backup"
    create_backup: bool = True


class SegmentationConfig(BaseModel):
    """Header-based segmentation configuration."""

    min_word_count: int = 10


class NamingConfig(BaseModel):
    """Chapter identifier configuration."""

    max_identifier_length: int = 60
    default_identifier: str = "general-context"
    deduplicate: bool = True


class SummaryConfig(BaseModel):
    """Chapter summary and size estimation configuration."""

    max_length: int = 100
    min_sentence_length: int = 10
    chars_per_token: int = 4


class LimitsConfig(BaseModel):
    """Input validation limits."""

    max_file_size_bytes: int = 50 * 1024 * 1024
    max_path_length: int = 255
    max_project_name_length: int = 100
    max_template_name_length: int = 50
    max_file_name_length: int = 100
    binary_threshold: float = 0.3
    binary_check_bytes: int = 512


class LoggingConfig(BaseModel):
    """Logging configuration for the command line."""

    model_config = ConfigDict(validate_assignment=True)

    level: str = "WARNING"
    format: str = "%(levelname)s %(name)s: %(message)s"

    @field_validator("level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(
                f"invalid log level '{value}', expected one of {', '.join(LOG_LEVELS)}"
            )
        return level


class AppConfig(BaseModel):
    """Root application configuration."""

    app: AppInfo = Field(default_factory=AppInfo)
    project: ProjectConfig = Field(default_factory=ProjectConfig)
    segmentation: SegmentationConfig = Field(default_factory=SegmentationConfig)
    naming: NamingConfig = Field(default_factory=NamingConfig)
    summary: SummaryConfig = Field(default_factory=SummaryConfig)
    limits: LimitsConfig = Field(default_factory=LimitsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_config(config_path: str | Path = DEFAULT_CONFIG_PATH) -> AppConfig:
    """Load configuration from a YAML file and environment variables.

    Args:
        config_path: Path to the YAML configuration file. A missing file
            leaves every section at its defaults.

    Returns:
        Fully populated AppConfig instance.
    """
    load_dotenv()

    yaml_data: dict = {}
    config_file = Path(config_path)
    if config_file.exists():
        with open(config_file) as f:
            yaml_data = yaml.safe_load(f) or {}

    config = AppConfig(**yaml_data)

    # Environment overrides
    if template := os.getenv("CONTINDEX_TEMPLATE"):
        config.project.template = template
    if context_dir := os.getenv("CONTINDEX_CONTEXT_DIR"):
        config.project.context_dir = context_dir
    if log_level := os.getenv("CONTINDEX_LOG_LEVEL"):
        config.logging.level = log_level.upper()

    return config
