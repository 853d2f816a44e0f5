"""Project layout and workflow result models."""

from pathlib import Path

from pydantic import BaseModel, Field

from contindex.models.chapter import ChapterRecord


class ProjectLayout(BaseModel):
    """Where a project's index file and chapter directory live."""

    project_root: Path
    template: str
    context_dir_name: str = "context"
    index_file: Path

    @property
    def context_dir(self) -> Path:
        return self.project_root / self.context_dir_name


class InitResult(BaseModel):
    """Outcome of initializing a fresh project."""

    layout: ProjectLayout
    gitkeep_created: bool = True


class ConvertResult(BaseModel):
    """Outcome of converting a monolithic document."""

    source_path: Path
    layout: ProjectLayout
    chapters: list[ChapterRecord] = Field(default_factory=list)
    chapter_paths: list[Path] = Field(default_factory=list)
    backup_path: Path | None = None
    dry_run: bool = False

    @property
    def total_words(self) -> int:
        return sum(c.word_count for c in self.chapters)

    @property
    def total_tokens(self) -> int:
        return sum(c.token_estimate for c in self.chapters)

    @property
    def average_tokens(self) -> int:
        if not self.chapters:
            return 0
        return self.total_tokens // len(self.chapters)


class UpdateResult(BaseModel):
    """Outcome of re-synchronizing an index with its chapter directory."""

    layout: ProjectLayout
    chapters: list[ChapterRecord] = Field(default_factory=list)
    updated: bool = False
