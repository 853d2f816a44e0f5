"""Index template data models."""

from pydantic import BaseModel, Field


class TemplateInfo(BaseModel):
    """A built-in index template and where its index file lives."""

    name: str
    description: str
    main_file: str  # e.g. "CLAUDE.md"
    sub_dir: str = ""  # e.g. ".github" for copilot
    compatible_tools: list[str] = Field(default_factory=list)
    content: str = ""  # Raw template text, filled in on request

    @property
    def relative_path(self) -> str:
        if self.sub_dir:
            return f"{self.sub_dir}/{self.main_file}"
        return self.main_file
