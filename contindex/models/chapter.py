"""Chapter data model."""

from pydantic import BaseModel, ConfigDict, Field

CHAPTER_SUFFIX = ".md"


class ChapterRecord(BaseModel):
    """A chapter file derived from one retained section.

    Records built by a scan of an existing context directory only carry
    the identifier; content and metadata stay at their defaults.
    """

    model_config = ConfigDict(frozen=True)

    identifier: str
    content: str = ""
    word_count: int = 0
    token_estimate: int = 0
    summary: str = ""
    key_terms: tuple[str, ...] = Field(default_factory=tuple)

    @property
    def file_name(self) -> str:
        return self.identifier + CHAPTER_SUFFIX
