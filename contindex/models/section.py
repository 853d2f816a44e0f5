"""Section data models produced by segmentation."""

from pydantic import BaseModel, Field


class Section(BaseModel):
    """A span of the source document opened by a ``##`` header.

    Line numbers are 1-based and inclusive: ``start_line`` is the header
    line, ``end_line`` the last line before the next header (or the last
    line of the document).
    """

    title: str  # Header text with the leading '#' markers removed
    body: str  # Text between this header and the next, stripped
    start_line: int
    end_line: int
    word_count: int = 0


class SectionMetadata(BaseModel):
    """Derived size and summary information for one section."""

    summary: str
    key_terms: list[str] = Field(default_factory=list)
    token_estimate: int = 0
    word_count: int = 0
