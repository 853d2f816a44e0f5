"""Source document data model."""

from pydantic import BaseModel


class SourceDocument(BaseModel):
    """A monolithic Markdown document read from disk."""

    source_path: str
    text: str
    encoding: str = "utf-8"
    size_bytes: int = 0
