"""Data models for contindex."""

from contindex.models.chapter import ChapterRecord
from contindex.models.document import SourceDocument
from contindex.models.project import (
    ConvertResult,
    InitResult,
    ProjectLayout,
    UpdateResult,
)
from contindex.models.section import Section, SectionMetadata
from contindex.models.template import TemplateInfo

__all__ = [
    "ChapterRecord",
    "ConvertResult",
    "InitResult",
    "ProjectLayout",
    "Section",
    "SectionMetadata",
    "SourceDocument",
    "TemplateInfo",
    "UpdateResult",
]
