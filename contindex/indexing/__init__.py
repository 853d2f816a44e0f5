"""Index documents: templates and chapter list synchronization."""

from contindex.indexing.synchronizer import (
    CHAPTER_PLACEHOLDERS,
    IndexSynchronizer,
    build_chapter_list,
    is_stale,
    synchronize,
)
from contindex.indexing.templates import (
    TEMPLATES,
    TemplateManager,
    build_layout,
    index_file_for,
    validate_template,
)

__all__ = [
    "CHAPTER_PLACEHOLDERS",
    "IndexSynchronizer",
    "TEMPLATES",
    "TemplateManager",
    "build_chapter_list",
    "build_layout",
    "index_file_for",
    "is_stale",
    "synchronize",
    "validate_template",
]
