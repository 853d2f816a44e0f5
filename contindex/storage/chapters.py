"""Chapter files, context directory scans and source backups on disk."""

import logging
from collections.abc import Iterable
from pathlib import Path

from contindex.models.chapter import CHAPTER_SUFFIX, ChapterRecord
from contindex.validation import sanitize_file_name, validate_directory_writable

logger = logging.getLogger(__name__)


def render_chapter(chapter: ChapterRecord) -> str:
    """Wrap a chapter's content under a title header."""
    return f"# {chapter.identifier}\n\n{chapter.content}\n"


def write_chapters(context_dir: str | Path, chapters: Iterable[ChapterRecord]) -> list[Path]:
    """Write one file per chapter into an existing directory.

    Files are written in order; an existing file with the same name is
    overwritten. A failed write aborts the remaining chapters and leaves
    earlier files in place.

    Args:
        context_dir: Destination directory.
        chapters: Chapters to persist.

    Returns:
        Paths of the written files, in order.
    """
    directory = Path(context_dir)
    written: list[Path] = []

    for chapter in chapters:
        path = directory / chapter.file_name
        path.write_text(render_chapter(chapter), encoding="utf-8")
        logger.debug("Wrote chapter %s (%d words)", path, chapter.word_count)
        written.append(path)

    return written


def scan_context_directory(context_dir: str | Path) -> list[ChapterRecord]:
    """List the chapter files in a directory, by file name.

    Only identifiers are recovered; file contents are not read.

    Args:
        context_dir: Directory holding chapter files.

    Returns:
        Identifier-only chapter records for every ``*.md`` file with a
        non-empty name before the suffix.
    """
    directory = Path(context_dir)
    chapters: list[ChapterRecord] = []

    for entry in sorted(directory.iterdir(), key=lambda p: p.name):
        if not entry.is_file() or not entry.name.endswith(CHAPTER_SUFFIX):
            continue
        identifier = entry.name[: -len(CHAPTER_SUFFIX)]
        if not identifier:
            logger.debug("Skipping %s: no identifier before the suffix", entry)
            continue
        chapters.append(ChapterRecord(identifier=identifier))

    logger.debug("Found %d chapter files in %s", len(chapters), directory)
    return chapters


def create_backup(source_path: str | Path, backup_dir: str | Path) -> Path:
    """Copy a source document into the backup directory.

    The copy keeps the (sanitized) file name. If a backup of that name
    already exists, the byte length of the source is added to the name
    instead of overwriting it.

    Args:
        source_path: Document to back up.
        backup_dir: Directory for backups; created if missing.

    Returns:
        Path of the backup file.
    """
    validate_directory_writable(backup_dir)

    source = Path(source_path)
    content = source.read_bytes()

    safe_name = sanitize_file_name(source.name)
    backup_path = Path(backup_dir) / safe_name
    if backup_path.exists():
        stem, suffix = Path(safe_name).stem, Path(safe_name).suffix
        backup_path = Path(backup_dir) / f"{stem}_backup_{len(content)}{suffix}"

    backup_path.write_bytes(content)
    logger.info("Created backup: %s", backup_path)
    return backup_path
