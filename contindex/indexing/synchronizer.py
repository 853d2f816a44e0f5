"""Keeps an index document's chapter list in step with the chapter files."""

import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

from contindex.models.chapter import CHAPTER_SUFFIX

logger = logging.getLogger(__name__)

CHAPTER_PLACEHOLDERS: tuple[str, ...] = (
    "(Chapter files will be listed here when you run `contindex update` or `contindex convert`)",
    "(Context files will be listed here when you run `contindex update` or `contindex convert`)",
)


def build_chapter_list(identifiers: Sequence[str], context_dir_name: str) -> str:
    """Render the numbered chapter list that replaces the placeholder.

    Args:
        identifiers: Chapter identifiers in the order they should be listed.
        context_dir_name: Directory name used in the chapter references.

    Returns:
        One ``n. **identifier** - `dir/identifier.md``` line per chapter.
    """
    lines = [
        f"{n}. **{identifier}** - `{context_dir_name}/{identifier}{CHAPTER_SUFFIX}`"
        for n, identifier in enumerate(identifiers, start=1)
    ]
    return "\n".join(lines).strip()


def synchronize(
    index_text: str, identifiers: Sequence[str], context_dir_name: str
) -> str:
    """Replace the chapter placeholder in an index document.

    Only the earliest placeholder occurrence is replaced. A document without
    a placeholder is returned unchanged, so running this twice with the same
    chapters gives the same text as running it once.

    Args:
        index_text: Current index document text.
        identifiers: Chapter identifiers, in listing order.
        context_dir_name: Directory name used in the chapter references.

    Returns:
        The updated index document text.
    """
    found = [
        (position, placeholder)
        for placeholder in CHAPTER_PLACEHOLDERS
        if (position := index_text.find(placeholder)) != -1
    ]
    if not found:
        logger.debug("No chapter placeholder in index document; left unchanged")
        return index_text

    position, placeholder = min(found)
    chapter_list = build_chapter_list(identifiers, context_dir_name)
    return (
        index_text[:position] + chapter_list + index_text[position + len(placeholder):]
    )


def is_stale(
    index_path: str | Path, chapter_paths: Iterable[str | Path], force: bool = False
) -> bool:
    """Decide whether an index document needs regenerating.

    The index is stale when regeneration is forced, when it does not exist,
    or when any chapter file was modified strictly after it. Chapter files
    that cannot be stat'ed are ignored. Timestamps are only as precise as the
    filesystem keeps them.

    Args:
        index_path: Path to the index document.
        chapter_paths: Paths to the chapter files.
        force: Regenerate regardless of timestamps.

    Returns:
        True when the index should be regenerated.
    """
    if force:
        return True

    try:
        index_mtime = Path(index_path).stat().st_mtime_ns
    except FileNotFoundError:
        return True
    except OSError as e:
        logger.warning("Could not check update status of %s: %s", index_path, e)
        return True

    for chapter_path in chapter_paths:
        try:
            chapter_mtime = Path(chapter_path).stat().st_mtime_ns
        except OSError:
            continue
        if chapter_mtime > index_mtime:
            logger.debug("%s is newer than %s", chapter_path, index_path)
            return True

    return False


class IndexSynchronizer:
    """Synchronizes an index file on disk with a set of chapter identifiers.

    Args:
        context_dir_name: Directory name used in the chapter references.
    """

    def __init__(self, context_dir_name: str = "context") -> None:
        self._context_dir_name = context_dir_name

    def synchronize_text(self, index_text: str, identifiers: Sequence[str]) -> str:
        return synchronize(index_text, identifiers, self._context_dir_name)

    def synchronize_file(self, index_path: str | Path, identifiers: Sequence[str]) -> bool:
        """Rewrite the index file with the chapter list.

        Returns:
            True if the file contained a placeholder and was rewritten.
        """
        path = Path(index_path)
        current = path.read_text(encoding="utf-8")
        updated = self.synchronize_text(current, identifiers)
        if updated == current:
            return False

        path.write_text(updated, encoding="utf-8")
        logger.info("Listed %d chapters in %s", len(identifiers), path)
        return True

    def is_stale(
        self,
        index_path: str | Path,
        chapter_paths: Iterable[str | Path],
        force: bool = False,
    ) -> bool:
        return is_stale(index_path, chapter_paths, force)
