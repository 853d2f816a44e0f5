"""Header-based segmentation of Markdown documents."""

import logging
from collections.abc import Iterator

from contindex.config import SegmentationConfig
from contindex.models.section import Section

logger = logging.getLogger(__name__)

HEADER_MARKER = "##"


def is_section_header(line: str) -> bool:
    """Return True for ``##`` (or deeper) headers; ``#`` alone is not a boundary."""
    return line.strip().startswith(HEADER_MARKER)


def iter_lines(text: str) -> Iterator[str]:
    """Yield the lines of ``text`` split on LF only, with a trailing CR removed.

    Other Unicode line separators (form feed, U+2028, ...) stay inside the
    line they appear in.
    """
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    for line in lines:
        yield line.removesuffix("\r")


def count_words(text: str) -> int:
    """Count whitespace-delimited tokens."""
    return len(text.split())


class Segmenter:
    """Splits a document into sections at ``##`` header boundaries.

    Every ``##``, ``###``, ... header is an equivalent boundary. Text before
    the first header is discarded, and sections whose body has fewer than
    ``min_word_count`` words are dropped rather than merged into a
    neighbour.

    Args:
        config: SegmentationConfig with the minimum word count.
    """

    def __init__(self, config: SegmentationConfig | None = None) -> None:
        self._config = config or SegmentationConfig()

    def segment(self, text: str) -> Iterator[Section]:
        """Yield the retained sections of ``text`` in document order.

        Args:
            text: Raw document text.

        Yields:
            Section objects with at least ``min_word_count`` words.
        """
        title: str | None = None
        start_line = 0
        buffer: list[str] = []
        line_num = 0

        for line_num, line in enumerate(iter_lines(text), start=1):
            if is_section_header(line):
                if title is not None:
                    section = self._close(title, buffer, start_line, line_num - 1)
                    if section is not None:
                        yield section

                title = line.strip().lstrip("#").strip()
                start_line = line_num
                buffer = []
            elif title is not None:
                buffer.append(line)

        if title is not None:
            section = self._close(title, buffer, start_line, line_num)
            if section is not None:
                yield section

    def _close(
        self, title: str, lines: list[str], start_line: int, end_line: int
    ) -> Section | None:
        """Build the Section for a finished header, or None if it is too small."""
        body = "\n".join(lines).strip()
        word_count = count_words(body)

        if word_count < self._config.min_word_count:
            logger.debug(
                "Dropping section '%s' (lines %d-%d): %d words < %d",
                title,
                start_line,
                end_line,
                word_count,
                self._config.min_word_count,
            )
            return None

        return Section(
            title=title,
            body=body,
            start_line=start_line,
            end_line=end_line,
            word_count=word_count,
        )
