"""Turns a monolithic document into chapter records."""

import logging
from pathlib import Path

from contindex.config import AppConfig
from contindex.ingestion.describer import DescriptorExtractor
from contindex.ingestion.reader import DocumentReader
from contindex.ingestion.segmenter import Segmenter
from contindex.ingestion.summarizer import MetadataSummarizer
from contindex.models.chapter import ChapterRecord

logger = logging.getLogger(__name__)


class DocumentAnalyzer:
    """Runs segmentation, naming and summarizing in one pass.

    Chapters come back in document order. With ``naming.deduplicate``
    enabled, an identifier already used by an earlier chapter gets a
    ``-2``, ``-3``, ... suffix; otherwise duplicates are returned as is and
    the later chapter file overwrites the earlier one when written.

    Args:
        config: Root application config.
    """

    def __init__(self, config: AppConfig | None = None) -> None:
        self._config = config or AppConfig()
        self._reader = DocumentReader(self._config.limits)
        self._segmenter = Segmenter(self._config.segmentation)
        self._describer = DescriptorExtractor(self._config.naming)
        self._summarizer = MetadataSummarizer(self._config.summary)

    def analyze(self, source_path: str | Path) -> list[ChapterRecord]:
        """Read, validate and analyze a Markdown file.

        Args:
            source_path: Path to the monolithic document.

        Returns:
            Chapter records, possibly empty.
        """
        document = self._reader.read(source_path)
        logger.info(
            "Analyzing %s (%d bytes, %s)",
            document.source_path,
            document.size_bytes,
            document.encoding,
        )
        return self.analyze_text(document.text)

    def analyze_text(self, text: str) -> list[ChapterRecord]:
        """Analyze already loaded document text."""
        chapters: list[ChapterRecord] = []
        used: set[str] = set()

        for section in self._segmenter.segment(text):
            identifier = self._describer.describe(section)
            if self._config.naming.deduplicate:
                identifier = self._unique(identifier, used)
            elif identifier in used:
                logger.warning(
                    "Duplicate chapter identifier '%s' (line %d) will overwrite "
                    "an earlier chapter",
                    identifier,
                    section.start_line,
                )
            used.add(identifier)

            metadata = self._summarizer.summarize(section)
            chapters.append(
                ChapterRecord(
                    identifier=identifier,
                    content=section.body,
                    word_count=metadata.word_count,
                    token_estimate=metadata.token_estimate,
                    summary=metadata.summary,
                    key_terms=tuple(metadata.key_terms),
                )
            )

        logger.info("Generated %d chapters", len(chapters))
        return chapters

    def _unique(self, identifier: str, used: set[str]) -> str:
        """Suffix a repeated identifier with -2, -3, ... within the length cap."""
        if identifier not in used:
            return identifier

        max_length = self._config.naming.max_identifier_length
        n = 2
        while True:
            suffix = f"-{n}"
            candidate = identifier[: max_length - len(suffix)].rstrip("-") + suffix
            if candidate not in used:
                break
            n += 1

        logger.debug("Identifier '%s' already used, renamed to '%s'", identifier, candidate)
        return candidate
