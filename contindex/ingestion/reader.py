"""Reader for monolithic Markdown context files."""

import logging
from pathlib import Path

import chardet

from contindex.config import LimitsConfig
from contindex.models.document import SourceDocument
from contindex.validation import validate_markdown_file

logger = logging.getLogger(__name__)


class DocumentReader:
    """Validates and decodes a Markdown document from disk.

    Args:
        limits: Size and binary-detection limits applied before reading.
    """

    def __init__(self, limits: LimitsConfig | None = None) -> None:
        self._limits = limits or LimitsConfig()

    def read(self, file_path: str | Path) -> SourceDocument:
        """Read a Markdown file into a SourceDocument.

        Args:
            file_path: Path to the Markdown file.

        Returns:
            The decoded document.

        Raises:
            ValidationError: If the file is missing, not Markdown, too large
                or binary.
            OSError: If the file cannot be read.
        """
        path = Path(file_path)
        validate_markdown_file(path, self._limits)

        raw_bytes = path.read_bytes()
        text, encoding = self._decode(raw_bytes, path)

        return SourceDocument(
            source_path=str(path),
            text=text,
            encoding=encoding,
            size_bytes=len(raw_bytes),
        )

    def _decode(self, raw_bytes: bytes, file_path: Path) -> tuple[str, str]:
        """Decode file bytes, trying UTF-8 before encoding detection.

        Args:
            raw_bytes: The file content.
            file_path: Used for log messages only.

        Returns:
            The decoded text and the encoding that produced it.
        """
        try:
            return raw_bytes.decode("utf-8"), "utf-8"
        except UnicodeDecodeError:
            pass

        detected = chardet.detect(raw_bytes)
        encoding = detected.get("encoding") or "utf-8"
        confidence = detected.get("confidence") or 0

        if confidence < 0.7:
            logger.warning(
                "Low confidence encoding detection for %s: %s (%.0f%%)",
                file_path,
                encoding,
                confidence * 100,
            )

        try:
            return raw_bytes.decode(encoding), encoding
        except (UnicodeDecodeError, LookupError):
            # Last resort: cp1252, then lossy UTF-8
            try:
                return raw_bytes.decode("cp1252"), "cp1252"
            except UnicodeDecodeError:
                logger.error("Failed to decode file: %s", file_path)
                return raw_bytes.decode("utf-8", errors="replace"), "utf-8"
