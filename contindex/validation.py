"""Input validation for paths, source documents and names."""

import logging
import os
import re
from pathlib import Path

from contindex.config import LimitsConfig
from contindex.errors import ValidationError

logger = logging.getLogger(__name__)

MARKDOWN_EXTENSIONS: tuple[str, ...] = (".md", ".markdown")

# Characters that have shell meaning and never belong in a project path
DANGEROUS_CHARS: tuple[str, ...] = (";", "&", "|", "`", "$", "(", ")", "{", "}", "[", "]")

# Characters replaced by sanitize_file_name
UNSAFE_FILE_NAME_CHARS: tuple[str, ...] = ("/", "\\", ":", "*", "?", '"', "<", ">", "|")

WRITE_PROBE_NAME = ".contindex_write_test"

_PROJECT_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9\s_-]+$")
_TEMPLATE_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9-]+$")
_MULTIPLE_DASHES = re.compile(r"-+")

_DEFAULT_LIMITS = LimitsConfig()


def _check_path(path: str | Path, kind: str, limits: LimitsConfig) -> None:
    text = str(path)
    if not text.strip():
        raise ValidationError(kind, text, f"{kind} path cannot be empty")

    if ".." in text:
        raise ValidationError(kind, text, f"path traversal not allowed: {text}")

    for char in DANGEROUS_CHARS:
        if char in text:
            raise ValidationError(
                kind, text, f"dangerous character '{char}' not allowed in path: {text}"
            )

    if len(text) > limits.max_path_length:
        raise ValidationError(
            kind,
            text,
            f"path too long (max {limits.max_path_length} characters): {text}",
        )


def validate_file_path(path: str | Path, limits: LimitsConfig | None = None) -> None:
    """Check that a file path is safe to use.

    Raises:
        ValidationError: If the path is empty, traverses upwards, contains
            shell metacharacters or is too long.
    """
    _check_path(path, "file", limits or _DEFAULT_LIMITS)


def validate_directory_path(
    path: str | Path, limits: LimitsConfig | None = None
) -> None:
    """Check that a directory path is safe to use.

    Raises:
        ValidationError: Same rules as validate_file_path.
    """
    _check_path(path, "directory", limits or _DEFAULT_LIMITS)


def validate_file_exists(path: str | Path, limits: LimitsConfig | None = None) -> None:
    """Check that a path names an existing, readable regular file."""
    validate_file_path(path, limits)

    file_path = Path(path)
    if not file_path.exists():
        raise ValidationError("file", str(path), f"file does not exist: {path}")
    if file_path.is_dir():
        raise ValidationError("file", str(path), f"path is a directory, not a file: {path}")
    if not os.access(file_path, os.R_OK):
        raise ValidationError("file", str(path), f"file is not readable: {path}")


def validate_directory_writable(
    path: str | Path, limits: LimitsConfig | None = None
) -> None:
    """Check that a directory exists (creating it if needed) and is writable.

    Writability is probed by creating and removing a temporary file.

    Raises:
        ValidationError: If the path is unsafe, is not a directory or cannot
            be written to.
    """
    validate_directory_path(path, limits)

    directory = Path(path)
    if not directory.exists():
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ValidationError(
                "directory", str(path), f"cannot create directory: {path} ({e})"
            ) from e
        return

    if not directory.is_dir():
        raise ValidationError("directory", str(path), f"path is not a directory: {path}")

    probe = directory / WRITE_PROBE_NAME
    try:
        probe.touch()
    except OSError as e:
        raise ValidationError(
            "directory", str(path), f"directory is not writable: {path} ({e})"
        ) from e
    finally:
        probe.unlink(missing_ok=True)


def is_binary_content(content: bytes, limits: LimitsConfig | None = None) -> bool:
    """Guess whether raw bytes are binary rather than text.

    Looks at the first ``binary_check_bytes`` bytes and reports binary when
    the share of NUL and control characters (tab, LF and CR excepted)
    exceeds ``binary_threshold``.
    """
    limits = limits or _DEFAULT_LIMITS
    sample = content[: limits.binary_check_bytes]
    if not sample:
        return False

    control = sum(1 for c in sample if c == 0 or (c < 32 and c not in (9, 10, 13)))
    return control / len(sample) > limits.binary_threshold


def validate_markdown_file(path: str | Path, limits: LimitsConfig | None = None) -> None:
    """Check that a path is an existing Markdown text file within size limits.

    Raises:
        ValidationError: If the file is missing, not Markdown, too large or
            looks binary.
    """
    limits = limits or _DEFAULT_LIMITS
    validate_file_exists(path, limits)

    file_path = Path(path)
    if file_path.suffix.lower() not in MARKDOWN_EXTENSIONS:
        raise ValidationError("file", str(path), f"file is not a markdown file: {path}")

    size = file_path.stat().st_size
    if size > limits.max_file_size_bytes:
        max_mb = limits.max_file_size_bytes // (1024 * 1024)
        raise ValidationError(
            "file", str(path), f"markdown file too large (max {max_mb}MB): {path}"
        )

    with open(file_path, "rb") as f:
        head = f.read(limits.binary_check_bytes)
    if is_binary_content(head, limits):
        raise ValidationError(
            "file", str(path), f"file appears to be binary, not text: {path}"
        )

    logger.debug("Validated markdown file %s (%d bytes)", path, size)


def validate_project_name(name: str, limits: LimitsConfig | None = None) -> None:
    """Check a project name: letters, digits, spaces, dashes, underscores."""
    limits = limits or _DEFAULT_LIMITS
    if not name.strip():
        raise ValidationError("project", name, "project name cannot be empty")

    if len(name) > limits.max_project_name_length:
        raise ValidationError(
            "project",
            name,
            f"project name too long (max {limits.max_project_name_length} characters)",
        )

    if not _PROJECT_NAME_PATTERN.match(name):
        raise ValidationError(
            "project",
            name,
            "invalid project name: must contain only letters, numbers, spaces, "
            "dashes, and underscores",
        )


def validate_template_name(name: str, limits: LimitsConfig | None = None) -> None:
    """Check the shape of a template name (letters, digits, dashes)."""
    limits = limits or _DEFAULT_LIMITS
    if not name.strip():
        raise ValidationError("template", name, "template name cannot be empty")

    if not _TEMPLATE_NAME_PATTERN.match(name):
        raise ValidationError(
            "template",
            name,
            "invalid template name: must contain only letters, numbers, and dashes",
        )

    if len(name) > limits.max_template_name_length:
        raise ValidationError(
            "template",
            name,
            f"template name too long (max {limits.max_template_name_length} characters)",
        )


def sanitize_file_name(name: str, limits: LimitsConfig | None = None) -> str:
    """Make a user supplied file name safe to create on disk.

    Args:
        name: Candidate file name.

    Returns:
        The name with path separators and reserved characters replaced by
        dashes, or "unnamed" when nothing usable is left.
    """
    limits = limits or _DEFAULT_LIMITS
    for char in UNSAFE_FILE_NAME_CHARS:
        name = name.replace(char, "-")

    name = _MULTIPLE_DASHES.sub("-", name).strip("-")
    name = name[: limits.max_file_name_length]

    return name or "unnamed"
