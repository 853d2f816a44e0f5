"""Project workflows: init, convert and update."""

import logging
from pathlib import Path

from contindex.config import AppConfig
from contindex.errors import (
    ContextDirectoryNotFoundError,
    DirectoryConflictError,
    ExistingStructureError,
    NoContentError,
)
from contindex.indexing.synchronizer import IndexSynchronizer
from contindex.indexing.templates import TemplateManager, build_layout, validate_template
from contindex.ingestion.analyzer import DocumentAnalyzer
from contindex.models.project import ConvertResult, InitResult, UpdateResult
from contindex.storage.chapters import create_backup, scan_context_directory, write_chapters
from contindex.validation import (
    validate_directory_path,
    validate_directory_writable,
    validate_markdown_file,
    validate_project_name,
)

logger = logging.getLogger(__name__)

GITKEEP = ".gitkeep"


def init_project(
    project_root: str | Path,
    template: str = "generic",
    force: bool = False,
    config: AppConfig | None = None,
) -> InitResult:
    """Set up an empty chapter directory and an index file for a project.

    Args:
        project_root: Project directory.
        template: Built-in template for the index file.
        force: Overwrite an existing index file / reuse an existing
            context directory.
        config: Application config.

    Returns:
        InitResult describing the created layout.

    Raises:
        ValidationError: If the path or template is invalid.
        ExistingStructureError: If the structure exists and force is off.
    """
    config = config or AppConfig()
    limits = config.limits

    validate_directory_path(project_root, limits)
    validate_template(template)
    validate_directory_writable(project_root, limits)

    layout = build_layout(project_root, template, config.project.context_dir)
    logger.debug("Initializing %s", layout)

    if not force:
        if layout.context_dir.exists():
            raise ExistingStructureError(
                f"context directory already exists: {layout.context_dir}\n"
                "Use --force to overwrite"
            )
        if layout.index_file.exists():
            raise ExistingStructureError(
                f"main context file already exists: {layout.index_file}\n"
                "Use --force to overwrite"
            )

    layout.context_dir.mkdir(parents=True, exist_ok=True)

    gitkeep_created = True
    try:
        (layout.context_dir / GITKEEP).touch()
    except OSError as e:
        logger.warning("Could not create %s in %s: %s", GITKEEP, layout.context_dir, e)
        gitkeep_created = False

    TemplateManager(config.app.version).apply(layout)

    return InitResult(layout=layout, gitkeep_created=gitkeep_created)


def _check_directory_conflicts(
    context_dir: Path, backup_dir: Path | None, force: bool
) -> None:
    if context_dir.is_dir():
        existing = [p for p in context_dir.iterdir() if p.name != GITKEEP]
        if existing and not force:
            raise DirectoryConflictError(
                f"context directory '{context_dir}' already exists and contains "
                f"{len(existing)} files - use --context-dir to specify a different "
                "name or --force to overwrite"
            )
        if existing:
            logger.warning(
                "Overwriting existing files in %s/ directory (--force enabled)",
                context_dir,
            )

    if backup_dir is not None and context_dir.resolve() == backup_dir.resolve():
        raise DirectoryConflictError(
            f"context directory and backup directory cannot be the same ('{context_dir}')"
        )


def convert_document(
    source_path: str | Path,
    project_root: str | Path = ".",
    template: str | None = None,
    context_dir: str | None = None,
    backup_dir: str | None = None,
    project_name: str | None = None,
    create_backups: bool | None = None,
    force: bool = False,
    dry_run: bool = False,
    config: AppConfig | None = None,
) -> ConvertResult:
    """Split a monolithic document into chapter files plus an index.

    Steps: validate inputs, back up the source, analyze it into chapters,
    write the chapters, render the index template and list the chapters in
    it. A dry run stops after analysis and writes nothing. Any failure
    aborts the conversion; chapter files already written are left behind.

    Args:
        source_path: Monolithic Markdown document.
        project_root: Directory holding the index file and chapter/backup
            directories.
        template: Index template, defaults to ``project.template``.
        context_dir: Chapter directory name, defaults to ``project.context_dir``.
        backup_dir: Backup directory name, defaults to ``project.backup_dir``.
        project_name: Name shown in the index, defaults to the directory name.
        create_backups: Back up the source, defaults to ``project.create_backup``.
        force: Allow writing into a non-empty chapter directory.
        dry_run: Analyze only.
        config: Application config.

    Returns:
        ConvertResult with the chapters and written paths.

    Raises:
        ValidationError: If an input is invalid.
        DirectoryConflictError: If the output directories clash.
        NoContentError: If the document has no qualifying sections.
    """
    config = config or AppConfig()
    limits = config.limits
    template = template or config.project.template
    context_dir = context_dir or config.project.context_dir
    backup_dir = backup_dir or config.project.backup_dir
    if create_backups is None:
        create_backups = config.project.create_backup

    root = Path(project_root)
    validate_markdown_file(source_path, limits)
    validate_template(template)
    if project_name is not None:
        validate_project_name(project_name, limits)
    if create_backups:
        validate_directory_path(backup_dir, limits)
    validate_directory_path(context_dir, limits)

    layout = build_layout(root, template, context_dir)
    backup_path_dir = root / backup_dir if create_backups else None
    _check_directory_conflicts(layout.context_dir, backup_path_dir, force)

    backup_path = None
    if backup_path_dir is not None and not dry_run:
        backup_path = create_backup(source_path, backup_path_dir)

    chapters = DocumentAnalyzer(config).analyze(source_path)
    if not chapters:
        raise NoContentError("no content sections found in source file")

    result = ConvertResult(
        source_path=Path(source_path),
        layout=layout,
        chapters=chapters,
        backup_path=backup_path,
        dry_run=dry_run,
    )
    if dry_run:
        return result

    layout.context_dir.mkdir(parents=True, exist_ok=True)
    result.chapter_paths = write_chapters(layout.context_dir, chapters)

    TemplateManager(config.app.version).apply(layout, project_name)
    IndexSynchronizer(context_dir).synchronize_file(
        layout.index_file, [c.identifier for c in chapters]
    )

    logger.info(
        "Converted %s into %d chapters (%d words, ~%d tokens)",
        source_path,
        len(chapters),
        result.total_words,
        result.total_tokens,
    )
    return result


def update_index(
    project_root: str | Path = ".",
    template: str | None = None,
    context_dir: str | None = None,
    force: bool = False,
    config: AppConfig | None = None,
) -> UpdateResult:
    """Regenerate an index file from the chapter files currently on disk.

    Chapters are taken from the file names in the chapter directory, sorted
    by name; their content is not re-analyzed. Unless forced, nothing is
    written when no chapter file is newer than the index.

    Args:
        project_root: Project directory.
        template: Index template, defaults to ``project.template``.
        context_dir: Chapter directory name, defaults to ``project.context_dir``.
        force: Regenerate even when the index looks up to date.
        config: Application config.

    Returns:
        UpdateResult; ``updated`` is False when nothing was written.

    Raises:
        ValidationError: If the path or template is invalid.
        ContextDirectoryNotFoundError: If the chapter directory is missing.
    """
    config = config or AppConfig()
    template = template or config.project.template
    context_dir = context_dir or config.project.context_dir

    validate_directory_path(project_root, config.limits)
    validate_template(template)

    layout = build_layout(project_root, template, context_dir)
    if not layout.context_dir.is_dir():
        raise ContextDirectoryNotFoundError(
            f"context directory not found: {layout.context_dir}\n"
            "Run 'contindex init' to set up the structure"
        )

    chapters = scan_context_directory(layout.context_dir)
    result = UpdateResult(layout=layout, chapters=chapters)
    if not chapters:
        logger.info("No chapter files found in %s", layout.context_dir)
        return result

    synchronizer = IndexSynchronizer(context_dir)
    chapter_paths = [layout.context_dir / c.file_name for c in chapters]
    if not synchronizer.is_stale(layout.index_file, chapter_paths, force):
        logger.info("Index file %s is up to date", layout.index_file)
        return result

    TemplateManager(config.app.version).apply(layout)
    synchronizer.synchronize_file(layout.index_file, [c.identifier for c in chapters])

    result.updated = True
    return result
