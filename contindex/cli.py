"""Command line interface for contindex."""

import logging
from pathlib import Path
from typing import NoReturn

import typer
import yaml

from contindex.config import DEFAULT_CONFIG_PATH, AppConfig, load_config
from contindex.errors import ContindexError
from contindex.indexing.templates import TemplateManager
from contindex.models.project import ConvertResult
from contindex.project import convert_document, init_project, update_index

app = typer.Typer(
    help="Transform monolithic AI context into index-chapter architecture.",
    no_args_is_help=True,
)
template_app = typer.Typer(help="Manage context file templates.", no_args_is_help=True)
app.add_typer(template_app, name="template")


class CliState:
    """Options shared by every command."""

    def __init__(self, config: AppConfig, project_path: Path) -> None:
        self.config = config
        self.project_path = project_path


def _state(ctx: typer.Context) -> CliState:
    return ctx.obj


def _fail(error: Exception) -> NoReturn:
    typer.echo(f"Error: {error}", err=True)
    raise typer.Exit(code=1)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"contindex {AppConfig().app.version}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    path: Path = typer.Option(Path("."), "--path", "-p", help="Project directory path"),
    config_file: Path = typer.Option(
        Path(DEFAULT_CONFIG_PATH), "--config", help="YAML configuration file"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version information",
    ),
) -> None:
    """Split monolithic context files into an index plus chapter files."""
    try:
        config = load_config(config_file)
    except (ValueError, OSError, yaml.YAMLError) as e:
        _fail(e)

    level = "DEBUG" if verbose else config.logging.level
    logging.basicConfig(level=level, format=config.logging.format)
    ctx.obj = CliState(config=config, project_path=path)


@app.command()
def init(
    ctx: typer.Context,
    template: str = typer.Option(
        "generic", "--template", "-t", help="Template type (generic, claude, cursor, copilot, gemini)"
    ),
    force: bool = typer.Option(
        False, "--force", "-f", help="Force initialization even if structure already exists"
    ),
) -> None:
    """Initialize index-chapter structure for a fresh project."""
    state = _state(ctx)
    try:
        result = init_project(state.project_path, template, force, state.config)
    except (ContindexError, OSError) as e:
        _fail(e)

    typer.echo("✓ Successfully initialized contindex structure\n")
    typer.echo("Created:")
    typer.echo(f"  {result.layout.context_dir}/     # Directory for individual context files")
    typer.echo(f"  {result.layout.index_file}     # Main context index file\n")
    typer.echo("Next steps:")
    typer.echo(
        "1. Use 'contindex convert --source=YOUR_FILE.md' to convert existing monolithic files"
    )
    typer.echo("2. Or manually add descriptively-named .md files to the context/ directory")
    typer.echo("3. Run 'contindex update' to list them in the index\n")
    typer.echo(f"Template: {result.layout.template}")


def _print_preview(result: ConvertResult) -> None:
    typer.echo(f"\nPREVIEW: Would create {len(result.chapters)} context files:\n")
    for i, chapter in enumerate(result.chapters, start=1):
        typer.echo(f"{i}. {chapter.file_name}")
        typer.echo(f"   Summary: {chapter.summary}")
        typer.echo(f"   Size: {chapter.word_count} words, ~{chapter.token_estimate} tokens")
        if chapter.key_terms:
            typer.echo(f"   Key terms: {', '.join(chapter.key_terms)}")
        typer.echo("")
    typer.echo(f"Total estimated tokens: {result.total_tokens}")
    typer.echo(f"Average tokens per file: {result.average_tokens}")


def _print_conversion(result: ConvertResult) -> None:
    layout = result.layout
    typer.echo(
        f"\nSuccessfully converted {result.source_path} to index-chapter architecture"
    )
    typer.echo(
        f"Created {len(result.chapters)} chapter files in {layout.context_dir_name}/ directory"
    )
    typer.echo(f"Total content: {result.total_words} words, ~{result.total_tokens} tokens")
    typer.echo(f"Average per chapter: {result.average_tokens} tokens")
    typer.echo(f"Index file: {layout.index_file}")
    if result.backup_path is not None:
        typer.echo(f"Backup saved in: {result.backup_path}")
    else:
        typer.echo("Backup: skipped (--no-backup)")


@app.command()
def convert(
    ctx: typer.Context,
    source: Path = typer.Option(Path("CLAUDE.md"), "--source", help="Source monolithic context file"),
    template: str = typer.Option(
        None, "--template", help="Template type (claude, cursor, copilot, gemini, generic)"
    ),
    backup_dir: str = typer.Option(None, "--backup-dir", help="Backup directory for original file"),
    context_dir: str = typer.Option(
        None, "--context-dir", help="Context directory name for chapter files"
    ),
    project: str = typer.Option(None, "--project", help="Project name for index generation"),
    no_backup: bool = typer.Option(False, "--no-backup", help="Skip creating backup of original file"),
    force: bool = typer.Option(
        False, "--force", help="Overwrite existing context directory if it contains files"
    ),
    dry_run: bool = typer.Option(False, "--dry-run", "-d", help="Preview changes without writing files"),
) -> None:
    """Convert a monolithic context file into an index plus chapter files."""
    state = _state(ctx)
    template = template or state.config.project.template
    if dry_run:
        typer.echo(f"DRY RUN: Analyzing {source} using {template} template...")
    else:
        typer.echo(f"Converting {source} to index-chapter structure using {template} template...")

    try:
        result = convert_document(
            source,
            project_root=state.project_path,
            template=template,
            context_dir=context_dir,
            backup_dir=backup_dir,
            project_name=project,
            create_backups=False if no_backup else None,
            force=force,
            dry_run=dry_run,
            config=state.config,
        )
    except (ContindexError, OSError) as e:
        _fail(e)

    if dry_run:
        _print_preview(result)
    else:
        _print_conversion(result)


@app.command()
def update(
    ctx: typer.Context,
    template: str = typer.Option(None, "--template", help="Template type for index file"),
    context_dir: str = typer.Option(None, "--context-dir", help="Context directory name"),
    force: bool = typer.Option(False, "--force", help="Force update even if no changes detected"),
) -> None:
    """Update the index file to reflect the current chapter files."""
    state = _state(ctx)
    try:
        result = update_index(
            state.project_path,
            template=template,
            context_dir=context_dir,
            force=force,
            config=state.config,
        )
    except (ContindexError, OSError) as e:
        _fail(e)

    layout = result.layout
    if not result.chapters:
        typer.echo(f"No chapter files found in {layout.context_dir}")
        typer.echo(f"Add .md files to the {layout.context_dir_name}/ directory and run update again")
        return
    if not result.updated:
        typer.echo("Index file is up to date. Use --force to regenerate anyway.")
        return

    typer.echo(f"✓ Successfully updated index file: {layout.index_file}\n")
    typer.echo("Chapter files referenced:")
    for i, chapter in enumerate(result.chapters, start=1):
        typer.echo(f"{i}. {layout.context_dir_name}/{chapter.file_name}")
    typer.echo(f"\nTotal chapters: {len(result.chapters)}")


@template_app.command("list")
def list_templates(ctx: typer.Context) -> None:
    """List available templates."""
    manager = TemplateManager(_state(ctx).config.app.version)
    typer.echo("Available Templates\n")
    for name in manager.list_templates():
        info = manager.get_template_info(name)
        typer.echo(f"   {name} - {info.description}")
        typer.echo(f"     File: {info.relative_path}")
    typer.echo("")
    typer.echo("Usage: contindex init --template=<name>")
    typer.echo("       contindex template show <name>")


@template_app.command("show")
def show_template(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Template name"),
    raw: bool = typer.Option(False, "--raw", "-r", help="Show raw template without processing"),
) -> None:
    """Show template content."""
    manager = TemplateManager(_state(ctx).config.app.version)
    try:
        info = manager.get_template_info(name)
        body = info.content if raw else manager.preview(name)
    except ContindexError as e:
        _fail(e)

    typer.echo(f"Template: {name}")
    typer.echo(f"Description: {info.description}\n")
    typer.echo("--- Raw Template Content ---" if raw else "--- Template Preview ---")
    typer.echo(body)
    typer.echo("--- End Template ---")


@template_app.command("info")
def template_info(ctx: typer.Context, name: str = typer.Argument(..., help="Template name")) -> None:
    """Show detailed template information."""
    manager = TemplateManager(_state(ctx).config.app.version)
    try:
        info = manager.get_template_info(name)
    except ContindexError as e:
        _fail(e)

    typer.echo("Template Information\n")
    typer.echo(f"Name: {info.name}")
    typer.echo(f"Description: {info.description}")
    typer.echo(f"Main file: {info.main_file}")
    if info.sub_dir:
        typer.echo(f"Subdirectory: {info.sub_dir}")
        typer.echo(f"Full path: {info.relative_path}")

    typer.echo("\nCompatible AI Tools:")
    for tool in info.compatible_tools:
        typer.echo(f"   - {tool}")

    typer.echo("\nUsage:")
    typer.echo(f"   contindex init --template={name}")
    typer.echo(f"   contindex update --template={name}")


if __name__ == "__main__":
    app()
