"""Built-in index templates and rendering."""

import logging
from datetime import datetime
from importlib import resources
from pathlib import Path
from string import Template

from contindex.errors import TemplateError, UnsupportedTemplateError
from contindex.models.project import ProjectLayout
from contindex.models.template import TemplateInfo
from contindex.validation import validate_template_name

logger = logging.getLogger(__name__)

TEMPLATE_PACKAGE = "contindex"
TEMPLATE_DIR = "templates"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

# Declaration order is the listing order.
TEMPLATES: dict[str, TemplateInfo] = {
    "generic": TemplateInfo(
        name="generic",
        description="Universal template that can be adapted to any AI tool",
        main_file="template.md",
        compatible_tools=["Any AI coding tool", "Universal compatibility"],
    ),
    "claude": TemplateInfo(
        name="claude",
        description="Optimized for Claude Code with @context/ references",
        main_file="CLAUDE.md",
        compatible_tools=[
            "Claude Code (primary)",
            "Claude web interface",
            "Any tool that supports @context/ references",
        ],
    ),
    "cursor": TemplateInfo(
        name="cursor",
        description="Designed for Cursor IDE with folder icons",
        main_file="AGENTS.md",
        compatible_tools=["Cursor IDE (primary)", "VS Code with appropriate extensions"],
    ),
    "copilot": TemplateInfo(
        name="copilot",
        description="GitHub Copilot compatible with .github placement",
        main_file="copilot-instructions.md",
        sub_dir=".github",
        compatible_tools=[
            "GitHub Copilot (primary)",
            "GitHub Copilot for VS Code",
            "GitHub Copilot CLI",
        ],
    ),
    "gemini": TemplateInfo(
        name="gemini",
        description="Optimized for Google Gemini conversational context loading",
        main_file="GEMINI.md",
        compatible_tools=["Google Gemini (primary)", "Gemini Code Assist"],
    ),
}


def validate_template(name: str) -> None:
    """Check that ``name`` is a well-formed, built-in template name.

    Raises:
        ValidationError: If the name is malformed.
        UnsupportedTemplateError: If no such template exists.
    """
    validate_template_name(name)
    if name not in TEMPLATES:
        raise UnsupportedTemplateError(name)


def index_file_for(template: str, project_root: str | Path) -> Path:
    """Return where a template's index file lives inside a project."""
    validate_template(template)
    info = TEMPLATES[template]
    root = Path(project_root)
    if info.sub_dir:
        return root / info.sub_dir / info.main_file
    return root / info.main_file


def reference_syntax(template: str, context_dir_name: str) -> str:
    if template == "cursor":
        return f"{context_dir_name}/"
    return f"@{context_dir_name}/"


def build_layout(
    project_root: str | Path, template: str, context_dir_name: str = "context"
) -> ProjectLayout:
    """Resolve index file and chapter directory locations for a template."""
    return ProjectLayout(
        project_root=Path(project_root),
        template=template,
        context_dir_name=context_dir_name,
        index_file=index_file_for(template, project_root),
    )


class TemplateManager:
    """Lists, describes and renders the built-in index templates.

    Args:
        version: Tool version written into rendered templates.
    """

    def __init__(self, version: str = "0.0.3") -> None:
        self._version = version

    def list_templates(self) -> list[str]:
        return list(TEMPLATES)

    def get_template_info(self, name: str) -> TemplateInfo:
        """Return a template's metadata together with its raw content."""
        validate_template(name)
        return TEMPLATES[name].model_copy(update={"content": self._load(name)})

    def render(self, name: str, values: dict[str, str]) -> str:
        """Substitute ``values`` into a template.

        Raises:
            TemplateError: If the template uses a variable missing from
                ``values``.
        """
        content = self.get_template_info(name).content
        try:
            return Template(content).substitute(values)
        except (KeyError, ValueError) as e:
            raise TemplateError(f"failed to render template '{name}': {e}") from e

    def apply(self, layout: ProjectLayout, project_name: str | None = None) -> Path:
        """Write a freshly rendered index file for a project.

        Any existing index file is overwritten; parent directories are
        created as needed.

        Args:
            layout: Where the index file and chapters live.
            project_name: Name shown in the index. Defaults to the name of
                the project directory.

        Returns:
            Path to the written index file.
        """
        root = layout.project_root.resolve()
        values = {
            "project_name": project_name or root.name,
            "project_root": str(root),
            "context_dir": layout.context_dir_name,
            "template": layout.template,
            "generated_at": datetime.now().strftime(TIMESTAMP_FORMAT),
            "version": self._version,
            "reference_syntax": reference_syntax(layout.template, layout.context_dir_name),
        }
        rendered = self.render(layout.template, values)

        layout.index_file.parent.mkdir(parents=True, exist_ok=True)
        layout.index_file.write_text(rendered, encoding="utf-8")
        logger.info("Wrote %s index file %s", layout.template, layout.index_file)
        return layout.index_file

    def preview(self, name: str) -> str:
        """Render a template with sample values."""
        values = {
            "project_name": "sample-project",
            "project_root": "/path/to/project",
            "context_dir": "context",
            "template": name,
            "generated_at": "2024-01-01 12:00:00",
            "version": self._version,
            "reference_syntax": reference_syntax(name, "context"),
        }
        return self.render(name, values)

    def _load(self, name: str) -> str:
        asset = resources.files(TEMPLATE_PACKAGE) / TEMPLATE_DIR / f"{name}.md"
        try:
            return asset.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise TemplateError(f"template not found: {name}") from e
