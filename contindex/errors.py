"""Exception hierarchy for contindex."""


class ContindexError(Exception):
    """Base class for every error raised by contindex."""


class ValidationError(ContindexError, ValueError):
    """An input failed validation before any work was done.

    Args:
        field: What was being validated ("file", "directory", "template", ...).
        value: The offending value.
        message: Human readable reason.
    """

    def __init__(self, field: str, value: str, message: str) -> None:
        self.field = field
        self.value = value
        self.message = message
        super().__init__(message)


class UnsupportedTemplateError(ValidationError):
    """The template name is well formed but not a built-in template."""

    def __init__(self, template: str) -> None:
        super().__init__("template", template, f"unsupported template: {template}")


class NoContentError(ContindexError):
    """The source document produced no chapters."""


class DirectoryConflictError(ContindexError):
    """Output directories clash with existing files or with each other."""


class ExistingStructureError(ContindexError, FileExistsError):
    """An index file or context directory is already in place."""


class ContextDirectoryNotFoundError(ContindexError, FileNotFoundError):
    """The chapter directory to scan does not exist."""


class TemplateError(ContindexError):
    """A template asset is missing or could not be rendered."""
