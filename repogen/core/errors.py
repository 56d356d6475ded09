"""Exception hierarchy for the generator.

``CommandError`` and its subclasses are user-facing: the CLI prints their
message as-is. Anything else is treated as unexpected.
"""


class RepogenError(Exception):
    """Base class for all generator errors."""


class CommandError(RepogenError):
    """An error whose message is meant for the person running the command."""


class ProjectResolutionError(CommandError):
    """Zero or several project files where exactly one was expected."""


class BuildError(CommandError):
    """The external build (or metadata export) exited unsuccessfully."""


class ArtifactNotFoundError(CommandError):
    """The build finished but the compiled assembly is missing."""


class CatalogError(CommandError):
    """The type catalog manifest could not be read at all."""


class ContextNotFoundError(CommandError):
    """No data-context type is left after filtering."""
