from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    OK = 0
    CONFIG_ERROR = 2
    INPUT_ERROR = 3
    EXPORT_ERROR = 4
    RUNTIME_ERROR = 5
    EMPTY_DIAGRAM = 6


class CatalogMermaidError(Exception):
    """Base error for diagram generation."""


class ConfigError(CatalogMermaidError):
    """Raised for configuration or argument issues."""


class InputError(CatalogMermaidError):
    """Raised when a graph document cannot be read or lacks required fields."""


class ExportError(CatalogMermaidError):
    """Raised when writing or validating diagram artifacts fails."""


class DiagramStateError(CatalogMermaidError, RuntimeError):
    """Raised when a diagram builder is used after it has been finalized."""


def as_exit_code(exc: BaseException) -> int:
    if isinstance(exc, (ConfigError, ValueError)):
        return int(ExitCode.CONFIG_ERROR)
    if isinstance(exc, InputError):
        return int(ExitCode.INPUT_ERROR)
    if isinstance(exc, ExportError):
        return int(ExitCode.EXPORT_ERROR)
    if isinstance(exc, CatalogMermaidError):
        return int(ExitCode.RUNTIME_ERROR)
    return 1
