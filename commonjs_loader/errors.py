"""Loader error taxonomy.

Every failure the loader itself raises is a LoaderError subclass carrying
the structured fields needed to rebuild its message. Errors raised by module
code during evaluation are never wrapped.
"""

from typing import Any


class LoaderError(Exception):
    """Base class for resolution and loading failures."""


class ResolutionError(LoaderError):
    """A specifier could not be resolved to a loadable path."""

    def __init__(self, specifier: Any, requester: str):
        self.specifier = specifier
        self.requester = requester
        super().__init__(f"Cannot resolve require '{specifier}' from '{requester}'")


class ModuleLoadError(LoaderError):
    """A resolved path returned no content when read."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Cannot load module '{path}'")


class ManifestParseError(LoaderError):
    """A package manifest is not valid structured data."""

    def __init__(self, path: str, reason: str = ""):
        self.path = path
        self.reason = reason
        message = f"Failed to parse package manifest '{path}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class ManifestFieldError(LoaderError):
    """A recognized manifest field holds a value of the wrong type."""

    def __init__(self, path: str, field: str, value: Any):
        self.path = path
        self.field = field
        self.value = value
        super().__init__(
            f"Invalid value for field '{field}' in package manifest '{path}': "
            f"expected a string, got {type(value).__name__}"
        )


class UnsupportedModuleError(LoaderError):
    """A specifier resolved to a native binary module."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Native modules are not supported: '{path}'")


__all__ = [
    "LoaderError",
    "ResolutionError",
    "ModuleLoadError",
    "ManifestParseError",
    "ManifestFieldError",
    "UnsupportedModuleError",
]
