"""Error message formatting for CLI display.

Loader errors carry their own messages. Errors raised by module code can
have an empty str() (a bare ``raise KeyError()``), so those fall back to
the exception type name.
"""

from __future__ import annotations

from rich.markup import escape as _escape_markup

from ..errors import LoaderError
from ..errors import ManifestFieldError
from ..errors import ManifestParseError
from ..errors import ResolutionError
from ..errors import UnsupportedModuleError

# Hints shown under loader errors, keyed by error type
HINTS: dict[type, str] = {
    ResolutionError: "Check the specifier, the file extensions tried, and any node_modules directories.",
    ManifestParseError: "The package manifest must be a valid JSON object.",
    ManifestFieldError: "Manifest entry fields must be strings.",
    UnsupportedModuleError: "Native binary modules cannot be evaluated by this loader.",
}


def format_error_message(e: BaseException, *, include_type: bool = True) -> str:
    """Format an exception into a useful display message.

    Args:
        e: The exception to format
        include_type: Whether to include the exception type name

    Returns:
        A non-empty display message

    Examples:
        >>> format_error_message(ValueError("invalid input"))
        'ValueError: invalid input'

        >>> format_error_message(KeyError())
        'KeyError: (no additional details)'
    """
    error_str = str(e)
    error_type = type(e).__name__

    if error_str:
        if include_type and error_type not in error_str:
            return f"{error_type}: {error_str}"
        return error_str

    return f"{error_type}: (no additional details)"


def error_hint(e: BaseException) -> str | None:
    """Actionable hint for a loader error, None for anything else."""
    if not isinstance(e, LoaderError):
        return None
    for exc_type, hint in HINTS.items():
        if isinstance(e, exc_type):
            return hint
    return None


def escape_markup(value: object) -> str:
    """Escape a value for safe interpolation into Rich markup strings.

    Prevents Rich from interpreting brackets in exception messages,
    file paths, or other dynamic content as markup tags.
    """
    return _escape_markup(str(value))
