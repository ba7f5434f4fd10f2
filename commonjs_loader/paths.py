"""Path component helpers for canonical module paths.

Canonical paths are always slash-separated and absolute. They never touch
the host filesystem; hosts map them onto real storage themselves.
"""

from collections.abc import Iterable
from collections.abc import Sequence

SEPARATOR = "/"


def split_path(path: str) -> list[str]:
    """Split a slash-separated path into its segments.

    A leading slash yields a leading empty segment, which marks the path
    as absolute.
    """
    return path.split(SEPARATOR)


def join_path(components: Iterable[str]) -> str:
    """Join path segments back into a slash-separated path."""
    return SEPARATOR.join(components)


def is_relative_marker(segment: str) -> bool:
    """True when a first segment makes a specifier relative or absolute."""
    return segment in ("", ".", "..")


def normalize_path(components: Sequence[str]) -> list[str] | None:
    """Resolve ``.`` and ``..`` segments.

    Empty segments are kept only in first position (the absolute-path
    marker). Returns None when ``..`` would ascend above the root, or
    above the first segment of a relative path.

    Examples:
        >>> normalize_path(["", "dir", "a", "..", "b"])
        ['', 'dir', 'b']

        >>> normalize_path(["", "..", "a"]) is None
        True
    """
    result: list[str] = []
    for segment in components:
        if segment == "":
            if not result:
                result.append(segment)
            continue

        if segment == ".":
            continue

        if segment == "..":
            # The absolute-path marker is never popped
            if not result or result == [""]:
                return None
            result.pop()
        else:
            result.append(segment)

    return result
