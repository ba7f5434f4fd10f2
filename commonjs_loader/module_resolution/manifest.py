"""Package manifest (package.json) handling."""

import logging
from collections.abc import Callable
from collections.abc import Sequence
from typing import Any

from ..errors import ManifestFieldError
from ..errors import ManifestParseError

logger = logging.getLogger(__name__)


def parse_manifest(path: str, content: str | None, parse_json: Callable[[str], Any]) -> dict[str, Any]:
    """Parse manifest content into a mapping.

    Args:
        path: Canonical manifest path (for error messages)
        content: Raw manifest text
        parse_json: Structured-data parser

    Returns:
        Parsed manifest mapping, empty when the content is not an object

    Raises:
        ManifestParseError: Content is missing or unparseable
    """
    if not content:
        raise ManifestParseError(path, "manifest is empty or unreadable")

    try:
        data = parse_json(content)
    except ValueError as e:
        raise ManifestParseError(path, str(e)) from e

    # null, arrays and scalars name no fields; the directory falls back to its default entry
    if not isinstance(data, dict):
        logger.debug(f"[module:manifest] {path} is not an object ({type(data).__name__}), ignoring fields")
        return {}
    return data


def entry_fragment(path: str, manifest: dict[str, Any], fields: Sequence[str], default: str) -> str:
    """Pick the entry fragment named by a manifest.

    The first field present with a non-empty string wins. Missing fields and
    empty strings fall through to the next field, then to ``default``.

    Raises:
        ManifestFieldError: A recognized field holds a non-string value
    """
    for field in fields:
        if field not in manifest or manifest[field] is None:
            continue
        value = manifest[field]
        if not isinstance(value, str):
            raise ManifestFieldError(path, field, value)
        if value:
            logger.debug(
                f"[module:manifest] {path} {field} -> {value}",
                extra={"event": "module:manifest", "path": path, "field": field},
            )
            return value
    return default
