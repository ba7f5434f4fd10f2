"""Module registry - identity map from canonical path to loaded module.

Entries are added before their module is evaluated, so a circular require
finds the in-progress module and gets its live exports. Entries are never
removed.
"""

import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..loader import Module

logger = logging.getLogger(__name__)


class ModuleRegistry:
    """Registry of modules keyed by canonical path."""

    def __init__(self):
        """Initialize an empty registry."""
        self._modules: dict[str, "Module"] = {}

    def get(self, path: str) -> "Module | None":
        """Get the module registered for a canonical path, if any."""
        return self._modules.get(path)

    def add(self, module: "Module") -> None:
        """Register a module under its canonical path.

        Raises:
            ValueError: A module is already registered for that path
        """
        if module.filename in self._modules:
            raise ValueError(f"Module '{module.filename}' is already registered")
        self._modules[module.filename] = module
        logger.debug(f"[module:registry] registered {module.filename} ({len(self._modules)} total)")

    def paths(self) -> list[str]:
        """Canonical paths in registration order."""
        return list(self._modules)

    def __contains__(self, path: object) -> bool:
        return path in self._modules

    def __len__(self) -> int:
        return len(self._modules)

    def __iter__(self) -> Iterator["Module"]:
        return iter(self._modules.values())

    def __repr__(self) -> str:
        return f"ModuleRegistry({len(self._modules)} modules)"
