"""Host implementations of the loader's injected primitives.

- MemoryHost: in-memory file table, counts reads
- FileSystemHost: canonical paths mapped under a real directory
- PythonEvaluator: runs module source as Python with CommonJS bindings
"""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class MemoryHost:
    """File table held in memory, keyed by canonical path."""

    def __init__(self, files: Mapping[str, str] | None = None):
        """Initialize with a path -> content mapping.

        Args:
            files: Initial files, e.g. {"/main.js": "module.exports = 1"}
        """
        self.files: dict[str, str] = dict(files or {})
        self.read_count = 0
        self.reads: list[str] = []

    def exists_file(self, path: str) -> bool:
        return path in self.files

    def read_file(self, path: str) -> str | None:
        self.read_count += 1
        self.reads.append(path)
        return self.files.get(path)

    def __repr__(self) -> str:
        return f"MemoryHost({len(self.files)} files)"


class FileSystemHost:
    """Canonical paths resolved under a directory on disk.

    ``/lib/a.js`` maps to ``<root>/lib/a.js``. Directories never count as
    files, so directory specifiers fall through to manifest lookup.
    """

    def __init__(self, root: str | Path, encoding: str = "utf-8"):
        """Initialize with the directory that plays the role of ``/``.

        Args:
            root: Directory mapped to the canonical root
            encoding: Text encoding for module sources
        """
        self.root = Path(root).resolve()
        self.encoding = encoding

    def to_host_path(self, path: str) -> Path:
        """Map a canonical path onto the host filesystem."""
        return self.root.joinpath(*[part for part in path.split("/") if part])

    def exists_file(self, path: str) -> bool:
        return self.to_host_path(path).is_file()

    def read_file(self, path: str) -> str | None:
        host_path = self.to_host_path(path)
        try:
            return host_path.read_text(encoding=self.encoding)
        except (FileNotFoundError, IsADirectoryError):
            logger.debug(f"Cannot read {host_path}")
            return None

    def __repr__(self) -> str:
        return f"FileSystemHost({self.root})"


class PythonEvaluator:
    """Evaluate module source as Python with the CommonJS names bound.

    The bindings (``require``, ``exports``, ``module``, ``__filename``,
    ``__dirname``) become the globals of the executed code, so a module body
    such as ``module.exports = require('./a') + 1`` runs unchanged. Errors
    raised by the source propagate to the caller.
    """

    def __init__(self, extra_globals: Mapping[str, Any] | None = None):
        """Initialize evaluator.

        Args:
            extra_globals: Names made available to every module (e.g. shared counters)
        """
        self.extra_globals: dict[str, Any] = dict(extra_globals or {})
        self.evaluated: list[str] = []

    def __call__(self, source: str, display_name: str, bindings: Mapping[str, Any]) -> None:
        code = compile(source, display_name, "exec")
        namespace: dict[str, Any] = {"__name__": display_name, **self.extra_globals, **bindings}
        self.evaluated.append(display_name)
        logger.debug(f"[module:eval] {display_name}", extra={"event": "module:eval", "path": display_name})
        exec(code, namespace)

    def __repr__(self) -> str:
        return f"PythonEvaluator({len(self.evaluated)} evaluated)"
