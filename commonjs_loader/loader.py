"""CommonJS loader - require lifecycle on top of injected primitives.

The loader owns one module registry. A require resolves the specifier,
returns the cached exports on a registry hit (even if that module is still
evaluating), and otherwise registers, reads and evaluates the target exactly
once.
"""

import json
import logging
from collections.abc import Callable
from collections.abc import Mapping
from collections.abc import Sequence
from types import SimpleNamespace
from typing import Any

from .errors import ModuleLoadError
from .module_resolution.registry import ModuleRegistry
from .module_resolution.resolvers import ModuleResolver
from .paths import join_path
from .paths import normalize_path
from .paths import split_path
from .settings import LoaderSettings

logger = logging.getLogger(__name__)

Evaluate = Callable[[str, str, Mapping[str, Any]], None]


class Module:
    """One loaded unit, identified by its canonical path."""

    def __init__(self, path_components: Sequence[str], loader: "Loader"):
        self.path_components = tuple(path_components)
        self.dir_components = self.path_components[:-1]
        self.filename = join_path(self.path_components)
        self.dirname = join_path(self.dir_components) if len(self.dir_components) > 1 else "/"
        self.exports: Any = SimpleNamespace()
        self.loaded = False
        self._loader = loader

    def require(self, specifier: str) -> Any:
        """Require a module relative to this one."""
        return self._loader.require_from(self, specifier)

    def __repr__(self) -> str:
        state = "loaded" if self.loaded else "loading"
        return f"Module({self.filename}, {state})"


class Loader:
    """CommonJS-style module loader.

    Example:
        >>> host = MemoryHost({"/main.js": "module.exports = 2"})
        >>> loader = Loader(host.exists_file, host.read_file, PythonEvaluator())
        >>> loader.require("/main")
        2
    """

    def __init__(
        self,
        exists_file: Callable[[str], bool],
        read_file: Callable[[str], str | None],
        evaluate: Evaluate,
        *,
        builtin_overrides: Mapping[str, str] | None = None,
        override_base_directory: str | None = None,
        parse_json: Callable[[str], Any] = json.loads,
        settings: LoaderSettings | None = None,
    ):
        """Initialize loader.

        Args:
            exists_file: True if a canonical path names an existing file
            read_file: Content of a canonical path, None if absent
            evaluate: Runs (source, display_name, bindings)
            builtin_overrides: Bare specifier -> replacement fragment (overrides settings)
            override_base_directory: Base for relative override fragments (overrides settings)
            parse_json: Structured-data parser for manifests and .json modules
            settings: Resolution policy
        """
        settings = settings or LoaderSettings()
        self.settings = settings.with_overrides(
            builtin_overrides=dict(builtin_overrides) if builtin_overrides is not None else None,
            override_base_directory=override_base_directory,
        )
        self.read_file = read_file
        self.evaluate = evaluate
        self.parse_json = parse_json
        self.resolver = ModuleResolver(exists_file, read_file, parse_json, self.settings)
        self._registry = ModuleRegistry()

    @property
    def modules(self) -> ModuleRegistry:
        """Registry of every module required so far."""
        return self._registry

    def _root_module(self) -> Module:
        return Module(["", ""], self)

    def require(self, specifier: str) -> Any:
        """Require a specifier from the root directory."""
        return self.require_from(self._root_module(), specifier)

    def resolve(self, specifier: str, from_path: str | None = None) -> str:
        """Resolve a specifier without loading it.

        Args:
            specifier: Specifier to resolve
            from_path: Canonical path of the requesting module (default: root)
        """
        requester = self._root_module()
        if from_path:
            components = normalize_path(split_path(from_path))
            if components and components != [""]:
                requester = Module(components, self)
        return self.resolver.resolve(requester, specifier)

    def require_from(self, requester: Module, specifier: str) -> Any:
        """Require a specifier on behalf of a module.

        Raises:
            LoaderError subclasses for resolution and load failures. Errors
            raised while evaluating module code propagate unchanged.
        """
        path = self.resolver.resolve(requester, specifier)

        cached = self._registry.get(path)
        if cached is not None:
            if not cached.loaded:
                logger.debug(
                    f"[module:cycle] {requester.filename} -> {path} (partial exports)",
                    extra={"event": "module:cycle", "requester": requester.filename, "path": path, "cached": True},
                )
            return cached.exports

        module = Module(split_path(path), self)
        self._registry.add(module)

        content = self.read_file(path)
        if not content:
            raise ModuleLoadError(path)

        if path.endswith(self.settings.json_extension):
            module.exports = self.parse_json(content)
        else:
            self.evaluate(content, path, self._bindings(module))

        module.loaded = True
        logger.debug(f"[module:load] {path}", extra={"event": "module:load", "path": path})
        return module.exports

    def _bindings(self, module: Module) -> dict[str, Any]:
        return {
            "require": module.require,
            "exports": module.exports,
            "module": module,
            "__filename": module.filename,
            "__dirname": module.dirname,
        }

    def __repr__(self) -> str:
        return f"Loader({len(self._registry)} modules)"
