"""Specifier resolution - CommonJS resolution cascade.

Resolution order for a specifier (first match wins):
1. Relative or absolute (``./x``, ``../x``, ``/x``): file, then directory
2. Bare with a builtin override: the override fragment, resolved in place
3. Bare: ancestor ``node_modules`` search from the requesting directory

File candidates are tried as the exact path, then each configured
extension. Directories resolve through their manifest entry field, or
``index`` when there is none.
"""

import json
import logging
from collections.abc import Callable
from collections.abc import Sequence
from typing import Any
from typing import Protocol

from ..errors import ResolutionError
from ..errors import UnsupportedModuleError
from ..paths import is_relative_marker
from ..paths import join_path
from ..paths import normalize_path
from ..paths import split_path
from ..settings import LoaderSettings
from .manifest import entry_fragment
from .manifest import parse_manifest

logger = logging.getLogger(__name__)


class Requester(Protocol):
    """What resolution needs to know about the requesting module."""

    filename: str
    dir_components: tuple[str, ...]


class ModuleResolver:
    """Resolves specifiers to canonical paths through injected file primitives."""

    def __init__(
        self,
        exists_file: Callable[[str], bool],
        read_file: Callable[[str], str | None],
        parse_json: Callable[[str], Any] = json.loads,
        settings: LoaderSettings | None = None,
    ):
        self.exists_file = exists_file
        self.read_file = read_file
        self.parse_json = parse_json
        self.settings = settings or LoaderSettings()

    def resolve(self, requester: Requester, specifier: str) -> str:
        """Resolve a specifier relative to the requesting module.

        Returns:
            Canonical path of the target module

        Raises:
            ResolutionError: Nothing loadable matches the specifier
            UnsupportedModuleError: The match is a native module
            ManifestParseError: A directory manifest on the way is unparseable
            ManifestFieldError: A manifest entry field is not a string
        """
        if not isinstance(specifier, str) or not specifier:
            raise ResolutionError(specifier, requester.filename)

        components = split_path(specifier)
        if is_relative_marker(components[0]):
            resolved = self._resolve_path(requester.dir_components, components)
        elif specifier in self.settings.builtin_overrides:
            resolved = self._resolve_override(requester, specifier)
        else:
            resolved = self.search_node_modules(requester.dir_components, specifier)

        if resolved is None:
            raise ResolutionError(specifier, requester.filename)

        if resolved.endswith(tuple(self.settings.native_extensions)):
            raise UnsupportedModuleError(resolved)

        logger.debug(
            f"[module:resolve] {specifier} from {requester.filename} -> {resolved}",
            extra={"event": "module:resolve", "specifier": specifier, "requester": requester.filename, "path": resolved},
        )
        return resolved

    def _resolve_path(self, base_components: Sequence[str], components: list[str]) -> str | None:
        """Resolve relative or absolute segments against a base directory."""
        combined = components if components[0] == "" else [*base_components, *components]
        normalized = normalize_path(combined)
        if normalized is None:
            return None
        return self.load_path(join_path(normalized))

    def _resolve_override(self, requester: Requester, specifier: str) -> str | None:
        """Resolve a builtin override fragment in place of a bare specifier.

        Relative fragments are anchored at the override base directory. Bare
        fragments search ``node_modules`` from the requester without consulting
        the override table again.
        """
        fragment = self.settings.builtin_overrides[specifier]
        logger.debug(
            f"[module:resolve] {specifier} -> builtin override ({fragment})",
            extra={"event": "module:override", "specifier": specifier, "path": fragment},
        )
        if not fragment:
            return None

        components = split_path(fragment)
        if is_relative_marker(components[0]):
            base_components = normalize_path(split_path(self.settings.override_base_directory))
            if base_components is None:
                return None
            return self._resolve_path(base_components, components)
        return self.search_node_modules(requester.dir_components, fragment)

    def load_path(self, path: str) -> str | None:
        """Try a normalized path as a file, then as a directory."""
        return self.load_as_file(path) or self.load_as_directory(path)

    def load_as_file(self, path: str) -> str | None:
        """Return the first existing candidate among the exact path and its extensions."""
        if self.exists_file(path):
            return path

        for extension in self.settings.extensions:
            candidate = path + extension
            if self.exists_file(candidate):
                return candidate

        return None

    def load_as_directory(self, path: str) -> str | None:
        """Resolve a directory through its manifest entry field or the default entry."""
        entry = self.settings.default_entry
        manifest_path = f"{path}/{self.settings.manifest_name}"
        if self.exists_file(manifest_path):
            manifest = parse_manifest(manifest_path, self.read_file(manifest_path), self.parse_json)
            entry = entry_fragment(manifest_path, manifest, self.settings.manifest_fields, entry)

        normalized = normalize_path(split_path(path) + split_path(entry))
        if normalized is None:
            return None

        return self.load_as_file(join_path(normalized))

    def search_node_modules(self, dir_components: Sequence[str], specifier: str) -> str | None:
        """Probe ``<ancestor>/node_modules/<specifier>`` from the directory up to the root.

        The nearest ancestor wins. Only the requester's own ancestors are
        probed, so a package's nested ``node_modules`` is invisible to modules
        outside that package.
        """
        levels = list(dir_components)
        specifier_components = split_path(specifier)
        while True:
            normalized = normalize_path([*levels, self.settings.modules_directory, *specifier_components])
            if normalized is not None:
                if found := self.load_path(join_path(normalized)):
                    return found

            if len(levels) <= 1:
                return None
            levels.pop()

    def __repr__(self) -> str:
        return f"ModuleResolver(extensions={list(self.settings.extensions)})"
