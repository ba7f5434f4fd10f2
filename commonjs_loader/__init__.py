"""CommonJS-style module resolution and loading."""

from .errors import LoaderError
from .errors import ManifestFieldError
from .errors import ManifestParseError
from .errors import ModuleLoadError
from .errors import ResolutionError
from .errors import UnsupportedModuleError
from .loader import Loader
from .loader import Module
from .module_resolution import FileSystemHost
from .module_resolution import MemoryHost
from .module_resolution import PythonEvaluator
from .settings import LoaderSettings
from .settings import load_settings

__all__ = [
    "Loader",
    "Module",
    "LoaderSettings",
    "load_settings",
    "FileSystemHost",
    "MemoryHost",
    "PythonEvaluator",
    "LoaderError",
    "ResolutionError",
    "ModuleLoadError",
    "ManifestParseError",
    "ManifestFieldError",
    "UnsupportedModuleError",
]
