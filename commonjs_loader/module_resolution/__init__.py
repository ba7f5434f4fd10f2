"""Module resolution - resolution cascade, registry and host primitives.

This package holds the pieces the Loader is assembled from. Hosts are the
concrete implementations of the injected file and evaluation primitives.
"""

from .hosts import FileSystemHost
from .hosts import MemoryHost
from .hosts import PythonEvaluator
from .registry import ModuleRegistry
from .resolvers import ModuleResolver

__all__ = [
    "FileSystemHost",
    "MemoryHost",
    "PythonEvaluator",
    "ModuleRegistry",
    "ModuleResolver",
]
