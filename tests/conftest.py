"""Pytest configuration for loader tests."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import pytest

from commonjs_loader import Loader
from commonjs_loader import MemoryHost
from commonjs_loader import PythonEvaluator


@dataclass
class LoaderHarness:
    """A loader wired to an in-memory host and a recording evaluator."""

    loader: Loader
    host: MemoryHost
    evaluator: PythonEvaluator

    def require(self, specifier: str) -> Any:
        return self.loader.require(specifier)


@pytest.fixture
def make_loader() -> Callable[..., LoaderHarness]:
    """Build a loader over a dict of canonical path -> module source."""

    def _make(files: dict[str, str], **kwargs) -> LoaderHarness:
        host = MemoryHost(files)
        evaluator = PythonEvaluator()
        loader = Loader(host.exists_file, host.read_file, evaluator, **kwargs)
        return LoaderHarness(loader=loader, host=host, evaluator=evaluator)

    return _make
