"""
External dependencies: parsing dependency cells and loading specifiers.

A dependency cell lists one importable module per line. The default loader
imports each module and binds its top-level package in the shared namespace,
the way ``import a.b`` binds ``a``.
"""

import importlib
import logging
from typing import Protocol

from nbstate.errors import DependencyLoadError
from nbstate.kernel import NotebookKernel
from nbstate.notebook import DependencyRecord


logger = logging.getLogger(__name__)


class DependencyLoader(Protocol):
    def load(self, specifier: str) -> DependencyRecord:
        ...


def parse_specifiers(content: str, comment_marker: str = "#") -> list[str]:
    """
    Extract dependency specifiers from a cell's content.

    Lines are stripped; blank lines and comment lines are dropped and
    repeated specifiers are kept once, in first-seen order.
    """
    specifiers = []
    for line in content.split("\n"):
        line = line.strip()
        if not line or line.startswith(comment_marker):
            continue
        if line not in specifiers:
            specifiers.append(line)
    return specifiers


def summarize(specifiers, comment_marker: str = "#") -> str:
    """History text recorded when new dependencies are registered."""
    lines = [f"{comment_marker} added external dependencies:"]
    lines.extend(f"{comment_marker} {s}" for s in specifiers)
    return "\n".join(lines)


class ModuleLoader:
    """Loads dependencies as Python modules into the kernel's namespace."""

    def __init__(self, kernel: NotebookKernel):
        self.kernel = kernel

    def _import(self, specifier: str):
        try:
            importlib.import_module(specifier)
            return importlib.import_module(specifier.split(".")[0])
        except Exception as e:
            raise DependencyLoadError(specifier, f"{type(e).__name__}: {e}") from e

    def load(self, specifier: str) -> DependencyRecord:
        """Import ``specifier``; failures are reported in the record."""
        try:
            module = self._import(specifier)
        except DependencyLoadError as e:
            logger.warning("%s", e)
            return DependencyRecord(src=specifier, status="error", error=e.reason)
        self.kernel.set_variable(module.__name__, module)
        logger.debug("loaded dependency %s", specifier)
        return DependencyRecord(src=specifier, status="ok")
