"""Pytest fixtures shared across all test modules."""

from datetime import datetime, timedelta

import pytest
from IPython.core.interactiveshell import InteractiveShell

from nbstate import Cell, Notebook, NotebookEngine, NotebookKernel
from nbstate.notebook import DependencyRecord


@pytest.fixture(autouse=True)
def reset_shared_shell():
    """Give every test a clean shared IPython namespace."""
    InteractiveShell.instance().reset()
    yield
    InteractiveShell.instance().reset()


class FixedClock:
    """Deterministic clock: each call is one second after the previous."""

    def __init__(self, start=datetime(2024, 1, 1, 12, 0, 0)):
        self.now = start

    def __call__(self):
        current = self.now
        self.now = current + timedelta(seconds=1)
        return current


class FakeLoader:
    """Dependency loader that succeeds unless the specifier is listed as failing."""

    def __init__(self, failing=()):
        self.failing = set(failing)
        self.calls = []

    def load(self, specifier):
        self.calls.append(specifier)
        if specifier in self.failing:
            return DependencyRecord(src=specifier, status="error", error="not found")
        return DependencyRecord(src=specifier, status="ok")


class FakeRenderer:
    def render(self, text):
        return f"<p>{text}</p>"


def make_notebook(*cells: Cell) -> Notebook:
    """Notebook from explicit cells, with the id generator past their ids."""
    last = max((c.id for c in cells), default=-1)
    return Notebook(cells=cells, last_cell_id=last)


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def loader():
    return FakeLoader(failing={"missing_pkg"})


@pytest.fixture
def engine(clock, loader):
    return NotebookEngine(kernel=NotebookKernel(), loader=loader, clock=clock)


@pytest.fixture
def three_cells():
    """Cells A(0), B(1), C(2); nothing selected."""
    return make_notebook(
        Cell.new(0).evolve(content="A"),
        Cell.new(1).evolve(content="B"),
        Cell.new(2).evolve(content="C"),
    )
