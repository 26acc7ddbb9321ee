"""
nbstate: the state engine behind an interactive notebook.

This package provides:
- Immutable notebook state (cells, history, execution counter)
- A pure reducer for structural actions on the cell sequence
- Per-cell-type evaluation in a shared IPython namespace
- Tracking of the names user code binds in that namespace
"""

from nbstate.config import Settings
from nbstate.errors import DependencyLoadError, EvaluationError, InvalidActionError, NbstateError
from nbstate.kernel import NotebookKernel
from nbstate.notebook import Cell, CellType, DependencyRecord, EvalStatus, HistoryEntry, Mode, Notebook, ViewMode
from nbstate.engine import NotebookEngine

__version__ = "0.1.0"
__all__ = [
    "NotebookEngine",
    "NotebookKernel",
    "Notebook",
    "Cell",
    "CellType",
    "EvalStatus",
    "Mode",
    "ViewMode",
    "HistoryEntry",
    "DependencyRecord",
    "Settings",
    "NbstateError",
    "EvaluationError",
    "DependencyLoadError",
    "InvalidActionError",
]
