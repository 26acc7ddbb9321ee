"""
Execution history and counter.

History is append-only: entries are added, never edited or removed. The
execution number only moves forward, one step per counted evaluation.
"""

from nbstate.notebook import HistoryEntry, Notebook


def extend(state: Notebook, entries) -> Notebook:
    """Return ``state`` with ``entries`` appended in order."""
    entries = tuple(entries)
    if not entries:
        return state
    return state.evolve(history=state.history + entries)


def advance(state: Notebook) -> tuple[Notebook, int]:
    """Increment the execution number; returns the new state and number."""
    number = state.execution_number + 1
    return state.evolve(execution_number=number), number


def entries_for(state: Notebook, cell_id: int) -> list[HistoryEntry]:
    """History entries recorded for one cell, oldest first."""
    return [e for e in state.history if e.cell_id == cell_id]
