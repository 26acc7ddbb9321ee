"""
Cell sequence reducer: structural transitions over notebook state.

``apply(state, action)`` is pure. It never mutates ``state`` or any of its
cells; unknown actions return ``state`` itself, every known action returns a
new Notebook (possibly equal to the old one).
"""

import logging
from typing import Callable, Optional

from nbstate.actions import (
    AddCell,
    ChangeCellType,
    ChangeDomElementId,
    ChangeElementType,
    ChangeMode,
    ChangeViewMode,
    DeleteCell,
    InsertCell,
    MarkCellNotRendered,
    MoveCellDown,
    MoveCellUp,
    SelectCell,
    SetCellRowCollapseState,
    UpdateInputContent,
)
from nbstate.notebook import Cell, CellType, Mode, Notebook, ViewMode, normalize_cell_type


logger = logging.getLogger(__name__)

_HANDLERS: dict[type, Callable] = {}


def _handles(action_cls):
    def register(func):
        _HANDLERS[action_cls] = func
        return func
    return register


def type_name(cell_type) -> str:
    """Plain string form of a cell type."""
    return normalize_cell_type(cell_type)


def apply(state: Notebook, action) -> Notebook:
    """Apply a structural action. Unknown actions are ignored."""
    handler = _HANDLERS.get(type(action))
    if handler is None:
        return state
    return handler(state, action)


def _with_cells(state: Notebook, cells) -> Notebook:
    return state.evolve(cells=tuple(cells))


def replace_cell(state: Notebook, index: int, cell: Cell) -> Notebook:
    """Return ``state`` with the cell at ``index`` swapped for ``cell``."""
    cells = list(state.cells)
    cells[index] = cell
    return _with_cells(state, cells)


def _update_cell_at(state: Notebook, index: int, **changes) -> Notebook:
    if index < 0:
        return state.evolve()
    return replace_cell(state, index, state.cells[index].evolve(**changes))


def _update_selected(state: Notebook, **changes) -> Notebook:
    return _update_cell_at(state, state.selected_index, **changes)


def new_cell(state: Notebook, cell_type: str) -> tuple[Notebook, Cell]:
    """Create a cell with a fresh id and record the id as issued."""
    cell_id = state.next_cell_id()
    return state.evolve(last_cell_id=cell_id), Cell.new(cell_id, type_name(cell_type))


@_handles(InsertCell)
def _insert_cell(state: Notebook, action: InsertCell) -> Notebook:
    state, cell = new_cell(state, CellType.SCRIPTING)
    offset = 0 if action.direction == "above" else 1
    index = max(state.selected_index + offset, 0)
    cells = list(state.cells)
    cells.insert(index, cell)
    return _with_cells(state, cells)


@_handles(AddCell)
def _add_cell(state: Notebook, action: AddCell) -> Notebook:
    state, cell = new_cell(state, action.cell_type)
    return _with_cells(state, state.cells + (cell,))


@_handles(SelectCell)
def _select_cell(state: Notebook, action: SelectCell) -> Notebook:
    cells = []
    for cell in state.cells:
        selected = cell.id == action.id
        cells.append(cell if cell.selected == selected else cell.evolve(selected=selected))
    return _with_cells(state, cells)


def _move_selected(state: Notebook, step: int) -> Notebook:
    index = state.selected_index
    target = index + step
    if index < 0 or not 0 <= target < len(state.cells):
        return state.evolve()
    cells = list(state.cells)
    cells[index], cells[target] = cells[target], cells[index]
    return _with_cells(state, cells)


@_handles(MoveCellUp)
def _move_cell_up(state: Notebook, action: MoveCellUp) -> Notebook:
    return _move_selected(state, -1)


@_handles(MoveCellDown)
def _move_cell_down(state: Notebook, action: MoveCellDown) -> Notebook:
    return _move_selected(state, 1)


@_handles(UpdateInputContent)
def _update_input_content(state: Notebook, action: UpdateInputContent) -> Notebook:
    return _update_selected(state, content=action.content)


@_handles(ChangeElementType)
def _change_element_type(state: Notebook, action: ChangeElementType) -> Notebook:
    return _update_selected(state, element_type=action.element_type)


@_handles(ChangeDomElementId)
def _change_dom_element_id(state: Notebook, action: ChangeDomElementId) -> Notebook:
    return _update_selected(state, dom_element_id=action.elem_id)


@_handles(ChangeCellType)
def _change_cell_type(state: Notebook, action: ChangeCellType) -> Notebook:
    cell_type = type_name(action.cell_type)
    # A throwaway cell of the new type supplies the per-type defaults.
    defaults = Cell.new(-1, cell_type)
    return _update_selected(
        state,
        cell_type=cell_type,
        value=None,
        rendered=False,
        row_settings=defaults.row_settings,
    )


@_handles(SetCellRowCollapseState)
def _set_row_collapse_state(state: Notebook, action: SetCellRowCollapseState) -> Notebook:
    cell_id: Optional[int] = action.cell_id
    index = state.selected_index if cell_id is None else state.index_of(cell_id)
    if index < 0:
        return state.evolve()
    settings = {view: dict(rows) for view, rows in state.cells[index].row_settings.items()}
    settings.setdefault(action.view_mode, {})[action.row_type] = action.row_overflow
    return _update_cell_at(state, index, row_settings=settings)


@_handles(MarkCellNotRendered)
def _mark_cell_not_rendered(state: Notebook, action: MarkCellNotRendered) -> Notebook:
    return _update_selected(state, rendered=False)


@_handles(DeleteCell)
def _delete_cell(state: Notebook, action: DeleteCell) -> Notebook:
    index = state.selected_index
    if not state.cells or index < 0:
        return state.evolve()
    cells = list(state.cells)
    if len(cells) > 1:
        next_index = index - 1 if index == len(cells) - 1 else index + 1
        cells[next_index] = cells[next_index].evolve(selected=True)
    del cells[index]
    logger.debug("deleted cell %s", state.cells[index].id)
    return _with_cells(state, cells)


@_handles(ChangeMode)
def _change_mode(state: Notebook, action: ChangeMode) -> Notebook:
    return state.evolve(mode=Mode(action.mode))


@_handles(ChangeViewMode)
def _change_view_mode(state: Notebook, action: ChangeViewMode) -> Notebook:
    return state.evolve(view_mode=ViewMode(action.view_mode))
