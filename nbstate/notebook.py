"""
Notebook: immutable state values for the notebook engine.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from nbstate.config import LANGUAGES, LanguageInfo


INITIAL_EXECUTION_NUMBER = 0


class CellType(str, Enum):
    """Known cell types. Cells may carry any other string as their type."""
    SCRIPTING = "code"
    MARKDOWN = "markdown"
    EXTERNAL_DEPENDENCIES = "external dependencies"
    STYLESHEET = "css"


# Names accepted on the wire for known types.
CELL_TYPE_ALIASES = {
    "scripting": CellType.SCRIPTING.value,
}


def normalize_cell_type(cell_type) -> str:
    """Plain string form of a cell type, with aliases resolved."""
    if isinstance(cell_type, Enum):
        return cell_type.value
    cell_type = str(cell_type)
    return CELL_TYPE_ALIASES.get(cell_type, cell_type)


class EvalStatus(str, Enum):
    """Outcome of a cell's last evaluation."""
    NONE = "none"
    SUCCESS = "success"
    ERROR = "error"


class Mode(str, Enum):
    """Input mode of the notebook."""
    EDIT = "edit"
    COMMAND = "command"


class ViewMode(str, Enum):
    """How the notebook is displayed."""
    EDITOR = "editor"
    PRESENTATION = "presentation"


def default_row_settings(cell_type: str) -> dict[str, dict[str, Any]]:
    """Default row overflow settings for a cell type, per view mode."""
    shows_output = cell_type in (CellType.SCRIPTING, CellType.MARKDOWN)
    return {
        ViewMode.EDITOR.value: {"input": "visible", "output": "visible"},
        ViewMode.PRESENTATION.value: {
            "input": "collapsed",
            "output": "visible" if shows_output else "collapsed",
        },
    }


class DependencyRecord(BaseModel):
    """Result of loading one external dependency specifier."""
    model_config = ConfigDict(frozen=True)

    src: str
    status: Literal["ok", "error"]
    error: Optional[str] = None


class HistoryEntry(BaseModel):
    """One evaluation attempt. Never mutated once recorded."""
    model_config = ConfigDict(frozen=True)

    cell_id: int
    timestamp: datetime
    content: str


class Cell(BaseModel):
    """A single notebook cell."""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    id: int
    cell_type: str = CellType.SCRIPTING.value
    content: str = ""
    value: Any = None
    rendered: bool = False
    eval_status: EvalStatus = EvalStatus.NONE
    execution_status: Optional[str] = None
    selected: bool = False
    row_settings: dict[str, dict[str, Any]] = Field(default_factory=dict)
    element_type: str = "div"
    dom_element_id: str = ""
    language: str = "py"

    @classmethod
    def new(cls, cell_id: int, cell_type: str = CellType.SCRIPTING.value) -> "Cell":
        """Create a blank cell with the defaults for its type."""
        cell_type = normalize_cell_type(cell_type)
        return cls(
            id=cell_id,
            cell_type=cell_type,
            row_settings=default_row_settings(cell_type),
        )

    def evolve(self, **changes) -> "Cell":
        """Return a copy of this cell with the given fields replaced."""
        return self.model_copy(update=changes)


class Notebook(BaseModel):
    """
    Root state aggregate.

    A notebook holds:
    - The ordered cells
    - Input and view modes
    - Execution counter, history and registered external dependencies
    - Names the user has bound in the shared execution context

    Instances are never modified; every transition builds a new one.
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    cells: tuple[Cell, ...] = ()
    mode: Mode = Mode.COMMAND
    view_mode: ViewMode = ViewMode.EDITOR
    execution_number: int = INITIAL_EXECUTION_NUMBER
    history: tuple[HistoryEntry, ...] = ()
    external_dependencies: tuple[str, ...] = ()
    user_defined_variables: dict[str, Any] = Field(default_factory=dict)
    languages: dict[str, LanguageInfo] = Field(default_factory=lambda: dict(LANGUAGES))
    last_cell_id: int = -1

    @classmethod
    def new(cls) -> "Notebook":
        """Create a notebook with one selected scripting cell."""
        first = Cell.new(0).evolve(selected=True)
        return cls(cells=(first,), last_cell_id=0)

    @classmethod
    def empty(cls) -> "Notebook":
        """Create a notebook without cells."""
        return cls()

    def evolve(self, **changes) -> "Notebook":
        """Return a copy of this notebook with the given fields replaced."""
        return self.model_copy(update=changes)

    def next_cell_id(self) -> int:
        """Id for the next new cell; greater than every id ever issued."""
        highest = max((c.id for c in self.cells), default=-1)
        return max(highest, self.last_cell_id) + 1

    @property
    def selected_cell(self) -> Optional[Cell]:
        for cell in self.cells:
            if cell.selected:
                return cell
        return None

    @property
    def selected_index(self) -> int:
        """Index of the selected cell, or -1 when nothing is selected."""
        for i, cell in enumerate(self.cells):
            if cell.selected:
                return i
        return -1

    def index_of(self, cell_id: Optional[int]) -> int:
        """Index of the cell with ``cell_id``, or -1."""
        if cell_id is None:
            return -1
        for i, cell in enumerate(self.cells):
            if cell.id == cell_id:
                return i
        return -1

    def get_cell(self, cell_id: int) -> Optional[Cell]:
        index = self.index_of(cell_id)
        return self.cells[index] if index >= 0 else None
