"""
Tests for the notebook state models.
"""

import pytest
from pydantic import ValidationError

from nbstate.config import LANGUAGES
from nbstate.notebook import (
    INITIAL_EXECUTION_NUMBER,
    Cell,
    CellType,
    EvalStatus,
    Mode,
    Notebook,
    ViewMode,
    default_row_settings,
)


class TestCell:
    """Tests for Cell."""

    def test_new_cell_defaults(self):
        cell = Cell.new(3)
        assert cell.id == 3
        assert cell.cell_type == "code"
        assert cell.content == ""
        assert cell.value is None
        assert cell.rendered is False
        assert cell.eval_status == EvalStatus.NONE
        assert cell.execution_status is None
        assert cell.selected is False

    def test_new_cell_accepts_enum_type(self):
        cell = Cell.new(1, CellType.MARKDOWN)
        assert cell.cell_type == "markdown"
        assert type(cell.cell_type) is str

    def test_new_cell_has_row_settings_for_type(self):
        cell = Cell.new(1, CellType.STYLESHEET)
        assert cell.row_settings == default_row_settings("css")

    def test_cells_are_frozen(self):
        cell = Cell.new(0)
        with pytest.raises(ValidationError):
            cell.content = "changed"

    def test_evolve_returns_new_cell(self):
        cell = Cell.new(0)
        changed = cell.evolve(content="x = 1")
        assert changed.content == "x = 1"
        assert cell.content == ""
        assert changed is not cell

    def test_unknown_cell_type_allowed(self):
        cell = Cell.new(0, "plot")
        assert cell.cell_type == "plot"

    def test_scripting_alias_maps_to_code(self):
        cell = Cell.new(0, "scripting")
        assert cell.cell_type == CellType.SCRIPTING.value
        assert cell.row_settings == default_row_settings("code")


class TestDefaultRowSettings:
    """Tests for default_row_settings()."""

    def test_code_output_visible_in_presentation(self):
        settings = default_row_settings("code")
        assert settings["presentation"] == {"input": "collapsed", "output": "visible"}
        assert settings["editor"] == {"input": "visible", "output": "visible"}

    def test_dependencies_collapsed_in_presentation(self):
        settings = default_row_settings("external dependencies")
        assert settings["presentation"]["output"] == "collapsed"

    def test_returns_fresh_dicts(self):
        a = default_row_settings("code")
        a["editor"]["input"] = "scroll"
        assert default_row_settings("code")["editor"]["input"] == "visible"


class TestNotebook:
    """Tests for Notebook."""

    def test_new_has_one_selected_cell(self):
        nb = Notebook.new()
        assert len(nb.cells) == 1
        assert nb.cells[0].id == 0
        assert nb.cells[0].selected

    def test_new_defaults(self):
        nb = Notebook.new()
        assert nb.mode == Mode.COMMAND
        assert nb.view_mode == ViewMode.EDITOR
        assert nb.execution_number == INITIAL_EXECUTION_NUMBER == 0
        assert nb.history == ()
        assert nb.external_dependencies == ()
        assert nb.user_defined_variables == {}

    def test_languages_from_config(self):
        nb = Notebook.new()
        assert nb.languages == LANGUAGES
        assert nb.languages["py"].editor_mode == "python"

    def test_empty(self):
        assert Notebook.empty().cells == ()

    def test_next_cell_id_after_existing(self):
        nb = Notebook(cells=(Cell.new(4), Cell.new(9)))
        assert nb.next_cell_id() == 10

    def test_next_cell_id_respects_high_water_mark(self):
        """Retired ids are never handed out again."""
        nb = Notebook(cells=(Cell.new(1),), last_cell_id=7)
        assert nb.next_cell_id() == 8

    def test_next_cell_id_empty(self):
        assert Notebook.empty().next_cell_id() == 0

    def test_selected_helpers(self):
        nb = Notebook(cells=(Cell.new(0), Cell.new(1).evolve(selected=True)))
        assert nb.selected_index == 1
        assert nb.selected_cell.id == 1

    def test_selected_helpers_without_selection(self):
        nb = Notebook(cells=(Cell.new(0),))
        assert nb.selected_index == -1
        assert nb.selected_cell is None

    def test_index_of_and_get_cell(self):
        nb = Notebook(cells=(Cell.new(5), Cell.new(6)))
        assert nb.index_of(6) == 1
        assert nb.index_of(99) == -1
        assert nb.index_of(None) == -1
        assert nb.get_cell(5).id == 5
        assert nb.get_cell(99) is None

    def test_notebook_is_frozen(self):
        nb = Notebook.new()
        with pytest.raises(ValidationError):
            nb.execution_number = 5
