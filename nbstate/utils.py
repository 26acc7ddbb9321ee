"""
Utility functions for displaying notebook state.
"""

from typing import Any

from rich.syntax import Syntax
from rich.text import Text

from nbstate.notebook import Cell, CellType, DependencyRecord, EvalStatus


def format_value(value: Any) -> str:
    """
    Format a cell value for display (plain text).

    Args:
        value: The ``value`` of a cell

    Returns:
        Formatted string for display
    """
    if value is None:
        return ""
    if isinstance(value, BaseException):
        return f"{type(value).__name__}: {value}"
    if isinstance(value, list) and all(isinstance(v, DependencyRecord) for v in value):
        return "\n".join(format_dependency(v) for v in value)
    if isinstance(value, str):
        return value
    return repr(value)


def format_dependency(record: DependencyRecord) -> str:
    if record.status == "ok":
        return f"{record.src} (ok)"
    return f"{record.src} (error: {record.error or 'unknown'})"


def format_rich_value(cell: Cell):
    """
    Format a cell's value as a Rich renderable.

    Args:
        cell: Evaluated cell

    Returns:
        Rich renderable object for console display
    """
    value = cell.value
    if isinstance(value, BaseException):
        error_text = Text()
        error_text.append(type(value).__name__, style="bold red")
        error_text.append(f": {value}", style="red")
        return error_text

    text = format_value(value)
    if cell.cell_type == CellType.MARKDOWN:
        return Syntax(text, "html", theme="monokai", word_wrap=True)
    if cell.cell_type == CellType.STYLESHEET:
        return Syntax(text, "css", theme="monokai")
    if cell.cell_type == CellType.EXTERNAL_DEPENDENCIES:
        return Text(text, style="red" if cell.eval_status == EvalStatus.ERROR else "green")
    return Syntax(text, "python", theme="monokai", word_wrap=True)


def get_cell_type_icon(cell_type) -> str:
    """Get a short label for the cell type."""
    if hasattr(cell_type, "value"):
        cell_type = cell_type.value
    return {
        CellType.SCRIPTING.value: "py",
        CellType.MARKDOWN.value: "md",
        CellType.EXTERNAL_DEPENDENCIES.value: "dep",
        CellType.STYLESHEET.value: "css",
    }.get(cell_type, "??")


def get_syntax_lexer(cell_type) -> str:
    """Pygments lexer used to show a cell's content."""
    icon = get_cell_type_icon(cell_type)
    return {"py": "python", "md": "markdown", "css": "css"}.get(icon, "text")


def get_cell_status(cell: Cell) -> tuple[str, str]:
    """
    Get status indicator and style for a cell.

    Returns:
        Tuple of (indicator_string, rich_style)
    """
    if cell.eval_status == EvalStatus.ERROR:
        return ("err", "red")
    if cell.eval_status == EvalStatus.SUCCESS or cell.rendered:
        return ("ok", "green")
    return ("--", "dim")


def truncate_text(text: str, max_length: int = 100) -> str:
    """Truncate text to max_length, adding ellipsis if needed."""
    if len(text) <= max_length:
        return text
    return text[: max_length - 3] + "..."
