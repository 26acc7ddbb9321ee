"""
CLI for nbstate: replay action scripts against a notebook and show the result.
"""

import json
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from nbstate import NotebookEngine, Notebook, Settings
from nbstate.actions import ACTION_TYPES
from nbstate.errors import InvalidActionError
from nbstate.history import entries_for
from nbstate.utils import (
    format_rich_value,
    get_cell_status,
    get_cell_type_icon,
    get_syntax_lexer,
    truncate_text,
)


console = Console()


def load_actions(path: Path) -> list[dict]:
    """Read actions from a JSON array or a JSON-lines file."""
    text = Path(path).read_text()
    stripped = text.lstrip()
    if stripped.startswith("["):
        return json.loads(stripped)
    return [json.loads(line) for line in text.splitlines() if line.strip()]


def display_cells(notebook: Notebook, show_history: bool = False):
    """Display all cells with the selected cell highlighted."""
    if not notebook.cells:
        console.print("[dim]No cells[/dim]")
        return

    for cell in notebook.cells:
        status_char, status_style = get_cell_status(cell)
        cursor = " > " if cell.selected else "   "
        exec_num = cell.execution_status or " "
        title_style = "bold bright_green" if cell.selected else status_style
        title = (
            f"[{title_style}]{cursor}{get_cell_type_icon(cell.cell_type)}"
            f"  In [{exec_num}]  #{cell.id}[/{title_style}]"
        )

        if cell.content.strip():
            content = Syntax(cell.content, get_syntax_lexer(cell.cell_type), theme="monokai", line_numbers=True)
        else:
            content = Text("(empty)", style="dim italic")

        console.print(Panel(
            content,
            title=title,
            title_align="left",
            subtitle=f"[{status_style}]{status_char}[/{status_style}]",
            subtitle_align="right",
            border_style="bright_green" if cell.selected else status_style,
            padding=(0, 1),
        ))

        if cell.rendered and cell.value is not None:
            console.print(Panel(
                format_rich_value(cell),
                title=f"[blue]Out [{cell.execution_status or ''}][/blue]",
                title_align="left",
                border_style="red" if status_char == "err" else "blue",
                padding=(0, 1),
            ))

        if show_history:
            for entry in entries_for(notebook, cell.id):
                console.print(f"     [dim]{entry.timestamp.isoformat()}  {escape(repr(truncate_text(entry.content, 60)))}[/dim]")


def display_variables(notebook: Notebook):
    """Show user-defined variables in a table."""
    variables = notebook.user_defined_variables
    if not variables:
        console.print("[yellow]No user-defined variables[/yellow]")
        return

    table = Table(title="Variables", border_style="blue")
    table.add_column("Name", style="bold cyan")
    table.add_column("Type", style="dim")
    table.add_column("Value")
    for name, value in sorted(variables.items()):
        table.add_row(name, type(value).__name__, escape(truncate_text(repr(value), 60)))
    console.print(table)


@click.group()
@click.option("--log-level", default=None, help="Logging level (default: NBSTATE_LOG_LEVEL or WARNING)")
def main(log_level):
    """nbstate: notebook state engine."""
    level = log_level or Settings.from_env().log_level
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@main.command()
@click.argument("path", type=click.Path(exists=True))
@click.option("--history", "show_history", is_flag=True, help="Show history entries under each cell")
@click.option("--variables", "show_variables", is_flag=True, help="Show user-defined variables")
def replay(path: str, show_history: bool, show_variables: bool):
    """Dispatch the actions in PATH against a new notebook."""
    try:
        actions = load_actions(Path(path))
    except json.JSONDecodeError as e:
        console.print(f"[red]Could not read actions: {escape(str(e))}[/red]")
        sys.exit(1)

    engine = NotebookEngine()
    for i, action in enumerate(actions):
        try:
            engine.dispatch(action)
        except InvalidActionError as e:
            console.print(f"[red]Action {i}: {escape(str(e))}[/red]")
            sys.exit(1)

    state = engine.state
    console.print(Panel(
        f"[bold]{len(actions)}[/bold] actions  |  "
        f"[dim]{len(state.cells)} cells, execution {state.execution_number}, "
        f"{len(state.history)} history entries[/dim]",
        title="[bold blue]nbstate[/bold blue]",
        border_style="blue",
    ))
    display_cells(state, show_history=show_history)
    if state.external_dependencies:
        console.print(f"[dim]Dependencies:[/dim] {', '.join(state.external_dependencies)}")
    if show_variables:
        display_variables(state)


@main.command()
def actions():
    """List the supported action types."""
    table = Table(title="Actions", border_style="blue", show_lines=True)
    table.add_column("Type", style="bold cyan")
    table.add_column("Fields")
    for name, cls in ACTION_TYPES.items():
        fields = [
            f.alias or field_name
            for field_name, f in cls.model_fields.items()
            if field_name != "type"
        ]
        table.add_row(name, ", ".join(fields) or "[dim]-[/dim]")
    console.print(table)


if __name__ == "__main__":
    main()
