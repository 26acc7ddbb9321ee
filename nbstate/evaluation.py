"""
Evaluation dispatcher: per-cell-type evaluation of notebook cells.

Each cell type has a ``CellEvaluator`` that describes what evaluating a cell
produces as an ``EvaluationStep``. ``evaluate_cell`` applies the step to the
notebook in one go: cell fields, history entries, the execution counter,
registered dependencies and the user-defined variables.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Optional, Union

from nbstate import history
from nbstate.bindings import BindingTracker
from nbstate.dependencies import DependencyLoader, parse_specifiers, summarize
from nbstate.errors import EvaluationError
from nbstate.kernel import NotebookKernel
from nbstate.notebook import Cell, CellType, EvalStatus, HistoryEntry, Notebook
from nbstate.reducer import replace_cell, type_name
from nbstate.rendering import Renderer


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Evaluated:
    """Scripting source ran; ``value`` is its trailing expression."""
    value: Any

    status = EvalStatus.SUCCESS


@dataclass(frozen=True)
class Failed:
    """Scripting source failed; ``error`` is the raised exception."""
    error: BaseException

    status = EvalStatus.ERROR

    @property
    def value(self) -> BaseException:
        return self.error


Outcome = Union[Evaluated, Failed]


@dataclass
class EvaluationContext:
    """Collaborators an evaluation may use."""
    kernel: NotebookKernel
    renderer: Renderer
    loader: DependencyLoader
    tracker: BindingTracker
    clock: Callable[[], datetime] = datetime.now
    comment_marker: str = "#"


@dataclass
class EvaluationStep:
    """Everything one evaluation changes."""
    changes: dict[str, Any] = field(default_factory=dict)
    history: tuple[HistoryEntry, ...] = ()
    counted: bool = False
    new_dependencies: tuple[str, ...] = ()
    touched_context: bool = False


class CellEvaluator:
    """Base class; one subclass per cell type."""

    def evaluate(self, state: Notebook, cell: Cell, ctx: EvaluationContext) -> EvaluationStep:
        raise NotImplementedError


def run_source(kernel: NotebookKernel, source: str) -> Outcome:
    """Execute source, folding failures into a ``Failed`` outcome."""
    try:
        return Evaluated(kernel.execute(source))
    except EvaluationError as e:
        return Failed(e.error)


class ScriptingEvaluator(CellEvaluator):
    def evaluate(self, state, cell, ctx):
        # Recorded before running so failed attempts are kept too.
        entry = HistoryEntry(cell_id=cell.id, timestamp=ctx.clock(), content=cell.content)
        outcome = run_source(ctx.kernel, cell.content)
        return EvaluationStep(
            changes={"value": outcome.value, "eval_status": outcome.status, "rendered": True},
            history=(entry,),
            counted=True,
            touched_context=True,
        )


class MarkdownEvaluator(CellEvaluator):
    def evaluate(self, state, cell, ctx):
        return EvaluationStep(changes={
            "value": ctx.renderer.render(cell.content),
            "rendered": True,
            "eval_status": EvalStatus.SUCCESS,
        })


class DependencyEvaluator(CellEvaluator):
    """
    Loads the specifiers listed in the cell that are not registered yet.

    Records accumulate on the cell's value across evaluations. The step is
    counted and logged to history only when something new was loaded.
    """

    def evaluate(self, state, cell, ctx):
        specifiers = parse_specifiers(cell.content, ctx.comment_marker)
        fresh = [s for s in specifiers if s not in state.external_dependencies]
        records = [ctx.loader.load(s) for s in fresh]

        failed = any(r.status == "error" for r in records)
        step = EvaluationStep(changes={
            "value": list(cell.value or []) + records,
            "eval_status": EvalStatus.ERROR if failed else EvalStatus.SUCCESS,
            "rendered": True,
        })
        if records:
            step.history = (HistoryEntry(
                cell_id=cell.id,
                timestamp=ctx.clock(),
                content=summarize([r.src for r in records], ctx.comment_marker),
            ),)
            step.counted = True
            step.new_dependencies = tuple(r.src for r in records)
            step.touched_context = True
        return step


class StylesheetEvaluator(CellEvaluator):
    def evaluate(self, state, cell, ctx):
        return EvaluationStep(changes={"value": cell.content, "rendered": True})


class UnknownEvaluator(CellEvaluator):
    def evaluate(self, state, cell, ctx):
        return EvaluationStep(changes={"rendered": False})


EVALUATORS: dict[str, CellEvaluator] = {
    CellType.SCRIPTING.value: ScriptingEvaluator(),
    CellType.MARKDOWN.value: MarkdownEvaluator(),
    CellType.EXTERNAL_DEPENDENCIES.value: DependencyEvaluator(),
    CellType.STYLESHEET.value: StylesheetEvaluator(),
}

_UNKNOWN = UnknownEvaluator()


def evaluator_for(cell_type: str) -> CellEvaluator:
    return EVALUATORS.get(cell_type, _UNKNOWN)


def _merge_dependencies(registered: tuple[str, ...], new: tuple[str, ...]) -> tuple[str, ...]:
    merged = list(registered)
    for src in new:
        if src not in merged:
            merged.append(src)
    return tuple(merged)


def evaluate_cell(state: Notebook, cell_id: Optional[int], ctx: EvaluationContext) -> Notebook:
    """
    Evaluate a cell and return the resulting notebook.

    Args:
        state: Current notebook
        cell_id: Cell to evaluate; None means the selected cell
        ctx: Collaborators for the evaluation

    Returns:
        New notebook; unchanged in content if the cell does not exist
    """
    index = state.selected_index if cell_id is None else state.index_of(cell_id)
    if index < 0:
        return state.evolve()

    cell = state.cells[index]
    step = evaluator_for(type_name(cell.cell_type)).evaluate(state, cell, ctx)
    logger.debug("evaluated cell %s (%s)", cell.id, cell.cell_type)

    changes = dict(step.changes)
    next_state = history.extend(state, step.history)
    if step.counted:
        next_state, number = history.advance(next_state)
        changes["execution_status"] = str(number)
    if step.new_dependencies:
        next_state = next_state.evolve(external_dependencies=_merge_dependencies(
            next_state.external_dependencies, step.new_dependencies,
        ))
    if step.touched_context:
        next_state = next_state.evolve(user_defined_variables=ctx.tracker.user_defined_variables())
    return replace_cell(next_state, index, cell.evolve(**changes))
