"""
NotebookEngine: holds notebook state and dispatches actions to it.
"""

import logging
from datetime import datetime
from typing import Any, Callable, Mapping, Optional

from nbstate import reducer
from nbstate.actions import EvaluateCell, MoveCellDown, MoveCellUp, SelectCell, is_action, parse_action
from nbstate.bindings import BindingTracker
from nbstate.config import Settings
from nbstate.dependencies import DependencyLoader, ModuleLoader
from nbstate.evaluation import EvaluationContext, evaluate_cell
from nbstate.kernel import NotebookKernel
from nbstate.notebook import Notebook
from nbstate.rendering import MarkdownRenderer, Renderer


logger = logging.getLogger(__name__)


class NotebookEngine:
    """
    The dispatch entry point a UI shell talks to.

    The engine owns:
    - The current Notebook (read-only for callers, replaced on every dispatch)
    - The shared kernel, markdown renderer and dependency loader
    - The binding tracker, whose baseline is taken here
    - Scroll listeners, notified when an action asks for a cell to be shown

    Dispatch is synchronous and each action finishes before the next one.

    When no kernel is passed the engine resets the shared namespace before
    taking its binding baseline, so the same actions on a new engine give the
    same state. Pass ``kernel=`` to run against a namespace that already holds
    bindings.
    """

    def __init__(
        self,
        state: Optional[Notebook] = None,
        kernel: Optional[NotebookKernel] = None,
        renderer: Optional[Renderer] = None,
        loader: Optional[DependencyLoader] = None,
        clock: Callable[[], datetime] = datetime.now,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or Settings.from_env()
        self.state = state if state is not None else Notebook.new()
        if kernel is None:
            # The shell is process-wide; a new notebook starts from a clean namespace.
            kernel = NotebookKernel()
            kernel.reset()
        self.kernel = kernel
        self.renderer = renderer or MarkdownRenderer(self.settings.markdown_extensions)
        self.loader = loader or ModuleLoader(self.kernel)
        self.tracker = BindingTracker(self.kernel)
        self.clock = clock
        self._scroll_listeners: list[Callable[[int], None]] = []

    @property
    def context(self) -> EvaluationContext:
        return EvaluationContext(
            kernel=self.kernel,
            renderer=self.renderer,
            loader=self.loader,
            tracker=self.tracker,
            clock=self.clock,
            comment_marker=self.settings.comment_marker,
        )

    def on_scroll(self, callback: Callable[[int], None]):
        """Register a callback receiving the id of a cell to scroll to."""
        self._scroll_listeners.append(callback)

    def _request_scroll(self, cell_id: Optional[int]):
        if cell_id is None:
            return
        for callback in self._scroll_listeners:
            callback(cell_id)

    def dispatch(self, action: Any) -> Notebook:
        """
        Apply an action and return the new state.

        Args:
            action: An action model, or a mapping parsed with ``parse_action``

        Returns:
            The new notebook state; the unchanged state for unknown actions

        Raises:
            InvalidActionError: If a mapping names a known action but is malformed
        """
        if isinstance(action, Mapping):
            parsed = parse_action(action)
            if parsed is None:
                logger.debug("ignoring unknown action %r", action.get("type"))
                return self.state
            action = parsed
        elif not is_action(action):
            return self.state

        before = self.state
        if isinstance(action, EvaluateCell):
            after = evaluate_cell(before, action.cell_id, self.context)
        else:
            after = reducer.apply(before, action)
        self.state = after

        if isinstance(action, SelectCell) and action.scroll_to_cell:
            if after.get_cell(action.id) is not None:
                self._request_scroll(action.id)
        elif isinstance(action, MoveCellUp):
            selected = before.selected_cell
            self._request_scroll(selected.id if selected else None)
        elif isinstance(action, MoveCellDown):
            index = before.selected_index
            if 0 <= index < len(before.cells) - 1:
                self._request_scroll(before.cells[index + 1].id)
        return after

    def dispatch_all(self, actions) -> Notebook:
        """Dispatch actions in order; returns the final state."""
        for action in actions:
            self.dispatch(action)
        return self.state

    @property
    def user_defined_variables(self) -> dict[str, Any]:
        return self.state.user_defined_variables
