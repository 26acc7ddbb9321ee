"""
NotebookKernel: the shared execution context scripting cells run in.
"""

import logging
from typing import Any, Optional

from IPython.core.interactiveshell import InteractiveShell
from IPython.utils.capture import capture_output

from nbstate.errors import EvaluationError


logger = logging.getLogger(__name__)


class NotebookKernel:
    """
    Shared, unisolated execution context backed by IPython.

    Wraps the process-wide ``InteractiveShell`` instance, so every kernel in a
    process sees the same namespace:
    - ``execute`` runs source and returns the value of its last expression
    - ``get_bindings`` snapshots the visible names for the binding tracker
    - stdout/stderr produced while running are captured, not printed
    """

    def __init__(self, shell: Optional[InteractiveShell] = None):
        self.ip = shell or InteractiveShell.instance()
        self.last_stdout = ""
        self.last_stderr = ""
        self._setup_namespace()

    def _setup_namespace(self):
        """Mark the namespace as owned by a notebook."""
        self.ip.user_ns["__nbstate__"] = True

    def execute(self, source: str) -> Any:
        """
        Run source in the shared namespace.

        Args:
            source: Python source of a scripting cell

        Returns:
            Value of the trailing expression, or None

        Raises:
            EvaluationError: If the source fails to parse or raises
        """
        try:
            with capture_output() as captured:
                result = self.ip.run_cell(source, silent=False)
        except Exception as e:
            raise EvaluationError(e) from e

        self.last_stdout = captured.stdout
        self.last_stderr = captured.stderr

        error = result.error_before_exec or result.error_in_exec
        if error is not None:
            logger.info("execution failed: %s: %s", type(error).__name__, error)
            raise EvaluationError(error)
        return result.result

    def get_bindings(self) -> dict[str, Any]:
        """Return a snapshot of every name bound in the namespace."""
        return dict(self.ip.user_ns)

    def get_variable(self, name: str) -> Any:
        """Get a variable from the namespace."""
        return self.ip.user_ns.get(name)

    def set_variable(self, name: str, value: Any):
        """Set a variable in the namespace."""
        self.ip.user_ns[name] = value

    def del_variable(self, name: str):
        """Delete a variable from the namespace."""
        if name in self.ip.user_ns:
            del self.ip.user_ns[name]

    def reset(self):
        """Reset the namespace to a clean state."""
        self.ip.reset()
        self.last_stdout = ""
        self.last_stderr = ""
        self._setup_namespace()
