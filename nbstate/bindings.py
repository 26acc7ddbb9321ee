"""
BindingTracker: surfaces names the user bound in the shared execution context.
"""

import re
from typing import Any, Iterable, Optional

from nbstate.kernel import NotebookKernel


# Names IPython injects or rewrites while running cells.
NOISY_NAMES = frozenset({
    "_", "__", "___",
    "_i", "_ii", "_iii",
    "_ih", "_oh", "_dh",
    "In", "Out",
    "exit", "quit", "get_ipython",
    "__builtins__", "__builtin__", "__name__", "__doc__",
    "__package__", "__loader__", "__spec__",
    "_exit_code",
})

# Numbered output (_3) and input (_i3) caches.
_CACHE_NAME = re.compile(r"^_i?\d+$")


def is_noisy(name: str) -> bool:
    return name in NOISY_NAMES or bool(_CACHE_NAME.match(name))


class BindingTracker:
    """
    Diffs the kernel's bindings against a baseline taken at creation.

    Every name visible when the tracker is created counts as pre-existing,
    so only names introduced later are reported.
    """

    def __init__(self, kernel: NotebookKernel, extra_baseline: Optional[Iterable[str]] = None):
        self.kernel = kernel
        self.baseline = frozenset(kernel.get_bindings()) | NOISY_NAMES
        if extra_baseline:
            self.baseline |= frozenset(extra_baseline)

    def user_defined_variables(self) -> dict[str, Any]:
        """Map every non-baseline name in the kernel to its current value."""
        return {
            name: value
            for name, value in self.kernel.get_bindings().items()
            if name not in self.baseline and not is_noisy(name)
        }
