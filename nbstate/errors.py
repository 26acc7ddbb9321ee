"""
Exception types raised by nbstate.
"""


class NbstateError(Exception):
    """Base class for nbstate errors."""


class EvaluationError(NbstateError):
    """Scripting source failed to parse or raised while running.

    The original exception is kept on ``error`` so it can be stored as the
    cell's value.
    """

    def __init__(self, error: BaseException):
        super().__init__(f"{type(error).__name__}: {error}")
        self.error = error


class DependencyLoadError(NbstateError):
    """An external dependency specifier could not be resolved."""

    def __init__(self, specifier: str, reason: str):
        super().__init__(f"could not load {specifier!r}: {reason}")
        self.specifier = specifier
        self.reason = reason


class InvalidActionError(NbstateError):
    """A payload names a known action type but its fields are invalid."""
