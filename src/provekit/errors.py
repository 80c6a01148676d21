"""
Exception types raised by the prover and its backends.
"""
from typing import Any, Optional


class ProverError(Exception):
    """Base exception for all provekit errors."""
    pass


class ScopeError(ProverError, RuntimeError):
    """Raised on unbalanced scope operations, e.g. popping level 0."""
    pass


class BackendError(ProverError):
    """Raised when a decision backend fails to produce an outcome."""
    pass


class SolverNotFoundError(BackendError):
    """Raised when an external solver executable cannot be located."""

    def __init__(self, message: str, executable: str):
        super().__init__(message)
        self.executable = executable


class SolverExecutionError(BackendError):
    """Raised when launching or talking to an external solver fails."""
    pass


class SmtEvalError(ProverError):
    """Raised when a term cannot be evaluated to a concrete value.

    Attributes:
        term: The term whose evaluation failed (may be None)
    """

    def __init__(self, message: str, term: Optional[Any] = None):
        super().__init__(message)
        self.term = term


class NoValueError(SmtEvalError):
    """The solver failed to evaluate a value."""
    pass


class UndecodableValueError(SmtEvalError):
    """The solver produced a value that could not be parsed."""
    pass
