"""Solver abstraction layer for the prover.

Backends share one uniform outcome shape (:class:`SatOutcome`) so the
prover never needs to know which decision procedure answered.
"""

from .base import SolverBackend
from .result import ReasonKind, ReasonUnknown, SatOutcome, SolverResult
from .z3_solver import Z3Solver
from .dispatch import BackendKind, Z3Backend, create_backend

__all__ = [
    "SolverBackend",
    "ReasonKind",
    "ReasonUnknown",
    "SatOutcome",
    "SolverResult",
    "Z3Solver",
    "BackendKind",
    "Z3Backend",
    "create_backend",
]
