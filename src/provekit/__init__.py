"""
Proof oracle on top of SMT solvers.

This package decides validity of formulas over booleans, integers and
rationals, using Z3 in-process or an external nonlinear-arithmetic solver,
and turns counterexamples into exact Python values.
"""

__version__ = "0.1.0"

from .config import ProverConfig
from .errors import (
    ProverError,
    ScopeError,
    BackendError,
    SolverNotFoundError,
    SolverExecutionError,
    SmtEvalError,
    NoValueError,
    UndecodableValueError,
)
from .solver import (
    BackendKind,
    ReasonKind,
    ReasonUnknown,
    SatOutcome,
    SolverResult,
    Z3Solver,
)
from .model import InstrumentedModel, ModelConsistency
from .prover import Prover, ProveResult, ProveStatus

__all__ = [
    "ProverConfig",
    "ProverError",
    "ScopeError",
    "BackendError",
    "SolverNotFoundError",
    "SolverExecutionError",
    "SmtEvalError",
    "NoValueError",
    "UndecodableValueError",
    "BackendKind",
    "ReasonKind",
    "ReasonUnknown",
    "SatOutcome",
    "SolverResult",
    "Z3Solver",
    "InstrumentedModel",
    "ModelConsistency",
    "Prover",
    "ProveResult",
    "ProveStatus",
]
