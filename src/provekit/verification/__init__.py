"""External-solver checks over SMT-LIB files.

Problems are rendered from the in-process session to SMT-LIBv2 text,
filtered down to what the external tool supports, and handed to the
solver as a subprocess.
"""

from .solver_runner import (
    SolverSpec,
    SolverRunResult,
    classify_solver_output,
    resolve_solver,
    run_solver,
    is_solver_available,
)
from .smt2_filter import filter_smt2, iter_toplevel_terms
from .swine import SwineBackend, generate_swine_smt2, outcome_from_run

__all__ = [
    "SolverSpec",
    "SolverRunResult",
    "classify_solver_output",
    "resolve_solver",
    "run_solver",
    "is_solver_available",
    "filter_smt2",
    "iter_toplevel_terms",
    "SwineBackend",
    "generate_swine_smt2",
    "outcome_from_run",
]
