"""
Selection of the decision backend that services a prover.
"""
from enum import Enum
from typing import Optional, Sequence

import z3

from ..config import ProverConfig
from .base import SolverBackend
from .result import SatOutcome
from .z3_solver import Z3Solver


class BackendKind(Enum):
    """Which decision procedure answers a prover's checks."""
    Z3 = "z3"
    SWINE = "swine"


class Z3Backend:
    """Answers checks in-process on the session itself."""

    def check(self, session: Z3Solver, assumptions: Sequence[z3.BoolRef] = ()) -> SatOutcome:
        return session.check_sat(assumptions)


def create_backend(kind: BackendKind, config: Optional[ProverConfig] = None) -> SolverBackend:
    """Instantiate the backend for ``kind``."""
    if kind == BackendKind.Z3:
        return Z3Backend()
    if kind == BackendKind.SWINE:
        # deferred: the swine adapter imports this package
        from ..verification.swine import SwineBackend
        return SwineBackend(config)
    raise ValueError(f"Unsupported backend kind: {kind!r}")
