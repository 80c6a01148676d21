"""
Abstract base interface for satisfiability backends.
"""
from typing import Protocol, Sequence

import z3

from .result import SatOutcome
from .z3_solver import Z3Solver


class SolverBackend(Protocol):
    """Protocol defining the interface for decision backends.

    A backend decides satisfiability of the assertions held in a
    :class:`Z3Solver` session, optionally conjoined with extra assumptions.
    The session stays the single source of truth for scopes and
    assertions; backends never modify it.
    """

    def check(self, session: Z3Solver, assumptions: Sequence[z3.BoolRef] = ()) -> SatOutcome:
        """Check satisfiability of the session's assertions.

        Args:
            session: Solver session holding the current assertions
            assumptions: Extra formulas assumed for this check only

        Returns:
            SatOutcome with sat/unsat/unknown status
        """
        ...
