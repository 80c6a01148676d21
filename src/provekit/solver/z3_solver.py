"""
Z3 SMT solver backend implementation.
"""
import logging
import time
from typing import List, Optional, Sequence

import z3

from .result import ReasonUnknown, SatOutcome, SolverResult

logger = logging.getLogger(__name__)


class Z3Solver:
    """Incremental Z3 solver session.

    Owns one ``z3.Solver`` and exposes the scope and assertion operations
    the prover needs. All checks return a :class:`SatOutcome`.
    """

    def __init__(self, ctx: Optional[z3.Context] = None):
        """Initialize Z3 solver instance.

        Args:
            ctx: Z3 context to create the solver in (defaults to the main context)
        """
        self.solver = z3.Solver(ctx=ctx)

    @property
    def ctx(self) -> z3.Context:
        return self.solver.ctx

    def add_constraint(self, constraint: z3.BoolRef) -> None:
        """Add a Z3 constraint to the solver.

        Args:
            constraint: Z3 boolean expression
        """
        self.solver.add(constraint)

    def check_sat(self, assumptions: Sequence[z3.BoolRef] = ()) -> SatOutcome:
        """Check satisfiability of constraints.

        Args:
            assumptions: Extra formulas assumed for this check only

        Returns:
            SatOutcome carrying the model on SAT and the reason on UNKNOWN
        """
        start_time = time.time()
        result = self.solver.check(*assumptions)
        elapsed_ms = (time.time() - start_time) * 1000
        logger.debug("z3 check (%d assumptions): %s in %.2fms", len(assumptions), result, elapsed_ms)

        if result == z3.sat:
            return SatOutcome(
                result=SolverResult.SAT,
                model=self.solver.model(),
                solver_name="z3",
                solver_time_ms=elapsed_ms,
            )
        elif result == z3.unsat:
            return SatOutcome(
                result=SolverResult.UNSAT,
                solver_name="z3",
                solver_time_ms=elapsed_ms,
            )
        else:
            return SatOutcome(
                result=SolverResult.UNKNOWN,
                reason=self.get_reason_unknown(),
                solver_name="z3",
                solver_time_ms=elapsed_ms,
            )

    def get_model(self) -> Optional[z3.ModelRef]:
        """Return the model of the last check, or None if there is none."""
        try:
            return self.solver.model()
        except z3.Z3Exception:
            return None

    def get_unsat_core(self) -> List[z3.BoolRef]:
        """Return the assumptions used in the last UNSAT proof."""
        return list(self.solver.unsat_core())

    def get_reason_unknown(self) -> ReasonUnknown:
        return ReasonUnknown.parse(self.solver.reason_unknown())

    def assertions(self) -> List[z3.BoolRef]:
        return list(self.solver.assertions())

    def set_timeout(self, timeout_ms: int) -> None:
        """Bound every subsequent check by ``timeout_ms`` milliseconds."""
        self.solver.set("timeout", int(timeout_ms))

    def to_smt2(self) -> str:
        """Render declarations and assertions as SMT-LIB text (no check-sat)."""
        return self.solver.sexpr()

    def push(self) -> None:
        """Push a new assertion scope."""
        self.solver.push()

    def pop(self) -> None:
        """Pop the most recent assertion scope."""
        self.solver.pop()

    def __str__(self) -> str:
        return str(self.solver)

    def __repr__(self) -> str:
        return f"Z3Solver({len(self.solver.assertions())} assertions)"
