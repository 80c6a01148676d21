"""Nonlinear-arithmetic checks through the external ``swine`` solver.

The backend is stateless: every check renders the current Z3 session to
SMT-LIB, strips what swine does not support, and runs the solver on a
temporary file. Swine's models are not read back, so a SAT answer is
reported as an unknown outcome.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence
import logging
import tempfile

import z3

from ..config import ProverConfig
from ..errors import SolverExecutionError
from ..solver.result import ReasonUnknown, SatOutcome, SolverResult
from ..solver.z3_solver import Z3Solver
from .smt2_filter import filter_smt2
from .solver_runner import SolverRunResult, resolve_solver, run_solver

logger = logging.getLogger(__name__)

SAT_WITHOUT_MODEL = "sat-without-model"


def generate_swine_smt2(
    session: Z3Solver,
    assumptions: Sequence[z3.BoolRef] = (),
    *,
    config: Optional[ProverConfig] = None,
) -> str:
    """Render ``session`` plus ``assumptions`` as a filtered swine problem.

    The problem is rendered from a scratch solver holding both, so symbols
    that occur only in the assumptions are declared too.
    """
    config = config or ProverConfig()

    scratch = z3.Solver(ctx=session.ctx)
    scratch.add(*session.assertions())
    scratch.add(*assumptions)
    text = scratch.sexpr().rstrip() + "\n(check-sat)\n"

    return filter_smt2(
        text,
        quantifier_keywords=config.quantifier_keywords,
        unsupported_functions=config.unsupported_functions,
    )


def outcome_from_run(rr: SolverRunResult, solver_name: str = "swine") -> SatOutcome:
    """Map a finished swine run onto the uniform outcome shape."""
    if rr.timed_out:
        reason: Optional[ReasonUnknown] = ReasonUnknown.parse("timeout")
        return SatOutcome(SolverResult.UNKNOWN, reason=reason, solver_name=solver_name, solver_time_ms=rr.time_ms)

    if rr.result == SolverResult.UNSAT:
        return SatOutcome(SolverResult.UNSAT, solver_name=solver_name, solver_time_ms=rr.time_ms)

    if rr.result == SolverResult.SAT:
        reason = ReasonUnknown.other(SAT_WITHOUT_MODEL)
    else:
        detail = rr.stdout.strip() or rr.stderr.strip() or "unknown"
        reason = ReasonUnknown.other(detail.splitlines()[0])
    return SatOutcome(SolverResult.UNKNOWN, reason=reason, solver_name=solver_name, solver_time_ms=rr.time_ms)


class SwineBackend:
    """Decides satisfiability by running swine as a subprocess."""

    def __init__(self, config: Optional[ProverConfig] = None):
        self.config = config or ProverConfig()
        self.spec = resolve_solver(self.config.swine_executable)

    def check(self, session: Z3Solver, assumptions: Sequence[z3.BoolRef] = ()) -> SatOutcome:
        smt2_text = generate_swine_smt2(session, assumptions, config=self.config)

        try:
            with tempfile.TemporaryDirectory(prefix="provekit-swine-") as td:
                smt2_path = Path(td) / "query.smt2"
                smt2_path.write_text(smt2_text)
                rr = run_solver(self.spec, smt2_path, timeout_s=self.config.swine_timeout_s)
        except OSError as e:
            raise SolverExecutionError(f"failed to prepare swine problem file: {e}") from e

        outcome = outcome_from_run(rr, self.spec.name)
        if rr.result == SolverResult.SAT:
            logger.warning("%s answered sat; counterexample extraction is not supported", self.spec.name)
        logger.debug("swine outcome: %s", outcome)
        return outcome
