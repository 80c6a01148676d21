"""
Validity checking on top of a satisfiability solver.

A :class:`Prover` distinguishes assumptions (asserted as-is) from
provables (asserted negated). A formula is proved when the assumptions
together with the negated provables are unsatisfiable.

Example:
    >>> x = z3.Int("x")
    >>> prover = Prover()
    >>> prover.add_assumption(x > 0)
    >>> prover.add_provable(x >= 0)
    >>> str(prover.check_proof())
    'Proof'
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Sequence
import logging

import z3

from .config import ProverConfig
from .errors import ScopeError
from .model.instrumented import InstrumentedModel, ModelConsistency
from .solver.dispatch import BackendKind, create_backend
from .solver.result import ReasonUnknown, SatOutcome, SolverResult
from .solver.z3_solver import Z3Solver

logger = logging.getLogger(__name__)


class ProveStatus(Enum):
    PROOF = "proof"
    COUNTEREXAMPLE = "counterexample"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ProveResult:
    """The result of a prove query.

    Attributes:
        status: Proof, counterexample or unknown
        model: The counterexample (COUNTEREXAMPLE only)
        reason: Why the solver gave up (UNKNOWN only)
    """
    status: ProveStatus
    model: Optional[InstrumentedModel] = None
    reason: Optional[ReasonUnknown] = None

    @classmethod
    def proof(cls) -> "ProveResult":
        return cls(ProveStatus.PROOF)

    @classmethod
    def counterexample(cls, model: InstrumentedModel) -> "ProveResult":
        return cls(ProveStatus.COUNTEREXAMPLE, model=model)

    @classmethod
    def unknown(cls, reason: ReasonUnknown) -> "ProveResult":
        return cls(ProveStatus.UNKNOWN, reason=reason)

    @property
    def holds(self) -> bool:
        return self.status == ProveStatus.PROOF

    def __str__(self) -> str:
        if self.status == ProveStatus.PROOF:
            return "Proof"
        if self.status == ProveStatus.COUNTEREXAMPLE:
            return "Counterexample"
        return f"Unknown (reason: {self.reason})"


class Prover:
    """A prover wraps a SAT solver, but it's used to prove validity of formulas.

    It keeps track of whether any provables were added. If there are none,
    :meth:`check_proof` returns a proof without asking the solver, since
    assumptions alone can never be refuted. Do not add assertions to
    :attr:`solver` directly, that would bypass the tracking.

    Args:
        kind: Which decision procedure answers checks (fixed for the prover's lifetime)
        ctx: Z3 context for the underlying session
        config: Backend settings (defaults to :meth:`ProverConfig.from_env`)
    """

    def __init__(self,
                 kind: BackendKind = BackendKind.Z3,
                 *,
                 ctx: Optional[z3.Context] = None,
                 config: Optional[ProverConfig] = None):
        self._kind = kind
        self._config = config if config is not None else ProverConfig.from_env()
        self._session = Z3Solver(ctx)
        self._backend = create_backend(kind, self._config)
        # number of pushes minus number of pops
        self._level = 0
        # lowest level at which a provable is still asserted
        self._min_level_with_provables: Optional[int] = None

        if self._config.timeout_ms is not None:
            self.set_timeout(self._config.timeout_ms)

    @property
    def kind(self) -> BackendKind:
        return self._kind

    @property
    def config(self) -> ProverConfig:
        return self._config

    @property
    def solver(self) -> Z3Solver:
        """The underlying session. Please do not modify it."""
        return self._session

    @property
    def level(self) -> int:
        """Current scope depth. Useful for consistency assertions."""
        return self._level

    def set_timeout(self, timeout_ms: int) -> None:
        self._session.set_timeout(timeout_ms)

    def add_assumption(self, value: z3.BoolRef) -> None:
        """Add an assumption to this prover."""
        self._session.add_constraint(value)

    def add_provable(self, value: z3.BoolRef) -> None:
        """Add a proof obligation. The negation is what ends up in the solver."""
        self._session.add_constraint(z3.Not(value))
        if self._min_level_with_provables is None:
            self._min_level_with_provables = self._level

    def check_proof(self) -> ProveResult:
        return self.check_proof_assuming(())

    def check_proof_assuming(self, assumptions: Iterable[z3.BoolRef]) -> ProveResult:
        """Check validity, additionally assuming ``assumptions`` for this check.

        Raises:
            BackendError: the backend could not be run
        """
        if self._min_level_with_provables is None:
            return ProveResult.proof()

        outcome = self._backend.check(self._session, list(assumptions))
        logger.debug("check at level %d: %s", self._level, outcome)
        return self._to_prove_result(outcome)

    @staticmethod
    def _to_prove_result(outcome: SatOutcome) -> ProveResult:
        if outcome.result == SolverResult.UNSAT:
            return ProveResult.proof()
        if outcome.result == SolverResult.SAT:
            return ProveResult.counterexample(InstrumentedModel(outcome.model, ModelConsistency.CONSISTENT))
        return ProveResult.unknown(outcome.reason or ReasonUnknown.other("unknown"))

    def check_sat(self) -> SolverResult:
        """Do the regular SAT check on the in-process session."""
        return self._session.check_sat().result

    def get_model(self) -> Optional[z3.ModelRef]:
        return self._session.get_model()

    def get_unsat_core(self) -> List[z3.BoolRef]:
        return self._session.get_unsat_core()

    def get_reason_unknown(self) -> ReasonUnknown:
        return self._session.get_reason_unknown()

    def push(self) -> None:
        self._session.push()
        self._level += 1

    def pop(self) -> None:
        """Close the innermost scope.

        Raises:
            ScopeError: no scope is open
        """
        if self._level == 0:
            raise ScopeError("cannot pop level 0")
        self._session.pop()
        self._level -= 1
        if self._min_level_with_provables is not None and self._min_level_with_provables > self._level:
            self._min_level_with_provables = None

    def to_exists_forall(self, universal: Sequence[z3.ExprRef]) -> "Prover":
        """Create an exists-forall prover.

        The given constants are universally quantified, all others are
        existentially quantified. The returned prover should be used through
        :meth:`check_sat`: it is satisfiable iff the current assertions are
        not valid over the universal constants.
        """
        ctx = self._session.ctx
        assertions = self._session.assertions()
        conjunction = z3.And(assertions) if assertions else z3.BoolVal(True, ctx)
        body = z3.Not(conjunction)
        universal = list(universal)
        theorem = z3.ForAll(universal, body) if universal else body

        res = Prover(BackendKind.Z3, ctx=ctx, config=self._config)
        res.add_assumption(theorem)
        return res

    def get_smtlib(self) -> str:
        """Return the SMT-LIB that represents the solver state."""
        return self._session.to_smt2()

    def __repr__(self) -> str:
        return f"Prover({self._kind.value}, level={self._level})"
