"""
Solver outcome types shared by all decision backends.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class SolverResult(Enum):
    """Result from SMT solver check."""
    SAT = "sat"
    UNSAT = "unsat"
    UNKNOWN = "unknown"


class ReasonKind(Enum):
    """Classification of why a solver gave up."""
    TIMEOUT = "timeout"
    INTERRUPTED = "interrupted"
    OTHER = "other"


@dataclass(frozen=True)
class ReasonUnknown:
    """Why a check ended with an unknown result.

    Z3 reports reasons as free-form strings. The ones we act on (timeouts
    and cancellation) are given their own kind, everything else is kept
    verbatim in ``detail``.
    """
    kind: ReasonKind
    detail: str = ""

    @classmethod
    def parse(cls, text: Optional[str]) -> "ReasonUnknown":
        s = (text or "").strip()
        if s == "timeout":
            return cls(ReasonKind.TIMEOUT)
        if s in ("canceled", "interrupted"):
            return cls(ReasonKind.INTERRUPTED)
        return cls(ReasonKind.OTHER, s or "unknown")

    @classmethod
    def other(cls, detail: str) -> "ReasonUnknown":
        return cls(ReasonKind.OTHER, detail)

    def __str__(self) -> str:
        if self.kind == ReasonKind.OTHER:
            return self.detail
        return self.kind.value


@dataclass
class SatOutcome:
    """Uniform outcome of a satisfiability check on any backend.

    Attributes:
        result: Raw solver result (SAT/UNSAT/UNKNOWN)
        model: Backend-native model handle for SAT results, if available
        reason: Reason for UNKNOWN results
        solver_name: Name of the solver backend used
        solver_time_ms: Time taken by solver in milliseconds
    """
    result: SolverResult
    model: Optional[Any] = None
    reason: Optional[ReasonUnknown] = None
    solver_name: str = "unknown"
    solver_time_ms: float = 0.0

    def __str__(self) -> str:
        if self.result == SolverResult.UNKNOWN:
            return f"{self.result.value} (reason: {self.reason}) ({self.solver_name}, {self.solver_time_ms:.2f}ms)"
        return f"{self.result.value} ({self.solver_name}, {self.solver_time_ms:.2f}ms)"
