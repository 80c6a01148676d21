"""
Tests for solver outcome types and prove result rendering.
"""
import z3

from provekit import ProveResult, ProveStatus, InstrumentedModel
from provekit.solver import ReasonKind, ReasonUnknown, SatOutcome, SolverResult


def test_reason_unknown_timeout():
    reason = ReasonUnknown.parse("timeout")
    assert reason.kind == ReasonKind.TIMEOUT
    assert str(reason) == "timeout"


def test_reason_unknown_canceled():
    assert ReasonUnknown.parse("canceled").kind == ReasonKind.INTERRUPTED
    assert str(ReasonUnknown.parse("canceled")) == "interrupted"


def test_reason_unknown_other_is_kept_verbatim():
    reason = ReasonUnknown.parse("(incomplete (theory arithmetic))")
    assert reason.kind == ReasonKind.OTHER
    assert str(reason) == "(incomplete (theory arithmetic))"


def test_reason_unknown_empty():
    """An empty reason still renders as something reportable."""
    assert str(ReasonUnknown.parse("")) == "unknown"
    assert str(ReasonUnknown.parse(None)) == "unknown"


def test_prove_result_rendering():
    assert str(ProveResult.proof()) == "Proof"
    assert str(ProveResult.unknown(ReasonUnknown.parse("timeout"))) == "Unknown (reason: timeout)"

    s = z3.Solver()
    s.check()
    cex = ProveResult.counterexample(InstrumentedModel(s.model()))
    assert str(cex) == "Counterexample"
    assert cex.status == ProveStatus.COUNTEREXAMPLE
    assert cex.holds is False


def test_sat_outcome_str():
    outcome = SatOutcome(SolverResult.UNKNOWN, reason=ReasonUnknown.other("sat-without-model"), solver_name="swine")
    assert "sat-without-model" in str(outcome)
    assert "swine" in str(outcome)
