"""
Tests for the access-tracking counterexample model.
"""
from fractions import Fraction

import pytest
import z3

from provekit.errors import NoValueError, UndecodableValueError
from provekit.model import InstrumentedModel, ModelConsistency


def _model_for(*constraints):
    s = z3.Solver()
    s.add(*constraints)
    assert s.check() == z3.sat
    return InstrumentedModel(s.model())


def test_evaluate_values():
    b = z3.Bool('b')
    n = z3.Int('n')
    r = z3.Real('r')
    model = _model_for(b, n == 42, r == z3.RealVal("5/2"))

    assert model.evaluate_boolean(b) is True
    assert model.evaluate_integer(n) == 42
    assert model.evaluate_rational(r) == Fraction(5, 2)
    assert model.consistency == ModelConsistency.CONSISTENT


def test_evaluate_rational_is_exact():
    """A third stays a third, not a float approximation."""
    x = z3.Real('x')
    model = _model_for(3 * x == 1)

    value = model.evaluate_rational(x)
    assert value == Fraction(1, 3)
    assert isinstance(value, Fraction)


def test_evaluate_with_model_completion():
    """Symbols the model does not mention still get a value."""
    x = z3.Int('x')
    unconstrained = z3.Int('unconstrained')
    model = _model_for(x == 1)

    assert isinstance(model.evaluate_integer(unconstrained), int)


def test_evaluate_marks_declarations():
    x, y, z = z3.Ints('x y z')
    model = _model_for(x == 1, y == 2, z == 3)

    assert model.evaluate_integer(x + y) == 3
    assert "x" in model.accessed_decls
    assert "y" in model.accessed_decls
    assert {d.name() for d in model.iter_unaccessed()} == {"z"}


def test_iter_unaccessed_is_restartable():
    x, y = z3.Ints('x y')
    model = _model_for(x == 1, y == 2)

    first = sorted(d.name() for d in model.iter_unaccessed())
    second = sorted(d.name() for d in model.iter_unaccessed())
    assert first == second == ["x", "y"]

    model.evaluate_integer(y)
    assert [d.name() for d in model.iter_unaccessed()] == ["x"]


def test_function_applications_mark_the_function():
    f = z3.Function('f', z3.IntSort(), z3.IntSort())
    x = z3.Int('x')
    model = _model_for(f(x) == 7, x == 0)

    assert model.evaluate_integer(f(x)) == 7
    assert list(model.iter_unaccessed()) == []


def test_get_func_interp_marks_declaration():
    f = z3.Function('f', z3.IntSort(), z3.IntSort())
    model = _model_for(f(1) == 2)

    interp = model.get_func_interp(f)
    assert interp is not None
    assert "f" in model.accessed_decls


def test_failed_evaluation_leaves_no_trace():
    """A failing evaluation must not mark its subterms visited."""
    x = z3.Int('x')
    b = z3.Bool('b')
    model = _model_for(x == 1, b)

    with pytest.raises(UndecodableValueError):
        model.evaluate_integer(z3.If(b, x, x + 1) > 0)

    assert model.accessed_decls == set()
    assert model.accessed_exprs == set()


def test_atomically_rolls_back_partial_sequence():
    x, y = z3.Ints('x y')
    b = z3.Bool('b')
    model = _model_for(x == 1, y == 2, b)
    model.evaluate_integer(y)
    decls_before = model.accessed_decls
    exprs_before = model.accessed_exprs

    def evaluate_both():
        return model.evaluate_integer(x), model.evaluate_integer(b)

    with pytest.raises(UndecodableValueError):
        model.atomically(evaluate_both)

    assert model.accessed_decls == decls_before
    assert model.accessed_exprs == exprs_before
    assert "x" not in model.accessed_decls


def test_atomically_keeps_successful_work():
    x, y = z3.Ints('x y')
    model = _model_for(x == 1, y == 2)

    total = model.atomically(lambda: model.evaluate_integer(x) + model.evaluate_integer(y))

    assert total == 3
    assert {"x", "y"} <= model.accessed_decls


def test_eval_failure_is_no_value(monkeypatch):
    x = z3.Int('x')
    model = _model_for(x == 1)

    def failing_eval(term, model_completion=False):
        raise z3.Z3Exception("failed to evaluate expression in the model")

    monkeypatch.setattr(model.model, "eval", failing_eval)

    with pytest.raises(NoValueError) as excinfo:
        model.evaluate_integer(x + 1)
    assert excinfo.value.term is not None
    assert model.accessed_decls == set()


def test_shared_subterms_are_visited_once():
    """A term with 2**200 paths but 201 distinct nodes is walked in linear time."""
    x = z3.Int('x')
    model = _model_for(x == 0)

    t = x
    for _ in range(200):
        t = t + t

    assert model.evaluate_integer(t) == 0
    assert len(model.accessed_exprs) == 201
    assert model.accessed_decls == {"x"}


def test_reset_accessed():
    x = z3.Int('x')
    model = _model_for(x == 1)
    model.evaluate_integer(x)

    model.reset_accessed()

    assert model.accessed_decls == set()
    assert [d.name() for d in model.iter_unaccessed()] == ["x"]


def test_str_defers_to_z3():
    x = z3.Int('x')
    model = _model_for(x == 5)
    assert "x = 5" in str(model)


def test_failed_evaluation_does_not_add_declarations():
    """Model completion during a failed evaluation leaves the leftovers unchanged."""
    x = z3.Int('x')
    c = z3.Bool('c')
    model = _model_for(x == 1)
    assert [d.name() for d in model.iter_unaccessed()] == ["x"]

    with pytest.raises(UndecodableValueError):
        model.evaluate_integer(c)

    assert [d.name() for d in model.iter_unaccessed()] == ["x"]


def test_completed_symbols_are_not_leftovers():
    x = z3.Int('x')
    fresh = z3.Int('fresh')
    model = _model_for(x == 1)

    model.evaluate_integer(fresh)

    assert [d.name() for d in model.iter_unaccessed()] == ["x"]


def test_atomically_rolls_back_on_interrupt():
    x, y = z3.Ints('x y')
    model = _model_for(x == 1, y == 2)

    def interrupted():
        model.evaluate_integer(x)
        raise KeyboardInterrupt

    with pytest.raises(KeyboardInterrupt):
        model.atomically(interrupted)

    assert model.accessed_decls == set()
    # the region is closed again, so later work is not kept on the undo trail
    model.evaluate_integer(y)
    assert model._accessed._open_regions == 0
    assert model._accessed._trail == []
