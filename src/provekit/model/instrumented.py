"""
Z3 models that remember which of their parts were looked at.
"""
from enum import Enum
from fractions import Fraction
from typing import Callable, Iterator, List, Optional, Set, Tuple, TypeVar

import z3

from ..errors import NoValueError
from .numeric import decode_bool, decode_int, decode_rational

T = TypeVar("T")


class ModelConsistency(Enum):
    """Whether a model is guaranteed to satisfy the checked constraints.

    Models from SAT results are consistent. Z3 can also hand out a model
    after an UNKNOWN result; such a model is useful for localizing errors
    but carries no guarantee.
    """
    CONSISTENT = "consistent"
    UNKNOWN = "unknown"


class AccessedDecls:
    """Declarations and subexpressions visited during evaluation.

    Declarations are keyed by name, expressions by their Z3 AST id (Z3
    hash-conses terms, so equal ids mean structurally equal terms).

    While an atomic region is open every insertion is also recorded on a
    trail, so a failed region can be undone without copying the sets.
    """

    def __init__(self):
        self.decls: Set[str] = set()
        self.exprs: Set[int] = set()
        self._trail: List[Tuple[bool, object]] = []
        self._open_regions = 0

    def begin(self) -> int:
        self._open_regions += 1
        return len(self._trail)

    def commit(self) -> None:
        self._open_regions -= 1
        if self._open_regions == 0:
            self._trail.clear()

    def rollback(self, mark: int) -> None:
        while len(self._trail) > mark:
            is_decl, key = self._trail.pop()
            if is_decl:
                self.decls.discard(key)
            else:
                self.exprs.discard(key)
        self.commit()

    def mark_decl_name(self, name: str) -> None:
        if name in self.decls:
            return
        self.decls.add(name)
        if self._open_regions:
            self._trail.append((True, name))

    def _insert_expr(self, key: int) -> bool:
        if key in self.exprs:
            return False
        self.exprs.add(key)
        if self._open_regions:
            self._trail.append((False, key))
        return True

    def mark_expr(self, ast: z3.ExprRef) -> None:
        self._insert_expr(ast.get_id())
        stack = [ast]
        while stack:
            e = stack.pop()
            if not z3.is_app(e):
                continue
            if e.decl().kind() == z3.Z3_OP_UNINTERPRETED:
                self.mark_decl_name(e.decl().name())
            if e.num_args() > 0:
                for child in e.children():
                    # solver-generated terms share subterms heavily, so only
                    # walk a child the first time it is seen
                    if self._insert_expr(child.get_id()):
                        stack.append(child)


class InstrumentedModel:
    """A Z3 model that keeps track of the accessed constants.

    This is used to print everything a caller understood about a
    counterexample (through the ``evaluate_*`` methods) followed by the
    assignments nobody asked for, e.g. auxiliary symbols created by Z3.
    """

    def __init__(self, model: z3.ModelRef, consistency: ModelConsistency = ModelConsistency.CONSISTENT):
        self._model = model
        self._consistency = consistency
        self._accessed = AccessedDecls()
        # model completion adds interpretations to the z3 model, so the
        # assignment's own declarations are fixed here
        self._decls: List[z3.FuncDeclRef] = list(model.decls())

    @property
    def model(self) -> z3.ModelRef:
        return self._model

    @property
    def consistency(self) -> ModelConsistency:
        return self._consistency

    @property
    def accessed_decls(self) -> Set[str]:
        return set(self._accessed.decls)

    @property
    def accessed_exprs(self) -> Set[int]:
        return set(self._accessed.exprs)

    def atomically(self, fn: Callable[[], T]) -> T:
        """Run ``fn``, rolling back any visited decls/exprs if it raises."""
        mark = self._accessed.begin()
        succeeded = False
        try:
            res = fn()
            succeeded = True
        finally:
            if succeeded:
                self._accessed.commit()
            else:
                self._accessed.rollback(mark)
        return res

    def eval_ast(self, ast: z3.ExprRef, model_completion: bool = True) -> z3.ExprRef:
        """Evaluate ``ast`` in this model and mark it visited.

        With ``model_completion`` Z3 assigns a value even to symbols the
        model leaves unconstrained.

        Raises:
            NoValueError: Z3 could not evaluate the term
        """
        self._accessed.mark_expr(ast)
        try:
            return self._model.eval(ast, model_completion=model_completion)
        except z3.Z3Exception as e:
            raise NoValueError(f"solver failed to evaluate {ast}: {e}", ast) from e

    def evaluate_boolean(self, term: z3.BoolRef) -> bool:
        return self.atomically(lambda: decode_bool(self.eval_ast(term)))

    def evaluate_integer(self, term: z3.ArithRef) -> int:
        return self.atomically(lambda: decode_int(self.eval_ast(term)))

    def evaluate_rational(self, term: z3.ArithRef) -> Fraction:
        return self.atomically(lambda: decode_rational(self.eval_ast(term)))

    def get_func_interp(self, decl: z3.FuncDeclRef) -> Optional[object]:
        """Return the interpretation of ``decl`` and mark it visited.

        Constants yield their value, functions a ``z3.FuncInterp``.
        """
        self._accessed.mark_decl_name(decl.name())
        return self._model.get_interp(decl)

    def iter_unaccessed(self) -> Iterator[z3.FuncDeclRef]:
        """Iterate over the model's declarations that were not accessed so far.

        Symbols that only received a value through model completion are
        not part of the assignment and are never listed.
        """
        return (decl for decl in self._decls if decl.name() not in self._accessed.decls)

    def reset_accessed(self) -> None:
        self._accessed = AccessedDecls()

    def __str__(self) -> str:
        return str(self._model)

    def __repr__(self) -> str:
        return f"InstrumentedModel({self._consistency.value}, {len(self._decls)} decls)"
