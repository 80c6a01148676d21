"""Drop SMT-LIB commands that an external solver cannot handle.

Works on raw text: the input is split into balanced-parenthesis top-level
terms and each term is kept or dropped as a whole.
"""

from __future__ import annotations

from typing import Iterator, Sequence
import re


def iter_toplevel_terms(text: str) -> Iterator[str]:
    """Yield each top-level term together with the text preceding it.

    Trailing text after the last closing parenthesis is discarded.
    """
    depth = 0
    start = 0
    for i, c in enumerate(text):
        if c == "(":
            depth += 1
        elif c == ")":
            depth -= 1
            if depth == 0:
                yield text[start : i + 1]
                start = i + 1


def filter_smt2(
    text: str,
    *,
    quantifier_keywords: Sequence[str] = ("forall", "exists"),
    unsupported_functions: Sequence[str] = ("exp",),
) -> str:
    """Remove quantified terms and declarations of unsupported functions."""
    decl_patterns = [
        re.compile(r"\(declare-fun\s+" + re.escape(name) + r"[\s(]")
        for name in unsupported_functions
    ]

    out: list[str] = []
    for term in iter_toplevel_terms(text):
        if any(kw in term for kw in quantifier_keywords):
            continue
        if any(p.search(term) for p in decl_patterns):
            continue
        out.append(term)
    return "".join(out)
