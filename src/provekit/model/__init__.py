"""Counterexample models and exact value extraction."""

from .instrumented import AccessedDecls, InstrumentedModel, ModelConsistency
from .numeric import decode_bool, decode_int, decode_rational, parse_division_text

__all__ = [
    "AccessedDecls",
    "InstrumentedModel",
    "ModelConsistency",
    "decode_bool",
    "decode_int",
    "decode_rational",
    "parse_division_text",
]
