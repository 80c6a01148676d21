"""
Prover configuration.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional, Tuple
import os


@dataclass(frozen=True)
class ProverConfig:
    """Settings shared by a prover and the backends it dispatches to.

    Attributes:
        swine_executable: Name or path of the nonlinear-arithmetic solver
        timeout_ms: Timeout applied to the in-process Z3 session
        swine_timeout_s: Wall-clock limit for one external solver run
        unsupported_functions: Declarations dropped before calling swine
        quantifier_keywords: Keywords marking terms dropped before calling swine
    """
    swine_executable: str = "swine"
    timeout_ms: Optional[int] = None
    swine_timeout_s: Optional[float] = None
    unsupported_functions: Tuple[str, ...] = ("exp",)
    quantifier_keywords: Tuple[str, ...] = ("forall", "exists")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ProverConfig":
        """Build a config, letting $PROVEKIT_SWINE and $PROVEKIT_TIMEOUT_MS override defaults."""
        env = os.environ if environ is None else environ

        kwargs = {}
        swine = env.get("PROVEKIT_SWINE")
        if swine:
            kwargs["swine_executable"] = swine

        timeout = env.get("PROVEKIT_TIMEOUT_MS")
        if timeout:
            try:
                kwargs["timeout_ms"] = int(timeout)
            except ValueError:
                raise ValueError(f"PROVEKIT_TIMEOUT_MS must be an integer, got {timeout!r}")

        return cls(**kwargs)
