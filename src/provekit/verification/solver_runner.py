"""Run SMT solvers as subprocesses over SMT-LIBv2 files.

Solvers are expected to accept the SMT2 file as a positional argument and print
their verdict on standard output.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Tuple
import logging
import os
import shutil
import subprocess
import time

from ..errors import SolverExecutionError, SolverNotFoundError
from ..solver.result import SolverResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SolverSpec:
    """Describes how to invoke an external SMT solver."""

    name: str
    argv: Tuple[str, ...]


@dataclass(frozen=True)
class SolverRunResult:
    result: SolverResult
    stdout: str
    stderr: str
    returncode: int
    time_ms: float
    timed_out: bool = False


_KNOWN_SOLVERS = {
    "swine": SolverSpec("swine", ("swine",)),
}


def resolve_solver(name_or_path: str) -> SolverSpec:
    """Resolve a solver name to an invocation spec."""
    if name_or_path in _KNOWN_SOLVERS:
        return _KNOWN_SOLVERS[name_or_path]

    p = Path(name_or_path)
    return SolverSpec(p.name or str(p), (str(p),))


def is_solver_available(name_or_path: str) -> bool:
    """Return True if the solver executable appears runnable on this system."""
    spec = resolve_solver(name_or_path)
    exe = spec.argv[0]

    # Explicit path
    if os.path.sep in exe or (os.path.altsep and os.path.altsep in exe):
        return os.path.exists(exe) and os.access(exe, os.X_OK)

    return shutil.which(exe) is not None


def classify_solver_output(stdout: str) -> SolverResult:
    """Classify solver output by substring.

    ``unsat`` is tested first since it contains ``sat``.
    """
    if "unsat" in stdout:
        return SolverResult.UNSAT
    if "sat" in stdout:
        return SolverResult.SAT
    return SolverResult.UNKNOWN


def run_solver(
    solver: SolverSpec,
    smt2_file: str | Path,
    *,
    timeout_s: Optional[float] = None,
    extra_args: Sequence[str] = (),
) -> SolverRunResult:
    """Run solver on an SMT2 file.

    Raises:
        SolverNotFoundError: the executable is not on $PATH
        SolverExecutionError: the process could not be launched
    """
    smt2_path = Path(smt2_file)
    argv = [*solver.argv, *extra_args, str(smt2_path)]
    logger.debug("running %s", " ".join(argv))

    t0 = time.time()
    try:
        p = subprocess.run(
            argv,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            timeout=timeout_s,
        )
    except FileNotFoundError as e:
        raise SolverNotFoundError(
            f"solver executable '{argv[0]}' not found", argv[0]
        ) from e
    except subprocess.TimeoutExpired as e:
        dt_ms = (time.time() - t0) * 1000.0
        logger.debug("%s timed out after %.2fms", solver.name, dt_ms)
        return SolverRunResult(
            result=SolverResult.UNKNOWN,
            stdout=_as_text(e.stdout),
            stderr=_as_text(e.stderr),
            returncode=-1,
            time_ms=dt_ms,
            timed_out=True,
        )
    except OSError as e:
        raise SolverExecutionError(f"failed to run '{argv[0]}': {e}") from e
    dt_ms = (time.time() - t0) * 1000.0

    res = classify_solver_output(p.stdout)
    if p.returncode != 0:
        logger.warning("%s exited with status %d: %s", solver.name, p.returncode, p.stderr.strip())
    return SolverRunResult(
        result=res,
        stdout=p.stdout,
        stderr=p.stderr,
        returncode=p.returncode,
        time_ms=dt_ms,
    )


def _as_text(data) -> str:
    if data is None:
        return ""
    if isinstance(data, bytes):
        return data.decode(errors="replace")
    return data
