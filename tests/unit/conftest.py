"""
Pytest configuration and fixtures for provekit tests.
"""
import stat
import sys
from pathlib import Path

import pytest

# Add src to path for imports
src_path = Path(__file__).parent.parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


@pytest.fixture
def fake_solver(tmp_path):
    """Factory for executables that print a fixed answer, standing in for swine.

    The script also copies the problem it was given next to itself so tests
    can inspect what was sent.
    """
    def make(stdout: str, name: str = "fake-swine", returncode: int = 0) -> Path:
        script = tmp_path / name
        received = tmp_path / f"{name}.received.smt2"
        script.write_text(
            "#!/bin/sh\n"
            f"cp \"$1\" '{received}'\n"
            f"printf '%s\\n' '{stdout}'\n"
            f"exit {returncode}\n"
        )
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return script
    return make
