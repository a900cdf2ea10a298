"""
Lint operations — advisory validation of a rendered script.

Runs an external linter (``shellcheck`` by default) against the
temporary file.  The outcome never blocks generation by itself; the
caller decides what to do with a failing result.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_LINTER = "shellcheck"

_INSTALL_HINTS: dict[str, str] = {
    "shellcheck": "apt install shellcheck  |  brew install shellcheck",
}


@dataclass
class LintResult:
    """Outcome of one linter run."""

    tool: str
    available: bool = False
    passed: bool = False
    exit_code: int | None = None
    output: str = ""

    @property
    def install_hint(self) -> str:
        return _INSTALL_HINTS.get(self.tool, "")

    def to_dict(self) -> dict:
        return {
            "tool": self.tool,
            "available": self.available,
            "passed": self.passed,
            "exit_code": self.exit_code,
            "output": self.output,
        }


def linter_available(tool: str = DEFAULT_LINTER) -> bool:
    """Check whether *tool* is on PATH."""
    return shutil.which(tool) is not None


def lint_script(path: Path, *, tool: str = DEFAULT_LINTER) -> LintResult:
    """Run *tool* against the script at *path*.

    Returns:
        LintResult — ``available`` is False when the tool is missing,
        in which case nothing was run.
    """
    if not linter_available(tool):
        logger.debug("%s not found on PATH", tool)
        return LintResult(tool=tool)

    logger.info("Validating %s with %s", path, tool)
    try:
        proc = subprocess.run(
            [tool, str(path)],
            capture_output=True,
            text=True,
        )
    except OSError as e:
        logger.warning("Could not run %s: %s", tool, e)
        return LintResult(tool=tool, available=True, output=str(e))

    output = "\n".join(s for s in (proc.stdout.strip(), proc.stderr.strip()) if s)
    passed = proc.returncode == 0
    logger.debug("%s exited with %d", tool, proc.returncode)

    return LintResult(
        tool=tool,
        available=True,
        passed=passed,
        exit_code=proc.returncode,
        output=output,
    )
