"""
Generated script model — produced by the shell script generator.
"""

from __future__ import annotations

from pydantic import BaseModel


class GeneratedScript(BaseModel):
    """A script produced by the render phase.

    Attributes:
        path:    Destination path the script is meant for.
        content: Full file content.
        reason:  Why this file was generated.
    """

    path: str
    content: str
    reason: str = ""

    @property
    def line_count(self) -> int:
        """Number of newline-terminated lines (same count as ``wc -l``)."""
        return self.content.count("\n")
