"""
Generation request model — everything the user asked for, in one record.

Built once from CLI input after the name has been sanitized, then read
by the renderer and the writer.  The model is frozen: nothing mutates
it after construction.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from scriptgen.core.config.loader import GeneratorConfig

# Same character class the sanitizer keeps
NAME_PATTERN = r"^[A-Za-z0-9_-]+$"


class GenerationRequest(BaseModel):
    """A single script generation request.

    Attributes:
        name:        Sanitized script name (no extension).
        description: Free-text description; empty when not given.
        author:      Author shown in the header comment.
        dry_run:     Preview only, never persist.
        output_path: Explicit destination, or None for the default.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(pattern=NAME_PATTERN)
    description: str = ""
    author: str
    dry_run: bool = False
    output_path: Path | None = None

    @property
    def filename(self) -> str:
        return f"{self.name}.sh"

    def destination(self, config: GeneratorConfig) -> Path:
        """Resolve the effective output path.

        An explicit ``output_path`` wins; otherwise the script lands in
        the configured scripts directory as ``<name>.sh``.
        """
        if self.output_path is not None:
            return self.output_path
        return config.scripts_dir / self.filename
