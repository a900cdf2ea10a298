"""
Generate use case — render, validate, then preview or write one script.

Channel-independent: the CLI supplies the lint-failure confirmation as a
callback and formats the returned result.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from scriptgen.core.config.loader import GeneratorConfig
from scriptgen.core.models.request import GenerationRequest
from scriptgen.core.models.template import GeneratedScript
from scriptgen.core.services.clipboard import ClipboardResult, copy_to_clipboard
from scriptgen.core.services.generators.shell_script import render_script
from scriptgen.core.services.lint_ops import LintResult, lint_script
from scriptgen.core.services.output_writer import (
    DryRunPreview,
    WriteError,
    WriteResult,
    preview_script,
    scratch_file,
    write_script,
)

logger = logging.getLogger(__name__)

# Receives the failing lint result; returns True to carry on anyway
LintFailureHandler = Callable[[LintResult], bool]

# Receives every lint result, pass or fail
LintReporter = Callable[[LintResult], None]


@dataclass
class GenerateResult:
    """Result of one generation run."""

    request: GenerationRequest
    script: GeneratedScript | None = None
    lint: LintResult | None = None
    preview: DryRunPreview | None = None
    written: WriteResult | None = None
    clipboard: ClipboardResult | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "name": self.request.name,
            "dry_run": self.request.dry_run,
            "destination": self.script.path if self.script else None,
            "lint": self.lint.to_dict() if self.lint else None,
            "preview": self.preview.to_dict() if self.preview else None,
            "written": self.written.to_dict() if self.written else None,
            "clipboard": self.clipboard.to_dict() if self.clipboard else None,
            "error": self.error,
        }


def _decline(lint: LintResult) -> bool:
    return False


def run_generate(
    request: GenerationRequest,
    config: GeneratorConfig,
    *,
    on_lint: LintReporter | None = None,
    on_lint_failure: LintFailureHandler = _decline,
    created: datetime | None = None,
    platform_info: str | None = None,
) -> GenerateResult:
    """Generate one script end to end.

    Args:
        request: Sanitized generation request.
        config: Resolved generator configuration.
        on_lint: Told about every lint result, before anything is
            previewed or written.
        on_lint_failure: Asked whether to continue when the linter
            reports problems.  Defaults to aborting.
        created: Header timestamp (default: now).
        platform_info: Header environment line (default: this machine).

    Returns:
        GenerateResult.  ``error`` is set when the run was aborted or a
        filesystem step failed; nothing permanent exists in that case.
    """
    result = GenerateResult(request=request)
    destination = request.destination(config)

    script = render_script(
        request,
        config,
        created=created,
        platform_info=platform_info,
    )
    result.script = script
    logger.info("Rendered %s (%d lines)", request.filename, script.line_count)

    try:
        with scratch_file(script.content) as scratch:
            lint = lint_script(scratch, tool=config.linter)
            result.lint = lint
            if on_lint is not None:
                on_lint(lint)

            if lint.available and not lint.passed:
                if not on_lint_failure(lint):
                    result.error = f"Aborted: {lint.tool} validation failed"
                    return result
                logger.warning("Continuing despite %s warnings", lint.tool)

            if request.dry_run:
                result.preview = preview_script(
                    scratch, destination, lines=config.preview_lines
                )
                return result

            result.written = write_script(scratch, destination)
    except WriteError as e:
        logger.debug("Write failed: %s", e)
        result.error = str(e)
        return result

    result.clipboard = copy_to_clipboard(
        script.content, tools=config.clipboard_tools
    )
    return result
