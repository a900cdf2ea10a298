"""
scriptgen — CLI entrypoint.

Usage:
    scriptgen --help
    scriptgen -n backup_tool -d "System backup utility" --dry-run
    python -m scriptgen -n deploy -o ~/bin/deploy.sh
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from scriptgen import __version__
from scriptgen.core.observability.logging_config import setup_logging


class UsageError(click.UsageError):
    """Bad or missing flags.  Exits 1 like every other failure."""

    exit_code = 1


class GeneratorCommand(click.Command):
    """Command that reports every parse failure with exit code 1."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.NoSuchOption as e:
            raise UsageError(f"Unrecognized option: {e.option_name}", ctx=e.ctx) from e
        except click.UsageError as e:
            e.exit_code = 1
            raise


def _report_lint(lint) -> None:
    """Print the lint outcome as soon as the linter has run."""
    if not lint.available:
        hint = f" ({lint.install_hint})" if lint.install_hint else ""
        click.secho(
            f"Warning: {lint.tool} not found. Install for better validation.{hint}",
            fg="yellow",
            err=True,
        )
    elif lint.passed:
        click.secho(f"✓ {lint.tool.capitalize()} validation passed", fg="green")


def _confirm_continue(lint) -> bool:
    """Show the linter findings and ask whether to keep going."""
    click.secho(f"✗ {lint.tool} validation failed", fg="red", err=True)
    if lint.output:
        click.echo(lint.output, err=True)
    return click.confirm(f"Continue despite {lint.tool} warnings?", default=False, err=True)


def _require_text(value: str | None, flag: str) -> str | None:
    """Reject arguments that cannot be written out as UTF-8."""
    if value is None:
        return None
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as e:
        raise UsageError(f"{flag} is not valid UTF-8 text.") from e
    return value


@click.command(
    cls=GeneratorCommand,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.version_option(version=__version__, prog_name="scriptgen")
@click.option("--name", "-n", default=None, metavar="NAME", help="Script name (required).")
@click.option("--description", "-d", default=None, metavar="DESC", help="Script description.")
@click.option(
    "--author", "-a", default=None, metavar="AUTHOR",
    help="Author name (default: current user).",
)
@click.option("--dry-run", is_flag=True, help="Show what would be generated without creating.")
@click.option(
    "--output", "-o", default=None, metavar="FILE",
    help="Output file path (default: ~/Scripts/NAME.sh).",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False, dir_okay=False),
    default=None,
    help="Path to config.yml (default: ~/.config/scriptgen/config.yml).",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Print the result as JSON.")
def cli(
    name: str | None,
    description: str | None,
    author: str | None,
    dry_run: bool,
    output: str | None,
    config_path: str | None,
    verbose: bool,
    quiet: bool,
    debug: bool,
    as_json: bool,
) -> None:
    """Generate a Bash script skeleton with safety features.

    The script gets strict mode, logging helpers, an error trap,
    confirmation prompts and argument parsing.  It is checked with
    shellcheck when available and copied to the clipboard.

    \b
    Example:
        scriptgen -n "backup_tool" -d "System backup utility" --dry-run
    """
    # ── Logging setup (once, at process start) ──────────────────
    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get("SCRIPTGEN_LOG_LEVEL", "WARNING")

    setup_logging(level=level)

    from scriptgen.core.config.loader import ConfigError, load_config
    from scriptgen.core.models.request import GenerationRequest
    from scriptgen.core.services.lint_ops import linter_available
    from scriptgen.core.services.sanitize import InvalidNameError, require_name
    from scriptgen.core.use_cases.generate import run_generate

    try:
        script_name = require_name(name)
    except InvalidNameError as e:
        raise UsageError(str(e)) from e
    description = _require_text(description, "--description")
    author = _require_text(author, "--author")

    try:
        config = load_config(Path(config_path) if config_path else None)
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)

    request = GenerationRequest(
        name=script_name,
        description=description or "",
        author=author if author is not None else config.user,
        dry_run=dry_run,
        output_path=Path(output).expanduser() if output else None,
    )

    if as_json:
        result = run_generate(request, config)
        click.echo(json.dumps(result.to_dict(), indent=2))
        if result.error:
            sys.exit(1)
        return

    if linter_available(config.linter):
        click.echo(f"Validating script with {config.linter}...")

    result = run_generate(
        request, config, on_lint=_report_lint, on_lint_failure=_confirm_continue,
    )

    if result.error:
        click.secho(f"✗ {result.error}", fg="red", err=True)
        sys.exit(1)

    if request.dry_run:
        _print_preview(result)
    else:
        _print_summary(result)


def _print_preview(result) -> None:
    preview = result.preview
    assert preview is not None  # guaranteed for a successful dry run

    click.secho("=== DRY RUN MODE - Generated Script Preview ===", fg="blue")
    click.echo(f"Would create file: {preview.destination}")
    click.echo(f"Script size: {preview.line_count} lines")
    click.secho(
        f"=== Script Content Preview (first {len(preview.head)} lines) ===", fg="blue"
    )
    for line in preview.head:
        click.echo(line)
    click.secho("=== End Preview ===", fg="blue")


def _print_summary(result) -> None:
    written = result.written
    assert written is not None  # guaranteed for a successful write
    request = result.request

    click.secho(f"✓ Script generated: {written.path}", fg="green")

    clip = result.clipboard
    if clip is not None:
        if clip.copied:
            click.secho("✓ Script copied to clipboard", fg="green")
            click.echo(f"Copied to clipboard: {clip.preview}", err=True)
        else:
            click.secho(f"Warning: {clip.error}", fg="yellow", err=True)

    click.secho("=== Generation Summary ===", fg="blue")
    click.echo(f"Script name: {request.name}")
    click.echo(f"Description: {request.description or 'None provided'}")
    click.echo(f"Author: {request.author}")
    click.echo(f"Output file: {written.path}")
    click.echo(f"File size: {written.line_count} lines")
    click.echo(f"Permissions: {written.permissions}")


if __name__ == "__main__":
    cli()
