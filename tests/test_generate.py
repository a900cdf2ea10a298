"""
Tests for the generate use case — render → lint → preview/write → clipboard.

Linter and clipboard calls are mocked; the filesystem is real (tmp_path).
"""

from __future__ import annotations

import subprocess
import tempfile
from datetime import datetime
from pathlib import Path
from unittest.mock import patch

from scriptgen.core.models.request import GenerationRequest
from scriptgen.core.use_cases.generate import run_generate

CREATED = datetime(2024, 5, 1, 9, 30, 15)


def _request(**kw) -> GenerationRequest:
    defaults = {
        "name": "backup_tool",
        "description": "System backup utility",
        "author": "alice",
    }
    defaults.update(kw)
    return GenerationRequest(**defaults)


def _which(*available: str):
    def which(name):
        return f"/usr/bin/{name}" if name in available else None
    return which


def _completed(rc: int = 0, stdout: str = ""):
    return subprocess.CompletedProcess(args=[], returncode=rc, stdout=stdout, stderr="")


class TestDryRun:
    def test_preview_without_writing(self, config, scratch_dir: Path, no_tools):
        result = run_generate(_request(dry_run=True), config, created=CREATED)

        assert result.ok
        assert result.written is None
        assert result.clipboard is None
        preview = result.preview
        assert preview is not None
        assert preview.destination == config.scripts_dir / "backup_tool.sh"
        assert len(preview.head) == 20
        assert "# Description: System backup utility" in preview.head
        assert "# Author: alice" in preview.head
        assert preview.line_count == result.script.line_count

        assert not config.scripts_dir.exists()
        assert list(scratch_dir.iterdir()) == []

    def test_preview_lines_from_config(self, config, scratch_dir: Path, no_tools):
        config = config.model_copy(update={"preview_lines": 5})
        result = run_generate(_request(dry_run=True), config)
        assert len(result.preview.head) == 5


class TestWrite:
    def test_writes_executable_file(self, config, scratch_dir: Path, no_tools):
        result = run_generate(_request(), config, created=CREATED)

        dest = config.scripts_dir / "backup_tool.sh"
        assert result.ok
        assert result.written.path == dest
        assert dest.read_text() == result.script.content
        assert result.written.permissions[3] == "x"
        assert list(scratch_dir.iterdir()) == []

    def test_explicit_output_creates_parents(self, config, tmp_path: Path,
                                             scratch_dir: Path, no_tools):
        dest = tmp_path / "new" / "dir" / "run.sh"
        result = run_generate(_request(output_path=dest), config)
        assert result.ok
        assert dest.is_file()

    def test_clipboard_missing_is_not_an_error(self, config, scratch_dir: Path, no_tools):
        result = run_generate(_request(), config)
        assert result.ok
        assert result.clipboard.copied is False
        assert result.clipboard.error

    def test_clipboard_used(self, config, scratch_dir: Path):
        with patch("shutil.which", side_effect=_which("xclip")), \
             patch("scriptgen.core.services.clipboard.subprocess.run",
                   return_value=_completed()) as run:
            result = run_generate(_request(), config)
        assert result.clipboard.copied is True
        assert run.call_args[1]["input"] == result.script.content

    def test_write_failure(self, config, tmp_path: Path, scratch_dir: Path, no_tools):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        result = run_generate(_request(output_path=blocker / "x.sh"), config)
        assert not result.ok
        assert "Cannot create directory" in result.error
        assert result.clipboard is None
        assert list(scratch_dir.iterdir()) == []

    def test_missing_temp_dir(self, config, tmp_path: Path, monkeypatch, no_tools):
        monkeypatch.setattr(tempfile, "tempdir", str(tmp_path / "gone"))
        result = run_generate(_request(), config)
        assert not result.ok
        assert "Cannot create temporary file" in result.error
        assert result.lint is None
        assert result.clipboard is None
        assert not (config.scripts_dir / "backup_tool.sh").exists()


class TestLint:
    def test_lint_pass(self, config, scratch_dir: Path):
        with patch("shutil.which", side_effect=_which("shellcheck")), \
             patch("scriptgen.core.services.lint_ops.subprocess.run",
                   return_value=_completed()) as run:
            result = run_generate(_request(dry_run=True), config)
        assert result.lint.passed is True
        linted = Path(run.call_args[0][0][1])
        assert linted.parent == scratch_dir
        assert result.ok

    def test_lint_failure_declined(self, config, scratch_dir: Path):
        asked = []

        def decline(lint):
            asked.append(lint)
            return False

        with patch("shutil.which", side_effect=_which("shellcheck")), \
             patch("scriptgen.core.services.lint_ops.subprocess.run",
                   return_value=_completed(rc=1, stdout="SC2034")):
            result = run_generate(_request(), config, on_lint_failure=decline)

        assert not result.ok
        assert "shellcheck validation failed" in result.error
        assert asked and asked[0].output == "SC2034"
        assert not (config.scripts_dir / "backup_tool.sh").exists()
        assert list(scratch_dir.iterdir()) == []

    def test_lint_failure_confirmed(self, config, scratch_dir: Path):
        with patch("shutil.which", side_effect=_which("shellcheck")), \
             patch("scriptgen.core.services.lint_ops.subprocess.run",
                   return_value=_completed(rc=1)):
            result = run_generate(_request(), config, on_lint_failure=lambda lint: True)
        assert result.ok
        assert (config.scripts_dir / "backup_tool.sh").is_file()

    def test_default_handler_aborts(self, config, scratch_dir: Path):
        with patch("shutil.which", side_effect=_which("shellcheck")), \
             patch("scriptgen.core.services.lint_ops.subprocess.run",
                   return_value=_completed(rc=1)):
            result = run_generate(_request(), config)
        assert not result.ok

    def test_missing_linter_continues(self, config, scratch_dir: Path, no_tools):
        result = run_generate(_request(dry_run=True), config)
        assert result.lint.available is False
        assert result.ok

    def test_reported_before_write(self, config, scratch_dir: Path, no_tools):
        seen = []

        def report(lint):
            seen.append((lint.available, (config.scripts_dir / "backup_tool.sh").exists()))

        result = run_generate(_request(), config, on_lint=report)
        assert result.ok
        assert seen == [(False, False)]
        assert (config.scripts_dir / "backup_tool.sh").is_file()


class TestResultDict:
    def test_to_dict(self, config, scratch_dir: Path, no_tools):
        d = run_generate(_request(dry_run=True), config).to_dict()
        assert d["ok"] is True
        assert d["name"] == "backup_tool"
        assert d["dry_run"] is True
        assert d["written"] is None
        assert d["preview"]["line_count"] > 0
