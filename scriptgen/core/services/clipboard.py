"""
Clipboard publisher — best-effort copy of the rendered script.

Tries each configured clipboard tool in order and uses the first one
found on PATH.  Nothing here ever raises: a missing tool or a failed
copy is reported back as a warning.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# Confirmation echo is cut to this many characters
PREVIEW_CHARS = 80

# Tool name → command that reads the clipboard payload from stdin
_CLIPBOARD_COMMANDS: dict[str, list[str]] = {
    "xclip": ["xclip", "-selection", "clipboard"],
    "wl-copy": ["wl-copy"],
    "pbcopy": ["pbcopy"],
}

DEFAULT_TOOLS = tuple(_CLIPBOARD_COMMANDS)


@dataclass
class ClipboardResult:
    """Outcome of a clipboard publish attempt."""

    copied: bool = False
    tool: str = ""
    preview: str = ""
    error: str = ""

    def to_dict(self) -> dict:
        return {
            "copied": self.copied,
            "tool": self.tool,
            "preview": self.preview,
            "error": self.error,
        }


def truncate_preview(text: str, limit: int = PREVIEW_CHARS) -> str:
    """Cut *text* to *limit* characters, marking the cut with ``...``."""
    if len(text) > limit:
        return text[:limit] + "..."
    return text


def find_clipboard_tool(tools: list[str] | tuple[str, ...] = DEFAULT_TOOLS) -> str | None:
    """Return the first known clipboard tool available on PATH."""
    for tool in tools:
        if tool in _CLIPBOARD_COMMANDS and shutil.which(tool) is not None:
            return tool
    return None


def copy_to_clipboard(
    text: str,
    *,
    tools: list[str] | tuple[str, ...] = DEFAULT_TOOLS,
) -> ClipboardResult:
    """Publish *text* to the system clipboard.

    Args:
        text: Payload to copy.
        tools: Candidate tool names, in preference order.

    Returns:
        ClipboardResult with ``copied`` set on success, ``error`` otherwise.
    """
    if not text:
        return ClipboardResult(error="No input provided")

    tool = find_clipboard_tool(tools)
    if tool is None:
        names = ", ".join(tools) or "none configured"
        return ClipboardResult(
            error=f"No clipboard tool installed ({names}). Cannot copy to clipboard.",
        )

    try:
        proc = subprocess.run(
            _CLIPBOARD_COMMANDS[tool],
            input=text,
            text=True,
            # xclip forks to own the selection; a captured pipe would never close
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
    except OSError as e:
        logger.warning("Clipboard tool %s failed to start: %s", tool, e)
        return ClipboardResult(tool=tool, error=f"{tool} failed: {e}")

    if proc.returncode != 0:
        err = f"exit code {proc.returncode}"
        logger.warning("Clipboard tool %s failed: %s", tool, err)
        return ClipboardResult(tool=tool, error=f"{tool} failed: {err}")

    logger.debug("Copied %d characters with %s", len(text), tool)
    return ClipboardResult(copied=True, tool=tool, preview=truncate_preview(text))
