"""
Configuration loader — builds the generator configuration once at startup.

Defaults come from the environment (home directory, current user).  An
optional YAML file can override any field:

    scripts_dir: ~/bin/scripts
    linter: shellcheck
    clipboard_tools: [wl-copy, xclip]

The file is looked up in this order: explicit ``--config`` path,
``$SCRIPTGEN_CONFIG``, ``~/.config/scriptgen/config.yml``.  Only an
explicitly requested file is required to exist.
"""

from __future__ import annotations

import getpass
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

# Environment variable naming an alternate config file
CONFIG_ENV_VAR = "SCRIPTGEN_CONFIG"

# Default config location, relative to the home directory
DEFAULT_CONFIG_FILE = Path(".config") / "scriptgen" / "config.yml"

_PATH_KEYS = ("home", "repos_dir", "scripts_dir", "local_bin", "bashrc_path")


class ConfigError(Exception):
    """Raised when generator configuration is invalid or missing."""


class GeneratorConfig(BaseModel):
    """Resolved settings passed explicitly into every generation step.

    The four directory constants are also written into the generated
    script as ``readonly`` variables.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    home: Path
    user: str
    repos_dir: Path
    scripts_dir: Path
    local_bin: Path
    bashrc_path: Path
    linter: str = "shellcheck"
    clipboard_tools: list[str] = Field(
        default_factory=lambda: ["xclip", "wl-copy", "pbcopy"]
    )
    preview_lines: int = Field(default=20, ge=1)


def current_user(environ: Mapping[str, str] | None = None) -> str:
    """Return the invoking user's login name.

    ``$USER`` wins, then whatever ``getpass`` can find.  Falls back to
    ``"unknown"`` on systems with no resolvable identity.
    """
    env = os.environ if environ is None else environ
    user = env.get("USER", "").strip()
    if user:
        return user
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        logger.debug("Could not resolve current user, using 'unknown'")
        return "unknown"


def default_settings(environ: Mapping[str, str] | None = None) -> dict[str, Any]:
    """Environment-derived defaults, before any config file is applied."""
    env = os.environ if environ is None else environ
    home_raw = env.get("HOME", "").strip()
    home = Path(home_raw) if home_raw else Path.home()

    return {
        "home": home,
        "user": current_user(env),
        "repos_dir": home / "Repos",
        "scripts_dir": home / "Scripts",
        "local_bin": home / ".local" / "bin",
        "bashrc_path": home / ".bashrc",
    }


def find_config_file(
    explicit: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Path | None:
    """Locate the config file to use, or None when there is none.

    Raises:
        ConfigError: If an explicitly requested file does not exist.
    """
    env = os.environ if environ is None else environ

    if explicit is not None:
        if not explicit.is_file():
            raise ConfigError(f"Config file not found: {explicit}")
        return explicit

    from_env = env.get(CONFIG_ENV_VAR, "").strip()
    if from_env:
        path = Path(from_env).expanduser()
        if not path.is_file():
            raise ConfigError(f"Config file not found: {path} (from ${CONFIG_ENV_VAR})")
        return path

    home_raw = env.get("HOME", "").strip()
    home = Path(home_raw) if home_raw else Path.home()
    candidate = home / DEFAULT_CONFIG_FILE
    return candidate if candidate.is_file() else None


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")
    return data


def load_config(
    path: Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> GeneratorConfig:
    """Load and validate generator configuration.

    Args:
        path: Explicit config file.  If None, searches the default locations.
        environ: Environment mapping (default: ``os.environ``).

    Returns:
        Validated GeneratorConfig.

    Raises:
        ConfigError: If the file is missing, unreadable or invalid.
    """
    settings = default_settings(environ)

    config_file = find_config_file(path, environ)
    if config_file is not None:
        logger.debug("Loading config from %s", config_file)
        overrides = _read_yaml(config_file)

        # Directory defaults follow an overridden home
        if "home" in overrides:
            base = Path(str(overrides["home"])).expanduser()
            for key in ("repos_dir", "scripts_dir", "local_bin", "bashrc_path"):
                rel = settings[key].relative_to(settings["home"])
                settings[key] = base / rel

        settings.update(overrides)

    for key in _PATH_KEYS:
        value = settings.get(key)
        if isinstance(value, str):
            settings[key] = Path(value).expanduser()

    try:
        config = GeneratorConfig.model_validate(settings)
    except ValidationError as e:
        source = config_file or "environment"
        raise ConfigError(f"Invalid configuration in {source}: {e}") from e

    logger.info("Scripts directory: %s (user: %s)", config.scripts_dir, config.user)
    return config
