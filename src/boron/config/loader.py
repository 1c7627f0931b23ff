"""Load boron settings from defaults, an optional .boron.yaml, and the environment.

Precedence, lowest to highest: built-in defaults, ``.boron.yaml`` in the
working directory, ``BORON_*`` environment variables.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import fields, replace
from pathlib import Path

import yaml

from boron.errors import ConfigError, ValidationError
from boron.models import Settings
from boron.validation import validate_branch_name

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".boron.yaml"

_ENV_VARS = {
    "base_branch": "BORON_BASE_BRANCH",
    "remote": "BORON_REMOTE",
    "git_binary": "BORON_GIT",
    "gh_binary": "BORON_GH",
    "command_timeout": "BORON_COMMAND_TIMEOUT",
}

_BRANCH_LIKE = ("base_branch", "remote")


def load_settings(cwd: Path, environ: Mapping[str, str] | None = None) -> Settings:
    """Resolve Settings for the repository at cwd.

    Raises:
        ConfigError: If the config file cannot be parsed or a value is invalid.
    """
    env = os.environ if environ is None else environ
    values: dict[str, object] = {}

    path = cwd / CONFIG_FILENAME
    if path.is_file():
        values.update(_load_file(path))

    for key, var in _ENV_VARS.items():
        raw = env.get(var, "").strip()
        if raw:
            values[key] = raw

    return _build(values, source=str(path))


def _load_file(path: Path) -> dict[str, object]:
    """Read the YAML config file into a plain dict of known keys."""
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Failed to read config file '{path}': {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid config format in {path}: expected a YAML mapping.")

    known = {f.name for f in fields(Settings)}
    unknown = sorted(str(k) for k in data if k not in known)
    if unknown:
        logger.warning("Ignoring unknown keys in %s: %s", path, ", ".join(unknown))
    return {k: v for k, v in data.items() if k in known}


def _build(values: dict[str, object], source: str) -> Settings:
    settings = Settings()
    if not values:
        return settings

    cleaned: dict[str, object] = {}
    for key, value in values.items():
        if key == "command_timeout":
            cleaned[key] = _timeout(value, source)
            continue
        if not isinstance(value, str) or not value:
            raise ConfigError(f"Invalid value for '{key}' in {source}: expected a string.")
        if key in _BRANCH_LIKE:
            try:
                validate_branch_name(value, key)
            except ValidationError as exc:
                raise ConfigError(f"Invalid value for '{key}' in {source}: {exc}") from exc
        cleaned[key] = value

    return replace(settings, **cleaned)


def _timeout(value: object, source: str) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool):
        raise ConfigError(
            f"Invalid value for 'command_timeout' in {source}: expected seconds."
        )
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        raise ConfigError(
            f"Invalid value for 'command_timeout' in {source}: expected seconds."
        ) from None
    if timeout <= 0:
        raise ConfigError(f"Invalid value for 'command_timeout' in {source}: must be positive.")
    return timeout
