"""
YAML configuration loader.

This helper locates, reads, merges, and validates the configuration before
returning a :class:`sbatchomatic.config.schema.ConfigSchema` instance.

Search precedence (first match wins)
1. An explicit path argument (``--config`` on the CLI).
2. The file named by ``$SBATCHOMATIC_CONFIG``.
3. Nothing – only the packaged default is used.

The packaged default is always loaded first and the selected user file is
merged on top of it, so a site configuration only needs the keys it changes.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import structlog
import yaml
from importlib.resources import as_file, files
from pydantic import ValidationError

from sbatchomatic.utils.errors import ConfigError

from .schema import ConfigSchema

log = structlog.get_logger()

ENV_VAR = "SBATCHOMATIC_CONFIG"

# --------------------------------------------------------------------------- #
# Wheel-internal fallback (works even from a zipped wheel)                    #
# --------------------------------------------------------------------------- #
_DEFAULT_CONFIG = files("sbatchomatic.resources") / "default_config.yaml"

# --------------------------------------------------------------------------- #
# Helper functions                                                            #
# --------------------------------------------------------------------------- #


def _load_yaml(path: Path) -> dict:
    """Read a YAML mapping from *path*.

    Args:
        path: Location of the YAML document.

    Returns:
        Dictionary parsed from the file, or an empty dict if the file is empty.

    Raises:
        ConfigError: If the file cannot be read, is not valid YAML or does not
            contain a mapping at the top level.
    """
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except OSError as exc:
        raise ConfigError(f"Unable to read configuration file, {str(path)!r}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {str(path)!r}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration file {str(path)!r} must contain a mapping")
    return data


def _deep_merge(base: dict, override: dict) -> dict:
    """Return *base* updated recursively with *override*.

    Nested mappings are merged key by key; every other value in *override*
    (lists included) replaces the one in *base*.
    """
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _resolve_user_config(explicit: Optional[str | Path]) -> Optional[Path]:
    """Return the user configuration path according to the precedence rules.

    Raises:
        ConfigError: If the selected file does not exist.
    """
    candidate = explicit or os.environ.get(ENV_VAR) or None
    if candidate is None:
        return None
    path = Path(candidate).expanduser().resolve()
    if not path.is_file():
        raise ConfigError(f"Configuration file not found: {str(path)!r}")
    return path


# --------------------------------------------------------------------------- #
# Public API                                                                  #
# --------------------------------------------------------------------------- #
def load_config(config_path: Optional[str | Path] = None) -> ConfigSchema:
    """Return a fully validated :class:`ConfigSchema`.

    Args:
        config_path: Explicit path to a YAML override. ``None`` falls back to
            ``$SBATCHOMATIC_CONFIG`` and then to the packaged default alone.

    Returns:
        A :class:`ConfigSchema` object ready for downstream use.

    Raises:
        ConfigError: When a file is missing or the merged document fails
            Pydantic validation.
    """
    with as_file(_DEFAULT_CONFIG) as p:
        merged = _load_yaml(p)

    user_path = _resolve_user_config(config_path)
    if user_path is not None:
        merged = _deep_merge(merged, _load_yaml(user_path))
        log.debug("config.loaded", path=str(user_path))

    try:
        return ConfigSchema.model_validate(merged)
    except ValidationError as exc:
        source = str(user_path) if user_path else "packaged default"
        raise ConfigError(f"Invalid configuration ({source}): {exc}") from exc
