"""Endpoint configuration for the CocoaPods driver.

Values are resolved once and handed to the driver at construction. Precedence,
highest first: environment variables, the ``cocoapods`` section of a YAML or
JSON config file, then the defaults in ``Constants``. CLI flags are applied on
top by the entry point.
"""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Optional

import yaml

from constants import Constants

logger = logging.getLogger(__name__)

CONFIG_SECTION = "cocoapods"


@dataclass(frozen=True)
class CocoapodsConfig:
    """Base URLs and output location used by the driver."""
    specs_endpoint: str = Constants.COCOAPODS_SPECS_ENDPOINT
    specs_raw_endpoint: str = Constants.COCOAPODS_SPECS_RAW_ENDPOINT
    metadata_endpoint: str = Constants.COCOAPODS_METADATA_ENDPOINT
    download_dir: str = Constants.DOWNLOAD_DIR

    def __post_init__(self) -> None:
        for name in ("specs_endpoint", "specs_raw_endpoint", "metadata_endpoint"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"{name} must be a non-empty URL")
            object.__setattr__(self, name, value.strip().rstrip("/"))


_ENV_KEYS = {
    "specs_endpoint": Constants.ENV_SPECS_ENDPOINT,
    "specs_raw_endpoint": Constants.ENV_SPECS_RAW_ENDPOINT,
    "metadata_endpoint": Constants.ENV_METADATA_ENDPOINT,
    "download_dir": Constants.ENV_DOWNLOAD_DIR,
}


def _read_config_file(path: str) -> Dict[str, Any]:
    """Load a YAML or JSON file; unreadable or malformed files yield {}."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            if path.lower().endswith(".json"):
                data = json.load(fh)
            else:
                data = yaml.safe_load(fh)
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as exc:
        logger.warning("Ignoring config file %s: %s", path, exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring config file %s: top level is not a mapping", path)
        return {}
    return data


def _find_default_config() -> Optional[str]:
    for candidate in Constants.DEFAULT_CONFIG_PATHS:
        expanded = os.path.expanduser(candidate)
        if os.path.isfile(expanded):
            return expanded
    return None


def load_config(
    path: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> CocoapodsConfig:
    """Resolve driver configuration.

    Args:
        path: Explicit config file (YAML, YML or JSON). When omitted the
            default locations in ``Constants.DEFAULT_CONFIG_PATHS`` are tried.
        environ: Environment mapping; defaults to ``os.environ``.

    Returns:
        CocoapodsConfig: The merged configuration.
    """
    env = os.environ if environ is None else environ
    values: Dict[str, Any] = {}

    config_path = path or _find_default_config()
    if config_path:
        section = _read_config_file(config_path).get(CONFIG_SECTION) or {}
        if isinstance(section, dict):
            known = {f.name for f in fields(CocoapodsConfig)}
            for key, value in section.items():
                if key in known and value:
                    values[key] = str(value)
                elif key not in known:
                    logger.warning("Unknown %s config key: %s", CONFIG_SECTION, key)
        else:
            logger.warning("Ignoring '%s' section in %s: not a mapping", CONFIG_SECTION, config_path)

    for key, env_name in _ENV_KEYS.items():
        value = env.get(env_name)
        if value and value.strip():
            values[key] = value.strip()

    return CocoapodsConfig(**values)
