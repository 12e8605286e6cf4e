#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
FastgClusters v0.1.0

Configuration parser: run settings from defaults, a YAML file and the
command line, in that order of precedence.

Author: FastgClusters Development Team
License: GNU General Public License v2 or later
"""

import copy
import os
import re
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from .schema import DEFAULT_CONFIG, deep_merge, validate_config

# ${VAR} or ${VAR:-fallback}
ENV_VAR_RE = re.compile(r'\$\{([^}:]+)(?::-(.*?))?\}')


class ConfigValidationError(Exception):
    """Raised for unusable settings: bad values, bad YAML, incompatible inputs."""
    pass


def _substitute(text: str) -> str:
    return ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), m.group(2) or ''), text)


def expand_env_vars(value: Any) -> Any:
    """
    Replace ${VAR} and ${VAR:-fallback} in every string of a nested structure.

    Unset variables without a fallback become the empty string. A scalar that
    is exactly one ${...} expression is re-read as YAML, so 'cutoff: ${CUTOFF}'
    yields an int and 'strict: ${STRICT:-false}' a bool.
    """
    if isinstance(value, dict):
        return {key: expand_env_vars(item) for key, item in value.items()}
    if isinstance(value, list):
        return [expand_env_vars(item) for item in value]
    if not isinstance(value, str):
        return value

    expanded = _substitute(value)
    if not ENV_VAR_RE.fullmatch(value.strip()) or not expanded.strip():
        return expanded
    try:
        typed = yaml.safe_load(expanded)
    except yaml.YAMLError:
        return expanded
    # only scalars; a variable holding "[1, 2]" stays text
    return typed if isinstance(typed, (str, int, float, bool)) else expanded


class ConfigParser:
    """
    Layered FastgClusters settings.

    Starts from DEFAULT_CONFIG, merges an optional YAML file over it (with
    environment variables expanded), then takes command-line overrides.
    Keys are addressed with dotted paths such as 'clustering.cutoff'.
    """

    def __init__(self, config_file: Optional[Union[str, Path]] = None):
        self.config_file = Path(config_file) if config_file else None
        self._config: Dict[str, Any] = copy.deepcopy(DEFAULT_CONFIG)

        if self.config_file is not None:
            self._config = deep_merge(self._config, self._read_yaml(self.config_file))

    @staticmethod
    def _read_yaml(path: Path) -> Dict[str, Any]:
        """
        Read a YAML settings file.

        Raises:
            FileNotFoundError: If path does not exist
            ConfigValidationError: If the YAML is invalid or not a mapping
        """
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        try:
            with open(path, encoding='utf-8') as handle:
                loaded = yaml.safe_load(handle)
        except (yaml.YAMLError, UnicodeError) as e:
            raise ConfigValidationError(f"Invalid YAML in config file {path}: {e}") from e

        if loaded is None:
            return {}
        if not isinstance(loaded, dict):
            raise ConfigValidationError(f"Config file {path} must contain a mapping at top level")
        return expand_env_vars(loaded)

    def set(self, key: str, value: Any) -> None:
        """Set a dotted key, creating intermediate sections as needed."""
        *sections, leaf = key.split('.')
        target = self._config
        for name in sections:
            target = target.setdefault(name, {})
        target[leaf] = value

    def merge_cli_overrides(self, overrides: Mapping[str, Any]) -> None:
        """
        Apply command-line values keyed by dotted path.

        None means the option was not given and leaves the setting alone.
        """
        for key, value in overrides.items():
            if value is not None:
                self.set(key, value)

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a dotted key, returning default if any part is missing."""
        node: Any = self._config
        for name in key.split('.'):
            if not isinstance(node, dict) or name not in node:
                return default
            node = node[name]
        return node

    def to_dict(self) -> Dict[str, Any]:
        """Deep copy of the merged settings."""
        return copy.deepcopy(self._config)

    def validate(self) -> None:
        """
        Raises:
            ConfigValidationError: Listing every problem found
        """
        errors = validate_config(self._config)
        if errors:
            raise ConfigValidationError("; ".join(errors))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.config_file})"

# FastgClusters v0.1.0
# Any usage is subject to this software's license.
