#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
FastgClusters v0.1.0

Configuration schema: every run setting with its default, YAML templates,
and validation.

Author: FastgClusters Development Team
License: GNU General Public License v2 or later
"""

import copy
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml


SUPPORTED_ASSEMBLERS = ('megahit', 'spades')
COMPONENT_METHODS = ('fishing', 'bfs')
LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR')
TEMPLATES = ('default',) + SUPPORTED_ASSEMBLERS

DEFAULT_CONFIG = {
    # ========================================================================
    # Clustering
    # ========================================================================
    'clustering': {
        'assembler': 'megahit',  # 'megahit' or 'spades'
        'cutoff': 100000,  # reported clusters are strictly longer (bp)
        'method': 'fishing',  # 'fishing' or 'bfs'
    },

    # ========================================================================
    # Input Parsing
    # ========================================================================
    'parsing': {
        'strict': False,  # warn on malformed Fastg declaration lines
    },

    # ========================================================================
    # Output
    # ========================================================================
    'output': {
        'prefix': 'test',
        'write_fasta': False,  # <prefix>.<bin>.fasta per reported bin
        'write_edge_table': False,  # <prefix>.edges_to_cluster.tab
        'fasta_line_width': 0,  # 0 = whole sequence on one line
        'logging': {
            'level': 'INFO',
            'log_file': None,
        },
    },
}


def deep_merge(base: Dict, override: Dict) -> Dict:
    """Return base with override merged in; nested dicts merge key by key."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Defaults merged with a YAML file, if one is given and exists.

    Raises:
        yaml.YAMLError: If the file is not valid YAML or not a mapping
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    if not config_path or not Path(config_path).exists():
        return config

    with open(config_path, encoding='utf-8') as handle:
        user_config = yaml.safe_load(handle)

    if user_config is None:
        return config
    if not isinstance(user_config, dict):
        raise yaml.YAMLError(f"Config file {config_path} must contain a mapping at top level")
    return deep_merge(config, user_config)


def save_config_template(output_path: Union[str, Path], template: str = 'default') -> None:
    """
    Write a complete settings file.

    Args:
        output_path: YAML file to create
        template: 'default', or an assembler name to preset clustering.assembler
    """
    if template not in TEMPLATES:
        raise ValueError(f"Unknown template {template!r} (expected one of: {', '.join(TEMPLATES)})")

    config = copy.deepcopy(DEFAULT_CONFIG)
    if template != 'default':
        config['clustering']['assembler'] = template

    with open(output_path, 'w', encoding='utf-8') as handle:
        handle.write(f"# FastgClusters configuration ({template} template)\n")
        yaml.safe_dump(config, handle, default_flow_style=False, sort_keys=False)


def _non_negative_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def _section(config: Dict[str, Any], name: str) -> Dict[str, Any]:
    value = config.get(name)
    return value if isinstance(value, dict) else {}


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Check a merged configuration.

    A section left empty or given a scalar in YAML (``logging:`` with
    nothing under it) counts as missing, so its settings are reported
    rather than raising.

    Returns:
        Human-readable problems, empty if the configuration is usable
    """
    errors = []
    clustering = _section(config, 'clustering')
    output = _section(config, 'output')

    assembler = clustering.get('assembler')
    if assembler not in SUPPORTED_ASSEMBLERS:
        errors.append(
            f"Unsupported assembler: {assembler!r} "
            f"(expected one of: {', '.join(SUPPORTED_ASSEMBLERS)})"
        )

    method = clustering.get('method')
    if method not in COMPONENT_METHODS:
        errors.append(
            f"Invalid component method: {method!r} "
            f"(expected one of: {', '.join(COMPONENT_METHODS)})"
        )

    cutoff = clustering.get('cutoff')
    if not _non_negative_int(cutoff):
        errors.append(f"Invalid cutoff: {cutoff!r} (must be a non-negative integer)")

    if not output.get('prefix'):
        errors.append("Output prefix must not be empty")

    width = output.get('fasta_line_width')
    if not _non_negative_int(width):
        errors.append(f"Invalid fasta_line_width: {width!r} (must be a non-negative integer)")

    level = _section(output, 'logging').get('level')
    if level not in LOG_LEVELS:
        errors.append(f"Invalid logging level: {level!r}")

    return errors

# FastgClusters v0.1.0
# Any usage is subject to this software's license.
