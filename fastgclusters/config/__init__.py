"""
FastgClusters v0.1.0

Configuration management for FastgClusters.

Author: FastgClusters Development Team
License: GNU General Public License v2 or later
"""

from .parser import ConfigParser, ConfigValidationError
from .schema import (
    DEFAULT_CONFIG,
    SUPPORTED_ASSEMBLERS,
    COMPONENT_METHODS,
    load_config,
    save_config_template,
    validate_config,
)

__all__ = [
    "ConfigParser",
    "ConfigValidationError",
    "DEFAULT_CONFIG",
    "SUPPORTED_ASSEMBLERS",
    "COMPONENT_METHODS",
    "load_config",
    "save_config_template",
    "validate_config",
]
