#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
FastgClusters v0.1.0

Package initialization and version metadata.

Author: FastgClusters Development Team
License: GNU General Public License v2 or later
"""

from .version import __version__

__all__ = ["__version__"]

# FastgClusters v0.1.0
# Any usage is subject to this software's license.
