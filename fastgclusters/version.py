#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
FastgClusters v0.1.0

Version information.

Author: FastgClusters Development Team
License: GNU General Public License v2 or later
"""

__version__ = "0.1.0"

# FastgClusters v0.1.0
# Any usage is subject to this software's license.
