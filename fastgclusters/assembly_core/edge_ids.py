#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
FastgClusters v0.1.0

Edge identifier value types.

Fastg tokens mark the reverse-complement orientation with a trailing "'".
SPAdes path files mark strand with a trailing '+' or '-'. Both markers are
stripped once, here, so every lookup downstream uses the bare edge name.

Author: FastgClusters Development Team
License: GNU General Public License v2 or later
"""

from __future__ import annotations

from dataclasses import dataclass

REVCOMP_MARKER = "'"
STRAND_MARKERS = ('+', '-')


@dataclass(frozen=True)
class EdgeRef:
    """
    Orientation-normalized reference to a graph edge.

    Attributes:
        name: Edge name with the orientation marker removed (lookup key)
        reverse: True if the raw token carried a reverse orientation marker
    """
    name: str
    reverse: bool = False

    @classmethod
    def from_fastg(cls, token: str) -> EdgeRef:
        """
        Build from a Fastg token, e.g. "EDGE_3_length_90_cov_2'".

        Example:
            >>> EdgeRef.from_fastg("abc'")
            EdgeRef(name='abc', reverse=True)
        """
        token = token.strip()
        if token.endswith(REVCOMP_MARKER):
            return cls(token[:-1], True)
        return cls(token, False)

    @classmethod
    def from_path_step(cls, token: str) -> EdgeRef:
        """
        Build from a SPAdes path step, e.g. "12+" or "7-".

        The result's name is the short numeric edge id.
        """
        token = token.strip()
        if token.endswith(STRAND_MARKERS):
            return cls(token[:-1], token[-1] == '-')
        return cls(token, False)

    def __str__(self) -> str:
        return self.name


def edge_key(token: str) -> str:
    """Lookup key for a Fastg token: "abc'" and "abc" give "abc"."""
    return EdgeRef.from_fastg(token).name

# FastgClusters v0.1.0
# Any usage is subject to this software's license.
