#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
FastgClusters v0.1.0

Fastg graph ingestion: edge set and adjacency from MEGAHIT/SPAdes Fastg.

The de facto Fastg written by MEGAHIT and SPAdes (as described in the Bandage
documentation) declares each edge on a header line:

    >EDGE_1_length_100_cov_2:EDGE_2_length_80_cov_3',EDGE_5_length_70_cov_1;
    ACGT...

Only the header lines carry connectivity; sequence lines are ignored.

Author: FastgClusters Development Team
License: GNU General Public License v2 or later
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple, Union

from .edge_ids import EdgeRef
from ..io.io_core_module import open_file

logger = logging.getLogger(__name__)

# >ID(:CONN_LIST)?;
DECLARATION_RE = re.compile(r'^>([^:;]+)(?::([^:;]*))?;$')


# ============================================================================
#                           GRAPH STRUCTURE
# ============================================================================

@dataclass
class AssemblyGraph:
    """
    Edge set and adjacency relation read from a Fastg file.

    Attributes:
        edges: Declared edge names, deduplicated, in first-seen order
        adjacency: Edge name -> neighbour edge names, in declaration order
        skipped_lines: Number of malformed declaration lines that were skipped
    """
    edges: Tuple[str, ...] = ()
    adjacency: Dict[str, Tuple[str, ...]] = field(default_factory=dict)
    skipped_lines: int = 0

    def neighbors(self, edge: str) -> Tuple[str, ...]:
        """Declared neighbours of an edge (empty if none)."""
        return self.adjacency.get(edge, ())

    def undirected_adjacency(self) -> Dict[str, List[str]]:
        """
        Adjacency with every declared link also recorded in the reverse
        direction. Neighbour order: declared neighbours first, then reverse
        links in the order they were encountered.
        """
        undirected: Dict[str, List[str]] = {edge: [] for edge in self.edges}
        seen: Dict[str, set] = {edge: set() for edge in self.edges}

        def link(a: str, b: str):
            bucket = seen.setdefault(a, set())
            if b not in bucket:
                bucket.add(b)
                undirected.setdefault(a, []).append(b)

        for edge, conns in self.adjacency.items():
            for conn in conns:
                link(edge, conn)
                link(conn, edge)

        return undirected

    @property
    def n_links(self) -> int:
        return sum(len(conns) for conns in self.adjacency.values())

    def __contains__(self, edge: str) -> bool:
        return edge in self.edges

    def __len__(self) -> int:
        return len(self.edges)


# ============================================================================
#                           PARSING
# ============================================================================

def parse_declaration(line: str) -> Optional[Tuple[EdgeRef, List[EdgeRef]]]:
    """
    Parse one Fastg declaration line.

    Args:
        line: Line without trailing newline

    Returns:
        (edge, connected edges), or None if the line is not a well-formed
        declaration

    Example:
        >>> edge, conns = parse_declaration(">a':b,c';")
        >>> edge.name, [c.name for c in conns]
        ('a', ['b', 'c'])
    """
    match = DECLARATION_RE.match(line)
    if not match:
        return None

    edge = EdgeRef.from_fastg(match.group(1))
    if not edge.name:
        return None

    conns = []
    if match.group(2) is not None:
        for token in match.group(2).split(','):
            conn = EdgeRef.from_fastg(token)
            if conn.name:
                conns.append(conn)

    return edge, conns


def iter_declarations(
    lines: Iterator[str],
    strict: bool = False
) -> Iterator[Tuple[int, Optional[EdgeRef], List[EdgeRef]]]:
    """
    Yield (line number, edge, connected edges) for each declaration line.

    Lines not starting with '>' are sequence lines and are ignored. Lines
    starting with '>' that are not well-formed are skipped; with strict=True
    each one is logged as a warning.
    """
    for line_no, raw_line in enumerate(lines, 1):
        line = raw_line.rstrip('\r\n')
        if not line.startswith('>'):
            continue

        parsed = parse_declaration(line)
        if parsed is None:
            if strict:
                logger.warning(f"Fastg line {line_no}: malformed declaration, skipping: {line[:80]}")
            yield line_no, None, []
            continue

        edge, conns = parsed
        yield line_no, edge, conns


def read_fastg(fastg_path: Union[str, Path], strict: bool = False) -> AssemblyGraph:
    """
    Read a Fastg file into an AssemblyGraph.

    Both orientations of an edge collapse onto one name. The neighbour lists
    of the forward and reverse-complement declaration lines are concatenated.

    Args:
        fastg_path: Path to Fastg file (can be gzipped)
        strict: Log a warning for each malformed declaration line

    Returns:
        AssemblyGraph

    Raises:
        FileNotFoundError: If fastg_path does not exist
    """
    fastg_path = Path(fastg_path)
    if not fastg_path.exists():
        raise FileNotFoundError(f"Fastg file not found: {fastg_path}")

    logger.info(f"Loading graph from Fastg: {fastg_path}")

    edges: Dict[str, None] = {}
    adjacency: Dict[str, List[str]] = {}
    skipped = 0

    with open_file(fastg_path, 'r') as f:
        for _, edge, conns in iter_declarations(f, strict=strict):
            if edge is None:
                skipped += 1
                continue
            edges.setdefault(edge.name, None)
            if conns:
                adjacency.setdefault(edge.name, []).extend(c.name for c in conns)

    graph = AssemblyGraph(
        edges=tuple(edges),
        adjacency={name: tuple(conns) for name, conns in adjacency.items()},
        skipped_lines=skipped,
    )

    logger.info(f"Loaded graph: {len(graph.edges)} edges, {graph.n_links} links")

    return graph

# FastgClusters v0.1.0
# Any usage is subject to this software's license.
