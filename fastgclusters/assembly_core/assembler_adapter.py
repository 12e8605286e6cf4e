#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
FastgClusters v0.1.0

Assembler adapters: translate Fastg edge names into assembled sequence
(contig/scaffold) names for MEGAHIT and SPAdes output.

MEGAHIT: the Fastg edge name embeds the contig's numeric id
(NODE_<id>_...), and the contigs FASTA header starts with k<K>_<id>.
The join is one-to-one.

SPAdes: contigs are NODE_<id>_... in the FASTA, and the graph edges are
EDGE_<id>_... in the Fastg. The *.paths file lists, for each contig, the
edges it traverses. An edge may be part of several contigs' paths, so the
join is one-to-many.

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
from .fastg_parser import AssemblyGraph
from ..config.parser import ConfigValidationError
from ..config.schema import SUPPORTED_ASSEMBLERS
from ..io.io_core_module import SequenceCollection, SequenceNode, open_file, read_fasta

logger = logging.getLogger(__name__)

# FASTA header -> numeric node id
FASTA_HEADER_PATTERNS = {
    'megahit': re.compile(r'^k\d+_(\d+)'),
    'spades': re.compile(r'^NODE_(\d+)_'),
}

MEGAHIT_EDGE_RE = re.compile(r'NODE_(\d+)_')
SPADES_EDGE_RE = re.compile(r'EDGE_(\d+)_')


# ============================================================================
#                           EDGE -> NODE MAPPING
# ============================================================================

@dataclass
class EdgeNodeMap:
    """
    Edge name -> names of the sequence nodes it belongs to.

    Lists keep every recorded membership in the order it was read; an edge
    traversed by two contigs has two entries.
    """
    mapping: Dict[str, List[str]] = field(default_factory=dict)

    def add(self, edge: str, node_name: str) -> None:
        self.mapping.setdefault(edge, []).append(node_name)

    def nodes_for(self, edge: str) -> List[str]:
        return self.mapping.get(edge, [])

    def node_names(self) -> List[str]:
        """Distinct node names, in first-seen order."""
        return list(dict.fromkeys(name for names in self.mapping.values() for name in names))

    def __contains__(self, edge: str) -> bool:
        return edge in self.mapping

    def __len__(self) -> int:
        return len(self.mapping)


def _warn_orphans(graph: AssemblyGraph, edge_map: EdgeNodeMap) -> List[str]:
    """Log edges that did not resolve to any node and return them."""
    orphans = [edge for edge in graph.edges if edge not in edge_map]
    if orphans:
        logger.warning(f"{len(orphans)} edges could not be assigned to any sequence node")
        for edge in orphans:
            logger.debug(f"Orphan edge: {edge}")
    return orphans


# ============================================================================
#                           SEQUENCE INPUT
# ============================================================================

def read_assembler_fasta(
    fasta_path: Union[str, Path],
    assembler: str
) -> SequenceCollection:
    """
    Read an assembler's contigs/scaffolds FASTA, keyed by numeric node id.

    Records whose header does not match the assembler's naming scheme are
    skipped with a warning.

    Args:
        fasta_path: Path to FASTA file (can be gzipped)
        assembler: 'megahit' or 'spades'

    Returns:
        SequenceCollection

    Raises:
        ConfigValidationError: If the assembler is not supported
        FileNotFoundError: If fasta_path does not exist
    """
    pattern = FASTA_HEADER_PATTERNS.get(assembler)
    if pattern is None:
        raise ConfigValidationError(
            f"Please specify one of {', '.join(SUPPORTED_ASSEMBLERS)} as assembler, got: {assembler!r}"
        )

    logger.info(f"Reading {assembler} sequences: {fasta_path}")

    sequences = SequenceCollection()
    for header, sequence in read_fasta(fasta_path):
        match = pattern.match(header)
        if not match:
            logger.warning(f"Sequence header does not match {assembler} naming, skipping: {header}")
            continue
        sequences.add(SequenceNode(node_id=match.group(1), name=header, sequence=sequence))

    logger.info(f"Read {len(sequences)} sequences ({sequences.total_length:,} bp)")
    return sequences


# ============================================================================
#                           MEGAHIT (VARIANT A)
# ============================================================================

def megahit_edge2node(graph: AssemblyGraph, sequences: SequenceCollection) -> EdgeNodeMap:
    """
    Map MEGAHIT Fastg edges to contig names through the embedded node id.

    Args:
        graph: Parsed Fastg graph
        sequences: Contigs keyed by node id

    Returns:
        One-to-one EdgeNodeMap
    """
    edge_map = EdgeNodeMap()

    for edge in graph.edges:
        match = MEGAHIT_EDGE_RE.search(edge)
        if not match:
            continue
        node = sequences.get(match.group(1))
        if node is not None:
            edge_map.add(edge, node.name)

    _warn_orphans(graph, edge_map)
    return edge_map


# ============================================================================
#                           SPADES (VARIANT B)
# ============================================================================

def iter_spades_paths(paths_file: Union[str, Path]) -> Iterator[Tuple[str, List[EdgeRef]]]:
    """
    Yield (node name, path steps) for every path line of a SPAdes paths file.

    A block starts with a NODE_ header line (a trailing "'" marks the reverse
    path and is dropped), followed by one or more comma-separated path lines.
    A trailing ';' marks a gap between path segments and is dropped.

    Raises:
        FileNotFoundError: If paths_file does not exist
    """
    paths_file = Path(paths_file)
    if not paths_file.exists():
        raise FileNotFoundError(f"Paths file not found: {paths_file}")

    current_node: Optional[str] = None
    with open_file(paths_file, 'r') as f:
        for line_no, raw_line in enumerate(f, 1):
            line = raw_line.strip()
            if not line:
                continue

            if line.startswith('NODE_'):
                current_node = line[:-1] if line.endswith("'") else line
                continue

            if current_node is None:
                logger.warning(f"Paths line {line_no}: path before any NODE_ header, skipping")
                continue

            if line.endswith(';'):
                line = line[:-1]
            steps = [EdgeRef.from_path_step(token) for token in line.split(',') if token.strip()]
            yield current_node, steps


def spades_edge2node(
    paths_file: Union[str, Path],
    graph: AssemblyGraph,
    sequences: Optional[SequenceCollection] = None
) -> EdgeNodeMap:
    """
    Map SPAdes Fastg edges to contig/scaffold names through a paths file.

    Args:
        paths_file: SPAdes contigs.paths or scaffolds.paths
        graph: Parsed Fastg graph (supplies the full EDGE_ names)
        sequences: Contigs/scaffolds; only used to report path nodes that
            are missing from the FASTA

    Returns:
        One-to-many EdgeNodeMap
    """
    full_names: Dict[str, str] = {}
    for edge in graph.edges:
        match = SPADES_EDGE_RE.search(edge)
        if match:
            full_names[match.group(1)] = edge

    logger.info(f"Reading SPAdes paths: {paths_file}")

    edge_map = EdgeNodeMap()
    unresolved = set()
    for node_name, steps in iter_spades_paths(paths_file):
        for step in steps:
            edge = full_names.get(step.name)
            if edge is None:
                if step.name not in unresolved:
                    logger.warning(f"Path of {node_name} references unknown edge id {step.name}")
                    unresolved.add(step.name)
                continue
            edge_map.add(edge, node_name)

    if sequences is not None:
        for node_name in edge_map.node_names():
            if sequences.get_by_name(node_name) is None:
                logger.warning(f"Path node not found in sequence file: {node_name}")

    _warn_orphans(graph, edge_map)
    return edge_map


# ============================================================================
#                           DISPATCH
# ============================================================================

def build_edge_node_map(
    assembler: str,
    graph: AssemblyGraph,
    fasta_path: Union[str, Path],
    paths_file: Optional[Union[str, Path]] = None
) -> Tuple[SequenceCollection, EdgeNodeMap]:
    """
    Read sequences and resolve edges to nodes for the given assembler.

    Configuration problems are raised before any file is read.

    Args:
        assembler: 'megahit' or 'spades'
        graph: Parsed Fastg graph
        fasta_path: Contigs/scaffolds FASTA
        paths_file: SPAdes paths file (required for spades, ignored for megahit)

    Returns:
        (sequences, edge_map)

    Raises:
        ConfigValidationError: Unsupported assembler, or spades without paths file
    """
    check_assembler_inputs(assembler, paths_file)

    sequences = read_assembler_fasta(fasta_path, assembler)
    if assembler == 'megahit':
        if paths_file:
            logger.warning("Ignoring paths file, not part of MEGAHIT output")
        edge_map = megahit_edge2node(graph, sequences)
    else:
        edge_map = spades_edge2node(paths_file, graph, sequences)

    logger.info(f"Resolved {len(edge_map)} of {len(graph.edges)} edges to sequence nodes")
    return sequences, edge_map


def check_assembler_inputs(assembler: str, paths_file: Optional[Union[str, Path]] = None) -> None:
    """
    Validate the assembler choice against the supplied inputs.

    Raises:
        ConfigValidationError: Unsupported assembler, or spades without paths file
    """
    if assembler not in SUPPORTED_ASSEMBLERS:
        raise ConfigValidationError(
            f"Please specify one of {', '.join(SUPPORTED_ASSEMBLERS)} as assembler, got: {assembler!r}"
        )
    if assembler == 'spades' and not paths_file:
        raise ConfigValidationError("Please specify the SPAdes 'paths' file with --paths")

# FastgClusters v0.1.0
# Any usage is subject to this software's license.
