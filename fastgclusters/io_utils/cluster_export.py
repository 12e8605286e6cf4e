#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
FastgClusters v0.1.0

Cluster Export: summary table, node-to-bin table, per-bin FASTA and
edge-to-component table, plus readers for the two tables.

Author: FastgClusters Development Team
License: GNU General Public License v2 or later
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from ..assembly_core.cluster_materializer import ClusterStats
from ..assembly_core.component_finder import ComponentAssignment
from ..io.io_core_module import SequenceCollection, write_fasta

logger = logging.getLogger(__name__)


# ============================================================================
#                           OUTPUT NAMING
# ============================================================================

def summary_path(prefix: str | Path) -> Path:
    return Path(f"{prefix}.clustersummary.tab")


def nodes_table_path(prefix: str | Path) -> Path:
    return Path(f"{prefix}.nodes_to_cluster.tab")


def edges_table_path(prefix: str | Path) -> Path:
    return Path(f"{prefix}.edges_to_cluster.tab")


def bin_fasta_path(prefix: str | Path, bin_name: str) -> Path:
    return Path(f"{prefix}.{bin_name}.fasta")


# ============================================================================
#                           TABLE WRITERS
# ============================================================================

def write_cluster_summary(clusters: Iterable[ClusterStats], output_path: str | Path) -> int:
    """
    Write bin, total length and node count for every cluster above cutoff.

    Format (tab-separated, no header):
        bin<N>  <total_length>  <node_count>

    Returns:
        Number of rows written
    """
    output_path = Path(output_path)
    rows = 0

    with open(output_path, 'w', encoding='utf-8') as f:
        for cluster in clusters:
            if not cluster.passes_cutoff:
                continue
            f.write(f"{cluster.bin}\t{cluster.total_length}\t{cluster.node_count}\n")
            rows += 1

    logger.info(f"Wrote {rows} clusters to {output_path}")
    return rows


def write_nodes_to_cluster(clusters: Iterable[ClusterStats], output_path: str | Path) -> int:
    """
    Write one bin/node row per member node of every cluster above cutoff.

    Format (tab-separated, no header):
        bin<N>  <node display name>
    """
    output_path = Path(output_path)
    rows = 0

    with open(output_path, 'w', encoding='utf-8') as f:
        for cluster in clusters:
            if not cluster.passes_cutoff:
                continue
            for node in cluster.nodes:
                f.write(f"{cluster.bin}\t{node}\n")
                rows += 1

    logger.info(f"Wrote {rows} node memberships to {output_path}")
    return rows


def write_edges_to_cluster(assignment: ComponentAssignment, output_path: str | Path) -> int:
    """
    Write every edge with its component id, sorted by edge name.

    Format (tab-separated, no header):
        <edge name>  <component id>
    """
    output_path = Path(output_path)

    with open(output_path, 'w', encoding='utf-8') as f:
        for edge in sorted(assignment.edge_to_component):
            f.write(f"{edge}\t{assignment.edge_to_component[edge]}\n")

    logger.info(f"Wrote {len(assignment)} edge assignments to {output_path}")
    return len(assignment)


def write_cluster_fastas(
    clusters: Iterable[ClusterStats],
    sequences: SequenceCollection,
    output_prefix: str | Path,
    line_width: int = 0
) -> list[Path]:
    """
    Write one FASTA file per cluster above cutoff.

    Returns:
        Paths of the files written, in bin order
    """
    written: list[Path] = []

    for cluster in clusters:
        if not cluster.passes_cutoff:
            continue
        nodes = []
        for name in cluster.nodes:
            node = sequences.get_by_name(name)
            if node is None:
                logger.warning(f"No sequence for {name}, omitted from {cluster.bin} FASTA")
                continue
            nodes.append(node)
        fasta_path = bin_fasta_path(output_prefix, cluster.bin)
        write_fasta(nodes, fasta_path, line_width=line_width)
        written.append(fasta_path)

    logger.info(f"Wrote {len(written)} cluster FASTA files")
    return written


def export_clusters(
    clusters: list[ClusterStats],
    output_prefix: str | Path,
    sequences: SequenceCollection | None = None,
    assignment: ComponentAssignment | None = None,
    write_fasta_files: bool = False,
    line_width: int = 0
) -> dict[str, Path | list[Path]]:
    """
    Complete export of a clustering run.

    Args:
        clusters: Ranked clusters (all of them; cutoff is applied here)
        output_prefix: Prefix for all output files (parent dirs are created)
        sequences: Needed when write_fasta_files is set
        assignment: Edge assignments; when given, the edge table is written
        write_fasta_files: Write <prefix>.<bin>.fasta for each passing bin
        line_width: FASTA line width (0 = no wrapping)

    Returns:
        Dict mapping output type to path(s):
        - 'summary', 'nodes': always
        - 'edges': if assignment was given
        - 'fasta': list of FASTA paths if write_fasta_files
    """
    output_prefix = Path(output_prefix)
    output_prefix.parent.mkdir(parents=True, exist_ok=True)
    output_files: dict[str, Path | list[Path]] = {}

    logger.info(f"Exporting clusters with prefix: {output_prefix}")

    output_files['summary'] = summary_path(output_prefix)
    write_cluster_summary(clusters, output_files['summary'])

    output_files['nodes'] = nodes_table_path(output_prefix)
    write_nodes_to_cluster(clusters, output_files['nodes'])

    if write_fasta_files:
        if sequences is None:
            raise ValueError("Sequences are required to write cluster FASTA files")
        output_files['fasta'] = write_cluster_fastas(clusters, sequences, output_prefix, line_width)

    if assignment is not None:
        output_files['edges'] = edges_table_path(output_prefix)
        write_edges_to_cluster(assignment, output_files['edges'])

    return output_files


# ============================================================================
#                           TABLE READERS
# ============================================================================

@dataclass(frozen=True)
class SummaryRow:
    """One row of a cluster summary table."""
    bin: str
    total_length: int
    node_count: int


def read_cluster_summary(summary_file: str | Path) -> list[SummaryRow]:
    """
    Read a cluster summary table back into rows.

    Raises:
        FileNotFoundError: If summary_file does not exist
        ValueError: On malformed rows
    """
    summary_file = Path(summary_file)
    if not summary_file.exists():
        raise FileNotFoundError(f"Cluster summary not found: {summary_file}")

    rows: list[SummaryRow] = []
    with open(summary_file, 'r', encoding='utf-8') as f:
        for line_no, raw_line in enumerate(f, 1):
            line = raw_line.rstrip('\n')
            if not line:
                continue
            parts = line.split('\t')
            if len(parts) != 3:
                raise ValueError(f"{summary_file} line {line_no}: expected 3 columns, got {len(parts)}")
            try:
                rows.append(SummaryRow(parts[0], int(parts[1]), int(parts[2])))
            except ValueError as e:
                raise ValueError(f"{summary_file} line {line_no}: {e}") from e

    return rows


def read_nodes_to_cluster(nodes_file: str | Path) -> dict[str, list[str]]:
    """
    Read a node-to-bin table back into bin -> node names (file order).

    Node names may contain spaces; only the first tab separates the columns.

    Raises:
        FileNotFoundError: If nodes_file does not exist
        ValueError: On malformed rows
    """
    nodes_file = Path(nodes_file)
    if not nodes_file.exists():
        raise FileNotFoundError(f"Node table not found: {nodes_file}")

    bins: dict[str, list[str]] = {}
    with open(nodes_file, 'r', encoding='utf-8') as f:
        for line_no, raw_line in enumerate(f, 1):
            line = raw_line.rstrip('\n')
            if not line:
                continue
            bin_name, sep, node = line.partition('\t')
            if not sep:
                raise ValueError(f"{nodes_file} line {line_no}: missing tab separator")
            bins.setdefault(bin_name, []).append(node)

    return bins

# FastgClusters v0.1.0
# Any usage is subject to this software's license.
