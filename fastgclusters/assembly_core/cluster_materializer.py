#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
FastgClusters v0.1.0

Cluster materialization: project edge components onto sequence nodes,
compute per-cluster length and node count, and rank clusters into bins.

Author: FastgClusters Development Team
License: GNU General Public License v2 or later
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Tuple

from .assembler_adapter import EdgeNodeMap
from .component_finder import ComponentAssignment

logger = logging.getLogger(__name__)

DEFAULT_CUTOFF = 100000


@dataclass
class ClusterStats:
    """
    One ranked cluster of sequence nodes.

    Attributes:
        component_id: Component id from the component finder
        nodes: Distinct member node names, sorted
        total_length: Sum of member node lengths (each node counted once)
        bin_number: Rank by descending total length, 0-based
        passes_cutoff: total_length strictly exceeds the cutoff
    """
    component_id: int
    nodes: List[str] = field(default_factory=list)
    total_length: int = 0
    bin_number: int = -1
    passes_cutoff: bool = False

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def bin(self) -> str:
        return f"bin{self.bin_number}"


def project_nodes(
    assignment: ComponentAssignment,
    edge_map: EdgeNodeMap
) -> Dict[str, int]:
    """
    Give each sequence node the component of the edges that map to it.

    A node reached from edges of two different components keeps the first
    component (in edge assignment order) and a warning is logged.

    Returns:
        Node name -> component id
    """
    node_to_component: Dict[str, int] = {}
    conflicts = 0

    for edge, component in assignment.edge_to_component.items():
        for node in edge_map.nodes_for(edge):
            current = node_to_component.setdefault(node, component)
            if current != component:
                conflicts += 1
                logger.warning(
                    f"Node {node} is reached from clusters {current} and {component} "
                    f"(via edge {edge}); keeping cluster {current}"
                )

    if conflicts:
        logger.warning(f"{conflicts} node-to-cluster conflicts found")
    return node_to_component


def aggregate_clusters(
    node_to_component: Mapping[str, int],
    node_lengths: Mapping[str, int]
) -> Dict[int, ClusterStats]:
    """
    Build per-component statistics from node memberships.

    Nodes without a known length are skipped. Components with no nodes do
    not produce a cluster.

    Returns:
        Component id -> ClusterStats (unranked)
    """
    clusters: Dict[int, ClusterStats] = {}

    for node, component in node_to_component.items():
        length = node_lengths.get(node)
        if length is None:
            logger.debug(f"No sequence for node {node}; not counted in cluster {component}")
            continue
        cluster = clusters.setdefault(component, ClusterStats(component_id=component))
        cluster.nodes.append(node)
        cluster.total_length += length

    for cluster in clusters.values():
        cluster.nodes.sort()

    return clusters


def rank_clusters(
    clusters: Mapping[int, ClusterStats],
    cutoff: int = DEFAULT_CUTOFF
) -> List[ClusterStats]:
    """
    Number clusters bin0, bin1, ... by descending total length.

    Ties keep component id order. Every cluster gets a bin number, including
    clusters that fail the cutoff, so reported bin numbers can have gaps.

    Returns:
        All clusters in bin order
    """
    ranked = sorted(clusters.values(), key=lambda c: c.component_id)
    ranked.sort(key=lambda c: c.total_length, reverse=True)

    for bin_number, cluster in enumerate(ranked):
        cluster.bin_number = bin_number
        cluster.passes_cutoff = cluster.total_length > cutoff

    return ranked


def materialize_clusters(
    assignment: ComponentAssignment,
    edge_map: EdgeNodeMap,
    node_lengths: Mapping[str, int],
    cutoff: int = DEFAULT_CUTOFF
) -> Tuple[List[ClusterStats], Dict[str, int]]:
    """
    Project components onto nodes, aggregate, and rank.

    Args:
        assignment: Edge -> component ids
        edge_map: Edge -> node names
        node_lengths: Node name -> sequence length
        cutoff: Minimum (exclusive) total length for a reported cluster

    Returns:
        (ranked clusters, node name -> component id)
    """
    node_to_component = project_nodes(assignment, edge_map)
    clusters = aggregate_clusters(node_to_component, node_lengths)
    ranked = rank_clusters(clusters, cutoff)

    passing = sum(1 for c in ranked if c.passes_cutoff)
    logger.info(f"{len(ranked)} clusters with sequence, {passing} above cutoff of {cutoff:,} bp")
    return ranked, node_to_component

# FastgClusters v0.1.0
# Any usage is subject to this software's license.
