"""
FastgClusters v0.1.0

Core clustering pipeline stages.

- edge_ids: orientation-normalized edge references
- fastg_parser: Fastg graph ingestion
- assembler_adapter: MEGAHIT/SPAdes edge -> sequence node mapping
- component_finder: connected components (fishing / BFS)
- cluster_materializer: per-cluster statistics and bin ranking

Author: FastgClusters Development Team
License: GNU General Public License v2 or later
"""

from .edge_ids import EdgeRef, edge_key
from .fastg_parser import AssemblyGraph, parse_declaration, read_fastg
from .assembler_adapter import (
    EdgeNodeMap,
    read_assembler_fasta,
    megahit_edge2node,
    iter_spades_paths,
    spades_edge2node,
    build_edge_node_map,
    check_assembler_inputs,
)
from .component_finder import (
    ComponentAssignment,
    fish_component,
    bfs_component,
    find_components,
)
from .cluster_materializer import (
    DEFAULT_CUTOFF,
    ClusterStats,
    project_nodes,
    aggregate_clusters,
    rank_clusters,
    materialize_clusters,
)

__all__ = [
    # Identifiers
    "EdgeRef",
    "edge_key",
    # Graph ingestion
    "AssemblyGraph",
    "parse_declaration",
    "read_fastg",
    # Assembler adapters
    "EdgeNodeMap",
    "read_assembler_fasta",
    "megahit_edge2node",
    "iter_spades_paths",
    "spades_edge2node",
    "build_edge_node_map",
    "check_assembler_inputs",
    # Components
    "ComponentAssignment",
    "fish_component",
    "bfs_component",
    "find_components",
    # Clusters
    "DEFAULT_CUTOFF",
    "ClusterStats",
    "project_nodes",
    "aggregate_clusters",
    "rank_clusters",
    "materialize_clusters",
]
