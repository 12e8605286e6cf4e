"""
FastgClusters v0.1.0

Report writing for FastgClusters.

1. cluster_export.py - Summary/node/edge tables, per-bin FASTA, table readers
"""

from .cluster_export import (
    # Output naming
    summary_path,
    nodes_table_path,
    edges_table_path,
    bin_fasta_path,
    # Writers
    write_cluster_summary,
    write_nodes_to_cluster,
    write_edges_to_cluster,
    write_cluster_fastas,
    export_clusters,
    # Readers
    SummaryRow,
    read_cluster_summary,
    read_nodes_to_cluster,
)

__all__ = [
    "summary_path",
    "nodes_table_path",
    "edges_table_path",
    "bin_fasta_path",
    "write_cluster_summary",
    "write_nodes_to_cluster",
    "write_edges_to_cluster",
    "write_cluster_fastas",
    "export_clusters",
    "SummaryRow",
    "read_cluster_summary",
    "read_nodes_to_cluster",
]
