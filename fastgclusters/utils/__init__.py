"""
Utilities module for FastgClusters.

This module provides the pipeline orchestrator that wires the clustering
stages together, and command-line logging setup.
"""

from .pipeline import (
    ClusterPipeline,
    ClusteringResult,
    setup_logging,
)

__all__ = [
    "ClusterPipeline",
    "ClusteringResult",
    "setup_logging",
]
