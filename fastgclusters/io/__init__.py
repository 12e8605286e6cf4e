"""
Sequence I/O module for FastgClusters.

Handles reading and writing assembled contigs/scaffolds.

CONSOLIDATED MODULES:
- io_core_module.py: SequenceNode, SequenceCollection, FASTA I/O
"""

from .io_core_module import (
    SequenceNode,
    SequenceCollection,
    is_gzipped,
    open_file,
    read_fasta,
    write_fasta,
    get_fasta_stats,
)

__all__ = [
    # Core data structures
    "SequenceNode",
    "SequenceCollection",

    # File utilities
    "is_gzipped",
    "open_file",

    # FASTA I/O
    "read_fasta",
    "write_fasta",
    "get_fasta_stats",
]
