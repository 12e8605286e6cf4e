#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
FastgClusters v0.1.0

Sequence I/O: assembled contigs/scaffolds as SequenceNode objects, gzip-aware
file opening, and FASTA reading (Biopython) and writing.

Author: FastgClusters Development Team
License: GNU General Public License v2 or later
"""

# =============================================================================
# SECTION 1: IMPORTS AND DEPENDENCIES
# =============================================================================

import gzip
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, TextIO, Tuple, Union

from Bio import SeqIO

logger = logging.getLogger(__name__)


# =============================================================================
# SECTION 2: SEQUENCE DATA STRUCTURES
# =============================================================================

@dataclass(frozen=True)
class SequenceNode:
    """
    Assembled contig or scaffold.

    Attributes:
        node_id: Numeric node id taken from the header (kept as a string key)
        name: Full FASTA header without the leading '>'
        sequence: Nucleotide sequence
    """
    node_id: str
    name: str
    sequence: str

    @property
    def length(self) -> int:
        """Get sequence length."""
        return len(self.sequence)

    def to_fasta_string(self, line_width: int = 0) -> str:
        """
        Convert to FASTA format string.

        Args:
            line_width: Number of bases per line (0 = no wrapping)

        Returns:
            FASTA record ending with a newline
        """
        if line_width > 0:
            lines = [self.sequence[i:i + line_width]
                     for i in range(0, len(self.sequence), line_width)] or ['']
        else:
            lines = [self.sequence]
        return f">{self.name}\n" + "\n".join(lines) + "\n"

    def __len__(self) -> int:
        return self.length


@dataclass
class SequenceCollection:
    """
    Sequence nodes indexed by node id, with a secondary index by display name.

    Insertion order is preserved. Adding a node whose id is already present
    replaces the earlier node.
    """
    nodes: Dict[str, SequenceNode] = field(default_factory=dict)
    _by_name: Dict[str, SequenceNode] = field(default_factory=dict, repr=False)

    def __post_init__(self):
        for node in self.nodes.values():
            self._by_name[node.name] = node

    def add(self, node: SequenceNode) -> None:
        previous = self.nodes.get(node.node_id)
        if previous is not None:
            logger.warning(
                f"Duplicate node id {node.node_id}: '{node.name}' replaces '{previous.name}'"
            )
            self._by_name.pop(previous.name, None)
        self.nodes[node.node_id] = node
        self._by_name[node.name] = node

    def get(self, node_id: str) -> Optional[SequenceNode]:
        return self.nodes.get(node_id)

    def get_by_name(self, name: str) -> Optional[SequenceNode]:
        return self._by_name.get(name)

    def lengths_by_name(self) -> Dict[str, int]:
        """Map display name -> sequence length."""
        return {node.name: node.length for node in self.nodes.values()}

    @property
    def total_length(self) -> int:
        return sum(node.length for node in self.nodes.values())

    def __contains__(self, node_id: str) -> bool:
        return node_id in self.nodes

    def __iter__(self) -> Iterator[SequenceNode]:
        return iter(self.nodes.values())

    def __len__(self) -> int:
        return len(self.nodes)


# =============================================================================
# SECTION 3: FILE UTILITIES
# =============================================================================

GZIP_SUFFIXES = ('.gz', '.gzip')
TEXT_ENCODING = 'utf-8'


def is_gzipped(filepath: Union[str, Path]) -> bool:
    """True if the file name carries a gzip suffix."""
    return Path(filepath).suffix in GZIP_SUFFIXES


def open_file(filepath: Union[str, Path], mode: str = 'r') -> TextIO:
    """
    Open a text file for reading or writing, through gzip when the name
    ends in .gz/.gzip.

    Text is UTF-8. Undecodable bytes in assembler output are read as U+FFFD
    rather than aborting the run; names stay usable as lookup keys.
    """
    filepath = Path(filepath)
    if not is_gzipped(filepath):
        return open(filepath, mode, encoding=TEXT_ENCODING, errors='replace')
    return gzip.open(filepath, 'rt' if 'r' in mode else 'wt', encoding=TEXT_ENCODING, errors='replace')


# =============================================================================
# SECTION 4: FASTA FILE I/O
# =============================================================================

def read_fasta(filepath: Union[str, Path]) -> Iterator[Tuple[str, str]]:
    """
    Iterate over (header, sequence) in file order.

    The header is the whole description line after '>', so assembler
    annotations such as "flag=1 multi=2.0 len=300" stay part of the name.

    Raises:
        FileNotFoundError: If filepath does not exist
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"FASTA file not found: {filepath}")

    with open_file(filepath) as handle:
        for record in SeqIO.parse(handle, "fasta"):
            yield record.description, str(record.seq)


def write_fasta(
    nodes: Iterable[SequenceNode],
    filepath: Union[str, Path],
    line_width: int = 0
) -> int:
    """
    Write nodes as FASTA, creating the parent directory if needed.

    Returns:
        Number of records written
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    written = 0
    with open_file(filepath, 'w') as out:
        for node in nodes:
            out.write(node.to_fasta_string(line_width))
            written += 1
    return written


def get_fasta_stats(nodes: Iterable[SequenceNode]) -> Dict[str, int]:
    """
    Summary statistics for a set of sequences.

    Returns:
        Dict with 'count', 'total_length', 'max_length', 'n50'
    """
    lengths: List[int] = sorted((node.length for node in nodes), reverse=True)
    total = sum(lengths)

    n50 = 0
    running = 0
    for length in lengths:
        running += length
        if running * 2 >= total:
            n50 = length
            break

    return {
        'count': len(lengths),
        'total_length': total,
        'max_length': lengths[0] if lengths else 0,
        'n50': n50,
    }

# FastgClusters v0.1.0
# Any usage is subject to this software's license.
