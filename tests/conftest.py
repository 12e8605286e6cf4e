#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
FastgClusters v0.1.0

Pytest configuration and shared fixtures.

Small MEGAHIT and SPAdes data sets. The MEGAHIT set has three components:
NODE_3 alone (30 bp), NODE_1 + NODE_2 (60 + 40 bp) and NODE_4 + NODE_5
(20 + 25 bp). The SPAdes set has two contigs: NODE_1 (100 bp, edges 1 and 2)
and NODE_2 (30 bp, edge 3).

Author: FastgClusters Development Team
License: GNU General Public License v2 or later
"""

import pytest
from pathlib import Path
import tempfile
import shutil


MEGAHIT_FASTG = """\
>NODE_3_length_30_cov_1.0_ID_5;
ACGTACGTAC
>NODE_3_length_30_cov_1.0_ID_5';
GTACGTACGT
>NODE_1_length_60_cov_2.0_ID_1:NODE_2_length_40_cov_2.0_ID_3';
ACGTACGTAC
>NODE_1_length_60_cov_2.0_ID_1';
GTACGTACGT
>NODE_2_length_40_cov_2.0_ID_3;
ACGTACGTAC
>NODE_2_length_40_cov_2.0_ID_3':NODE_1_length_60_cov_2.0_ID_1';
GTACGTACGT
>NODE_4_length_20_cov_1.0_ID_7:NODE_5_length_25_cov_1.0_ID_9;
ACGTACGTAC
>NODE_5_length_25_cov_1.0_ID_9;
ACGTACGTAC
"""

MEGAHIT_CONTIGS = {
    'k141_3 flag=1 multi=1.0000 len=30': 'C' * 30,
    'k141_1 flag=0 multi=2.0000 len=60': 'A' * 60,
    'k141_2 flag=0 multi=2.0000 len=40': 'G' * 40,
    'k141_4 flag=0 multi=1.0000 len=20': 'T' * 20,
    'k141_5 flag=0 multi=1.0000 len=25': 'ACGTA' * 5,
}

SPADES_FASTG = """\
>EDGE_1_length_60_cov_2.0:EDGE_2_length_40_cov_2.0';
ACGTACGTAC
>EDGE_1_length_60_cov_2.0';
GTACGTACGT
>EDGE_2_length_40_cov_2.0;
ACGTACGTAC
>EDGE_2_length_40_cov_2.0':EDGE_1_length_60_cov_2.0';
GTACGTACGT
>EDGE_3_length_30_cov_1.0;
ACGTACGTAC
>EDGE_3_length_30_cov_1.0';
GTACGTACGT
"""

SPADES_PATHS = """\
NODE_1_length_100_cov_2.0
1+,2-
NODE_1_length_100_cov_2.0'
2+,1-
NODE_2_length_30_cov_1.0
3+
NODE_2_length_30_cov_1.0'
3-
"""

SPADES_CONTIGS = {
    'NODE_1_length_100_cov_2.0': 'A' * 100,
    'NODE_2_length_30_cov_1.0': 'C' * 30,
}


def write_fasta_records(path, records):
    """Write {header: sequence} to path, one sequence line per record."""
    with open(path, 'w') as f:
        for header, sequence in records.items():
            f.write(f">{header}\n{sequence}\n")
    return path


@pytest.fixture
def temp_output_dir():
    """Create temporary output directory for tests."""
    temp_dir = tempfile.mkdtemp(prefix="fastgclusters_test_")
    yield Path(temp_dir)
    # Cleanup after test
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def megahit_files(temp_output_dir):
    """MEGAHIT Fastg and contigs FASTA on disk."""
    fastg = temp_output_dir / "k141.fastg"
    fastg.write_text(MEGAHIT_FASTG)
    fasta = write_fasta_records(temp_output_dir / "final.contigs.fa", MEGAHIT_CONTIGS)
    return {'fastg': fastg, 'fasta': fasta}


@pytest.fixture
def spades_files(temp_output_dir):
    """SPAdes Fastg, contigs FASTA and contigs.paths on disk."""
    fastg = temp_output_dir / "assembly_graph.fastg"
    fastg.write_text(SPADES_FASTG)
    paths = temp_output_dir / "contigs.paths"
    paths.write_text(SPADES_PATHS)
    fasta = write_fasta_records(temp_output_dir / "contigs.fasta", SPADES_CONTIGS)
    return {'fastg': fastg, 'fasta': fasta, 'paths': paths}

# FastgClusters v0.1.0
# Any usage is subject to this software's license.
