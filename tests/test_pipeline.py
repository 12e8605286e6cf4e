#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
FastgClusters v0.1.0

Integration tests for the clustering pipeline.

Author: FastgClusters Development Team
License: GNU General Public License v2 or later
"""

import copy
import logging

import pytest
from fastgclusters.config import DEFAULT_CONFIG, ConfigValidationError
from fastgclusters.io_utils.cluster_export import read_cluster_summary, read_nodes_to_cluster
from fastgclusters.utils.pipeline import ClusterPipeline


def make_config(prefix, **clustering):
    config = copy.deepcopy(DEFAULT_CONFIG)
    config['clustering'].update(clustering)
    config['output']['prefix'] = str(prefix)
    return config


class TestMegahitPipeline:
    """End-to-end runs on the MEGAHIT data set."""

    def test_reports(self, megahit_files, temp_output_dir):
        prefix = temp_output_dir / "out" / "mh"
        pipeline = ClusterPipeline(make_config(prefix, cutoff=35))

        result = pipeline.run(megahit_files['fastg'], megahit_files['fasta'])

        summary = read_cluster_summary(result.output_files['summary'])
        assert [(r.bin, r.total_length, r.node_count) for r in summary] == [
            ("bin0", 100, 2),
            ("bin1", 45, 2),
        ]
        bins = read_nodes_to_cluster(result.output_files['nodes'])
        assert bins["bin0"] == [
            "k141_1 flag=0 multi=2.0000 len=60",
            "k141_2 flag=0 multi=2.0000 len=40",
        ]
        assert len(result.reported_clusters) == 2
        assert result.assignment.n_components == 3

    def test_default_cutoff_reports_nothing(self, megahit_files, temp_output_dir):
        pipeline = ClusterPipeline(make_config(temp_output_dir / "mh"))

        result = pipeline.run(megahit_files['fastg'], megahit_files['fasta'])

        assert result.reported_clusters == []
        assert result.output_files['summary'].read_text() == ""

    def test_zero_cutoff_reports_singletons(self, megahit_files, temp_output_dir):
        pipeline = ClusterPipeline(make_config(temp_output_dir / "mh", cutoff=0))

        result = pipeline.run(megahit_files['fastg'], megahit_files['fasta'])

        assert [c.total_length for c in result.reported_clusters] == [100, 45, 30]

    def test_methods_agree(self, megahit_files, temp_output_dir):
        fishing = ClusterPipeline(make_config(temp_output_dir / "f", cutoff=0, method='fishing'))
        bfs = ClusterPipeline(make_config(temp_output_dir / "b", cutoff=0, method='bfs'))

        a = fishing.run(megahit_files['fastg'], megahit_files['fasta'])
        b = bfs.run(megahit_files['fastg'], megahit_files['fasta'])

        assert a.output_files['summary'].read_text() == b.output_files['summary'].read_text()
        assert a.output_files['nodes'].read_text() == b.output_files['nodes'].read_text()

    def test_optional_outputs(self, megahit_files, temp_output_dir):
        config = make_config(temp_output_dir / "mh", cutoff=35)
        config['output']['write_fasta'] = True
        config['output']['write_edge_table'] = True

        result = ClusterPipeline(config).run(megahit_files['fastg'], megahit_files['fasta'])

        assert [p.name for p in result.output_files['fasta']] == ["mh.bin0.fasta", "mh.bin1.fasta"]
        edge_lines = result.output_files['edges'].read_text().splitlines()
        assert len(edge_lines) == 5
        assert "NODE_3_length_30_cov_1.0_ID_5\t0" in edge_lines

    def test_bins_logged_at_debug(self, megahit_files, temp_output_dir, caplog):
        caplog.set_level(logging.DEBUG, logger="fastgclusters.utils.pipeline")

        ClusterPipeline(make_config(temp_output_dir / "mh", cutoff=35)).run(
            megahit_files['fastg'], megahit_files['fasta']
        )

        assert "bin0: 2 edges, 2 nodes, 100 bp" in caplog.messages
        assert "bin1: 2 edges, 2 nodes, 45 bp" in caplog.messages
        assert "bin2: 1 edges, 1 nodes, 30 bp (below cutoff)" in caplog.messages

    def test_timings_recorded(self, megahit_files, temp_output_dir):
        result = ClusterPipeline(make_config(temp_output_dir / "mh")).run(
            megahit_files['fastg'], megahit_files['fasta']
        )

        assert set(result.timings) == {'ingestion', 'adapter', 'components', 'materialize', 'report'}
        assert "Reported bins: 0" in result.summary()


class TestSpadesPipeline:
    """End-to-end runs on the SPAdes data set."""

    def test_reports(self, spades_files, temp_output_dir):
        pipeline = ClusterPipeline(make_config(temp_output_dir / "sp", assembler='spades', cutoff=0))

        result = pipeline.run(spades_files['fastg'], spades_files['fasta'], spades_files['paths'])

        summary = read_cluster_summary(result.output_files['summary'])
        # NODE_1 covers two edges but is counted once
        assert [(r.bin, r.total_length, r.node_count) for r in summary] == [
            ("bin0", 100, 1),
            ("bin1", 30, 1),
        ]

    def test_missing_paths_fails_before_output(self, spades_files, temp_output_dir):
        prefix = temp_output_dir / "sp"
        pipeline = ClusterPipeline(make_config(prefix, assembler='spades'))

        with pytest.raises(ConfigValidationError):
            pipeline.run(spades_files['fastg'], spades_files['fasta'])

        assert not (temp_output_dir / "sp.clustersummary.tab").exists()
        assert not (temp_output_dir / "sp.nodes_to_cluster.tab").exists()


class TestPipelineErrors:
    """Test configuration and input errors."""

    def test_invalid_config(self, temp_output_dir):
        config = make_config(temp_output_dir / "x", assembler='velvet')

        with pytest.raises(ConfigValidationError):
            ClusterPipeline(config)

    def test_missing_fastg(self, megahit_files, temp_output_dir):
        pipeline = ClusterPipeline(make_config(temp_output_dir / "x"))

        with pytest.raises(FileNotFoundError):
            pipeline.run(temp_output_dir / "missing.fastg", megahit_files['fasta'])

# FastgClusters v0.1.0
# Any usage is subject to this software's license.
