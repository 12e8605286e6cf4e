#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
FastgClusters v0.1.0

Tests for configuration loading, overrides and validation.

Author: FastgClusters Development Team
License: GNU General Public License v2 or later
"""

import copy

import pytest
import yaml
from fastgclusters.config import (
    DEFAULT_CONFIG,
    ConfigParser,
    ConfigValidationError,
    load_config,
    save_config_template,
    validate_config,
)


class TestDefaults:
    """Test default configuration values."""

    def test_defaults_are_valid(self):
        assert validate_config(DEFAULT_CONFIG) == []

    def test_default_values(self):
        parser = ConfigParser()

        assert parser.get('clustering.assembler') == 'megahit'
        assert parser.get('clustering.cutoff') == 100000
        assert parser.get('output.prefix') == 'test'
        assert parser.get('output.write_fasta') is False

    def test_missing_key_default(self):
        assert ConfigParser().get('clustering.nonexistent', 'x') == 'x'


class TestConfigParser:
    """Test YAML loading and CLI overrides."""

    def test_yaml_overrides_defaults(self, temp_output_dir):
        path = temp_output_dir / "config.yaml"
        path.write_text("clustering:\n  assembler: spades\n  cutoff: 5000\n")

        parser = ConfigParser(path)

        assert parser.get('clustering.assembler') == 'spades'
        assert parser.get('clustering.cutoff') == 5000
        assert parser.get('clustering.method') == 'fishing'

    def test_cli_overrides_yaml(self, temp_output_dir):
        path = temp_output_dir / "config.yaml"
        path.write_text("clustering:\n  cutoff: 5000\noutput:\n  prefix: fromyaml\n")

        parser = ConfigParser(path)
        parser.merge_cli_overrides({'clustering.cutoff': 10, 'output.prefix': None})

        assert parser.get('clustering.cutoff') == 10
        assert parser.get('output.prefix') == 'fromyaml'

    def test_env_substitution(self, temp_output_dir, monkeypatch):
        monkeypatch.setenv('FASTGCLUSTERS_PREFIX', 'envrun')
        path = temp_output_dir / "config.yaml"
        path.write_text(
            "output:\n"
            "  prefix: ${FASTGCLUSTERS_PREFIX}\n"
            "  logging:\n"
            "    log_file: ${FASTGCLUSTERS_UNSET_VAR:-run.log}\n"
        )

        parser = ConfigParser(path)

        assert parser.get('output.prefix') == 'envrun'
        assert parser.get('output.logging.log_file') == 'run.log'

    def test_env_values_keep_yaml_types(self, temp_output_dir, monkeypatch):
        monkeypatch.setenv('FASTGCLUSTERS_CUTOFF', '5000')
        monkeypatch.setenv('FASTGCLUSTERS_STRICT', 'true')
        monkeypatch.delenv('FASTGCLUSTERS_WIDTH', raising=False)
        path = temp_output_dir / "config.yaml"
        path.write_text(
            "clustering:\n"
            "  cutoff: ${FASTGCLUSTERS_CUTOFF}\n"
            "parsing:\n"
            "  strict: ${FASTGCLUSTERS_STRICT}\n"
            "output:\n"
            "  fasta_line_width: ${FASTGCLUSTERS_WIDTH:-60}\n"
            "  prefix: run_${FASTGCLUSTERS_CUTOFF}\n"
        )

        parser = ConfigParser(path)

        assert parser.get('clustering.cutoff') == 5000
        assert parser.get('parsing.strict') is True
        assert parser.get('output.fasta_line_width') == 60
        assert parser.get('output.prefix') == 'run_5000'
        parser.validate()

    def test_empty_file_gives_defaults(self, temp_output_dir):
        path = temp_output_dir / "empty.yaml"
        path.write_text("")

        assert ConfigParser(path).to_dict() == DEFAULT_CONFIG

    def test_invalid_yaml(self, temp_output_dir):
        path = temp_output_dir / "bad.yaml"
        path.write_text("clustering: [unclosed\n")

        with pytest.raises(ConfigValidationError):
            ConfigParser(path)

    def test_top_level_not_mapping(self, temp_output_dir):
        path = temp_output_dir / "list.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ConfigValidationError):
            ConfigParser(path)

    def test_missing_file(self, temp_output_dir):
        with pytest.raises(FileNotFoundError):
            ConfigParser(temp_output_dir / "missing.yaml")

    def test_validate_raises(self):
        parser = ConfigParser()
        parser.merge_cli_overrides({'clustering.assembler': 'velvet'})

        with pytest.raises(ConfigValidationError, match="velvet"):
            parser.validate()

    def test_to_dict_is_a_copy(self):
        parser = ConfigParser()
        exported = parser.to_dict()
        exported['clustering']['cutoff'] = 1

        assert parser.get('clustering.cutoff') == 100000


class TestValidation:
    """Test schema validation."""

    @pytest.mark.parametrize("section, key, value", [
        ('clustering', 'assembler', 'velvet'),
        ('clustering', 'method', 'dfs'),
        ('clustering', 'cutoff', -1),
        ('clustering', 'cutoff', '100'),
        ('clustering', 'cutoff', True),
        ('output', 'prefix', ''),
        ('output', 'fasta_line_width', -5),
    ])
    def test_invalid_values(self, section, key, value):
        config = copy.deepcopy(DEFAULT_CONFIG)
        config[section][key] = value

        assert len(validate_config(config)) == 1

    def test_invalid_log_level(self):
        config = copy.deepcopy(DEFAULT_CONFIG)
        config['output']['logging']['level'] = 'LOUD'

        assert validate_config(config) == ["Invalid logging level: 'LOUD'"]

    @pytest.mark.parametrize("logging_section", [None, 'INFO', ['INFO']])
    def test_logging_section_not_a_mapping(self, logging_section):
        config = copy.deepcopy(DEFAULT_CONFIG)
        config['output']['logging'] = logging_section

        assert validate_config(config) == ["Invalid logging level: None"]

    def test_scalar_clustering_section(self):
        config = copy.deepcopy(DEFAULT_CONFIG)
        config['clustering'] = 'megahit'

        assert len(validate_config(config)) == 3


class TestTemplates:
    """Test template generation and loading."""

    @pytest.mark.parametrize("template, assembler", [
        ('default', 'megahit'),
        ('megahit', 'megahit'),
        ('spades', 'spades'),
    ])
    def test_template_round_trip(self, temp_output_dir, template, assembler):
        path = temp_output_dir / f"{template}.yaml"

        save_config_template(path, template=template)
        config = load_config(path)

        assert config['clustering']['assembler'] == assembler
        assert validate_config(config) == []

    def test_load_config_without_path(self):
        assert load_config() == DEFAULT_CONFIG

    def test_load_config_rejects_list(self, temp_output_dir):
        path = temp_output_dir / "list.yaml"
        path.write_text("- a\n")

        with pytest.raises(yaml.YAMLError):
            load_config(path)

# FastgClusters v0.1.0
# Any usage is subject to this software's license.
