#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
FastgClusters v0.1.0

Command-line interface: the getclusters command plus configuration helpers.

Author: FastgClusters Development Team
License: GNU General Public License v2 or later
"""

import sys
from pathlib import Path

import click
import yaml

from .version import __version__
from .config.parser import ConfigParser, ConfigValidationError
from .config.schema import (
    COMPONENT_METHODS,
    SUPPORTED_ASSEMBLERS,
    TEMPLATES,
    load_config,
    save_config_template,
    validate_config,
)
from .utils.pipeline import ClusterPipeline, setup_logging


def fail(message: str):
    """Report a fatal error on stderr and exit with status 1."""
    click.echo(f"✗ Error: {message}", err=True)
    sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name='fastgclusters')
@click.option('--verbose', '-v', is_flag=True, help='Log debug messages')
@click.option('--quiet', '-q', is_flag=True, help='Only log warnings and errors')
@click.pass_context
def main(ctx, verbose, quiet):
    """
    FastgClusters: clusters of connected contigs from Fastg assembly graphs

    Each connected cluster in a MEGAHIT or SPAdes assembly graph likely
    originates from a single genome, so clusters are reported as putative
    genome bins, largest first.
    """
    ctx.ensure_object(dict)
    ctx.obj['VERBOSE'] = verbose
    ctx.obj['QUIET'] = quiet


# ============================================================================
# Clustering
# ============================================================================

@main.command()
@click.option('--fastg', 'fastg_file', required=True, type=click.Path(exists=True, dir_okay=False),
              help='Input Fastg file from MEGAHIT or SPAdes')
@click.option('--fasta', 'fasta_file', required=True, type=click.Path(exists=True, dir_okay=False),
              help='Contigs/scaffolds FASTA matching the Fastg (MEGAHIT *.contigs.fa, '
                   'SPAdes contigs or scaffolds)')
@click.option('--paths', 'paths_file', type=click.Path(exists=True, dir_okay=False),
              help='SPAdes paths file translating EDGE to NODE ids (required for spades)')
@click.option('--assembler', '-a', type=click.Choice(list(SUPPORTED_ASSEMBLERS)), default=None,
              help='Assembler that produced the graph (default: megahit)')
@click.option('--out', '-o', 'prefix', type=str, default=None,
              help="Output file name prefix (default: 'test')")
@click.option('--cutoff', '-c', type=click.IntRange(min=0), default=None,
              help='Minimum total sequence length of a reported cluster, exclusive (default: 100000)')
@click.option('--outfasta', is_flag=True,
              help='Write a FASTA file for each reported cluster')
@click.option('--edge-table', is_flag=True,
              help='Also write <prefix>.edges_to_cluster.tab')
@click.option('--method', type=click.Choice(list(COMPONENT_METHODS)), default=None,
              help='Connected-component method (default: fishing)')
@click.option('--strict', is_flag=True,
              help='Warn about malformed Fastg declaration lines')
@click.option('--line-width', type=click.IntRange(min=0), default=None,
              help='FASTA line width for --outfasta, 0 = no wrapping')
@click.option('--config', '-C', 'config_file', type=click.Path(exists=True, dir_okay=False),
              help='YAML configuration file (command-line options take precedence)')
@click.option('--log-file', type=click.Path(dir_okay=False),
              help='Also write log messages to this file')
@click.pass_context
def getclusters(ctx, fastg_file, fasta_file, paths_file, assembler, prefix, cutoff,
                outfasta, edge_table, method, strict, line_width, config_file, log_file):
    """
    Retrieve clusters of connected contigs from a Fastg file.

    Reports which contigs belong to which cluster, and the total length and
    contig count of each cluster, in descending order of length. Clusters
    made of a single contig are reported too.
    """
    try:
        settings = ConfigParser(config_file)
        settings.merge_cli_overrides({
            'clustering.assembler': assembler,
            'clustering.cutoff': cutoff,
            'clustering.method': method,
            'output.prefix': prefix,
            'output.fasta_line_width': line_width,
            'output.logging.log_file': log_file,
            # flags only override when given
            'output.write_fasta': True if outfasta else None,
            'output.write_edge_table': True if edge_table else None,
            'parsing.strict': True if strict else None,
        })
        if ctx.obj.get('VERBOSE'):
            settings.set('output.logging.level', 'DEBUG')
        elif ctx.obj.get('QUIET'):
            settings.set('output.logging.level', 'WARNING')
        settings.validate()

        setup_logging(settings.get('output.logging.level'), settings.get('output.logging.log_file'))

        pipeline = ClusterPipeline(settings.to_dict())
        result = pipeline.run(fastg_file, fasta_file, paths_file)
    except (ConfigValidationError, FileNotFoundError, OSError, UnicodeError) as e:
        fail(str(e))

    if not ctx.obj.get('QUIET'):
        click.echo(
            f"✓ {len(result.reported_clusters)} clusters above cutoff written with prefix: "
            f"{pipeline.prefix}"
        )


# ============================================================================
# Configuration files
# ============================================================================

def _load_or_fail(config_file):
    try:
        return load_config(Path(config_file))
    except (yaml.YAMLError, UnicodeError) as e:
        fail(f"Invalid YAML: {e}")


@main.group()
def config():
    """Create, check and inspect YAML configuration files."""


@config.command('init')
@click.option('--output', '-o', type=click.Path(dir_okay=False), default='fastgclusters_config.yaml',
              help='Configuration file to create')
@click.option('--template', '-t', type=click.Choice(list(TEMPLATES)), default='default',
              help='Preset the assembler')
def config_init(output, template):
    """Write a configuration file listing every setting with its default."""
    try:
        save_config_template(Path(output), template=template)
    except OSError as e:
        fail(f"Could not write {output}: {e}")
    click.echo(f"✓ Wrote {template} configuration to {output}")


def _exit_on_problems(config_file, settings):
    errors = validate_config(settings)
    if errors:
        click.echo(f"✗ {config_file} has {len(errors)} problem(s):", err=True)
        for error in errors:
            click.echo(f"  • {error}", err=True)
        sys.exit(1)


@config.command('validate')
@click.argument('config_file', type=click.Path(exists=True, dir_okay=False))
def config_validate(config_file):
    """Check a configuration file and list every problem found."""
    _exit_on_problems(config_file, _load_or_fail(config_file))
    click.echo(f"✓ {config_file} is valid")


@config.command('show')
@click.argument('config_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--format', '-f', 'fmt', type=click.Choice(['yaml', 'summary']), default='summary',
              help='Full merged YAML, or a short summary')
def config_show(config_file, fmt):
    """Print the settings a configuration file resolves to."""
    settings = _load_or_fail(config_file)

    if fmt == 'yaml':
        click.echo(yaml.safe_dump(settings, default_flow_style=False, sort_keys=False), nl=False)
        return

    # the summary reads every section, so it needs a usable file
    _exit_on_problems(config_file, settings)
    clustering = settings['clustering']
    output = settings['output']
    click.echo(f"Settings from {config_file}")
    click.echo(f"  Assembler:     {clustering['assembler']}")
    click.echo(f"  Cutoff:        {clustering['cutoff']} bp")
    click.echo(f"  Method:        {clustering['method']}")
    click.echo(f"  Prefix:        {output['prefix']}")
    click.echo(f"  Cluster FASTA: {'yes' if output['write_fasta'] else 'no'}")
    click.echo(f"  Edge table:    {'yes' if output['write_edge_table'] else 'no'}")
    click.echo(f"  Log level:     {output['logging']['level']}")


@main.command()
def version():
    """Show version and library versions."""
    import Bio

    click.echo(f"FastgClusters v{__version__}")
    click.echo(f"  BioPython: {Bio.__version__}")
    click.echo(f"  PyYAML: {yaml.__version__}")


if __name__ == '__main__':
    sys.exit(main())

# FastgClusters v0.1.0
# Any usage is subject to this software's license.
