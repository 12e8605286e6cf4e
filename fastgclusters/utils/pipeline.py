"""
FastgClusters pipeline orchestrator.

Runs one clustering job end to end:
- Graph ingestion: Fastg -> edge set + adjacency
- Assembler adapter: FASTA (+ SPAdes paths) -> edge -> sequence node mapping
- Component finder: connected components over the edge graph
- Cluster materializer: per-cluster length/node count, ranked into bins
- Reporter: summary table, node table, optional FASTA and edge table

Each stage returns a new object consumed by the next; nothing is shared
between runs.
"""

from pathlib import Path
from typing import Optional, Dict, Any, List, Union
import logging
import time
from dataclasses import dataclass, field

from ..config.parser import ConfigValidationError
from ..config.schema import validate_config
from ..io.io_core_module import SequenceCollection, get_fasta_stats
from ..assembly_core.fastg_parser import AssemblyGraph, read_fastg
from ..assembly_core.assembler_adapter import (
    EdgeNodeMap,
    build_edge_node_map,
    check_assembler_inputs,
)
from ..assembly_core.component_finder import ComponentAssignment, find_components
from ..assembly_core.cluster_materializer import ClusterStats, materialize_clusters
from ..io_utils.cluster_export import export_clusters

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: str = 'INFO', log_file: Optional[Union[str, Path]] = None) -> None:
    """
    Configure root logging for a command-line run.

    Args:
        level: Logging level name ('DEBUG', 'INFO', 'WARNING', 'ERROR')
        log_file: Optional file that receives the same records as stderr
    """
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, level),
        format=LOG_FORMAT,
        handlers=handlers
    )


# ============================================================================
# Data Structures
# ============================================================================

@dataclass
class ClusteringResult:
    """Everything produced by one pipeline run."""
    graph: AssemblyGraph
    sequences: SequenceCollection
    edge_map: EdgeNodeMap
    assignment: ComponentAssignment
    clusters: List[ClusterStats]
    node_to_component: Dict[str, int]
    output_files: Dict[str, Any] = field(default_factory=dict)
    timings: Dict[str, float] = field(default_factory=dict)

    @property
    def reported_clusters(self) -> List[ClusterStats]:
        """Clusters above the cutoff, in bin order."""
        return [c for c in self.clusters if c.passes_cutoff]

    def summary(self) -> str:
        """Return human-readable summary."""
        reported = self.reported_clusters
        return (
            f"Clustering Summary:\n"
            f"  Graph: {len(self.graph.edges):,} edges, {self.graph.n_links:,} links\n"
            f"  Sequences: {len(self.sequences):,} ({self.sequences.total_length:,} bp)\n"
            f"  Components: {self.assignment.n_components:,}\n"
            f"  Clusters with sequence: {len(self.clusters):,}\n"
            f"  Reported bins: {len(reported):,} "
            f"({sum(c.total_length for c in reported):,} bp)"
        )


# ============================================================================
# Orchestrator
# ============================================================================

class ClusterPipeline:
    """
    Fastg connected-component clustering pipeline.

    Configuration is the merged dictionary produced by ConfigParser
    (sections: clustering, parsing, output).
    """

    def __init__(self, config: Dict[str, Any]):
        """
        Initialize pipeline.

        Args:
            config: Pipeline configuration dictionary

        Raises:
            ConfigValidationError: If the configuration is invalid
        """
        errors = validate_config(config)
        if errors:
            raise ConfigValidationError("; ".join(errors))

        self.config = config
        self.assembler = config['clustering']['assembler']
        self.cutoff = config['clustering']['cutoff']
        self.method = config['clustering']['method']
        self.strict = config.get('parsing', {}).get('strict', False)

        output = config['output']
        self.prefix = output['prefix']
        self.write_fasta = output['write_fasta']
        self.write_edge_table = output['write_edge_table']
        self.line_width = output['fasta_line_width']

    def run(
        self,
        fastg_file: Union[str, Path],
        fasta_file: Union[str, Path],
        paths_file: Optional[Union[str, Path]] = None
    ) -> ClusteringResult:
        """
        Run the complete pipeline and write the reports.

        Args:
            fastg_file: Assembly graph in Fastg format
            fasta_file: Contigs/scaffolds FASTA
            paths_file: SPAdes paths file (required for spades)

        Returns:
            ClusteringResult

        Raises:
            ConfigValidationError: Bad assembler/paths combination (before any I/O)
            FileNotFoundError: Missing input file
        """
        check_assembler_inputs(self.assembler, paths_file)

        timings: Dict[str, float] = {}

        start = time.time()
        graph = read_fastg(fastg_file, strict=self.strict)
        timings['ingestion'] = time.time() - start

        start = time.time()
        sequences, edge_map = build_edge_node_map(self.assembler, graph, fasta_file, paths_file)
        stats = get_fasta_stats(sequences)
        logger.info(f"Sequence N50: {stats['n50']:,} bp, longest: {stats['max_length']:,} bp")
        timings['adapter'] = time.time() - start

        start = time.time()
        assignment = find_components(graph, method=self.method)
        timings['components'] = time.time() - start

        start = time.time()
        clusters, node_to_component = materialize_clusters(
            assignment, edge_map, sequences.lengths_by_name(), cutoff=self.cutoff
        )
        timings['materialize'] = time.time() - start
        for cluster in clusters:
            logger.debug(
                f"{cluster.bin}: {len(assignment.members(cluster.component_id))} edges, "
                f"{cluster.node_count} nodes, {cluster.total_length:,} bp"
                f"{'' if cluster.passes_cutoff else ' (below cutoff)'}"
            )

        start = time.time()
        output_files = export_clusters(
            clusters,
            self.prefix,
            sequences=sequences,
            assignment=assignment if self.write_edge_table else None,
            write_fasta_files=self.write_fasta,
            line_width=self.line_width,
        )
        timings['report'] = time.time() - start

        result = ClusteringResult(
            graph=graph,
            sequences=sequences,
            edge_map=edge_map,
            assignment=assignment,
            clusters=clusters,
            node_to_component=node_to_component,
            output_files=output_files,
            timings=timings,
        )
        for line in result.summary().splitlines():
            logger.info(line)
        return result
