#!/usr/bin/env python3
"""
Sample Generation Script.

This script generates skip-gram training samples:
1. Reads the edge list and builds the graph
2. Generates random walks from every vertex
3. Builds shuffled positive/negative samples
4. Prints them as "target context label" lines (or writes them to a file)

Usage:
    python scripts/generate_samples.py --edge-list data/bio-CE-GN.txt
    python scripts/generate_samples.py --edge-list graph.txt --output samples.txt
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from config import apply_overrides, load_config
from node_embedding.graph import GraphType, VertexIndexMapping, read_edge_list
from node_embedding.walks import DeepWalkGenerator, PositiveNegativeSampleGenerator, write_samples


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description='Generate skip-gram training samples')

    parser.add_argument(
        '--config', type=str, default=None,
        help='Path to configuration file (defaults to config/default.yaml)'
    )
    parser.add_argument(
        '--edge-list', type=str, required=True,
        help='Edge-list file: header line, then "source destination [weight]" records'
    )
    parser.add_argument(
        '--graph-type', type=str, default=None, choices=['directed', 'bidirectional'],
        help='Graph type (overrides config)'
    )
    parser.add_argument(
        '--hops', type=int, default=None,
        help='Maximum hops per walk (overrides config)'
    )
    parser.add_argument(
        '--window-size', type=int, default=None,
        help='Context window size (overrides config)'
    )
    parser.add_argument(
        '--allow-duplicates', action='store_true', default=None,
        help='Keep duplicate samples'
    )
    parser.add_argument(
        '--seed', type=int, default=None,
        help='Seed for walks and samples (overrides config)'
    )
    parser.add_argument(
        '--output', type=str, default=None,
        help='Write samples to this file instead of stdout'
    )

    return parser.parse_args(argv)


def main(argv=None):
    """Main sample generation function."""
    args = parse_args(argv)

    config = apply_overrides(load_config(args.config), {
        'graph.type': args.graph_type,
        'walks.hops': args.hops,
        'walks.seed': args.seed,
        'samples.window_size': args.window_size,
        'samples.allow_duplicates': args.allow_duplicates,
        'samples.seed': args.seed,
    })

    graph_config = config.get('graph', {})
    graph = read_edge_list(
        args.edge_list,
        graph_type=GraphType.from_name(graph_config.get('type', 'directed')),
        header_lines=graph_config.get('header_lines', 1)
    ).if_not_empty().build()

    # Progress goes to stderr when samples go to stdout
    info = sys.stderr if args.output is None else sys.stdout
    print(f"Number of nodes: {graph.vertex_count()}, Number of edges: {graph.edge_count()}",
          file=info)

    mapping = VertexIndexMapping(graph)

    walk_config = config.get('walks', {})
    walker = DeepWalkGenerator(graph, mapping, seed=walk_config.get('seed', 12345))
    walks = walker.generate_walks(
        hops=walk_config.get('hops', 100),
        walks_per_node=walk_config.get('per_node', 1)
    )

    sample_config = config.get('samples', {})
    generator = PositiveNegativeSampleGenerator(
        mapping=mapping,
        walks=walks,
        window_size=sample_config.get('window_size', 2),
        allow_duplicates=sample_config.get('allow_duplicates', False),
        seed=sample_config.get('seed', 12345),
        max_attempts_per_negative=sample_config.get('max_attempts_per_negative', 100)
    )
    samples = generator.generate()

    if args.output is None:
        write_samples(samples, sys.stdout)
    else:
        with open(args.output, 'w') as f:
            count = write_samples(samples, f)
        print(f"Wrote {count:,} samples to {args.output}", file=info)

    return 0


if __name__ == '__main__':
    sys.exit(main())
