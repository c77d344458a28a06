#!/usr/bin/env python3
"""
Node Embedding Training Script.

This script reads an edge list, generates DeepWalk random walks, builds
positive/negative samples and trains skip-gram embeddings.

Usage:
    python scripts/train.py --edge-list data/bio-CE-GN.txt
    python scripts/train.py --edge-list graph.txt --graph-type bidirectional --epochs 10
"""

import argparse
import sys
import time
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from config import apply_overrides, load_config
from node_embedding.graph import AdjacencyList, GraphType, read_edge_list
from node_embedding.training import train_node_embeddings
from node_embedding.utils.graph_utils import compute_graph_statistics
from node_embedding.utils.metrics import evaluate_embeddings


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description='Train DeepWalk skip-gram node embeddings')

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
        '--dim', type=int, default=None,
        help='Embedding dimension (overrides config)'
    )
    parser.add_argument(
        '--epochs', type=int, default=None,
        help='Number of epochs (overrides config)'
    )
    parser.add_argument(
        '--lr', type=float, default=None,
        help='Learning rate (overrides config)'
    )
    parser.add_argument(
        '--seed', type=int, default=None,
        help='Seed for walks, samples and initialization (overrides config)'
    )
    parser.add_argument(
        '--log-dir', type=str, default=None,
        help='Directory for training logs (overrides config)'
    )
    parser.add_argument(
        '--quiet', action='store_true',
        help='Only print the final summary'
    )

    return parser.parse_args(argv)


def main(argv=None):
    """Main training function."""
    args = parse_args(argv)
    verbose = not args.quiet

    print("=" * 60)
    print("DeepWalk Skip-Gram Training")
    print("=" * 60)

    config = apply_overrides(load_config(args.config), {
        'graph.type': args.graph_type,
        'walks.hops': args.hops,
        'walks.seed': args.seed,
        'samples.window_size': args.window_size,
        'samples.seed': args.seed,
        'training.embedding_dim': args.dim,
        'training.epochs': args.epochs,
        'training.learning_rate': args.lr,
        'training.seed': args.seed,
        'paths.logs': args.log_dir,
    })

    graph_config = config.get('graph', {})
    builder = read_edge_list(
        args.edge_list,
        graph_type=GraphType.from_name(graph_config.get('type', 'directed')),
        header_lines=graph_config.get('header_lines', 1)
    )
    graph = builder.if_not_empty().build()

    print(f"Number of nodes: {graph.vertex_count()}, Number of edges: {graph.edge_count()}")

    if verbose:
        stats = compute_graph_statistics(graph)
        print(f"  Dead ends: {stats['dead_ends']}")
        print(f"  Connected components: {stats['connected_components']}")
        print(f"  Average out-degree: {stats['avg_degree']:.2f}")

    start_time = time.time()
    trainer, mapping, samples = train_node_embeddings(graph, config, verbose=verbose)
    total_time = time.time() - start_time

    print(f"\nTrained on {len(samples):,} samples in {total_time:.1f} seconds")

    embeddings = trainer.embedding_matrix()
    eval_results = evaluate_embeddings(
        embeddings,
        AdjacencyList(graph, mapping).edge_index(),
        seed=config.get('training', {}).get('seed', 12345)
    )

    print("\nEvaluation Results:")
    print(f"  Neighbor similarity gap: {eval_results['neighbor_similarity']['sim_gap']:.4f}")
    print(f"  Link prediction AUC: {eval_results['link_prediction']['auc_roc']:.4f}")
    print(f"  Embeddings collapsed: {eval_results['embedding_stats']['is_collapsed']}")

    print("\n" + "=" * 60)
    print("Training complete!")
    print("=" * 60)

    return 0


if __name__ == '__main__':
    sys.exit(main())
