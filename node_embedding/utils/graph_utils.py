"""
Graph Utilities Module.

This module provides helper functions for graph analysis.
"""

from collections import Counter
from typing import Dict

import networkx as nx
import numpy as np

from ..graph import AdjacencyList, GraphSnapshot, GraphType, VertexIndexMapping


def compute_degree_distribution(adjacency: AdjacencyList) -> Dict:
    """
    Compute out-degree distribution statistics.

    Args:
        adjacency: Adjacency list over vertex indices

    Returns:
        Dictionary with degree statistics
    """
    degrees = np.array(
        [adjacency.out_degree(n) for n in adjacency.mapping.indices()],
        dtype=np.int64
    )

    degree_counts = Counter(degrees.tolist())
    histogram = {int(k): v for k, v in sorted(degree_counts.items())}

    return {
        'degrees': degrees,
        'mean': float(degrees.mean()),
        'std': float(degrees.std()),
        'min': int(degrees.min()),
        'max': int(degrees.max()),
        'histogram': histogram,
        'dead_ends': int((degrees == 0).sum())
    }


def compute_graph_statistics(graph: GraphSnapshot) -> Dict:
    """
    Compute comprehensive graph statistics.

    Args:
        graph: Immutable graph snapshot

    Returns:
        Dictionary with graph statistics
    """
    mapping = VertexIndexMapping(graph)
    degree_stats = compute_degree_distribution(AdjacencyList(graph, mapping))

    num_nodes = graph.vertex_count()
    num_edges = graph.edge_count()

    # Density over ordered pairs (reverse edges count for bidirectional graphs)
    max_edges = num_nodes * (num_nodes - 1)
    density = num_edges / max_edges if max_edges > 0 else 0.0

    nx_graph = graph.to_networkx()
    if graph.graph_type == GraphType.DIRECTED:
        num_components = nx.number_weakly_connected_components(nx_graph)
    else:
        num_components = nx.number_connected_components(nx_graph)

    return {
        'graph_type': graph.graph_type.value,
        'num_nodes': num_nodes,
        'num_edges': num_edges,
        'density': density,
        'avg_degree': degree_stats['mean'],
        'max_degree': degree_stats['max'],
        'min_degree': degree_stats['min'],
        'dead_ends': degree_stats['dead_ends'],
        'connected_components': num_components,
        'self_loops': nx.number_of_selfloops(nx_graph),
        'degree_histogram': degree_stats['histogram']
    }
