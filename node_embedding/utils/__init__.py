"""
Utilities Module.

This module provides helper functions for:
- Graph analysis
- Evaluation metrics

Components:
    graph_utils: Graph analysis
    metrics: Evaluation metrics for embeddings
"""

from .graph_utils import (
    compute_degree_distribution,
    compute_graph_statistics,
)
from .metrics import (
    compute_neighbor_similarity,
    evaluate_link_prediction,
    compute_embedding_statistics,
    evaluate_embeddings,
    check_embedding_health,
)

__all__ = [
    # Graph utils
    'compute_degree_distribution',
    'compute_graph_statistics',
    # Metrics
    'compute_neighbor_similarity',
    'evaluate_link_prediction',
    'compute_embedding_statistics',
    'evaluate_embeddings',
    'check_embedding_health',
]
