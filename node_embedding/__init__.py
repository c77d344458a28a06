"""
Node Embedding Package.

This package computes low-dimensional node embeddings with the DeepWalk
approach: random walks over a graph are treated as sentences for a
skip-gram model trained with negative samples.

Submodules:
    - graph: Graph builder/snapshot, vertex index mapping, adjacency list
    - walks: Random walk generation and sample generation
    - training: Skip-gram trainer and training logger
    - utils: Graph statistics and embedding metrics
    - exceptions: Error taxonomy

Example:
    >>> from node_embedding.graph import GraphBuilder, GraphType, VertexIndexMapping
    >>> from node_embedding.walks import DeepWalkGenerator, PositiveNegativeSampleGenerator
    >>> from node_embedding.training import SkipGramTrainer
"""

__version__ = "1.0.0"

# Version info
VERSION_INFO = {
    'major': 1,
    'minor': 0,
    'patch': 0,
    'release': 'stable'
}
