"""
Random Walk Module for Skip-Gram Training.

This module implements the DeepWalk approach for generating training
data. It includes:

1. Uniform random walk generation on the graph
2. Symmetric sliding-window pair extraction (skip-gram style)
3. Uniform negative sampling with forbidden-set rejection
4. Assembly of shuffled, labeled (target, context, label) samples

The core idea: nodes that appear together in random walks are structurally
similar and should have similar embeddings.

Classes:
    DeepWalkGenerator: Generate random walks from start vertices
    SymmetricSlidingWindow: Extract (target, context) pairs from walks
    UniformNegativeSampler: Sample negative nodes for contrast
    PositiveNegativeSampleGenerator: Build the labeled training samples

Example:
    >>> from node_embedding.walks import DeepWalkGenerator
    >>> from node_embedding.walks import PositiveNegativeSampleGenerator
    >>>
    >>> # Generate walks
    >>> walker = DeepWalkGenerator(graph, mapping, seed=12345)
    >>> walks = walker.generate_walks(hops=100)
    >>>
    >>> # Build samples
    >>> generator = PositiveNegativeSampleGenerator(mapping, walks, window_size=2, seed=12345)
    >>> samples = generator.generate()
"""

from .generator import DeepWalkGenerator, WalkStrategy
from .pair_sampler import ContextWindow, Pair, SymmetricSlidingWindow
from .negative_sampler import NegativeSampler, UniformNegativeSampler
from .samples import (
    NEGATIVE_LABEL,
    POSITIVE_LABEL,
    PositiveNegativeSampleGenerator,
    Sample,
    format_samples,
    write_samples,
)

__all__ = [
    'DeepWalkGenerator',
    'WalkStrategy',
    'ContextWindow',
    'Pair',
    'SymmetricSlidingWindow',
    'NegativeSampler',
    'UniformNegativeSampler',
    'PositiveNegativeSampleGenerator',
    'Sample',
    'POSITIVE_LABEL',
    'NEGATIVE_LABEL',
    'format_samples',
    'write_samples',
]
