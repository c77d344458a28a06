"""
Training Module for Skip-Gram Node Embeddings.

This module implements the training pipeline including:
- Seeded embedding table initialization
- Per-sample SGD over the shuffled sample list
- Logging and metrics tracking

Components:
    SkipGramTrainer: Main trainer class
    TrainingLogger: Logging and metrics tracking
    train_node_embeddings: Walks -> samples -> training in one call

Example:
    >>> from node_embedding.training import SkipGramTrainer
    >>>
    >>> trainer = SkipGramTrainer(
    ...     num_nodes=mapping.vertex_count(),
    ...     samples=samples,
    ...     embedding_dim=16,
    ...     epochs=5,
    ...     learning_rate=0.025,
    ...     seed=12345
    ... )
    >>> trainer.train()
"""

from .trainer import SkipGramTrainer, train_node_embeddings
from .callbacks import TrainingLogger

__all__ = [
    'SkipGramTrainer',
    'train_node_embeddings',
    'TrainingLogger',
]
