"""
Skip-Gram Trainer Module.

This module implements plain per-sample SGD for the skip-gram objective
over a single shared embedding space. It handles:
- Seeded, reproducible initialization of the embedding table
- The training loop over the (already shuffled) sample list
- Per-epoch metrics and logging

Design Decisions:
- One table for both target and context roles (no output matrix)
- No momentum, decay or regularization
- Updates are applied immediately and in sample order, so the result
  depends on the seeded sample order
"""

import math
from typing import Any, Dict, Hashable, List, Optional, Sequence, Tuple

import torch

from .callbacks import TrainingLogger
from ..exceptions import ConstructionError
from ..graph import GraphSnapshot, VertexIndexMapping
from ..walks import (
    DeepWalkGenerator,
    NEGATIVE_LABEL,
    POSITIVE_LABEL,
    PositiveNegativeSampleGenerator,
    Sample,
)

# Clamp for log() in the reported loss
_EPS = 1e-12


class SkipGramTrainer:
    """
    Skip-gram trainer with negative samples.

    For each sample (t, c, y):
        score      = dot(E[t], E[c])
        prediction = sigmoid(score)
        error      = y - prediction
        E[t]      += lr * error * E[c]
        E[c]      += lr * error * E[t]

    Both gradients use the vectors as they were before the update. Each
    row of the table is replaced as a whole tensor, never edited in place.

    The table is keyed by zero-based node index, the same indices the
    sample generator emits. (A one-based keying would leave index 0
    without a vector.)

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
        >>> embeddings = trainer.get_embeddings()
    """

    def __init__(
        self,
        num_nodes: int,
        samples: Sequence[Sample],
        embedding_dim: int,
        epochs: int,
        learning_rate: float,
        seed: int,
        logger: Optional[TrainingLogger] = None,
        verbose: bool = True
    ):
        """
        Initialize trainer.

        Args:
            num_nodes: Number of nodes (table rows 0..num_nodes-1)
            samples: Shuffled (target, context, label) samples
            embedding_dim: Vector dimension d (>= 1)
            epochs: Number of passes over samples (>= 1)
            learning_rate: SGD step size (> 0)
            seed: Initialization seed (>= 1)
            logger: Training logger (console-only logger if None)
            verbose: Whether the default logger prints

        Raises:
            ConstructionError: On any invalid argument
        """
        if samples is None:
            raise ConstructionError("samples cannot be None")
        if num_nodes < 1:
            raise ConstructionError("num_nodes must be a positive integer")
        if embedding_dim < 1:
            raise ConstructionError("embedding_dim must be a positive integer")
        if epochs < 1:
            raise ConstructionError("epochs must be a positive integer")
        if not learning_rate > 0 or math.isinf(learning_rate):
            raise ConstructionError("learning_rate must be a positive number")
        if seed < 1:
            raise ConstructionError("seed must be a positive integer")

        self.num_nodes = num_nodes
        self.samples: List[Sample] = self._validate_samples(samples, num_nodes)
        self.embedding_dim = embedding_dim
        self.epochs = epochs
        self.learning_rate = learning_rate
        self.seed = seed

        self.logger = logger if logger is not None else TrainingLogger(verbose=verbose)

        self.embeddings: Dict[int, torch.Tensor] = self._initialize_embeddings()

        # Tracking
        self.current_epoch = 0
        self.history: List[Dict[str, float]] = []

    @staticmethod
    def _validate_samples(samples: Sequence[Sample], num_nodes: int) -> List[Sample]:
        checked = []
        for sample in samples:
            target, context, label = sample
            if not (0 <= target < num_nodes and 0 <= context < num_nodes):
                raise ConstructionError(
                    f"Sample {tuple(sample)} references a node outside [0, {num_nodes})"
                )
            if label not in (POSITIVE_LABEL, NEGATIVE_LABEL):
                raise ConstructionError(f"Sample label must be '1' or '0', got {label!r}")
            checked.append(Sample(target, context, label))
        return checked

    def _initialize_embeddings(self) -> Dict[int, torch.Tensor]:
        """Small uniform values in [0, 0.01), drawn in node order from the seed."""
        generator = torch.Generator()
        generator.manual_seed(self.seed)

        return {
            node: torch.rand(self.embedding_dim, generator=generator, dtype=torch.float64) * 0.01
            for node in range(self.num_nodes)
        }

    def _step(self, target: int, context: int, label: float) -> float:
        """Apply one SGD update and return the pre-update prediction."""
        target_vec = self.embeddings[target]
        context_vec = self.embeddings[context]

        prediction = torch.sigmoid(torch.dot(target_vec, context_vec))
        error = label - prediction

        target_grad = error * context_vec
        context_grad = error * target_vec

        # Whole-vector swaps; the second read sees the first update when target == context
        self.embeddings[target] = self.embeddings[target] + self.learning_rate * target_grad
        self.embeddings[context] = self.embeddings[context] + self.learning_rate * context_grad

        return prediction.item()

    def train_epoch(self) -> Dict[str, float]:
        """
        Train for one epoch (one ordered pass over all samples).

        Returns:
            Dictionary with mean loss and mean predictions per label
        """
        total_loss = 0.0
        pos_prob, num_pos = 0.0, 0
        neg_prob, num_neg = 0.0, 0

        for target, context, label in self.samples:
            y = 1.0 if label == POSITIVE_LABEL else 0.0
            prediction = self._step(target, context, y)

            if y == 1.0:
                total_loss -= math.log(max(prediction, _EPS))
                pos_prob += prediction
                num_pos += 1
            else:
                total_loss -= math.log(max(1.0 - prediction, _EPS))
                neg_prob += prediction
                num_neg += 1

        num_samples = num_pos + num_neg

        return {
            'loss': total_loss / num_samples if num_samples else 0.0,
            'pos_prob': pos_prob / num_pos if num_pos else 0.0,  # Should rise
            'neg_prob': neg_prob / num_neg if num_neg else 0.0,  # Should fall
        }

    def train(self, num_epochs: Optional[int] = None) -> List[Dict[str, float]]:
        """
        Full training loop.

        Args:
            num_epochs: Number of epochs (defaults to the configured epochs)

        Returns:
            Per-epoch metric history of this call
        """
        num_epochs = self.epochs if num_epochs is None else num_epochs
        history = []

        for epoch in range(num_epochs):
            self.current_epoch = epoch
            self.logger.start_epoch(epoch)

            metrics = self.train_epoch()

            self.logger.end_epoch()
            self.logger.log_epoch(epoch, metrics)
            history.append(metrics)

        self.history.extend(history)
        return history

    def train_model(self) -> List[Dict[str, float]]:
        """Train for the configured number of epochs."""
        return self.train()

    def get_embeddings(self) -> Dict[int, torch.Tensor]:
        """
        Get the live embedding table.

        Returns:
            Dict mapping node index to a [embedding_dim] tensor
        """
        return self.embeddings

    def embedding_matrix(self) -> torch.Tensor:
        """
        Snapshot of the table as a matrix.

        Returns:
            Tensor [num_nodes, embedding_dim], row i is node index i
        """
        return torch.stack([self.embeddings[node] for node in range(self.num_nodes)])

    def embeddings_by_vertex(self, mapping: VertexIndexMapping) -> Dict[Hashable, torch.Tensor]:
        """Map each original vertex to its vector."""
        return {
            mapping.get_vertex(node): vector for node, vector in self.embeddings.items()
        }

    def similarity(self, a: int, b: int) -> float:
        """Dot product of two node vectors."""
        return torch.dot(self.embeddings[a], self.embeddings[b]).item()


def train_node_embeddings(
    graph: GraphSnapshot,
    config: Dict[str, Any],
    verbose: bool = False
) -> Tuple[SkipGramTrainer, VertexIndexMapping, List[Sample]]:
    """
    High-level function running walks, sampling and training on a graph.

    This is the recommended entry point for training.

    Args:
        graph: Immutable graph snapshot
        config: Configuration dictionary (see config/default.yaml)
        verbose: Whether to print progress

    Returns:
        Tuple of (trained trainer, mapping, samples)
    """
    mapping = VertexIndexMapping(graph)

    walk_config = config.get('walks', {})
    walker = DeepWalkGenerator(graph, mapping, seed=walk_config.get('seed', 12345))
    walks = walker.generate_walks(
        hops=walk_config.get('hops', 100),
        walks_per_node=walk_config.get('per_node', 1),
        verbose=verbose
    )

    sample_config = config.get('samples', {})
    sample_generator = PositiveNegativeSampleGenerator(
        mapping=mapping,
        walks=walks,
        window_size=sample_config.get('window_size', 2),
        allow_duplicates=sample_config.get('allow_duplicates', False),
        seed=sample_config.get('seed', 12345),
        max_attempts_per_negative=sample_config.get('max_attempts_per_negative', 100)
    )
    samples = sample_generator.generate()

    if verbose:
        stats = sample_generator.get_statistics(samples)
        print(f"Generated {stats['num_samples']:,} samples "
              f"({stats['positive_samples']:,} positive, {stats['negative_samples']:,} negative)")

    train_config = config.get('training', {})
    logger = TrainingLogger(
        log_dir=config.get('paths', {}).get('logs'),
        log_every=train_config.get('log_every', 1),
        verbose=verbose
    )

    trainer = SkipGramTrainer(
        num_nodes=mapping.vertex_count(),
        samples=samples,
        embedding_dim=train_config.get('embedding_dim', 16),
        epochs=train_config.get('epochs', 5),
        learning_rate=train_config.get('learning_rate', 0.025),
        seed=train_config.get('seed', 12345),
        logger=logger
    )
    trainer.train()
    logger.save_final({'num_samples': len(samples), 'num_nodes': mapping.vertex_count()})

    return trainer, mapping, samples
