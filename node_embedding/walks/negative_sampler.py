"""
Negative Sampler Module.

This module implements uniform negative sampling for skip-gram training.
Negative samples provide contrast - they tell the model which nodes should
NOT have similar embeddings (nodes that don't co-occur in walks).

Key Concept:
    For a target node we draw indices uniformly from [0, N) and reject any
    that fall in the target's forbidden set (the target plus its window
    context). Rejection only tests the forbidden set, so the same negative
    may be drawn more than once for one target.
"""

import random
from typing import Collection, List, Optional, Protocol

from .pair_sampler import Pair
from ..exceptions import ConstructionError


class NegativeSampler(Protocol):
    """Strategy drawing negative (target, context) pairs for one target."""

    def sample(self, target: int, forbidden: Collection[int], num_negatives: int) -> List[Pair]:
        ...


class UniformNegativeSampler:
    """
    Uniform negative sampling with a bounded rejection loop.

    Every call draws at most max_attempts_per_negative * num_negatives
    candidates. If every index is forbidden nothing is drawn; if the
    attempt budget runs out the negatives accepted so far are returned.

    Example:
        >>> import random
        >>> sampler = UniformNegativeSampler(num_nodes=100, rng=random.Random(7))
        >>> pairs = sampler.sample(target=3, forbidden={3, 4, 5}, num_negatives=2)
        >>> print(pairs)  # e.g. [Pair(target=3, context=41), Pair(target=3, context=9)]
    """

    def __init__(
        self,
        num_nodes: int,
        rng: Optional[random.Random] = None,
        max_attempts_per_negative: int = 100
    ):
        """
        Initialize uniform sampler.

        Args:
            num_nodes: Total number of nodes N (draws fall in [0, N))
            rng: Random source to draw from (a fresh unseeded one if None)
            max_attempts_per_negative: Rejection budget per requested negative
        """
        if num_nodes < 1:
            raise ConstructionError("num_nodes must be a positive integer")
        if max_attempts_per_negative < 1:
            raise ConstructionError("max_attempts_per_negative must be a positive integer")

        self.num_nodes = num_nodes
        self.random = rng if rng is not None else random.Random()
        self.max_attempts_per_negative = max_attempts_per_negative

        # Tracking
        self.total_draws = 0
        self.total_rejections = 0
        self.exhausted_calls = 0

    def sample(self, target: int, forbidden: Collection[int], num_negatives: int) -> List[Pair]:
        """
        Sample negative pairs for a target.

        Args:
            target: Target vertex index
            forbidden: Indices that must not be sampled as negatives
            num_negatives: Number of negatives requested

        Returns:
            List of (target, negative) pairs, at most num_negatives long
        """
        negatives: List[Pair] = []

        allowed = self.num_nodes - sum(1 for f in set(forbidden) if 0 <= f < self.num_nodes)
        if allowed <= 0 or num_negatives <= 0:
            return negatives

        max_attempts = self.max_attempts_per_negative * num_negatives
        attempts = 0

        while len(negatives) < num_negatives and attempts < max_attempts:
            candidate = self.random.randrange(self.num_nodes)
            attempts += 1

            if candidate in forbidden:
                self.total_rejections += 1
                continue

            negatives.append(Pair(target, candidate))

        self.total_draws += attempts
        if len(negatives) < num_negatives:
            self.exhausted_calls += 1

        return negatives

    def get_statistics(self) -> dict:
        """
        Get statistics about the draws made so far.

        Returns:
            Dictionary with sampling statistics
        """
        return {
            'num_nodes': self.num_nodes,
            'total_draws': self.total_draws,
            'total_rejections': self.total_rejections,
            'rejection_rate': (self.total_rejections / self.total_draws
                               if self.total_draws else 0.0),
            'exhausted_calls': self.exhausted_calls,
        }
