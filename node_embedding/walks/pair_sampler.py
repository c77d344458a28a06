"""
Co-occurrence Pair Sampler Module.

This module extracts (target, context) pairs from random walks for
skip-gram training. The core idea is that nodes appearing close together
in walks are structurally similar.

Key Concept:
    Given a walk [n1, n2, n3, n4, n5] and window size 2:
    - Target n3 has contexts: n1, n2, n4, n5
    - This creates pairs: (n3, n1), (n3, n2), (n3, n4), (n3, n5)

    Pairs are defined by position, not value: a walk that revisits a node
    can pair that node with itself.
"""

from typing import List, NamedTuple, Protocol, Sequence, Set

import numpy as np


class Pair(NamedTuple):
    """(target, context) pair of vertex indices."""
    target: int
    context: int


class ContextWindow(Protocol):
    """Strategy producing positive pairs from one walk."""

    def generate_positive_pairs(self, walk: Sequence[int], window_size: int) -> List[Pair]:
        ...


class SymmetricSlidingWindow:
    """
    Symmetric sliding window over a walk.

    Both earlier and later positions within window_size of the target
    count as context.

    Example:
        >>> window = SymmetricSlidingWindow()
        >>> window.generate_positive_pairs([0, 1, 2], window_size=1)
        [Pair(target=0, context=1), Pair(target=1, context=0), ...]
    """

    def generate_positive_pairs(self, walk: Sequence[int], window_size: int) -> List[Pair]:
        """
        Extract all positive pairs from a walk.

        Args:
            walk: Vertex indices of one walk
            window_size: Number of positions on each side of the target

        Returns:
            List of (target, context) pairs in walk order
        """
        pairs = []
        walk_len = len(walk)

        for i, target in enumerate(walk):
            start = max(0, i - window_size)
            end = min(walk_len - 1, i + window_size)

            for j in range(start, end + 1):
                if i != j:
                    pairs.append(Pair(target, walk[j]))

        return pairs

    def window_contexts(self, walk: Sequence[int], position: int, window_size: int) -> List[int]:
        """Context values around a single position of the walk."""
        start = max(0, position - window_size)
        end = min(len(walk) - 1, position + window_size)
        return [walk[j] for j in range(start, end + 1) if j != position]

    def forbidden_negatives(self, target: int, walk: Sequence[int], window_size: int) -> Set[int]:
        """
        Nodes a negative sample for target must not hit.

        The set is the target itself plus the window context around the
        target's FIRST occurrence in the walk. Later occurrences of the
        same target are not covered.

        Args:
            target: Target vertex index (must occur in walk)
            walk: Walk the target was taken from
            window_size: Window size on each side

        Returns:
            Set of forbidden vertex indices
        """
        position = list(walk).index(target)
        forbidden = {target}
        forbidden.update(self.window_contexts(walk, position, window_size))
        return forbidden

    def get_statistics(self, walks: List[Sequence[int]], window_size: int) -> dict:
        """
        Get statistics about the pairs a batch of walks produces.

        Args:
            walks: List of walks
            window_size: Window size on each side

        Returns:
            Dictionary with pair statistics
        """
        counts = [len(self.generate_positive_pairs(w, window_size)) for w in walks]
        pairs = set()
        for walk in walks:
            pairs.update(self.generate_positive_pairs(walk, window_size))

        return {
            'num_pairs': int(sum(counts)),
            'unique_pairs': len(pairs),
            'avg_pairs_per_walk': float(np.mean(counts)) if counts else 0.0,
            'window_size': window_size,
        }


def estimate_pair_count(num_walks: int, walk_length: int, window_size: int) -> int:
    """
    Estimate the number of positive pairs a batch of full-length walks yields.

    Args:
        num_walks: Number of walks
        walk_length: Length of every walk
        window_size: Window size on each side

    Returns:
        Exact pair count when all walks have walk_length nodes
    """
    per_walk = 0
    for i in range(walk_length):
        per_walk += min(walk_length - 1, i + window_size) - max(0, i - window_size)

    return num_walks * per_walk
