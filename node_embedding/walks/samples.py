"""
Positive/Negative Sample Generator Module.

This module turns a batch of walks into labeled (target, context, label)
training samples:

1. Walks shorter than 2 nodes are discarded
2. Positive pairs come from a symmetric sliding window (label "1")
3. For every walk position, window_size negatives are drawn uniformly,
   avoiding the target's forbidden set (label "0")
4. Optionally, duplicate triples are removed
5. The whole list is shuffled with the configured seed

Step 5 fixes the order the trainer sees samples in, so a fixed seed gives
a fixed training run.
"""

import random
from typing import Dict, Iterable, Iterator, List, NamedTuple, Optional, Sequence, TextIO

from .pair_sampler import ContextWindow, SymmetricSlidingWindow
from .negative_sampler import NegativeSampler, UniformNegativeSampler
from ..exceptions import ConstructionError, SamplingPreconditionError
from ..graph import VertexIndexMapping

POSITIVE_LABEL = "1"
NEGATIVE_LABEL = "0"


class Sample(NamedTuple):
    """Labeled training sample."""
    target: int
    context: int
    label: str

    def __str__(self) -> str:
        return f"{self.target} {self.context} {self.label}"


class PositiveNegativeSampleGenerator:
    """
    Generate shuffled positive and negative samples from random walks.

    Example:
        >>> from node_embedding.walks import PositiveNegativeSampleGenerator
        >>>
        >>> generator = PositiveNegativeSampleGenerator(
        ...     mapping=mapping,
        ...     walks=walks,
        ...     window_size=2,
        ...     allow_duplicates=False,
        ...     seed=12345
        ... )
        >>> samples = generator.generate()
        >>> print(samples[0])  # e.g. "3 7 1"
    """

    def __init__(
        self,
        mapping: VertexIndexMapping,
        walks: Sequence[Sequence[int]],
        window_size: int,
        allow_duplicates: bool = False,
        seed: int = 42,
        context_window: Optional[ContextWindow] = None,
        negative_sampler: Optional[NegativeSampler] = None,
        max_attempts_per_negative: int = 100
    ):
        """
        Initialize sample generator.

        Args:
            mapping: Vertex <-> index mapping (fixes the negative range [0, N))
            walks: Batch of walks (lists of vertex indices)
            window_size: Window size on each side, also the number of
                negatives drawn per walk position
            allow_duplicates: Keep repeated (target, context, label) triples
            seed: Seed for negative draws and the final shuffle
            context_window: Positive strategy (SymmetricSlidingWindow if None)
            negative_sampler: Negative strategy (UniformNegativeSampler over
                the mapping, drawing from the seeded source, if None)
            max_attempts_per_negative: Rejection budget of the default
                negative sampler

        Raises:
            ConstructionError: If mapping is None
            SamplingPreconditionError: If walks is empty or window_size <= 0
        """
        if mapping is None:
            raise ConstructionError("mapping cannot be None")
        if walks is None:
            raise SamplingPreconditionError("walks cannot be None")
        if len(walks) == 0:
            raise SamplingPreconditionError("walks is empty")
        if window_size <= 0:
            raise SamplingPreconditionError("window_size must be greater than 0")

        self.mapping = mapping
        self.walks = [list(walk) for walk in walks]
        self.window_size = window_size
        self.allow_duplicates = allow_duplicates
        self.seed = seed

        self.random = random.Random(seed)
        self.context_window = context_window or SymmetricSlidingWindow()
        self.negative_sampler = negative_sampler or UniformNegativeSampler(
            num_nodes=mapping.vertex_count(),
            rng=self.random,
            max_attempts_per_negative=max_attempts_per_negative
        )

    def _forbidden(self, target: int, walk: List[int]) -> set:
        if isinstance(self.context_window, SymmetricSlidingWindow):
            return self.context_window.forbidden_negatives(target, walk, self.window_size)

        position = walk.index(target)
        start = max(0, position - self.window_size)
        end = min(len(walk) - 1, position + self.window_size)
        return {target, *walk[start:end + 1]}

    def generate(self) -> List[Sample]:
        """
        Generate the shuffled sample list.

        Returns:
            List of Sample triples, shuffled with the configured seed
        """
        samples: List[Sample] = []

        walks = [walk for walk in self.walks if len(walk) >= 2]

        for walk in walks:
            for pair in self.context_window.generate_positive_pairs(walk, self.window_size):
                samples.append(Sample(pair[0], pair[1], POSITIVE_LABEL))

            for target in walk:
                negatives = self.negative_sampler.sample(
                    target,
                    self._forbidden(target, walk),
                    self.window_size
                )
                for pair in negatives:
                    samples.append(Sample(pair[0], pair[1], NEGATIVE_LABEL))

        if not self.allow_duplicates:
            samples = list(dict.fromkeys(samples))

        self.random.shuffle(samples)
        return samples

    def get_statistics(self, samples: List[Sample]) -> Dict:
        """
        Get statistics about a generated sample list.

        Args:
            samples: Output of generate()

        Returns:
            Dictionary with sample statistics
        """
        positives = sum(1 for s in samples if s.label == POSITIVE_LABEL)

        return {
            'num_walks': len(self.walks),
            'usable_walks': sum(1 for w in self.walks if len(w) >= 2),
            'num_samples': len(samples),
            'positive_samples': positives,
            'negative_samples': len(samples) - positives,
            'unique_samples': len(set(samples)),
            'window_size': self.window_size,
            'allow_duplicates': self.allow_duplicates,
        }


def format_samples(samples: Iterable[Sample]) -> Iterator[str]:
    """Render samples as 'target context label' lines."""
    for sample in samples:
        yield str(sample)


def write_samples(samples: Iterable[Sample], stream: TextIO) -> int:
    """
    Write samples one per line.

    Args:
        samples: Samples to write
        stream: Text stream (file, sys.stdout, ...)

    Returns:
        Number of lines written
    """
    count = 0
    for line in format_samples(samples):
        stream.write(line + "\n")
        count += 1
    return count
