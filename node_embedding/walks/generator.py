"""
Random Walk Generator Module.

This module generates DeepWalk-style random walks for skip-gram training.
Random walks capture local and global graph structure by sampling
paths through the graph.

Key Concept:
    Starting from a vertex, at each step we choose one of the current
    vertex's outgoing neighbors uniformly at random. Edge weights do not
    bias the choice. A vertex with no outgoing neighbors ends the walk
    early; a short walk is a valid result, not an error.
"""

import random
from typing import Dict, Hashable, Iterable, List, Optional, Protocol

import numpy as np

from ..exceptions import ConstructionError
from ..graph import AdjacencyList, GraphSnapshot, VertexIndexMapping


class WalkStrategy(Protocol):
    """Anything that can produce a walk of vertex indices from a start vertex."""

    def generate_walk(self, start: Hashable, hops: int) -> List[int]:
        ...


class DeepWalkGenerator:
    """
    Uniform random walk generator (DeepWalk strategy).

    The generator owns a single seeded random source. The same seed,
    graph, start vertex and hop count always reproduce the same walk,
    provided the calls are made in the same order.

    Example:
        >>> from node_embedding.walks import DeepWalkGenerator
        >>>
        >>> walker = DeepWalkGenerator(graph, mapping, seed=12345)
        >>> walk = walker.generate_walk(start=1, hops=5)
        >>> print(walk)  # e.g. [0, 1, 2]
    """

    def __init__(
        self,
        graph: GraphSnapshot,
        mapping: VertexIndexMapping,
        seed: Optional[int] = 42,
        adjacency: Optional[AdjacencyList] = None
    ):
        """
        Initialize walk generator.

        Args:
            graph: Immutable graph snapshot
            mapping: Vertex <-> index mapping of the same snapshot
            seed: Random seed for reproducibility (None for random)
            adjacency: Pre-built adjacency list to share (built if None)
        """
        if graph is None:
            raise ConstructionError("graph cannot be None")
        if mapping is None:
            raise ConstructionError("mapping cannot be None")

        self.graph = graph
        self.mapping = mapping
        self.seed = seed
        self.random = random.Random(seed)

        self.adjacency = adjacency if adjacency is not None else AdjacencyList(graph, mapping)

    def generate_walk(self, start: Hashable, hops: int) -> List[int]:
        """
        Generate one random walk starting from a vertex.

        Args:
            start: Start vertex (not index)
            hops: Maximum number of transitions

        Returns:
            Vertex indices visited, start included; length in [1, hops + 1]

        Raises:
            UnknownVertexError: If start is not a vertex of the graph
        """
        current = self.mapping.index_for_vertex(start)
        walk = [current]

        for _ in range(hops):
            neighbors = self.adjacency.neighbors(current)

            if not neighbors:
                # Dead end - stop walk
                break

            current = neighbors[self.random.randrange(len(neighbors))].index
            walk.append(current)

        return walk

    def generate_walks(
        self,
        hops: int,
        walks_per_node: int = 1,
        starts: Optional[Iterable[Hashable]] = None,
        verbose: bool = False
    ) -> List[List[int]]:
        """
        Generate walks from many start vertices.

        Vertices are visited in index order, each one walks_per_node
        times, drawing from the single seeded source in sequence.

        Args:
            hops: Maximum number of transitions per walk
            walks_per_node: Number of walks started from each vertex
            starts: Start vertices (defaults to every vertex in index order)
            verbose: Whether to print progress

        Returns:
            List of walks (each a list of vertex indices)
        """
        if starts is None:
            starts = [self.mapping.get_vertex(i) for i in self.mapping.indices()]
        else:
            starts = list(starts)

        all_walks = []

        for i, vertex in enumerate(starts):
            if verbose and i % 100 == 0:
                print(f"Generating walks: {i}/{len(starts)} nodes processed")

            for _ in range(walks_per_node):
                all_walks.append(self.generate_walk(vertex, hops))

        if verbose:
            print(f"Generated {len(all_walks)} walks total")
            avg_length = np.mean([len(w) for w in all_walks]) if all_walks else 0
            print(f"Average walk length: {avg_length:.1f}")

        return all_walks

    def get_statistics(self) -> Dict:
        """
        Get statistics about the graph structure relevant to walking.

        Returns:
            Dictionary with graph walking statistics
        """
        degrees = [self.adjacency.out_degree(n) for n in self.mapping.indices()]
        dead_ends = sum(1 for d in degrees if d == 0)

        return {
            'num_nodes': len(degrees),
            'nodes_with_neighbors': len(degrees) - dead_ends,
            'dead_ends': dead_ends,
            'avg_degree': float(np.mean(degrees)) if degrees else 0.0,
            'max_degree': max(degrees) if degrees else 0,
            'min_degree': min(degrees) if degrees else 0,
            'seed': self.seed,
        }
