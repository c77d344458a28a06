"""
Adjacency List Module.

Index-keyed neighbor lists derived from a GraphSnapshot. This is the
structure the walk generator reads on every step.

Key Concept:
    For every edge (source, destination, weight), in edge insertion order,
    Neighbor(index_of(destination), weight) is appended to the list of
    index_of(source). Indices with no outgoing edge are absent from the
    map; neighbors() treats them as having no neighbors.
"""

from functools import cached_property
from types import MappingProxyType
from typing import Dict, List, Mapping, NamedTuple, Tuple

import torch

from .builder import GraphSnapshot
from .mapping import VertexIndexMapping
from ..exceptions import ConstructionError


class Neighbor(NamedTuple):
    """Outgoing neighbor of a vertex index."""
    index: int
    weight: float


class AdjacencyList:
    """
    Immutable adjacency list over vertex indices.

    The map is computed on first access and cached. Two threads racing on
    the first access both compute the same value from immutable inputs;
    whichever assignment lands last is identical to the other.

    Example:
        >>> adjacency = AdjacencyList(graph, mapping)
        >>> for neighbor in adjacency.neighbors(0):
        ...     print(neighbor.index, neighbor.weight)
    """

    def __init__(self, graph: GraphSnapshot, mapping: VertexIndexMapping):
        """
        Initialize adjacency list.

        Args:
            graph: Immutable graph snapshot
            mapping: Vertex <-> index mapping built from the same snapshot
        """
        if graph is None:
            raise ConstructionError("graph cannot be None")
        if mapping is None:
            raise ConstructionError("mapping cannot be None")

        self.graph = graph
        self.mapping = mapping

    @cached_property
    def adjacency_map(self) -> Mapping[int, Tuple[Neighbor, ...]]:
        """Read-only index -> neighbors map."""
        adj: Dict[int, List[Neighbor]] = {}

        for edge in self.graph.edges:
            src = self.mapping.index_for_vertex(edge.source)
            dst = self.mapping.index_for_vertex(edge.destination)
            adj.setdefault(src, []).append(Neighbor(dst, edge.weight))

        return MappingProxyType({
            node: tuple(neighbors) for node, neighbors in adj.items()
        })

    def neighbors(self, index: int) -> Tuple[Neighbor, ...]:
        """Outgoing neighbors of an index (empty tuple for dead ends)."""
        return self.adjacency_map.get(index, ())

    def out_degree(self, index: int) -> int:
        return len(self.neighbors(index))

    def has_edge(self, source: int, destination: int) -> bool:
        """Check whether source -> destination is an edge between indices."""
        return any(n.index == destination for n in self.neighbors(source))

    def edge_index(self) -> torch.Tensor:
        """
        Edges as a tensor of shape [2, num_edges].

        Parallel edges (same endpoints, different weights) appear once
        per stored edge.

        Returns:
            Long tensor with source indices in row 0, destinations in row 1
        """
        src: List[int] = []
        dst: List[int] = []

        for node, neighbors in self.adjacency_map.items():
            for neighbor in neighbors:
                src.append(node)
                dst.append(neighbor.index)

        if not src:
            return torch.zeros((2, 0), dtype=torch.long)

        return torch.tensor([src, dst], dtype=torch.long)

    def __len__(self) -> int:
        """Number of indices with at least one outgoing neighbor."""
        return len(self.adjacency_map)
