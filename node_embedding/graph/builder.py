"""
Graph Builder Module.

This module provides the graph model used by the embedding pipeline:
- Edge: immutable weighted edge value
- GraphBuilder: mutable staging area that accumulates connections
- GraphSnapshot: immutable, ordered view produced by GraphBuilder.build()

Key Concept:
    Vertices and edges are kept in insertion order. That order is
    significant: it fixes the integer index each vertex receives in
    VertexIndexMapping, and therefore every downstream walk and sample.

    Edges have set semantics. Adding (a, b, 1.0) twice stores one edge,
    while (a, b, 1.0) and (a, b, 2.0) are two distinct edges.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Hashable, Iterator, Tuple

import networkx as nx

from ..exceptions import ConstructionError, EmptyGraphError


class GraphType(Enum):
    """Structural type of a graph."""
    DIRECTED = "directed"
    BIDIRECTIONAL = "bidirectional"

    @classmethod
    def from_name(cls, name: str) -> 'GraphType':
        """Resolve a config/CLI name such as 'directed' to a GraphType."""
        try:
            return cls(name.strip().lower())
        except ValueError:
            raise ConstructionError(f"Unknown graph type: {name}") from None


@dataclass(frozen=True)
class Edge:
    """
    Immutable weighted edge.

    Attributes:
        source: Source vertex
        destination: Destination vertex
        weight: Edge weight (part of edge identity)
    """
    source: Hashable
    destination: Hashable
    weight: float = 1.0


@dataclass(frozen=True)
class GraphSnapshot:
    """
    Immutable snapshot of a graph.

    Attributes:
        graph_type: Directed or bidirectional
        vertices: Vertices in insertion order
        edges: Edges in insertion order
    """
    graph_type: GraphType
    vertices: Tuple[Hashable, ...]
    edges: Tuple[Edge, ...]

    def __post_init__(self):
        # Frozen copies so caller-owned containers never leak in
        object.__setattr__(self, 'vertices', tuple(dict.fromkeys(self.vertices)))
        object.__setattr__(self, 'edges', tuple(dict.fromkeys(self.edges)))

        if not self.vertices:
            raise EmptyGraphError("Graph has no vertices, so it is empty")

        known = set(self.vertices)
        for edge in self.edges:
            if edge.source not in known or edge.destination not in known:
                raise ConstructionError(
                    f"Edge {edge} references a vertex outside the vertex set"
                )

    def vertex_count(self) -> int:
        """Number of vertices."""
        return len(self.vertices)

    def edge_count(self) -> int:
        """Number of edges (reverse edges of bidirectional graphs included)."""
        return len(self.edges)

    def is_neighbor(self, source: Hashable, destination: Hashable) -> bool:
        """Check whether a directed edge source -> destination exists."""
        return any(
            edge.source == source and edge.destination == destination
            for edge in self.edges
        )

    def iter_edges(self) -> Iterator[Tuple[Hashable, Hashable, float]]:
        """Iterate edges as (source, destination, weight) tuples."""
        for edge in self.edges:
            yield edge.source, edge.destination, edge.weight

    def to_networkx(self) -> nx.Graph:
        """
        Export the snapshot as a NetworkX graph.

        Directed snapshots become a DiGraph, bidirectional ones a Graph.
        Parallel edges collapse to the last weight seen for that pair.

        Returns:
            NetworkX graph with a 'weight' attribute on every edge
        """
        if self.graph_type == GraphType.DIRECTED:
            graph = nx.DiGraph()
        else:
            graph = nx.Graph()

        graph.add_nodes_from(self.vertices)
        for source, destination, weight in self.iter_edges():
            graph.add_edge(source, destination, weight=weight)

        return graph

    def __repr__(self) -> str:
        return (
            f"GraphSnapshot(graph_type={self.graph_type.value}, "
            f"vertices={self.vertex_count()}, edges={self.edge_count()})"
        )


class GraphBuilder:
    """
    Mutable builder for GraphSnapshot.

    Connections are accumulated with add_connection(); build() freezes
    the current state into an immutable GraphSnapshot. Mutations made to
    the builder after build() are never visible through snapshots that
    were already returned.

    Example:
        >>> from node_embedding.graph import GraphBuilder, GraphType
        >>>
        >>> builder = GraphBuilder(GraphType.DIRECTED)
        >>> builder.add_connection(1, 2, 1.0)
        >>> builder.add_connection(2, 3, 1.0)
        >>>
        >>> graph = builder.if_not_empty().build()
        >>> print(graph.vertex_count(), graph.edge_count())  # 3 2
    """

    def __init__(self, graph_type: GraphType):
        """
        Initialize builder.

        Args:
            graph_type: Directed or bidirectional
        """
        if not isinstance(graph_type, GraphType):
            raise ConstructionError(f"graph_type must be a GraphType, got {graph_type!r}")

        self.graph_type = graph_type

        # dicts used as insertion-ordered sets
        self._vertices: Dict[Hashable, None] = {}
        self._edges: Dict[Edge, None] = {}

    def add_connection(
        self,
        source: Hashable,
        destination: Hashable,
        weight: float = 1.0
    ) -> None:
        """
        Register both vertices and insert the edge source -> destination.

        For bidirectional builders the reverse edge with the same weight
        is inserted as well.

        Args:
            source: Source vertex
            destination: Destination vertex
            weight: Edge weight
        """
        weight = float(weight)

        self._vertices.setdefault(source)
        self._vertices.setdefault(destination)

        self._edges.setdefault(Edge(source, destination, weight))
        if self.graph_type == GraphType.BIDIRECTIONAL:
            self._edges.setdefault(Edge(destination, source, weight))

    def if_not_empty(self) -> 'GraphBuilder':
        """
        Guard against finalizing an empty graph.

        Returns:
            This builder, for chaining into build()

        Raises:
            EmptyGraphError: If no vertex has been registered
        """
        if not self._vertices:
            raise EmptyGraphError("Graph has no vertices, so it is empty")
        return self

    def build(self) -> GraphSnapshot:
        """
        Freeze the current vertices and edges into a GraphSnapshot.

        Returns:
            Immutable snapshot of the graph built so far

        Raises:
            EmptyGraphError: If no vertex has been registered
        """
        self.if_not_empty()
        return GraphSnapshot(
            graph_type=self.graph_type,
            vertices=tuple(self._vertices),
            edges=tuple(self._edges)
        )

    def vertex_count(self) -> int:
        return len(self._vertices)

    def edge_count(self) -> int:
        return len(self._edges)

    def get_statistics(self) -> Dict[str, Any]:
        """Summary of the builder state."""
        return {
            'graph_type': self.graph_type.value,
            'num_vertices': self.vertex_count(),
            'num_edges': self.edge_count(),
        }
