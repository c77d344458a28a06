"""
Graph Module.

This module holds the graph model and its derived index structures:

1. GraphBuilder / GraphSnapshot: mutable builder, immutable snapshot
2. VertexIndexMapping: vertex <-> contiguous index bijection
3. AdjacencyList: index-keyed outgoing neighbor lists
4. read_edge_list: edge-list text input

Example:
    >>> from node_embedding.graph import GraphBuilder, GraphType
    >>> from node_embedding.graph import VertexIndexMapping, AdjacencyList
    >>>
    >>> builder = GraphBuilder(GraphType.DIRECTED)
    >>> builder.add_connection(1, 2)
    >>> graph = builder.if_not_empty().build()
    >>>
    >>> mapping = VertexIndexMapping(graph)
    >>> adjacency = AdjacencyList(graph, mapping)
"""

from .builder import Edge, GraphBuilder, GraphSnapshot, GraphType
from .mapping import VertexIndexMapping
from .adjacency import AdjacencyList, Neighbor
from .loader import read_edge_list, parse_edge_lines

__all__ = [
    'Edge',
    'GraphBuilder',
    'GraphSnapshot',
    'GraphType',
    'VertexIndexMapping',
    'AdjacencyList',
    'Neighbor',
    'read_edge_list',
    'parse_edge_lines',
]
