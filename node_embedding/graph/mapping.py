"""
Vertex Index Mapping Module.

Bijection between opaque vertex identities and contiguous integer
indices [0, n). Indices follow the snapshot's vertex insertion order, so
the same graph always produces the same mapping.
"""

from types import MappingProxyType
from typing import Hashable, Mapping, Tuple

from .builder import GraphSnapshot
from ..exceptions import ConstructionError, IndexOutOfRangeError, UnknownVertexError


class VertexIndexMapping:
    """
    Immutable vertex <-> index mapping built from a GraphSnapshot.

    Example:
        >>> mapping = VertexIndexMapping(graph)
        >>> idx = mapping.index_for_vertex('a')
        >>> assert mapping.get_vertex(idx) == 'a'
    """

    def __init__(self, graph: GraphSnapshot):
        """
        Build the mapping.

        Args:
            graph: Snapshot whose vertex order fixes the indices
        """
        if graph is None:
            raise ConstructionError("graph cannot be None")

        self._index_to_vertex: Tuple[Hashable, ...] = tuple(graph.vertices)
        self._vertex_to_index = MappingProxyType({
            vertex: index for index, vertex in enumerate(self._index_to_vertex)
        })

    @property
    def vertex_to_index(self) -> Mapping[Hashable, int]:
        """Read-only vertex -> index view."""
        return self._vertex_to_index

    def index_for_vertex(self, vertex: Hashable) -> int:
        """
        Get the index of a vertex.

        Raises:
            UnknownVertexError: If the vertex was never registered
        """
        try:
            return self._vertex_to_index[vertex]
        except KeyError:
            raise UnknownVertexError(vertex) from None

    def get_vertex(self, index: int) -> Hashable:
        """
        Get the vertex stored at an index.

        Raises:
            IndexOutOfRangeError: If index is outside [0, n)
        """
        if not 0 <= index < len(self._index_to_vertex):
            raise IndexOutOfRangeError(f"Index {index} is out of bounds")
        return self._index_to_vertex[index]

    def vertex_count(self) -> int:
        return len(self._index_to_vertex)

    def indices(self) -> range:
        """All valid indices, in order."""
        return range(len(self._index_to_vertex))

    def __len__(self) -> int:
        return len(self._index_to_vertex)

    def __contains__(self, vertex: Hashable) -> bool:
        return vertex in self._vertex_to_index
