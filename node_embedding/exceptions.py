"""
Exceptions Module.

All errors raised by the embedding pipeline. Every error is raised at the
point where a precondition is checked and surfaces directly to the caller.
"""


class NodeEmbeddingError(Exception):
    """Base class for all node embedding errors."""


class ConstructionError(NodeEmbeddingError, ValueError):
    """Invalid constructor argument or missing required collaborator."""


class EmptyGraphError(NodeEmbeddingError):
    """Attempt to finalize a graph that has no vertices."""


class UnknownVertexError(NodeEmbeddingError, KeyError):
    """Lookup of a vertex that was never registered."""

    def __init__(self, vertex):
        super().__init__(vertex)
        self.vertex = vertex

    def __str__(self):
        return f"Vertex {self.vertex!r} does not exist"


class IndexOutOfRangeError(NodeEmbeddingError, IndexError):
    """Lookup of a vertex index outside [0, n)."""


class SamplingPreconditionError(ConstructionError):
    """Empty walk batch or non-positive window given to the sample generator."""


class EdgeListFormatError(NodeEmbeddingError, ValueError):
    """Malformed record in an edge-list input."""

    def __init__(self, line_number: int, line: str, reason: str):
        super().__init__(f"Line {line_number}: {reason}: {line!r}")
        self.line_number = line_number
        self.line = line
        self.reason = reason
