"""
Edge List Loader Module.

Reads whitespace-delimited edge lists into a GraphBuilder:

    <header line>
    source destination [weight]
    ...

The weight defaults to 1.0 when absent. The builder knows nothing about
this text format; every record is simply fed to add_connection().
"""

from pathlib import Path
from typing import Callable, Hashable, Iterable, Union

from .builder import GraphBuilder, GraphType
from ..exceptions import EdgeListFormatError


def parse_edge_lines(
    lines: Iterable[str],
    builder: GraphBuilder,
    header_lines: int = 1,
    vertex_type: Callable[[str], Hashable] = int
) -> GraphBuilder:
    """
    Feed edge-list records into a builder.

    Args:
        lines: Text lines, header included
        builder: Builder receiving the connections
        header_lines: Number of leading lines to skip
        vertex_type: Converts a vertex token to a vertex identity

    Returns:
        The same builder

    Raises:
        EdgeListFormatError: On a record with fewer than two fields or an
            unparsable vertex or weight
    """
    for line_number, line in enumerate(lines, start=1):
        if line_number <= header_lines:
            continue

        fields = line.split()
        if not fields:
            continue
        if len(fields) < 2:
            raise EdgeListFormatError(line_number, line, "expected 'source destination [weight]'")

        try:
            source = vertex_type(fields[0])
            destination = vertex_type(fields[1])
        except ValueError:
            raise EdgeListFormatError(line_number, line, "invalid vertex") from None

        try:
            weight = float(fields[2]) if len(fields) >= 3 else 1.0
        except ValueError:
            raise EdgeListFormatError(line_number, line, "invalid weight") from None

        builder.add_connection(source, destination, weight)

    return builder


def read_edge_list(
    source: Union[str, Path, Iterable[str]],
    graph_type: GraphType = GraphType.DIRECTED,
    header_lines: int = 1,
    vertex_type: Callable[[str], Hashable] = int
) -> GraphBuilder:
    """
    Read an edge list from a file path or an iterable of lines.

    Args:
        source: Path to an edge-list file, or already-read lines
        graph_type: Type of graph to build
        header_lines: Number of leading lines to skip
        vertex_type: Converts a vertex token to a vertex identity

    Returns:
        Populated GraphBuilder (call if_not_empty().build() on it)
    """
    builder = GraphBuilder(graph_type)

    if isinstance(source, (str, Path)):
        with open(source, 'r') as f:
            return parse_edge_lines(f, builder, header_lines, vertex_type)

    return parse_edge_lines(source, builder, header_lines, vertex_type)
