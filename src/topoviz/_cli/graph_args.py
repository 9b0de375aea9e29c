"""Build a graph from command-line node and edge arguments.

Pure functions, no I/O.
"""

from topoviz._graph import DuplicateLabelError, GraphModel

EDGE_SEPARATOR = ":"


class GraphArgumentError(ValueError):
    """Raised for malformed ``--node`` or ``--edge`` values."""


def parse_edge(text: str) -> tuple[str, str]:
    """Split ``"A:B"`` into ``("A", "B")``.

    Raises:
        GraphArgumentError: If the text is not two non-empty, distinct labels.

    """
    source, sep, target = text.partition(EDGE_SEPARATOR)
    source, target = source.strip(), target.strip()
    if not sep or not source or not target or EDGE_SEPARATOR in target:
        msg = f"Invalid edge '{text}'. Expected format: 'SOURCE{EDGE_SEPARATOR}TARGET'"
        raise GraphArgumentError(msg)
    if source == target:
        msg = f"Invalid edge '{text}': self-loops are not allowed"
        raise GraphArgumentError(msg)
    return source, target


def build_graph(nodes: list[str], edges: list[str]) -> GraphModel:
    """Create a graph from node labels and ``SOURCE:TARGET`` edge strings.

    Nodes are added in the given order, followed by edge endpoints not
    listed as nodes, in order of first appearance. Repeating an edge
    toggles it, exactly like repeating the gesture in an editor.

    Raises:
        GraphArgumentError: For empty or duplicated node labels and malformed edges.

    """
    graph = GraphModel()
    for label in nodes:
        label = label.strip()  # noqa: PLW2901
        if not label:
            msg = "Node labels must not be empty"
            raise GraphArgumentError(msg)
        try:
            graph.add_node(label)
        except DuplicateLabelError as e:
            raise GraphArgumentError(str(e)) from e

    for text in edges:
        source, target = parse_edge(text)
        for label in (source, target):
            if label not in graph:
                graph.add_node(label)
        graph.toggle_edge(graph.node(source), graph.node(target))

    return graph
