"""
DSL generator module.

Serializes a graph of nodes and edges back into flowchart DSL text. The
output parses back to the same node ids, types, labels and edge endpoints.
"""

from typing import Any, Dict, Iterable, Mapping, Union

from .models import Edge, Node, NodeType

DEFAULT_HEADER = "graph TD"
INDENT = "  "

BRACKETS: Dict[NodeType, tuple] = {
    NodeType.STATE: ("((", "))"),
    NodeType.ACTION: ("[", "]"),
    NodeType.CHOICE: ("{", "}"),
}

NodeLike = Union[Node, Mapping[str, Any]]
EdgeLike = Union[Edge, Mapping[str, Any]]


def _as_node(node: NodeLike) -> Node:
    if isinstance(node, Node):
        return node
    return Node.from_dict(dict(node))


def _as_edge(edge: EdgeLike) -> Edge:
    if isinstance(edge, Edge):
        return edge
    return Edge.from_dict(dict(edge))


def serialize_node(node: NodeLike) -> str:
    """Render one declaration, e.g. ``A((Start))``. Unknown types use state."""
    node = _as_node(node)
    opener, closer = BRACKETS.get(
        NodeType.coerce(node.type), BRACKETS[NodeType.STATE]
    )
    return f"{node.id}{opener}{node.label}{closer}"


def serialize_edge(edge: EdgeLike) -> str:
    """Render one edge, with an inline label only when it is non-empty."""
    edge = _as_edge(edge)
    if edge.label:
        return f"{edge.source} --> |{edge.label}| {edge.target}"
    return f"{edge.source} --> {edge.target}"


class MermaidGenerator:
    """
    Generate flowchart DSL text from nodes and edges.

    Example:
        >>> generator = MermaidGenerator()
        >>> text = generator.generate(
        ...     [Node(id="A", type="action", label="Do thing")], []
        ... )
        >>> "A[Do thing]" in text
        True
    """

    def __init__(self, header: str = DEFAULT_HEADER, indent: str = INDENT):
        """
        Initialize the generator.

        Args:
            header: Diagram header line.
            indent: Prefix for every declaration and edge line.
        """
        self.header = header
        self.indent = indent

    def generate(self, nodes: Iterable[NodeLike], edges: Iterable[EdgeLike]) -> str:
        """
        Generate DSL text.

        Args:
            nodes: Nodes in the order they should be declared.
            edges: Edges in the order they should be emitted.

        Returns:
            DSL text ending with a newline.
        """
        lines = [self.header]
        lines.extend(self.indent + serialize_node(node) for node in nodes)
        lines.extend(self.indent + serialize_edge(edge) for edge in edges)
        return "\n".join(lines) + "\n"


def generate_mermaid(nodes: Iterable[NodeLike], edges: Iterable[EdgeLike]) -> str:
    """
    Convenience function to generate DSL text with default settings.

    Args:
        nodes: Nodes to declare.
        edges: Edges to emit.

    Returns:
        DSL text.
    """
    return MermaidGenerator().generate(nodes, edges)
