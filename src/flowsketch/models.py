"""
Data models for flowchart conversion.

This module contains the records exchanged between the parser, the layout
stages and the serializer. A Graph is the only value that crosses the
boundary to the canvas and storage layers; everything else here is
transient parse state.

Classes:
    NodeType: Closed set of node shapes (state, action, choice).
    LineKind: Classification of a DSL line.
    Position: Planar coordinate of a node.
    NodeRef: Identifier, shape and label extracted from one node fragment.
    Node: A typed, labeled, positioned node.
    Edge: A directed, optionally labeled connection between two nodes.
    Graph: Ordered collection of nodes and edges.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class NodeType(str, Enum):
    """Shape of a node, which also selects its DSL bracket pair."""

    STATE = "state"
    ACTION = "action"
    CHOICE = "choice"

    @classmethod
    def coerce(cls, value: Any) -> "NodeType":
        """Return the matching NodeType, falling back to STATE."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            return cls.STATE


class LineKind(str, Enum):
    """Kind of a significant DSL line."""

    DECLARATION = "declaration"
    EDGE = "edge"


@dataclass
class Position:
    """Planar coordinate. Only meaningful for rendering."""

    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class NodeRef:
    """
    Node reference extracted from a declaration or an edge endpoint.

    Attributes:
        id: Stable node identifier.
        type: Shape inferred from the bracket syntax.
        label: Display text, the identifier when none was given.
    """

    id: str
    type: NodeType = NodeType.STATE
    label: str = ""


@dataclass
class Node:
    """
    A node of the flowchart graph.

    Attributes:
        id: Identifier, unique within a graph.
        type: Node shape.
        label: Display text. Defaults to the id.
        position: Planar coordinate of the node anchor.
    """

    id: str
    type: NodeType = NodeType.STATE
    label: str = ""
    position: Position = field(default_factory=Position)

    def __post_init__(self):
        self.type = NodeType.coerce(self.type)
        if not self.label:
            self.label = self.id

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "label": self.label,
            "position": {"x": self.position.x, "y": self.position.y},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Node":
        """
        Build a node from its dict form.

        Accepts both the flat ``label`` key and the canvas-style
        ``data: {"label": ...}`` key.
        """
        label = data.get("label")
        if label is None:
            label = (data.get("data") or {}).get("label", "")
        position = data.get("position") or {}
        return cls(
            id=str(data["id"]),
            type=NodeType.coerce(data.get("type")),
            label=str(label or ""),
            position=Position(
                x=float(position.get("x", 0.0)), y=float(position.get("y", 0.0))
            ),
        )


@dataclass
class Edge:
    """
    A directed connection between two nodes.

    Attributes:
        id: Derived identifier, unique within a graph.
        source: Id of the source node.
        target: Id of the target node.
        label: Inline connector text. Empty string when absent.
    """

    id: str
    source: str
    target: str
    label: str = ""

    def __post_init__(self):
        if self.label is None:
            self.label = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "label": self.label,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], index: int = 0) -> "Edge":
        source = str(data["source"])
        target = str(data["target"])
        return cls(
            id=str(data.get("id") or make_edge_id(index, source, target)),
            source=source,
            target=target,
            label=str(data.get("label") or ""),
        )


def make_edge_id(index: int, source: str, target: str) -> str:
    """Derive an edge id from its position and endpoints."""
    return f"e{index}-{source}-{target}"


@dataclass
class Graph:
    """
    Ordered collection of nodes and edges.

    Attributes:
        nodes: Nodes in declaration order.
        edges: Edges in source order.
        viewport: Canvas viewport (e.g. x, y, zoom) carried through storage
            untouched. Parsing never sets it.
    """

    nodes: List[Node] = field(default_factory=list)
    edges: List[Edge] = field(default_factory=list)
    viewport: Optional[Dict[str, float]] = None

    @property
    def node_ids(self) -> List[str]:
        return [node.id for node in self.nodes]

    @property
    def edge_endpoints(self) -> List[Tuple[str, str]]:
        return [(edge.source, edge.target) for edge in self.edges]

    def get_node(self, node_id: str) -> Optional[Node]:
        """Get a node by id, or None."""
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": [edge.to_dict() for edge in self.edges],
        }
        if self.viewport is not None:
            data["viewport"] = dict(self.viewport)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Graph":
        return cls(
            nodes=[Node.from_dict(n) for n in data.get("nodes") or []],
            edges=[
                Edge.from_dict(e, index)
                for index, e in enumerate(data.get("edges") or [])
            ],
            viewport=dict(data["viewport"]) if data.get("viewport") else None,
        )
