"""
Graph module for flowchart conversion.

Accumulates the node table and adjacency list from classified DSL lines.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from .models import Edge, LineKind, NodeRef, make_edge_id
from .parser import ClassifiedLine, extract_node_ref, split_edge_line


@dataclass
class BuildResult:
    """
    Result of a build pass.

    Attributes:
        nodes: Node table in first-seen order (id -> NodeRef).
        adjacency: Successor ids per source id, in insertion order.
            Repeated edges appear more than once.
        edges: Edges in source order.
    """

    nodes: Dict[str, NodeRef] = field(default_factory=dict)
    adjacency: Dict[str, List[str]] = field(default_factory=dict)
    edges: List[Edge] = field(default_factory=list)

    @property
    def order(self) -> List[str]:
        return list(self.nodes)


class GraphBuilder:
    """Builds a node table and adjacency list in a single pass."""

    def __init__(self):
        self.nodes: Dict[str, NodeRef] = {}
        self.adjacency = defaultdict(list)  # source -> [targets]
        self.edges: List[Edge] = []

    def register(self, ref: NodeRef) -> bool:
        """
        Register a node reference. The first occurrence of an id wins.

        Returns:
            True if the id was new.
        """
        if ref.id in self.nodes:
            return False
        self.nodes[ref.id] = ref
        return True

    def add_edge(self, source: NodeRef, target: NodeRef, label: str = "") -> Edge:
        """Add a directed edge, creating either endpoint if unseen."""
        self.register(source)
        self.register(target)
        self.adjacency[source.id].append(target.id)

        edge = Edge(
            id=make_edge_id(len(self.edges), source.id, target.id),
            source=source.id,
            target=target.id,
            label=label,
        )
        self.edges.append(edge)
        return edge

    def add_line(self, line: ClassifiedLine) -> None:
        """Apply one classified line to the builder."""
        if line.kind is LineKind.EDGE:
            source, label, target = split_edge_line(line.text)
            if source.id and target.id:
                self.add_edge(source, target, label)
                return
            # Half an edge still declares the side that is present
            for ref in (source, target):
                if ref.id:
                    self.register(ref)
            return

        ref = extract_node_ref(line.text)
        if ref.id:
            self.register(ref)

    def add_lines(self, lines: Iterable[ClassifiedLine]) -> "GraphBuilder":
        for line in lines:
            self.add_line(line)
        return self

    def build(self) -> BuildResult:
        """Return the accumulated node table, adjacency list and edges."""
        return BuildResult(
            nodes=dict(self.nodes),
            adjacency={
                node_id: list(self.adjacency.get(node_id, []))
                for node_id in self.nodes
            },
            edges=list(self.edges),
        )


def build_graph(lines: Iterable[ClassifiedLine]) -> BuildResult:
    """
    Build a node table and adjacency list from classified lines.

    Args:
        lines: Classified lines in source order.

    Returns:
        BuildResult
    """
    return GraphBuilder().add_lines(lines).build()
