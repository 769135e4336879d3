"""
Layout module for layered flowchart placement.

Assigns each node a depth (layer) and a column within its layer. Two
layering strategies are available:

- first_visit: single depth-first pass in insertion order. A node's depth is
  frozen the first time it is reached, so nodes reachable by paths of
  different length keep the depth of the path found first. Cycles terminate
  the walk early instead of looping.
- longest_path: uses networkx to break cycles, then assigns each node one
  more than the deepest of its predecessors in topological order.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Sequence, Set, Tuple

import networkx as nx

from .errors import ConfigurationError

FIRST_VISIT = "first_visit"
LONGEST_PATH = "longest_path"
LAYERING_STRATEGIES = (FIRST_VISIT, LONGEST_PATH)


@dataclass
class NodeLayout:
    """Transient layout information for one node."""

    name: str
    depth: int = 0
    column: int = 0


@dataclass
class LayoutResult:
    """Result of the layout algorithm."""

    nodes: Dict[str, NodeLayout] = field(default_factory=dict)
    layers: List[List[str]] = field(default_factory=list)
    back_edges: Set[Tuple[str, str]] = field(default_factory=set)
    has_cycles: bool = False


def assign_depths(
    order: Sequence[str], adjacency: Mapping[str, Sequence[str]]
) -> Dict[str, int]:
    """
    Assign depths with a first-visit depth-first walk.

    Every unvisited id, taken in insertion order, starts a walk at depth 0.
    Children receive their parent's depth plus one on first visit only.

    Args:
        order: Node ids in insertion order.
        adjacency: Successor ids per node.

    Returns:
        Mapping of node id to depth.
    """
    depths: Dict[str, int] = {node: 0 for node in order}
    visited: Set[str] = set()

    for root in order:
        if root in visited:
            continue

        stack: List[Tuple[str, int]] = [(root, 0)]
        while stack:
            node, depth = stack.pop()
            if node in visited:
                continue
            visited.add(node)
            depths[node] = max(depths.get(node, 0), depth)

            # Reversed so children are visited in insertion order
            for child in reversed(adjacency.get(node, ())):
                if child not in visited:
                    stack.append((child, depths[node] + 1))

    return depths


def find_back_edges(graph: nx.DiGraph) -> Set[Tuple[str, str]]:
    """
    Find edges whose removal leaves the graph acyclic.

    Repeatedly removes the closing edge of a cycle found by networkx until
    none remain. Self-loops are included.
    """
    working = graph.copy()
    back_edges: Set[Tuple[str, str]] = set()

    while not nx.is_directed_acyclic_graph(working):
        cycle = nx.find_cycle(working)
        source, target = cycle[-1][0], cycle[-1][1]
        working.remove_edge(source, target)
        back_edges.add((source, target))

    return back_edges


def assign_depths_longest_path(
    order: Sequence[str], adjacency: Mapping[str, Sequence[str]]
) -> Tuple[Dict[str, int], Set[Tuple[str, str]]]:
    """
    Assign depths by longest path from any root.

    Args:
        order: Node ids in insertion order.
        adjacency: Successor ids per node.

    Returns:
        Tuple of (node id -> depth, back edges removed to break cycles).
    """
    graph = nx.DiGraph()
    graph.add_nodes_from(order)
    for source in order:
        for target in adjacency.get(source, ()):
            graph.add_edge(source, target)

    back_edges = find_back_edges(graph)
    working = graph.copy()
    working.remove_edges_from(back_edges)

    depths: Dict[str, int] = {}
    for node in nx.topological_sort(working):
        predecessors = list(working.predecessors(node))
        if not predecessors:
            depths[node] = 0
        else:
            depths[node] = max(depths[p] for p in predecessors) + 1

    return depths, back_edges


def assign_columns(
    order: Sequence[str], depths: Mapping[str, int]
) -> List[List[str]]:
    """
    Group node ids into depth bands, preserving insertion order.

    The column of a node is its index within its band.

    Returns:
        List of layers, one per depth from 0 to the maximum depth.
    """
    if not order:
        return []

    max_depth = max(depths[node] for node in order)
    layers: List[List[str]] = [[] for _ in range(max_depth + 1)]
    for node in order:
        layers[depths[node]].append(node)
    return layers


class LayeredLayout:
    """
    Layered layout over a node order and adjacency list.

    Attributes:
        layering: Depth strategy, one of LAYERING_STRATEGIES.
    """

    def __init__(self, layering: str = FIRST_VISIT):
        if layering not in LAYERING_STRATEGIES:
            raise ConfigurationError(
                f"layering must be one of {', '.join(LAYERING_STRATEGIES)}"
            )
        self.layering = layering

    def layout(
        self, order: Sequence[str], adjacency: Mapping[str, Sequence[str]]
    ) -> LayoutResult:
        """
        Compute depth and column for every node.

        Args:
            order: Node ids in insertion order.
            adjacency: Successor ids per node.

        Returns:
            LayoutResult with per-node depth/column and the depth bands.
        """
        result = LayoutResult()

        if self.layering == LONGEST_PATH:
            depths, back_edges = assign_depths_longest_path(order, adjacency)
            result.back_edges = back_edges
            result.has_cycles = bool(back_edges)
        else:
            depths = assign_depths(order, adjacency)

        result.layers = assign_columns(order, depths)
        for depth, layer in enumerate(result.layers):
            for column, node in enumerate(layer):
                result.nodes[node] = NodeLayout(
                    name=node, depth=depth, column=column
                )

        return result
