"""
Main flowchart converter module.

Combines line classification, graph building, layout and serialization to
convert between flowchart DSL text and a positioned Graph.
"""

from pathlib import Path
from typing import Iterable, Optional

from .generator import DEFAULT_HEADER, EdgeLike, MermaidGenerator, NodeLike
from .graph import build_graph
from .layout import FIRST_VISIT, LayeredLayout
from .models import Graph, Node
from .parser import classify_lines
from .positioning import CELL_HEIGHT, CELL_WIDTH, JITTER, PositionSynthesizer
from .tracer import ConversionTrace


class FlowchartConverter:
    """
    Convert flowchart DSL text to a Graph and back.

    Example:
        >>> converter = FlowchartConverter(jitter=0)
        >>> graph = converter.parse('''
        ...     graph TD
        ...     A[Do thing] --> |yes| B{Check}
        ... ''')
        >>> [node.type.value for node in graph.nodes]
        ['action', 'choice']
        >>> text = converter.generate(graph.nodes, graph.edges)

    Debug Mode Example:
        >>> converter = FlowchartConverter()
        >>> graph = converter.parse("A --> B", debug=True)
        >>> print(converter.get_trace().summary())
    """

    def __init__(
        self,
        cell_width: float = CELL_WIDTH,
        cell_height: float = CELL_HEIGHT,
        jitter: float = JITTER,
        seed: Optional[int] = None,
        header: str = DEFAULT_HEADER,
        layering: str = FIRST_VISIT,
    ):
        """
        Initialize the flowchart converter.

        Args:
            cell_width: Horizontal grid spacing between columns
            cell_height: Vertical grid spacing between depth bands
            jitter: Maximum random offset added to each coordinate
            seed: Seed for the jitter generator
            header: Header line emitted by generate
            layering: Depth strategy - "first_visit" (default) or
                "longest_path"
        """
        self.cell_width = cell_width
        self.cell_height = cell_height
        self.jitter = jitter
        self.header = header
        self.layering = layering

        self.layout_engine = LayeredLayout(layering=layering)
        self.position_synthesizer = PositionSynthesizer(
            cell_width=cell_width,
            cell_height=cell_height,
            jitter=jitter,
            seed=seed,
        )
        self.generator = MermaidGenerator(header=header)
        self._trace: Optional[ConversionTrace] = None

    def parse(self, input_text: str, debug: bool = False) -> Graph:
        """
        Parse DSL text into a positioned Graph.

        Never raises on malformed input; unrecognized lines become bare
        declarations and missing edge endpoints are created implicitly.

        Args:
            input_text: Multi-line DSL text
            debug: Record a trace of every pipeline stage

        Returns:
            Graph with nodes in first-seen order and edges in source order
        """
        trace = ConversionTrace(operation="parse", input_text=input_text)

        lines = list(classify_lines(input_text))
        if debug:
            trace.add_stage(
                "classify",
                {"lines": [(line.line_number, line.kind.value) for line in lines]},
            )

        built = build_graph(lines)
        if debug:
            trace.add_stage(
                "build",
                {
                    "nodes": list(built.nodes),
                    "adjacency": built.adjacency,
                    "edges": [(e.source, e.target, e.label) for e in built.edges],
                },
            )

        layout = self.layout_engine.layout(built.order, built.adjacency)
        if debug:
            trace.add_stage(
                "depths",
                {
                    "layering": self.layering,
                    "depths": {n: node.depth for n, node in layout.nodes.items()},
                    "back_edges": sorted(layout.back_edges),
                },
            )
            trace.add_stage("columns", {"layers": layout.layers})

        positions = self.position_synthesizer.synthesize(layout)
        if debug:
            trace.add_stage(
                "positions",
                {n: (round(p.x, 1), round(p.y, 1)) for n, p in positions.items()},
            )

        nodes = [
            Node(
                id=ref.id,
                type=ref.type,
                label=ref.label,
                position=positions[ref.id],
            )
            for ref in built.nodes.values()
        ]

        self._trace = trace if debug else None
        return Graph(nodes=nodes, edges=built.edges)

    def generate(
        self,
        nodes: Iterable[NodeLike],
        edges: Iterable[EdgeLike],
        debug: bool = False,
    ) -> str:
        """
        Generate DSL text from nodes and edges.

        Args:
            nodes: Node records or dicts, declared in iteration order
            edges: Edge records or dicts, emitted in iteration order
            debug: Record a trace of the serialize stage

        Returns:
            DSL text
        """
        nodes = list(nodes)
        edges = list(edges)
        text = self.generator.generate(nodes, edges)

        if debug:
            trace = ConversionTrace(operation="generate", output_text=text)
            trace.add_stage(
                "serialize",
                {"nodes": len(nodes), "edges": len(edges), "header": self.header},
            )
            self._trace = trace
        else:
            self._trace = None

        return text

    def get_trace(self) -> Optional[ConversionTrace]:
        """Return the trace of the last call made with debug=True."""
        return self._trace

    def save_txt(self, graph: Graph, filename: str) -> None:
        """
        Generate DSL text for a graph and save it to a text file.

        Args:
            graph: Graph to serialize
            filename: Output filename
        """
        output_path = Path(filename)
        output_path.write_text(
            self.generate(graph.nodes, graph.edges), encoding="utf-8"
        )


def parse(input_text: str) -> Graph:
    """
    Convenience function to parse DSL text with default settings.

    Args:
        input_text: Multi-line DSL text

    Returns:
        Positioned Graph
    """
    return FlowchartConverter().parse(input_text)


def generate(nodes: Iterable[NodeLike], edges: Iterable[EdgeLike]) -> str:
    """
    Convenience function to generate DSL text with default settings.

    Args:
        nodes: Nodes to declare
        edges: Edges to emit

    Returns:
        DSL text
    """
    return FlowchartConverter().generate(nodes, edges)
