"""
flowsketch - Flowchart DSL <-> graph conversion

A Python library for converting a small Mermaid-style flowchart notation
into a positioned graph of typed nodes and labeled edges, and back.

Example:
    >>> from flowsketch import parse, generate
    >>> graph = parse('''
    ...     graph TD
    ...     A[Do thing] --> |yes| B{Check}
    ... ''')
    >>> print(generate(graph.nodes, graph.edges))

Debug Mode Example:
    >>> converter = FlowchartConverter()
    >>> graph = converter.parse("A --> B", debug=True)
    >>> print(converter.get_trace().summary())
"""

from .converter import FlowchartConverter, generate, parse
from .errors import ConfigurationError, FlowsketchError, StorageError
from .generator import MermaidGenerator, generate_mermaid
from .graph import BuildResult, GraphBuilder, build_graph
from .layout import LayeredLayout, LayoutResult, NodeLayout
from .models import Edge, Graph, LineKind, Node, NodeRef, NodeType, Position
from .parser import classify_lines, extract_node_ref, split_edge_line
from .positioning import PositionSynthesizer
from .storage import GraphStore, JsonFileStore, MemoryGraphStore
from .tracer import ConversionTrace, PipelineStage

__version__ = "0.1.0"

__all__ = [
    # Main API
    "FlowchartConverter",
    "parse",
    "generate",
    # Models
    "Graph",
    "Node",
    "Edge",
    "NodeType",
    "NodeRef",
    "Position",
    "LineKind",
    # Parser
    "classify_lines",
    "extract_node_ref",
    "split_edge_line",
    # Graph building
    "GraphBuilder",
    "BuildResult",
    "build_graph",
    # Layout
    "LayeredLayout",
    "LayoutResult",
    "NodeLayout",
    "PositionSynthesizer",
    # Generator
    "MermaidGenerator",
    "generate_mermaid",
    # Storage
    "GraphStore",
    "MemoryGraphStore",
    "JsonFileStore",
    # Errors
    "FlowsketchError",
    "ConfigurationError",
    "StorageError",
    # Debug/Tracing
    "ConversionTrace",
    "PipelineStage",
]
