"""Unit tests for the generator module."""

from flowsketch.generator import (
    DEFAULT_HEADER,
    MermaidGenerator,
    generate_mermaid,
    serialize_edge,
    serialize_node,
)
from flowsketch.models import Edge, Node, NodeType
from flowsketch.parser import extract_label, extract_shape


class TestSerializeNode:
    """Tests for node declarations."""

    def test_state(self):
        """Test double-parenthesis syntax for state nodes."""
        assert serialize_node(Node("X", NodeType.STATE, "Start")) == "X((Start))"

    def test_action(self):
        """Test bracket syntax for action nodes."""
        assert serialize_node(Node("A", NodeType.ACTION, "Do")) == "A[Do]"

    def test_choice(self):
        """Test brace syntax for choice nodes."""
        assert serialize_node(Node("C", NodeType.CHOICE, "Ok?")) == "C{Ok?}"

    def test_unknown_type_uses_state(self):
        """Test that an unknown type falls back to the state shape."""
        assert serialize_node({"id": "Z", "type": "hexagon", "label": "Z"}) == "Z((Z))"

    def test_canvas_dict(self):
        """Test a canvas-style dict with the label under data."""
        node = {"id": "n1", "type": "action", "data": {"label": "action 1"}}
        assert serialize_node(node) == "n1[action 1]"

    def test_shape_round_trip(self):
        """Test that every type is recovered from its declaration."""
        for node_type in NodeType:
            text = serialize_node(Node("N", node_type, "Label"))
            assert extract_shape(text) == node_type

    def test_label_round_trip(self):
        """Test that labels are recovered from their declaration."""
        for label in ["Start", "Do the thing", "Is it ok?", "step 2"]:
            for node_type in NodeType:
                text = serialize_node(Node("N", node_type, label))
                assert extract_label(text) == label


class TestSerializeEdge:
    """Tests for edge lines."""

    def test_labeled(self):
        """Test that a non-empty label is emitted inline."""
        assert serialize_edge(Edge("e0", "A", "B", "yes")) == "A --> |yes| B"

    def test_unlabeled(self):
        """Test that an empty label is omitted."""
        assert serialize_edge(Edge("e0", "A", "B")) == "A --> B"

    def test_none_label(self):
        """Test that a None label never leaks into the output."""
        assert serialize_edge({"source": "A", "target": "B", "label": None}) == "A --> B"


class TestMermaidGenerator:
    """Tests for MermaidGenerator."""

    def test_header_first(self):
        """Test that the header is the first line."""
        text = MermaidGenerator().generate([], [])
        assert text.splitlines()[0] == DEFAULT_HEADER

    def test_custom_header(self):
        """Test a custom header line."""
        text = MermaidGenerator(header="flowchart LR").generate([], [])
        assert text.startswith("flowchart LR\n")

    def test_single_state_node(self):
        """Test a single node and no edges."""
        text = generate_mermaid([{"id": "X", "type": "state", "label": "Start"}], [])
        lines = [line.strip() for line in text.splitlines()]
        assert "X((Start))" in lines
        assert not any("-->" in line for line in lines)

    def test_order(self):
        """Test that nodes precede edges, each in iteration order."""
        nodes = [Node("B", NodeType.ACTION, "b"), Node("A", NodeType.CHOICE, "a")]
        edges = [Edge("e0", "B", "A", "go"), Edge("e1", "A", "B")]
        text = MermaidGenerator(indent="").generate(nodes, edges)
        assert text.splitlines() == [
            "graph TD",
            "B[b]",
            "A{a}",
            "B --> |go| A",
            "A --> B",
        ]

    def test_ends_with_newline(self):
        """Test that output ends with a newline."""
        assert generate_mermaid([Node("A")], []).endswith("\n")

    def test_accepts_generators(self):
        """Test that one-shot iterables are accepted."""
        nodes = (Node(name) for name in "AB")
        text = generate_mermaid(nodes, iter([Edge("e0", "A", "B")]))
        assert "A --> B" in text
