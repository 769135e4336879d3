"""Unit tests for the graph builder."""

from flowsketch.graph import BuildResult, GraphBuilder, build_graph
from flowsketch.models import NodeRef, NodeType
from flowsketch.parser import classify_lines


class TestGraphBuilder:
    """Tests for GraphBuilder."""

    def test_register_first_occurrence_wins(self):
        """Test that a later declaration does not overwrite the first."""
        builder = GraphBuilder()
        assert builder.register(NodeRef("A", NodeType.ACTION, "First")) is True
        assert builder.register(NodeRef("A", NodeType.CHOICE, "Second")) is False
        assert builder.nodes["A"] == NodeRef("A", NodeType.ACTION, "First")

    def test_add_edge_creates_endpoints(self):
        """Test that edge endpoints are created implicitly."""
        builder = GraphBuilder()
        builder.add_edge(NodeRef("A", label="A"), NodeRef("B", label="B"))
        assert list(builder.nodes) == ["A", "B"]
        assert builder.adjacency["A"] == ["B"]

    def test_edge_ids_are_unique(self):
        """Test that repeated edges still get distinct ids."""
        builder = GraphBuilder()
        first = builder.add_edge(NodeRef("A"), NodeRef("B"))
        second = builder.add_edge(NodeRef("A"), NodeRef("B"))
        assert first.id != second.id

    def test_build_returns_copy(self):
        """Test that the build result is detached from the builder."""
        builder = GraphBuilder()
        builder.add_edge(NodeRef("A"), NodeRef("B"))
        result = builder.build()
        builder.add_edge(NodeRef("A"), NodeRef("C"))
        assert result.adjacency["A"] == ["B"]
        assert "C" not in result.nodes


class TestBuildGraph:
    """Tests for build_graph over classified lines."""

    def test_linear(self, build, linear_input):
        """Test node order, adjacency and edges for a chain."""
        result = build(linear_input)
        assert isinstance(result, BuildResult)
        assert result.order == ["A", "B", "C"]
        assert result.adjacency == {"A": ["B"], "B": ["C"], "C": []}
        assert [(e.source, e.target) for e in result.edges] == [("A", "B"), ("B", "C")]

    def test_declaration_then_edge_keeps_declared_shape(self, build):
        """Test that a declared shape is kept when the id appears on an edge."""
        result = build("A[Do thing]\nA-->B\nA{Other}-->C")
        assert result.nodes["A"].type == NodeType.ACTION
        assert result.nodes["A"].label == "Do thing"

    def test_edge_shape_is_kept_over_later_declaration(self, build):
        """Test that the first occurrence on an edge line wins."""
        result = build("A-->B{Check}\nB[Other]")
        assert result.nodes["B"].type == NodeType.CHOICE
        assert result.nodes["B"].label == "Check"

    def test_duplicate_edges_are_kept(self, build):
        """Test that repeated edges stay in the adjacency list."""
        result = build("A-->B\nA-->B")
        assert result.adjacency["A"] == ["B", "B"]
        assert len(result.edges) == 2

    def test_edge_label(self, build, labeled_input):
        """Test that edge labels are recorded."""
        result = build(labeled_input)
        assert result.edges[0].label == "yes"

    def test_absent_label_is_empty_string(self, build):
        """Test that unlabeled edges carry an empty string."""
        result = build("A-->B")
        assert result.edges[0].label == ""

    def test_isolated_declaration(self, build):
        """Test that standalone declarations produce nodes without edges."""
        result = build("graph TD\nLonely((Alone))")
        assert result.order == ["Lonely"]
        assert result.adjacency == {"Lonely": []}
        assert result.edges == []

    def test_half_edge_declares_present_side(self, build):
        """Test that an edge line without a target still declares its source."""
        result = build("A[Start] -->")
        assert result.order == ["A"]
        assert result.nodes["A"].type == NodeType.ACTION
        assert result.edges == []

    def test_every_edge_endpoint_exists(self, build, complex_input):
        """Test that no edge references a missing node."""
        result = build(complex_input)
        for edge in result.edges:
            assert edge.source in result.nodes
            assert edge.target in result.nodes

    def test_build_graph_function(self):
        """Test the module-level convenience function."""
        result = build_graph(classify_lines("X-->Y"))
        assert result.order == ["X", "Y"]

    def test_empty_input(self, build):
        """Test that empty input builds an empty graph."""
        result = build("")
        assert result.nodes == {}
        assert result.edges == []
