"""Pytest configuration and shared fixtures for flowsketch tests."""

import pytest

from flowsketch import FlowchartConverter, GraphBuilder, LayeredLayout, classify_lines


@pytest.fixture
def linear_input():
    """Simple linear flowchart input."""
    return "graph TD\nA-->B\nB-->C"


@pytest.fixture
def labeled_input():
    """Edge with typed endpoints and an inline label."""
    return "graph TD\nA[Do thing]-->|yes| B{Check}"


@pytest.fixture
def branching_input():
    """One node fanning out to two successors."""
    return """
    graph TD
    A-->B
    A-->C
    """


@pytest.fixture
def cyclic_input():
    """Flowchart with a cycle."""
    return """
    graph TD
    A --> B
    B --> C
    C --> A
    """


@pytest.fixture
def complex_input():
    """Flowchart with all three shapes, labels and a retry loop."""
    return """
    graph TD
      Start((Begin))
      Validate[Validate input]
      Ok{Valid?}
      Start --> Validate
      Validate --> Ok
      Ok --> |yes| Done((Finished))
      Ok --> |no| Retry[Ask again]
      Retry --> Validate
    """


@pytest.fixture
def converter():
    """Converter without jitter, so positions sit on grid points."""
    return FlowchartConverter(jitter=0)


@pytest.fixture
def layout_engine():
    """Default first-visit layout engine."""
    return LayeredLayout()


@pytest.fixture
def build():
    """Build a BuildResult straight from DSL text."""

    def _build(text):
        return GraphBuilder().add_lines(classify_lines(text)).build()

    return _build
