#!/usr/bin/env python3
"""
Examples of using the flowchart converter.

Run this file to parse a few diagrams, print their layout and write the
regenerated DSL next to it.
"""

from flowsketch import FlowchartConverter, JsonFileStore


def show(graph):
    for node in graph.nodes:
        print(
            f"  {node.id:<10} {node.type.value:<7} {node.label!r:<18} "
            f"({node.position.x:.0f}, {node.position.y:.0f})"
        )
    for edge in graph.edges:
        label = f" [{edge.label}]" if edge.label else ""
        print(f"  {edge.source} -> {edge.target}{label}")


def example_simple_linear():
    """Simple linear flow: A --> B --> C"""
    print("Example 1: Simple Linear Flow")

    converter = FlowchartConverter(jitter=0)
    graph = converter.parse("graph TD\nA-->B\nB-->C")
    show(graph)
    print()


def example_decision():
    """Decision with labeled branches"""
    print("Example 2: Decision")

    input_text = """
    graph TD
      Start((Begin)) --> Check{Valid?}
      Check --> |yes| Save[Save record]
      Check --> |no| Reject[Reject record]
    """

    converter = FlowchartConverter(seed=1)
    graph = converter.parse(input_text)
    show(graph)
    converter.save_txt(graph, "example_decision.mmd")
    print("  Saved: example_decision.mmd\n")


def example_retry_loop():
    """Retry loop laid out with longest-path layering"""
    print("Example 3: Retry Loop")

    input_text = """
    graph TD
      Fetch[Fetch page] --> Ok{200?}
      Ok --> |no| Wait[Back off]
      Wait --> Fetch
      Ok --> |yes| Parse[Parse body]
      Fetch --> Parse
    """

    converter = FlowchartConverter(jitter=0, layering="longest_path")
    graph = converter.parse(input_text, debug=True)
    show(graph)
    print(converter.get_trace().summary())

    store = JsonFileStore("example_store.json")
    store.save(graph)
    print("  Saved: example_store.json\n")


if __name__ == "__main__":
    example_simple_linear()
    example_decision()
    example_retry_loop()
