"""
Parser module for flowchart conversion.

Handles classification of DSL lines and extraction of node references
(identifier, shape, label) from declaration lines and edge endpoints.
Nothing in this module raises on malformed input: unknown content degrades
to a bare declaration.
"""

import re
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from .models import LineKind, NodeRef, NodeType

EDGE_MARKER = "-->"
LABEL_DELIMITER = "|"
COMMENT_PREFIX = "%%"
HEADER_KEYWORDS = ("graph", "flowchart")

# (opener, closer, type), checked in this order
SHAPE_RULES: List[Tuple[str, str, NodeType]] = [
    ("((", "))", NodeType.STATE),
    ("[", "]", NodeType.ACTION),
    ("{", "}", NodeType.CHOICE),
]

DEFAULT_NODE_TYPE = NodeType.STATE

# Keyword plus an optional direction word, nothing else on the line
HEADER_PATTERN = re.compile(
    r"^(?:%s)(?:\s+\w+)?\s*$" % "|".join(HEADER_KEYWORDS), re.IGNORECASE
)
IDENTIFIER_PATTERN = re.compile(r"^[^\s(\[{]*")


@dataclass(frozen=True)
class ClassifiedLine:
    """A significant line of DSL text."""

    line_number: int
    kind: LineKind
    text: str


def classify_lines(input_text: str) -> Iterator[ClassifiedLine]:
    """
    Lazily classify each line of input text.

    Header lines, comments and blank lines are dropped. Lines containing the
    edge marker are edge lines; anything else is a declaration.

    Args:
        input_text: Multi-line DSL text.

    Yields:
        ClassifiedLine for every declaration or edge line, in source order.
    """
    for line_number, line in enumerate(input_text.splitlines(), 1):
        stripped = line.strip()

        if not stripped:
            continue
        if HEADER_PATTERN.match(stripped) or stripped.startswith(COMMENT_PREFIX):
            continue

        if EDGE_MARKER in stripped:
            yield ClassifiedLine(line_number, LineKind.EDGE, stripped)
        else:
            yield ClassifiedLine(line_number, LineKind.DECLARATION, stripped)


def extract_identifier(fragment: str) -> str:
    """Return the leading run before the first shape delimiter or whitespace."""
    match = IDENTIFIER_PATTERN.match(fragment.strip())
    return match.group(0) if match else ""


def _match_shape(fragment: str) -> Optional[Tuple[NodeType, str]]:
    """Find the first shape rule whose delimiter pair encloses some text."""
    for opener, closer, node_type in SHAPE_RULES:
        start = fragment.find(opener)
        if start == -1:
            continue
        end = fragment.rfind(closer)
        if end < start + len(opener):
            continue
        return node_type, fragment[start + len(opener) : end].strip()
    return None


def extract_shape(fragment: str) -> NodeType:
    """Infer the node type from the fragment's bracket syntax."""
    matched = _match_shape(fragment)
    return matched[0] if matched else DEFAULT_NODE_TYPE


def extract_label(fragment: str) -> str:
    """Return the bracketed label, or the identifier when there is none."""
    matched = _match_shape(fragment)
    if matched and matched[1]:
        return matched[1]
    return extract_identifier(fragment)


def extract_node_ref(fragment: str) -> NodeRef:
    """
    Extract a node reference from one declaration or edge endpoint.

    Args:
        fragment: Text such as ``A``, ``A[Do thing]`` or ``B{Check}``.

    Returns:
        NodeRef with identifier, inferred type and label.
    """
    identifier = extract_identifier(fragment)
    matched = _match_shape(fragment)
    if not identifier:
        # No leading identifier: fall back to the label, then the raw text
        identifier = (matched[1] if matched else "") or fragment.strip()
    if matched is None:
        return NodeRef(id=identifier, type=DEFAULT_NODE_TYPE, label=identifier)

    node_type, label = matched
    return NodeRef(id=identifier, type=node_type, label=label or identifier)


def split_edge_line(line: str) -> Tuple[NodeRef, str, NodeRef]:
    """
    Decompose ``source --> |label| target`` into its parts.

    Splits on the first edge marker. When the remainder contains the label
    delimiter, the label is the text between its first and last occurrence
    and the target follows the last one.

    Args:
        line: An edge line.

    Returns:
        Tuple of (source ref, edge label, target ref). The label is an empty
        string when absent.
    """
    left, _, remainder = line.partition(EDGE_MARKER)

    label = ""
    target_fragment = remainder
    if LABEL_DELIMITER in remainder:
        first = remainder.index(LABEL_DELIMITER)
        last = remainder.rindex(LABEL_DELIMITER)
        label = remainder[first + 1 : last].strip()
        target_fragment = remainder[last + 1 :]

    return extract_node_ref(left), label, extract_node_ref(target_fragment)
