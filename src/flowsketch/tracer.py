"""
Debug tracing infrastructure for flowsketch.

This module provides data structures for capturing a trace of the
conversion pipeline. When debug mode is enabled, the converter records a
snapshot of the intermediate data produced by every stage.

Usage:
    >>> converter = FlowchartConverter()
    >>> graph = converter.parse("graph TD\\nA-->B", debug=True)
    >>> trace = converter.get_trace()
    >>> print(trace.summary())
    >>> trace.dump_to_file("debug_trace.txt")

The trace captures, for parsing:
- classify: the declaration and edge lines found
- build: node table, adjacency and edges
- depths / columns: layout decisions
- positions: synthesized coordinates

and, for generation, a single serialize stage.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class PipelineStage:
    """
    Snapshot of state at a pipeline stage.

    Attributes:
        name: Name of this pipeline stage
        data: Dictionary of relevant data at this stage
    """

    name: str
    data: Dict[str, Any]

    def __str__(self) -> str:
        lines = [f"=== Stage: {self.name} ==="]
        for key, value in self.data.items():
            # Truncate long values
            str_val = str(value)
            if len(str_val) > 100:
                str_val = str_val[:100] + "..."
            lines.append(f"  {key}: {str_val}")
        return "\n".join(lines)


@dataclass
class ConversionTrace:
    """
    Complete trace of one parse or generate call.

    Attributes:
        operation: "parse" or "generate"
        stages: List of pipeline stages with their data
        input_text: The original input text (parse only)
        output_text: The generated text (generate only)
    """

    operation: str = "parse"
    stages: List[PipelineStage] = field(default_factory=list)
    input_text: str = ""
    output_text: str = ""

    def add_stage(self, name: str, data: Dict[str, Any]) -> None:
        """
        Add a pipeline stage snapshot.

        Args:
            name: Name of the stage (e.g., "depths")
            data: Dictionary of relevant data at this stage
        """
        self.stages.append(PipelineStage(name, data.copy()))

    def get_stage(self, name: str) -> Optional[PipelineStage]:
        """Get a specific pipeline stage by name."""
        for stage in self.stages:
            if stage.name == name:
                return stage
        return None

    @property
    def stage_names(self) -> List[str]:
        return [stage.name for stage in self.stages]

    def summary(self) -> str:
        """
        Generate a human-readable summary of the trace.

        Returns a string with the operation, a preview of the input or
        output text and an overview of the recorded stages.
        """
        text = self.input_text if self.operation == "parse" else self.output_text
        lines = [
            "=" * 60,
            "CONVERSION TRACE SUMMARY",
            "=" * 60,
            "",
            f"Operation: {self.operation}",
            f"Text: {repr(text[:100])}{'...' if len(text) > 100 else ''}",
            "",
            f"Pipeline stages: {len(self.stages)}",
        ]
        for stage in self.stages:
            lines.append(f"  {stage.name} ({len(stage.data)} entries)")
        return "\n".join(lines)

    def dump(self) -> str:
        """Generate a complete human-readable dump of the trace."""
        lines = [self.summary(), "", "=" * 60, "DETAILED TRACE", "=" * 60, ""]
        lines.append("PIPELINE STAGES:")
        lines.append("-" * 40)
        for stage in self.stages:
            lines.append(str(stage))
            lines.append("")
        return "\n".join(lines)

    def dump_to_file(self, filename: str) -> None:
        """Write the complete trace dump to a file."""
        with open(filename, "w", encoding="utf-8") as f:
            f.write(self.dump())
