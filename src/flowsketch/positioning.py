"""
Position calculation for flowchart layout.

Maps (depth, column) pairs from the layout stage onto a fixed planar grid.
A small random offset is added to each coordinate so that nodes sharing a
cell boundary do not end up on exactly the same anchor point. The offset
never feeds back into depth or column.
"""

import random
from typing import Dict, Optional

from .errors import ConfigurationError
from .layout import LayoutResult
from .models import Position

CELL_WIDTH = 300
CELL_HEIGHT = 200
JITTER = 25


class PositionSynthesizer:
    """
    Calculates canvas coordinates for laid-out nodes.

    Attributes:
        cell_width: Horizontal distance between columns.
        cell_height: Vertical distance between depth bands.
        jitter: Maximum absolute random offset per coordinate.
    """

    def __init__(
        self,
        cell_width: float = CELL_WIDTH,
        cell_height: float = CELL_HEIGHT,
        jitter: float = JITTER,
        seed: Optional[int] = None,
    ):
        """
        Initialize the position synthesizer.

        Args:
            cell_width: Horizontal distance between columns.
            cell_height: Vertical distance between depth bands.
            jitter: Offsets are drawn uniformly from [-jitter, +jitter].
                Zero places nodes exactly on grid points.
            seed: Seed for the offset generator, for reproducible output.
        """
        if cell_width <= 0 or cell_height <= 0:
            raise ConfigurationError("cell_width and cell_height must be positive")
        if jitter < 0:
            raise ConfigurationError("jitter must not be negative")

        self.cell_width = cell_width
        self.cell_height = cell_height
        self.jitter = jitter
        self._random = random.Random(seed)

    def offset(self) -> float:
        """Return one random offset in [-jitter, +jitter]."""
        if not self.jitter:
            return 0.0
        return self._random.uniform(-self.jitter, self.jitter)

    def position(self, depth: int, column: int) -> Position:
        return Position(
            x=column * self.cell_width + self.offset(),
            y=depth * self.cell_height + self.offset(),
        )

    def synthesize(self, layout: LayoutResult) -> Dict[str, Position]:
        """
        Calculate a position for every node in the layout.

        Args:
            layout: Result of the layout stage.

        Returns:
            Mapping of node id to Position, in layout node order.
        """
        return {
            name: self.position(node.depth, node.column)
            for name, node in layout.nodes.items()
        }
