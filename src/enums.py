"""Contains all global enumeration classes used throughout the project."""

from __future__ import annotations

from enum import Enum


class SeedPattern(Enum):
    """Defines where the initially open (collapsible) cells of a new grid are placed."""

    LATTICE = "Lattice (Default)"
    """A regular lattice of seeds every 'stride' rows and columns. Many simultaneous fronts converge quickly."""
    CENTER = "Center"
    """A single seed in the middle of the grid."""
    CORNERS = "Corners"
    """One seed in each of the four corners of the grid."""


class WFCUpdateMode(Enum):
    """Defines the frequency at which the shown output should be updated."""

    ON_EVERY_N_STEPS = "On Every N Steps"
    """Updates the UI whenever the configured number of cells has been collapsed."""
    ONLY_WHEN_DONE = "Only When Done"
    """Updates the UI once when the entire output tilemap is finished."""


class Direction(Enum):
    """Defines the cardinal directions used for tile adjacency."""

    LEFT = 0
    """Left direction."""
    RIGHT = 1
    """Right direction."""
    UP = 2
    """Upward direction."""
    DOWN = 3
    """Downward direction."""

    def to_vector(self) -> tuple[int, int]:
        """Returns the (row, col) vector representation for the direction."""
        match self:
            case Direction.LEFT:
                return (0, -1)
            case Direction.RIGHT:
                return (0, 1)
            case Direction.UP:
                return (-1, 0)
            case Direction.DOWN:
                return (1, 0)
