"""
Data models for the maze grid.

Positions, directions and wall descriptors are plain value types. They carry
the small amount of geometry the navigation code needs and nothing else.
"""

import math
from dataclasses import dataclass
from enum import Enum


class InvalidMoveError(ValueError):
    """Raised when two positions are not one orthogonal step apart."""


class Direction(Enum):
    """Movement directions. Values are the words used on the wire."""

    UP = "up"
    RIGHT = "right"
    DOWN = "down"
    LEFT = "left"

    @property
    def delta(self) -> tuple[int, int]:
        """Get (dx, dy) for this direction. Y grows downward."""
        deltas = {
            Direction.UP: (0, -1),
            Direction.RIGHT: (1, 0),
            Direction.DOWN: (0, 1),
            Direction.LEFT: (-1, 0),
        }
        return deltas[self]

    @property
    def opposite(self) -> "Direction":
        """The direction pointing back."""
        opposites = {
            Direction.UP: Direction.DOWN,
            Direction.RIGHT: Direction.LEFT,
            Direction.DOWN: Direction.UP,
            Direction.LEFT: Direction.RIGHT,
        }
        return opposites[self]


# Iteration order matters: earlier directions win ties between candidates
CARDINAL_DIRECTIONS = (Direction.UP, Direction.RIGHT, Direction.DOWN, Direction.LEFT)


@dataclass(frozen=True)
class Position:
    """A cell on the maze grid."""

    x: int
    y: int

    def move(self, direction: Direction) -> "Position":
        """Get position after moving one step in a direction."""
        dx, dy = direction.delta
        return Position(self.x + dx, self.y + dy)

    def neighbors(self) -> list["Position"]:
        """The four orthogonal neighbors, in tie-break order."""
        return [self.move(d) for d in CARDINAL_DIRECTIONS]

    def direction_to(self, other: "Position") -> Direction:
        """
        Get the direction of a single step from this position to `other`.

        Raises:
            InvalidMoveError: if `other` is this position or not adjacent to it
        """
        for direction in CARDINAL_DIRECTIONS:
            if self.move(direction) == other:
                return direction
        raise InvalidMoveError(f"{other} is not a neighbor of {self}")

    def distance_to(self, other: "Position") -> float:
        """Euclidean distance."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def distance_to_line(self, a: tuple[float, float], b: tuple[float, float]) -> float:
        """
        Perpendicular distance from this position to the line through a and b.

        Degenerates to the plain distance to `a` when both points coincide.
        """
        ax, ay = a
        bx, by = b
        length = math.hypot(bx - ax, by - ay)
        if length == 0:
            return math.hypot(self.x - ax, self.y - ay)
        cross = (bx - ax) * (ay - self.y) - (ax - self.x) * (by - ay)
        return abs(cross) / length

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


@dataclass(frozen=True)
class Walls:
    """Wall configuration of the current cell. True means blocked."""

    top: bool = False
    right: bool = False
    bottom: bool = False
    left: bool = False

    def blocks(self, direction: Direction) -> bool:
        """Whether moving in `direction` would walk into a wall."""
        sides = {
            Direction.UP: self.top,
            Direction.RIGHT: self.right,
            Direction.DOWN: self.bottom,
            Direction.LEFT: self.left,
        }
        return sides[direction]

    def open_directions(self) -> list[Direction]:
        """Directions without a wall, in tie-break order."""
        return [d for d in CARDINAL_DIRECTIONS if not self.blocks(d)]
