"""
Belief state for one run through the maze.

The server only ever reports the cell the player stands on and that
cell's walls. NavigationState folds those observations into a tree of
visited cells (each cell remembers the cell it was first entered from)
so the decision engine can tell explored from unexplored territory and
knows where to step back to.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from mazebot.api.models import Position, Walls
from mazebot.api.protocol import Answer, GoalAnnounced, PositionObserved

logger = logging.getLogger(__name__)

# Cell -> cell it was first entered from (None for the start cell)
VisitedGraph = dict[Position, Optional[Position]]


class HeuristicHistory:
    """
    Scores of accepted forward moves, most recent last.

    Works as a stack that mirrors the exploration tree: forward moves push,
    backtracks pop. Only the most recent entries are ever consulted.
    """

    def __init__(self):
        self._scores: list[float] = []

    def push(self, score: float) -> None:
        self._scores.append(score)

    def pop(self) -> Optional[float]:
        """Drop the most recent score. Returns None if the history is empty."""
        if not self._scores:
            return None
        return self._scores.pop()

    def clear(self) -> None:
        self._scores.clear()

    def recent_best(self, lookback: int) -> float:
        """
        Lowest score among the last `lookback` entries.

        Returns +inf when there is nothing to look back at.
        """
        if lookback <= 0 or not self._scores:
            return float("inf")
        return min(self._scores[-lookback:])

    def __len__(self) -> int:
        return len(self._scores)

    def __iter__(self):
        return iter(self._scores)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HeuristicHistory):
            return NotImplemented
        return self._scores == other._scores

    def __repr__(self) -> str:
        return f"HeuristicHistory({self._scores!r})"


@dataclass
class RunState:
    """Everything known about the current run."""

    current: Optional[Position] = None
    previous: Optional[Position] = None
    walls: Optional[Walls] = None
    goal: Optional[Position] = None
    start: Optional[Position] = None
    visited: VisitedGraph = field(default_factory=dict)
    history: HeuristicHistory = field(default_factory=HeuristicHistory)

    @property
    def extent(self) -> Optional[Position]:
        """
        Largest valid coordinate on each axis.

        Inferred from the start cell's row: players spawn on the last row
        of a square maze.
        """
        # TODO: take width/height from the game announcement once non-square mazes need support
        if self.start is None:
            return None
        return Position(self.start.y, self.start.y)

    def parent_of(self, cell: Position) -> Optional[Position]:
        return self.visited.get(cell)

    def depth_of(self, cell: Position) -> int:
        """Number of parent hops from `cell` back to the start cell."""
        depth = 0
        parent = self.visited.get(cell)
        while parent is not None:
            depth += 1
            parent = self.visited.get(parent)
        return depth


class NavigationState:
    """
    Applies server observations to a RunState.

    Example usage:
        nav = NavigationState()
        nav.apply(GoalAnnounced(Position(9, 0)))
        nav.apply(PositionObserved(Position(0, 9), Walls(left=True)))
        nav.run.current  # Position(0, 9)
    """

    def __init__(self):
        self.run = RunState()

    def apply(self, answer: Answer) -> None:
        """
        Update the belief state from one observation.

        Only position and goal observations are consumed; other answers
        are ignored.
        """
        if isinstance(answer, PositionObserved):
            self._observe_position(answer.cell, answer.walls)
        elif isinstance(answer, GoalAnnounced):
            self.reset()
            self.run.goal = answer.cell
            logger.info(f"New goal {answer.cell}, starting a fresh run")

    def reset(self) -> None:
        """Forget everything about the current run."""
        self.run = RunState()

    def _observe_position(self, cell: Position, walls: Walls) -> None:
        run = self.run
        if run.current is None:
            run.start = cell
        elif cell == run.current:
            # The server echoes the position after refused moves
            return

        if cell not in run.visited:
            run.visited[cell] = run.current

        run.previous = run.current
        run.current = cell
        run.walls = walls
        logger.debug(f"At {cell}, walls: {walls}")
