"""
Reachability search through unexplored space.

Used to judge a candidate cell: can the goal still be reached from it
without walking back through explored cells, how far away is it, and how
much unexplored room is there to search in?

Walls of unvisited cells are unknown, so the search treats every
unvisited in-bounds cell as open. The distances it reports are therefore
optimistic lower bounds.
"""

from collections import deque
from dataclasses import dataclass
from typing import Optional

from mazebot.api.models import CARDINAL_DIRECTIONS, Position

from .state import VisitedGraph


@dataclass(frozen=True)
class ExplorationResult:
    """Outcome of exploring from one candidate cell."""

    distance_to_goal: Optional[int]
    frontier_size: int

    @property
    def goal_reachable(self) -> bool:
        return self.distance_to_goal is not None


def _in_bounds(pos: Position, bound: Position) -> bool:
    return 0 <= pos.x <= bound.x and 0 <= pos.y <= bound.y


def explore_space(
    start: Position,
    bound: Position,
    visited: VisitedGraph,
    goal: Position,
) -> ExplorationResult:
    """
    Breadth-first search from `start` over unvisited cells.

    Cells present in `visited` are barriers. `start` itself is always
    counted, even when it has been visited.

    Args:
        start: Candidate cell to search from
        bound: Largest valid coordinate on each axis (inclusive)
        visited: Cells the player has already stood on
        goal: Target cell

    Returns:
        ExplorationResult with the step count to the goal (None if it is
        unreachable through unexplored space) and the number of cells seen
    """
    seen = {start}
    queue = deque([(start, 0)])
    distance_to_goal: Optional[int] = None

    while queue:
        pos, dist = queue.popleft()

        if distance_to_goal is None and pos == goal:
            distance_to_goal = dist

        for direction in CARDINAL_DIRECTIONS:
            neighbor = pos.move(direction)
            if neighbor in seen:
                continue
            if not _in_bounds(neighbor, bound):
                continue
            if neighbor in visited:
                continue
            seen.add(neighbor)
            queue.append((neighbor, dist + 1))

    return ExplorationResult(distance_to_goal, len(seen))
