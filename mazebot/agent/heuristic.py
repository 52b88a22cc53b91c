"""Scoring of candidate cells. Lower is better."""

import math
from typing import Optional

from mazebot.api.models import Position

GOAL_WEIGHT = 0.5
PATH_WEIGHT = 0.5
OFFSET_WEIGHT = 0.1

# Path term used when the goal cannot be reached through unexplored space
UNREACHABLE_PATH_PENALTY = 1.0


def score_position(
    candidate: Position,
    goal: Position,
    bound: Position,
    distance_to_goal: Optional[int],
    frontier_size: int,
) -> float:
    """
    Score a candidate cell.

    Combines three terms, each normalised by the maze size:
    - straight-line distance to the goal
    - optimistic path length to the goal, discounted by how much
      unexplored room surrounds the candidate
    - distance from the line through the maze center and the goal

    Args:
        candidate: Cell being judged
        goal: Target cell
        bound: Largest valid coordinate on each axis
        distance_to_goal: Steps through unexplored space, or None if unreachable
        frontier_size: Number of cells the reachability search saw (>= 1)

    Returns:
        Heuristic score, lower is better
    """
    diagonal = math.hypot(bound.x, bound.y) or 1.0
    perimeter = (8 * bound.x + 8 * bound.y) or 1

    goal_term = candidate.distance_to(goal) / diagonal

    if distance_to_goal is None:
        path_term = UNREACHABLE_PATH_PENALTY
    else:
        path_term = math.sqrt(distance_to_goal / perimeter)

    center = (bound.x / 2, bound.y / 2)
    offset_term = candidate.distance_to_line(center, (goal.x, goal.y)) / diagonal

    return (
        GOAL_WEIGHT * goal_term
        + PATH_WEIGHT * path_term / math.sqrt(max(frontier_size, 1))
        + OFFSET_WEIGHT * offset_term
    )
