"""
Per-tick move selection.

Each tick the engine looks at the open sides of the current cell, scores
the neighbor behind each one and either steps forward into the best
unvisited neighbor or, when none qualifies, steps back toward the cell it
came from. Backing out of the start cell is impossible, so a start cell
with no forward option yields no move at all.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from mazebot.api.models import Direction, Position
from mazebot.api.protocol import MoveCommand
from mazebot.config import AlgorithmConfig
from mazebot.run_logging import DecisionLogger

from .exploration import explore_space
from .heuristic import score_position
from .state import RunState

logger = logging.getLogger(__name__)
decision_logger = DecisionLogger()


@dataclass(frozen=True)
class Candidate:
    """A scored neighbor of the current cell."""

    direction: Direction
    cell: Position
    score: float
    distance_to_goal: Optional[int]
    frontier_size: int

    @property
    def goal_reachable(self) -> bool:
        return self.distance_to_goal is not None


class DecisionEngine:
    """
    Turns the current RunState into at most one move.

    Example usage:
        engine = DecisionEngine(config.algorithm)
        command = engine.decide(nav.run)
        if command is not None:
            client.send(command)
    """

    def __init__(self, config: Optional[AlgorithmConfig] = None):
        self.config = config or AlgorithmConfig()

    def decide(self, run: RunState) -> Optional[MoveCommand]:
        """
        Pick the move for this tick.

        Pushes the chosen score onto the run's history on forward moves and
        pops it on backtracks.

        Returns:
            The move to send, or None if the run is idle or exhausted
        """
        if run.current is None or run.goal is None or run.walls is None:
            return None

        candidates = self.evaluate_candidates(run)
        unvisited = [c for c in candidates if c.cell not in run.visited]

        if unvisited:
            # min() keeps the first of equal scores, so direction order breaks ties
            best = min(unvisited, key=lambda c: c.score)
            run.history.push(best.score)
            decision_logger.log_forward(best.direction, best.cell, best.score)
            return MoveCommand(best.direction)

        parent = run.parent_of(run.current)
        if parent is None:
            decision_logger.log_stalled(run.current)
            return None

        direction = run.current.direction_to(parent)
        if run.walls.blocks(direction):
            decision_logger.log_stalled(run.current)
            return None

        run.history.pop()
        decision_logger.log_backtrack(direction, parent)
        return MoveCommand(direction)

    def evaluate_candidates(self, run: RunState) -> list[Candidate]:
        """
        Score every open neighbor of the current cell and keep the acceptable ones.

        A candidate is kept if the goal is reachable from it through
        unexplored space and its score passes both the absolute cut and
        the decline guard. Order follows the direction order.
        """
        bound = run.extent
        guard = run.history.recent_best(self.config.heuristic_decline_length)

        accepted = []
        for direction in run.walls.open_directions():
            cell = run.current.move(direction)
            result = explore_space(cell, bound, run.visited, run.goal)
            score = score_position(
                cell, run.goal, bound, result.distance_to_goal, result.frontier_size
            )
            candidate = Candidate(
                direction=direction,
                cell=cell,
                score=score,
                distance_to_goal=result.distance_to_goal,
                frontier_size=result.frontier_size,
            )
            ok = candidate.goal_reachable and self.passes_cuts(score, guard)
            decision_logger.log_candidate(
                direction, cell, score, result.distance_to_goal, result.frontier_size, ok
            )
            if ok:
                accepted.append(candidate)
        return accepted

    def passes_cuts(self, score: float, guard: float) -> bool:
        """
        Check a score against the absolute cut and the decline guard.

        Args:
            score: Candidate score
            guard: Best score among recent accepted moves (+inf if none)
        """
        if score > self.config.heuristic_cut:
            return False
        if guard != float("inf") and score > self.config.heuristic_decline_cut * guard:
            return False
        return True
