"""Navigation core and control loop."""

from .agent import MazeAgent, SessionStats
from .decision import Candidate, DecisionEngine
from .exploration import ExplorationResult, explore_space
from .heuristic import score_position
from .state import HeuristicHistory, NavigationState, RunState, VisitedGraph

__all__ = [
    # Belief state
    "HeuristicHistory",
    "NavigationState",
    "RunState",
    "VisitedGraph",
    # Search and scoring
    "ExplorationResult",
    "explore_space",
    "score_position",
    # Decisions
    "Candidate",
    "DecisionEngine",
    # Loop
    "MazeAgent",
    "SessionStats",
]
