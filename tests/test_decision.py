"""Tests for the per-tick decision engine."""

import itertools
from unittest.mock import patch

import pytest

from mazebot.agent.decision import DecisionEngine
from mazebot.agent.state import NavigationState
from mazebot.api.models import Direction, Position, Walls
from mazebot.api.protocol import GoalAnnounced, MoveCommand, PositionObserved
from mazebot.config import AlgorithmConfig

OPEN = Walls()
ALL_BLOCKED = Walls(top=True, right=True, bottom=True, left=True)


def make_navigation(goal, *steps):
    """Create a navigation state from a goal and (cell, walls) observations."""
    nav = NavigationState()
    nav.apply(GoalAnnounced(Position(*goal)))
    for cell, walls in steps:
        nav.apply(PositionObserved(Position(*cell), walls))
    return nav


class TestIdle:
    """Tests for the no-position state."""

    def test_no_position_yields_nothing(self):
        """Test that a run without a known cell produces no move."""
        nav = make_navigation((3, 0))
        assert DecisionEngine().decide(nav.run) is None

    def test_no_goal_yields_nothing(self):
        """Test that a position without a goal produces no move."""
        nav = NavigationState()
        nav.apply(PositionObserved(Position(0, 3), OPEN))
        assert DecisionEngine().decide(nav.run) is None


class TestForwardMoves:
    """Tests for choosing an unvisited neighbor."""

    def test_moves_toward_goal(self):
        """Test stepping toward a goal straight ahead."""
        # 10x10 maze, start in the bottom-left corner, goal top-left
        nav = make_navigation((0, 0), ((0, 9), Walls(bottom=True, left=True)))
        command = DecisionEngine().decide(nav.run)

        assert command == MoveCommand(Direction.UP)
        assert len(nav.run.history) == 1

    def test_ties_go_to_first_direction(self):
        """Test that equal scores pick the earliest direction."""
        nav = make_navigation((5, 5), ((4, 9), Walls(bottom=True)))
        with patch("mazebot.agent.decision.score_position", return_value=0.5):
            command = DecisionEngine().decide(nav.run)

        assert command == MoveCommand(Direction.UP)

    def test_tie_skips_blocked_directions(self):
        """Test that a walled direction never wins a tie."""
        nav = make_navigation((5, 5), ((4, 9), Walls(top=True, bottom=True)))
        with patch("mazebot.agent.decision.score_position", return_value=0.5):
            command = DecisionEngine().decide(nav.run)

        assert command == MoveCommand(Direction.RIGHT)

    def test_pushes_chosen_score(self):
        """Test that the chosen candidate's score lands in the history."""
        nav = make_navigation((0, 0), ((0, 9), Walls(bottom=True, left=True)))
        engine = DecisionEngine()
        candidates = engine.evaluate_candidates(nav.run)
        engine.decide(nav.run)

        best = min(candidates, key=lambda c: c.score)
        assert list(nav.run.history) == [best.score]

    def test_candidates_out_of_bounds_are_rejected(self):
        """Test that cells outside the maze are never candidates."""
        nav = make_navigation((0, 0), ((0, 9), OPEN))
        candidates = DecisionEngine().evaluate_candidates(nav.run)

        directions = [c.direction for c in candidates]
        assert Direction.DOWN not in directions
        assert Direction.LEFT not in directions
        assert directions == [Direction.UP, Direction.RIGHT]

    @pytest.mark.parametrize("bits", list(itertools.product([False, True], repeat=4)))
    def test_never_moves_through_a_wall(self, bits):
        """Test every wall combination: the chosen direction is always open."""
        walls = Walls(*bits)
        nav = make_navigation(
            (4, 0),
            ((2, 4), OPEN),
            ((2, 3), walls),
        )
        engine = DecisionEngine(AlgorithmConfig(heuristic_cut=100.0))
        command = engine.decide(nav.run)

        if command is not None:
            assert not walls.blocks(command.direction)


class TestBacktracking:
    """Tests for stepping back toward the parent cell."""

    def test_dead_end_backtracks_to_parent(self):
        """Test stepping back to the parent from a dead end."""
        # 3x3 maze: enter (0,1) from below, every other side is walled
        nav = make_navigation(
            (2, 0),
            ((0, 2), Walls(top=False, right=True, bottom=True, left=True)),
            ((0, 1), Walls(top=True, right=True, bottom=False, left=True)),
        )
        nav.run.history.push(0.3)

        command = DecisionEngine().decide(nav.run)

        parent = nav.run.parent_of(nav.run.current)
        assert parent == Position(0, 2)
        assert command == MoveCommand(nav.run.current.direction_to(parent))
        assert command == MoveCommand(Direction.DOWN)
        assert len(nav.run.history) == 0

    def test_backtrack_with_empty_history(self):
        """Test backtracking when there is no score to pop."""
        nav = make_navigation(
            (2, 0),
            ((0, 2), Walls(top=False, right=True, bottom=True, left=True)),
            ((0, 1), Walls(top=True, right=True, bottom=False, left=True)),
        )
        assert DecisionEngine().decide(nav.run) == MoveCommand(Direction.DOWN)

    def test_wall_toward_parent_blocks_backtrack(self):
        """Test that a wall between the cell and its parent stops the backtrack."""
        nav = make_navigation(
            (2, 0),
            ((0, 2), Walls(top=False, right=True, bottom=True, left=True)),
            ((0, 1), ALL_BLOCKED),
        )
        nav.run.history.push(0.3)

        assert DecisionEngine().decide(nav.run) is None
        assert list(nav.run.history) == [0.3]

    def test_rejected_candidates_force_backtrack(self):
        """Test that a strict cut sends the player back."""
        nav = make_navigation(
            (9, 0),
            ((0, 9), Walls(bottom=True, left=True)),
            ((1, 9), Walls(bottom=True)),
        )
        engine = DecisionEngine(AlgorithmConfig(heuristic_cut=0.01))
        assert engine.decide(nav.run) == MoveCommand(Direction.LEFT)

    def test_start_without_options_is_exhausted(self):
        """Test that the start cell with nothing left yields no move."""
        nav = make_navigation(
            (2, 0),
            ((0, 2), Walls(top=False, right=True, bottom=True, left=True)),
            ((0, 1), Walls(top=True, right=True, bottom=False, left=True)),
            ((0, 2), Walls(top=False, right=True, bottom=True, left=True)),
        )
        assert DecisionEngine().decide(nav.run) is None

    def test_walled_in_single_cell(self):
        """Test a 1x1 maze with four walls on the first tick."""
        nav = make_navigation((1, 1), ((0, 0), ALL_BLOCKED))
        assert DecisionEngine().decide(nav.run) is None
        assert len(nav.run.history) == 0


class TestDeclineGuard:
    """Tests for the decline guard."""

    def test_guard_threshold(self):
        """Test the guard against the best of the last two scores."""
        config = AlgorithmConfig(
            heuristic_cut=1.0,
            heuristic_decline_length=2,
            heuristic_decline_cut=1.5,
        )
        engine = DecisionEngine(config)
        nav = NavigationState()
        nav.run.history.push(0.2)
        nav.run.history.push(0.3)

        guard = nav.run.history.recent_best(config.heuristic_decline_length)
        assert guard == 0.2
        assert not engine.passes_cuts(0.5, guard)
        assert engine.passes_cuts(0.29, guard)

    def test_no_history_means_no_guard(self):
        """Test that an infinite guard lets any score under the cut pass."""
        engine = DecisionEngine(AlgorithmConfig(heuristic_decline_length=2))
        assert engine.passes_cuts(0.9, float("inf"))

    def test_absolute_cut(self):
        """Test that the absolute cut is inclusive."""
        engine = DecisionEngine(AlgorithmConfig(heuristic_cut=0.4))
        assert engine.passes_cuts(0.4, float("inf"))
        assert not engine.passes_cuts(0.41, float("inf"))

    def test_guard_rejection_leads_to_backtrack(self):
        """Test that guard-rejected candidates cause a backtrack and a pop."""
        nav = make_navigation(
            (9, 0),
            ((0, 9), Walls(bottom=True, left=True)),
            ((1, 9), Walls(bottom=True)),
        )
        nav.run.history.push(0.2)
        nav.run.history.push(0.3)
        engine = DecisionEngine(AlgorithmConfig(
            heuristic_decline_length=2,
            heuristic_decline_cut=1.5,
        ))

        with patch("mazebot.agent.decision.score_position", return_value=0.5):
            command = engine.decide(nav.run)

        assert command == MoveCommand(Direction.LEFT)
        assert list(nav.run.history) == [0.2]

    def test_guard_disabled_with_zero_length(self):
        """Test that a zero lookback ignores the history."""
        nav = make_navigation(
            (9, 0),
            ((0, 9), Walls(bottom=True, left=True)),
            ((1, 9), Walls(bottom=True)),
        )
        nav.run.history.push(0.01)
        engine = DecisionEngine(AlgorithmConfig(heuristic_decline_length=0))

        with patch("mazebot.agent.decision.score_position", return_value=0.5):
            command = engine.decide(nav.run)

        assert command == MoveCommand(Direction.UP)
