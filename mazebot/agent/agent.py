"""
Main control loop.

Reads one answer from the server, folds it into the navigation state,
decides on a move and sends it. Nothing else happens in between.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from mazebot.api.client import GameClient
from mazebot.api.protocol import (
    Answer,
    GameAnnounced,
    GoalAnnounced,
    JoinCommand,
    Lose,
    MessageOfTheDay,
    MoveCommand,
    ServerError,
    Win,
)
from mazebot.config import AgentConfig, AlgorithmConfig, UserConfig
from mazebot.render import render_run
from mazebot.run_logging import GameStateLogger

from .decision import DecisionEngine
from .state import NavigationState

logger = logging.getLogger(__name__)
game_state_logger = GameStateLogger()


@dataclass
class SessionStats:
    """Counters for one connection."""

    ticks: int = 0
    moves: int = 0
    forward_moves: int = 0
    backtracks: int = 0
    stalls: int = 0
    goals: int = 0
    wins: int = 0
    losses: int = 0

    @property
    def games(self) -> int:
        return self.wins + self.losses

    @property
    def win_rate(self) -> float:
        return self.wins / self.games if self.games else 0.0


class MazeAgent:
    """
    Plays the maze over a GameClient.

    Example usage:
        agent = MazeAgent(config.user, config.algorithm, config.agent)
        with GameClient(config.server.address) as client:
            stats = agent.run(client)
    """

    def __init__(
        self,
        user: UserConfig,
        algorithm: Optional[AlgorithmConfig] = None,
        config: Optional[AgentConfig] = None,
    ):
        self.user = user
        self.config = config or AgentConfig()
        self.engine = DecisionEngine(algorithm)
        self.navigation = NavigationState()
        self.stats = SessionStats()

    def run(self, client: GameClient) -> SessionStats:
        """
        Join the game and play until the connection closes or max_ticks is hit.

        Raises:
            ConnectionClosedError: if the server hangs up
        """
        self.navigation.reset()
        self.stats = SessionStats()

        logger.info(f"Joining game as {self.user.user}")
        client.send(JoinCommand(self.user.user, self.user.password))

        logger.info("Starting game loop")
        while not self._tick_limit_reached():
            answer = client.read_answer()
            command = self.step(answer)
            if command is not None:
                client.send(command)

        logger.info(f"Tick limit of {self.config.max_ticks} reached")
        return self.stats

    def step(self, answer: Optional[Answer]) -> Optional[MoveCommand]:
        """
        Process one answer and decide on the next move.

        Args:
            answer: Parsed answer, or None if the line carried nothing

        Returns:
            The move to send, if any
        """
        self.stats.ticks += 1
        if answer is not None:
            self.handle_answer(answer)

        run = self.navigation.run
        game_state_logger.log_state(
            self.stats.ticks, run.current, run.walls, run.goal, len(run.visited)
        )

        command = self.engine.decide(run)
        if command is None:
            if run.current is not None and run.goal is not None:
                self.stats.stalls += 1
            return None

        self.stats.moves += 1
        if run.current.move(command.direction) in run.visited:
            self.stats.backtracks += 1
        else:
            self.stats.forward_moves += 1
        return command

    def handle_answer(self, answer: Answer) -> None:
        """Route an answer to logging, statistics or the navigation state."""
        if isinstance(answer, MessageOfTheDay):
            logger.warning(f"Message of the day: {answer.message}")
        elif isinstance(answer, ServerError):
            logger.warning(f"Error from server: {answer.message}")
        elif isinstance(answer, Win):
            self._finish_run("won", answer.wins, answer.losses)
            self.stats.wins += 1
        elif isinstance(answer, Lose):
            self._finish_run("lost", answer.wins, answer.losses)
            self.stats.losses += 1
        elif isinstance(answer, GameAnnounced):
            logger.info(
                f"New game: {answer.width}x{answer.height}, goal at {answer.goal}"
            )
        else:
            if isinstance(answer, GoalAnnounced):
                self.stats.goals += 1
            self.navigation.apply(answer)

    def _finish_run(self, outcome: str, wins: int, losses: int) -> None:
        logger.info(f"Run {outcome} (server tally: {wins} wins, {losses} losses)")
        if self.config.render_on_finish:
            game_state_logger.log_map(render_run(self.navigation.run).plain)

    def _tick_limit_reached(self) -> bool:
        return self.config.max_ticks > 0 and self.stats.ticks >= self.config.max_ticks
