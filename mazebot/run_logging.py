"""
Logging helpers for game runs.

Provides per-run log files and small dedicated loggers for decisions and
game state, so a run can be replayed from its log.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from mazebot.api.models import Direction, Position, Walls


class RunLogger:
    """
    Manages logging for a single `play` session.

    Creates a timestamped log file and attaches it to the root logger,
    next to whatever handlers are already configured.
    """

    LOG_DIR = Path("./data/logs")

    def __init__(self, log_dir: Optional[Path] = None):
        """
        Initialize the run logger.

        Args:
            log_dir: Directory for log files (defaults to ./data/logs)
        """
        self.log_dir = log_dir or self.LOG_DIR
        self.run_id = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
        self.log_file = self.log_dir / f"run_{self.run_id}.log"

        self._file_handler: Optional[logging.FileHandler] = None
        self._original_level = logging.NOTSET

    def setup(self) -> Path:
        """
        Start writing this run's log file.

        Returns:
            Path to the log file
        """
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self._file_handler = logging.FileHandler(self.log_file, encoding="utf-8")
        self._file_handler.setLevel(logging.DEBUG)
        self._file_handler.setFormatter(logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))
        root_logger = logging.getLogger()
        root_logger.addHandler(self._file_handler)
        # Decisions and run outcomes are logged at INFO
        self._original_level = root_logger.level
        root_logger.setLevel(min(root_logger.getEffectiveLevel(), logging.INFO))

        logger = logging.getLogger("mazebot.session")
        logger.info("=" * 60)
        logger.info(f"SESSION STARTED: {self.run_id}")
        logger.info("=" * 60)
        return self.log_file

    def teardown(self) -> None:
        """Detach and close the log file."""
        logger = logging.getLogger("mazebot.session")
        logger.info(f"SESSION ENDED: {self.run_id}")

        if self._file_handler:
            root_logger = logging.getLogger()
            root_logger.removeHandler(self._file_handler)
            root_logger.setLevel(self._original_level)
            self._file_handler.close()
            self._file_handler = None


class DecisionLogger:
    """Logger for per-tick decisions."""

    def __init__(self):
        self.logger = logging.getLogger("agent.decision")

    def log_candidate(
        self,
        direction: Direction,
        cell: Position,
        score: float,
        distance_to_goal: Optional[int],
        frontier_size: int,
        accepted: bool,
    ) -> None:
        """Log the evaluation of one candidate move."""
        way = "none" if distance_to_goal is None else str(distance_to_goal)
        status = "ok" if accepted else "rejected"
        self.logger.debug(
            f"  {direction.value:>5} -> {cell}: score={score:.4f} way={way} "
            f"space={frontier_size} [{status}]"
        )

    def log_forward(self, direction: Direction, cell: Position, score: float) -> None:
        self.logger.info(f"DECISION: forward {direction.value} to {cell} | score={score:.4f}")

    def log_backtrack(self, direction: Direction, parent: Position) -> None:
        self.logger.info(f"DECISION: backtrack {direction.value} to {parent}")

    def log_stalled(self, position: Position) -> None:
        self.logger.warning(f"DECISION: stalled at {position}, no way forward or back")


class GameStateLogger:
    """Logger for game state changes."""

    def __init__(self):
        self.logger = logging.getLogger("game.state")

    def log_state(
        self,
        tick: int,
        position: Optional[Position],
        walls: Optional[Walls],
        goal: Optional[Position],
        visited: int,
    ) -> None:
        """Log the current belief state."""
        self.logger.debug(
            f"Tick {tick}: Pos {position}, Goal {goal}, Walls {walls}, Visited {visited}"
        )

    def log_map(self, rendered: str) -> None:
        """Log a rendered map of the explored cells."""
        self.logger.debug("Explored map:")
        for line in rendered.split("\n"):
            self.logger.debug(f"  {line}")
