"""Configuration management for the maze player."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)


@dataclass
class ServerConfig:
    """Maze server connection settings."""

    address: str = "localhost:4000"
    retry_delay: float = 0.2
    # None = retry forever
    max_retries: Optional[int] = None
    # Seconds to wait for a server line once connected (None blocks)
    timeout: Optional[float] = None


@dataclass
class UserConfig:
    """Login credentials."""

    user: str = "mazebot"
    password: str = ""


@dataclass
class AlgorithmConfig:
    """Tuning of the move decision."""

    # Candidates scoring above this are never taken
    heuristic_cut: float = 1.0
    # How many recent accepted scores the decline guard looks at (0 disables it)
    heuristic_decline_length: int = 0
    # Reject candidates scoring worse than this multiple of the recent best
    heuristic_decline_cut: float = 1.5

    def __post_init__(self):
        if self.heuristic_decline_length < 0:
            raise ValueError(
                f"heuristic_decline_length must be >= 0, got {self.heuristic_decline_length}"
            )
        if self.heuristic_decline_cut <= 0:
            raise ValueError(
                f"heuristic_decline_cut must be > 0, got {self.heuristic_decline_cut}"
            )


@dataclass
class AgentConfig:
    """Control loop settings."""

    # 0 = run until the connection closes
    max_ticks: int = 0
    # Log the explored map whenever a run ends
    render_on_finish: bool = True


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file: Optional[str] = None


@dataclass
class Config:
    """Main configuration container."""

    server: ServerConfig = field(default_factory=ServerConfig)
    user: UserConfig = field(default_factory=UserConfig)
    algorithm: AlgorithmConfig = field(default_factory=AlgorithmConfig)
    agent: AgentConfig = field(default_factory=AgentConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(config_path: Optional[str] = None) -> Config:
    """
    Load configuration from YAML file with environment variable overrides.

    Args:
        config_path: Path to config file. Defaults to config/default.yaml

    Returns:
        Populated Config dataclass

    Raises:
        ValueError: if a section holds invalid values
    """
    if config_path is None:
        candidates = [
            Path("config/default.yaml"),
            Path(__file__).parent.parent / "config" / "default.yaml",
        ]
        for candidate in candidates:
            if candidate.exists():
                config_path = str(candidate)
                break

    config = Config()

    if config_path and Path(config_path).exists():
        with open(config_path) as f:
            data = yaml.safe_load(f)

        if data:
            if "server" in data:
                config.server = ServerConfig(**data["server"])
            if "user" in data:
                config.user = UserConfig(**data["user"])
            if "algorithm" in data:
                config.algorithm = AlgorithmConfig(**data["algorithm"])
            if "agent" in data:
                config.agent = AgentConfig(**data["agent"])
            if "logging" in data:
                config.logging = LoggingConfig(**data["logging"])
    elif config_path:
        logger.warning(f"Config file {config_path} not found, using defaults")

    # Environment variable overrides
    if os.environ.get("MAZEBOT_SERVER_ADDRESS"):
        config.server.address = os.environ["MAZEBOT_SERVER_ADDRESS"]
    if os.environ.get("MAZEBOT_USER"):
        config.user.user = os.environ["MAZEBOT_USER"]
    if os.environ.get("MAZEBOT_PASSWORD"):
        config.user.password = os.environ["MAZEBOT_PASSWORD"]
    if os.environ.get("MAZEBOT_LOG_LEVEL"):
        config.logging.level = os.environ["MAZEBOT_LOG_LEVEL"]

    return config


def setup_logging(config: LoggingConfig) -> None:
    """
    Configure logging based on configuration.

    Args:
        config: Logging configuration
    """
    level = getattr(logging, config.level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler()]

    if config.file:
        log_path = Path(config.file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(config.file))

    logging.basicConfig(
        level=level,
        format=config.format,
        handlers=handlers,
        force=True,
    )

    logger.info(f"Logging configured at level {config.level}")
