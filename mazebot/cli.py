"""
Command-line interface for the maze player.

Usage:
    python -m mazebot.cli play               Connect and play, reconnecting on disconnect
    python -m mazebot.cli play --once        Play a single connection
    python -m mazebot.cli check-config       Print the effective configuration
"""

import argparse
import logging
import sys
import time
from pathlib import Path

from rich.console import Console
from rich.table import Table

from mazebot.agent import MazeAgent, SessionStats
from mazebot.api.client import GameClient
from mazebot.config import Config, load_config, setup_logging
from mazebot.run_logging import RunLogger

logger = logging.getLogger(__name__)

console = Console()


def _stats_table(stats: SessionStats) -> Table:
    table = Table(title="Session summary")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Ticks", str(stats.ticks))
    table.add_row("Moves", str(stats.moves))
    table.add_row("Forward", str(stats.forward_moves))
    table.add_row("Backtracks", str(stats.backtracks))
    table.add_row("Stalled ticks", str(stats.stalls))
    table.add_row("Goals", str(stats.goals))
    table.add_row("Wins", str(stats.wins))
    table.add_row("Losses", str(stats.losses))
    table.add_row("Win rate", f"{stats.win_rate:.1%}")
    return table


def _play_once(config: Config, agent: MazeAgent) -> SessionStats:
    client = GameClient(
        config.server.address,
        retry_delay=config.server.retry_delay,
        max_retries=config.server.max_retries,
        timeout=config.server.timeout,
    )
    with client:
        try:
            return agent.run(client)
        except OSError as e:
            logger.error(f"Lost connection: {e}")
            return agent.stats


def cmd_play(args: argparse.Namespace, config: Config) -> int:
    """Play the game."""
    if args.address:
        config.server.address = args.address
    if args.user:
        config.user.user = args.user
    if args.max_ticks is not None:
        config.agent.max_ticks = args.max_ticks

    run_logger = RunLogger(Path(args.log_dir)) if args.log_dir else None
    if run_logger:
        log_file = run_logger.setup()
        logger.info(f"Writing run log to {log_file}")

    agent = MazeAgent(config.user, config.algorithm, config.agent)
    try:
        while True:
            stats = _play_once(config, agent)
            console.print(_stats_table(stats))
            if args.once or config.agent.max_ticks > 0:
                break
            logger.info("Reconnecting...")
            time.sleep(config.server.retry_delay)
    except KeyboardInterrupt:
        console.print(_stats_table(agent.stats))
    except OSError as e:
        logger.error(f"Giving up: {e}")
        return 1
    finally:
        if run_logger:
            run_logger.teardown()
    return 0


def cmd_check_config(args: argparse.Namespace, config: Config) -> int:
    """Print the effective configuration."""
    table = Table(title="Configuration")
    table.add_column("Section")
    table.add_column("Key")
    table.add_column("Value")
    for section in ("server", "user", "algorithm", "agent", "logging"):
        for key, value in vars(getattr(config, section)).items():
            if key == "password":
                value = "***" if value else ""
            table.add_row(section, key, repr(value))
    console.print(table)
    return 0


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="mazebot - autonomous maze player",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to configuration file",
    )
    parser.add_argument(
        "--log-level",
        "-l",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level override",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    play_parser = subparsers.add_parser("play", help="Connect and play")
    play_parser.add_argument("--address", "-a", type=str, default=None, help="Server host:port")
    play_parser.add_argument("--user", "-u", type=str, default=None, help="Player name")
    play_parser.add_argument(
        "--max-ticks",
        type=int,
        default=None,
        help="Stop after this many ticks (implies --once)",
    )
    play_parser.add_argument(
        "--once",
        action="store_true",
        help="Do not reconnect after the connection closes",
    )
    play_parser.add_argument(
        "--log-dir",
        type=str,
        default=None,
        help="Also write a timestamped run log to this directory",
    )
    play_parser.set_defaults(func=cmd_play)

    check_parser = subparsers.add_parser("check-config", help="Print the effective configuration")
    check_parser.set_defaults(func=cmd_check_config)

    args = parser.parse_args()

    try:
        config = load_config(args.config)
    except (TypeError, ValueError) as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2
    if args.log_level:
        config.logging.level = args.log_level
    setup_logging(config.logging)

    if args.command is None:
        parser.print_help()
        return 1

    return args.func(args, config)


if __name__ == "__main__":
    sys.exit(main())
