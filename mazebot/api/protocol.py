"""
Line protocol for the maze server.

Every message is a single line of `|`-separated fields. The server sends
answers (observations), the client sends commands.

Inbound:
    motd|<text>
    error|<text>
    goal|<x>|<y>
    pos|<x>|<y>|<top>|<right>|<bottom>|<left>
    win|<wins>|<losses>
    lose|<wins>|<losses>
    game|<width>|<height>|<goal x>|<goal y>

Outbound:
    join|<user>|<password>
    move|<up|right|down|left>
    chat|<text>
"""

import logging
from dataclasses import dataclass
from typing import Optional, Union

from .models import Direction, Position, Walls

logger = logging.getLogger(__name__)

SEPARATOR = "|"


@dataclass(frozen=True)
class MessageOfTheDay:
    """Server greeting."""

    message: str


@dataclass(frozen=True)
class ServerError:
    """Error reported by the server (bad login, illegal move, ...)."""

    message: str


@dataclass(frozen=True)
class GoalAnnounced:
    """A new goal cell. Starts a new run."""

    cell: Position


@dataclass(frozen=True)
class PositionObserved:
    """The player's current cell and its walls."""

    cell: Position
    walls: Walls


@dataclass(frozen=True)
class Win:
    """The player reached the goal."""

    wins: int
    losses: int


@dataclass(frozen=True)
class Lose:
    """Another player reached the goal first."""

    wins: int
    losses: int


@dataclass(frozen=True)
class GameAnnounced:
    """A new maze was generated."""

    width: int
    height: int
    goal: Position


Answer = Union[
    MessageOfTheDay, ServerError, GoalAnnounced, PositionObserved, Win, Lose, GameAnnounced
]


@dataclass(frozen=True)
class JoinCommand:
    """Log in to the server."""

    user: str
    password: str


@dataclass(frozen=True)
class MoveCommand:
    """Move one cell."""

    direction: Direction


@dataclass(frozen=True)
class ChatCommand:
    """Send a chat message."""

    message: str


Command = Union[JoinCommand, MoveCommand, ChatCommand]


class _Fields:
    """Cursor over the fields of one message, defaulting missing values."""

    def __init__(self, fields: list[str]):
        self._fields = fields
        self._index = 0

    def text(self) -> str:
        if self._index >= len(self._fields):
            return ""
        value = self._fields[self._index]
        self._index += 1
        return value

    def number(self) -> int:
        value = self.text()
        try:
            number = int(value)
        except ValueError:
            logger.debug(f"Non-numeric field {value!r}, using 0")
            return 0
        if number < 0:
            logger.debug(f"Negative field {value!r}, using 0")
            return 0
        return number

    def flag(self) -> bool:
        return self.text() == "1"

    def position(self) -> Position:
        x = self.number()
        return Position(x, self.number())


def parse_answer(line: str) -> Optional[Answer]:
    """
    Parse one line received from the server.

    Missing, negative or non-numeric numeric fields become 0, missing wall bits
    become open. Empty lines and unknown message types yield None.

    Args:
        line: Raw line, with or without the trailing newline

    Returns:
        The parsed answer, or None if there is nothing to act on
    """
    line = line.strip()
    if not line:
        return None

    kind, *rest = line.split(SEPARATOR)
    fields = _Fields(rest)

    if kind == "motd":
        return MessageOfTheDay(fields.text())
    if kind == "error":
        return ServerError(fields.text())
    if kind == "goal":
        return GoalAnnounced(fields.position())
    if kind == "pos":
        cell = fields.position()
        walls = Walls(
            top=fields.flag(),
            right=fields.flag(),
            bottom=fields.flag(),
            left=fields.flag(),
        )
        return PositionObserved(cell, walls)
    if kind == "win":
        return Win(fields.number(), fields.number())
    if kind == "lose":
        return Lose(fields.number(), fields.number())
    if kind == "game":
        width = fields.number()
        height = fields.number()
        return GameAnnounced(width, height, fields.position())

    logger.warning(f"Unknown message from server: {kind}")
    return None


def encode_command(command: Command) -> bytes:
    """Serialize a command into a newline-terminated wire line."""
    if isinstance(command, JoinCommand):
        fields = ["join", command.user, command.password]
    elif isinstance(command, MoveCommand):
        fields = ["move", command.direction.value]
    elif isinstance(command, ChatCommand):
        fields = ["chat", command.message]
    else:
        raise TypeError(f"Not a command: {command!r}")
    return (SEPARATOR.join(fields) + "\n").encode("utf-8")
