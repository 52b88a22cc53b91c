"""Game-facing API: grid primitives, wire protocol and TCP client."""

from .client import ConnectionClosedError, GameClient
from .models import CARDINAL_DIRECTIONS, Direction, InvalidMoveError, Position, Walls
from .protocol import (
    Answer,
    ChatCommand,
    Command,
    GameAnnounced,
    GoalAnnounced,
    JoinCommand,
    Lose,
    MessageOfTheDay,
    MoveCommand,
    PositionObserved,
    ServerError,
    Win,
    encode_command,
    parse_answer,
)

__all__ = [
    # Models
    "CARDINAL_DIRECTIONS",
    "Direction",
    "InvalidMoveError",
    "Position",
    "Walls",
    # Protocol
    "Answer",
    "ChatCommand",
    "Command",
    "GameAnnounced",
    "GoalAnnounced",
    "JoinCommand",
    "Lose",
    "MessageOfTheDay",
    "MoveCommand",
    "PositionObserved",
    "ServerError",
    "Win",
    "encode_command",
    "parse_answer",
    # Client
    "ConnectionClosedError",
    "GameClient",
]
