"""Tests for the line protocol."""

import logging

import pytest

from mazebot.api.models import Direction, Position, Walls
from mazebot.api.protocol import (
    ChatCommand,
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


class TestParseAnswer:
    """Tests for parse_answer."""

    def test_motd(self):
        """Test parsing a message of the day."""
        assert parse_answer("motd|Welcome to the maze\n") == MessageOfTheDay("Welcome to the maze")

    def test_error(self):
        """Test parsing a server error."""
        assert parse_answer("error|INVALID_MOVE") == ServerError("INVALID_MOVE")

    def test_goal(self):
        """Test parsing a goal announcement."""
        assert parse_answer("goal|12|3\n") == GoalAnnounced(Position(12, 3))

    def test_pos_with_walls(self):
        """Test parsing a position with wall bits."""
        answer = parse_answer("pos|4|7|1|0|0|1\n")
        assert answer == PositionObserved(
            Position(4, 7),
            Walls(top=True, right=False, bottom=False, left=True),
        )

    def test_pos_missing_wall_bits_are_open(self):
        """Test that missing wall bits mean open sides."""
        answer = parse_answer("pos|1|1")
        assert answer.walls == Walls()

    def test_non_numeric_fields_default_to_zero(self):
        """Test that non-numeric fields become 0."""
        assert parse_answer("goal|x|5") == GoalAnnounced(Position(0, 5))

    def test_missing_fields_default_to_zero(self):
        """Test that missing fields become 0."""
        assert parse_answer("goal") == GoalAnnounced(Position(0, 0))

    def test_negative_fields_default_to_zero(self):
        """Test that negative coordinates from the server become 0."""
        assert parse_answer("pos|-3|2").cell == Position(0, 2)
        assert parse_answer("goal|-1|-1") == GoalAnnounced(Position(0, 0))

    def test_win_and_lose(self):
        """Test parsing win and lose lines."""
        assert parse_answer("win|3|1") == Win(3, 1)
        assert parse_answer("lose|3|2") == Lose(3, 2)

    def test_game(self):
        """Test parsing a game announcement."""
        assert parse_answer("game|20|20|19|0") == GameAnnounced(20, 20, Position(19, 0))

    def test_empty_line(self):
        """Test that blank lines parse to None."""
        assert parse_answer("") is None
        assert parse_answer("\n") is None

    def test_unknown_message_is_logged(self, caplog):
        """Test that unknown messages log a warning."""
        with caplog.at_level(logging.WARNING):
            assert parse_answer("tick|42") is None
        assert "Unknown message from server: tick" in caplog.text


class TestEncodeCommand:
    """Tests for encode_command."""

    def test_join(self):
        """Test encoding a join command."""
        assert encode_command(JoinCommand("bot", "secret")) == b"join|bot|secret\n"

    @pytest.mark.parametrize("direction", list(Direction))
    def test_move(self, direction):
        """Test encoding a move in each direction."""
        assert encode_command(MoveCommand(direction)) == f"move|{direction.value}\n".encode()

    def test_chat(self):
        """Test encoding a chat command."""
        assert encode_command(ChatCommand("hello")) == b"chat|hello\n"

    def test_rejects_non_command(self):
        """Test that a plain string is rejected."""
        with pytest.raises(TypeError):
            encode_command("move|up")
