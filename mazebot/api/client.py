"""
TCP client for the maze server.

Owns the socket: connecting (with retry), reading answers line by line
and writing commands.
"""

import logging
import socket
import time
from typing import Optional

from .protocol import Answer, Command, JoinCommand, encode_command, parse_answer

logger = logging.getLogger(__name__)


class ConnectionClosedError(ConnectionError):
    """The server closed the connection."""


def parse_address(address: str) -> tuple[str, int]:
    """Split a `host:port` string."""
    host, sep, port = address.rpartition(":")
    if not sep or not host:
        raise ValueError(f"Address must look like host:port, got {address!r}")
    return host, int(port)


class GameClient:
    """
    Line-based connection to the maze server.

    Example usage:
        client = GameClient("localhost:4000")
        client.connect()
        client.send(JoinCommand("name", "secret"))
        while True:
            answer = client.read_answer()
            ...
    """

    def __init__(
        self,
        address: str,
        retry_delay: float = 0.2,
        max_retries: Optional[int] = None,
        timeout: Optional[float] = None,
    ):
        """
        Initialize the client.

        Args:
            address: Server address as host:port
            retry_delay: Seconds to wait between connection attempts
            max_retries: Attempts before giving up (None retries forever)
            timeout: Socket timeout once connected (None blocks)
        """
        self.host, self.port = parse_address(address)
        self.retry_delay = retry_delay
        self.max_retries = max_retries
        self.timeout = timeout

        self._sock: Optional[socket.socket] = None
        self._reader = None

    @property
    def connected(self) -> bool:
        return self._sock is not None

    def connect(self) -> None:
        """
        Connect to the server, retrying until it succeeds.

        Raises:
            OSError: the last connection error once max_retries is exhausted
        """
        attempt = 0
        while True:
            attempt += 1
            try:
                sock = socket.create_connection((self.host, self.port))
            except OSError as e:
                logger.error(f"Could not connect to {self.host}:{self.port}: {e}")
                if self.max_retries is not None and attempt >= self.max_retries:
                    raise
                time.sleep(self.retry_delay)
                continue

            sock.settimeout(self.timeout)
            self._sock = sock
            self._reader = sock.makefile("r", encoding="utf-8", newline="\n")
            logger.info(f"Connected to {self.host}:{self.port} after {attempt} attempt(s)")
            return

    def close(self) -> None:
        """Close the connection. Safe to call more than once."""
        if self._reader is not None:
            self._reader.close()
            self._reader = None
        if self._sock is not None:
            self._sock.close()
            self._sock = None

    def read_answer(self) -> Optional[Answer]:
        """
        Block until the next line arrives and parse it.

        Returns:
            The parsed answer, or None for empty/unknown lines

        Raises:
            ConnectionClosedError: if the server closed the connection
        """
        if self._reader is None:
            raise ConnectionClosedError("Not connected")
        line = self._reader.readline()
        if not line:
            raise ConnectionClosedError(f"Connection to {self.host}:{self.port} closed")
        logger.debug(f"Received answer: {line.strip()}")
        return parse_answer(line)

    def send(self, command: Command) -> None:
        """Send a command to the server."""
        if self._sock is None:
            raise ConnectionClosedError("Not connected")
        data = encode_command(command)
        if isinstance(command, JoinCommand):
            logger.debug(f"Sending command: join|{command.user}|***")
        else:
            logger.debug(f"Sending command: {data.decode('utf-8').strip()}")
        self._sock.sendall(data)

    def __enter__(self) -> "GameClient":
        self.connect()
        return self

    def __exit__(self, *exc) -> None:
        self.close()
