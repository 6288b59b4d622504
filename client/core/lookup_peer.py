from __future__ import annotations

import logging
import socket
from enum import IntEnum
from typing import Optional, Protocol

from shared.protocol import DEFAULT_MAX_BODY_SIZE, LOOKUP_TIMEOUT, MAGIC_V1, framing
from shared.protocol.commands import Command
from shared.protocol.errors import DialError, ReadError, WriteError
from shared.protocol.messages import PeerInfo
from shared.utils import split_address


class PeerState(IntEnum):
    DISCONNECTED = 1
    CONNECTED = 2


class ReconnectHandler(Protocol):
    """Notified once each time a peer goes from disconnected to connected."""

    def on_connect(self, peer: "LookupPeer") -> None: ...


class LookupPeer:
    """Low-level, lazily connecting client for one lookup registry.

    ``command()`` performs a full round trip. It connects on demand, sends the
    magic preamble on every fresh connection, notifies the reconnect handler
    and collapses to DISCONNECTED on any failure, so the next call starts over
    with a clean connection. Not safe for concurrent use; callers serialize
    access to a single instance.
    """

    def __init__(
        self,
        address: str,
        max_body_size: int = DEFAULT_MAX_BODY_SIZE,
        logger: Optional[logging.Logger] = None,
        reconnect_handler: Optional[ReconnectHandler] = None,
    ) -> None:
        if max_body_size < 0:
            raise ValueError("max_body_size must not be negative")
        self._address = address
        self._logger = logger
        self._sock: Optional[socket.socket] = None
        self._state = PeerState.DISCONNECTED
        self.max_body_size = max_body_size
        self.reconnect_handler = reconnect_handler
        self.info: Optional[PeerInfo] = None

    @property
    def address(self) -> str:
        return self._address

    @property
    def state(self) -> PeerState:
        return self._state

    @property
    def connected(self) -> bool:
        return self._state == PeerState.CONNECTED

    def __str__(self) -> str:
        return self._address

    def __repr__(self) -> str:
        return f"LookupPeer(address={self._address!r}, state={self._state.name})"

    def connect(self) -> None:
        """Dial the registry with a timeout. Recorded state is left untouched."""
        if self._logger is not None:
            self._logger.info("LOOKUP connecting to %s", self._address)
        if self._sock is not None:
            self._release()
        try:
            host, port = split_address(self._address)
        except ValueError as exc:
            raise DialError(str(exc)) from exc
        try:
            self._sock = socket.create_connection((host, port), timeout=LOOKUP_TIMEOUT)
        except OSError as exc:
            raise DialError(f"dial {self._address} failed: {exc}") from exc

    def read(self, size: int) -> bytes:
        """Read up to ``size`` bytes, bounded by a fresh deadline."""
        if self._sock is None:
            raise ReadError(f"read from {self._address}: not connected")
        try:
            self._sock.settimeout(LOOKUP_TIMEOUT)
            return self._sock.recv(size)
        except OSError as exc:
            raise ReadError(f"read from {self._address} failed: {exc}") from exc

    def write(self, data: bytes) -> int:
        """Write all of ``data``, bounded by a fresh deadline."""
        if self._sock is None:
            raise WriteError(f"write to {self._address}: not connected")
        try:
            self._sock.settimeout(LOOKUP_TIMEOUT)
            self._sock.sendall(data)
        except OSError as exc:
            raise WriteError(f"write to {self._address} failed: {exc}") from exc
        return len(data)

    def close(self) -> None:
        """Drop to DISCONNECTED and release the socket. Safe to call repeatedly."""
        self._state = PeerState.DISCONNECTED
        self._release()

    def _release(self) -> None:
        sock, self._sock = self._sock, None
        if sock is not None:
            sock.close()

    def command(self, cmd: Optional[Command]) -> bytes:
        """Perform a round trip for ``cmd`` and return the response body.

        ``None`` only makes sure the connection is up and returns ``b""``.
        """
        initial_state = self._state
        if self._state != PeerState.CONNECTED:
            self.connect()
            self._state = PeerState.CONNECTED
            try:
                self.write(MAGIC_V1)
                if initial_state == PeerState.DISCONNECTED and self.reconnect_handler is not None:
                    self.reconnect_handler.on_connect(self)
                    if self._sock is None:
                        raise WriteError(f"connection to {self._address} lost in reconnect handler")
            except Exception:
                self.close()
                raise

        if cmd is None:
            return b""

        try:
            cmd.write_to(self)
        except Exception:
            self.close()
            raise

        try:
            return framing.read_response_bounded(self, self.max_body_size)
        except Exception:
            self.close()
            raise


__all__ = ["LookupPeer", "PeerState", "ReconnectHandler"]
