from __future__ import annotations

import json
import socketserver
import struct
import threading
from typing import Callable, List, Optional, Tuple

import pytest

from shared.protocol import encode_response

Received = Tuple[str, List[str], Optional[bytes]]
Responder = Callable[[str, List[str], Optional[bytes]], Optional[bytes]]

LOOKUPD_INFO = {
    "tcp_port": 4160,
    "http_port": 4161,
    "version": "1.2.1",
    "broadcast_address": "lookupd.local",
}


def default_responder(name: str, params: List[str], body: Optional[bytes]) -> Optional[bytes]:
    if name == "IDENTIFY":
        return encode_response(json.dumps(LOOKUPD_INFO).encode("utf-8"))
    if name in ("REGISTER", "UNREGISTER", "PING"):
        return encode_response(b"OK")
    return encode_response(b"E_INVALID unknown command " + name.encode("utf-8"))


class _Handler(socketserver.StreamRequestHandler):
    server: "_Server"

    def handle(self) -> None:
        fake = self.server.fake
        magic = self.rfile.read(4)
        with fake.lock:
            fake.magics.append(magic)
        while True:
            line = self.rfile.readline()
            if not line:
                return
            name, *params = line.decode("utf-8").rstrip("\n").split(" ")
            body = None
            if name == "IDENTIFY":
                (size,) = struct.unpack(">I", self.rfile.read(4))
                body = self.rfile.read(size)
            with fake.lock:
                fake.received.append((name, params, body))
            reply = fake.responder(name, params, body)
            if reply is None:
                return
            self.wfile.write(reply)
            self.wfile.flush()


class _Server(socketserver.ThreadingTCPServer):
    allow_reuse_address = True
    daemon_threads = True
    fake: "FakeLookupd"


class FakeLookupd:
    """Threaded in-process registry speaking the lookup wire protocol."""

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.magics: List[bytes] = []
        self.received: List[Received] = []
        self.responder: Responder = default_responder
        self._server = _Server(("127.0.0.1", 0), _Handler)
        self._server.fake = self
        self._thread = threading.Thread(target=self._server.serve_forever, daemon=True)

    @property
    def address(self) -> str:
        host, port = self._server.server_address[:2]
        return f"{host}:{port}"

    @property
    def command_names(self) -> List[str]:
        with self.lock:
            return [name for name, _, _ in self.received]

    def start(self) -> "FakeLookupd":
        self._thread.start()
        return self

    def stop(self) -> None:
        self._server.shutdown()
        self._server.server_close()
        self._thread.join(timeout=5)


@pytest.fixture
def lookupd():
    server = FakeLookupd().start()
    yield server
    server.stop()


class FakeSocket:
    """Scripted socket: records writes and serves queued response bytes."""

    def __init__(self, incoming: bytes = b"", journal: Optional[list] = None) -> None:
        self.incoming = bytearray(incoming)
        self.sent = bytearray()
        self.timeouts: List[float] = []
        self.closed = False
        self.close_calls = 0
        self.fail_send = False
        self.fail_recv = False
        self.journal = journal if journal is not None else []

    def settimeout(self, value: float) -> None:
        self.timeouts.append(value)

    def sendall(self, data: bytes) -> None:
        if self.closed:
            raise OSError("socket is closed")
        if self.fail_send:
            raise BrokenPipeError("broken pipe")
        self.sent.extend(data)
        self.journal.append(("send", bytes(data)))

    def recv(self, size: int) -> bytes:
        if self.closed:
            raise OSError("socket is closed")
        if self.fail_recv:
            raise TimeoutError("timed out")
        # hand out at most 3 bytes per call to exercise short reads
        chunk = bytes(self.incoming[: min(size, 3)])
        del self.incoming[: len(chunk)]
        return chunk

    def close(self) -> None:
        self.closed = True
        self.close_calls += 1


class FakeDialer:
    """Stand-in for socket.create_connection handing out FakeSockets in order."""

    def __init__(self, *sockets: FakeSocket) -> None:
        self.sockets = list(sockets)
        self.calls: List[Tuple[Tuple[str, int], float]] = []

    def __call__(self, address, timeout=None):
        self.calls.append((address, timeout))
        if not self.sockets:
            raise ConnectionRefusedError("connection refused")
        return self.sockets.pop(0)


@pytest.fixture
def dialer(monkeypatch):
    def install(*sockets: FakeSocket) -> FakeDialer:
        fake = FakeDialer(*sockets)
        monkeypatch.setattr("client.core.lookup_peer.socket.create_connection", fake)
        return fake

    return install
