"""Threaded TCP server that reports socket events to a handler object."""

from __future__ import annotations

import abc
import selectors
import socket
import sys
import threading
import time
from dataclasses import dataclass, field

__all__ = [
    "ClientBuffer",
    "SocketInfo",
    "EventHandler",
    "LoggingHandler",
    "NetEventServer",
    "main",
]

_BUFFER_SIZE = 4096
_POLL_TIMEOUT = 0.2
_BACKLOG = 10
_RUN_SECONDS = 15


@dataclass
class ClientBuffer:
    """Receive buffer of one client.

    ``length`` is the number of valid bytes at the start of ``data``;
    ``used`` is how many of them were left unconsumed by the handler and
    are kept for the next read.
    """

    data: bytearray | None = None
    capacity: int = 0
    length: int = 0
    used: int = 0

    def content(self) -> bytes:
        """The valid bytes currently in the buffer."""
        if self.data is None:
            return b""
        return bytes(self.data[:self.length])


@dataclass(eq=False)
class SocketInfo:
    """A socket known to the server together with its handle."""

    handle: int
    fd: int
    sock: socket.socket = field(repr=False)
    address: tuple | None = None
    buffer: ClientBuffer = field(default_factory=ClientBuffer)


class EventHandler(abc.ABC):
    """Callbacks invoked by :class:`NetEventServer`."""

    def on_debug(self, msg) -> None:
        print(msg)

    def on_info(self, msg) -> None:
        print(msg)

    def on_error(self, msg) -> None:
        print(msg)

    def allocate_buffer(self, buffer) -> None:
        """Make sure ``buffer`` has storage before a read."""
        if buffer.data is None:
            buffer.data = bytearray(_BUFFER_SIZE)
            buffer.capacity = _BUFFER_SIZE
        buffer.length = buffer.used

    def release_buffer(self, buffer) -> None:
        """Drop the storage of ``buffer`` once nothing is pending in it."""
        if buffer.used == 0:
            buffer.data = None
            buffer.capacity = 0
            buffer.length = 0

    @abc.abstractmethod
    def on_connected(self, info) -> None:
        """A client connected."""

    @abc.abstractmethod
    def on_disconnected(self, info) -> None:
        """A client disconnected or the server is closing."""

    @abc.abstractmethod
    def on_recv_data(self, info) -> int:
        """Data arrived in ``info.buffer``; return the bytes consumed."""


class LoggingHandler(EventHandler):
    """Prints every event and consumes all received data."""

    def on_connected(self, info) -> None:
        print(f"on_connected:{info.handle}:{info.fd}")

    def on_disconnected(self, info) -> None:
        print(f"on_disconnected:{info.handle}:{info.fd}")

    def on_recv_data(self, info) -> int:
        print(f"on_data:{info.handle}:{info.fd} data:{info.buffer.length}")
        return info.buffer.length


class NetEventServer:
    """Accepts clients and dispatches their data on a background thread.

    Each socket gets a handle, starting at 1 for the listening socket.
    """

    def __init__(self, handler):
        self.handler = handler
        self._server: socket.socket | None = None
        self._selector: selectors.BaseSelector | None = None
        self._thread: threading.Thread | None = None
        self._running = threading.Event()
        self._lock = threading.Lock()
        self._next_handle = 1
        self._sockets: dict[int, SocketInfo] = {}

    def bind(self, ip, port) -> None:
        """Create the listening socket and bind it to ``ip:port``."""
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        except OSError:
            self.handler.on_error("socket setsockopt failed!")
            sock.close()
            raise
        try:
            sock.bind((ip, int(port)))
        except OSError:
            self.handler.on_error(f"socket bind failed!ip[{ip}] port[{port}]")
            sock.close()
            raise
        self._server = sock
        self.handler.on_debug(f"server bind ip[{ip}] port[{port}]")

    def start(self) -> None:
        """Listen and start dispatching events on a background thread."""
        if self._server is None:
            raise RuntimeError("server is not bound")
        try:
            self._server.listen(_BACKLOG)
        except OSError:
            self.handler.on_error("listen failed")
            raise
        self._selector = selectors.DefaultSelector()
        info = self._register(self._server, None)
        self._selector.register(self._server, selectors.EVENT_READ, info)
        self._running.set()
        self._thread = threading.Thread(target=self._run, name="net-event", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Stop the event thread and wait for it."""
        self._running.clear()
        if self._thread is not None:
            self._thread.join()
            self._thread = None

    def close(self) -> None:
        """Stop, report remaining clients as disconnected and close all sockets."""
        self.stop()
        with self._lock:
            infos = list(self._sockets.values())
            self._sockets.clear()
        for info in infos:
            if info.sock is not self._server:
                self.handler.on_disconnected(info)
            if self._selector is not None:
                try:
                    self._selector.unregister(info.sock)
                except (KeyError, ValueError):
                    pass
            info.sock.close()
        if self._server is not None:
            self._server.close()
            self._server = None
        if self._selector is not None:
            self._selector.close()
            self._selector = None

    def send_data(self, handle, data) -> int:
        """Send ``data`` to the socket with ``handle``; 0 if it is unknown."""
        with self._lock:
            info = self._sockets.get(handle)
        if info is None:
            return 0
        return info.sock.send(data)

    def address(self):
        """The ``(ip, port)`` the server is bound to."""
        if self._server is None:
            raise RuntimeError("server is not bound")
        return self._server.getsockname()

    def _register(self, sock, address) -> SocketInfo:
        with self._lock:
            info = SocketInfo(
                handle=self._next_handle, fd=sock.fileno(), sock=sock, address=address
            )
            self._sockets[info.handle] = info
            self._next_handle += 1
        return info

    def _forget(self, info) -> None:
        with self._lock:
            self._sockets.pop(info.handle, None)

    def _run(self) -> None:
        while self._running.is_set():
            for key, _ in self._selector.select(_POLL_TIMEOUT):
                info = key.data
                if info.sock is self._server:
                    self._accept()
                else:
                    self._read(info)

    def _accept(self) -> None:
        try:
            conn, address = self._server.accept()
        except OSError:
            self.handler.on_error("accept error!")
            return
        info = self._register(conn, address)
        self._selector.register(conn, selectors.EVENT_READ, info)
        self.handler.on_connected(info)

    def _read(self, info) -> None:
        buffer = info.buffer
        self.handler.allocate_buffer(buffer)
        if buffer.used >= buffer.capacity:
            self.handler.on_error(f"client buffer full, dropping {buffer.used} bytes")
            buffer.used = buffer.length = 0
        try:
            n = info.sock.recv_into(memoryview(buffer.data)[buffer.used:buffer.capacity])
        except OSError:
            n = 0
        if n == 0:
            buffer.used = 0
            self.handler.on_disconnected(info)
            self._selector.unregister(info.sock)
            info.sock.close()
            self._forget(info)
        else:
            buffer.length = buffer.used + n
            consumed = self.handler.on_recv_data(info) or 0
            consumed = max(0, min(int(consumed), buffer.length))
            remaining = buffer.length - consumed
            buffer.data[:remaining] = buffer.data[consumed:buffer.length]
            buffer.used = remaining
            buffer.length = remaining
        self.handler.release_buffer(buffer)


def main(argv=None) -> int:
    """Usage: IP PORT. Serves for fifteen seconds, printing events."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) < 2:
        print("./exec ip port")
        return 1
    ip, port = args[0], int(args[1])
    server = NetEventServer(LoggingHandler())
    try:
        server.bind(ip, port)
    except OSError:
        print("init failed;")
        return 1
    try:
        server.start()
    except OSError:
        print("start failed;")
        server.close()
        return 1
    time.sleep(_RUN_SECONDS)
    server.close()
    return 0