"""Single-threaded TCP echo server driven by a readiness selector."""

from __future__ import annotations

import selectors
import socket
import sys

__all__ = ["EchoServer", "main"]

_RECV_SIZE = 4096
_BACKLOG = 10


class EchoServer:
    """Listens on ``ip:port`` and sends every received chunk back."""

    def __init__(self, ip, port):
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.bind((ip, int(port)))
            sock.listen(_BACKLOG)
        except OSError:
            sock.close()
            raise
        self._server = sock
        self._selector = selectors.DefaultSelector()
        self._selector.register(sock, selectors.EVENT_READ)
        self._closed = False

    def address(self):
        """The ``(ip, port)`` the server listens on."""
        return self._server.getsockname()

    def serve_once(self, timeout=None) -> int:
        """Wait up to ``timeout`` seconds for events and handle them.

        Returns the number of events handled.
        """
        events = self._selector.select(timeout)
        for key, _ in events:
            if key.fileobj is self._server:
                self._accept()
            else:
                self._echo(key.fileobj)
        return len(events)

    def serve_forever(self) -> None:
        """Handle events until the server is closed."""
        while not self._closed:
            self.serve_once()

    def _accept(self) -> None:
        try:
            conn, (host, port) = self._server.accept()
        except OSError as exc:
            print(f"accept error: {exc}", file=sys.stderr)
            return
        self._selector.register(conn, selectors.EVENT_READ)
        print(f"New connection, fd: {conn.fileno()}ip:{host}:{port}")

    def _echo(self, conn: socket.socket) -> None:
        fd = conn.fileno()
        try:
            data = conn.recv(_RECV_SIZE)
        except OSError:
            data = b""
        if not data:
            print(f"df:{fd} disconnected")
            self._selector.unregister(conn)
            conn.close()
            return
        print(f"df:{fd} :{data.decode('utf-8', 'replace')}")
        try:
            conn.sendall(data)
        except OSError as exc:
            print(f"send error: {exc}", file=sys.stderr)

    def close(self) -> None:
        """Close the listening socket and every client."""
        if self._closed:
            return
        self._closed = True
        for key in list(self._selector.get_map().values()):
            self._selector.unregister(key.fileobj)
            key.fileobj.close()
        self._selector.close()

    def __enter__(self) -> EchoServer:
        return self

    def __exit__(self, *args) -> None:
        self.close()


def main(argv=None) -> int:
    """Usage: IP PORT. Echoes data back to every client."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) < 2:
        print("./exec ip port")
        return 1
    ip, port = args[0], int(args[1])
    try:
        server = EchoServer(ip, port)
    except OSError as exc:
        print(f"bind {ip}:{port}")
        print(f"bind failed: {exc}", file=sys.stderr)
        return 1
    with server:
        print(f"fd:{server._server.fileno()}server {ip}:{port}")
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            pass
    return 0