"""Line-based TCP chat between two peers, with a bound local endpoint."""

from __future__ import annotations

import selectors
import socket
import sys
import threading
import time

__all__ = ["PeerChat", "connect_with_retry", "main"]

_RECV_SIZE = 4096
_POLL_TIMEOUT = 0.1
_RETRY_DELAY = 0.05


def connect_with_retry(local_ip, local_port, remote_ip, remote_port, attempts=None):
    """Connect from ``local_ip:local_port`` to ``remote_ip:remote_port``.

    Retries until it succeeds, or ``attempts`` times when given; raises
    ConnectionError when the attempts run out. Binding errors are raised as
    OSError. Once connected, the local IP address is sent to the peer and
    the connected socket is returned.
    """
    count = 0
    while True:
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.bind((local_ip, int(local_port)))
        except OSError:
            sock.close()
            raise
        try:
            sock.connect((remote_ip, int(remote_port)))
        except OSError as exc:
            sock.close()
            print(f"\rError: Unable to connect to server：{count}", end="", file=sys.stderr, flush=True)
            count += 1
            if attempts is not None and count >= attempts:
                raise ConnectionError(
                    f"unable to connect to {remote_ip}:{remote_port}"
                ) from exc
            time.sleep(_RETRY_DELAY)
            continue
        sock.sendall(sock.getsockname()[0].encode("ascii"))
        return sock


class PeerChat:
    """Exchange text over a connected socket until either side quits."""

    def __init__(self, sock):
        self.sock = sock
        self._running = threading.Event()
        self._running.set()

    @property
    def running(self) -> bool:
        return self._running.is_set()

    def receive_loop(self, out=None) -> list[str]:
        """Print received messages to ``out`` until stopped or disconnected.

        Returns the messages received, in order.
        """
        out = sys.stdout if out is None else out
        received: list[str] = []
        with selectors.DefaultSelector() as selector:
            selector.register(self.sock, selectors.EVENT_READ)
            while self._running.is_set():
                if not selector.select(_POLL_TIMEOUT):
                    continue
                try:
                    data = self.sock.recv(_RECV_SIZE)
                except OSError:
                    print("Error: recv() failed", file=sys.stderr)
                    self.stop()
                    break
                if not data:
                    print("Error: Connection closed by remote host", file=sys.stderr)
                    self.stop()
                    break
                text = data.decode("utf-8", "replace")
                received.append(text)
                out.write(f"Received: {text}\n")
                out.flush()
        return received

    def send_lines(self, lines) -> int:
        """Send each non-empty line without its newline; stop at a line
        starting with ``q``. Returns the number of lines sent."""
        sent = 0
        for line in lines:
            if not self._running.is_set():
                break
            text = line.rstrip("\n")
            if not text:
                continue
            if text.startswith("q"):
                self.stop()
                break
            self.sock.sendall(text.encode("utf-8"))
            sent += 1
        return sent

    def stop(self) -> None:
        """Ask both loops to finish."""
        self._running.clear()


def main(argv=None) -> int:
    """Usage: LOCAL_IP LOCAL_PORT REMOTE_IP REMOTE_PORT."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) < 4:
        print("input argc < 5", file=sys.stderr)
        return 0
    local_ip, local_port, remote_ip, remote_port = args[:4]
    try:
        sock = connect_with_retry(local_ip, int(local_port), remote_ip, int(remote_port))
    except OSError as exc:
        print(f"Error: Unable to bind to local address: {exc}", file=sys.stderr)
        return 1
    with sock:
        local = sock.getsockname()
        remote = sock.getpeername()
        print(f"Local IP: {local[0]} : {local[1]}")
        print()
        print("Connected to server successfully!")
        print(f"Remote IP: {remote[0]} : {remote[1]}")
        chat = PeerChat(sock)
        receiver = threading.Thread(target=chat.receive_loop, daemon=True)
        receiver.start()
        chat.send_lines(sys.stdin)
        chat.stop()
        receiver.join()
        print("exit...")
    return 0