"""Create a file with a greeting, or bump the leading digit of an existing one."""

from __future__ import annotations

import os
import sys

__all__ = ["bump_file", "main"]

_GREETING = b"1:Hello, World!"
_READ_LIMIT = 49


def bump_file(path) -> tuple[bytes, bytes]:
    """Update ``path`` in place and return ``(previous, written)``.

    An empty or missing file receives the greeting and ``previous`` is empty.
    Otherwise up to 49 leading bytes are read, their first byte is advanced
    to the next digit ('9' and non-digits wrap to '0'), and they are written
    back at the start of the file.
    """
    fd = os.open(path, os.O_RDWR | os.O_CREAT, 0o644)
    with os.fdopen(fd, "r+b", buffering=0) as f:
        data = f.read(_READ_LIMIT)
        if not data:
            f.write(_GREETING)
            return b"", _GREETING
        first = data[:1]
        if first >= b"9" or first < b"0":
            first = b"0"
        else:
            first = bytes([first[0] + 1])
        updated = first + data[1:]
        f.seek(0)
        f.write(updated)
        return data, updated


def main(argv=None) -> int:
    """Bump ``example.txt`` (or the given path); 1 when the file was new."""
    args = sys.argv[1:] if argv is None else list(argv)
    path = args[0] if args else "example.txt"
    try:
        previous, written = bump_file(path)
    except OSError as exc:
        print(f"open failed: {exc}", file=sys.stderr)
        return 1
    if not previous:
        print("file empty: ")
        print(f"file write: {written.decode('utf-8', 'replace')}")
        return 1
    print(f"Read from file: {previous.decode('utf-8', 'replace')}")
    return 0