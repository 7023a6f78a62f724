"""Hugepage discovery: size strings, /proc/mounts and sysfs counters."""

from __future__ import annotations

import logging
import string

__all__ = [
    "HugepageError",
    "str_to_size",
    "strsplit",
    "parse_sysfs_value",
    "default_hugepage_size",
    "hugepage_dir",
    "free_hugepages",
]

log = logging.getLogger(__name__)

_MAX_U64 = (1 << 64) - 1
_MAX_U32 = 0xFFFFFFFF
_C_SPACE = " \t\n\v\f\r"
_SUFFIX_SHIFT = {"g": 30, "m": 20, "k": 10}

_HUGEPAGESZ_KEY = "Hugepagesize:"
_HUGETLBFS = "hugetlbfs"
_PAGESIZE_OPT = "pagesize="


class HugepageError(Exception):
    """Raised when hugepage information cannot be read or parsed."""


def _strtoull(text: str, start: int = 0) -> tuple[int, int, bool]:
    """Parse an unsigned integer with automatic base, like ``strtoull(s, &end, 0)``.

    Returns ``(value, end, overflow)``. When no digits are found the value is
    0 and ``end`` equals ``start``.
    """
    i = start
    n = len(text)
    while i < n and text[i] in _C_SPACE:
        i += 1
    negative = False
    if i < n and text[i] in "+-":
        negative = text[i] == "-"
        i += 1
    base = 10
    if text.startswith(("0x", "0X"), i) and i + 2 < n and text[i + 2] in string.hexdigits:
        base = 16
        i += 2
    elif i < n and text[i] == "0":
        base = 8
    valid = string.hexdigits if base == 16 else string.digits[:base]
    digits_start = i
    value = 0
    while i < n and text[i] in valid:
        value = value * base + int(text[i], base)
        i += 1
    if i == digits_start:
        return 0, start, False
    if value > _MAX_U64:
        return _MAX_U64, i, True
    if negative:
        value = (-value) & _MAX_U64
    return value, i, False


def str_to_size(text: str) -> int:
    """Convert a size such as ``"2048 kB"`` or ``"1G"`` to bytes; 0 on error."""
    i = 0
    while i < len(text) and text[i] in _C_SPACE:
        i += 1
    if text[i:i + 1] == "-":
        return 0
    value, end, overflow = _strtoull(text, i)
    if overflow:
        return 0
    if text[end:end + 1] == " ":
        end += 1
    shift = _SUFFIX_SHIFT.get(text[end:end + 1].lower(), 0)
    return (value << shift) & _MAX_U64


def strsplit(text: str, maxtokens: int, delim: str) -> list[str]:
    """Split ``text`` on ``delim`` into at most ``maxtokens`` tokens.

    Runs of delimiters are collapsed, splitting stops at a NUL character, and
    the last token takes the rest of the string once ``maxtokens`` is reached.
    """
    text = text.split("\0", 1)[0]
    spans: list[list[int | None]] = []
    at_token_start = True
    for i, ch in enumerate(text):
        if len(spans) >= maxtokens:
            break
        if at_token_start:
            if ch == delim:
                continue
            at_token_start = False
            spans.append([i, None])
        if ch == delim:
            spans[-1][1] = i
            at_token_start = True
    return [text[start:end] for start, end in spans]


def parse_sysfs_value(path) -> int:
    """Read the unsigned integer on the first line of a sysfs file."""
    try:
        with open(path, encoding="latin-1", newline="") as f:
            line = f.readline()
    except OSError as exc:
        raise HugepageError(f"cannot open sysfs value {path}") from exc
    if not line:
        raise HugepageError(f"cannot read sysfs value {path}")
    value, end, _ = _strtoull(line)
    if end >= len(line) or line[end] != "\n":
        raise HugepageError(f"cannot parse sysfs value {path}")
    return value


def default_hugepage_size(meminfo_path="/proc/meminfo") -> int:
    """Return the default hugepage size in bytes as reported by meminfo."""
    size = 0
    try:
        with open(meminfo_path, encoding="latin-1") as f:
            for line in f:
                if line.startswith(_HUGEPAGESZ_KEY):
                    size = str_to_size(line[len(_HUGEPAGESZ_KEY):])
                    break
    except OSError as exc:
        raise HugepageError(f"Cannot open {meminfo_path}") from exc
    if size == 0:
        raise HugepageError(f"Cannot get default hugepage size from {meminfo_path}")
    return size


def hugepage_dir(hugepage_size, mounts_path="/proc/mounts", meminfo_path="/proc/meminfo"):
    """Return the hugetlbfs mount point serving ``hugepage_size``, or None."""
    default_size = default_hugepage_size(meminfo_path)
    try:
        f = open(mounts_path, encoding="latin-1")
    except OSError as exc:
        raise HugepageError(f"Cannot open {mounts_path}") from exc
    with f:
        for line in f:
            fields = strsplit(line, 4, " ")
            if len(fields) != 4:
                raise HugepageError(f"Error parsing {mounts_path}")
            _, mount_point, fs_type, options = fields
            if not fs_type.startswith(_HUGETLBFS):
                continue
            pos = options.find(_PAGESIZE_OPT)
            if pos < 0:
                if hugepage_size == default_size:
                    return mount_point
            elif str_to_size(options[pos + len(_PAGESIZE_OPT):]) == hugepage_size:
                return mount_point
    return None


def free_hugepages(subdir, sysfs_root="/sys/kernel/mm/hugepages") -> int:
    """Return free minus reserved hugepages for ``subdir``; 0 if unreadable."""
    base = f"{sysfs_root}/{subdir}"
    try:
        reserved = parse_sysfs_value(f"{base}/resv_hugepages")
        free = parse_sysfs_value(f"{base}/free_hugepages")
    except HugepageError as exc:
        log.warning("%s", exc)
        return 0
    if free == 0:
        log.info("No free hugepages reported in %s", subdir)
    if free >= reserved:
        free -= reserved
    else:
        free = 0
    return min(free, _MAX_U32)