"""Read classic pcap captures and print the TCP flows they carry."""

from __future__ import annotations

import os
import struct
import sys
from dataclasses import dataclass

__all__ = [
    "PcapHeader",
    "PcapRecord",
    "TcpFlow",
    "swap16",
    "swap32",
    "swap64",
    "ip_to_str",
    "read_pcap",
    "parse_tcp_flow",
    "format_flow",
    "main",
]

_FILE_HEADER = struct.Struct("<6I")
_RECORD_HEADER = struct.Struct("<4I")
_TCP_PREFIX = struct.Struct(">HHII")
_ETHER_LEN = 14
_IPV4_MIN_LEN = 20
_ETHER_TYPE_IPV4 = 0x0800
_PROTO_TCP = 6


def swap16(x: int) -> int:
    """Reverse the byte order of a 16-bit value."""
    return ((x & 0xFF00) >> 8) | ((x & 0x00FF) << 8)


def swap32(x: int) -> int:
    """Reverse the byte order of a 32-bit value."""
    return (
        ((x & 0xFF000000) >> 24)
        | ((x & 0x00FF0000) >> 8)
        | ((x & 0x0000FF00) << 8)
        | ((x & 0x000000FF) << 24)
    )


def swap64(x: int) -> int:
    """Reverse the byte order of a 64-bit value."""
    return int.from_bytes((x & 0xFFFFFFFFFFFFFFFF).to_bytes(8, "little"), "big")


def ip_to_str(ip: int) -> str:
    """Dotted form of an IPv4 address held as a little-endian 32-bit word."""
    return ".".join(str(b) for b in (ip & 0xFFFFFFFF).to_bytes(4, "little"))


@dataclass(frozen=True)
class PcapHeader:
    magic: int
    version: int
    this_zone: int
    sigfigs: int
    snaplen: int
    linktype: int


@dataclass(frozen=True)
class PcapRecord:
    timestamp_high: int
    timestamp_low: int
    caplen: int
    length: int
    data: bytes


@dataclass(frozen=True)
class TcpFlow:
    src_ip: str
    src_port: int
    dst_ip: str
    dst_port: int
    seq: int
    ack: int


def read_pcap(stream) -> tuple[PcapHeader, list[PcapRecord]]:
    """Read the file header and all complete record headers from ``stream``."""
    raw = stream.read()
    header = PcapHeader(*_FILE_HEADER.unpack(raw[:_FILE_HEADER.size].ljust(_FILE_HEADER.size, b"\0")))
    records = []
    pos = _FILE_HEADER.size
    while pos + _RECORD_HEADER.size <= len(raw):
        ts_high, ts_low, caplen, length = _RECORD_HEADER.unpack_from(raw, pos)
        pos += _RECORD_HEADER.size
        records.append(PcapRecord(ts_high, ts_low, caplen, length, raw[pos:pos + caplen]))
        pos += caplen
    return header, records


def parse_tcp_flow(frame: bytes) -> TcpFlow | None:
    """Extract the TCP endpoints of an Ethernet/IPv4 frame, or None."""
    if len(frame) < _ETHER_LEN + _IPV4_MIN_LEN:
        return None
    if int.from_bytes(frame[12:14], "big") != _ETHER_TYPE_IPV4:
        return None
    ip = frame[_ETHER_LEN:]
    if ip[9] != _PROTO_TCP:
        return None
    tcp_offset = _ETHER_LEN + (ip[0] & 0x0F) * 4
    if len(frame) < tcp_offset + _TCP_PREFIX.size:
        return None
    src_port, dst_port, seq, ack = _TCP_PREFIX.unpack_from(frame, tcp_offset)
    return TcpFlow(
        src_ip=ip_to_str(int.from_bytes(ip[12:16], "little")),
        src_port=src_port,
        dst_ip=ip_to_str(int.from_bytes(ip[16:20], "little")),
        dst_port=dst_port,
        seq=seq,
        ack=ack,
    )


def format_flow(flow: TcpFlow) -> str:
    """Render a flow as ``[src:port]->[dst:port] [seq|ack]``."""
    return (
        f"[{flow.src_ip}:{flow.src_port}]->[{flow.dst_ip}:{flow.dst_port}] "
        f"[{flow.seq}|{flow.ack}]"
    )


def main(argv=None) -> int:
    """Print the TCP flows found in a capture file (default ``ttt.pcap``)."""
    args = sys.argv[1:] if argv is None else list(argv)
    path = args[0] if args else "ttt.pcap"
    try:
        f = open(path, "rb")
    except OSError:
        print(f"file[{path}] open failed")
        return 0
    with f:
        print(f"file[{path}] size[{os.fstat(f.fileno()).st_size}]")
        print("******************************")
        _, records = read_pcap(f)
    for record in records:
        flow = parse_tcp_flow(record.data)
        if flow is not None:
            print(format_flow(flow))
    return 0