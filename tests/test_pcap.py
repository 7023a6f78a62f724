import io
import struct

from syslab.pcap import (
    format_flow,
    ip_to_str,
    main,
    parse_tcp_flow,
    read_pcap,
    swap16,
    swap32,
    swap64,
)

ETH_IPV4 = b"\x02" * 6 + b"\x04" * 6 + b"\x08\x00"


def make_frame(proto=6, ihl=5, src=(10, 0, 0, 1), dst=(10, 0, 0, 2), sport=1234, dport=80, seq=100, ack=200):
    ip = bytes([0x40 | ihl, 0, 0, 40, 0, 0, 0, 0, 64, proto, 0, 0]) + bytes(src) + bytes(dst)
    ip += b"\x00" * ((ihl - 5) * 4)
    tcp = struct.pack(">HHIIBBHHH", sport, dport, seq, ack, 0x50, 0x02, 1024, 0, 0)
    return ETH_IPV4 + ip + tcp


def make_pcap(frames):
    out = struct.pack("<6I", 0xA1B2C3D4, 0x00040002, 0, 0, 65535, 1)
    for i, frame in enumerate(frames):
        out += struct.pack("<4I", i, 0, len(frame), len(frame)) + frame
    return out


def test_swap16_and_swap32():
    assert swap16(0x1234) == 0x3412
    assert swap32(0x12345678) == 0x78563412
    assert swap16(swap16(0xBEEF)) == 0xBEEF


def test_swap64_is_involution_and_moves_low_byte_up():
    x = 0x0123456789ABCDEF
    assert swap64(swap64(x)) == x
    assert swap64(0xAB) >> 56 == 0xAB


def test_ip_to_str_uses_memory_byte_order():
    ip = int.from_bytes(bytes([192, 168, 1, 10]), "little")
    assert ip_to_str(ip).split(".") == ["192", "168", "1", "10"]


def test_parse_tcp_flow_fields():
    flow = parse_tcp_flow(make_frame())
    assert (flow.src_port, flow.dst_port, flow.seq, flow.ack) == (1234, 80, 100, 200)
    assert flow.src_ip.split(".") == ["10", "0", "0", "1"]
    assert format_flow(flow) == "[10.0.0.1:1234]->[10.0.0.2:80] [100|200]"


def test_parse_tcp_flow_honours_ip_header_length():
    flow = parse_tcp_flow(make_frame(ihl=6, sport=5555, dport=6666))
    assert (flow.src_port, flow.dst_port) == (5555, 6666)


def test_parse_tcp_flow_ignores_non_tcp():
    assert parse_tcp_flow(make_frame(proto=17)) is None
    arp = b"\x02" * 6 + b"\x04" * 6 + b"\x08\x06" + make_frame()[14:]
    assert parse_tcp_flow(arp) is None
    assert parse_tcp_flow(b"\x00" * 10) is None


def test_read_pcap_round_trip():
    frames = [make_frame(), make_frame(proto=17)]
    header, records = read_pcap(io.BytesIO(make_pcap(frames) + b"\x01\x02"))
    assert header.magic == 0xA1B2C3D4
    assert header.snaplen == 65535
    assert [r.data for r in records] == frames
    assert [r.caplen for r in records] == [len(f) for f in frames]
    assert [r.timestamp_high for r in records] == [0, 1]


def test_main_prints_flows(tmp_path, capsys):
    path = tmp_path / "cap.pcap"
    path.write_bytes(make_pcap([make_frame(sport=4321, dport=22)]))
    assert main([str(path)]) == 0
    out = capsys.readouterr().out
    assert format_flow(parse_tcp_flow(make_frame(sport=4321, dport=22))) in out
    assert f"size[{path.stat().st_size}]" in out


def test_main_missing_file(tmp_path, capsys):
    path = tmp_path / "none.pcap"
    assert main([str(path)]) == 0
    assert "open failed" in capsys.readouterr().out