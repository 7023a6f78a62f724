# syslab

A collection of small, self-contained systems programming building blocks,
written in plain Python with no third-party dependencies.

## What is inside

| Module | What it gives you |
| --- | --- |
| `syslab.ring` | `Ring`: a fixed-size FIFO ring of object references with bulk and burst enqueue/dequeue, power-of-two sizing and a usable capacity of `size - 1`; `RingFull` and `RingEmpty` errors |
| `syslab.ringcore` | `RingState`, `HeadTail`, `RingFlag`, `QueueBehavior`, `memsize`, `align_ceil`, `is_power_of_two`: the head/tail index arithmetic behind the ring, with 32-bit wrap-around |
| `syslab.mempool` | `MemPool`: a pool of fixed-size blocks handed out as writable memoryviews, with a LIFO free list; `PoolExhausted` when no blocks are left |
| `syslab.fifo` | `FifoList`: a minimal singly linked FIFO list |
| `syslab.queues` | `Node`, `ListHead`, `SListHead`, `STailQHead`, `TailQHead`, `CircleQHead`: intrusive list and queue families |
| `syslab.bintree` | `BinarySearchTree` and `TreeNode`, with pre-, in-, post- and level-order traversals |
| `syslab.rbtree` | `RBTree`, `RBNode`, `Color`: a red-black tree with insert, search, delete, minimum, maximum, successor and in-order traversal |
| `syslab.pcap` | `read_pcap`, `parse_tcp_flow`, `format_flow`, byte-swap helpers and `ip_to_str`: read classic pcap files and show TCP endpoints with sequence and acknowledgement numbers |
| `syslab.hugepages` | `str_to_size`, `strsplit`, `parse_sysfs_value`, `default_hugepage_size`, `hugepage_dir`, `free_hugepages`: discover Linux hugepage settings from `/proc` and `/sys`; `HugepageError` on failure |
| `syslab.netevent` | `NetEventServer`: a TCP server that dispatches connect, data and disconnect events to an `EventHandler` on a background thread; `LoggingHandler` prints them |
| `syslab.echo` | `EchoServer`: a single-threaded, selector-driven TCP echo server |
| `syslab.peer` | `PeerChat` and `connect_with_retry`: a line-based TCP chat between two peers |
| `syslab.filebump` | `bump_file`: create a file with a greeting, or advance the leading digit of an existing one |

## Installation

```
pip install .
```

For running the test suite:

```
pip install ".[test]"
pytest
```

## Library examples

A ring of 8 slots holds up to 7 objects:

```python
from syslab.ring import Ring, RingEmpty

ring = Ring(8)
ring.enqueue_burst([1, 2, 3])       # returns how many went in: 3
print(ring.count(), ring.free_count())  # 3 4
print(ring.dequeue_burst(3))        # [1, 2, 3]
print(ring.dump())

try:
    ring.dequeue()
except RingEmpty:
    print("empty")
```

`enqueue_bulk` and `dequeue_bulk` move all requested items or none and raise
`RingFull` / `RingEmpty` otherwise; the `_burst` variants move as many as
they can. Pass `RingFlag.SP_ENQ` and/or `RingFlag.SC_DEQ` from
`syslab.ringcore` to select single-producer or single-consumer mode.

A fixed-block memory pool:

```python
from syslab.mempool import MemPool, PoolExhausted

pool = MemPool(1024, 16)
block = pool.alloc()        # a 16-byte writable memoryview
block[:5] = b"hello"
pool.free(block)
print(pool.free_count())    # 1024
pool.close()
```

Intrusive queues:

```python
from syslab.queues import ListHead, Node

head = ListHead()
for i in range(3):
    head.insert_head(Node(i + 1))
print([node.value for node in head])   # [3, 2, 1]
```

Trees:

```python
from syslab.rbtree import RBTree
from syslab.bintree import BinarySearchTree

rb = RBTree()
for key in (24, 25, 13, 35, 23):
    rb.insert(key)
print(len(rb), 13 in rb)     # 5 True
print(rb.traversal())        # [(key, Color), ...] in key order

bst = BinarySearchTree()
for key, value in ((50, "A"), (30, "B"), (80, "C")):
    bst.insert(key, value)
print(bst.inorder())         # ['B', 'A', 'C']
```

Reading a capture:

```python
from syslab.pcap import read_pcap, parse_tcp_flow, format_flow

with open("capture.pcap", "rb") as f:
    header, records = read_pcap(f)
for record in records:
    flow = parse_tcp_flow(record.data)
    if flow is not None:
        print(format_flow(flow))   # [src:port]->[dst:port] [seq|ack]
```

Hugepage discovery on Linux:

```python
from syslab.hugepages import str_to_size, hugepage_dir

print(str_to_size("2048 kB"))        # 2097152
print(hugepage_dir(2 * 1024 * 1024))  # mount point, or None
```

A custom event handler:

```python
from syslab.netevent import EventHandler, NetEventServer

class Echo(EventHandler):
    def on_connected(self, info): pass
    def on_disconnected(self, info): pass
    def on_recv_data(self, info):
        server.send_data(info.handle, info.buffer.content())
        return info.buffer.length   # bytes consumed

server = NetEventServer(Echo())
server.bind("127.0.0.1", 0)
server.start()
# ...
server.close()
```

## Command-line tools

Each tool is installed as a script:

```
syslab-ring                                  # ring enqueue/dequeue demonstration
syslab-bintree                               # binary search tree traversals
syslab-rbtree                                # red-black tree insert and delete walk-through
syslab-pcap [FILE]                           # TCP flows in a capture (default ttt.pcap)
syslab-filebump [FILE]                       # advance the digit in a file (default example.txt)
syslab-echo 127.0.0.1 9000                   # TCP echo server on the given address
syslab-netevent 127.0.0.1 9000               # event server; runs for fifteen seconds
syslab-peer 127.0.0.1 9001 127.0.0.1 9000    # chat: local ip, local port, remote ip, remote port
```

`syslab-filebump` exits with status 1 when it had to create the file.
`syslab-peer` keeps retrying until the remote side accepts, then sends its
local IP address; type a line to send it to the other side, and a line
starting with `q` ends the session.

## What it does not do

syslab has no thread pool or task scheduler; use `concurrent.futures` from
the standard library for that. The servers are demonstrations built on
`selectors`: they have no TLS, no protocol framing and no configuration
beyond an address and port.