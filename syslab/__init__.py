"""Systems programming building blocks: a ring, a memory pool, queues, trees, pcap reading, hugepage discovery and small servers."""

__version__ = "0.1.0"