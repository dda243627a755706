"""Reference driver that runs collectors sequentially or over partitions."""

from foldkit.engine.reduce import collect, collect_partitioned, partition

__all__ = ["collect", "collect_partitioned", "partition"]
