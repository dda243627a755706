"""
foldkit: composable collectors that fold sequences into results.

A collector bundles a supplier, an accumulator, a combiner and a finisher
with characteristic flags that tell an execution engine what it may skip
or reorder.

Import patterns:
    from foldkit.contracts import Characteristic, Collector
    from foldkit.collectors import stable_order_from_container, to_file
    from foldkit.engine import collect, collect_partitioned
"""

__version__ = "0.3.0"
