"""
augtree - augmented interval tree with stabbing queries

This package provides:
- The tree itself: nodes, insertion, stabbing query, height (interval_tree.py)
- A lock-guarded wrapper for shared trees (synchronized.py)
- Calendar feeds as interval sources (ics_source.py, timezone_utils.py)
- Configuration parsing for the query tool (config.py)
"""

from .interval_tree import (
    AugTreeNode, IntervalTree,
    insert, query, height, traverse, verify_integrity,
)
from .synchronized import SynchronizedIntervalTree

__all__ = [
    'AugTreeNode',
    'IntervalTree',
    'SynchronizedIntervalTree',
    'insert',
    'query',
    'height',
    'traverse',
    'verify_integrity',
]
