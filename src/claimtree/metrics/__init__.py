"""
claimtree - Metrics Module

Prometheus metrics for Merkle tree construction, proofs and verification.
"""

from claimtree.metrics.tree_metrics import (
    TreeMetrics,
    get_tree_metrics,
)

__all__ = [
    "TreeMetrics",
    "get_tree_metrics",
]
