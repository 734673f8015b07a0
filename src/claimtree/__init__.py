"""
claimtree - Merkle commitments for allocation lists

Builds a sorted, carry-up Merkle tree over leaf records, derives its root,
and produces and verifies inclusion proofs.
"""

from claimtree.crypto import (
    AllocationLeaf,
    EmptyTreeError,
    Leaf,
    Node,
    RawLeaf,
    Tree,
)

__version__ = "1.0.0"

__all__ = [
    "AllocationLeaf",
    "EmptyTreeError",
    "Leaf",
    "Node",
    "RawLeaf",
    "Tree",
]
