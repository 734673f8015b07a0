"""
claimtree - Cryptographic Core

Provides leaves, nodes, Merkle tree construction, proof generation,
and verification.
"""

from claimtree.crypto.errors import (
    EmptyTreeError,
    HashSchemeError,
    LeafEncodingError,
    MerkleError,
    ProofFormatError,
)
from claimtree.crypto.hashing import HashScheme, get_default_scheme, get_hash_scheme
from claimtree.crypto.leaf import AllocationLeaf, Leaf, RawLeaf
from claimtree.crypto.node import Node
from claimtree.crypto.proof import proof_from_hex, proof_to_hex
from claimtree.crypto.tree import (
    Tree,
    compute_root_from_proof,
    verify_proof_against_root,
)

__all__ = [
    "AllocationLeaf",
    "EmptyTreeError",
    "HashScheme",
    "HashSchemeError",
    "Leaf",
    "LeafEncodingError",
    "MerkleError",
    "Node",
    "ProofFormatError",
    "RawLeaf",
    "Tree",
    "compute_root_from_proof",
    "get_default_scheme",
    "get_hash_scheme",
    "proof_from_hex",
    "proof_to_hex",
    "verify_proof_against_root",
]
