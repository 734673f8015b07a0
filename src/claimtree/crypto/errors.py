"""
claimtree - Merkle Error Types
"""


class MerkleError(Exception):
    """Base exception for Merkle tree errors."""

    pass


class EmptyTreeError(MerkleError):
    """Root or proof requested from a tree without leaves."""

    pass


class LeafEncodingError(MerkleError, ValueError):
    """Leaf payload cannot be encoded into a commitment."""

    pass


class HashSchemeError(MerkleError, ValueError):
    """Hash algorithm is unknown, unusable, or mixed within one tree."""

    pass


class ProofFormatError(MerkleError, ValueError):
    """Encoded proof cannot be decoded into nodes."""

    pass
