"""
claimtree - Hash Schemes

A hash scheme turns leaf payloads into fixed-size commitments and combines
two commitments into their parent.

Conventions:
- Leaf commitments are hashed with a 0x00 prefix
- Internal nodes are hashed with a 0x01 prefix
- The two children of a node are sorted before hashing, so a parent does
  not depend on which side a child sits on. Proofs therefore carry no
  direction flags.
"""

import hashlib
from dataclasses import dataclass
from functools import lru_cache

from claimtree.core.config import settings
from claimtree.crypto.errors import HashSchemeError

# Prefix bytes for domain separation
LEAF_PREFIX = b"\x00"
NODE_PREFIX = b"\x01"


@dataclass(frozen=True)
class HashScheme:
    """
    Fixed-output hash function used for leaves and internal nodes.

    Attributes:
        name: hashlib algorithm name
        digest_size: Size in bytes of every commitment
    """

    name: str
    digest_size: int

    def _digest(self, *parts: bytes) -> bytes:
        hasher = hashlib.new(self.name)
        for part in parts:
            hasher.update(part)
        return hasher.digest()

    def hash_leaf(self, payload: bytes) -> bytes:
        """
        Compute the commitment of a leaf payload.

        Args:
            payload: Encoded leaf data

        Returns:
            Leaf commitment (digest_size bytes)
        """
        return self._digest(LEAF_PREFIX, payload)

    def hash_pair(self, left: bytes, right: bytes) -> bytes:
        """
        Compute the commitment of an internal node.

        Args:
            left: First child commitment
            right: Second child commitment

        Returns:
            Parent commitment (digest_size bytes)
        """
        if right < left:
            left, right = right, left
        return self._digest(NODE_PREFIX, left, right)


@lru_cache
def get_hash_scheme(name: str) -> HashScheme:
    """
    Build a hash scheme over a hashlib algorithm.

    Args:
        name: Algorithm name as understood by hashlib.new()

    Returns:
        HashScheme for the algorithm

    Raises:
        HashSchemeError: If the algorithm is unknown or has no fixed digest size
    """
    normalized = name.strip().lower()
    try:
        probe = hashlib.new(normalized)
    except (ValueError, TypeError) as e:
        raise HashSchemeError(f"Unknown hash algorithm: {name}") from e

    # shake_* report digest_size 0 and need an explicit output length
    if probe.digest_size <= 0:
        raise HashSchemeError(f"Hash algorithm {name} has no fixed digest size")

    return HashScheme(name=normalized, digest_size=probe.digest_size)


def get_default_scheme() -> HashScheme:
    """Get the hash scheme configured by HASH_ALGORITHM."""
    return get_hash_scheme(settings.HASH_ALGORITHM)
