"""
claimtree - Merkle Node

A node is a single fixed-size commitment: either a leaf's value or the
combination of two child nodes.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from claimtree.crypto.errors import ProofFormatError
from claimtree.crypto.hashing import HashScheme, get_default_scheme

if TYPE_CHECKING:
    from claimtree.crypto.leaf import Leaf


@dataclass(frozen=True)
class Node:
    """
    Immutable Merkle tree node.

    Equality and hashing consider only the value; the scheme is carried so
    that combine() knows how to hash.

    Attributes:
        value: Fixed-size commitment bytes
        scheme: Hash scheme used to combine this node with a sibling
    """

    value: bytes
    scheme: HashScheme = field(
        default_factory=get_default_scheme,
        compare=False,
        repr=False,
    )

    @classmethod
    def from_leaf(cls, leaf: "Leaf") -> "Node":
        """Create the bottom-level node for a leaf."""
        return cls(leaf.value, scheme=leaf.scheme)

    @classmethod
    def from_hex(cls, text: str, scheme: HashScheme | None = None) -> "Node":
        """
        Decode a node from its hex form.

        Args:
            text: Hex string, optionally prefixed with 0x
            scheme: Hash scheme; defaults to the configured scheme

        Returns:
            Decoded Node

        Raises:
            ProofFormatError: If text is not a hex string or has the wrong length
        """
        scheme = scheme or get_default_scheme()
        if not isinstance(text, str):
            raise ProofFormatError(f"Node must be a hex string, got {type(text).__name__}")
        if text.startswith(("0x", "0X")):
            text = text[2:]
        try:
            value = bytes.fromhex(text)
        except ValueError as e:
            raise ProofFormatError(f"Invalid node hex: {text!r}") from e

        if len(value) != scheme.digest_size:
            raise ProofFormatError(
                f"Node must be {scheme.digest_size} bytes, got {len(value)}"
            )
        return cls(value, scheme=scheme)

    def combine(self, sibling: "Node") -> "Node":
        """
        Derive the parent of this node and a sibling.

        Args:
            sibling: Right-hand node

        Returns:
            New parent Node
        """
        return Node(self.scheme.hash_pair(self.value, sibling.value), scheme=self.scheme)

    def equals(self, other: "Node") -> bool:
        """Check value equality."""
        return self.value == other.value

    def hex(self) -> str:
        """Hex-encode the node value."""
        return self.value.hex()

    def __str__(self) -> str:
        return self.hex()
