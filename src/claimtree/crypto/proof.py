"""
claimtree - Proof Encoding

Hex transport form of proofs: ["<hex>", "<hex>", ...], bottom-up.
"""

from collections.abc import Sequence

from claimtree.crypto.errors import ProofFormatError
from claimtree.crypto.hashing import HashScheme
from claimtree.crypto.node import Node


def proof_to_hex(proof: Sequence[Node], prefix: str = "") -> list[str]:
    """
    Serialize a proof to hex strings.

    Args:
        proof: Sibling nodes, bottom-up
        prefix: Optional prefix for every entry (e.g. "0x")

    Returns:
        Hex-encoded node values
    """
    return [prefix + node.hex() for node in proof]


def proof_from_hex(items: Sequence[str], scheme: HashScheme | None = None) -> list[Node]:
    """
    Deserialize a proof from hex strings.

    Args:
        items: Hex-encoded node values, optionally 0x-prefixed
        scheme: Hash scheme of the tree; defaults to the configured scheme

    Returns:
        Sibling nodes, bottom-up

    Raises:
        ProofFormatError: If items is not a list, or an entry is not a string of
            valid hex of the right size
    """
    if not isinstance(items, (list, tuple)):
        raise ProofFormatError(f"Proof must be a list of hex strings, got {type(items).__name__}")

    nodes = []
    for item in items:
        if not isinstance(item, str):
            raise ProofFormatError(f"Proof entry must be a hex string, got {type(item).__name__}")
        nodes.append(Node.from_hex(item, scheme=scheme))
    return nodes
