"""
claimtree - Allocation Distribution

Commits an allocation list to a Merkle root and hands every recipient a
claim: their allocation plus the proof that it belongs to the root.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

import structlog

from claimtree.crypto.errors import EmptyTreeError, MerkleError
from claimtree.crypto.hashing import HashScheme, get_default_scheme
from claimtree.crypto.leaf import AllocationLeaf
from claimtree.crypto.node import Node
from claimtree.crypto.proof import proof_from_hex, proof_to_hex
from claimtree.crypto.tree import Tree, verify_proof_against_root
from claimtree.metrics import get_tree_metrics

logger = structlog.get_logger(__name__)


class DistributionError(MerkleError):
    """Allocation list cannot be turned into a distribution."""

    pass


@dataclass(frozen=True)
class Allocation:
    """Amount allocated to one address."""

    address: str
    amount: int

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {"address": self.address, "amount": self.amount}


@dataclass
class Claim:
    """
    Allocation with its inclusion proof.

    Attributes:
        address: Recipient address
        amount: Allocated amount
        proof: Hex-encoded sibling nodes, bottom-up
    """

    address: str
    amount: int
    proof: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "address": self.address,
            "amount": self.amount,
            "proof": list(self.proof),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Claim":
        """Deserialize from dictionary."""
        return cls(
            address=data["address"],
            amount=data["amount"],
            proof=list(data.get("proof") or []),
        )


@dataclass
class Distribution:
    """Committed allocation list."""

    tree: Tree
    claims: dict[str, Claim]

    @property
    def root(self) -> str:
        """Hex-encoded Merkle root."""
        return self.tree.root.hex()

    @property
    def recipient_count(self) -> int:
        return len(self.claims)

    @property
    def total_amount(self) -> int:
        return sum(claim.amount for claim in self.claims.values())

    def claim_for(self, address: str) -> Claim | None:
        """Get the claim for an address, if it has one."""
        return self.claims.get(address)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for publishing."""
        return {
            "root": self.root,
            "hash_algorithm": self.tree.scheme.name,
            "recipient_count": self.recipient_count,
            "total_amount": self.total_amount,
            "claims": {address: claim.to_dict() for address, claim in self.claims.items()},
        }


def build_distribution(
    allocations: Iterable[Allocation],
    scheme: HashScheme | None = None,
) -> Distribution:
    """
    Commit an allocation list.

    Args:
        allocations: Allocations in any order
        scheme: Hash scheme; defaults to the configured scheme

    Returns:
        Distribution with root and one claim per address

    Raises:
        EmptyTreeError: If allocations is empty
        DistributionError: If an address appears more than once
        LeafEncodingError: If an allocation cannot be encoded
    """
    scheme = scheme or get_default_scheme()
    allocations = list(allocations)
    if not allocations:
        raise EmptyTreeError("Cannot build distribution from empty allocations")

    leaves: dict[str, AllocationLeaf] = {}
    for allocation in allocations:
        if allocation.address in leaves:
            raise DistributionError(f"Duplicate allocation for {allocation.address}")
        leaves[allocation.address] = AllocationLeaf(
            allocation.address,
            allocation.amount,
            scheme=scheme,
        )

    tree = Tree(leaves.values())
    claims = {
        address: Claim(
            address=address,
            amount=leaf.amount,
            proof=proof_to_hex(tree.prove(leaf)),
        )
        for address, leaf in leaves.items()
    }

    distribution = Distribution(tree=tree, claims=claims)
    get_tree_metrics().record_distribution()
    logger.info(
        "Built distribution",
        recipient_count=distribution.recipient_count,
        total_amount=distribution.total_amount,
        root=distribution.root[:16] + "...",
    )

    return distribution


def verify_claim(
    claim: Claim,
    root: str,
    scheme: HashScheme | None = None,
) -> bool:
    """
    Verify a claim against a published root.

    Args:
        claim: Claim to check
        root: Hex-encoded Merkle root
        scheme: Hash scheme of the distribution; defaults to the configured scheme

    Returns:
        True if the claim belongs to the root. Claims that cannot be
        decoded or encoded are invalid, not errors.
    """
    scheme = scheme or get_default_scheme()
    try:
        leaf = AllocationLeaf(claim.address, claim.amount, scheme=scheme)
        proof = proof_from_hex(claim.proof, scheme=scheme)
        expected = Node.from_hex(root, scheme=scheme)
    except MerkleError as e:
        logger.debug("Claim rejected", address=claim.address, error=str(e))
        get_tree_metrics().record_verification(False)
        return False

    valid = verify_proof_against_root(leaf, proof, expected)
    get_tree_metrics().record_verification(valid)
    return valid
