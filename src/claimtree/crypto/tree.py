"""
claimtree - Merkle Tree Implementation

Provides deterministic Merkle tree construction over a sorted leaf set,
inclusion proof generation, and verification.

Construction rules:
- Leaves are sorted ascending by commitment before any hashing, so the same
  leaf set yields the same root in any input order
- Adjacent nodes are combined left to right at every level
- For odd numbers of nodes, the last node is promoted (not duplicated)
  to the next level

A proof is the list of sibling nodes, bottom-up, for every level at which
the proved node had a partner. Promoted levels contribute no entry.
"""

import bisect
import math
import time
from collections.abc import Iterable, Sequence
from functools import cached_property, cmp_to_key

import structlog

from claimtree.crypto.errors import EmptyTreeError, HashSchemeError
from claimtree.crypto.hashing import HashScheme
from claimtree.crypto.leaf import Leaf
from claimtree.crypto.node import Node
from claimtree.metrics import get_tree_metrics

logger = structlog.get_logger(__name__)


def reduce_level(nodes: Sequence[Node]) -> list[Node]:
    """
    Build the next level of the tree.

    Args:
        nodes: Current level, left to right

    Returns:
        Parent level; a trailing unpaired node is carried up unchanged
    """
    next_level = []
    for i in range(0, len(nodes), 2):
        if i + 1 < len(nodes):
            next_level.append(nodes[i].combine(nodes[i + 1]))
        else:
            next_level.append(nodes[i])
    return next_level


def compute_root_from_proof(leaf_node: Node, proof: Sequence[Node]) -> Node:
    """
    Compute the root implied by a leaf node and its proof.

    Args:
        leaf_node: Bottom-level node of the proved leaf
        proof: Sibling nodes, bottom-up

    Returns:
        Computed root node
    """
    node = leaf_node
    for sibling in proof:
        node = node.combine(sibling)
    return node


def verify_proof_against_root(leaf: Leaf, proof: Iterable[Node], root: Node) -> bool:
    """
    Verify a proof against a known root without the tree.

    Args:
        leaf: Candidate leaf
        proof: Sibling nodes, bottom-up
        root: Published root

    Returns:
        True if the proof reconstructs the root
    """
    proof = list(proof)
    if not all(isinstance(sibling, Node) for sibling in proof):
        return False
    computed = compute_root_from_proof(Node.from_leaf(leaf), proof)
    return computed.equals(root)


class Tree:
    """
    Immutable Merkle tree over a sorted leaf set.

    The reduction levels are computed on first use and cached on the
    instance; every query reads them without mutating shared state.

    Example:
        >>> tree = Tree([RawLeaf(b"a"), RawLeaf(b"b"), RawLeaf(b"c")])
        >>> proof = tree.prove(RawLeaf(b"c"))
        >>> tree.verify(RawLeaf(b"c"), proof)
        True
    """

    def __init__(self, leaves: Iterable[Leaf]) -> None:
        """
        Sort and store the leaves.

        An empty leaf set is accepted here; root and prove reject it.

        Args:
            leaves: Leaf records in any order

        Raises:
            HashSchemeError: If leaves were built with different hash schemes
        """
        ordered = sorted(leaves, key=cmp_to_key(Leaf.compare))

        schemes = {leaf.scheme for leaf in ordered}
        if len(schemes) > 1:
            names = sorted(scheme.name for scheme in schemes)
            raise HashSchemeError(f"Leaves use mixed hash schemes: {names}")

        self._leaves: tuple[Leaf, ...] = tuple(ordered)
        self._values = [leaf.value for leaf in self._leaves]

        logger.debug("Merkle tree created", leaf_count=len(self._leaves))

    @property
    def leaves(self) -> tuple[Leaf, ...]:
        """Get all leaves in sorted order."""
        return self._leaves

    @property
    def leaf_count(self) -> int:
        """Get the number of leaves."""
        return len(self._leaves)

    @property
    def scheme(self) -> HashScheme | None:
        """Get the hash scheme shared by the leaves (None if empty)."""
        return self._leaves[0].scheme if self._leaves else None

    @property
    def depth(self) -> int:
        """Number of combination levels, ceil(log2(leaf_count))."""
        if len(self._leaves) <= 1:
            return 0
        return math.ceil(math.log2(len(self._leaves)))

    def __len__(self) -> int:
        return len(self._leaves)

    def __contains__(self, leaf: object) -> bool:
        return isinstance(leaf, Leaf) and self.index_of(leaf) is not None

    def __repr__(self) -> str:
        return f"Tree(leaf_count={len(self._leaves)})"

    def _require_leaves(self, operation: str) -> None:
        if not self._leaves:
            raise EmptyTreeError(f"Cannot {operation} from empty tree")

    @cached_property
    def levels(self) -> tuple[tuple[Node, ...], ...]:
        """
        All levels of the tree, bottom-up.

        levels[0] holds one node per sorted leaf; the last level holds the
        root alone.

        Raises:
            EmptyTreeError: If the tree has no leaves
        """
        self._require_leaves("build levels")

        start = time.perf_counter()
        current = [Node.from_leaf(leaf) for leaf in self._leaves]
        levels = [tuple(current)]

        while len(current) > 1:
            current = reduce_level(current)
            levels.append(tuple(current))

        duration = time.perf_counter() - start
        get_tree_metrics().record_build(duration, len(self._leaves))
        logger.debug(
            "Merkle levels built",
            leaf_count=len(self._leaves),
            depth=len(levels) - 1,
            root=levels[-1][0].hex()[:16] + "...",
        )

        return tuple(levels)

    @property
    def root(self) -> Node:
        """
        Get the root node.

        Raises:
            EmptyTreeError: If the tree has no leaves
        """
        self._require_leaves("generate merkle root")
        return self.levels[-1][0]

    def index_of(self, leaf: Leaf) -> int | None:
        """
        Find a leaf's position in the sorted leaf sequence.

        Args:
            leaf: Leaf to locate

        Returns:
            Index in leaves, or None if absent
        """
        index = bisect.bisect_left(self._values, leaf.value)
        if index < len(self._values) and self._values[index] == leaf.value:
            return index
        return None

    def prove(self, leaf: Leaf) -> list[Node]:
        """
        Generate the inclusion proof for a leaf.

        The proved node's index is halved at each level. An even index with
        no right neighbour is a promoted node and records nothing.

        Args:
            leaf: Leaf to prove

        Returns:
            Sibling nodes, bottom-up. Empty for a single-leaf tree, and for a
            leaf that is not in the tree.

        Raises:
            EmptyTreeError: If the tree has no leaves
        """
        self._require_leaves("find proof")
        if len(self._leaves) == 1:
            return []

        index = self.index_of(leaf)
        if index is None:
            logger.warning("Proof requested for leaf not in tree", leaf=repr(leaf))
            return []

        start = time.perf_counter()
        proof: list[Node] = []

        for level in self.levels[:-1]:
            if index % 2 == 0:
                if index + 1 < len(level):
                    proof.append(level[index + 1])
            else:
                proof.append(level[index - 1])
            index //= 2

        get_tree_metrics().record_proof(time.perf_counter() - start)
        logger.debug("Merkle proof generated", proof_length=len(proof), depth=self.depth)

        return proof

    def prove_all(self) -> list[tuple[Leaf, list[Node]]]:
        """
        Generate proofs for all leaves.

        Returns:
            (leaf, proof) pairs in sorted leaf order
        """
        return [(leaf, self.prove(leaf)) for leaf in self._leaves]

    def verify(self, leaf: Leaf, proof: Iterable[Node]) -> bool:
        """
        Verify an inclusion proof against this tree's root.

        Never raises: an empty tree or a malformed proof is simply invalid.

        Args:
            leaf: Candidate leaf
            proof: Sibling nodes, bottom-up

        Returns:
            True if the proof reconstructs the root
        """
        proof = list(proof)
        if not self._leaves:
            valid = False
        else:
            valid = verify_proof_against_root(leaf, proof, self.root)

        get_tree_metrics().record_verification(valid)
        if not valid:
            logger.debug("Merkle proof rejected", proof_length=len(proof))

        return valid
