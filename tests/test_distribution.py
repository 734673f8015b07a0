"""
Unit tests for the allocation distribution service.
"""

import pytest

from claimtree.crypto import (
    AllocationLeaf,
    EmptyTreeError,
    HashScheme,
    LeafEncodingError,
    get_hash_scheme,
    proof_to_hex,
)
from claimtree.services import (
    Allocation,
    Claim,
    DistributionError,
    build_distribution,
    verify_claim,
)


class TestBuildDistribution:
    """Tests for committing allocation lists."""

    def test_build(self, allocations: list[Allocation], scheme: HashScheme) -> None:
        """Test building a distribution."""
        distribution = build_distribution(allocations, scheme=scheme)

        assert distribution.recipient_count == 5
        assert distribution.total_amount == 8_260
        assert len(distribution.root) == 64
        assert distribution.tree.leaf_count == 5

    def test_claims_match_tree(self, allocations: list[Allocation], scheme: HashScheme) -> None:
        """Test that every claim verifies against the tree itself."""
        distribution = build_distribution(allocations, scheme=scheme)

        for allocation in allocations:
            claim = distribution.claim_for(allocation.address)
            assert claim is not None
            assert claim.amount == allocation.amount

            leaf = AllocationLeaf(claim.address, claim.amount, scheme=scheme)
            assert claim.proof == proof_to_hex(distribution.tree.prove(leaf))
            assert verify_claim(claim, distribution.root, scheme=scheme)

    def test_root_independent_of_order(self, allocations: list[Allocation], scheme: HashScheme) -> None:
        """Test that allocation order does not change the root."""
        forward = build_distribution(allocations, scheme=scheme)
        backward = build_distribution(reversed(allocations), scheme=scheme)

        assert forward.root == backward.root

    def test_single_allocation(self, scheme: HashScheme) -> None:
        """Test that a lone allocation is its own root."""
        distribution = build_distribution([Allocation("0xabc", 10)], scheme=scheme)
        claim = distribution.claim_for("0xabc")

        assert claim.proof == []
        assert distribution.root == AllocationLeaf("0xabc", 10, scheme=scheme).value.hex()
        assert verify_claim(claim, distribution.root, scheme=scheme)

    def test_empty_allocations_raise(self) -> None:
        """Test that an empty allocation list is rejected."""
        with pytest.raises(EmptyTreeError):
            build_distribution([])

    def test_duplicate_address_raises(self) -> None:
        """Test that an address can only be allocated once."""
        with pytest.raises(DistributionError, match="Duplicate"):
            build_distribution([Allocation("0xabc", 1), Allocation("0xabc", 2)])

    def test_malformed_allocation_raises(self) -> None:
        """Test that encoding errors propagate."""
        with pytest.raises(LeafEncodingError):
            build_distribution([Allocation("0xabc", -1)])

    def test_unknown_address(self, allocations: list[Allocation]) -> None:
        """Test lookup of an address without a claim."""
        distribution = build_distribution(allocations)

        assert distribution.claim_for("0xdead") is None

    def test_to_dict(self, allocations: list[Allocation], scheme: HashScheme) -> None:
        """Test distribution serialization."""
        distribution = build_distribution(allocations, scheme=scheme)
        data = distribution.to_dict()

        assert data["root"] == distribution.root
        assert data["hash_algorithm"] == "sha256"
        assert data["recipient_count"] == 5
        assert data["total_amount"] == 8_260
        assert set(data["claims"]) == {a.address for a in allocations}


class TestVerifyClaim:
    """Tests for stateless claim verification."""

    def test_claim_round_trip_dict(self, allocations: list[Allocation], scheme: HashScheme) -> None:
        """Test verifying a claim restored from its dictionary form."""
        distribution = build_distribution(allocations, scheme=scheme)
        data = distribution.claim_for(allocations[2].address).to_dict()

        restored = Claim.from_dict(data)

        assert restored == distribution.claim_for(allocations[2].address)
        assert verify_claim(restored, distribution.root, scheme=scheme)
        assert verify_claim(restored, "0x" + distribution.root, scheme=scheme)

    def test_inflated_amount_fails(self, allocations: list[Allocation], scheme: HashScheme) -> None:
        """Test that a claim for more than allocated fails."""
        distribution = build_distribution(allocations, scheme=scheme)
        claim = distribution.claim_for(allocations[0].address)

        inflated = Claim(claim.address, claim.amount + 1, claim.proof)
        assert not verify_claim(inflated, distribution.root, scheme=scheme)

    def test_borrowed_proof_fails(self, allocations: list[Allocation], scheme: HashScheme) -> None:
        """Test that one recipient's proof does not work for another."""
        distribution = build_distribution(allocations, scheme=scheme)
        first = distribution.claim_for(allocations[0].address)
        second = distribution.claim_for(allocations[1].address)

        forged = Claim(second.address, second.amount, first.proof)
        assert not verify_claim(forged, distribution.root, scheme=scheme)

    def test_wrong_root_fails(self, allocations: list[Allocation], scheme: HashScheme) -> None:
        """Test verification against another root."""
        distribution = build_distribution(allocations, scheme=scheme)
        claim = distribution.claim_for(allocations[0].address)

        assert not verify_claim(claim, "00" * 32, scheme=scheme)

    @pytest.mark.parametrize("root", ["not-hex", "abcd"])
    def test_malformed_root_fails(self, allocations: list[Allocation], root: str) -> None:
        """Test that an undecodable root is invalid rather than an error."""
        distribution = build_distribution(allocations)
        claim = distribution.claim_for(allocations[0].address)

        assert not verify_claim(claim, root)

    def test_malformed_proof_fails(self, allocations: list[Allocation], scheme: HashScheme) -> None:
        """Test that an undecodable proof is invalid rather than an error."""
        distribution = build_distribution(allocations, scheme=scheme)
        claim = distribution.claim_for(allocations[0].address)

        broken = Claim(claim.address, claim.amount, ["xyz"] + claim.proof[1:])
        assert not verify_claim(broken, distribution.root, scheme=scheme)

    def test_scheme_mismatch_fails(self, allocations: list[Allocation]) -> None:
        """Test that a claim only verifies under its own hash algorithm."""
        distribution = build_distribution(allocations, scheme=get_hash_scheme("sha256"))
        claim = distribution.claim_for(allocations[0].address)

        assert not verify_claim(claim, distribution.root, scheme=get_hash_scheme("sha3_256"))

    @pytest.mark.parametrize("root", [123, None, b"\x00" * 32])
    def test_non_string_root_fails(self, allocations: list[Allocation], root: object) -> None:
        """Test that a root of the wrong type is invalid rather than an error."""
        distribution = build_distribution(allocations)
        claim = distribution.claim_for(allocations[0].address)

        assert not verify_claim(claim, root)

    @pytest.mark.parametrize("proof", [None, "ab" * 32, 42, {"0": "ab" * 32}])
    def test_non_list_proof_fails(self, allocations: list[Allocation], proof: object) -> None:
        """Test that a proof of the wrong type is invalid rather than an error."""
        distribution = build_distribution(allocations)
        claim = distribution.claim_for(allocations[0].address)

        forged = Claim(claim.address, claim.amount, proof)
        assert not verify_claim(forged, distribution.root)

    def test_from_dict_null_proof(self, scheme: HashScheme) -> None:
        """Test that a null proof in published JSON reads as an empty proof."""
        distribution = build_distribution([Allocation("0xabc", 10)], scheme=scheme)

        restored = Claim.from_dict({"address": "0xabc", "amount": 10, "proof": None})

        assert restored.proof == []
        assert verify_claim(restored, distribution.root, scheme=scheme)
