"""
Pytest configuration and shared fixtures for claimtree tests.
"""

import pytest

from claimtree.crypto import (
    AllocationLeaf,
    HashScheme,
    RawLeaf,
    get_hash_scheme,
)
from claimtree.services import Allocation


@pytest.fixture
def scheme() -> HashScheme:
    """SHA-256 hash scheme."""
    return get_hash_scheme("sha256")


@pytest.fixture
def sorted_leaves(scheme: HashScheme) -> list[RawLeaf]:
    """Three raw leaves in ascending commitment order."""
    return sorted(RawLeaf(data, scheme=scheme) for data in (b"alpha", b"beta", b"gamma"))


@pytest.fixture
def allocation_leaves(scheme: HashScheme) -> list[AllocationLeaf]:
    """Seven address/amount leaves."""
    return [
        AllocationLeaf(f"0x{i:040x}", (i + 1) * 1_000, scheme=scheme)
        for i in range(7)
    ]


@pytest.fixture
def allocations() -> list[Allocation]:
    """Sample allocation list."""
    return [
        Allocation("0x70997970c51812dc3a010c7d01b50e0d17dc79c8", 1_000),
        Allocation("0xbd26367c4b23a6d3713a1e1a50b2d67e8748cb98", 2_500),
        Allocation("0xf39fd6e51aad88f6f4ce6ab8827279cfffb92266", 4_000),
        Allocation("0x3c44cdddb6a900fa2b585dd299e03d12fa4293bc", 750),
        Allocation("0x90f79bf6eb2c4f870365e785982e1f101e93b906", 10),
    ]
