"""
claimtree - Services

Distribution building and claim verification on top of the Merkle core.
"""

from claimtree.services.distribution import (
    Allocation,
    Claim,
    Distribution,
    DistributionError,
    build_distribution,
    verify_claim,
)

__all__ = [
    "Allocation",
    "Claim",
    "Distribution",
    "DistributionError",
    "build_distribution",
    "verify_claim",
]
