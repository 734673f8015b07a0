"""
claimtree - Tree Metrics

Prometheus metrics for Merkle tree operations.

Metrics Categories:
- Tree building
- Proof generation
- Proof verification
- Distribution building
"""

from prometheus_client import Counter, Histogram

import structlog

from claimtree.core.config import settings

logger = structlog.get_logger(__name__)


class TreeMetrics:
    """
    Centralized metrics for Merkle tree operations.

    Recording methods are no-ops when METRICS_ENABLED is false.
    """

    def __init__(self) -> None:
        """Initialize all tree metrics."""
        self._init_build_metrics()
        self._init_proof_metrics()
        self._init_distribution_metrics()

    def _init_build_metrics(self) -> None:
        """Initialize Merkle tree build metrics."""
        self.build_duration = Histogram(
            "claimtree_build_duration_seconds",
            "Merkle tree level reduction time",
            buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0],
        )

        self.tree_size = Histogram(
            "claimtree_tree_size",
            "Number of leaves in Merkle tree",
            buckets=[1, 10, 50, 100, 500, 1000, 5000, 10000, 50000],
        )

    def _init_proof_metrics(self) -> None:
        """Initialize proof metrics."""
        self.proof_duration = Histogram(
            "claimtree_proof_duration_seconds",
            "Merkle proof generation time",
            buckets=[0.0001, 0.0005, 0.001, 0.005, 0.01],
        )

        self.proofs_generated = Counter(
            "claimtree_proofs_generated_total",
            "Merkle proofs generated",
        )

        self.verifications = Counter(
            "claimtree_verifications_total",
            "Merkle proof verifications",
            ["result"],
        )

    def _init_distribution_metrics(self) -> None:
        """Initialize distribution metrics."""
        self.distributions_built = Counter(
            "claimtree_distributions_built_total",
            "Allocation distributions committed",
        )

    # Convenience methods

    def record_build(self, duration: float, tree_size: int) -> None:
        """Record Merkle tree build."""
        if not settings.METRICS_ENABLED:
            return
        self.build_duration.observe(duration)
        self.tree_size.observe(tree_size)

    def record_proof(self, duration: float) -> None:
        """Record proof generation."""
        if not settings.METRICS_ENABLED:
            return
        self.proofs_generated.inc()
        self.proof_duration.observe(duration)

    def record_verification(self, valid: bool) -> None:
        """Record Merkle proof verification."""
        if not settings.METRICS_ENABLED:
            return
        result = "valid" if valid else "invalid"
        self.verifications.labels(result=result).inc()

    def record_distribution(self) -> None:
        """Record a built distribution."""
        if not settings.METRICS_ENABLED:
            return
        self.distributions_built.inc()


# Singleton instance
_tree_metrics: TreeMetrics | None = None


def get_tree_metrics() -> TreeMetrics:
    """Get global tree metrics instance."""
    global _tree_metrics
    if _tree_metrics is None:
        _tree_metrics = TreeMetrics()
        logger.debug("Tree metrics registered")
    return _tree_metrics
