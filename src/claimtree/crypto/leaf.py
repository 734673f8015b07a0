"""
claimtree - Merkle Leaves

A leaf wraps application data and derives a fixed-size commitment from it.
Leaves are ordered by that commitment so a tree can arrange them
canonically regardless of input order.
"""

from abc import ABC, abstractmethod
from functools import total_ordering
from typing import Any

from claimtree.crypto.errors import LeafEncodingError
from claimtree.crypto.hashing import HashScheme, get_default_scheme

# Amounts are encoded as 256-bit unsigned big-endian integers
AMOUNT_BYTES = 32
MAX_AMOUNT = 2 ** (AMOUNT_BYTES * 8) - 1


@total_ordering
class Leaf(ABC):
    """
    Abstract base class for committed records.

    Subclasses set their own attributes, then call Leaf.__init__, which
    encodes the payload and derives the commitment once.
    """

    def __init__(self, scheme: HashScheme | None = None) -> None:
        scheme = scheme or get_default_scheme()
        object.__setattr__(self, "_scheme", scheme)
        object.__setattr__(self, "_value", scheme.hash_leaf(self.encode()))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    @abstractmethod
    def encode(self) -> bytes:
        """Encode the payload into the bytes that get committed."""

    @property
    def value(self) -> bytes:
        """Fixed-size commitment of the payload."""
        return self._value

    @property
    def scheme(self) -> HashScheme:
        """Hash scheme the commitment was derived with."""
        return self._scheme

    def compare(self, other: "Leaf") -> int:
        """
        Three-way comparison on commitment values.

        Returns:
            -1, 0 or 1 as self sorts before, equal to, or after other
        """
        if self.value < other.value:
            return -1
        if self.value > other.value:
            return 1
        return 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Leaf):
            return NotImplemented
        return self.compare(other) == 0

    def __lt__(self, other: "Leaf") -> bool:
        if not isinstance(other, Leaf):
            return NotImplemented
        return self.compare(other) < 0

    def __hash__(self) -> int:
        return hash(self.value)


class RawLeaf(Leaf):
    """Leaf whose payload is an opaque byte string."""

    def __init__(self, data: bytes, scheme: HashScheme | None = None) -> None:
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise LeafEncodingError(
                f"Raw leaf data must be bytes, got {type(data).__name__}"
            )
        object.__setattr__(self, "data", bytes(data))
        super().__init__(scheme)

    def encode(self) -> bytes:
        return self.data

    def __repr__(self) -> str:
        return f"RawLeaf(data={self.data!r})"


class AllocationLeaf(Leaf):
    """
    Leaf for an address/amount allocation.

    Payload: utf8(address) || amount as 32-byte big-endian unsigned integer.
    The fixed-width amount suffix keeps the encoding unambiguous.

    Attributes:
        address: Recipient identifier, opaque to the tree
        amount: Allocated amount, 0 <= amount < 2**256
    """

    def __init__(
        self,
        address: str,
        amount: int,
        scheme: HashScheme | None = None,
    ) -> None:
        if not isinstance(address, str) or not address:
            raise LeafEncodingError("Allocation address must be a non-empty string")
        # bool is an int subclass but never a meaningful amount
        if isinstance(amount, bool) or not isinstance(amount, int):
            raise LeafEncodingError(
                f"Allocation amount must be an integer, got {type(amount).__name__}"
            )
        if amount < 0 or amount > MAX_AMOUNT:
            raise LeafEncodingError(f"Allocation amount out of range: {amount}")

        object.__setattr__(self, "address", address)
        object.__setattr__(self, "amount", amount)
        super().__init__(scheme)

    def encode(self) -> bytes:
        try:
            address = self.address.encode("utf-8")
        except UnicodeEncodeError as e:
            raise LeafEncodingError(f"Address is not valid UTF-8: {self.address!r}") from e
        return address + self.amount.to_bytes(AMOUNT_BYTES, "big")

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {"address": self.address, "amount": self.amount}

    def __repr__(self) -> str:
        return f"AllocationLeaf(address={self.address!r}, amount={self.amount})"
