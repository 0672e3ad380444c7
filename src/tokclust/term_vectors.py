from collections import Counter
from typing import Dict, Iterable

import numpy as np


class SparseVector:
    """
    Sparse term vector: token -> nonnegative count, with a cached euclidean norm.

    The cached norm is not kept in sync automatically. Anything that changes
    ``counts`` directly must call ``renorm()`` before the vector is compared;
    ``add()`` does this itself.
    """

    __slots__ = ("counts", "norm")

    def __init__(self, tokens: Iterable[str] = ()):
        self.counts: Dict[str, int] = dict(Counter(tokens))
        self.norm = 0.0
        self.renorm()

    def renorm(self) -> None:
        """Recompute the cached euclidean norm from the current counts."""
        if not self.counts:
            self.norm = 0.0
            return
        values = np.fromiter(self.counts.values(), dtype=np.float64, count=len(self.counts))
        self.norm = float(np.sqrt(np.dot(values, values)))

    def add(self, other: "SparseVector") -> None:
        """
        Add ``other`` into this vector in place and renormalize.

        Args:
            other: Vector whose counts are added; it is left unchanged.
        """
        for token, count in other.counts.items():
            self.counts[token] = self.counts.get(token, 0) + count
        self.renorm()

    def dot(self, other: "SparseVector") -> float:
        """Inner product over the tokens both vectors share."""
        small, large = self.counts, other.counts
        if len(small) > len(large):
            small, large = large, small
        total = 0
        for token, count in small.items():
            total += count * large.get(token, 0)
        return float(total)

    def sim(self, other: "SparseVector") -> float:
        """
        Cosine similarity between two term vectors.

        Returns a value in [0, 1] for count vectors:
            0: no shared tokens
            1: same direction (identical up to scale)

        A zero vector (built from an empty token list) has similarity 0 to
        every vector, itself included.
        """
        if self.norm == 0 or other.norm == 0:
            return 0.0
        return self.dot(other) / (self.norm * other.norm)

    def __len__(self) -> int:
        return len(self.counts)

    def __repr__(self) -> str:
        return f"SparseVector(tokens={len(self.counts)}, norm={self.norm:.4f})"


def build_vector(tokens: Iterable[str]) -> SparseVector:
    """Build a term vector from a token list; duplicates add to the count."""
    return SparseVector(tokens)
