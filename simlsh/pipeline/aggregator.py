"""
SimHash vector aggregation.

Every shingle digest votes on each bit position: +1 where the digest has a 1
bit, -1 where it has a 0 bit. The votes are summed position-wise into one
signed accumulator vector.

Digests are folded in batches: up to ``batch_size`` digests are unpacked into
a 2-D bit matrix and the matrix is reduced column-wise in one numpy call. For
a batch of ``n`` rows the contribution is ``2 * ones - n`` per column, which
is exactly the sum of the individual +1/-1 votes, so the result does not
depend on the batch size.
"""

import logging
from typing import Iterable, List, Optional

import numpy as np

from ..errors import ConfigurationError, DigestWidthError
from .digests import Digest, as_bits

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 1024


class VectorAggregator:
    """
    Signed per-bit accumulator for digests of a fixed width.

    The accumulator length is set once and never changes. A digest of any
    other width raises ``DigestWidthError`` and leaves the accumulator as it
    was before the offending batch.
    """

    __slots__ = ("width", "batch_size", "count", "_acc")

    def __init__(self, width: int, batch_size: int = DEFAULT_BATCH_SIZE) -> None:
        if width <= 0:
            raise ConfigurationError(
                f"digest width must be > 0, got {width}", parameter="width", value=width
            )
        if batch_size <= 0:
            raise ConfigurationError(
                f"batch_size must be > 0, got {batch_size}",
                parameter="batch_size",
                value=batch_size,
            )
        self.width = width
        self.batch_size = batch_size
        self.count = 0
        self._acc = np.zeros(width, dtype=np.int64)

    def _bits(self, digest: Digest) -> np.ndarray:
        bits = as_bits(digest)
        if bits.shape[0] != self.width:
            raise DigestWidthError(self.width, int(bits.shape[0]))
        return bits

    def add(self, digest: Digest) -> None:
        """Fold a single digest into the accumulator."""
        bits = self._bits(digest)
        self._acc += 2 * bits.astype(np.int64) - 1
        self.count += 1

    def _fold(self, rows: List[np.ndarray]) -> None:
        matrix = np.stack(rows)
        ones = matrix.sum(axis=0, dtype=np.int64)
        self._acc += 2 * ones - len(rows)
        self.count += len(rows)

    def add_many(self, digests: Iterable[Digest]) -> None:
        """Fold an iterable of digests, ``batch_size`` at a time."""
        rows: List[np.ndarray] = []
        for digest in digests:
            rows.append(self._bits(digest))
            if len(rows) == self.batch_size:
                self._fold(rows)
                rows = []
        if rows:
            self._fold(rows)

    @property
    def vector(self) -> np.ndarray:
        """A copy of the current accumulator."""
        return self._acc.copy()


def add_vectors(
    digests: Iterable[Digest],
    width: int,
    batch_size: Optional[int] = None,
) -> np.ndarray:
    """
    Aggregate digests using the SimHash combination rule.

    Zero digests yield an all-zero accumulator of length ``width``.
    """
    aggregator = VectorAggregator(width, batch_size or DEFAULT_BATCH_SIZE)
    aggregator.add_many(digests)
    logger.debug("Aggregated %d digests of %d bits", aggregator.count, width)
    return aggregator.vector
