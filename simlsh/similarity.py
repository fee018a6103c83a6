"""Comparison of packed fingerprints."""

import numpy as np


def hamming_distance(a: bytes, b: bytes) -> int:
    """Number of bit positions in which two fingerprints differ."""
    if len(a) != len(b):
        raise ValueError(f"fingerprint length mismatch: {len(a)} != {len(b)} bytes")
    xor = np.bitwise_xor(np.frombuffer(a, dtype=np.uint8), np.frombuffer(b, dtype=np.uint8))
    return int(np.unpackbits(xor).sum())


def similarity(a: bytes, b: bytes) -> float:
    """
    Fraction of equal bits, from 0.0 (complementary) to 1.0 (identical).

    Two empty fingerprints are identical.
    """
    bits = len(a) * 8
    if bits == 0 and len(b) == 0:
        return 1.0
    return 1.0 - hamming_distance(a, b) / bits
