"""
Digest functions and conversion of digests to bit vectors.

A digest function maps the UTF-8 bytes of a shingle to a fixed-width digest.
Digests are normally ``bytes``; functions producing widths that are not a
multiple of 8 may return a sequence of 0/1 values instead.
"""

import hashlib
from typing import Callable, Sequence, Union

import numpy as np

from ..errors import ConfigurationError

Digest = Union[bytes, bytearray, Sequence[int], np.ndarray]
DigestFn = Callable[[bytes], Digest]

# Input used to determine the width of a digest function.
PROBE_INPUT = b"foo"


def default_digest(message: bytes) -> bytes:
    """Default hash, MD5 (128 bits)."""
    return hashlib.md5(message).digest()


def get_digest(name: str) -> DigestFn:
    """
    Resolve a ``hashlib`` algorithm by name.

    Only fixed-width algorithms are accepted; ``shake_*`` variants need an
    explicit length and are rejected.
    """
    algorithm = name.lower()
    if algorithm == "md5":
        return default_digest
    if algorithm.startswith("shake_") or algorithm not in hashlib.algorithms_available:
        raise ConfigurationError(
            f"Unsupported digest algorithm '{name}'",
            parameter="digest",
            value=name,
        )

    def _digest(message: bytes) -> bytes:
        return hashlib.new(algorithm, message).digest()

    _digest.__name__ = f"{algorithm}_digest"
    return _digest


def as_bits(digest: Digest) -> np.ndarray:
    """Return the digest as a ``uint8`` array of 0/1 values, MSB first."""
    if isinstance(digest, (bytes, bytearray)):
        return np.unpackbits(np.frombuffer(digest, dtype=np.uint8))
    bits = np.asarray(digest, dtype=np.uint8)
    if bits.ndim != 1:
        raise ValueError(f"bit digest must be one-dimensional, got shape {bits.shape}")
    if bits.size and bits.max() > 1:
        raise ValueError("bit digest may only contain 0 and 1")
    return bits


def digest_width(digest: Digest) -> int:
    """Width of a digest in bits."""
    if isinstance(digest, (bytes, bytearray)):
        return len(digest) * 8
    return len(digest)


def probe_width(digest_fn: DigestFn) -> int:
    """Determine the width in bits of ``digest_fn`` by hashing the probe input."""
    return digest_width(digest_fn(PROBE_INPUT))
