"""Thresholding of accumulator vectors and MSB-first bit packing."""

from typing import Optional, Sequence, Union

import numpy as np

Bits = Union[Sequence[int], np.ndarray]


def threshold(acc: Union[Sequence[int], np.ndarray]) -> np.ndarray:
    """
    Convert an accumulator to bits: positive values become 1, others 0.

    Ties (exactly zero) resolve to 0.
    """
    return (np.asarray(acc) > 0).astype(np.uint8)


def pack_bits(bits: Bits) -> bytes:
    """
    Pack bits into bytes, 8 per byte, first bit of each group most significant.

    A trailing group shorter than 8 bits is read as a binary number, so its
    bits occupy the low-order end of the last byte.
    """
    arr = np.asarray(bits, dtype=np.uint8)
    full = (arr.shape[0] // 8) * 8
    packed = np.packbits(arr[:full]).tobytes()
    rest = arr[full:]
    if rest.size:
        value = 0
        for bit in rest:
            value = (value << 1) | int(bit)
        packed += bytes([value])
    return packed


def unpack_bits(data: bytes, bit_count: Optional[int] = None) -> np.ndarray:
    """
    Inverse of :func:`pack_bits`.

    Without ``bit_count`` every byte yields 8 bits. When ``bit_count`` is not
    a multiple of 8, the last byte is read as a right-aligned partial group.
    """
    if bit_count is None:
        bit_count = len(data) * 8
    expected_bytes = (bit_count + 7) // 8
    if len(data) != expected_bytes:
        raise ValueError(
            f"{bit_count} bits need {expected_bytes} bytes, got {len(data)}"
        )
    full, partial = divmod(bit_count, 8)
    bits = np.unpackbits(np.frombuffer(data[:full], dtype=np.uint8))
    if partial:
        tail = np.unpackbits(np.frombuffer(data[full:], dtype=np.uint8))
        if tail[:8 - partial].any():
            raise ValueError("padding bits of the last byte are not zero")
        bits = np.concatenate([bits, tail[8 - partial:]])
    return bits
