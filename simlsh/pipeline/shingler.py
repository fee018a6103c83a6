"""Sliding-window n-gram construction."""

from typing import List, Sequence

from ..errors import ConfigurationError


def shingle(tokens: Sequence[str], width: int, joiner: str = " ") -> List[str]:
    """
    Convert a token sequence into overlapping windows of ``width`` tokens.

    Windows step by one token. Sequences shorter than ``width`` produce no
    shingles; trailing partial windows are discarded, never padded. Each
    window is materialized as its tokens joined by ``joiner``.
    """
    if width < 1:
        raise ConfigurationError(
            f"shingle width must be >= 1, got {width}",
            parameter="shingle_width",
            value=width,
        )
    if width == 1:
        return list(tokens)
    return [joiner.join(tokens[i:i + width]) for i in range(len(tokens) - width + 1)]
