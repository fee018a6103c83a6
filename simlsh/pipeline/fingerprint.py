"""
Fingerprint pipeline.

normalize -> tokenize -> filter -> shingle -> digest -> aggregate ->
threshold -> pack

Every stage except aggregation, thresholding and packing is pluggable. The
digest width is probed once per computation and every shingle digest must
match it.
"""

import logging
from typing import Iterable, Iterator, List, Optional

from ..config import FingerprintConfig
from ..errors import ConfigurationError
from .aggregator import DEFAULT_BATCH_SIZE, VectorAggregator
from .bits import pack_bits, threshold
from .digests import DigestFn, default_digest, get_digest, probe_width
from .filters import TokenFilter, identity, stopword_filter
from .normalizer import normalize
from .shingler import shingle
from .tokenizers import Tokenizer, get_tokenizer, tokenize_chars, tokenize_words

logger = logging.getLogger(__name__)


def fingerprint(
    text: str,
    shingle_width: int = 3,
    digest_fn: DigestFn = default_digest,
    normalize_fn=normalize,
    tokenize_fn: Tokenizer = tokenize_words,
    filter_fn: TokenFilter = identity,
    *,
    shingle_joiner: str = " ",
    batch_size: int = DEFAULT_BATCH_SIZE,
) -> bytes:
    """
    Compute an LSH/SimHash for a given text.

    Returns the raw, non-printable fingerprint. Its length is the digest
    width rounded up to whole bytes; base64 or hex encoding is left to the
    caller.

    Args:
        text: Input text
        shingle_width: 1 uses the bag-of-words approach, larger values hash
            n-grams of that many tokens
        digest_fn: Maps shingle bytes to a fixed-width digest. Shorter
            digests make the computation faster
        normalize_fn: Maps a string to a normalized string
        tokenize_fn: Splits a normalized string into tokens, e.g. words or
            graphemes
        filter_fn: Filters the token list, e.g. removes stop-words
        shingle_joiner: String placed between the tokens of a shingle before
            hashing
        batch_size: Number of digests folded per aggregation step

    Raises:
        ConfigurationError: shingle_width is not positive
        DigestWidthError: a shingle digest differs in width from the probe
    """
    if shingle_width < 1:
        raise ConfigurationError(
            f"shingle_width must be >= 1, got {shingle_width}",
            parameter="shingle_width",
            value=shingle_width,
        )
    width = probe_width(digest_fn)

    tokens = filter_fn(tokenize_fn(normalize_fn(text)))
    shingles = shingle(tokens, shingle_width, shingle_joiner)

    aggregator = VectorAggregator(width, batch_size)
    aggregator.add_many(digest_fn(s.encode("utf-8")) for s in shingles)

    logger.debug(
        "Fingerprinted %d tokens into %d shingles (width=%d, digest=%d bits)",
        len(tokens), len(shingles), shingle_width, width,
    )
    return pack_bits(threshold(aggregator.vector))


def fingerprint_words(text: str, shingle_width: int = 3) -> bytes:
    """Compute an LSH for a piece of text, e.g. a document."""
    return fingerprint(text, shingle_width)


def fingerprint_chars(text: str, shingle_width: int = 3) -> bytes:
    """Compute an LSH for a short string, e.g. a username or email."""
    return fingerprint(text, shingle_width, default_digest, normalize, tokenize_chars)


class Fingerprinter:
    """
    Reusable pipeline with its stages resolved once.

    Holds no state between calls other than its configuration, so a single
    instance can be shared across threads.
    """

    def __init__(
        self,
        shingle_width: int = 3,
        digest_fn: DigestFn = default_digest,
        normalize_fn=normalize,
        tokenize_fn: Tokenizer = tokenize_words,
        filter_fn: TokenFilter = identity,
        shingle_joiner: str = " ",
        batch_size: int = DEFAULT_BATCH_SIZE,
    ):
        if shingle_width < 1:
            raise ConfigurationError(
                f"shingle_width must be >= 1, got {shingle_width}",
                parameter="shingle_width",
                value=shingle_width,
            )
        if batch_size < 1:
            raise ConfigurationError(
                f"batch_size must be >= 1, got {batch_size}",
                parameter="batch_size",
                value=batch_size,
            )
        self.shingle_width = shingle_width
        self.digest_fn = digest_fn
        self.normalize_fn = normalize_fn
        self.tokenize_fn = tokenize_fn
        self.filter_fn = filter_fn
        self.shingle_joiner = shingle_joiner
        self.batch_size = batch_size

    @classmethod
    def from_config(cls, config: Optional[FingerprintConfig] = None) -> "Fingerprinter":
        """Build a pipeline from a ``FingerprintConfig`` (defaults if omitted)."""
        config = config or FingerprintConfig()
        filter_fn = stopword_filter(config.stopwords) if config.stopwords else identity
        return cls(
            shingle_width=config.shingle_width,
            digest_fn=get_digest(config.digest),
            tokenize_fn=get_tokenizer(config.tokenizer),
            filter_fn=filter_fn,
            shingle_joiner=config.shingle_joiner,
            batch_size=config.batch_size,
        )

    @property
    def digest_bits(self) -> int:
        return probe_width(self.digest_fn)

    def fingerprint(self, text: str) -> bytes:
        return fingerprint(
            text,
            self.shingle_width,
            self.digest_fn,
            self.normalize_fn,
            self.tokenize_fn,
            self.filter_fn,
            shingle_joiner=self.shingle_joiner,
            batch_size=self.batch_size,
        )

    def fingerprint_many(self, texts: Iterable[str]) -> Iterator[bytes]:
        """Lazily fingerprint each text of ``texts`` independently."""
        for text in texts:
            yield self.fingerprint(text)

    def __repr__(self) -> str:
        return (
            f"Fingerprinter(shingle_width={self.shingle_width}, "
            f"digest_fn={getattr(self.digest_fn, '__name__', self.digest_fn)!r})"
        )


__all__: List[str] = [
    "fingerprint",
    "fingerprint_words",
    "fingerprint_chars",
    "Fingerprinter",
]
