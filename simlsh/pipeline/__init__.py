"""Pipeline stages for text fingerprinting."""

from .aggregator import VectorAggregator, add_vectors
from .bits import pack_bits, threshold, unpack_bits
from .digests import default_digest, get_digest, probe_width
from .filters import identity, stopword_filter
from .normalizer import normalize
from .shingler import shingle
from .tokenizers import get_tokenizer, tokenize_chars, tokenize_words

__all__ = [
    "VectorAggregator",
    "add_vectors",
    "pack_bits",
    "threshold",
    "unpack_bits",
    "default_digest",
    "get_digest",
    "probe_width",
    "identity",
    "stopword_filter",
    "normalize",
    "shingle",
    "get_tokenizer",
    "tokenize_chars",
    "tokenize_words",
]
