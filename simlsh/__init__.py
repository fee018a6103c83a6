"""simlsh - Locality sensitive hashing (SimHash) for near-duplicate text detection."""

__version__ = "0.2.0"
__author__ = "Rohan Vinaik"
__email__ = "rohanpvinaik@gmail.com"

from .config import FingerprintConfig
from .errors import ConfigurationError, DigestWidthError, SimLSHError
from .pipeline.digests import default_digest
from .pipeline.fingerprint import (
    Fingerprinter,
    fingerprint,
    fingerprint_chars,
    fingerprint_words,
)
from .similarity import hamming_distance, similarity

__all__ = [
    "fingerprint",
    "fingerprint_words",
    "fingerprint_chars",
    "default_digest",
    "Fingerprinter",
    "FingerprintConfig",
    "hamming_distance",
    "similarity",
    "SimLSHError",
    "ConfigurationError",
    "DigestWidthError",
    "__version__",
]
