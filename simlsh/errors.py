"""
Error types for fingerprint computation.

All failures are deterministic: the same input and configuration always fail
the same way, so nothing here is retried.
"""

from typing import Optional, Any, Dict


class SimLSHError(Exception):
    """
    Base exception for all simlsh errors.

    Provides common functionality for error tracking and reporting.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize error.

        Args:
            message: Error message
            details: Optional detailed error context
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(SimLSHError):
    """
    Raised when a pipeline is configured with invalid parameters.

    Covers unknown digest or tokenizer names, non-positive shingle widths
    and malformed configuration files.
    """

    def __init__(self, message: str,
                 parameter: Optional[str] = None,
                 value: Any = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
        self.parameter = parameter
        self.value = value

        self.details.update({
            'parameter': parameter,
            'value': value,
        })


class DigestWidthError(SimLSHError):
    """
    Raised when a digest does not have the width probed at the start of a
    computation.

    The batch holding the offending digest is discarded; batches folded
    before it stay in the accumulator, but the computation is aborted.
    """

    def __init__(self, expected: int, actual: int,
                 details: Optional[Dict[str, Any]] = None):
        """
        Initialize digest width error.

        Args:
            expected: Width in bits the accumulator was sized for
            actual: Width in bits of the offending digest
            details: Additional error context
        """
        super().__init__(
            f"Digest width mismatch: expected {expected} bits, got {actual}",
            details,
        )
        self.expected = expected
        self.actual = actual

        self.details.update({
            'expected': expected,
            'actual': actual,
        })
