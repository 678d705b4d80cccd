"""
errors.py
=========

Exception taxonomy for band_mean.

Classes:
--------
- BandMeanError: Base class for every error raised by this package.
- InvalidArgument: Malformed construction parameters (n, k, input shape).
- DimensionMismatch: Vector length does not match the matrix size.
- BenchmarkCandidateFailure: A single timed candidate failed during measurement.
"""


class BandMeanError(Exception):
    """Base class for band_mean errors."""


class InvalidArgument(BandMeanError, ValueError):
    """Raised when n, k or an input vector cannot describe a valid band."""


class DimensionMismatch(BandMeanError, ValueError):
    """Raised when a vector does not have the length the matrix expects."""


class BenchmarkCandidateFailure(BandMeanError, RuntimeError):
    """
    A benchmark candidate raised during setup, timing or validation.

    The harness records these instead of propagating them so that one broken
    candidate does not stop the remaining measurements.
    """

    def __init__(self, method: str, n: int, cause: BaseException):
        self.method = method
        self.n = n
        self.cause = cause
        super().__init__(f"{method} (n={n}): {type(cause).__name__}: {cause}")
