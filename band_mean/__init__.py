"""
band_mean
=========

Centered running means through sparse band matrices, and benchmarks that
compare them with dense and matrix-free alternatives.

Modules:
--------
- band: CSC band matrix index builder and matrix-vector product.
- weights: Edge-masked normalisation weights.
- running_mean: Direct, band-matrix and filter running means.
- benchmarks: Timing harness, scaling analysis and JSON export.
- logging: Tagged logging utilities.
- config: Package-wide defaults.
"""

from .errors import BandMeanError, InvalidArgument, DimensionMismatch, BenchmarkCandidateFailure
from .band import BandedMatrixIndex, build_band_index, band_matvec, band_nnz
from .weights import edge_weights
from .running_mean import direct_running_mean, band_running_mean, filter_running_mean
from .logging import setup_tagged_logger, configure_global_logging
from .config import configure, get_settings

__version__ = "0.1.0"
