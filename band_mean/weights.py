"""
weights.py
==========

Per-position normalisation weights for a centered running mean.

A window of radius k centered at i needs x[i-k] .. x[i+k]. Positions whose
window runs past either end have no weight and are masked, so any product
with the weight vector carries the mask through.
"""
import numpy as np

from .band import _validate_band_args


def edge_weights(n: int, k: int) -> np.ma.MaskedArray:
    """
    Weight vector of length n for a centered window of radius k.

    Positions k .. n-k-1 hold 1/(2k+1); the first k and last k positions are
    masked. When n < 2k+1 every position is masked.

    Raises:
        InvalidArgument: Same conditions as build_band_index.
    """
    n, k = _validate_band_args(n, k)
    positions = np.arange(n)
    missing = (positions < k) | (positions >= n - k)
    weights = np.full(n, 1.0 / (2 * k + 1), dtype=np.float64)
    return np.ma.array(weights, mask=missing)
