"""
running_mean.py
===============

Centered running means of a 1-D signal.

Three routes to the same numbers:

- direct_running_mean: sum of 2k+1 shifted slices, no matrix at all.
- band_running_mean: band matrix product scaled by the edge weights.
- filter_running_mean: a uniform FIR kernel run through scipy.signal.lfilter.

All of them return a numpy masked array of length n whose first k and last
k entries are masked, since a window of radius k does not fit there.
"""
from typing import Optional

import numpy as np
from scipy import signal

from .band import BandedMatrixIndex, build_band_index, band_matvec
from .errors import InvalidArgument
from .weights import edge_weights


def _as_signal(x) -> np.ndarray:
    x = np.asarray(x, dtype=np.float64)
    if x.ndim != 1:
        raise InvalidArgument(f"expected a 1-D signal, got shape {x.shape}")
    return x


def _check_radius(k) -> int:
    if isinstance(k, bool) or not isinstance(k, (int, np.integer)):
        raise InvalidArgument(f"window half-width k must be an integer, got {k!r}")
    if k < 0:
        raise InvalidArgument(f"window half-width k must be non-negative, got {k}")
    return int(k)


def _centered(values: np.ndarray, n: int, k: int) -> np.ma.MaskedArray:
    """Place n-2k window means at positions k..n-k-1 and mask the rest."""
    out = np.ma.masked_all(n, dtype=np.float64)
    if values.size:
        out[k:n - k] = values
    return out


def direct_running_mean(x, k: int) -> np.ma.MaskedArray:
    """
    Centered moving average of radius k computed without any matrix.

    y[i] = mean(x[i-k .. i+k]) for k <= i < n-k; masked elsewhere. A window
    wider than the signal leaves every position masked.

    Parameters:
        x: 1-D sequence of numbers.
        k: Window half-width, k >= 0.

    Returns:
        Masked float64 array of length len(x).

    Raises:
        InvalidArgument: For negative or non-integer k, or non 1-D x.
    """
    x = _as_signal(x)
    k = _check_radius(k)
    n = x.shape[0]

    if k == 0:
        return np.ma.array(x.copy(), mask=np.zeros(n, dtype=bool))

    width = 2 * k + 1
    if n < width:
        return np.ma.masked_all(n, dtype=np.float64)

    # window i sums only x[i .. i+2k]
    m = n - 2 * k
    sums = x[0:m].copy()
    for j in range(1, width):
        sums += x[j:j + m]
    return _centered(sums / width, n, k)


def band_running_mean(
    x,
    k: int,
    index: Optional[BandedMatrixIndex] = None,
) -> np.ma.MaskedArray:
    """
    Centered moving average as (band matrix @ x) * edge weights.

    Parameters:
        x: 1-D sequence of length n.
        k: Window half-width, 0 <= k < n.
        index: Prebuilt band index for (n, k); built on demand when omitted.

    Raises:
        InvalidArgument: For an invalid (n, k) or an index built for another k.
        DimensionMismatch: If index.size differs from len(x).
    """
    x = _as_signal(x)
    k = _check_radius(k)
    if index is None:
        index = build_band_index(x.shape[0], k)
    elif index.half_bandwidth != k:
        raise InvalidArgument(
            f"index has half-bandwidth {index.half_bandwidth}, expected {k}"
        )
    sums = band_matvec(index, x)
    return sums * edge_weights(index.size, k)


def filter_running_mean(x, k: int) -> np.ma.MaskedArray:
    """
    Centered moving average through a general-purpose FIR filter.

    lfilter produces trailing means, y[j] = mean(x[j-2k .. j]); shifting by k
    centers them.
    """
    x = _as_signal(x)
    k = _check_radius(k)
    n = x.shape[0]
    width = 2 * k + 1
    if n < width:
        return np.ma.masked_all(n, dtype=np.float64)

    kernel = np.full(width, 1.0 / width)
    trailing = signal.lfilter(kernel, [1.0], x)
    return _centered(trailing[width - 1:], n, k)
