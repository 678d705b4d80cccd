"""
example_running_mean.py
=======================

The same centered running mean three ways: direct, band matrix, filter.
"""

import numpy as np

from band_mean import build_band_index, band_matvec, edge_weights
from band_mean import direct_running_mean, band_running_mean, filter_running_mean


def demo_band_structure():
    """
    Show the CSC layout of a small band matrix.
    """
    index = build_band_index(6, 1)
    print("row_indices:   ", index.row_indices)
    print("column_offsets:", index.column_offsets)
    print(index.to_dense().astype(int))


def demo_three_ways():
    """
    Compute the running mean of 1..9 with k=2 by each method.
    """
    x = np.arange(1, 10, dtype=float)
    k = 2

    sums = band_matvec(build_band_index(len(x), k), x)
    print("window sums:", sums)
    print("weights:    ", edge_weights(len(x), k))

    print("direct:", direct_running_mean(x, k))
    print("band:  ", band_running_mean(x, k))
    print("filter:", filter_running_mean(x, k))


if __name__ == "__main__":
    demo_band_structure()
    demo_three_ways()
