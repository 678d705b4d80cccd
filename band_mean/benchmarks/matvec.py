"""
Matrix-vector running-mean benchmarks.

The band matrix is built once in setup(); run() times only the product and
the scaling by the edge weights. The three candidates share the same band
so their timings differ only in how the product is evaluated:

- sparse: our CSC index with a reduceat over the stored rows, O(n*k)
- scipy_sparse: scipy.sparse CSC matrix product, O(n*k)
- dense: the same band stored densely, O(n^2)
"""

import numpy as np

from ..band import build_band_index, band_matvec
from ..weights import edge_weights
from .base import BenchmarkBase, make_signal


class SparseBandBenchmark(BenchmarkBase):
    """Band index product followed by the edge weights."""

    name = "sparse"
    description = "CSC band index matvec * edge weights"
    complexity = "O(n*k)"

    def setup(self) -> None:
        self._x = make_signal(self.n, self.seed)
        self._index = build_band_index(self.n, self.k)
        self._weights = edge_weights(self.n, self.k)
        self._output = None

    def run(self) -> None:
        self._output = band_matvec(self._index, self._x) * self._weights


class ScipySparseBenchmark(BenchmarkBase):
    """scipy.sparse product over the same band pattern."""

    name = "scipy_sparse"
    description = "scipy.sparse csc_matrix @ x * edge weights"
    complexity = "O(n*k)"

    def setup(self) -> None:
        self._x = make_signal(self.n, self.seed)
        self._matrix = build_band_index(self.n, self.k).to_scipy()
        self._weights = edge_weights(self.n, self.k)
        self._output = None

    def run(self) -> None:
        self._output = np.asarray(self._matrix @ self._x) * self._weights


class DenseBandBenchmark(BenchmarkBase):
    """
    Dense n x n band matrix product.

    Every zero outside the band is multiplied too, so the cost grows with
    n^2 regardless of k. The matrix itself takes 8*n^2 bytes.
    """

    name = "dense"
    description = "dense band matrix @ x * edge weights (BLAS gemv)"
    complexity = "O(n^2)"

    def setup(self) -> None:
        self._x = make_signal(self.n, self.seed)
        self._matrix = build_band_index(self.n, self.k).to_dense()
        self._weights = edge_weights(self.n, self.k)
        self._output = None

    def run(self) -> None:
        self._output = (self._matrix @ self._x) * self._weights
