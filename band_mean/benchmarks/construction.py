"""
Band matrix construction benchmarks.

Compares three ways of obtaining the sparse (n, k) band:

- build_custom: our column-by-column CSC index builder
- build_scipy: scipy.sparse.diags from 2k+1 constant diagonals
- build_dense: dense 0/1 mask, then sparsified (the naive approach)

The first two stay O(n*k) in time and memory. The last allocates n^2
entries before throwing most of them away.
"""

import numpy as np
import scipy.sparse as sp

from ..band import build_band_index, band_nnz
from .base import BenchmarkBase


class _ConstructionBenchmark(BenchmarkBase):
    """Shared validation: the built matrix has exactly band_nnz nonzeros."""

    def setup(self) -> None:
        self._expected_nnz = band_nnz(self.n, self.k)
        self._output = None

    def validate(self) -> bool:
        if self._output is None:
            return False
        return int(self._output.nnz) == self._expected_nnz


class CustomBuildBenchmark(_ConstructionBenchmark):
    name = "build_custom"
    description = "column-wise CSC index builder"
    complexity = "O(n*k)"

    def run(self) -> None:
        self._output = build_band_index(self.n, self.k)


class ScipyDiagsBuildBenchmark(_ConstructionBenchmark):
    name = "build_scipy"
    description = "scipy.sparse.diags constructor (CSC output)"
    complexity = "O(n*k)"

    def run(self) -> None:
        offsets = list(range(-self.k, self.k + 1))
        self._output = sp.diags(
            [1.0] * len(offsets), offsets, shape=(self.n, self.n), format='csc'
        )


class DenseBuildBenchmark(_ConstructionBenchmark):
    name = "build_dense"
    description = "dense |i-j| <= k mask, then sparsified"
    complexity = "O(n^2)"

    def run(self) -> None:
        positions = np.arange(self.n)
        dense = (np.abs(np.subtract.outer(positions, positions)) <= self.k).astype(np.float64)
        self._output = sp.csc_matrix(dense)
