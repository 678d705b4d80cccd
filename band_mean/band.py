"""
band.py
=======

Compressed-sparse-column index of a symmetric 0/1 band matrix and its
product with a dense vector.

The index is written straight into the CSC arrays from per-column row ranges, so the
memory used is proportional to the number of nonzeros, O(n*k), and an n x n
dense intermediate is never allocated.

Classes:
--------
- BandedMatrixIndex: Immutable CSC sparsity pattern of an n x n band matrix.

Functions:
----------
- build_band_index: Construct the BandedMatrixIndex for (n, k).
- band_matvec: Multiply the implicit 0/1 band matrix by a dense vector.
- band_nnz: Number of nonzero entries of the (n, k) band.
"""
# standard imports
from dataclasses import dataclass
from numbers import Integral

# third party imports
import numpy as np
import scipy.sparse as sp

from .errors import InvalidArgument, DimensionMismatch


def _validate_band_args(n, k):
    """Check (n, k) describe a band that fits in an n x n matrix."""
    for label, value in (('n', n), ('k', k)):
        if isinstance(value, bool) or not isinstance(value, Integral):
            raise InvalidArgument(f"{label} must be an integer, got {value!r}")
    if n <= 0:
        raise InvalidArgument(f"matrix size n must be positive, got {n}")
    if k < 0:
        raise InvalidArgument(f"half-bandwidth k must be non-negative, got {k}")
    if k >= n:
        raise InvalidArgument(f"half-bandwidth k={k} does not fit in a {n}x{n} matrix")
    return int(n), int(k)


def _column_bounds(n: int, k: int):
    """First and last nonzero row of every column."""
    cols = np.arange(n, dtype=np.int64)
    lo = np.maximum(cols - k, 0)
    hi = np.minimum(cols + k, n - 1)
    return lo, hi


def band_nnz(n: int, k: int) -> int:
    """
    Number of nonzero entries in the n x n band of half-width k.

    For n > 2k this is (2k+1)(n-2k) + 3k^2 + k: full columns in the interior
    and k truncated columns on each side.
    """
    n, k = _validate_band_args(n, k)
    if n > 2 * k:
        return (2 * k + 1) * (n - 2 * k) + 3 * k * k + k
    lo, hi = _column_bounds(n, k)
    return int(np.sum(hi - lo + 1))


@dataclass(frozen=True, eq=False)
class BandedMatrixIndex:
    """
    CSC sparsity pattern of an n x n band matrix with half-bandwidth k.

    Attributes:
        size: Matrix dimension n.
        half_bandwidth: Number of diagonals k on each side of the main one.
        row_indices: Row of every nonzero, column-major, increasing per column.
        column_offsets: Length n+1; column c owns
            row_indices[column_offsets[c]:column_offsets[c+1]].
    """

    size: int
    half_bandwidth: int
    row_indices: np.ndarray
    column_offsets: np.ndarray

    @property
    def nnz(self) -> int:
        return int(self.column_offsets[-1])

    @property
    def shape(self):
        return (self.size, self.size)

    def column_rows(self, c: int) -> np.ndarray:
        """Nonzero row indices of column c."""
        if not 0 <= c < self.size:
            raise IndexError(f"column {c} out of range for size {self.size}")
        return self.row_indices[self.column_offsets[c]:self.column_offsets[c + 1]]

    def to_scipy(self) -> sp.csc_matrix:
        """The same pattern as a scipy CSC matrix of ones."""
        data = np.ones(self.nnz, dtype=np.float64)
        return sp.csc_matrix(
            (data, self.row_indices.copy(), self.column_offsets.copy()),
            shape=self.shape,
        )

    def to_dense(self) -> np.ndarray:
        """
        Materialise the band as a dense n x n array of 0/1.

        Only the dense benchmark candidate uses this; it costs O(n^2) memory.
        """
        dense = np.zeros(self.shape, dtype=np.float64)
        counts = np.diff(self.column_offsets)
        cols = np.repeat(np.arange(self.size, dtype=np.int64), counts)
        dense[self.row_indices, cols] = 1.0
        return dense


def build_band_index(n: int, k: int) -> BandedMatrixIndex:
    """
    Build the CSC index of the n x n band matrix with half-bandwidth k.

    Column c holds the rows max(c-k, 0) .. min(c+k, n-1). Offsets are the
    running total of per-column counts, and the rows are laid out by
    repeating each column's first row and adding its position in the column.

    Parameters:
        n: Matrix dimension, n >= 1.
        k: Half-bandwidth, 0 <= k < n.

    Returns:
        BandedMatrixIndex with read-only arrays.

    Raises:
        InvalidArgument: If n <= 0, k < 0 or k >= n.
    """
    n, k = _validate_band_args(n, k)

    lo, hi = _column_bounds(n, k)
    counts = hi - lo + 1

    column_offsets = np.zeros(n + 1, dtype=np.int64)
    np.cumsum(counts, out=column_offsets[1:])
    nnz = int(column_offsets[-1])

    # position of each nonzero within its own column
    within = np.arange(nnz, dtype=np.int64) - np.repeat(column_offsets[:-1], counts)
    row_indices = np.repeat(lo, counts) + within

    row_indices.flags.writeable = False
    column_offsets.flags.writeable = False
    return BandedMatrixIndex(
        size=n,
        half_bandwidth=k,
        row_indices=row_indices,
        column_offsets=column_offsets,
    )


def band_matvec(index: BandedMatrixIndex, x) -> np.ndarray:
    """
    Multiply the implicit 0/1 band matrix by x.

    y[c] is the sum of x[r] over the nonzero rows r of column c, i.e. the
    unnormalised sum of the window of radius k around c. O(nnz).

    Raises:
        DimensionMismatch: If x is not a vector of length index.size.
    """
    x = np.asarray(x, dtype=np.float64)
    if x.ndim != 1:
        raise DimensionMismatch(f"expected a 1-D vector, got shape {x.shape}")
    if x.shape[0] != index.size:
        raise DimensionMismatch(
            f"vector length {x.shape[0]} does not match matrix size {index.size}"
        )
    # every column holds at least its diagonal, so no reduceat segment is empty
    return np.add.reduceat(x[index.row_indices], index.column_offsets[:-1])
