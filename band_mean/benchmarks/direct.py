"""
Matrix-free running-mean benchmarks.

- direct: shifted-slice running mean, the reference implementation
- filter: general FIR filtering through scipy.signal.lfilter
"""

from ..running_mean import direct_running_mean, filter_running_mean
from .base import BenchmarkBase, make_signal


class DirectBenchmark(BenchmarkBase):
    """Sum of 2k+1 shifted slices of the signal, no matrix."""

    name = "direct"
    description = "shifted-slice running mean (reference)"
    complexity = "O(n*k)"

    def setup(self) -> None:
        self._x = make_signal(self.n, self.seed)
        self._output = None

    def run(self) -> None:
        self._output = direct_running_mean(self._x, self.k)


class FilterBenchmark(BenchmarkBase):
    """
    Uniform kernel through a general-purpose linear filter.

    lfilter does not know the kernel is uniform, so it pays O(k) per sample.
    """

    name = "filter"
    description = "scipy.signal.lfilter with a uniform kernel"
    complexity = "O(n*k)"

    def setup(self) -> None:
        self._x = make_signal(self.n, self.seed)
        self._output = None

    def run(self) -> None:
        self._output = filter_running_mean(self._x, self.k)
