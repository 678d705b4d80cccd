"""
Base class for running-mean benchmarks.

All benchmark classes inherit from BenchmarkBase and implement:
- setup(): Build inputs and any prebuilt matrices for size n
- run(): Execute the timed kernel
- validate(): Check the output against the direct running mean
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional
import time

import numpy as np

from .. import config
from ..memory import peak_traced_bytes
from ..running_mean import direct_running_mean


def make_signal(n: int, seed: int) -> np.ndarray:
    """
    Standard normal test signal of length n.

    The generator is seeded from (seed, n) so every candidate measured at the
    same size sees the same input.
    """
    rng = np.random.default_rng([seed, n])
    return rng.standard_normal(n)


def outputs_agree(candidate, reference, atol: Optional[float] = None) -> bool:
    """
    True if two running means mask the same positions and agree elsewhere
    up to floating-point summation order.
    """
    if atol is None:
        atol = config.get_settings()['atol']
    cand_mask = np.ma.getmaskarray(candidate)
    ref_mask = np.ma.getmaskarray(reference)
    if cand_mask.shape != ref_mask.shape or not np.array_equal(cand_mask, ref_mask):
        return False
    keep = ~ref_mask
    return bool(np.allclose(
        np.ma.getdata(candidate)[keep],
        np.ma.getdata(reference)[keep],
        rtol=1e-9,
        atol=atol,
    ))


@dataclass(frozen=True)
class BenchmarkResult:
    """
    Summary of one (method, n) measurement.

    A failed measurement has error set and no timings.
    """

    method: str
    n: int
    k: Optional[int]
    median_ms: Optional[float]
    mean_ms: Optional[float] = None
    min_ms: Optional[float] = None
    max_ms: Optional[float] = None
    repeats: int = 0
    valid: Optional[bool] = None
    peak_bytes: Optional[int] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failed(cls, method: str, n: int, k: Optional[int], error: str) -> "BenchmarkResult":
        return cls(method=method, n=n, k=k, median_ms=None, error=error)

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


class BenchmarkBase(ABC):
    """
    Abstract base class for running-mean benchmarks.

    Attributes:
        name: Short identifier for the benchmark
        description: Human-readable description
        complexity: Expected growth in n for fixed k, e.g. "O(n*k)" or "O(n^2)"
    """

    name: str = ""
    description: str = ""
    complexity: str = ""

    def __init__(self, n: int, k: Optional[int] = None, seed: Optional[int] = None):
        """
        Initialize benchmark.

        Args:
            n: Signal length / matrix dimension
            k: Window half-width (default: configured half_bandwidth)
            seed: Seed for the test signal (default: configured seed)
        """
        settings = config.get_settings()
        self.n = int(n)
        self.k = settings['half_bandwidth'] if k is None else int(k)
        self.seed = settings['seed'] if seed is None else int(seed)
        self._x = None
        self._output = None

    @abstractmethod
    def setup(self) -> None:
        """Initialize test data. Called once before iterations."""
        pass

    @abstractmethod
    def run(self) -> None:
        """Execute the benchmark kernel. Called multiple times."""
        pass

    def validate(self) -> Optional[bool]:
        """Compare the last output with the direct running mean of the same input."""
        if self._output is None:
            return False
        return outputs_agree(self._output, direct_running_mean(self._x, self.k))

    def benchmark(
        self,
        repeats: int = 7,
        warmup: int = 2,
        check: bool = True,
        track_memory: bool = False,
    ) -> BenchmarkResult:
        """
        Run benchmark with warmup, return timing summary.

        Args:
            repeats: Number of timed runs
            warmup: Number of warmup runs (not timed)
            check: Validate the output after timing
            track_memory: Record peak traced allocation of one extra run

        Returns:
            BenchmarkResult with median/mean/min/max in milliseconds
        """
        if repeats < 1:
            raise ValueError("repeats must be >= 1")

        self.setup()

        for _ in range(warmup):
            self.run()

        times = []
        for _ in range(repeats):
            start = time.perf_counter()
            self.run()
            elapsed = time.perf_counter() - start
            times.append(elapsed * 1000)

        peak = None
        if track_memory:
            _, peak = peak_traced_bytes(self.run)

        return BenchmarkResult(
            method=self.name,
            n=self.n,
            k=self.k,
            median_ms=float(np.median(times)),
            mean_ms=float(np.mean(times)),
            min_ms=float(np.min(times)),
            max_ms=float(np.max(times)),
            repeats=repeats,
            valid=self.validate() if check else None,
            peak_bytes=peak,
        )
