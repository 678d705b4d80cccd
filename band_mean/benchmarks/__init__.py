"""
Running-mean benchmarks.

Times alternative ways of computing a centered running mean across a range
of signal lengths n, for a fixed window half-width k:

Products with a prebuilt band (built in setup, not timed):
1. sparse - our CSC band index, reduceat over stored rows
2. scipy_sparse - scipy.sparse CSC matrix product
3. dense - dense n x n band matrix product

Matrix-free:
4. direct - shifted-slice running mean (the reference)
5. filter - scipy.signal.lfilter with a uniform kernel

Band construction:
6. build_custom - our column-wise CSC builder
7. build_scipy - scipy.sparse.diags
8. build_dense - dense mask then sparsify

Usage:
    from band_mean.benchmarks import run_benchmarks, scaling_exponents

    # Run all benchmarks at the configured sizes
    report = run_benchmarks()

    # Sparse against dense only, custom sizes
    report = run_benchmarks(classes=['sparse', 'dense'], sizes=[512, 1024, 2048])
    scaling_exponents(report.results)

    # Arbitrary callables on generated inputs
    report = measure_callables({'cumsum': np.cumsum}, sizes=[1000, 2000])
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence
import datetime
import json
import math

import numpy as np

from .. import config
from ..errors import BenchmarkCandidateFailure, InvalidArgument
from ..logging import setup_tagged_logger
from .base import BenchmarkBase, BenchmarkResult, make_signal, outputs_agree
from .construction import CustomBuildBenchmark, ScipyDiagsBuildBenchmark, DenseBuildBenchmark
from .direct import DirectBenchmark, FilterBenchmark
from .matvec import SparseBandBenchmark, ScipySparseBenchmark, DenseBandBenchmark


logger = setup_tagged_logger(__name__)


# Registry of all available benchmarks
BENCHMARKS: Dict[str, type] = {
    'sparse': SparseBandBenchmark,
    'scipy_sparse': ScipySparseBenchmark,
    'dense': DenseBandBenchmark,
    'direct': DirectBenchmark,
    'filter': FilterBenchmark,
    'build_custom': CustomBuildBenchmark,
    'build_scipy': ScipyDiagsBuildBenchmark,
    'build_dense': DenseBuildBenchmark,
}


@dataclass
class BenchmarkReport:
    """Results of one harness invocation plus the settings that produced them."""

    results: List[BenchmarkResult]
    settings: Dict[str, Any]
    timestamp: str = field(default_factory=lambda: datetime.datetime.now().isoformat())
    system: Optional[Dict[str, Any]] = None

    @property
    def errors(self) -> Dict[str, str]:
        """Failed cells keyed as 'method@n'."""
        return {f"{r.method}@{r.n}": r.error for r in self.results if not r.ok}

    def methods(self) -> List[str]:
        seen = []
        for r in self.results:
            if r.method not in seen:
                seen.append(r.method)
        return seen

    def rows(self) -> List[Dict[str, Any]]:
        """Plain (method, n, median_ms, ...) rows for tables and plots."""
        return [r.as_dict() for r in self.results]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'timestamp': self.timestamp,
            'system': self.system,
            'settings': self.settings,
            'results': self.rows(),
        }


class CallableBenchmark(BenchmarkBase):
    """
    Adapter timing an arbitrary callable f(x) on a generated input.

    When a reference callable is given the output is checked against it,
    otherwise validate() reports None.
    """

    complexity = "?"
    description = "user callable"

    def __init__(
        self,
        name: str,
        func: Callable[[np.ndarray], Any],
        n: int,
        seed: Optional[int] = None,
        make_input: Callable[[int, int], np.ndarray] = make_signal,
        reference: Optional[Callable[[np.ndarray], Any]] = None,
    ):
        super().__init__(n, seed=seed)
        self.name = name
        self.k = None
        self._func = func
        self._make_input = make_input
        self._reference = reference

    def setup(self) -> None:
        self._x = self._make_input(self.n, self.seed)
        self._output = None

    def run(self) -> None:
        self._output = self._func(self._x)

    def validate(self) -> Optional[bool]:
        if self._reference is None:
            return None
        return outputs_agree(self._output, self._reference(self._x))


def list_benchmarks() -> Dict[str, Dict[str, str]]:
    """
    Get metadata for all registered benchmarks.

    Returns:
        Dict mapping benchmark name to metadata dict with keys:
        - name: Short identifier
        - description: Human-readable description
        - complexity: Expected growth for fixed k
    """
    return {
        name: {
            'name': cls.name,
            'description': cls.description,
            'complexity': cls.complexity,
        }
        for name, cls in BENCHMARKS.items()
    }


def _measure(benchmark: BenchmarkBase, repeats: int, warmup: int,
             check: bool, track_memory: bool) -> BenchmarkResult:
    """Time one cell; a raising candidate becomes a failed result."""
    logger.debug(f"measuring {benchmark.name} at n={benchmark.n}")
    try:
        return benchmark.benchmark(
            repeats=repeats, warmup=warmup, check=check, track_memory=track_memory
        )
    except Exception as e:
        failure = BenchmarkCandidateFailure(benchmark.name, benchmark.n, e)
        logger.warning(f"benchmark candidate failed: {failure}")
        return BenchmarkResult.failed(benchmark.name, benchmark.n, benchmark.k, str(failure))


def _resolve_settings(sizes, k, repeats, warmup, seed) -> Dict[str, Any]:
    defaults = config.get_settings()
    settings = {
        'sizes': [int(n) for n in (defaults['sizes'] if sizes is None else sizes)],
        'k': defaults['half_bandwidth'] if k is None else int(k),
        'repeats': defaults['repeats'] if repeats is None else int(repeats),
        'warmup': defaults['warmup'] if warmup is None else int(warmup),
        'seed': defaults['seed'] if seed is None else int(seed),
    }
    if not settings['sizes']:
        raise InvalidArgument("at least one input size is required")
    if settings['repeats'] < 1:
        raise InvalidArgument(f"repeats must be >= 1, got {settings['repeats']}")
    if settings['warmup'] < 0:
        raise InvalidArgument(f"warmup must be >= 0, got {settings['warmup']}")
    return settings


def run_benchmarks(
    classes: Optional[Iterable[str]] = None,
    sizes: Optional[Sequence[int]] = None,
    k: Optional[int] = None,
    repeats: Optional[int] = None,
    warmup: Optional[int] = None,
    seed: Optional[int] = None,
    validate: bool = True,
    track_memory: bool = False,
    include_system_info: bool = False,
) -> BenchmarkReport:
    """
    Run registered benchmarks at every size and return the report.

    Args:
        classes: Benchmark names to run (default: all)
        sizes: Signal lengths n (default: configured sizes)
        k: Window half-width (default: configured half_bandwidth)
        repeats: Timed runs per cell; the median is reported
        warmup: Untimed runs per cell
        seed: Seed for the generated signals
        validate: Check each output against the direct running mean
        track_memory: Record the peak traced allocation of each kernel
        include_system_info: Attach CPU / BLAS information to the report

    Returns:
        BenchmarkReport with one BenchmarkResult per (method, n). A candidate
        that raises yields a result with error set; the run continues.

    Raises:
        InvalidArgument: Unknown benchmark name or unusable settings
    """
    if classes is None:
        classes = list(BENCHMARKS.keys())
    else:
        classes = list(classes)

    invalid = [name for name in classes if name not in BENCHMARKS]
    if invalid:
        raise InvalidArgument(f"Unknown benchmark(s): {', '.join(invalid)}")

    settings = _resolve_settings(sizes, k, repeats, warmup, seed)

    results = []
    for name in classes:
        for n in settings['sizes']:
            benchmark = BENCHMARKS[name](n, k=settings['k'], seed=settings['seed'])
            results.append(_measure(
                benchmark, settings['repeats'], settings['warmup'], validate, track_memory
            ))

    system = None
    if include_system_info:
        from ..system_info import get_system_info
        system = get_system_info()

    report = BenchmarkReport(results=results, settings=settings, system=system)
    if report.errors:
        logger.warning(f"{len(report.errors)} benchmark cell(s) failed")
    return report


def measure_callables(
    candidates: Mapping[str, Callable[[np.ndarray], Any]],
    sizes: Optional[Sequence[int]] = None,
    repeats: Optional[int] = None,
    warmup: Optional[int] = None,
    seed: Optional[int] = None,
    make_input: Callable[[int, int], np.ndarray] = make_signal,
    reference: Optional[Callable[[np.ndarray], Any]] = None,
) -> BenchmarkReport:
    """
    Time arbitrary callables on generated inputs of each size.

    Args:
        candidates: Mapping of method name to f(x)
        sizes: Input lengths
        make_input: Builds the input from (n, seed); all candidates at the
            same n receive the same input
        reference: Optional f(x) whose output every candidate must match

    Returns:
        BenchmarkReport; failures are isolated per (callable, size).
    """
    settings = _resolve_settings(sizes, None, repeats, warmup, seed)
    settings['k'] = None

    results = []
    for name, func in candidates.items():
        for n in settings['sizes']:
            benchmark = CallableBenchmark(
                name, func, n, seed=settings['seed'],
                make_input=make_input, reference=reference,
            )
            results.append(_measure(
                benchmark, settings['repeats'], settings['warmup'], True, False
            ))

    return BenchmarkReport(results=results, settings=settings)


def growth_ratios(results: Iterable[BenchmarkResult]) -> Dict[str, List[Dict[str, float]]]:
    """
    Pairwise growth of median latency between successive sizes per method.

    Each entry holds n_from, n_to, ratio and exponent, where
    exponent = log(ratio) / log(n_to / n_from); for a doubling of n this is
    log2 of the latency ratio, about 1 for linear and 2 for quadratic cost.
    """
    by_method: Dict[str, List[BenchmarkResult]] = {}
    for r in results:
        if r.ok and r.median_ms and r.median_ms > 0:
            by_method.setdefault(r.method, []).append(r)

    growth = {}
    for method, rows in by_method.items():
        rows = sorted(rows, key=lambda r: r.n)
        steps = []
        for a, b in zip(rows, rows[1:]):
            if b.n == a.n:
                continue
            ratio = b.median_ms / a.median_ms
            steps.append({
                'n_from': a.n,
                'n_to': b.n,
                'ratio': ratio,
                'exponent': math.log(ratio) / math.log(b.n / a.n),
            })
        growth[method] = steps
    return growth


def scaling_exponents(results: Iterable[BenchmarkResult]) -> Dict[str, float]:
    """
    Least-squares slope of log(median) against log(n) per method.

    Methods measured at fewer than two distinct sizes are omitted.
    """
    by_method: Dict[str, List[BenchmarkResult]] = {}
    for r in results:
        if r.ok and r.median_ms and r.median_ms > 0:
            by_method.setdefault(r.method, []).append(r)

    exponents = {}
    for method, rows in by_method.items():
        if len({r.n for r in rows}) < 2:
            continue
        log_n = np.log([r.n for r in rows])
        log_t = np.log([r.median_ms for r in rows])
        slope, _ = np.polyfit(log_n, log_t, 1)
        exponents[method] = float(slope)
    return exponents


def save_results(report: BenchmarkReport, filepath: str) -> None:
    """
    Save a benchmark report to JSON.

    Args:
        report: Report from run_benchmarks() or measure_callables()
        filepath: Output path
    """
    with open(filepath, 'w') as f:
        json.dump(report.to_dict(), f, indent=2)


def load_results(filepath: str) -> BenchmarkReport:
    """Load a report written by save_results()."""
    with open(filepath, 'r') as f:
        data = json.load(f)
    return BenchmarkReport(
        results=[BenchmarkResult(**row) for row in data.get('results', [])],
        settings=data.get('settings', {}),
        timestamp=data.get('timestamp', ''),
        system=data.get('system'),
    )
