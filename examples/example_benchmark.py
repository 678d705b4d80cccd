"""
example_benchmark.py
====================

Sparse vs. dense band products at three doublings of n, plus a custom
callable measured with the generic harness.
"""

import logging

import numpy as np
from rich.console import Console

from band_mean.benchmarks import run_benchmarks, measure_callables, growth_ratios
from band_mean.cli.benchmark_cmd import show_benchmark_results
from band_mean.logging import configure_global_logging
from band_mean.running_mean import direct_running_mean


def demo_sparse_vs_dense():
    """
    Run the matvec candidates and print the per-doubling growth.
    """
    report = run_benchmarks(
        classes=['sparse', 'scipy_sparse', 'dense', 'direct'],
        sizes=[512, 1024, 2048],
        k=5,
        repeats=9,
    )
    show_benchmark_results(Console(), report)
    for method, steps in growth_ratios(report.results).items():
        print(method, [round(s['exponent'], 2) for s in steps])


def demo_callables():
    """
    Time plain callables, checked against the direct running mean with k=3.
    """
    k = 3
    window = np.ones(2 * k + 1) / (2 * k + 1)

    def convolve(x):
        out = np.ma.masked_all(len(x))
        out[k:len(x) - k] = np.convolve(x, window, mode='valid')
        return out

    report = measure_callables(
        {'convolve': convolve, 'direct': lambda x: direct_running_mean(x, k)},
        sizes=[10_000, 20_000],
        reference=lambda x: direct_running_mean(x, k),
    )
    show_benchmark_results(Console(), report)


if __name__ == "__main__":
    configure_global_logging(logging.INFO)
    demo_sparse_vs_dense()
    demo_callables()
