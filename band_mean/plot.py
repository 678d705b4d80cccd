"""
plot.py
=======

Log-log chart of median latency against n, one line per method.

Reads only the plain result rows of a BenchmarkReport, so reports loaded
back from JSON plot the same way as fresh ones.
"""
from typing import Optional


def plot_results(report, output_path: Optional[str] = None, title: Optional[str] = None):
    """
    Plot median latency vs. n on log-log axes.

    Parameters:
    -----------
    report : BenchmarkReport
        Report from run_benchmarks(), measure_callables() or load_results().
    output_path : str, optional
        Save the figure there (format from the extension). A saved figure is
        closed, so pyplot no longer tracks it; the returned Figure can still
        be inspected or saved again. Without a path the figure stays open and
        the caller closes it.
    title : str, optional
        Figure title (default names k when the report has one).

    Returns:
    --------
    matplotlib.figure.Figure
    """
    from matplotlib import pyplot as plt

    fig, ax = plt.subplots(figsize=(7, 5))
    for method in report.methods():
        rows = sorted(
            (r for r in report.results if r.method == method and r.ok and r.median_ms),
            key=lambda r: r.n,
        )
        if not rows:
            continue
        ax.loglog([r.n for r in rows], [r.median_ms for r in rows], marker='o', label=method)

    k = report.settings.get('k')
    ax.set_xlabel("n")
    ax.set_ylabel("median latency (ms)")
    ax.set_title(title or (f"Running mean, k={k}" if k is not None else "Benchmark"))
    ax.grid(True, which='both', alpha=0.3)
    ax.legend()

    if output_path:
        fig.savefig(output_path, bbox_inches='tight')
        plt.close(fig)
    return fig
