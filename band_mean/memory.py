"""
memory.py
=========

Allocation measurement for checking the memory footprint of band builders.

NumPy reports its data buffers to tracemalloc, so the traced peak of a call
shows whether it allocated an O(n^2) intermediate even when that buffer is
released before the call returns.

Functions:
----------
- peak_traced_bytes: Run a callable and return (result, peak traced bytes).
- format_bytes: Human-readable byte count.
"""
# standard imports
import gc
import tracemalloc
from typing import Any, Callable, Tuple


def format_bytes(size: float) -> str:
    """Format bytes as human-readable string."""
    for unit in ['B', 'KB', 'MB', 'GB']:
        if abs(size) < 1024.0:
            return f"{size:.1f} {unit}"
        size /= 1024.0
    return f"{size:.1f} TB"


def peak_traced_bytes(func: Callable[..., Any], *args, **kwargs) -> Tuple[Any, int]:
    """
    Call func(*args, **kwargs) and measure its peak traced allocation.

    The peak is taken relative to the traced memory just before the call.
    If tracemalloc was already running it is left running, otherwise it is
    started and stopped around the call.

    Example:
    --------
    >>> index, peak = peak_traced_bytes(build_band_index, 100_000, 3)
    >>> format_bytes(peak)
    '10.7 MB'
    """
    was_tracing = tracemalloc.is_tracing()
    gc.collect()
    if not was_tracing:
        tracemalloc.start()
    try:
        tracemalloc.reset_peak()
        baseline, _ = tracemalloc.get_traced_memory()
        result = func(*args, **kwargs)
        _, peak = tracemalloc.get_traced_memory()
    finally:
        if not was_tracing:
            tracemalloc.stop()
    return result, max(peak - baseline, 0)
