"""
system_info.py
==============

Capture the hardware and numerical backend a benchmark ran on, so timings
saved to JSON can be compared across machines.

Functions:
----------
- get_system_info: Summary dict (CPU, cores, architecture, versions, BLAS).
- print_system_info: Rich panel display.
- clear_cache: Drop the cached summary.
"""
# standard imports
import contextlib
import io
import os
import platform
from datetime import datetime
from typing import Any, Dict, Optional

# third party imports
import numpy as np
import scipy
from rich.console import Console
from rich.panel import Panel


_cached_info: Optional[Dict[str, Any]] = None


def _cpu_model() -> str:
    """CPU model name from /proc/cpuinfo, falling back to platform."""
    try:
        with open('/proc/cpuinfo', 'r') as f:
            for line in f:
                if line.lower().startswith('model name') and ':' in line:
                    return line.split(':', 1)[1].strip()
    except (FileNotFoundError, PermissionError):
        pass
    return platform.processor() or "unknown"


def _blas_library() -> Optional[str]:
    """Identify the BLAS numpy was built against from np.show_config()."""
    buf = io.StringIO()
    try:
        with contextlib.redirect_stdout(buf):
            np.show_config()
    except Exception:
        return None
    config_str = buf.getvalue().lower()
    for needle, label in (('mkl', 'MKL'), ('openblas', 'OpenBLAS'),
                          ('accelerate', 'Accelerate'), ('atlas', 'ATLAS')):
        if needle in config_str:
            return label
    if 'blas' in config_str:
        return "Generic BLAS"
    return None


def get_system_info(use_cache: bool = True) -> Dict[str, Any]:
    """
    Get a summary of the machine and numerical stack.

    Parameters:
        use_cache: If True, return the cached summary if available.

    Returns:
        Dict with keys cpu, cores, arch, python, numpy, scipy, blas, timestamp.
    """
    global _cached_info

    if use_cache and _cached_info is not None:
        return _cached_info

    info = {
        'cpu': _cpu_model(),
        'cores': os.cpu_count(),
        'arch': platform.machine(),
        'python': platform.python_version(),
        'numpy': np.__version__,
        'scipy': scipy.__version__,
        'blas': _blas_library(),
        'blas_threads': os.environ.get("OMP_NUM_THREADS") or os.environ.get("OPENBLAS_NUM_THREADS"),
        'timestamp': datetime.now().isoformat(),
    }

    _cached_info = info
    return info


def print_system_info(info: Optional[Dict[str, Any]] = None, console: Optional[Console] = None):
    """Print the system summary as a Rich panel."""
    info = info or get_system_info()
    console = console or Console()
    console.print(Panel(
        f"[cyan]CPU:[/cyan] {info.get('cpu')}\n"
        f"[cyan]Cores:[/cyan] {info.get('cores')}\n"
        f"[cyan]Architecture:[/cyan] {info.get('arch')}\n"
        f"[cyan]Python:[/cyan] {info.get('python')}  "
        f"[cyan]NumPy:[/cyan] {info.get('numpy')}  "
        f"[cyan]SciPy:[/cyan] {info.get('scipy')}\n"
        f"[cyan]BLAS:[/cyan] {info.get('blas') or 'unknown'}",
        title="System Information",
        border_style="blue"
    ))


def clear_cache():
    """Clear the cached system summary."""
    global _cached_info
    _cached_info = None
