"""
config.py
=========

Package-wide defaults for benchmark runs and numerical checks.

Defaults live in module-level state and are changed through configure(),
the same way the profiling modules are configured. CLI flags override them
for a single invocation without touching the globals.

Functions:
----------
- configure: Change one or more defaults.
- get_settings: Snapshot of the current defaults.
- reset: Restore the built-in defaults.
"""
from typing import Any, Dict, Optional, Sequence, Tuple


_BUILTIN = {
    'sizes': (512, 1024, 2048),
    'half_bandwidth': 5,
    'repeats': 7,
    'warmup': 2,
    'seed': 20240101,
    'atol': 1e-9,
}

_sizes: Tuple[int, ...] = _BUILTIN['sizes']
_half_bandwidth: int = _BUILTIN['half_bandwidth']
_repeats: int = _BUILTIN['repeats']
_warmup: int = _BUILTIN['warmup']
_seed: int = _BUILTIN['seed']
_atol: float = _BUILTIN['atol']


def configure(
    sizes: Optional[Sequence[int]] = None,
    half_bandwidth: Optional[int] = None,
    repeats: Optional[int] = None,
    warmup: Optional[int] = None,
    seed: Optional[int] = None,
    atol: Optional[float] = None,
):
    """
    Configure package defaults. Arguments left as None keep their value.

    Example:
    --------
    >>> configure(sizes=[1000, 2000, 4000], repeats=11)
    """
    global _sizes, _half_bandwidth, _repeats, _warmup, _seed, _atol
    if sizes is not None:
        _sizes = tuple(int(n) for n in sizes)
    if half_bandwidth is not None:
        _half_bandwidth = int(half_bandwidth)
    if repeats is not None:
        if repeats < 1:
            raise ValueError("repeats must be >= 1")
        _repeats = int(repeats)
    if warmup is not None:
        _warmup = int(warmup)
    if seed is not None:
        _seed = int(seed)
    if atol is not None:
        _atol = float(atol)


def get_settings() -> Dict[str, Any]:
    """Return the current defaults as a plain dict."""
    return {
        'sizes': _sizes,
        'half_bandwidth': _half_bandwidth,
        'repeats': _repeats,
        'warmup': _warmup,
        'seed': _seed,
        'atol': _atol,
    }


def reset():
    """Restore the built-in defaults."""
    configure(**_BUILTIN)
