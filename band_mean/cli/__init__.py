"""
band_mean.cli
=============

Command-line interface for band_mean.

Provides CLI commands for:
- benchmark: List and run running-mean benchmarks
- mean: Centered running mean of numbers given on the command line
- sysinfo: Display the machine and numerical backend
"""

__all__ = ['main']

from .main import main
