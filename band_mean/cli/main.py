"""
band-mean CLI main dispatcher.

Provides subcommands:
- band-mean benchmark [list|run]
- band-mean mean -k K values...
- band-mean sysinfo
"""

import sys
import argparse
import logging
from typing import List, Optional

from ..logging import configure_global_logging


def main(argv: Optional[List[str]] = None):
    """
    Main entry point for band-mean CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])
    """
    parser = argparse.ArgumentParser(
        prog='band-mean',
        description='Banded-matrix running means and their benchmarks',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        '--verbose', '-v',
        action='count',
        default=0,
        help='Increase log output (-v info, -vv debug)'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    from .benchmark_cmd import add_benchmark_parser
    add_benchmark_parser(subparsers)

    from .mean_cmd import add_mean_parser
    add_mean_parser(subparsers)

    subparsers.add_parser(
        'sysinfo',
        help='Show CPU and numerical backend',
        description='Display the machine and NumPy/SciPy/BLAS versions used for timings'
    )

    args = parser.parse_args(argv)

    if args.verbose:
        configure_global_logging(logging.DEBUG if args.verbose > 1 else logging.INFO)

    # Dispatch
    if args.command == 'benchmark':
        from .benchmark_cmd import handle_benchmark
        return handle_benchmark(args)
    elif args.command == 'mean':
        from .mean_cmd import handle_mean
        return handle_mean(args)
    elif args.command == 'sysinfo':
        from ..system_info import print_system_info
        print_system_info()
        return 0
    else:
        parser.print_help()
        return 1


if __name__ == '__main__':
    sys.exit(main())
