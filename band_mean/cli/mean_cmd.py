"""
Running-mean CLI command.

- band-mean mean -k 2 1 2 3 4 5 6 7 8 9
"""

import numpy as np
from rich.console import Console

from ..errors import BandMeanError
from ..running_mean import band_running_mean, direct_running_mean, filter_running_mean


METHODS = {
    'direct': direct_running_mean,
    'band': band_running_mean,
    'filter': filter_running_mean,
}

MISSING = "NA"


def add_mean_parser(subparsers):
    """Add mean subcommand parser."""
    parser = subparsers.add_parser(
        'mean',
        help='Centered running mean of the given values',
        description='Print the centered running mean of radius k; edge positions print as NA'
    )

    parser.add_argument(
        'values',
        nargs='+',
        type=float,
        help='Input values'
    )

    parser.add_argument(
        '-k',
        dest='half_bandwidth',
        type=int,
        default=1,
        help='Window half-width k (default: 1)'
    )

    parser.add_argument(
        '--method', '-m',
        choices=sorted(METHODS),
        default='direct',
        help='Algorithm to use (default: direct)'
    )

    return parser


def format_running_mean(result) -> str:
    """Space-separated values with masked positions shown as NA."""
    mask = np.ma.getmaskarray(result)
    data = np.ma.getdata(result)
    return " ".join(MISSING if m else f"{v:g}" for v, m in zip(data, mask))


def handle_mean(args):
    """Handle mean subcommand."""
    console = Console()
    try:
        result = METHODS[args.method](args.values, args.half_bandwidth)
    except BandMeanError as e:
        console.print(f"[red]Error:[/red] {e}", style="bold")
        return 1
    console.print(format_running_mean(result), highlight=False)
    return 0
