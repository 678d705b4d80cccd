"""
Benchmark CLI commands.

Commands:
- band-mean benchmark list - List registered benchmarks
- band-mean benchmark run  - Run benchmarks across sizes
"""

import argparse
from rich.console import Console
from rich.table import Table

from ..memory import format_bytes


def _int_list(value):
    try:
        return [int(v) for v in value.split(',') if v.strip()]
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected comma-separated integers, got {value!r}")


def add_benchmark_parser(subparsers):
    """Add benchmark subcommand parser."""
    parser = subparsers.add_parser(
        'benchmark',
        help='List and run running-mean benchmarks',
        description='Time sparse, dense and direct running means across input sizes'
    )

    parser.add_argument(
        'action',
        choices=['list', 'run'],
        nargs='?',
        default='run',
        help='Action to perform (default: run)'
    )

    parser.add_argument(
        '--class', '-c',
        dest='benchmark_class',
        help='Benchmark class(es) to run, comma-separated (default: all)'
    )

    parser.add_argument(
        '--sizes', '-s',
        type=_int_list,
        help='Signal lengths n, comma-separated (default: configured sizes)'
    )

    parser.add_argument(
        '-k',
        dest='half_bandwidth',
        type=int,
        help='Window half-width k (default: configured half_bandwidth)'
    )

    parser.add_argument(
        '--repeats', '-n',
        type=int,
        help='Timed runs per cell; the median is reported'
    )

    parser.add_argument(
        '--warmup', '-w',
        type=int,
        help='Untimed runs per cell'
    )

    parser.add_argument(
        '--seed',
        type=int,
        help='Seed for the generated signals'
    )

    parser.add_argument(
        '--no-validate',
        dest='validate',
        action='store_false',
        help='Skip the consistency check against the direct running mean'
    )

    parser.add_argument(
        '--memory',
        action='store_true',
        help='Record peak traced allocation of each kernel'
    )

    parser.add_argument(
        '--output', '-o',
        help='Save benchmark results to JSON file'
    )

    parser.add_argument(
        '--plot', '-p',
        help='Save a log-log latency plot (e.g. results.png)'
    )

    return parser


def handle_benchmark(args):
    """Handle benchmark subcommand."""
    console = Console()

    if args.action == 'list':
        return _handle_list(console, args)
    elif args.action == 'run':
        return _handle_run(console, args)
    else:
        console.print(f"[red]Unknown action: {args.action}[/red]")
        return 1


def _handle_list(console: Console, args):
    """List registered benchmarks."""
    from ..benchmarks import list_benchmarks

    benchmarks = list_benchmarks()

    table = Table(title="Running-Mean Benchmarks", show_header=True, header_style="bold cyan")
    table.add_column("Name", style="cyan", width=14)
    table.add_column("Growth", style="yellow", width=8)
    table.add_column("Description", style="white")

    for name, info in benchmarks.items():
        table.add_row(name, info['complexity'], info['description'])

    console.print(table)
    console.print(f"\n[dim]Total: {len(benchmarks)} benchmarks[/dim]")
    console.print("[dim]Run with: band-mean benchmark run --class <name>[/dim]")
    return 0


def _handle_run(console: Console, args):
    """Run benchmarks."""
    from ..benchmarks import run_benchmarks, save_results
    from ..errors import BandMeanError

    classes = args.benchmark_class.split(',') if args.benchmark_class else None

    console.print("[cyan]Running benchmarks...[/cyan]\n")

    try:
        report = run_benchmarks(
            classes=classes,
            sizes=args.sizes,
            k=args.half_bandwidth,
            repeats=args.repeats,
            warmup=args.warmup,
            seed=args.seed,
            validate=args.validate,
            track_memory=args.memory,
            include_system_info=True,
        )
    except BandMeanError as e:
        console.print(f"[red]Error: {e}[/red]")
        console.print("\nUse 'band-mean benchmark list' to see available benchmarks")
        return 1

    show_benchmark_results(console, report)

    if args.output:
        try:
            save_results(report, args.output)
            console.print(f"\n[green]Results saved to: {args.output}[/green]")
        except OSError as e:
            console.print(f"\n[red]Failed to save results: {e}[/red]")
            return 1

    if args.plot:
        from ..plot import plot_results
        try:
            plot_results(report, output_path=args.plot)
            console.print(f"[green]Plot saved to: {args.plot}[/green]")
        except (OSError, ValueError) as e:
            console.print(f"[red]Failed to save plot: {e}[/red]")
            return 1

    return 0


def show_benchmark_results(console: Console, report):
    """Display a report: system panel, per-cell table, growth table, errors."""
    from ..benchmarks import scaling_exponents
    from ..system_info import print_system_info

    if report.system:
        print_system_info(report.system, console=console)
        console.print()

    show_memory = any(r.peak_bytes is not None for r in report.results)

    table = Table(
        title=f"Benchmark Results (k={report.settings.get('k')})",
        show_header=True, header_style="bold cyan"
    )
    table.add_column("Method", style="cyan", width=14, no_wrap=True)
    table.add_column("n", justify="right", width=8)
    table.add_column("Median (ms)", justify="right", style="green", width=12)
    table.add_column("Min (ms)", justify="right", style="white", width=10)
    table.add_column("Max (ms)", justify="right", style="white", width=10)
    if show_memory:
        table.add_column("Peak mem", justify="right", style="magenta", width=10)
    table.add_column("Valid", justify="center")

    first = True
    for method in report.methods():
        if not first:
            table.add_section()
        first = False
        for r in sorted((r for r in report.results if r.method == method), key=lambda r: r.n):
            if not r.ok:
                row = [method, str(r.n), "[red]failed[/red]", "-", "-"]
                if show_memory:
                    row.append("-")
                row.append("[red]✗[/red]")
                table.add_row(*row)
                continue

            if r.valid is None:
                valid_mark = "[dim]-[/dim]"
            else:
                valid_mark = "[green]✓[/green]" if r.valid else "[red]✗[/red]"
            row = [method, str(r.n), f"{r.median_ms:.3f}", f"{r.min_ms:.3f}", f"{r.max_ms:.3f}"]
            if show_memory:
                row.append(format_bytes(r.peak_bytes) if r.peak_bytes is not None else "-")
            row.append(valid_mark)
            table.add_row(*row)

    console.print(table)

    exponents = scaling_exponents(report.results)
    if exponents:
        growth = Table(title="Scaling in n (log-log slope)", show_header=True, header_style="bold cyan")
        growth.add_column("Method", style="cyan", width=14)
        growth.add_column("Exponent", justify="right", style="yellow", width=10)
        for method, slope in exponents.items():
            growth.add_row(method, f"{slope:.2f}")
        console.print()
        console.print(growth)

    if report.errors:
        console.print()
        for cell, error in report.errors.items():
            console.print(f"[yellow]Warning:[/yellow] {cell}: {error}")
