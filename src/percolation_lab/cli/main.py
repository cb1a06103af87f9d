"""
Command-line interface for percolation_lab.

Single experiment:
    percolation stats 200 100 --seed 42

Sweep over grid sizes:
    percolation sweep --sizes 10,20,50,100 --trials 100 --output sweep.csv

Configured runs (see run.manifest.RunConfig for the YAML layout):
    percolation run start  --config threshold_scan.yaml
    percolation run status --config threshold_scan.yaml

Aggregation of existing results:
    percolation aggregate --results-dir out/results --output summary.csv
"""

import click
from pathlib import Path


def _parse_sizes(ctx, param, value):
    """Parse a comma-separated list of positive grid sizes."""
    try:
        sizes = [int(v) for v in value.split(',') if v.strip()]
    except ValueError:
        raise click.BadParameter(f"expected comma-separated integers, got '{value}'")
    if not sizes or any(n <= 0 for n in sizes):
        raise click.BadParameter("grid sizes must be positive integers")
    return sizes


@click.group()
@click.version_option(package_name='percolation_lab')
def cli():
    """Percolation Lab - Site percolation threshold estimation."""
    pass


@cli.command('stats')
@click.argument('n', type=int)
@click.argument('trials', type=int)
@click.option('--seed', type=int, help='Random seed for reproducible trials')
@click.option('--output', '-o', 'output_file', type=click.Path(),
              help='Save every trial threshold to this .npz file')
def stats_command(n, trials, seed, output_file):
    """Estimate the percolation threshold of an N-by-N grid over TRIALS experiments."""
    from ..percolation.stats import PercolationStats

    try:
        stats = PercolationStats(n, trials, seed=seed)
    except ValueError as e:
        raise click.UsageError(str(e))

    click.echo(stats.format_results())

    if output_file:
        output_file = Path(output_file)
        output_file.parent.mkdir(parents=True, exist_ok=True)
        stats.save(output_file)
        click.echo(f"Saved {trials} thresholds to {output_file}")


@cli.command('sweep')
@click.option('--sizes', '-n', required=True, callback=_parse_sizes,
              help='Comma-separated grid sizes, e.g. 10,20,50')
@click.option('--trials', '-t', required=True, type=click.IntRange(min=1),
              help='Number of trials per grid size')
@click.option('--seed', type=int, help='Root random seed')
@click.option('--output', '-o', 'output_file', type=click.Path(),
              help='Output CSV file (optional)')
def sweep_command(sizes, trials, seed, output_file):
    """Estimate the threshold for several grid sizes."""
    from ..percolation.analysis import run_sweep
    from ..utils.timing import Stopwatch, format_duration

    click.echo(f"Sweeping {len(sizes)} grid sizes with {trials} trials each")
    watch = Stopwatch()
    df = run_sweep(sizes, trials, seed=seed, verbose=True)
    click.echo(f"Done in {format_duration(watch.elapsed())}")

    click.echo(df.to_string(index=False))

    if output_file:
        output_file = Path(output_file)
        output_file.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(output_file, index=False)
        click.echo(f"\nSaved to {output_file}")


@cli.command('aggregate')
@click.option('--results-dir', '-r', required=True, type=click.Path(exists=True),
              help='Directory containing .stats files')
@click.option('--output', '-o', 'output_file', required=True, type=click.Path(),
              help='Output CSV file')
def aggregate_command(results_dir, output_file):
    """Aggregate .stats files into a CSV."""
    from ..percolation.analysis import aggregate_stats_files

    aggregate_stats_files(results_dir, output_file)


# ============================================================================
# Run Commands
# ============================================================================

@cli.group()
def run():
    """Configured batch runs."""
    pass


def _load_config(config_path):
    from ..run import RunConfig

    try:
        return RunConfig.from_yaml(config_path)
    except ValueError as e:
        raise click.UsageError(f"Invalid run config {config_path}: {e}")


@run.command('start')
@click.option('--config', '-c', 'config_path', required=True, type=click.Path(exists=True),
              help='Run config YAML file')
@click.option('--resume', is_flag=True,
              help='Skip experiments that already have results')
def run_start(config_path, resume):
    """Run every experiment of a config and aggregate the results."""
    from ..percolation.worker import run_config

    config = _load_config(config_path)
    run_config(config, resume=resume)


@run.command('status')
@click.option('--config', '-c', 'config_path', required=True, type=click.Path(exists=True),
              help='Run config YAML file')
def run_status(config_path):
    """Check progress of a run against expected outputs."""
    config = _load_config(config_path)
    experiments = config.experiments
    pending = config.pending_experiments()

    click.echo(f"Run: {config.run_name}")
    click.echo(f"Completed: {len(experiments) - len(pending)}/{len(experiments)}")
    for spec in pending:
        click.echo(f"  pending: {spec.name}")


if __name__ == '__main__':
    cli()
