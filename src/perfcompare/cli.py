"""Command-line interface for perfcompare.

Subcommands:
    perfcompare compare   Compare latency metrics of two benchmark jobs
"""

from __future__ import annotations

from pathlib import Path

import click

from perfcompare import __version__
from perfcompare.logging import get_logger, setup_logging

log = get_logger("cli")


@click.group()
@click.version_option(version=__version__)
def main() -> None:
    """perfcompare: compare benchmark latencies between two jobs."""


@main.command()
@click.argument("left", required=False, type=click.Path(exists=True, path_type=Path))
@click.argument("right", required=False, type=click.Path(exists=True, path_type=Path))
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="YAML config with job paths and thresholds.",
)
@click.option(
    "--min-count",
    "min_count",
    type=int,
    default=None,
    help="Discard data items whose request Count is below this (default: 10).",
)
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["table", "stats", "csv"]),
    default=None,
    help="Output view (default: table).",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Write stats/csv output to this file instead of stdout.",
)
@click.option("-v", "--verbose", is_flag=True, help="Show detailed output.")
@click.option("-q", "--quiet", is_flag=True, help="Only show warnings, errors and the report.")
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Also write a DEBUG log to this file.",
)
def compare(
    left: Path | None,
    right: Path | None,
    config_path: Path | None,
    min_count: int | None,
    fmt: str | None,
    output: Path | None,
    verbose: bool,
    quiet: bool,
    log_file: Path | None,
) -> None:
    """Compare latency metrics of two benchmark jobs.

    LEFT and RIGHT are run files or directories of run files.  They may
    be omitted when the config file provides ``left_job``/``right_job``.

    \b
    Examples:
        perfcompare compare results/baseline results/candidate
        perfcompare compare base.json cand.json --format stats --min-count 50
        perfcompare compare --config compare.yaml --format csv -o out.csv
    """
    from perfcompare.aggregate import get_flattened_comparison_data
    from perfcompare.config import config_from_mapping, load_config, validate_config
    from perfcompare.display import format_stats_table
    from perfcompare.export import export_csv
    from perfcompare.loader import load_job_metrics

    setup_logging(verbose=verbose, quiet=quiet, log_file=log_file)

    cli_overrides: dict[str, object] = {
        "left_job": left,
        "right_job": right,
        "min_allowed_request_count": min_count,
        "output_format": fmt,
        "output": output,
    }
    try:
        data = load_config(config_path) if config_path else {}
        config = config_from_mapping(data, cli_overrides=cli_overrides)
    except (FileNotFoundError, ValueError) as exc:
        raise click.ClickException(str(exc)) from exc

    problems = validate_config(config)
    for problem in problems:
        if problem.severity == "warning":
            log.warning("%s: %s", problem.field, problem.message)
    errors = [p for p in problems if p.severity == "error"]
    if errors:
        raise click.UsageError("; ".join(e.message for e in errors))

    try:
        left_metrics = load_job_metrics(config.left_job)  # type: ignore[arg-type]
        right_metrics = load_job_metrics(config.right_job)  # type: ignore[arg-type]
    except (FileNotFoundError, ValueError) as exc:
        raise click.ClickException(str(exc)) from exc

    job = get_flattened_comparison_data(
        left_metrics,
        right_metrics,
        config.min_allowed_request_count,
    )
    job.compute_stats_for_metric_samples()
    log.info("Compared %d metrics", len(job))

    if config.output_format == "table":
        job.pretty_print()
        return

    text = format_stats_table(job) if config.output_format == "stats" else export_csv(job)
    if config.output:
        config.output.write_text(text)
        click.echo(f"Exported to {config.output}")
    else:
        click.echo(text)
