#!/usr/bin/env python3
"""
Command-line interface for resume performance insights.

Reads a snapshot file (YAML or JSON with "applications" and "resumes" lists)
and prints analytics computed from it.

Commands:
    report   - Full insights report (overview, table, chart, distribution, recommendations)
    chart    - Chart series for one metric
    board    - Applications grouped by pipeline stage
    resumes  - Resumes with usage counts and whether they can be deleted
"""

from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from jobtrail.contexts.insights import (
    ChartMetric,
    apply_overrides,
    compute_analytics,
    format_insights_report,
    load_insights_config,
    sort_by_success_rate,
)
from jobtrail.contexts.insights.charts import build_chart_series
from jobtrail.contexts.insights.exceptions import InvalidConfigError
from jobtrail.contexts.insights.logger import setup_insights_logger
from jobtrail.contexts.tracking import (
    can_delete_resume,
    group_by_status,
    load_snapshot,
    usage_count,
)
from jobtrail.contexts.tracking.exceptions import InvalidRecordError
from jobtrail.utils.logger import session_log_dir
from jobtrail.utils.report_formatter import render_bar
from jobtrail.utils.timestamp import format_timestamp

app = typer.Typer(
    add_completion=False,
    help="Resume performance insights from a job application snapshot",
    invoke_without_command=True,
)

SnapshotArg = Annotated[Path, typer.Argument(help="Snapshot file (YAML or JSON)")]
ConfigOpt = Annotated[
    Optional[Path], typer.Option("--config", "-c", help="Insights config YAML")
]
PipelineOpt = Annotated[
    Optional[str], typer.Option("--pipeline", "-p", help="five_stage or six_stage")
]


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _load(snapshot_path: Path, config_path: Optional[Path], **overrides):
    """Load snapshot and config, exiting with code 1 on any input error."""
    try:
        config = apply_overrides(load_insights_config(config_path), **overrides)
        snapshot = load_snapshot(snapshot_path)
    except (FileNotFoundError, InvalidConfigError, InvalidRecordError) as e:
        typer.secho(f"✗ {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    return snapshot, config


@app.command("report")
def report_command(
    snapshot_path: SnapshotArg,
    config_path: ConfigOpt = None,
    pipeline: PipelineOpt = None,
    metric: Annotated[
        Optional[ChartMetric], typer.Option("--metric", "-m", help="Chart metric")
    ] = None,
    log: Annotated[bool, typer.Option("--log", help="Write a session log under LOGS_PATH")] = False,
):
    """
    Print the full insights report.

    Examples:\n

        $ resume_insights.py report data/snapshot.yaml

        $ resume_insights.py report data/snapshot.yaml --pipeline six_stage -m success_rate
    """
    snapshot, config = _load(snapshot_path, config_path, pipeline=pipeline, metric=metric)

    if log:
        log_dir = session_log_dir("insights")
        log_file = setup_insights_logger(log_dir, config.pipeline, config.metric)
        typer.secho(f"Logging to {log_file}", fg=typer.colors.BLUE)

    result = compute_analytics(snapshot.applications, snapshot.resumes, config)
    typer.echo(format_insights_report(result))


@app.command("chart")
def chart_command(
    snapshot_path: SnapshotArg,
    metric: Annotated[
        ChartMetric, typer.Option("--metric", "-m", help="Chart metric")
    ] = ChartMetric.APPLICATIONS,
    ranked: Annotated[
        bool, typer.Option("--ranked", "-r", help="Order by success rate, best first")
    ] = False,
    config_path: ConfigOpt = None,
    pipeline: PipelineOpt = None,
):
    """Print the chart series for one metric, one resume per line."""
    snapshot, config = _load(snapshot_path, config_path, pipeline=pipeline, metric=metric)
    result = compute_analytics(snapshot.applications, snapshot.resumes, config)

    analytics = result.resume_analytics
    if ranked:
        analytics = sort_by_success_rate(analytics)
    points = build_chart_series(analytics, config.chart_metric, config.label_length)

    if not points:
        typer.secho("No resumes linked to applications yet.", fg=typer.colors.YELLOW)
        raise typer.Exit()

    is_percentage = config.chart_metric.is_percentage
    suffix = "%" if is_percentage else ""
    scale = 100 if is_percentage else max(point.value for point in points)
    for point in points:
        bar = render_bar(point.value, scale)
        typer.echo(f"{point.label:<20} {str(point.value) + suffix:>8}  {bar}")


@app.command("board")
def board_command(
    snapshot_path: SnapshotArg,
    config_path: ConfigOpt = None,
    pipeline: PipelineOpt = None,
):
    """Print applications grouped by pipeline stage."""
    snapshot, config = _load(snapshot_path, config_path, pipeline=pipeline)
    variant = config.pipeline_variant

    columns = group_by_status(snapshot.applications, variant)
    for stage in variant.stages:
        apps = columns[stage.value]
        typer.secho(f"\n{stage.label} ({len(apps)})", fg=typer.colors.BLUE, bold=True)
        for application in apps:
            typer.echo(
                f"  • {application.job_title} @ {application.company} "
                f"(updated {format_timestamp(application.updated_at)})"
            )

    skipped = len(snapshot.applications) - sum(len(apps) for apps in columns.values())
    if skipped:
        typer.secho(
            f"\n⊘ {skipped} application(s) with a status outside '{variant.name}'",
            fg=typer.colors.YELLOW,
        )


@app.command("resumes")
def resumes_command(snapshot_path: SnapshotArg):
    """List resumes with usage counts and deletability."""
    snapshot, _ = _load(snapshot_path, None)

    if not snapshot.resumes:
        typer.secho("No resumes in snapshot.", fg=typer.colors.YELLOW)
        raise typer.Exit()

    for resume in snapshot.resumes:
        used = usage_count(resume.id, snapshot.applications)
        deletable = can_delete_resume(resume.id, snapshot.applications)
        status = "deletable" if deletable else f"in use by {used} application(s)"
        typer.echo(
            f"{resume.name:<30} {resume.display_size:>10}  "
            f"{format_timestamp(resume.upload_date):>12}  {status}"
        )


if __name__ == "__main__":
    app()
