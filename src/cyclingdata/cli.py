"""Command-line interface for validating cycling workout data."""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

app = typer.Typer(
    name="cyclingdata",
    help="Load and validate cycling workout, video and timeline data.",
    no_args_is_help=True,
)

console = Console()


@app.callback()
def main(
    log_level: Annotated[
        str,
        typer.Option("--log-level", help="Log level for diagnostics on stderr."),
    ] = "WARNING",
    json_logs: Annotated[
        bool,
        typer.Option("--json-logs", help="Emit log events as JSON."),
    ] = False,
) -> None:
    """Configure logging for every command."""
    from cyclingdata.utils.logging import configure_logging

    configure_logging(level=log_level, json_output=json_logs)


@app.command()
def validate(
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration YAML file.",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    data_root: Annotated[
        Path | None,
        typer.Option(
            "--data-root",
            "-d",
            help="Directory holding workouts.json, videos.json and workoutdetails/.",
            file_okay=False,
        ),
    ] = None,
) -> None:
    """Validate all configured data files and exit non-zero if any is invalid."""
    from cyclingdata.config import ProjectConfig, load_config
    from cyclingdata.validation import ConsoleReporter, ValidationRunner

    project_config = load_config(config) if config is not None else ProjectConfig()
    if data_root is not None:
        data_paths = project_config.data_paths.model_copy(update={"data_root": data_root})
        project_config = project_config.model_copy(update={"data_paths": data_paths})

    console.print("[blue]Running data validation...[/blue]")

    runner = ValidationRunner(project_config)
    reports = runner.run()

    reporter = ConsoleReporter(console)
    reporter.print_reports(reports)

    if any(not r.valid for r in reports):
        raise typer.Exit(code=1)


@app.command()
def fetch(
    url: Annotated[str, typer.Argument(help="URL of a workout details JSON file.")],
    timeout_ms: Annotated[
        int, typer.Option("--timeout-ms", help="Timeout per attempt in milliseconds.")
    ] = 30000,
    retries: Annotated[
        int, typer.Option("--retries", help="Retries after the first attempt.")
    ] = 3,
    retry_delay_ms: Annotated[
        int,
        typer.Option("--retry-delay-ms", help="Base backoff delay in milliseconds."),
    ] = 1000,
) -> None:
    """Fetch a remote workout timeline, print it and validate it."""
    from cyclingdata.config import FetchConfig
    from cyclingdata.exceptions import LoadError, NetworkError
    from cyclingdata.ingestion import fetch_workout_details
    from cyclingdata.schemas import segments_to_frame
    from cyclingdata.validation import ConsoleReporter, validate_workout_details

    fetch_config = FetchConfig(
        timeout_ms=timeout_ms, retries=retries, retry_delay_ms=retry_delay_ms
    )

    console.print(f"[blue]Fetching {url}[/blue]")
    try:
        segments = fetch_workout_details(url, fetch_config)
    except NetworkError as e:
        status = f" (HTTP {e.status_code})" if e.status_code is not None else ""
        console.print(f"[red]Network error{status}: {e}[/red]")
        raise typer.Exit(code=1) from e
    except LoadError as e:
        console.print(f"[red]Load error: {e}[/red]")
        raise typer.Exit(code=1) from e

    frame = segments_to_frame(segments)
    table = Table(title=f"Workout timeline ({len(frame)} segments)")
    for column in frame.columns:
        table.add_column(column, justify="left" if frame[column].dtype == object else "right")
    for row in frame.itertuples(index=False):
        table.add_row(*(str(value) for value in row))
    console.print(table)

    result = validate_workout_details([segment.as_json() for segment in segments])
    ConsoleReporter(console).print_result(url, result)

    if not result.valid:
        raise typer.Exit(code=1)


@app.command()
def segment(
    path: Annotated[
        Path,
        typer.Argument(help="Workout details JSON file.", exists=True, dir_okay=False),
    ],
    minutes: Annotated[float, typer.Argument(help="Elapsed minutes into the workout.")],
) -> None:
    """Show the segment active at a given elapsed time."""
    from cyclingdata.exceptions import LoadError
    from cyclingdata.ingestion import get_current_segment, load_workout_details

    try:
        segments = load_workout_details(path)
    except LoadError as e:
        console.print(f"[red]Load error: {e}[/red]")
        raise typer.Exit(code=1) from e

    current = get_current_segment(segments, minutes)
    if current is None:
        console.print("[green]Workout complete[/green]")
        return

    table = Table(title=f"Segment at {minutes:g} min")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")
    for name, value in current.as_json().items():
        table.add_row(name, str(value))
    console.print(table)


@app.command()
def version() -> None:
    """Show version information."""
    from cyclingdata import __version__

    console.print(f"cyclingdata version {__version__}")


if __name__ == "__main__":
    app()
