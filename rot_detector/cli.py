"""CLI interface for rot-detector."""

import logging

import typer
from rich.console import Console
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn

from rot_detector import __version__
from rot_detector.consts import DEFAULT_CONCURRENCY, GITHUB_TOKEN_ENV
from rot_detector.exceptions import RotDetectorError
from rot_detector.models.model_dependency import Dependency
from rot_detector.pipeline import run_scan
from rot_detector.reporter import print_json_report, print_report

app = typer.Typer(
    name="rot-detector",
    help="🧟 Detect dependency rot in your projects",
)

console = Console()
err_console = Console(stderr=True)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


@app.command()
def scan(
    path: str = typer.Argument(".", help="Path to package.json, requirements.txt or a project directory"),
    json_output: bool = typer.Option(False, "--json", help="Output results as JSON"),
    threshold: int = typer.Option(
        0, "--threshold", help="Fail if any dependency scores below this threshold"
    ),
    github_token: str = typer.Option(
        None, "--github-token", envvar=GITHUB_TOKEN_ENV, help="GitHub token for enhanced repo analysis"
    ),
    github: bool = typer.Option(True, "--github/--no-github", help="Query GitHub for repository health"),
    dev: bool = typer.Option(False, "--dev", help="Include dev dependencies in analysis"),
    concurrency: int = typer.Option(
        DEFAULT_CONCURRENCY, "--concurrency", "-c", min=1, help="Dependencies analyzed at once"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show verbose output"),
) -> None:
    """Scan a dependency file for software rot."""
    _configure_logging(verbose)

    try:
        if json_output:
            result = run_scan(
                path,
                include_dev=dev,
                use_github=github,
                github_token=github_token,
                concurrency=concurrency,
            )
        else:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                TextColumn("{task.completed}/{task.total}"),
                console=console,
                transient=True,
            ) as progress:
                task = progress.add_task("Analyzing dependencies...", total=None)

                def on_progress(current: int, total: int, dependency: Dependency) -> None:
                    progress.update(
                        task,
                        total=total,
                        completed=current,
                        description=f"Analyzed {dependency.name}",
                    )

                result = run_scan(
                    path,
                    include_dev=dev,
                    use_github=github,
                    github_token=github_token,
                    concurrency=concurrency,
                    progress_callback=on_progress,
                )
    except RotDetectorError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if json_output:
        print_json_report(result, console)
    else:
        print_report(result, console, verbose=verbose)

    if threshold > 0:
        below_threshold = [
            a for a in result.dependencies if a.health is not None and a.health.overall < threshold
        ]
        if below_threshold:
            err_console.print(
                f"[red]❌ {len(below_threshold)} dependencies scored below threshold of {threshold}[/red]"
            )
            raise typer.Exit(1)


@app.command()
def version() -> None:
    """Show the rot-detector version."""
    console.print(f"rot-detector {__version__}")


if __name__ == "__main__":
    app()
