"""Console and JSON rendering of scan results."""

import json
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from rot_detector.evaluators.formatting import format_days_since_update
from rot_detector.models.model_health import FreshnessStatus, LicenseStatus, RiskLevel
from rot_detector.models.model_scan import DependencyAnalysis, ScanResult

DASH = "—"

_RISK_STYLES = {
    RiskLevel.HEALTHY: ("green", "🟢", "Healthy"),
    RiskLevel.WARNING: ("yellow", "🟡", "Warning"),
    RiskLevel.CRITICAL: ("red", "🔴", "Critical"),
    RiskLevel.UNKNOWN: ("dim", "⚪", "Unknown"),
}


def _truncate(text: str, max_len: int) -> str:
    """Truncate text with ellipsis."""
    if len(text) <= max_len:
        return text
    return text[: max_len - 1] + "…"


def _sort_key(analysis: DependencyAnalysis) -> int:
    """Worst score first; unscored dependencies last."""
    return analysis.health.overall if analysis.health else 999


def _format_row(analysis: DependencyAnalysis) -> list[str]:
    """Format a single dependency row for the table."""
    name = escape(_truncate(analysis.dependency.name, 28))

    if analysis.error is not None:
        return [f"[dim]{name}[/dim]", DASH, DASH, DASH, DASH, "[red]Error[/red]"]

    health = analysis.health
    if health is None:
        return [f"[dim]{name}[/dim]", DASH, DASH, DASH, DASH, "[yellow]Unknown[/yellow]"]

    color, emoji, label = _RISK_STYLES[analysis.risk_level]
    score_str = f"{emoji} [bold {color}]{health.overall}[/bold {color}]"
    status_str = f"[{color}]{label}[/{color}]"

    # Last update
    last_update = format_days_since_update(health.freshness.days_since_update)
    if health.freshness.status == FreshnessStatus.ABANDONED:
        update_color = "red"
    elif health.freshness.status == FreshnessStatus.STALE:
        update_color = "yellow"
    else:
        update_color = "green"

    # Maintainer count
    count = health.maintainer_health.count
    if count >= 3:
        maintainer_color = "green"
    elif count >= 2:
        maintainer_color = "yellow"
    else:
        maintainer_color = "red"

    # License
    license_str = escape(_truncate(health.license_health.license or "Unknown", 13))
    if health.license_health.status == LicenseStatus.APPROVED:
        license_color = "green"
    elif health.license_health.status == LicenseStatus.DEPRECATED:
        license_color = "red"
    else:
        license_color = "yellow"

    if analysis.dependency.is_dev:
        name = f"[dim]{name} (dev)[/dim]"

    return [
        name,
        score_str,
        f"[{update_color}]{last_update}[/{update_color}]",
        f"[{maintainer_color}]{count}[/{maintainer_color}]",
        f"[{license_color}]{license_str}[/{license_color}]",
        status_str,
    ]


def build_table(result: ScanResult) -> Table:
    """Build the per-dependency table, worst score first."""
    table = Table(border_style="dim")
    table.add_column("Package", style="bold", max_width=30)
    table.add_column("Score", justify="right")
    table.add_column("Last Update")
    table.add_column("Maintainers", justify="right")
    table.add_column("License")
    table.add_column("Status")

    for analysis in sorted(result.dependencies, key=_sort_key):
        table.add_row(*_format_row(analysis))

    return table


def print_summary(result: ScanResult, console: Console) -> None:
    """Print the summary tally and a recommendation."""
    summary = result.summary

    console.print("[bold]Summary[/bold]")
    console.print("[dim]" + "─" * 50 + "[/dim]")
    console.print(f"  Total packages: [bold]{summary.total}[/bold]")
    console.print(f"  🟢 Healthy (80-100): [bold green]{summary.healthy}[/bold green]")
    console.print(f"  🟡 Warning (50-79):  [bold yellow]{summary.warning}[/bold yellow]")
    console.print(f"  🔴 Critical (0-49):  [bold red]{summary.critical}[/bold red]")
    if summary.failed > 0:
        console.print(f"  ⚪ Failed to check:  [bold dim]{summary.failed}[/bold dim]")
    console.print()

    if summary.critical > 0:
        console.print("[bold red]⚠️  Action Required![/bold red]")
        console.print("[red]Some dependencies are critical and should be reviewed or replaced.[/red]")
    elif summary.warning > 0:
        console.print("[yellow]📋 Some dependencies could use attention.[/yellow]")
    else:
        console.print("[green]✅ All dependencies look healthy![/green]")
    console.print()


def print_report(result: ScanResult, console: Console, verbose: bool = False) -> None:
    """Print scan results to the console as a table plus summary."""
    console.print()
    console.print("[bold cyan]🧟 Dependency Rot Detector[/bold cyan]")
    console.print(f"[dim]Scanned: {escape(result.file)}[/dim]")
    console.print(f"[dim]Source: {result.ecosystem.value.upper()}[/dim]")
    console.print(f"[dim]Time: {result.scanned_at.isoformat()}[/dim]")
    console.print()

    if result.dependencies:
        console.print(build_table(result))
    else:
        console.print("[yellow]No dependencies found.[/yellow]")
    console.print()

    if verbose:
        failures = [a for a in result.dependencies if a.error is not None]
        if failures:
            console.print(f"[yellow]Failed dependencies ({len(failures)}):[/yellow]")
            for analysis in failures:
                console.print(
                    f"  [dim]{escape(analysis.dependency.name)}:[/dim] {escape(analysis.error or '')}"
                )
            console.print()

    print_summary(result, console)


def build_json_report(result: ScanResult) -> dict[str, Any]:
    """Serialize a scan result with ISO-8601 timestamps."""
    return result.model_dump(mode="json")


def print_json_report(result: ScanResult, console: Console) -> None:
    """Print scan results as indented JSON."""
    console.print_json(json.dumps(build_json_report(result)), indent=2)
