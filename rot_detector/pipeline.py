"""Pipeline orchestration for a complete manifest scan.

Steps:
1. Resolve the manifest path (file or project directory)
2. Parse declared dependencies
3. Drop dev dependencies unless requested
4. Fetch registry metadata and repository health, score each dependency
5. Tally the summary
"""

import asyncio
import logging
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path

from rot_detector.clients import GitHubClient, NpmClient, PyPIClient
from rot_detector.clients.base_client import RegistryClient
from rot_detector.consts import DEFAULT_CONCURRENCY, REQUEST_DELAY_MS
from rot_detector.exceptions import UnsupportedManifestError
from rot_detector.models.model_dependency import Dependency, Ecosystem
from rot_detector.models.model_scan import DependencyAnalysis, ScanResult
from rot_detector.parsers import detect_file_type, parse_dependency_file, resolve_manifest_path
from rot_detector.scanner.scan_orchestrator import ScanOrchestrator

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, Dependency], None]


def load_dependencies(
    path: Path | str, include_dev: bool = False
) -> tuple[Path, Ecosystem, list[Dependency]]:
    """Resolve and parse a manifest.

    Args:
        path: Manifest file or directory containing one.
        include_dev: Keep development dependencies.

    Returns:
        Tuple of (manifest_path, ecosystem, dependencies).

    Raises:
        ManifestError: If the manifest is missing, unsupported or unparsable.
    """
    manifest_path = resolve_manifest_path(path)
    ecosystem = detect_file_type(manifest_path)
    if ecosystem is None:
        raise UnsupportedManifestError(f"Unsupported file type: {manifest_path.name}")

    dependencies = parse_dependency_file(manifest_path)
    logger.info(f"Found {len(dependencies)} dependencies in {manifest_path}")

    if not include_dev:
        dependencies = [d for d in dependencies if not d.is_dev]

    return manifest_path, ecosystem, dependencies


async def _scan_async(
    dependencies: list[Dependency],
    use_github: bool,
    github_token: str | None,
    concurrency: int,
    request_delay_ms: int,
    progress_callback: ProgressCallback | None,
) -> list[DependencyAnalysis]:
    """Run the batch with clients that are closed afterwards."""
    registry_clients: dict[Ecosystem, RegistryClient] = {
        Ecosystem.NPM: NpmClient(),
        Ecosystem.PYPI: PyPIClient(),
    }
    github_client = GitHubClient(token=github_token) if use_github else None

    orchestrator = ScanOrchestrator(
        registry_clients=registry_clients,
        github_client=github_client,
        request_delay_ms=request_delay_ms,
    )

    try:
        return await orchestrator.scan_batch(
            dependencies,
            concurrency=concurrency,
            progress_callback=progress_callback,
        )
    finally:
        for client in registry_clients.values():
            await client.close()
        if github_client is not None:
            await github_client.close()


def run_scan(
    path: Path | str,
    include_dev: bool = False,
    use_github: bool = True,
    github_token: str | None = None,
    concurrency: int = DEFAULT_CONCURRENCY,
    request_delay_ms: int = REQUEST_DELAY_MS,
    progress_callback: ProgressCallback | None = None,
) -> ScanResult:
    """Run a full scan: resolve → parse → fetch → score → summarize.

    Args:
        path: Manifest file or project directory.
        include_dev: Include dev dependencies (package.json only distinguishes them).
        use_github: Query GitHub for repository health.
        github_token: GitHub token for higher rate limits.
        concurrency: Maximum dependencies analyzed at once.
        request_delay_ms: Delay before each dependency in milliseconds.
        progress_callback: Called as (completed, total, dependency).

    Returns:
        ScanResult with per-dependency analyses and the summary tally.

    Raises:
        ManifestError: Manifest problems abort the scan.
    """
    manifest_path, ecosystem, dependencies = load_dependencies(path, include_dev)
    start_time = datetime.now(UTC)

    analyses = asyncio.run(
        _scan_async(
            dependencies,
            use_github=use_github,
            github_token=github_token,
            concurrency=concurrency,
            request_delay_ms=request_delay_ms,
            progress_callback=progress_callback,
        )
    )

    summary = ScanOrchestrator.summarize(analyses)
    duration = (datetime.now(UTC) - start_time).total_seconds()
    logger.info(
        f"Scan complete in {duration:.1f}s: {summary.healthy} healthy, {summary.warning} warning, "
        f"{summary.critical} critical, {summary.failed} failed"
    )

    return ScanResult(
        file=str(manifest_path),
        ecosystem=ecosystem,
        scanned_at=start_time,
        dependencies=analyses,
        summary=summary,
    )
