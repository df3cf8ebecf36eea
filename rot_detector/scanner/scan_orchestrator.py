"""Orchestrates dependency analysis with per-dependency failure isolation."""

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime

from rot_detector.clients.base_client import RegistryClient
from rot_detector.clients.github_client import GitHubClient
from rot_detector.consts import DEFAULT_CONCURRENCY, REQUEST_DELAY_MS
from rot_detector.evaluators.registry import HealthScorer
from rot_detector.models.model_dependency import Dependency, Ecosystem
from rot_detector.models.model_health import RiskLevel
from rot_detector.models.model_scan import DependencyAnalysis, ScanSummary

logger = logging.getLogger(__name__)


class ScanOrchestrator:
    """Fetches, scores and tallies dependencies.

    A failure while analyzing one dependency is recorded on that
    dependency's DependencyAnalysis and never affects the others.
    """

    def __init__(
        self,
        registry_clients: dict[Ecosystem, RegistryClient],
        github_client: GitHubClient | None = None,
        scorer: HealthScorer | None = None,
        request_delay_ms: int = REQUEST_DELAY_MS,
    ):
        """Initialize ScanOrchestrator.

        Args:
            registry_clients: Registry client per ecosystem
            github_client: GitHub client, None to skip repository analysis
            scorer: HealthScorer instance (default weights if None)
            request_delay_ms: Delay before each dependency in milliseconds
        """
        self.registry_clients = registry_clients
        self.github_client = github_client
        self.scorer = scorer or HealthScorer()
        self.request_delay_ms = request_delay_ms

    async def analyze_dependency(
        self, dependency: Dependency, current_time: datetime | None = None
    ) -> DependencyAnalysis:
        """Fetch metadata and repository health for a dependency and score it.

        Any exception raised while fetching is captured in the result's
        ``error`` field with metadata and health left empty.

        Args:
            dependency: Dependency to analyze
            current_time: Reference time for freshness (defaults to now)

        Returns:
            DependencyAnalysis for the dependency
        """
        try:
            client = self.registry_clients.get(dependency.ecosystem)
            if client is None:
                raise ValueError(f"Unsupported ecosystem: {dependency.ecosystem.value}")

            metadata = await client.fetch_metadata(dependency.name)

            repo_health = None
            if self.github_client is not None and metadata.repository_url:
                repo_health = await self.github_client.fetch_repo_health(metadata.repository_url)

            health = self.scorer.score(metadata, repo_health, current_time)
        except Exception as e:
            logger.warning(f"✗ {dependency.name}: {e}")
            return DependencyAnalysis(dependency=dependency, error=str(e) or type(e).__name__)

        logger.info(f"✓ {dependency.name}: {health.overall}/100")
        return DependencyAnalysis(dependency=dependency, metadata=metadata, health=health)

    async def scan_batch(
        self,
        dependencies: list[Dependency],
        concurrency: int = DEFAULT_CONCURRENCY,
        progress_callback: Callable[[int, int, Dependency], None] | None = None,
        current_time: datetime | None = None,
    ) -> list[DependencyAnalysis]:
        """Analyze dependencies with bounded concurrency.

        With concurrency=1 dependencies are processed one at a time in
        manifest order. Results are always returned in manifest order.

        Args:
            dependencies: Dependencies to analyze
            concurrency: Maximum dependencies in flight
            progress_callback: Called as (completed, total, dependency) after each one
            current_time: Reference time for freshness (defaults to now)

        Returns:
            One DependencyAnalysis per dependency
        """
        semaphore = asyncio.Semaphore(max(1, concurrency))
        completed = 0
        total = len(dependencies)

        async def analyze_one(dependency: Dependency) -> DependencyAnalysis:
            nonlocal completed

            async with semaphore:
                # Small delay to avoid rate limiting
                if self.request_delay_ms:
                    await asyncio.sleep(self.request_delay_ms / 1000)

                analysis = await self.analyze_dependency(dependency, current_time)

                completed += 1
                if progress_callback:
                    progress_callback(completed, total, dependency)
                return analysis

        if concurrency <= 1:
            return [await analyze_one(dependency) for dependency in dependencies]

        return list(await asyncio.gather(*[analyze_one(dep) for dep in dependencies]))

    @staticmethod
    def summarize(analyses: list[DependencyAnalysis]) -> ScanSummary:
        """Tally analyses by risk level.

        Failed dependencies have no score, so they only count towards
        ``failed``.
        """
        risk_levels = [a.risk_level for a in analyses]
        return ScanSummary(
            total=len(analyses),
            healthy=risk_levels.count(RiskLevel.HEALTHY),
            warning=risk_levels.count(RiskLevel.WARNING),
            critical=risk_levels.count(RiskLevel.CRITICAL),
            failed=sum(1 for a in analyses if a.error is not None),
        )
