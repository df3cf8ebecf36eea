"""Tests for ScanOrchestrator batch analysis."""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from rot_detector.exceptions import PackageNotFoundError, RegistryFetchError
from rot_detector.models.model_dependency import Dependency, Ecosystem
from rot_detector.models.model_health import RiskLevel
from rot_detector.scanner import ScanOrchestrator


class TestScanOrchestrator:
    """Tests for ScanOrchestrator class."""

    @pytest.fixture
    def registry_metadata(self, make_metadata, sample_metadata):
        """Metadata served by the fake registry, keyed by package name."""
        return {
            "express": sample_metadata,
            # 4 years stale, single maintainer, no license
            "left-pad": make_metadata(
                name="left-pad", days_old=1500, maintainer_count=1, license=None
            ),
            "jest": make_metadata(name="jest", days_old=30, maintainer_count=3),
        }

    @pytest.fixture
    def npm_client(self, registry_metadata) -> MagicMock:
        """Fake npm client: known names resolve, anything else is a 404."""

        async def fetch(name: str):
            if name not in registry_metadata:
                raise PackageNotFoundError(name)
            return registry_metadata[name]

        client = MagicMock()
        client.fetch_metadata = AsyncMock(side_effect=fetch)
        return client

    @pytest.fixture
    def orchestrator(self, npm_client) -> ScanOrchestrator:
        return ScanOrchestrator(
            registry_clients={Ecosystem.NPM: npm_client},
            request_delay_ms=0,
        )

    @pytest.mark.asyncio
    async def test_analyze_dependency(self, orchestrator, sample_dependencies, now) -> None:
        analysis = await orchestrator.analyze_dependency(sample_dependencies[0], current_time=now)

        assert analysis.error is None
        assert analysis.metadata is not None
        assert analysis.metadata.name == "express"
        assert analysis.health is not None
        assert analysis.health.overall == 100
        assert analysis.risk_level == RiskLevel.HEALTHY

    @pytest.mark.asyncio
    async def test_missing_package_recorded_as_error(self, orchestrator, now) -> None:
        dep = Dependency(name="does-not-exist", ecosystem=Ecosystem.NPM)

        analysis = await orchestrator.analyze_dependency(dep, current_time=now)

        assert analysis.error == "Package not found: does-not-exist"
        assert analysis.metadata is None
        assert analysis.health is None
        assert analysis.risk_level == RiskLevel.UNKNOWN

    @pytest.mark.asyncio
    async def test_unsupported_ecosystem(self, orchestrator) -> None:
        dep = Dependency(name="flask", ecosystem=Ecosystem.PYPI)

        analysis = await orchestrator.analyze_dependency(dep)

        assert analysis.error == "Unsupported ecosystem: pypi"

    @pytest.mark.asyncio
    async def test_scan_batch_isolates_failures(
        self, orchestrator, sample_dependencies, now
    ) -> None:
        analyses = await orchestrator.scan_batch(sample_dependencies, current_time=now)

        assert [a.dependency.name for a in analyses] == [
            "express",
            "left-pad",
            "does-not-exist",
            "jest",
        ]
        assert analyses[2].error is not None
        assert all(a.error is None for i, a in enumerate(analyses) if i != 2)

        summary = ScanOrchestrator.summarize(analyses)
        assert summary.total == 4
        assert summary.failed == 1
        assert summary.healthy + summary.warning + summary.critical == 3
        assert summary.critical == 1  # left-pad

    @pytest.mark.asyncio
    async def test_scan_batch_preserves_order_with_concurrency(
        self, registry_metadata, sample_dependencies, now
    ) -> None:
        delays = {"express": 0.05, "left-pad": 0.0, "does-not-exist": 0.02, "jest": 0.01}

        async def slow_fetch(name: str):
            await asyncio.sleep(delays[name])
            if name not in registry_metadata:
                raise RegistryFetchError(name, "HTTP 500")
            return registry_metadata[name]

        client = MagicMock()
        client.fetch_metadata = AsyncMock(side_effect=slow_fetch)
        orchestrator = ScanOrchestrator({Ecosystem.NPM: client}, request_delay_ms=0)

        analyses = await orchestrator.scan_batch(sample_dependencies, concurrency=4, current_time=now)

        assert [a.dependency.name for a in analyses] == [d.name for d in sample_dependencies]
        assert analyses[2].error == "Failed to fetch does-not-exist: HTTP 500"

    @pytest.mark.asyncio
    async def test_progress_callback(self, orchestrator, sample_dependencies, now) -> None:
        calls = []

        await orchestrator.scan_batch(
            sample_dependencies,
            progress_callback=lambda done, total, dep: calls.append((done, total, dep.name)),
            current_time=now,
        )

        assert [c[0] for c in calls] == [1, 2, 3, 4]
        assert all(c[1] == 4 for c in calls)
        assert calls[0][2] == "express"

    @pytest.mark.asyncio
    async def test_github_client_used_for_repository_url(
        self, npm_client, sample_dependencies, sample_repo_health, now
    ) -> None:
        github_client = MagicMock()
        github_client.fetch_repo_health = AsyncMock(return_value=sample_repo_health)
        orchestrator = ScanOrchestrator(
            {Ecosystem.NPM: npm_client}, github_client=github_client, request_delay_ms=0
        )

        analysis = await orchestrator.analyze_dependency(sample_dependencies[0], current_time=now)

        github_client.fetch_repo_health.assert_awaited_once_with(
            "https://github.com/expressjs/express"
        )
        assert analysis.health is not None
        assert analysis.health.freshness.days_since_update == 3
        assert analysis.health.maintainer_health.count == 300

    @pytest.mark.asyncio
    async def test_github_skipped_without_repository_url(
        self, npm_client, sample_dependencies, now
    ) -> None:
        github_client = MagicMock()
        github_client.fetch_repo_health = AsyncMock()
        orchestrator = ScanOrchestrator(
            {Ecosystem.NPM: npm_client}, github_client=github_client, request_delay_ms=0
        )

        # left-pad metadata has no repository URL
        await orchestrator.analyze_dependency(sample_dependencies[1], current_time=now)

        github_client.fetch_repo_health.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_request_delay_applied(self, npm_client, sample_dependencies, now) -> None:
        orchestrator = ScanOrchestrator({Ecosystem.NPM: npm_client}, request_delay_ms=100)

        with patch("asyncio.sleep", new_callable=AsyncMock) as sleep:
            await orchestrator.scan_batch(sample_dependencies[:2], current_time=now)

        assert sleep.await_count == 2
        sleep.assert_awaited_with(0.1)

    def test_summarize_empty(self) -> None:
        summary = ScanOrchestrator.summarize([])
        assert summary.total == 0
        assert summary.failed == 0
