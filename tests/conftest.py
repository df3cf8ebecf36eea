"""Pytest configuration and fixtures."""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import pytest

from rot_detector.models.model_dependency import Dependency, Ecosystem
from rot_detector.models.model_package import Maintainer, PackageMetadata, RepositoryHealth

# Fixed reference time so day counts are exact
NOW = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def now() -> datetime:
    """Reference "current time" for freshness scoring."""
    return NOW


@pytest.fixture
def make_metadata() -> Callable[..., PackageMetadata]:
    """Factory for PackageMetadata with sensible defaults.

    ``days_old`` sets last_published relative to NOW, ``maintainer_count``
    generates that many maintainers.
    """

    def _make(
        name: str = "pkg",
        days_old: int | None = 10,
        maintainer_count: int = 5,
        license: str | None = "MIT",
        repository_url: str | None = None,
    ) -> PackageMetadata:
        return PackageMetadata(
            name=name,
            version="1.0.0",
            last_published=NOW - timedelta(days=days_old) if days_old is not None else None,
            maintainers=[Maintainer(name=f"maintainer{i}") for i in range(maintainer_count)],
            license=license,
            repository_url=repository_url,
        )

    return _make


@pytest.fixture
def sample_metadata(make_metadata) -> PackageMetadata:
    """A healthy npm package."""
    return make_metadata(
        name="express",
        days_old=20,
        maintainer_count=6,
        license="MIT",
        repository_url="https://github.com/expressjs/express",
    )


@pytest.fixture
def sample_repo_health() -> RepositoryHealth:
    """Repository signals for an active project."""
    return RepositoryHealth(
        last_commit_date=NOW - timedelta(days=3),
        contributor_count=300,
        open_issues=120,
        stars=64000,
        is_archived=False,
    )


@pytest.fixture
def sample_dependencies() -> list[Dependency]:
    """Dependencies as parsed from a package.json."""
    return [
        Dependency(name="express", version="4.19.2", ecosystem=Ecosystem.NPM),
        Dependency(name="left-pad", version="1.3.0", ecosystem=Ecosystem.NPM),
        Dependency(name="does-not-exist", version="0.0.1", ecosystem=Ecosystem.NPM),
        Dependency(name="jest", version="29.7.0", ecosystem=Ecosystem.NPM, is_dev=True),
    ]
