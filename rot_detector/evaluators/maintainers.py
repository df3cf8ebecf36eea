"""Maintainer evaluator for bus-factor scoring."""

from dataclasses import dataclass

from rot_detector.models.model_health import MaintainerScore, MaintainerStatus
from rot_detector.models.model_package import PackageMetadata, RepositoryHealth


@dataclass(frozen=True)
class MaintainerBand:
    """One row of the maintainer table, matching counts >= min_count."""

    min_count: int
    score: int
    status: MaintainerStatus

    def matches(self, count: int) -> bool:
        return count >= self.min_count


# Evaluated top to bottom, first match wins
MAINTAINER_BANDS: tuple[MaintainerBand, ...] = (
    MaintainerBand(5, 100, MaintainerStatus.HEALTHY),
    MaintainerBand(3, 85, MaintainerStatus.HEALTHY),
    MaintainerBand(2, 70, MaintainerStatus.WARNING),
    MaintainerBand(1, 40, MaintainerStatus.WARNING),
    MaintainerBand(0, 10, MaintainerStatus.CRITICAL),
)


def resolve_maintainer_count(
    metadata: PackageMetadata, repo_health: RepositoryHealth | None
) -> int:
    """Contributor count when the repository reports one, else registry maintainers.

    A contributor count of 0 usually means the contributors endpoint was not
    readable, so it falls back to the registry list.
    """
    if repo_health is not None and repo_health.contributor_count:
        return repo_health.contributor_count
    return len(metadata.maintainers)


class MaintainerEvaluator:
    """Evaluates packages on how many people maintain them."""

    def __init__(self, bands: tuple[MaintainerBand, ...] = MAINTAINER_BANDS):
        self.bands = bands

    def evaluate(
        self, metadata: PackageMetadata, repo_health: RepositoryHealth | None = None
    ) -> MaintainerScore:
        count = resolve_maintainer_count(metadata, repo_health)
        band = next((b for b in self.bands if b.matches(count)), self.bands[-1])
        return MaintainerScore(score=band.score, count=count, status=band.status)
