"""Health scorer orchestrating all dimension evaluators."""

from datetime import datetime

from rot_detector.evaluators.base import BaseEvaluator
from rot_detector.evaluators.composite import calculate_overall_score
from rot_detector.evaluators.freshness import FreshnessEvaluator
from rot_detector.evaluators.license import LicenseEvaluator
from rot_detector.evaluators.maintainers import MaintainerEvaluator
from rot_detector.models.model_eval import ScoreWeights
from rot_detector.models.model_health import HealthScore
from rot_detector.models.model_package import PackageMetadata, RepositoryHealth


class HealthScorer:
    """Combines registry metadata and repository signals into a HealthScore.

    The scorer holds no mutable state: the same inputs and reference time
    always produce the same score, and any combination of missing fields
    still yields a well-formed result.
    """

    def __init__(
        self,
        weights: ScoreWeights | None = None,
        freshness: FreshnessEvaluator | None = None,
        maintainers: BaseEvaluator | None = None,
        license: BaseEvaluator | None = None,
    ) -> None:
        self.weights = weights or ScoreWeights()
        self.freshness = freshness or FreshnessEvaluator()
        self.maintainers = maintainers or MaintainerEvaluator()
        self.license = license or LicenseEvaluator()

    def score(
        self,
        metadata: PackageMetadata,
        repo_health: RepositoryHealth | None = None,
        current_time: datetime | None = None,
    ) -> HealthScore:
        """Score a package.

        Args:
            metadata: Registry metadata
            repo_health: Repository signals, None when unavailable
            current_time: Reference time for freshness (defaults to now)

        Returns:
            HealthScore with overall and per-dimension scores
        """
        freshness = self.freshness.evaluate(metadata, repo_health, current_time)
        maintainer_health = self.maintainers.evaluate(metadata, repo_health)
        license_health = self.license.evaluate(metadata, repo_health)

        overall = calculate_overall_score(
            freshness.score,
            maintainer_health.score,
            license_health.score,
            self.weights,
        )

        return HealthScore(
            overall=overall,
            freshness=freshness,
            maintainer_health=maintainer_health,
            license_health=license_health,
        )


_DEFAULT_SCORER = HealthScorer()


def calculate_health_score(
    metadata: PackageMetadata,
    repo_health: RepositoryHealth | None = None,
    current_time: datetime | None = None,
) -> HealthScore:
    """Score a package with the default weights and license policy."""
    return _DEFAULT_SCORER.score(metadata, repo_health, current_time)


def main() -> None:
    """Demonstrate health scoring on a few representative packages."""
    from datetime import UTC, timedelta

    from rot_detector.evaluators.formatting import format_days_since_update
    from rot_detector.models.model_health import classify_risk
    from rot_detector.models.model_package import Maintainer

    print("Health Scorer Demo")
    print("=" * 50)

    now = datetime.now(UTC)
    test_cases = [
        (
            "Active, well maintained, MIT",
            PackageMetadata(
                name="express",
                version="4.19.2",
                last_published=now - timedelta(days=20),
                maintainers=[Maintainer(name=f"m{i}") for i in range(6)],
                license="MIT",
            ),
            None,
        ),
        (
            "Archived repository",
            PackageMetadata(name="request", version="2.88.2", license="Apache-2.0"),
            RepositoryHealth(
                last_commit_date=now - timedelta(days=1500),
                contributor_count=280,
                is_archived=True,
            ),
        ),
        (
            "Single maintainer, GPL-2.0, 2 years old",
            PackageMetadata(
                name="left-pad",
                version="1.3.0",
                last_published=now - timedelta(days=800),
                maintainers=[Maintainer(name="solo")],
                license="GPL-2.0",
            ),
            None,
        ),
        (
            "No data at all",
            PackageMetadata(name="mystery"),
            None,
        ),
    ]

    for description, metadata, repo_health in test_cases:
        health = calculate_health_score(metadata, repo_health, now)
        print(f"\n{description}:")
        print(f"  Overall: {health.overall}/100 ({classify_risk(health.overall).value})")
        print(
            f"  Freshness: {health.freshness.score} ({health.freshness.status.value}, "
            f"{format_days_since_update(health.freshness.days_since_update)})"
        )
        print(
            f"  Maintainers: {health.maintainer_health.score} "
            f"(count={health.maintainer_health.count}, {health.maintainer_health.status.value})"
        )
        print(f"  License: {health.license_health.score} ({health.license_health.status.value})")


if __name__ == "__main__":
    main()
