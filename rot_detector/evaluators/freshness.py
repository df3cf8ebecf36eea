"""Freshness evaluator for update recency scoring."""

from dataclasses import dataclass
from datetime import datetime

from rot_detector.models.common import _utc_now
from rot_detector.models.model_health import FreshnessScore, FreshnessStatus
from rot_detector.models.model_package import PackageMetadata, RepositoryHealth

# Score when no update timestamp is known (benefit of the doubt)
UNKNOWN_FRESHNESS_SCORE = 50

# Ceiling applied to archived repositories
ARCHIVED_SCORE_CAP = 10


@dataclass(frozen=True)
class FreshnessBand:
    """One row of the freshness table. ``max_days=None`` matches everything."""

    max_days: int | None
    score: int
    status: FreshnessStatus

    def matches(self, days: int) -> bool:
        return self.max_days is None or days < self.max_days


# Evaluated top to bottom, first match wins
FRESHNESS_BANDS: tuple[FreshnessBand, ...] = (
    FreshnessBand(180, 100, FreshnessStatus.ACTIVE),  # < 6 months
    FreshnessBand(365, 75, FreshnessStatus.ACTIVE),  # 6-12 months
    FreshnessBand(730, 40, FreshnessStatus.STALE),  # 1-2 years
    FreshnessBand(1095, 20, FreshnessStatus.ABANDONED),  # 2-3 years
    FreshnessBand(None, 5, FreshnessStatus.ABANDONED),  # 3+ years
)


def resolve_last_update(
    metadata: PackageMetadata, repo_health: RepositoryHealth | None
) -> datetime | None:
    """Prefer the repository's last commit, fall back to the registry publish time."""
    if repo_health is not None and repo_health.last_commit_date is not None:
        return repo_health.last_commit_date
    return metadata.last_published


class FreshnessEvaluator:
    """Evaluates packages on days elapsed since their last known update.

    Bands (days since update):
        < 180   -> 100, active
        < 365   -> 75,  active
        < 730   -> 40,  stale
        < 1095  -> 20,  abandoned
        >= 1095 -> 5,   abandoned

    No timestamp -> 50, unknown. With a timestamp, an archived repository
    caps the score at 10 and forces abandoned.
    """

    def __init__(self, bands: tuple[FreshnessBand, ...] = FRESHNESS_BANDS):
        self.bands = bands

    def evaluate(
        self,
        metadata: PackageMetadata,
        repo_health: RepositoryHealth | None = None,
        current_time: datetime | None = None,
    ) -> FreshnessScore:
        """Calculate freshness score.

        Args:
            metadata: Registry metadata
            repo_health: Repository signals, None when unavailable
            current_time: Reference "now" (defaults to current UTC time)

        Returns:
            FreshnessScore for the package
        """
        if current_time is None:
            current_time = _utc_now()

        last_update = resolve_last_update(metadata, repo_health)
        is_archived = repo_health is not None and repo_health.is_archived

        if last_update is None:
            score = UNKNOWN_FRESHNESS_SCORE
            status = FreshnessStatus.UNKNOWN
            days_since_update = None
        else:
            # timedelta.days is already floored to whole days
            days_since_update = (current_time - last_update).days
            band = self._match_band(days_since_update)
            score, status = band.score, band.status

            if is_archived:
                score = min(score, ARCHIVED_SCORE_CAP)
                status = FreshnessStatus.ABANDONED

        return FreshnessScore(
            score=score,
            last_update=last_update,
            days_since_update=days_since_update,
            status=status,
        )

    def _match_band(self, days: int) -> FreshnessBand:
        for band in self.bands:
            if band.matches(days):
                return band
        return self.bands[-1]
