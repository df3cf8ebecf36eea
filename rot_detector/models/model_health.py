from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from rot_detector.consts import RISK_HEALTHY_MIN_SCORE, RISK_WARNING_MIN_SCORE


class FreshnessStatus(str, Enum):
    """Recency of the last known update."""

    ACTIVE = "active"
    STALE = "stale"
    ABANDONED = "abandoned"
    UNKNOWN = "unknown"


class MaintainerStatus(str, Enum):
    """Bus-factor classification."""

    HEALTHY = "healthy"
    WARNING = "warning"
    CRITICAL = "critical"


class LicenseStatus(str, Enum):
    """License classification."""

    APPROVED = "approved"
    WARNING = "warning"
    UNKNOWN = "unknown"
    DEPRECATED = "deprecated"


class RiskLevel(str, Enum):
    """Risk classification of an overall score."""

    HEALTHY = "healthy"
    WARNING = "warning"
    CRITICAL = "critical"
    UNKNOWN = "unknown"


class FreshnessScore(BaseModel):
    """Freshness sub-score."""

    model_config = ConfigDict(frozen=True)

    score: int = Field(ge=0, le=100)
    last_update: datetime | None = Field(default=None, description="Timestamp the score is based on")
    days_since_update: int | None = Field(default=None)
    status: FreshnessStatus


class MaintainerScore(BaseModel):
    """Maintainer (bus factor) sub-score."""

    model_config = ConfigDict(frozen=True)

    score: int = Field(ge=0, le=100)
    count: int = Field(ge=0, description="Contributors or registry maintainers")
    status: MaintainerStatus


class LicenseScore(BaseModel):
    """License sub-score."""

    model_config = ConfigDict(frozen=True)

    score: int = Field(ge=0, le=100)
    license: str | None = None
    status: LicenseStatus


class HealthScore(BaseModel):
    """Overall health score with its three sub-scores."""

    model_config = ConfigDict(frozen=True)

    overall: int = Field(ge=0, le=100, description="Weighted composite score 0-100")
    freshness: FreshnessScore
    maintainer_health: MaintainerScore
    license_health: LicenseScore


def classify_risk(score: int | None) -> RiskLevel:
    """Classify an overall score. None means the dependency could not be scored."""
    if score is None:
        return RiskLevel.UNKNOWN
    if score >= RISK_HEALTHY_MIN_SCORE:
        return RiskLevel.HEALTHY
    if score >= RISK_WARNING_MIN_SCORE:
        return RiskLevel.WARNING
    return RiskLevel.CRITICAL
