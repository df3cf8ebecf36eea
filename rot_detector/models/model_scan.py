from datetime import datetime

from pydantic import BaseModel, Field, computed_field

from rot_detector.models.common import _utc_now
from rot_detector.models.model_dependency import Dependency, Ecosystem
from rot_detector.models.model_health import HealthScore, RiskLevel, classify_risk
from rot_detector.models.model_package import PackageMetadata


class DependencyAnalysis(BaseModel):
    """Analysis result for a single dependency."""

    dependency: Dependency
    metadata: PackageMetadata | None = None
    health: HealthScore | None = None
    error: str | None = Field(default=None, description="Fetch failure message, if any")

    @computed_field
    @property
    def risk_level(self) -> RiskLevel:
        """Risk level of the overall score, unknown when the dependency was not scored."""
        return classify_risk(self.health.overall if self.health else None)


class ScanSummary(BaseModel):
    """Tally of a scan by risk level."""

    total: int = Field(default=0, ge=0)
    healthy: int = Field(default=0, ge=0, description="Overall 80-100")
    warning: int = Field(default=0, ge=0, description="Overall 50-79")
    critical: int = Field(default=0, ge=0, description="Overall 0-49")
    failed: int = Field(default=0, ge=0, description="Could not analyze")


class ScanResult(BaseModel):
    """Full result of scanning one manifest."""

    file: str = Field(description="Absolute path of the scanned manifest")
    ecosystem: Ecosystem
    scanned_at: datetime = Field(default_factory=_utc_now)
    dependencies: list[DependencyAnalysis] = Field(default_factory=list)
    summary: ScanSummary = Field(default_factory=ScanSummary)
