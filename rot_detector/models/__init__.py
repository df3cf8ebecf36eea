"""Pydantic models for rot-detector."""

from rot_detector.models.model_dependency import Dependency, DependencyType, Ecosystem
from rot_detector.models.model_eval import LicensePolicy, ScoreWeights
from rot_detector.models.model_health import (
    FreshnessScore,
    FreshnessStatus,
    HealthScore,
    LicenseScore,
    LicenseStatus,
    MaintainerScore,
    MaintainerStatus,
    RiskLevel,
    classify_risk,
)
from rot_detector.models.model_package import Maintainer, PackageMetadata, RepositoryHealth
from rot_detector.models.model_scan import DependencyAnalysis, ScanResult, ScanSummary

__all__ = [
    # Manifest models
    "Dependency",
    "DependencyType",
    "Ecosystem",
    # Registry models
    "Maintainer",
    "PackageMetadata",
    "RepositoryHealth",
    # Score models
    "FreshnessScore",
    "FreshnessStatus",
    "HealthScore",
    "LicenseScore",
    "LicenseStatus",
    "MaintainerScore",
    "MaintainerStatus",
    "RiskLevel",
    "classify_risk",
    # Configuration models
    "LicensePolicy",
    "ScoreWeights",
    # Scan models
    "DependencyAnalysis",
    "ScanResult",
    "ScanSummary",
]
