"""Evaluators module for scoring dependency health.

Packages are evaluated on three dimensions:
- Freshness (days since the last commit or publish)
- Maintainers (contributor or maintainer count, the bus factor)
- License (curated approved / deprecated license sets)

All evaluators are stateless pure functions of PackageMetadata +
optional RepositoryHealth → sub-score.
"""

from rot_detector.evaluators.base import BaseEvaluator
from rot_detector.evaluators.composite import calculate_overall_score
from rot_detector.evaluators.formatting import format_days_since_update
from rot_detector.evaluators.freshness import FRESHNESS_BANDS, FreshnessBand, FreshnessEvaluator
from rot_detector.evaluators.license import (
    DEFAULT_LICENSE_POLICY,
    DEPRECATED_LICENSES,
    OSI_APPROVED_LICENSES,
    LicenseEvaluator,
    normalize_license,
)
from rot_detector.evaluators.maintainers import (
    MAINTAINER_BANDS,
    MaintainerBand,
    MaintainerEvaluator,
)
from rot_detector.evaluators.registry import HealthScorer, calculate_health_score
from rot_detector.models.model_health import classify_risk

__all__ = [
    # Protocol
    "BaseEvaluator",
    # Individual evaluators
    "FreshnessEvaluator",
    "MaintainerEvaluator",
    "LicenseEvaluator",
    # Scoring tables
    "FRESHNESS_BANDS",
    "FreshnessBand",
    "MAINTAINER_BANDS",
    "MaintainerBand",
    "DEFAULT_LICENSE_POLICY",
    "DEPRECATED_LICENSES",
    "OSI_APPROVED_LICENSES",
    # Orchestration
    "HealthScorer",
    "calculate_health_score",
    # Composite scoring
    "calculate_overall_score",
    # Presentation helpers
    "classify_risk",
    "format_days_since_update",
    "normalize_license",
]
