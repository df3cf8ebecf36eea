"""Composite scoring functions for combining dimension scores."""

from decimal import ROUND_HALF_UP, Decimal

from rot_detector.models.model_eval import ScoreWeights


def calculate_overall_score(
    freshness: int, maintainers: int, license: int, weights: ScoreWeights
) -> int:
    """Calculate the weighted overall score, rounded half-up to an int.

    Decimal arithmetic keeps exact halves (e.g. 70.5) from drifting below
    .5 through float error.

    Args:
        freshness: Freshness sub-score (0-100)
        maintainers: Maintainer sub-score (0-100)
        license: License sub-score (0-100)
        weights: Dimension weights (must sum to 1.0)

    Returns:
        Overall score between 0-100
    """
    total = (
        Decimal(str(weights.freshness)) * freshness
        + Decimal(str(weights.maintainers)) * maintainers
        + Decimal(str(weights.license)) * license
    )
    overall = int(total.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    return max(0, min(100, overall))
