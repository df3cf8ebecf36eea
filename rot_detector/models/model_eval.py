"""Scoring configuration models."""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ScoreWeights(BaseModel):
    """Dimension weights for the overall score.

    All weights must sum to 1.0 for proper score calculation.
    """

    model_config = ConfigDict(frozen=True)

    freshness: float = Field(default=0.40, ge=0.0, le=1.0)
    maintainers: float = Field(default=0.30, ge=0.0, le=1.0)
    license: float = Field(default=0.30, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def weights_sum_to_one(self) -> "ScoreWeights":
        """Validate that weights sum to 1.0."""
        total = self.freshness + self.maintainers + self.license
        if abs(total - 1.0) > 0.001:
            msg = f"Weights must sum to 1.0, got {total}"
            raise ValueError(msg)
        return self


class LicensePolicy(BaseModel):
    """Curated license token sets used for substring classification.

    Tokens are compared case-insensitively. The deprecated set is checked
    before the approved set.
    """

    model_config = ConfigDict(frozen=True)

    approved: frozenset[str] = Field(description="OSI-approved license tokens")
    deprecated: frozenset[str] = Field(description="Deprecated or problematic license tokens")
