"""Base evaluator protocol defining the contract for all evaluators."""

from typing import Protocol

from pydantic import BaseModel

from rot_detector.models.model_package import PackageMetadata, RepositoryHealth


class BaseEvaluator(Protocol):
    """Protocol defining the evaluator contract.

    Evaluators are pure functions of registry metadata and optional
    repository signals. Each returns a sub-score model whose ``score`` lies
    in 0-100. Missing data degrades toward a neutral score, never toward
    zero, and evaluation never raises.
    """

    def evaluate(
        self, metadata: PackageMetadata, repo_health: RepositoryHealth | None = None
    ) -> BaseModel:
        """Evaluate a package on this dimension.

        Args:
            metadata: Registry metadata for the package
            repo_health: Repository signals, None when unavailable

        Returns:
            Sub-score model for this dimension
        """
        ...
