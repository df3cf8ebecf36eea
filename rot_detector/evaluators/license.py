"""License evaluator for license risk scoring."""

import re

from rot_detector.models.model_eval import LicensePolicy
from rot_detector.models.model_health import LicenseScore, LicenseStatus
from rot_detector.models.model_package import PackageMetadata, RepositoryHealth

# OSI-approved licenses (common ones)
OSI_APPROVED_LICENSES = frozenset({
    "MIT",
    "Apache-2.0",
    "BSD-2-Clause",
    "BSD-3-Clause",
    "ISC",
    "MPL-2.0",
    "GPL-3.0",
    "GPL-3.0-only",
    "GPL-3.0-or-later",
    "LGPL-3.0",
    "LGPL-3.0-only",
    "LGPL-3.0-or-later",
    "AGPL-3.0",
    "Unlicense",
    "0BSD",
    "CC0-1.0",
    "Zlib",
    "Artistic-2.0",
    "EPL-2.0",
    "EUPL-1.2",
})

# Deprecated or problematic licenses
DEPRECATED_LICENSES = frozenset({
    "GPL-2.0",
    "LGPL-2.0",
    "LGPL-2.1",
    "BSD-4-Clause",
    "WTFPL",
})

DEFAULT_LICENSE_POLICY = LicensePolicy(
    approved=OSI_APPROVED_LICENSES,
    deprecated=DEPRECATED_LICENSES,
)

MISSING_LICENSE_SCORE = 30
DEPRECATED_LICENSE_SCORE = 50
APPROVED_LICENSE_SCORE = 100
UNRECOGNIZED_LICENSE_SCORE = 60

_WHITESPACE = re.compile(r"\s+")


def normalize_license(license_str: str) -> str:
    """Uppercase and collapse whitespace runs to hyphens ("MIT License" -> "MIT-LICENSE")."""
    return _WHITESPACE.sub("-", license_str.upper())


def _contains_any(normalized: str, tokens: frozenset[str]) -> bool:
    return any(token.upper() in normalized for token in tokens)


class LicenseEvaluator:
    """Evaluates the declared license against curated token sets.

    Matching is substring containment on the normalized string, so
    "(MIT OR Apache-2.0)" and "MIT License" both count as approved. The
    deprecated set is checked first: "GPL-2.0 OR MIT" is deprecated.
    """

    def __init__(self, policy: LicensePolicy = DEFAULT_LICENSE_POLICY):
        self.policy = policy

    def evaluate(
        self, metadata: PackageMetadata, repo_health: RepositoryHealth | None = None
    ) -> LicenseScore:
        license_str = metadata.license
        if not license_str or not license_str.strip():
            return LicenseScore(score=MISSING_LICENSE_SCORE, license=None, status=LicenseStatus.UNKNOWN)

        normalized = normalize_license(license_str)

        if _contains_any(normalized, self.policy.deprecated):
            return LicenseScore(
                score=DEPRECATED_LICENSE_SCORE, license=license_str, status=LicenseStatus.DEPRECATED
            )

        if _contains_any(normalized, self.policy.approved):
            return LicenseScore(
                score=APPROVED_LICENSE_SCORE, license=license_str, status=LicenseStatus.APPROVED
            )

        return LicenseScore(
            score=UNRECOGNIZED_LICENSE_SCORE, license=license_str, status=LicenseStatus.WARNING
        )
