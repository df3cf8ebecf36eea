"""npm registry client."""

import contextlib
import logging
import re
from datetime import datetime
from typing import Any
from urllib.parse import quote

from rot_detector.clients.base_client import RegistryClient
from rot_detector.consts import NPM_REGISTRY_URL
from rot_detector.models.model_dependency import Ecosystem
from rot_detector.models.model_package import Maintainer, PackageMetadata

logger = logging.getLogger(__name__)

_GIT_URL_REWRITES = [
    (re.compile(r"^git\+"), ""),
    (re.compile(r"^git://"), "https://"),
    (re.compile(r"^ssh://git@"), "https://"),
    (re.compile(r"\.git$"), ""),
    (re.compile(r"git@github\.com:"), "https://github.com/"),
]


def clean_git_url(url: str) -> str:
    """Turn git+https / git:// / ssh / scp-style URLs into a plain https URL."""
    for pattern, replacement in _GIT_URL_REWRITES:
        url = pattern.sub(replacement, url)
    return url


def _parse_timestamp(value: Any) -> datetime | None:
    if not isinstance(value, str) or not value:
        return None
    with contextlib.suppress(ValueError):
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    return None


def _extract_license(data: dict[str, Any]) -> str | None:
    """Read 'license', accepting the legacy {"type": ...} object form."""
    license_value = data.get("license")
    if isinstance(license_value, dict):
        license_value = license_value.get("type")
    if isinstance(license_value, str) and license_value.strip():
        return license_value
    return None


def _extract_repository_url(data: dict[str, Any]) -> str | None:
    repository = data.get("repository")
    url = repository.get("url") if isinstance(repository, dict) else repository
    if isinstance(url, str) and url:
        return clean_git_url(url)
    return None


class NpmClient(RegistryClient):
    """Client for the public npm registry."""

    BASE_URL = NPM_REGISTRY_URL

    @property
    def ecosystem(self) -> Ecosystem:
        return Ecosystem.NPM

    async def fetch_metadata(self, package_name: str) -> PackageMetadata:
        # Scoped names (@scope/name) must be sent as @scope%2Fname
        data = await self._get_json(f"/{quote(package_name, safe='@')}", package_name)
        return self.parse_metadata(package_name, data)

    def parse_metadata(self, package_name: str, data: dict[str, Any]) -> PackageMetadata:
        """Parse an npm packument into PackageMetadata."""
        latest_version = (data.get("dist-tags") or {}).get("latest") or ""

        last_published = None
        time_data = data.get("time") or {}
        if isinstance(time_data, dict):
            last_published = _parse_timestamp(
                time_data.get("modified") or time_data.get(latest_version)
            )

        maintainers = [
            Maintainer(name=m["name"], email=m.get("email"))
            for m in data.get("maintainers") or []
            if isinstance(m, dict) and m.get("name")
        ]

        return PackageMetadata(
            name=package_name,
            version=latest_version,
            last_published=last_published,
            maintainers=maintainers,
            license=_extract_license(data),
            repository_url=_extract_repository_url(data),
            homepage=data.get("homepage") or None,
            description=data.get("description") or None,
        )
